"""Album and media item access for the Google Photos Library API."""

import logging
from typing import Any, List, Optional, Tuple

from googleapiclient.errors import HttpError

from google_photos_exporter.models import Album, ApiError, MediaItem

logger = logging.getLogger(__name__)

ALBUM_PAGE_SIZE = 25
MEDIA_ITEM_PAGE_SIZE = 100


class AlbumClient:
    """Lists albums and searches the media items they contain."""

    def __init__(self, service: Any):
        """Initialize the client.

        Args:
            service: Google Photos API service object built by ``googleapiclient``
        """
        self.service = service

    def list_albums(self, page_size: int = ALBUM_PAGE_SIZE) -> List[Album]:
        """Return the albums on the first listing page.

        Only a single page is requested; albums beyond it are not returned.

        Raises:
            ApiError: If the listing request fails
        """
        try:
            response = self.service.albums().list(pageSize=page_size).execute()
        except HttpError as e:
            raise ApiError(f"Unable to retrieve albums: {e}") from e

        return [Album.from_api(album) for album in response.get("albums", [])]

    def search_media_items(
        self,
        album_id: str,
        page_token: Optional[str] = None,
        page_size: int = MEDIA_ITEM_PAGE_SIZE,
    ) -> Tuple[List[MediaItem], Optional[str]]:
        """Fetch one page of media items in an album.

        Args:
            album_id: Album to search
            page_token: Token returned by the previous page, None for the first
            page_size: Maximum number of items on the page

        Returns:
            Media items of the page and the next page token, None on the last page

        Raises:
            ApiError: If the search request fails
        """
        body = {"albumId": album_id, "pageSize": page_size}
        if page_token:
            body["pageToken"] = page_token

        logger.debug("Searching album %s (page token %s)", album_id, page_token)
        try:
            response = self.service.mediaItems().search(body=body).execute()
        except HttpError as e:
            raise ApiError(f"Unable to search media items of album {album_id}: {e}") from e

        items = [MediaItem.from_api(item) for item in response.get("mediaItems", [])]
        return items, response.get("nextPageToken") or None
