"""Main module for Google Photos Exporter."""

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional

from tabulate import tabulate

from google_photos_exporter.api.client import AlbumClient
from google_photos_exporter.jsonld.mapper import TemporalRange, map_album, map_media_item
from google_photos_exporter.models import (
    Album,
    ApiError,
    ExportError,
    ExportOptions,
    GooglePhotosError,
)
from google_photos_exporter.utils.auth import authenticate_google_photos
from google_photos_exporter.utils.file_utils import (
    album_graph_path,
    item_graph_path,
    serialize_document,
    write_document,
)

logger = logging.getLogger(__name__)


@dataclass
class AlbumExportResult:
    """Outcome of a single album export."""
    album_id: str
    title: str
    item_count: int
    temporal_coverage: Optional[str]
    path: str


class GooglePhotosExporter:
    """Exports Google Photos albums as JSON-LD documents."""

    def __init__(self, client: AlbumClient, options: ExportOptions):
        """Initialize the exporter.

        Args:
            client: Album client bound to an authenticated service
            options: Destination of the exported documents
        """
        self.client = client
        self.options = options

    def export(self, title: str) -> List[AlbumExportResult]:
        """Export every album whose title is exactly ``title``.

        Albums sharing the title are exported one after the other.

        Raises:
            ApiError: If the album listing fails
            ExportError: If exporting a matched album fails
        """
        albums = self.client.list_albums()
        if not albums:
            print("No albums found.")
            return []

        results = []
        for album in albums:
            if album.title != title:
                logger.info("SKIP: %s %s", album.id, album.title)
                continue

            results.append(self.export_album(album))

        return results

    def export_album(self, album: Album) -> AlbumExportResult:
        """Write the documents of every item in the album, then the album document.

        Raises:
            ExportError: Tagged with the stage that failed
        """
        logger.info("%s %s", album.id, album.title)

        temporal_range = TemporalRange()
        item_refs: List[str] = []
        page_token = None

        while True:
            try:
                items, page_token = self.client.search_media_items(album.id, page_token)
            except (ApiError, KeyError, ValueError) as e:
                raise ExportError("searching", e) from e

            for item in items:
                logger.info("%s %s %s", item.id, item.creation_time, item.filename)

                try:
                    document, date_created = map_media_item(item)
                except ValueError as e:
                    raise ExportError("parsing time", e) from e

                graph_path = item_graph_path(item.id)
                write_document(
                    self.options.content_directory,
                    graph_path,
                    serialize_document(document.to_dict()),
                )

                temporal_range.include(date_created)
                item_refs.append(f"{self.options.graph_uri}/{graph_path}")

            if not page_token:
                break

        album_document = map_album(album, item_refs, temporal_range)
        path = write_document(
            self.options.content_directory,
            album_graph_path(album.id),
            serialize_document(album_document.to_dict()),
        )

        return AlbumExportResult(
            album_id=album.id,
            title=album.title,
            item_count=len(item_refs),
            temporal_coverage=album_document.temporal_coverage,
            path=path,
        )


def print_summary(results: List[AlbumExportResult]) -> None:
    """Print a table of exported albums."""
    if not results:
        return

    rows = [
        [r.album_id, r.title, r.item_count, r.temporal_coverage or "", r.path]
        for r in results
    ]
    print("\nExported albums:")
    print(
        tabulate(
            rows,
            headers=["Album ID", "Title", "Items", "Temporal Coverage", "Path"],
            tablefmt="psql",
        )
    )


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Google Photos Exporter: write an album as JSON-LD documents"
    )

    parser.add_argument("album_title", help="Exact title of the album to export")
    parser.add_argument("content_dir", help="Content directory the documents are written to")
    parser.add_argument("graph_uri", help="Base URI used for @id references")
    parser.add_argument(
        "--credentials",
        default="credentials.json",
        help="OAuth client secrets file (default: %(default)s)",
    )
    parser.add_argument(
        "--token",
        default="token.json",
        help="Cached OAuth token file (default: %(default)s)",
    )
    parser.add_argument("--static-directory", help="Static asset directory")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the Google Photos Exporter CLI."""
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    options = ExportOptions(
        content_directory=args.content_dir,
        graph_uri=args.graph_uri,
        static_directory=args.static_directory,
    )

    try:
        service = authenticate_google_photos(args.token, args.credentials)
        exporter = GooglePhotosExporter(AlbumClient(service), options)
        results = exporter.export(args.album_title)
    except GooglePhotosError as e:
        logger.error("%s", e)
        sys.exit(1)

    print_summary(results)


if __name__ == "__main__":
    main()
