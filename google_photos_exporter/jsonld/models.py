"""JSON-LD document types written by the exporter."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

PHOTOS_API_URL = "https://photoslibrary.googleapis.com/v1"


@dataclass
class ExifEntry:
    """A single ``PropertyValue`` of the ``exifData`` array."""
    identifier: str
    value: Union[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return {"@type": "PropertyValue", "identifier": self.identifier, "value": self.value}


@dataclass
class ThumbnailEntry:
    """A sized rendition hotlinked from the photo base URL."""
    content_url: str
    width: int
    height: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "@type": "ImageObject",
            "contentUrl": self.content_url,
            "height": self.height,
            "width": self.width,
        }


@dataclass
class ImageObject:
    """The ``associatedMedia`` of a photograph."""
    name: str
    width: int
    height: int
    date_created: str
    exif_data: List[ExifEntry] = field(default_factory=list)
    thumbnail: List[ThumbnailEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "@type": "ImageObject",
            "name": self.name,
            "height": self.height,
            "width": self.width,
            "dateCreated": self.date_created,
        }
        if self.exif_data:
            data["exifData"] = [entry.to_dict() for entry in self.exif_data]
        data["thumbnail"] = [entry.to_dict() for entry in self.thumbnail]
        return data


@dataclass
class PhotographDocument:
    """Document written once per media item."""
    media_item_id: str
    associated_media: ImageObject

    @property
    def same_as(self) -> str:
        return f"{PHOTOS_API_URL}/mediaItems/{self.media_item_id}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "@type": "Photograph",
            "sameAs": self.same_as,
            "associatedMedia": self.associated_media.to_dict(),
        }


@dataclass
class AlbumDocument:
    """Document written once per album, after all of its items."""
    album_id: str
    name: str
    item_list_element: List[str] = field(default_factory=list)
    temporal_coverage: Optional[str] = None

    @property
    def same_as(self) -> str:
        return f"{PHOTOS_API_URL}/albums/{self.album_id}"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "@type": "Collection",
            "additionalType": "http://schema.org/ItemList",
            "name": self.name,
            "sameAs": self.same_as,
            "itemListElement": [{"@id": ref} for ref in self.item_list_element],
        }
        if self.temporal_coverage is not None:
            data["temporalCoverage"] = self.temporal_coverage
        return data
