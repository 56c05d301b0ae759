"""Models for Google Photos Exporter."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class PhotoMetadata:
    """Camera metadata attached to a photo. Empty or zero values mean absent."""
    camera_make: str = ""
    camera_model: str = ""
    aperture_f_number: float = 0.0
    exposure_time: str = ""
    iso_equivalent: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "PhotoMetadata":
        """Build photo metadata from the API ``mediaMetadata.photo`` object."""
        return cls(
            camera_make=data.get("cameraMake", ""),
            camera_model=data.get("cameraModel", ""),
            aperture_f_number=float(data.get("apertureFNumber", 0) or 0),
            exposure_time=data.get("exposureTime", ""),
            iso_equivalent=int(data.get("isoEquivalent", 0) or 0),
        )


@dataclass
class MediaItem:
    """Represents a media item in Google Photos."""
    id: str
    filename: str
    creation_time: str
    width: int
    height: int
    base_url: str
    photo: PhotoMetadata = field(default_factory=PhotoMetadata)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "MediaItem":
        """Build a media item from an API ``mediaItems`` entry."""
        metadata = data.get("mediaMetadata", {})
        return cls(
            id=data["id"],
            filename=data.get("filename", ""),
            creation_time=metadata.get("creationTime", ""),
            # int64 fields are transported as strings
            width=int(metadata.get("width", 0)),
            height=int(metadata.get("height", 0)),
            base_url=data.get("baseUrl", ""),
            photo=PhotoMetadata.from_api(metadata.get("photo", {})),
        )


@dataclass
class Album:
    """Represents an album in Google Photos."""
    id: str
    title: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Album":
        return cls(id=data["id"], title=data.get("title", ""))


@dataclass
class ExportOptions:
    """Where and how an album export is written."""
    content_directory: str
    graph_uri: str
    static_directory: Optional[str] = None


class GooglePhotosError(Exception):
    """Base exception for Google Photos operations."""


class AuthenticationError(GooglePhotosError):
    """Raised when authentication fails."""


class ApiError(GooglePhotosError):
    """Raised when API calls fail."""


class ExportError(GooglePhotosError):
    """Raised when an album export fails at a given stage.

    Attributes:
        stage: Short label of the failing step, e.g. ``"searching"`` or ``"mkdir"``
        cause: The underlying exception
    """

    def __init__(self, stage: str, cause: BaseException):
        super().__init__(f"{stage}: {cause}")
        self.stage = stage
        self.cause = cause
