"""Mapping of Google Photos objects onto JSON-LD documents."""

import re
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

from google_photos_exporter.jsonld.models import (
    AlbumDocument,
    ExifEntry,
    ImageObject,
    PhotographDocument,
    ThumbnailEntry,
)
from google_photos_exporter.models import Album, MediaItem, PhotoMetadata

# (width, height, directive) appended to the base URL, in output order
THUMBNAIL_SIZES = (
    (1280, 960, "=w1280-h960"),
    (640, 480, "=w640-h480"),
    (200, 200, "=w200-h200-c"),
    (96, 96, "=w96-h96-c"),
)

_RFC3339_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))$",
    re.ASCII,
)


def parse_creation_time(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware datetime.

    Fractional digits beyond microseconds are truncated.

    Raises:
        ValueError: If value is not a valid RFC 3339 timestamp
    """
    match = _RFC3339_RE.match(value or "")
    if not match:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")

    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = match.groups()
    if zulu:
        tz = timezone.utc
    else:
        offset = timedelta(hours=int(off_h), minutes=int(off_m))
        tz = timezone(-offset if sign == "-" else offset)

    microsecond = int((fraction or "0")[:6].ljust(6, "0"))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), microsecond, tzinfo=tz
    )


def format_rfc3339(value: datetime) -> str:
    """Format a datetime with seconds precision, using ``Z`` for UTC."""
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    offset = value.utcoffset()
    if not offset:
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def format_aperture(f_number: float) -> str:
    # 2.0 renders as "f/2." since every trailing zero is stripped
    return ("f/%f" % f_number).rstrip("0")


def build_exif_data(photo: PhotoMetadata) -> List[ExifEntry]:
    """Return one entry per camera field that is present."""
    entries = []
    if photo.camera_make:
        entries.append(ExifEntry("make", photo.camera_make))
    if photo.camera_model:
        entries.append(ExifEntry("model", photo.camera_model))
    if photo.aperture_f_number:
        entries.append(ExifEntry("aperture", format_aperture(photo.aperture_f_number)))
    if photo.exposure_time:
        entries.append(ExifEntry("exposure", photo.exposure_time))
    if photo.iso_equivalent:
        entries.append(ExifEntry("iso", photo.iso_equivalent))
    return entries


def build_thumbnails(base_url: str) -> List[ThumbnailEntry]:
    return [
        ThumbnailEntry(content_url=f"{base_url}{directive}", width=width, height=height)
        for width, height, directive in THUMBNAIL_SIZES
    ]


class TemporalRange:
    """Running earliest and latest creation time of an album's items."""

    def __init__(self):
        self.earliest: Optional[datetime] = None
        self.latest: Optional[datetime] = None

    def include(self, value: datetime) -> None:
        if self.earliest is None or value < self.earliest:
            self.earliest = value
        if self.latest is None or value > self.latest:
            self.latest = value

    def coverage(self) -> Optional[str]:
        """Return ``YYYY-MM-DD`` or ``YYYY-MM-DD/YYYY-MM-DD``, None when empty."""
        if self.earliest is None or self.latest is None:
            return None
        start = self.earliest.strftime("%Y-%m-%d")
        end = self.latest.strftime("%Y-%m-%d")
        if start == end:
            return start
        return f"{start}/{end}"


def map_media_item(item: MediaItem) -> Tuple[PhotographDocument, datetime]:
    """Map a media item to its photograph document.

    Returns:
        The document and the parsed creation time

    Raises:
        ValueError: If the creation time is not RFC 3339
    """
    date_created = parse_creation_time(item.creation_time)

    associated_media = ImageObject(
        name=item.filename,
        width=item.width,
        height=item.height,
        date_created=format_rfc3339(date_created),
        exif_data=build_exif_data(item.photo),
        thumbnail=build_thumbnails(item.base_url),
    )
    return PhotographDocument(item.id, associated_media), date_created


def map_album(
    album: Album, item_refs: Sequence[str], temporal_range: TemporalRange
) -> AlbumDocument:
    return AlbumDocument(
        album_id=album.id,
        name=album.title,
        item_list_element=list(item_refs),
        temporal_coverage=temporal_range.coverage(),
    )
