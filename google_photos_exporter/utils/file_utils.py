"""File utilities for Google Photos Exporter."""

import hashlib
import json
import logging
import os
from typing import Any, Dict

from google_photos_exporter.models import ExportError

logger = logging.getLogger(__name__)


def bucket_for(item_id: str) -> str:
    """Return the two hex character bucket directory for an item id."""
    return hashlib.sha1(item_id.encode("utf-8")).hexdigest()[:2]


def item_graph_path(item_id: str) -> str:
    """Relative path of a photograph document, e.g. ``items/a9/<id>.json``."""
    return f"items/{bucket_for(item_id)}/{item_id}.json"


def album_graph_path(album_id: str) -> str:
    """Relative path of an album document."""
    return f"albums/{album_id}.json"


def serialize_document(document: Dict[str, Any]) -> str:
    """Serialize a document as indented JSON terminated by a newline.

    Keys are sorted so that repeated exports produce identical bytes.

    Raises:
        ExportError: If the document cannot be serialized
    """
    try:
        text = json.dumps(document, indent=2, sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise ExportError("marshalling", e) from e
    return text + "\n"


def write_document(content_directory: str, graph_path: str, text: str) -> str:
    """Write serialized JSON below the content directory.

    Args:
        content_directory: Root of the content tree
        graph_path: Slash separated path relative to the root
        text: File contents

    Returns:
        Local path of the written file

    Raises:
        ExportError: With stage ``mkdir`` or ``writing item``
    """
    local_path = os.path.join(content_directory, *graph_path.split("/"))

    try:
        os.makedirs(os.path.dirname(local_path), mode=0o700, exist_ok=True)
    except OSError as e:
        raise ExportError("mkdir", e) from e

    try:
        with open(local_path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise ExportError("writing item", e) from e

    logger.debug("Wrote %s", local_path)
    return local_path
