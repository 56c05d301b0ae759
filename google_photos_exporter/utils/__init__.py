"""Utility functions for Google Photos Exporter."""

from .auth import authenticate_google_photos, get_credentials
from .file_utils import album_graph_path, item_graph_path, serialize_document, write_document

__all__ = [
    "authenticate_google_photos",
    "get_credentials",
    "item_graph_path",
    "album_graph_path",
    "serialize_document",
    "write_document",
]
