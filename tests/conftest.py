"""Test configuration for pytest."""

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List
from unittest.mock import MagicMock

import pytest

# Add the project root directory to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def api_media_item() -> Callable[..., Dict[str, Any]]:
    """Build mediaItems entries shaped like the Library API returns them."""

    def _make(
        item_id: str,
        creation_time: str = "2020-01-01T10:00:00Z",
        photo: Dict[str, Any] = None,
    ) -> Dict[str, Any]:
        return {
            "id": item_id,
            "filename": f"{item_id}.jpg",
            "baseUrl": f"https://lh3.googleusercontent.com/{item_id}",
            "mimeType": "image/jpeg",
            "mediaMetadata": {
                "creationTime": creation_time,
                "width": "4032",
                "height": "3024",
                "photo": photo if photo is not None else {},
            },
        }

    return _make


@pytest.fixture
def make_service() -> Callable[..., MagicMock]:
    """Create a mock Google Photos service returning an album list and search pages."""

    def _make(albums: List[Dict[str, Any]], pages: List[Dict[str, Any]]) -> MagicMock:
        service = MagicMock()
        service.albums.return_value.list.return_value.execute.return_value = {"albums": albums}
        service.mediaItems.return_value.search.return_value.execute.side_effect = pages
        return service

    return _make


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Empty content directory for exported documents."""
    path = tmp_path / "content"
    path.mkdir()
    return path
