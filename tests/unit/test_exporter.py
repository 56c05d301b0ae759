"""Unit tests for GooglePhotosExporter class."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from google_photos_exporter.api.client import AlbumClient
from google_photos_exporter.main import GooglePhotosExporter
from google_photos_exporter.models import ApiError, ExportError, ExportOptions

GRAPH_URI = "https://example.org/photos"


@pytest.fixture
def exporter_for(content_dir):
    """Create an exporter bound to a mock service."""

    def _make(service):
        options = ExportOptions(content_directory=str(content_dir), graph_uri=GRAPH_URI)
        return GooglePhotosExporter(AlbumClient(service), options)

    return _make


def read_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def list_files(root: Path):
    return sorted(str(p.relative_to(root)) for p in root.rglob("*") if p.is_file())


def test_export_album_pages(exporter_for, make_service, api_media_item, content_dir):
    """Test that every page is written and the album references items in API order."""
    service = make_service(
        [{"id": "album-1", "title": "Holidays"}],
        [
            {
                "mediaItems": [
                    api_media_item("abc", "2020-01-01T10:00:00Z"),
                    api_media_item("abd", "2020-06-15T10:00:00Z"),
                ],
                "nextPageToken": "page-2",
            },
            {"mediaItems": [api_media_item("zzz", "2020-01-01T18:00:00Z")]},
        ],
    )

    results = exporter_for(service).export("Holidays")

    assert len(results) == 1
    assert results[0].item_count == 3
    assert results[0].temporal_coverage == "2020-01-01/2020-06-15"

    album = read_json(content_dir / "albums" / "album-1.json")
    assert album["name"] == "Holidays"
    assert album["temporalCoverage"] == "2020-01-01/2020-06-15"
    refs = [entry["@id"] for entry in album["itemListElement"]]
    assert refs[0] == f"{GRAPH_URI}/items/a9/abc.json"
    assert [ref.rsplit("/", 1)[1] for ref in refs] == ["abc.json", "abd.json", "zzz.json"]

    for ref in refs:
        assert (content_dir / ref[len(GRAPH_URI) + 1:]).is_file()

    search = service.mediaItems.return_value.search
    assert search.call_count == 2
    assert search.call_args_list[1][1]["body"]["pageToken"] == "page-2"


def test_export_single_date(exporter_for, make_service, api_media_item, content_dir):
    """Test the coverage of an album with a single item."""
    service = make_service(
        [{"id": "album-1", "title": "Day"}],
        [{"mediaItems": [api_media_item("only", "2021-03-03T12:00:00Z")]}],
    )

    exporter_for(service).export("Day")

    assert read_json(content_dir / "albums" / "album-1.json")["temporalCoverage"] == "2021-03-03"


def test_export_is_idempotent(exporter_for, make_service, api_media_item, content_dir):
    """Test that re-running an export produces identical files."""
    pages = [{"mediaItems": [api_media_item("abc"), api_media_item("abd")]}]

    exporter_for(make_service([{"id": "album-1", "title": "Same"}], list(pages))).export("Same")
    first = {name: (content_dir / name).read_bytes() for name in list_files(content_dir)}

    exporter_for(make_service([{"id": "album-1", "title": "Same"}], list(pages))).export("Same")
    second = {name: (content_dir / name).read_bytes() for name in list_files(content_dir)}

    assert first == second
    assert len(first) == 3


def test_export_no_albums(exporter_for, make_service, content_dir, capsys):
    """Test that an empty listing is reported and nothing is written."""
    results = exporter_for(make_service([], [])).export("Holidays")

    assert results == []
    assert "No albums found." in capsys.readouterr().out
    assert list_files(content_dir) == []


def test_export_no_matching_title(exporter_for, make_service, content_dir, capsys):
    """Test that a listing without a matching title writes nothing and reports nothing."""
    service = make_service(
        [{"id": "a1", "title": "holidays"}, {"id": "a2", "title": "Holidays 2020"}], []
    )

    results = exporter_for(service).export("Holidays")

    assert results == []
    assert "No albums found" not in capsys.readouterr().out
    assert list_files(content_dir) == []
    service.mediaItems.return_value.search.assert_not_called()


def test_export_duplicate_titles(exporter_for, make_service, api_media_item, content_dir):
    """Test that albums sharing the title are all exported."""
    service = make_service(
        [{"id": "a1", "title": "Trip"}, {"id": "a2", "title": "Other"}, {"id": "a3", "title": "Trip"}],
        [{"mediaItems": [api_media_item("one")]}, {"mediaItems": [api_media_item("two")]}],
    )

    results = exporter_for(service).export("Trip")

    assert [r.album_id for r in results] == ["a1", "a3"]
    assert (content_dir / "albums" / "a1.json").is_file()
    assert (content_dir / "albums" / "a3.json").is_file()
    assert not (content_dir / "albums" / "a2.json").exists()


def test_export_listing_error(exporter_for):
    """Test that a failed listing propagates."""
    service = MagicMock()
    service.albums.return_value.list.return_value.execute.side_effect = ApiError("boom")

    with pytest.raises(ApiError):
        exporter_for(service).export("Holidays")


def test_export_search_error_keeps_written_items(
    exporter_for, make_service, api_media_item, content_dir
):
    """Test that a failing page aborts the album without writing its document."""
    service = make_service(
        [{"id": "album-1", "title": "Holidays"}],
        [
            {"mediaItems": [api_media_item("abc")], "nextPageToken": "p2"},
            ApiError("quota exceeded"),
        ],
    )

    with pytest.raises(ExportError) as exc_info:
        exporter_for(service).export("Holidays")

    assert exc_info.value.stage == "searching"
    assert list_files(content_dir) == ["items/a9/abc.json"]


def test_export_bad_creation_time(exporter_for, make_service, api_media_item, content_dir):
    """Test that an unparsable creation time aborts the export."""
    service = make_service(
        [{"id": "album-1", "title": "Holidays"}],
        [{"mediaItems": [api_media_item("abc", "not a time")]}],
    )

    with pytest.raises(ExportError) as exc_info:
        exporter_for(service).export("Holidays")

    assert exc_info.value.stage == "parsing time"
    assert list_files(content_dir) == []


def test_export_write_error(exporter_for, make_service, api_media_item, content_dir):
    """Test that a blocked item directory aborts the export."""
    (content_dir / "items").write_text("in the way")
    service = make_service(
        [{"id": "album-1", "title": "Holidays"}],
        [{"mediaItems": [api_media_item("abc")]}],
    )

    with pytest.raises(ExportError) as exc_info:
        exporter_for(service).export("Holidays")

    assert exc_info.value.stage == "mkdir"
    assert not (content_dir / "albums").exists()
