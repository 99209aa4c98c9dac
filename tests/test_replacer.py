"""Tests for bulk UUID replacement."""

import json
from pathlib import Path

import pytest

from game_asset_sweeper.exceptions import UuidMapError
from game_asset_sweeper.replacer import UuidReplacer, load_uuid_map, replace_in_text


class TestLoadUuidMap:
    """Test map loading and validation."""

    def test_loads_valid_map(self, tmp_path: Path) -> None:
        map_file = tmp_path / "map.json"
        map_file.write_text(json.dumps({"old-1": "new-1", "old-2": "new-2"}))

        assert load_uuid_map(map_file) == {"old-1": "new-1", "old-2": "new-2"}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(UuidMapError, match="Cannot read"):
            load_uuid_map(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        map_file = tmp_path / "map.json"
        map_file.write_text("{oops")

        with pytest.raises(UuidMapError, match="not valid JSON"):
            load_uuid_map(map_file)

    @pytest.mark.parametrize("content", [{}, [], {"old": 1}, {"old": ""}])
    def test_rejects_malformed_maps(self, tmp_path: Path, content: object) -> None:
        map_file = tmp_path / "map.json"
        map_file.write_text(json.dumps(content))

        with pytest.raises(UuidMapError, match="Invalid UUID map"):
            load_uuid_map(map_file)


class TestReplaceInText:
    def test_counts_every_occurrence(self) -> None:
        text, count = replace_in_text("a b a c", {"a": "x", "c": "y"})

        assert text == "x b x y"
        assert count == 3

    def test_no_match(self) -> None:
        assert replace_in_text("abc", {"zzz": "y"}) == ("abc", 0)


class TestUuidReplacer:
    """Test folder-wide replacement."""

    def test_rewrites_target_files_only(self, tmp_path: Path) -> None:
        """Test that scenes and prefabs change while images and sidecars don't."""
        (tmp_path / "sub").mkdir()
        scene = tmp_path / "main.scene"
        prefab = tmp_path / "sub" / "button.prefab"
        meta = tmp_path / "main.scene.meta"
        image = tmp_path / "icon.png"
        scene.write_text('{"__uuid__": "old-1"} {"__uuid__": "old-1"}')
        prefab.write_text('{"__uuid__": "other"}')
        meta.write_text('{"uuid": "old-1"}')
        image.write_text("old-1")

        report = UuidReplacer({"old-1": "new-1"}).run(tmp_path)

        assert report.processed == 2
        assert report.modified == 1
        assert report.replaced == 2
        assert scene.read_text() == '{"__uuid__": "new-1"} {"__uuid__": "new-1"}'
        assert prefab.read_text() == '{"__uuid__": "other"}'
        assert meta.read_text() == '{"uuid": "old-1"}'
        assert image.read_text() == "old-1"

    def test_preserves_crlf_line_endings(self, tmp_path: Path) -> None:
        """Test that only the UUID bytes change in a CRLF scene."""
        scene = tmp_path / "main.scene"
        scene.write_bytes(b'[\r\n  {"__uuid__": "old-1"}\r\n]\r\n')

        UuidReplacer({"old-1": "new-1"}).run(tmp_path)

        assert scene.read_bytes() == b'[\r\n  {"__uuid__": "new-1"}\r\n]\r\n'

    def test_undecodable_file_is_reported(self, tmp_path: Path) -> None:
        (tmp_path / "bad.json").write_bytes(b"\xff\xfe\xfa")
        (tmp_path / "good.json").write_text("old-1")

        report = UuidReplacer({"old-1": "new-1"}).run(tmp_path)

        statuses = {item.path.name: item.status for item in report.items}
        assert statuses == {"bad.json": "failed", "good.json": "modified"}
        assert report.errors == 1

    def test_empty_folder_is_a_warning(self, tmp_path: Path) -> None:
        report = UuidReplacer({"old-1": "new-1"}).run(tmp_path)

        assert report.items == []
        assert report.warnings[0].startswith("No files found")

    def test_empty_map_rejected(self) -> None:
        with pytest.raises(UuidMapError):
            UuidReplacer({})
