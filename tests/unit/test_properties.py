import json
from pathlib import Path

import pytest

from enricher.extraction.exceptions import ExtractionError
from enricher.extraction.models import PropertySpec
from enricher.extraction.properties import DEFAULT_PROPERTIES, load_properties


def _write(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "properties.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadProperties:
    def test_defaults_without_path(self) -> None:
        assert load_properties() == list(DEFAULT_PROPERTIES)

    def test_objects_with_expected_format(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            [
                {"name": "Width", "expectedFormat": "mm", "description": "outer"},
                {"name": "Colour", "type": "text"},
                {"name": "Voltage"},
            ],
        )
        assert load_properties(path) == [
            PropertySpec(name="Width", type="mm", description="outer"),
            PropertySpec(name="Colour", type="text"),
            PropertySpec(name="Voltage", type="text"),
        ]

    def test_plain_names(self, tmp_path: Path) -> None:
        assert load_properties(_write(tmp_path, ["Width", " Depth "])) == [
            PropertySpec(name="Width"),
            PropertySpec(name="Depth"),
        ]

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ExtractionError, match="Failed to load properties file"):
            load_properties(tmp_path / "missing.json")

    def test_malformed_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "properties.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ExtractionError, match="Failed to load properties file"):
            load_properties(path)

    def test_empty_list_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ExtractionError, match="non-empty list"):
            load_properties(_write(tmp_path, []))

    def test_entry_without_name_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ExtractionError, match="index 1"):
            load_properties(_write(tmp_path, ["Width", {"type": "mm"}]))
