"""
Tests for the atomic output writer.
"""

from pathlib import Path

import pytest

from gofile_model.errors import GoFileParseError
from gofile_model.writer import AtomicWriter, OutputValidationError


class TestAtomicWriter:
    def test_write_json(self, tmp_path: Path):
        target = tmp_path / "out" / "model.json"
        AtomicWriter().write(target, '{"files": []}', "json")
        assert target.read_text() == '{"files": []}'
        # No temporary file left behind
        assert [p.name for p in target.parent.iterdir()] == ["model.json"]

    def test_invalid_json_keeps_previous_content(self, tmp_path: Path):
        target = tmp_path / "model.json"
        target.write_text('{"files": []}')

        with pytest.raises(OutputValidationError):
            AtomicWriter().write(target, '{"files": [', "json")

        assert target.read_text() == '{"files": []}'
        assert [p.name for p in tmp_path.iterdir()] == ["model.json"]

    def test_json_without_files(self, tmp_path: Path):
        with pytest.raises(GoFileParseError, match="no files list"):
            AtomicWriter().write(tmp_path / "model.json", "[]", "json")

    def test_summary_is_not_validated(self, tmp_path: Path):
        target = tmp_path / "summary.txt"
        AtomicWriter().write(target, "not json", "summary")
        assert target.read_text() == "not json"

    def test_validation_can_be_disabled(self, tmp_path: Path):
        target = tmp_path / "model.json"
        AtomicWriter().write(target, "not json", "json", validate=False)
        assert target.read_text() == "not json"

    def test_custom_validator(self, tmp_path: Path):
        def reject(content: str) -> None:
            raise OutputValidationError("rejected")

        with pytest.raises(OutputValidationError, match="rejected"):
            AtomicWriter(validate_json=reject).write(tmp_path / "model.json", '{"files": []}', "json")
        assert list(tmp_path.iterdir()) == []
