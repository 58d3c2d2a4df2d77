"""Tests for saving the document to a text file"""
from datetime import datetime

import pytest

from ghostwriter.exceptions import ExportError
from ghostwriter.export import export_filename, save_document


def test_filename_is_timestamped():
    assert export_filename(datetime(2024, 3, 9, 14, 5, 7)) == "ghostwriter-2024-03-09T14-05-07.txt"


def test_save_replaces_sentinel_and_trims(tmp_path):
    path = save_document("  The end.\u00a0", tmp_path, now=datetime(2024, 1, 2, 3, 4, 5))
    assert path.name == "ghostwriter-2024-01-02T03-04-05.txt"
    assert path.read_text(encoding="utf-8") == "The end.\n"


def test_empty_document_is_not_saved(tmp_path):
    with pytest.raises(ExportError):
        save_document(" \n ", tmp_path)
    assert list(tmp_path.iterdir()) == []


def test_unwritable_directory_raises_export_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    with pytest.raises(ExportError) as excinfo:
        save_document("Story", blocker)
    assert excinfo.value.error_code == "EXPORT_ERROR"
