from __future__ import annotations

import json
from pathlib import Path

import pytest
from conftest import untranslated

from iso24765_translator.core.dataset import (
    checkpoint_path,
    load_terms,
    load_translated_terms,
    save_translated_terms,
    write_json_atomic,
)
from iso24765_translator.core.exceptions import DatasetError


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def test_load_terms_reads_records_in_order(tmp_path):
    path = _write(tmp_path / "terms.json", json.dumps([
        {"number": "3.2", "name": "b", "definitions": [{"text": "b def"}]},
        {"number": "3.1", "name": "a", "definitions": [{"text": "a def"}]},
    ]))

    terms = load_terms(path)

    assert [t.id for t in terms] == ["3.2", "3.1"]


@pytest.mark.parametrize("content, code", [
    ("{not json", "invalid_json"),
    ('{"number": "3.1"}', "not_an_array"),
])
def test_load_terms_rejects_bad_files(tmp_path, content, code):
    path = _write(tmp_path / "terms.json", content)

    with pytest.raises(DatasetError) as exc_info:
        load_terms(path)
    assert exc_info.value.code == code


def test_load_terms_missing_file(tmp_path):
    with pytest.raises(DatasetError) as exc_info:
        load_terms(tmp_path / "missing.json")
    assert exc_info.value.code == "file_not_found"


def test_load_terms_rejects_duplicate_ids(tmp_path):
    record = {"number": "3.1", "name": "a", "definitions": [{"text": "a def"}]}
    path = _write(tmp_path / "terms.json", json.dumps([record, record]))

    with pytest.raises(DatasetError) as exc_info:
        load_terms(path)
    assert exc_info.value.code == "duplicate_id"


def test_save_translated_terms_writes_readable_utf8(tmp_path, sample_terms):
    output = tmp_path / "out" / "result.json"
    translated = [untranslated(t) for t in sample_terms]
    translated[0].name_ja = "抽象化"

    save_translated_terms(translated, output)

    raw = output.read_text(encoding="utf-8")
    assert "抽象化" in raw
    assert '\n  {\n    "number": "3.1"' in raw
    reloaded = load_translated_terms(output)
    assert [t.to_dict() for t in reloaded] == [t.to_dict() for t in translated]


def test_write_json_atomic_replaces_without_leftovers(tmp_path):
    target = tmp_path / "data.json"
    write_json_atomic([1], target)
    write_json_atomic([1, 2], target)

    assert json.loads(target.read_text(encoding="utf-8")) == [1, 2]
    assert [p.name for p in tmp_path.iterdir()] == ["data.json"]


def test_checkpoint_path_uses_output_stem():
    assert checkpoint_path("output/result.json", 100) == Path("output/result.backup-100.json")
