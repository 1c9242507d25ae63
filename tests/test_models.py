from __future__ import annotations

import pytest

from iso24765_translator.core.exceptions import DatasetError
from iso24765_translator.core.models import Term, TranslatedTerm


def test_term_from_dict_accepts_wire_keys():
    term = Term.from_dict({
        "number": "3.1",
        "name": "abstraction",
        "alias": ["abstract view"],
        "definitions": [{"text": "view of an object", "reference": "ISO/IEC 2382"}],
        "confer": ["encapsulation"],
        "note": "Compare with refinement.",
    })

    assert term.id == "3.1"
    assert term.aliases == ["abstract view"]
    assert term.related_terms == ["encapsulation"]
    assert term.definitions[0].reference == "ISO/IEC 2382"
    assert term.example is None


def test_term_from_dict_accepts_descriptive_keys_and_drops_empty_lists():
    term = Term.from_dict({
        "id": "3.2",
        "name": "algorithm",
        "aliases": [],
        "relatedTerms": ["heuristic"],
        "definitions": [{"text": "finite set of rules"}],
    })

    assert term.id == "3.2"
    assert term.aliases is None
    assert term.related_terms == ["heuristic"]


@pytest.mark.parametrize("record", [
    {"name": "x", "definitions": [{"text": "y"}]},
    {"number": "1", "definitions": [{"text": "y"}]},
    {"number": "1", "name": "x", "definitions": []},
    {"number": "1", "name": "x", "definitions": [{"reference": "r"}]},
    {"number": "1", "name": "x", "definitions": [{"text": "y"}], "alias": "not a list"},
    "not an object",
])
def test_term_from_dict_rejects_malformed_records(record):
    with pytest.raises(DatasetError) as exc_info:
        Term.from_dict(record)
    assert exc_info.value.code == "invalid_term"


def test_translated_term_to_dict_key_order_and_omitted_fields():
    term = TranslatedTerm.from_dict({
        "number": "3.3",
        "name": "algorithm",
        "name_ja": "アルゴリズム",
        "definitions": [{"text": "rules", "text_ja": "規則"}],
        "note": "n",
        "note_ja": "注",
    })

    data = term.to_dict()

    assert list(data) == ["number", "name", "name_ja", "definitions", "note", "note_ja"]
    assert data["definitions"] == [{"text": "rules", "text_ja": "規則"}]
