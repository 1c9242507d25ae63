"""
Data model for glossary terms and their translations.

Terms are read from and written to JSON using the keys of the extracted
ISO/IEC/IEEE 24765 dataset ("number", "alias", "confer"). The dataclasses
use descriptive attribute names and convert at the boundary through
from_dict() and to_dict().

Records are value objects: components copy them, nobody shares and
mutates the same instance.

Author: Leonardo Pacciani-Mori
License: MIT
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import DatasetError

# Accepted input keys for each attribute, first one is the serialized key.
ID_KEYS = ("number", "id")
ALIAS_KEYS = ("alias", "aliases")
RELATED_KEYS = ("confer", "relatedTerms", "related_terms")
ALIAS_JA_KEYS = ("alias_ja", "aliases_ja")
RELATED_JA_KEYS = ("confer_ja", "relatedTerms_ja", "related_terms_ja")


def _first_key(data: Dict[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _string_list(value: Any, label: str, term_id: str) -> Optional[List[str]]:
    """Validate an optional list of strings; an empty list counts as absent."""
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DatasetError(
            f"Term {term_id}: '{label}' must be a list of strings",
            code="invalid_term",
            details={"id": term_id, "field": label},
        )
    return list(value) or None


def _optional_string(value: Any, label: str, term_id: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise DatasetError(
        f"Term {term_id}: '{label}' must be a string",
        code="invalid_term",
        details={"id": term_id, "field": label},
    )


@dataclass
class Definition:
    """One definition of a term with its optional source reference."""
    text: str
    reference: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"text": self.text}
        if self.reference is not None:
            data["reference"] = self.reference
        return data


@dataclass
class Term:
    """
    A glossary entry as extracted from the English vocabulary.

    Attributes:
        id: Stable identifier (dotted clause number), primary key across
            the original and translated datasets.
        name: The headword.
        definitions: Non-empty ordered list of definitions.
        aliases: Optional non-empty list of alternative headwords.
        related_terms: Optional non-empty list of "confer" references.
        example: Optional usage example.
        note: Optional note.
    """
    id: str
    name: str
    definitions: List[Definition]
    aliases: Optional[List[str]] = None
    related_terms: Optional[List[str]] = None
    example: Optional[str] = None
    note: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Term":
        """
        Build a Term from a dataset record.

        Raises:
            DatasetError: If the record is not an object, lacks an id or a
                name, has no definitions, or has fields of the wrong type.
        """
        if not isinstance(data, dict):
            raise DatasetError("Term record is not an object", code="invalid_term")

        term_id = _first_key(data, ID_KEYS)
        if not isinstance(term_id, str) or not term_id:
            raise DatasetError("Term record missing 'number' field", code="invalid_term")

        name = data.get("name")
        if not isinstance(name, str):
            raise DatasetError(
                f"Term {term_id}: missing or invalid 'name' field",
                code="invalid_term",
                details={"id": term_id, "field": "name"},
            )

        raw_definitions = data.get("definitions")
        if not isinstance(raw_definitions, list) or not raw_definitions:
            raise DatasetError(
                f"Term {term_id}: 'definitions' must be a non-empty array",
                code="invalid_term",
                details={"id": term_id, "field": "definitions"},
            )

        definitions = []
        for index, item in enumerate(raw_definitions, start=1):
            if not isinstance(item, dict) or not isinstance(item.get("text"), str):
                raise DatasetError(
                    f"Term {term_id}: definition {index} missing or invalid 'text' field",
                    code="invalid_term",
                    details={"id": term_id, "field": "definitions", "index": index},
                )
            definitions.append(Definition(
                text=item["text"],
                reference=_optional_string(item.get("reference"), "reference", term_id),
            ))

        return cls(
            id=term_id,
            name=name,
            definitions=definitions,
            aliases=_string_list(_first_key(data, ALIAS_KEYS), "alias", term_id),
            related_terms=_string_list(_first_key(data, RELATED_KEYS), "confer", term_id),
            example=_optional_string(data.get("example"), "example", term_id),
            note=_optional_string(data.get("note"), "note", term_id),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"number": self.id, "name": self.name}
        if self.aliases is not None:
            data["alias"] = list(self.aliases)
        data["definitions"] = [d.to_dict() for d in self.definitions]
        if self.related_terms is not None:
            data["confer"] = list(self.related_terms)
        if self.example is not None:
            data["example"] = self.example
        if self.note is not None:
            data["note"] = self.note
        return data

    def source_signature(self) -> Tuple:
        """Tuple of every translatable source field, used to detect stale checkpoints."""
        return (
            self.name,
            tuple(self.aliases or ()),
            tuple((d.text, d.reference) for d in self.definitions),
            tuple(self.related_terms or ()),
            self.example,
            self.note,
        )


@dataclass
class TranslatedDefinition:
    """A definition with its Japanese rendering."""
    text: str
    text_ja: str
    reference: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"text": self.text, "text_ja": self.text_ja}
        if self.reference is not None:
            data["reference"] = self.reference
        return data


@dataclass
class TranslatedTerm:
    """
    A Term plus a parallel "_ja" counterpart for every translatable field.

    Optional "_ja" fields are present if and only if the source field is
    present, and list fields keep the source length and order.
    """
    id: str
    name: str
    name_ja: str
    definitions: List[TranslatedDefinition] = field(default_factory=list)
    aliases: Optional[List[str]] = None
    aliases_ja: Optional[List[str]] = None
    related_terms: Optional[List[str]] = None
    related_terms_ja: Optional[List[str]] = None
    example: Optional[str] = None
    example_ja: Optional[str] = None
    note: Optional[str] = None
    note_ja: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranslatedTerm":
        """
        Build a TranslatedTerm from an output or checkpoint record.

        Only the id is strictly required; missing values are kept as empty
        strings or None so that the validator can report them.
        """
        if not isinstance(data, dict):
            raise DatasetError("Translated record is not an object", code="invalid_term")

        term_id = _first_key(data, ID_KEYS)
        if not isinstance(term_id, str) or not term_id:
            raise DatasetError("Translated record missing 'number' field", code="invalid_term")

        definitions = []
        for item in data.get("definitions") or []:
            if isinstance(item, dict):
                definitions.append(TranslatedDefinition(
                    text=item.get("text", ""),
                    text_ja=item.get("text_ja", ""),
                    reference=item.get("reference"),
                ))

        return cls(
            id=term_id,
            name=data.get("name", ""),
            name_ja=data.get("name_ja", ""),
            definitions=definitions,
            aliases=_first_key(data, ALIAS_KEYS),
            aliases_ja=_first_key(data, ALIAS_JA_KEYS),
            related_terms=_first_key(data, RELATED_KEYS),
            related_terms_ja=_first_key(data, RELATED_JA_KEYS),
            example=data.get("example"),
            example_ja=data.get("example_ja"),
            note=data.get("note"),
            note_ja=data.get("note_ja"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "number": self.id,
            "name": self.name,
            "name_ja": self.name_ja,
        }
        if self.aliases is not None:
            data["alias"] = list(self.aliases)
        if self.aliases_ja is not None:
            data["alias_ja"] = list(self.aliases_ja)
        data["definitions"] = [d.to_dict() for d in self.definitions]
        if self.related_terms is not None:
            data["confer"] = list(self.related_terms)
        if self.related_terms_ja is not None:
            data["confer_ja"] = list(self.related_terms_ja)
        if self.example is not None:
            data["example"] = self.example
        if self.example_ja is not None:
            data["example_ja"] = self.example_ja
        if self.note is not None:
            data["note"] = self.note
        if self.note_ja is not None:
            data["note_ja"] = self.note_ja
        return data

    def source_signature(self) -> Tuple:
        """Same shape as Term.source_signature(), built from the source fields."""
        return (
            self.name,
            tuple(self.aliases or ()),
            tuple((d.text, d.reference) for d in self.definitions),
            tuple(self.related_terms or ()),
            self.example,
            self.note,
        )
