from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

# Make package importable when running tests without installation.
SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from iso24765_translator.core.exceptions import GatewayUnavailableError  # noqa: E402
from iso24765_translator.core.models import (  # noqa: E402
    Definition,
    Term,
    TranslatedDefinition,
    TranslatedTerm,
)
from iso24765_translator.translation.context import CONTEXT_PREFIX  # noqa: E402
from iso24765_translator.translation.gateway import TranslationGateway  # noqa: E402


def fake_japanese(wrapped: str) -> str:
    """Echo the context prefix and mark the payload as translated."""
    body = wrapped[len(CONTEXT_PREFIX):] if wrapped.startswith(CONTEXT_PREFIX) else wrapped
    return f"{CONTEXT_PREFIX}訳:{body}"


class DummyGateway(TranslationGateway):
    def __init__(
        self,
        translate_fn: Optional[Callable[[str], str]] = None,
        create_error: Optional[BaseException] = None,
    ):
        self.translate_fn = translate_fn or fake_japanese
        self.create_error = create_error
        self.create_calls = []
        self.calls = []
        self.close_calls = 0

    async def create(self, source_language: str, target_language: str) -> None:
        self.create_calls.append((source_language, target_language))
        if self.create_error is not None:
            raise self.create_error

    async def translate(self, text: str) -> str:
        self.calls.append(text)
        return self.translate_fn(text)

    async def close(self) -> None:
        self.close_calls += 1


class SleepRecorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def make_term(term_id: str, name: Optional[str] = None, **kwargs) -> Term:
    definitions = kwargs.pop("definitions", None) or [
        Definition(f"definition of {name or term_id}", reference="ISO/IEC 2382")
    ]
    return Term(id=term_id, name=name or f"term {term_id}", definitions=definitions, **kwargs)


def untranslated(term: Term) -> TranslatedTerm:
    """Copy of the term with every "_ja" field set to the source text."""
    def copy(values):
        return list(values) if values is not None else None

    return TranslatedTerm(
        id=term.id,
        name=term.name,
        name_ja=term.name,
        definitions=[TranslatedDefinition(d.text, d.text, d.reference) for d in term.definitions],
        aliases=copy(term.aliases),
        aliases_ja=copy(term.aliases),
        related_terms=copy(term.related_terms),
        related_terms_ja=copy(term.related_terms),
        example=term.example,
        example_ja=term.example,
        note=term.note,
        note_ja=term.note,
    )


@pytest.fixture
def gateway() -> DummyGateway:
    return DummyGateway()


@pytest.fixture
def failing_gateway() -> DummyGateway:
    def boom(text: str) -> str:
        raise RuntimeError("translator crashed")

    return DummyGateway(translate_fn=boom)


@pytest.fixture
def unavailable_gateway() -> DummyGateway:
    return DummyGateway(
        create_error=GatewayUnavailableError("Translator API is not available", code="api_unavailable")
    )


@pytest.fixture
def no_sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def sample_terms() -> list:
    return [
        make_term(
            "3.1",
            "abstraction",
            aliases=["abstract view"],
            definitions=[
                Definition("view of an object that focuses on relevant information", "ISO/IEC 2382"),
                Definition("process of suppressing irrelevant detail"),
            ],
            related_terms=["encapsulation", "information hiding"],
            example="a class hierarchy",
            note="Compare with refinement.",
        ),
        make_term("3.2", "acceptance testing"),
        make_term("3.3", "algorithm", note="See also heuristic."),
    ]


@pytest.fixture
def numbered_terms() -> Callable[[int], list]:
    def build(count: int) -> list:
        return [make_term(f"3.{i}") for i in range(1, count + 1)]

    return build
