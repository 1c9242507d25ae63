from __future__ import annotations

import pytest

from iso24765_translator.translation.context import (
    CONTEXT_PREFIX,
    CONTEXT_PREFIX_VARIANTS,
    find_context_remnants,
    unwrap,
    wrap,
)


def test_wrap_places_text_after_prefix():
    assert wrap("algorithm") == CONTEXT_PREFIX + "algorithm"


def test_wrap_uses_custom_template():
    assert wrap("bug", "Context: {text} (software)") == "Context: bug (software)"


@pytest.mark.parametrize("prefix", CONTEXT_PREFIX_VARIANTS)
def test_unwrap_strips_every_known_variant(prefix):
    assert unwrap(prefix + " アルゴリズム ") == "アルゴリズム"


def test_unwrap_after_wrap_returns_payload():
    assert unwrap(wrap("ソフトウェア")) == "ソフトウェア"


def test_unwrap_leaves_unknown_text_unchanged():
    text = "  アルゴリズムの説明 "
    assert unwrap(text) == text


def test_unwrap_only_strips_leading_prefix():
    text = "用語：" + CONTEXT_PREFIX
    assert unwrap(text) == text


def test_find_context_remnants_reports_each_match():
    remnants = find_context_remnants("システム・ソフトウェア開発の専門用語としての文脈における用語の説明：抽象化")
    assert len(remnants) == 3
    assert find_context_remnants("抽象化") == ()
