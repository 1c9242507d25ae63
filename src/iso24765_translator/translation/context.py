"""
Context wrapping for short terminology translations.

The Translator API renders isolated professional terms poorly. Each text
is therefore prefixed with a Japanese phrase that places it in the
systems and software engineering domain, and the rendered prefix is
stripped from the translation afterwards.

Stripping is plain prefix matching against the renderings the Translator
API has been seen to produce (full-width or half-width colon, with or
without a space). Anything else is returned unchanged and surfaces later
as a "context prefix remnant" validation warning.

Author: Leonardo Pacciani-Mori
License: MIT
"""

from typing import Tuple

CONTEXT_PREFIX = "システム・ソフトウェア開発の専門用語としての文脈における用語の説明："

CONTEXT_TEMPLATE = CONTEXT_PREFIX + "{text}"

_PREFIX_STEM = "システム・ソフトウェア開発の専門用語としての文脈における用語の説明"

CONTEXT_PREFIX_VARIANTS: Tuple[str, ...] = (
    _PREFIX_STEM + "：",
    _PREFIX_STEM + ":",
    _PREFIX_STEM + " :",
    _PREFIX_STEM + " ：",
)

# Substrings whose presence in a stored translation means the context
# leaked into the result.
CONTEXT_REMNANTS: Tuple[str, ...] = (
    _PREFIX_STEM,
    "システム・ソフトウェア開発",
    "専門用語としての文脈",
)


def wrap(text: str, template: str = CONTEXT_TEMPLATE) -> str:
    """
    Place text inside the domain context template.

    Example:
        >>> wrap("algorithm")
        'システム・ソフトウェア開発の専門用語としての文脈における用語の説明：algorithm'
    """
    return template.replace("{text}", text)


def unwrap(translated_text: str) -> str:
    """
    Remove the rendered context prefix from a translation.

    The first matching prefix variant is removed and the remainder is
    stripped of surrounding whitespace. If no variant matches, the input
    is returned unchanged.
    """
    for prefix in CONTEXT_PREFIX_VARIANTS:
        if translated_text.startswith(prefix):
            return translated_text[len(prefix):].strip()
    return translated_text


def find_context_remnants(text: str) -> Tuple[str, ...]:
    """Return every known context remnant contained in text."""
    return tuple(remnant for remnant in CONTEXT_REMNANTS if remnant in text)
