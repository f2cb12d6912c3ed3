"""Pluralización mínima para claves de namespace.

No pretende cubrir el inglés completo: un set pequeño y estable de reglas.
Si un modelo necesita otra forma, la declara con `plural_namespace()`.
"""

from __future__ import annotations

import re

_IRREGULAR: dict[str, str] = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
    "tooth": "teeth",
    "foot": "feet",
}

_UNCOUNTABLE: frozenset[str] = frozenset(
    {"equipment", "information", "rice", "money", "species", "series", "fish", "sheep", "news"}
)

_F_TO_VES: dict[str, str] = {
    "leaf": "leaves",
    "half": "halves",
    "knife": "knives",
    "life": "lives",
    "wife": "wives",
    "shelf": "shelves",
    "wolf": "wolves",
}

_CONSONANT_Y = re.compile(r"[^aeiou]y$")
_SIBILANT = re.compile(r"(s|x|z|ch|sh)$")


def _match_case(source: str, plural: str) -> str:
    if source.isupper():
        return plural.upper()
    if source[:1].isupper():
        return plural[:1].upper() + plural[1:]
    return plural


def pluralize(word: str) -> str:
    """Plural inglés de `word`.

    Para claves compuestas (`blog_post`) solo se pluraliza el último segmento.
    """

    if not word:
        return word

    match = re.match(r"^(.*[_\-\s])?([^_\-\s]+)$", word)
    if match is None:
        return word
    prefix, last = match.group(1) or "", match.group(2)
    lower = last.lower()

    if lower in _UNCOUNTABLE:
        plural = lower
    elif lower in _IRREGULAR:
        plural = _IRREGULAR[lower]
    elif lower in _F_TO_VES:
        plural = _F_TO_VES[lower]
    elif _CONSONANT_Y.search(lower):
        plural = lower[:-1] + "ies"
    elif _SIBILANT.search(lower):
        plural = lower + "es"
    else:
        plural = lower + "s"

    return prefix + _match_case(last, plural)
