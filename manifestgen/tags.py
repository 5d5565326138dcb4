"""Tag derivation and cleanup for manifest entries.

Candidate tags come from four places: words of the example title, words of
the module (project) identifier, ``tag`` meta annotations on the example and
the tags of matching filter rules. Title, meta and rule candidates are
collected unmodified and cleaned in one pass right before an entry is
assembled. Module words are constant for a run and are cleaned once.
"""

from __future__ import annotations

import re
from typing import AbstractSet, FrozenSet, Iterable, Set

# QtQuickControls -> Qt, Quick, Controls; QtOpenGL -> Qt, OpenGL; QtQuick3D -> Qt, Quick3D
_MODULE_WORD_PATTERN = re.compile(r"[A-Z]+(?:[a-z0-9]*?(?:3D|GL)|[a-z0-9]*)")

STOPWORDS: FrozenSet[str] = frozenset({"qt", "the", "and"})
_NOISE_PREFIXES = ("example", "chapter")
_MIN_TAG_LENGTH = 2


def title_tags(title: str) -> Set[str]:
    """Lowercased title words, split on single spaces."""
    return set(title.lower().split(" "))


def module_tags(module: str) -> FrozenSet[str]:
    """Lowercased capitalised word runs of a module identifier."""
    return frozenset(match.group(0).lower() for match in _MODULE_WORD_PATTERN.finditer(module))


def meta_tags(values: Iterable[str]) -> Set[str]:
    """Comma separated ``\\meta tag`` values, lowercased."""
    tags: Set[str] = set()
    for value in values:
        for piece in value.lower().split(","):
            tags.add(piece.strip())
    return tags


def derive_tags(title: str, explicit: Iterable[str] = (), extra: Iterable[str] = ()) -> Set[str]:
    """Union title words, meta tags and ``extra`` (rule tags) without cleaning."""
    candidates: Set[str] = set(extra)
    candidates.update(meta_tags(explicit))
    candidates.update(title_tags(title))
    return candidates


def clean_tag(tag: str, stopwords: AbstractSet[str] = STOPWORDS) -> str | None:
    """Normalise one candidate; ``None`` means the tag is noise."""
    if tag.startswith("("):
        tag = tag[1:-1]
    if tag.endswith(":"):
        tag = tag[:-1]

    if len(tag) < _MIN_TAG_LENGTH:
        return None
    if tag[0].isdigit() or tag[0] == "-":
        return None
    if tag in stopwords or tag.startswith(_NOISE_PREFIXES):
        return None
    return tag


def clean_tags(
    candidates: Iterable[str], stopwords: AbstractSet[str] = STOPWORDS
) -> FrozenSet[str]:
    """Drop noise tags and return the cleaned set."""
    cleaned: Set[str] = set()
    for candidate in candidates:
        tag = clean_tag(candidate, stopwords)
        if tag is not None:
            cleaned.add(tag)
    return frozenset(cleaned)


def clean_module_tags(module: str) -> FrozenSet[str]:
    """Module words cleaned once per run.

    Stopwords are not applied: ``qt`` names the module family here, it is not
    filler text from a title.
    """
    return clean_tags(module_tags(module), stopwords=frozenset())


__all__ = [
    "STOPWORDS",
    "clean_module_tags",
    "clean_tag",
    "clean_tags",
    "derive_tags",
    "meta_tags",
    "module_tags",
    "title_tags",
]
