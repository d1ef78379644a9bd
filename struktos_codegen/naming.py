"""Identifier case conversion and pluralisation.

Every generator derives the names it needs (class names, file slugs, proto
package names, constants) from a single user-supplied name through these
functions.  They are pure and total: any ASCII identifier-like string is
accepted and the empty string maps to the empty string.

Words are split on hyphens, underscores, whitespace and camel boundaries
(``userProfile`` -> ``user`` + ``Profile``, ``HTTPServer`` -> ``HTTP`` +
``Server``).
"""

from __future__ import annotations

import re


_SEPARATORS = re.compile(r"[-_\s]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_CONSONANT_Y = re.compile(r"[^aeiou]y$", re.IGNORECASE)


def split_words(value: str) -> list[str]:
    """Split *value* into its words, dropping empty fragments."""
    words: list[str] = []
    for chunk in _SEPARATORS.split(value.strip()):
        words.extend(word for word in _CAMEL_BOUNDARY.split(chunk) if word)
    return words


def to_pascal_case(value: str) -> str:
    """``user-profile`` / ``user_profile`` / ``userProfile`` -> ``UserProfile``."""
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(value))


def to_camel_case(value: str) -> str:
    """``UserProfile`` / ``user-profile`` -> ``userProfile``."""
    pascal = to_pascal_case(value)
    return pascal[:1].lower() + pascal[1:]


def to_kebab_case(value: str) -> str:
    """``UserProfile`` -> ``user-profile``."""
    return "-".join(word.lower() for word in split_words(value))


def to_snake_case(value: str) -> str:
    """``UserProfile`` -> ``user_profile``."""
    return "_".join(word.lower() for word in split_words(value))


def to_upper_snake_case(value: str) -> str:
    """``UserProfile`` -> ``USER_PROFILE`` (for constants)."""
    return to_snake_case(value).upper()


def pluralize(word: str) -> str:
    """Return a naive English plural of *word*.

    Rules, in order:

    * consonant + ``y`` -> ``ies`` (``category`` -> ``categories``)
    * ends in ``s``, ``x``, ``ch`` or ``sh`` -> append ``es``
      (``box`` -> ``boxes``)
    * otherwise append ``s``

    This is a heuristic, not a dictionary.  Irregular plurals are NOT
    handled: ``person`` becomes ``persons`` and ``child`` becomes
    ``childs``.  Callers that need a real plural must pass it in themselves.
    """
    if not word:
        return ""
    if _CONSONANT_Y.search(word):
        return word[:-1] + "ies"
    if word.lower().endswith(("s", "x", "ch", "sh")):
        return word + "es"
    return word + "s"
