"""
Text helpers shared by every slugged content type.
"""

import re

# Word characters are ASCII only; any Unicode whitespace still separates words
_DISALLOWED = re.compile(r"[^A-Za-z0-9_\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")
_EDGE_HYPHENS = re.compile(r"^-+|-+$")


def slugify(value: str) -> str:
    """
    Derive a URL-safe slug from a display title.

    The result only holds lowercase ASCII letters, digits and single hyphens.
    A title made only of symbols yields an empty string.

    >>> slugify("Solar Panel 300W!!")
    'solar-panel-300w'
    >>> slugify("  Multiple   Spaces--and__Underscores ")
    'multiple-spaces-and-underscores'
    >>> slugify("!!!")
    ''
    """
    slug = _DISALLOWED.sub("", value.lower())
    slug = _SEPARATORS.sub("-", slug)
    return _EDGE_HYPHENS.sub("", slug)


def should_derive_slug(current_slug: str | None, source_changed: bool) -> bool:
    """
    A slug is derived only when none exists and the source field triggered the save.

    >>> should_derive_slug(None, True)
    True
    >>> should_derive_slug("custom-slug", True)
    False
    """
    return not current_slug and source_changed
