"""Extension-based classification of directory entries.

A category key is the lowercase extension of an entry name without the
leading dot. Names without an extension map to a sentinel category.
Classification only looks at the name, never at file contents.
"""

from __future__ import annotations

import re

from tidydir.shared.constants import Organize
from tidydir.shared.errors import create_validation_error

_UNSAFE_CHARS = re.compile(r"[\\/\x00]")


def extension_of(name: str) -> str:
    """Return the last extension of ``name`` without the dot, or "".

    A leading dot (``.bashrc``) and a trailing dot (``notes.``) do not
    start an extension.
    """
    index = name.rfind(".")
    if 0 < index < len(name) - 1:
        return name[index + 1 :]
    return ""


def validate_category(category: str) -> str:
    """Ensure ``category`` is usable as a single directory name.

    Raises:
        DomainError: If the category is empty, ``.``/``..`` or contains separators
    """
    if not category or category in {".", ".."} or _UNSAFE_CHARS.search(category):
        raise create_validation_error(
            f"Invalid category name: {category!r}",
            field="category",
            operation="validate_category",
        )
    return category


def category_for(name: str, noext_category: str = Organize.NOEXT_CATEGORY) -> str:
    """Map an entry name to its category key.

    Examples:
        >>> category_for("photo.JPG")
        'jpg'
        >>> category_for("archive.tar.gz")
        'gz'
        >>> category_for("README")
        '_noext'
    """
    extension = extension_of(name).lower()
    if not extension:
        return noext_category
    return _UNSAFE_CHARS.sub("_", extension)


__all__ = ["category_for", "extension_of", "validate_category"]
