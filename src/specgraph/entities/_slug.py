"""Slug generation for entity names."""

import re
from collections.abc import Collection
from typing import Final

__all__ = ["SlugGenerator"]

_SEPARATORS: Final = re.compile(r"[\s_]+")
_DISALLOWED: Final = re.compile(r"[^a-z0-9-]")
_DASH_RUNS: Final = re.compile(r"-{2,}")


class SlugGenerator:
    """Turns free text into URL-safe slugs.

    Instances are cheap and hold only their length limit; construct one
    wherever slugs are needed and pass it along.
    """

    __slots__: Final = ("max_length",)

    max_length: int

    def __init__(self, max_length: int = 50) -> None:
        if max_length < 1:
            msg = f"max_length must be positive, got {max_length}"
            raise ValueError(msg)
        self.max_length = max_length

    def generate(self, text: str) -> str:
        """Generate a slug from text.

        Lowercases the text, maps whitespace and underscores to dashes, drops
        anything outside ``[a-z0-9-]``, collapses repeated dashes, and trims
        the result to ``max_length``.

        Args:
            text: Source text, typically an entity name.

        Returns:
            The slug.

        Raises:
            ValueError: If the text yields an empty slug.
        """
        slug = _SEPARATORS.sub("-", text.strip().lower())
        slug = _DISALLOWED.sub("", slug)
        slug = _DASH_RUNS.sub("-", slug).strip("-")
        slug = slug[: self.max_length].rstrip("-")
        if not slug:
            msg = f"Cannot derive a slug from {text!r}"
            raise ValueError(msg)
        return slug

    def unique(self, text: str, existing: Collection[str]) -> str:
        """Generate a slug that does not collide with existing ones.

        Collisions get a numeric suffix starting at 2 (``name``, ``name-2``,
        ``name-3``...). The suffix counts towards ``max_length``.
        """
        base = self.generate(text)
        if base not in existing:
            return base

        counter = 2
        while True:
            suffix = f"-{counter}"
            candidate = base[: self.max_length - len(suffix)].rstrip("-") + suffix
            if candidate not in existing:
                return candidate
            counter += 1
