from __future__ import annotations

from typing import Protocol


class TaxonomyProvider(Protocol):
    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        """Return normalized text and optional canonical skill name."""

    def canonical_name(self, raw: str) -> str:
        """Return the canonical spelling of a skill, or the trimmed input when unknown."""
