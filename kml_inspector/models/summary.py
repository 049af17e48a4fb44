"""Data model for the element-category summary of a KML document."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from kml_inspector.core.constants import RECOGNIZED_TAGS


@dataclass(frozen=True, slots=True, eq=False)
class ElementSummary(Mapping[str, int]):
    """Read-only mapping of recognized tag name to occurrence count.

    Every recognized tag is present, zero when absent from the document.
    Iteration follows ``RECOGNIZED_TAGS`` order. Compares equal to any
    mapping with the same items, including a plain ``dict``.

    Raises:
        ValueError: If a count is negative or the tag set is not exactly
            the recognized vocabulary.
    """

    counts: dict[str, int] = field(default_factory=lambda: dict.fromkeys(RECOGNIZED_TAGS, 0))

    def __post_init__(self) -> None:
        if set(self.counts) != set(RECOGNIZED_TAGS):
            msg = f"Summary keys must be exactly {list(RECOGNIZED_TAGS)}, got {sorted(self.counts)}"
            raise ValueError(msg)
        negative = {k: v for k, v in self.counts.items() if v < 0}
        if negative:
            msg = f"Summary counts must be non-negative, got {negative}"
            raise ValueError(msg)
        # Re-key in vocabulary order so iteration is stable.
        object.__setattr__(self, "counts", {tag: self.counts[tag] for tag in RECOGNIZED_TAGS})

    def __getitem__(self, key: str) -> int:
        return self.counts[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.counts)

    def __len__(self) -> int:
        return len(self.counts)

    def to_dict(self) -> dict[str, int]:
        """Serialise to a plain dict."""
        return dict(self.counts)
