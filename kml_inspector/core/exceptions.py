"""Unified exception taxonomy for KML inspection.

Every domain exception inherits from ``InspectorError`` and carries
structured context fields so that the HTTP boundary, logs and callers
can report failures consistently.

Taxonomy categories
-------------------
- ``ValidationError``   — the KML input itself is unusable (malformed XML,
  limits exceeded, bad coordinate tokens).
- ``ContractError``     — the transport payload around the KML is wrong
  (empty request body, oversize body, unknown operation).

Parsing and measuring are pure CPU work, so nothing in this package is
retryable; the taxonomy has no transient category.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for JSON responses and logging.
"""

from __future__ import annotations


class InspectorError(Exception):
    """Base exception for all KML inspection errors.

    Attributes:
        message: Human-readable error description.
        stage: Stage where the error occurred
            (e.g. ``"parse_kml"``, ``"extract_geometry"``).
        code: Machine-readable error code (e.g. ``"KML_PARSE_FAILED"``).
        correlation_id: Request correlation identifier.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        return "internal"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(InspectorError):
    """The KML input is unusable."""


class ContractError(InspectorError):
    """The payload around the KML input violates the transport contract."""

    default_stage = "ingress"
