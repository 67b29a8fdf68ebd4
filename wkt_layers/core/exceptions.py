"""Unified exception taxonomy for geometry ingestion.

Every domain exception inherits from ``PipelineError`` and carries
structured context fields so that dropped entities, bad configuration
and malformed input files can be logged the same way.

Taxonomy categories
-------------------
- ``ValidationError``   : malformed geometry text or model invariants.
- ``PermanentError``    : unrecoverable failures (e.g. stream misuse).
- ``ContractError``     : input records that do not match the expected shape.

Parsing is pure and deterministic, so nothing raised by the grammar is
ever retryable.  Exceptions raised by the grammar never cross the
collection boundary: the batch and streaming drivers catch them per
entity and drop that entity.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all geometry-ingestion errors.

    Attributes:
        message: Human-readable error description.
        stage: Stage where the error occurred (e.g. ``"parse_wkt"``).
        code: Machine-readable error code (e.g. ``"WKT_POINT_INVALID"``).
        retryable: Whether repeating the operation could succeed.
        entity_id: Id of the entity being processed, when known.
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
        retryable: bool = False,
        entity_id: int | None = None,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.entity_id = entity_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "entity_id": self.entity_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(PipelineError):
    """Malformed input text or model invariant violation. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(PipelineError):
    """Unrecoverable failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(PipelineError):
    """Input records that do not match the expected shape. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]
