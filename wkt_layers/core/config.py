"""Parser configuration loaded from environment variables.

All configuration values have defaults suitable for in-process use, so
``ParserConfig()`` works without any environment at all.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if a value is out of
    its valid range.  Bad configuration is caught when the config is
    loaded instead of halfway through a large stream.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from wkt_layers.core.constants import (
    DEFAULT_TRANSPORT,
    DEFAULT_WORKER_POLL_INTERVAL_S,
    SUPPORTED_TRANSPORTS,
)
from wkt_layers.core.exceptions import PipelineError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(PipelineError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")
        self.message = message


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Immutable parser configuration.

    Attributes:
        stream_transport: Default streaming transport (``thread`` or ``worker``).
        log_dropped_entities: Log a warning for every entity whose geometry
            fails to parse.  Turn off for very large, known-dirty inputs.
        worker_poll_interval_s: Seconds the consumer blocks on the worker
            queue before re-checking whether the worker process has exited.
    """

    stream_transport: str = DEFAULT_TRANSPORT
    log_dropped_entities: bool = True
    worker_poll_interval_s: float = DEFAULT_WORKER_POLL_INTERVAL_S

    @classmethod
    def from_env(cls) -> ParserConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a
                boolean flag is not recognised.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``WKT_WORKER_POLL_INTERVAL_S=abc``).
        """
        config = cls(
            stream_transport=os.getenv("WKT_STREAM_TRANSPORT", DEFAULT_TRANSPORT).strip().lower(),
            log_dropped_entities=_parse_bool(
                "WKT_LOG_DROPPED_ENTITIES", os.getenv("WKT_LOG_DROPPED_ENTITIES", "true")
            ),
            worker_poll_interval_s=float(
                os.getenv("WKT_WORKER_POLL_INTERVAL_S", str(DEFAULT_WORKER_POLL_INTERVAL_S))
            ),
        )
        _validate(config)
        return config


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false, 1/0, yes/no, on/off)")


def _validate(config: ParserConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.stream_transport not in SUPPORTED_TRANSPORTS:
        raise ConfigValidationError(
            "WKT_STREAM_TRANSPORT",
            config.stream_transport,
            f"must be one of {', '.join(sorted(SUPPORTED_TRANSPORTS))}",
        )

    if config.worker_poll_interval_s <= 0:
        raise ConfigValidationError(
            "WKT_WORKER_POLL_INTERVAL_S",
            config.worker_poll_interval_s,
            "must be > 0 (seconds)",
        )
