"""Parse uploaded JSON payloads into raw record collections."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


class DataLoadError(ValueError):
    """Raised when an uploaded payload is not a JSON array of records."""


@dataclass(slots=True)
class ValidationResult:
    valid: bool
    error: str | None = None


def read_json_payload(name: str, data: bytes | str) -> list[Any]:
    """Decode ``data`` (file contents) and return the top-level JSON array."""
    try:
        text = data.decode("utf-8") if isinstance(data, bytes) else data
        parsed = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Rejected %s: %s", name, exc)
        raise DataLoadError(f'Invalid JSON in "{name}"') from exc
    if not isinstance(parsed, list):
        raise DataLoadError(f'Expected a JSON array in "{name}"')
    logger.debug("Loaded %s records from %s", len(parsed), name)
    return parsed


def validate_file_selections(tickets_file, meetups_file) -> ValidationResult:
    """At least one of the two uploads must be present."""
    if not tickets_file and not meetups_file:
        return ValidationResult(valid=False)
    return ValidationResult(valid=True)
