"""Bounds checks for pagination arguments."""

from typing import Optional

from .config import cfg
from .errors import InputValidationError


def check_limit(limit: Optional[int], limit_max: Optional[int] = None) -> None:
    """Reject a limit outside [0, limit_max]. None means "use the default"."""
    if limit is None:
        return

    maximum = cfg.limit_max if limit_max is None else limit_max
    if limit < 0 or limit > maximum:
        raise InputValidationError("limit", limit, f"must be between 0 and {maximum}")


def check_offset(offset: Optional[int]) -> None:
    """Reject a negative offset. None means "use the default"."""
    if offset is None:
        return

    if offset < 0:
        raise InputValidationError("offset", offset, "must be 0 or greater")
