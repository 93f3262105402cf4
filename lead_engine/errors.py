"""
Error types for the Lead Quality Engine.

Only two kinds exist. ``ConfigurationError`` is fatal and raised while a
weighting profile is built or loaded. ``ExtractionWarning`` describes a lead
field that was present but could not be parsed; it is logged and resolved
with a default, never raised to the caller.
"""

from typing import Any, Optional


class ConfigurationError(Exception):
    """Invalid weighting profile (bad weights, unknown dimension, bad tiers).

    Not a ValueError subclass so pydantic validators let it propagate
    unchanged instead of folding it into a ValidationError.
    """

    def __init__(self, message: str, profile: Optional[str] = None):
        self.profile = profile
        if profile:
            message = f"Profile '{profile}': {message}"
        super().__init__(message)


class ExtractionWarning(UserWarning):
    """A lead field was present but unparseable; a default was used instead"""

    def __init__(self, field: str, value: Any, default: int, reason: str):
        self.field = field
        self.value = value
        self.default = default
        self.reason = reason
        super().__init__(
            f"{field}={value!r}: {reason} (using default {default})"
        )
