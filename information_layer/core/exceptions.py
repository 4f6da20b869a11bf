"""
Exception hierarchy for the segment classification engine.

Structured error handling with specific error types. These are domain errors;
the HTTP layer maps them onto APIError responses.
"""

from typing import Dict, Any, List, Optional


class InformationLayerError(Exception):
    """Base exception for all information layer errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidSignalsError(InformationLayerError):
    """Raised when a signal vector is missing keys or carries malformed values."""

    def __init__(
        self,
        missing: Optional[List[str]] = None,
        malformed: Optional[List[str]] = None,
    ):
        self.missing = list(missing or [])
        self.malformed = list(malformed or [])

        if self.missing:
            message = f"Missing required signals: {', '.join(self.missing)}"
        else:
            message = f"Malformed signals: {', '.join(self.malformed)}"

        super().__init__(message, {"missing": self.missing, "malformed": self.malformed})


class DegradedComputationError(InformationLayerError):
    """Raised when a derived metric cannot be computed. Recovered by the caller."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
