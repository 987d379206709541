"""Exceptions raised by the TMDb client and the record mappers."""

from __future__ import annotations


class TMDbError(Exception):
    """Base exception for TMDb-related failures."""


class TMDbNotFound(TMDbError):
    """Raised when TMDb has no resource for the requested id."""


class TMDbMalformedResponse(TMDbError):
    """Raised when a TMDb payload is not JSON or misses a required field."""
