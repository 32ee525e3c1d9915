"""
Domain exceptions.

Typed exceptions for explicit error handling across the menu service.
The HTTP layer maps query errors to status codes; ingestion errors are
logged by the refresh job and never crash the process.
"""

from __future__ import annotations


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all service errors.

    All service-specific exceptions inherit from this.
    """

    pass


# ═══════════════════════════════════════════════════════════
# STARTUP EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ConfigError(DomainError):
    """
    Required configuration value is missing or invalid.

    Raised at startup; halts the process.

    Example:
        >>> raise ConfigError("MONGODB_URI not configured")
    """

    pass


class StorageConnectionError(DomainError):
    """
    MongoDB cannot be reached at startup.

    Example:
        >>> raise StorageConnectionError("ping failed: timed out")
    """

    pass


# ═══════════════════════════════════════════════════════════
# INGESTION EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class FetchError(DomainError):
    """
    HUDS API request failed.

    Raised when:
    - Network/transport failure or timeout
    - HTTP status >= 400 after retries

    Example:
        >>> raise FetchError("HUDS API error: 503")
    """

    pass


class DecodeError(FetchError):
    """
    HUDS API returned a malformed body.

    Raised when:
    - Body is not valid JSON
    - Body is not a JSON array of menu records

    Example:
        >>> raise DecodeError("Expected a JSON array, got dict")
    """

    pass


# ═══════════════════════════════════════════════════════════
# STORAGE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class MenuNotFoundError(DomainError):
    """
    No menu document matches the lookup.

    Raised when:
    - No document for the requested serve date
    - Collection is empty (earliest/latest lookups)

    Example:
        >>> raise MenuNotFoundError("No menu stored for 10/19/2026")
    """

    pass


class MenuStorageError(DomainError):
    """
    Any other storage failure (driver error, unreadable document).

    Example:
        >>> raise MenuStorageError("find_one failed: connection reset")
    """

    pass


# ═══════════════════════════════════════════════════════════
# QUERY EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class QueryError(DomainError):
    """Base exception for menu query outcomes surfaced to HTTP clients."""

    pass


class InvalidServeDateError(QueryError):
    """serve_date is missing or not formatted as MM/DD/YYYY."""

    pass


class DateBeforeRecordsError(QueryError):
    """Requested date precedes the earliest date HUDS publishes."""

    pass


class DateOutOfRangeError(QueryError):
    """Requested date falls outside the stored record range."""

    pass


class MenuUnavailableError(QueryError):
    """
    Menu lookup failed for a date inside the known range.

    Covers storage failures, missing documents inside the range and
    documents without any dinner items.
    """

    pass
