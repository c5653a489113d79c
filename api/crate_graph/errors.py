"""Error types raised by the registry client and request validation.

Each registry failure mode is its own exception so the HTTP layer can map it
to a distinct status code and error ``name``:

- ``CrateNotFoundError``        -> 404 ``not_found``
- ``RegistryUnavailableError``  -> 503 ``upstream_unavailable``
- ``RegistryTimeoutError``      -> 504 ``upstream_timeout``
- ``RegistryDecodeError``       -> 502 ``upstream_decode``
"""

from __future__ import annotations

from typing import Optional


class RegistryError(Exception):
    """Base class for failures talking to the upstream registry.

    Subclasses set ``status_code`` and ``code``. The base values are what the
    HTTP layer reports for a registry failure with no more specific type.
    """

    status_code = 502
    code = "upstream_error"

    def __init__(self, message: str, *, url: Optional[str] = None, upstream_status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.upstream_status = upstream_status


class CrateNotFoundError(RegistryError):
    status_code = 404
    code = "not_found"


class RegistryUnavailableError(RegistryError):
    status_code = 503
    code = "upstream_unavailable"


class RegistryTimeoutError(RegistryError):
    status_code = 504
    code = "upstream_timeout"


class RegistryDecodeError(RegistryError):
    status_code = 502
    code = "upstream_decode"


class QueryValidationError(Exception):
    """A required query parameter was missing or malformed."""

    code = "query"

    def __init__(self, description: str) -> None:
        super().__init__(description)
        self.description = description


def missing_field(field_name: str) -> QueryValidationError:
    return QueryValidationError(f"missing field `{field_name}`")
