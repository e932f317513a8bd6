"""Shared API primitives."""

from __future__ import annotations

import re
import urllib.parse
from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence


class WalletNameClientError(Exception):
    """Base exception for the wallet name client."""


class TransportError(WalletNameClientError):
    """Raised when the HTTP or DNS exchange itself fails."""


class InvalidContentTypeError(WalletNameClientError):
    """Raised when a response does not declare a JSON content type."""

    def __init__(self, content_type: str) -> None:
        super().__init__(f"HTTP Response Contains Invalid Content-Type: {content_type}")
        self.content_type = content_type


class MalformedPayloadError(WalletNameClientError):
    """Raised when a response body cannot be decoded as a JSON object."""


class WalletNameAPIError(WalletNameClientError):
    """Raised when the registry answers with ``success`` set to false.

    ``failures`` is ``None`` when the response carried no ``failures`` key and
    a (possibly empty) list of sub-failure messages otherwise.
    """

    def __init__(self, message: str, failures: Optional[Sequence[str]] = None) -> None:
        self.message = message
        self.failures: Optional[List[str]] = list(failures) if failures is not None else None
        super().__init__(self._render())

    def _render(self) -> str:
        if self.failures is None:
            return self.message
        return f"{self.message} [FAILURES: {', '.join(self.failures)}]"


class LocalValidationError(WalletNameClientError, ValueError):
    """Raised when a precondition fails before any request is sent."""


class WalletNameLookupError(WalletNameClientError):
    """Base exception for public wallet name resolution."""


class WalletNameNotFoundError(WalletNameLookupError):
    """Raised when no wallet name records exist for a name."""


class CurrencyNotFoundError(WalletNameLookupError):
    """Raised when a wallet name has no address for the requested currency."""


def url_encode(text: str) -> str:
    """Percent-encode ``text`` for use as a single URL path segment."""

    return urllib.parse.quote(text, safe="")


_FRACTION_RE = re.compile(r"(\.\d+)")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp with optional fractional seconds.

    Accepts a trailing ``Z`` and truncates fractions finer than microseconds.
    Empty or missing values return ``None``.
    """

    if not value:
        return None
    text = str(value).strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"

    match = _FRACTION_RE.search(text)
    if match:
        fraction = match.group(1)[1:7].ljust(6, "0")
        text = f"{text[:match.start()]}.{fraction}{text[match.end():]}"

    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise MalformedPayloadError(f"Unable to parse timestamp from value: {value!r}") from exc


def get_list(payload: Mapping[str, Any], key: str) -> List[Any]:
    """Return ``payload[key]`` when it is a list, otherwise an empty list."""

    value = payload.get(key) if isinstance(payload, Mapping) else None
    return list(value) if isinstance(value, list) else []


def get_str(payload: Mapping[str, Any], key: str) -> str:
    """Return ``payload[key]`` as a string, ``""`` when missing or null."""

    value = payload.get(key) if isinstance(payload, Mapping) else None
    return "" if value is None else str(value)


def to_bool(value: Any) -> bool:
    """Normalize a flag that arrives as either a JSON bool or a string."""

    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False
