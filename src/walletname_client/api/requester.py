"""Request dispatch and response interpretation for the registry API."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Union

import requests

from .base import (
    InvalidContentTypeError,
    MalformedPayloadError,
    TransportError,
    WalletNameAPIError,
    get_list,
    to_bool,
)
from ..config import ApiConfig, PartnerCredentials

logger = logging.getLogger(__name__)


def is_json_content_type(content_type: Optional[str]) -> bool:
    """Return ``True`` for ``application/json``, ``text/json`` and ``+json`` media types."""

    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in ("application/json", "text/json") or media_type.endswith("+json")


def interpret_response(
    status_code: int,
    content_type: Optional[str],
    body: Union[bytes, str, None],
) -> Dict[str, Any]:
    """Classify a raw registry response and return its JSON payload.

    A 204 answer is success with nothing to report and yields ``{}``. Any
    other answer must carry a JSON body whose ``success`` flag is not false;
    otherwise the matching :class:`WalletNameClientError` subclass is raised.
    """

    if status_code == 204:
        return {}

    if not is_json_content_type(content_type):
        raise InvalidContentTypeError(content_type or "")

    try:
        payload = json.loads(body or b"")
    except ValueError as exc:
        raise MalformedPayloadError(f"Error Retrieving JSON Data: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedPayloadError(
            f"Error Retrieving JSON Data: expected an object, got {type(payload).__name__}"
        )

    if "success" in payload and not to_bool(payload["success"]):
        failures = None
        if "failures" in payload:
            failures = [_failure_message(item) for item in get_list(payload, "failures")]
        error = WalletNameAPIError(str(payload.get("message") or ""), failures)
        logger.warning("Registry request failed (HTTP %s): %s", status_code, error)
        raise error

    return payload


def _failure_message(item: Any) -> str:
    if isinstance(item, dict):
        return str(item.get("message", ""))
    return str(item)


class Requester:
    """Performs one HTTP exchange per call against the registry API."""

    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._config = config or ApiConfig()
        self._session = session or requests.Session()

    def _headers(self, credentials: Optional[PartnerCredentials]) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if credentials is not None:
            if credentials.api_key:
                headers["Authorization"] = credentials.api_key
            if credentials.partner_id:
                headers["X-Partner-ID"] = credentials.partner_id
        return headers

    def process_request(
        self,
        credentials: Optional[PartnerCredentials],
        uri: str,
        method: str,
        body_data: str = "",
    ) -> Dict[str, Any]:
        """Send ``method`` to ``uri`` and return the interpreted JSON payload.

        Raises:
            TransportError: If the exchange itself fails.
            WalletNameClientError: For any response the interpreter rejects.
        """

        url = f"{self._config.base_url.rstrip('/')}{uri}"
        logger.debug("Registry %s %s", method, url)
        try:
            with self._session.request(
                method,
                url,
                data=body_data.encode("utf-8") if body_data else None,
                headers=self._headers(credentials),
                timeout=self._config.request_timeout,
                stream=True,
            ) as response:
                status_code = response.status_code
                logger.debug("Registry %s %s -> HTTP %s", method, url, status_code)
                # 204 bodies are never read
                if status_code == 204:
                    return {}
                content_type = response.headers.get("Content-Type")
                body = response.content
        except requests.RequestException as exc:
            raise TransportError(f"Registry request {method} {url} failed: {exc}") from exc

        return interpret_response(status_code, content_type, body)
