"""BackendClient — one JSON POST per tool call against an HTTP backend.

The backend's JSON reply is classified once, here, into a
:data:`BackendResult` so tools never re-inspect raw dicts:

* :class:`RowsResult`: the reply carries a ``rows`` array (SQL backend).
* :class:`LinkResult`: the reply carries a ``url`` (gist backend).
* :class:`OpaqueResult`: anything else, kept verbatim.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Literal

import httpx
from pydantic import BaseModel

from toolbridge.protocol.errors import BackendError
from toolbridge.utils.telemetry import (
    ATTR_BACKEND_URL,
    ATTR_HTTP_STATUS,
    SPAN_BACKEND_POST,
    get_tracer,
)

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

DEFAULT_TIMEOUT = 30.0


class _Reply(BaseModel):
    raw: Any = None
    """The decoded JSON reply, unchanged."""


class RowsResult(_Reply):
    """A backend reply with a row sequence."""

    kind: Literal["rows"] = "rows"
    rows: list[Any]


class LinkResult(_Reply):
    """A backend reply that points at a created resource."""

    kind: Literal["link"] = "link"
    url: str
    id: str | None = None


class OpaqueResult(_Reply):
    """Any other JSON reply."""

    kind: Literal["opaque"] = "opaque"


BackendResult = RowsResult | LinkResult | OpaqueResult


def classify(payload: Any) -> BackendResult:
    """Resolve a decoded JSON reply into its :data:`BackendResult` variant."""
    if isinstance(payload, dict):
        rows = payload.get("rows")
        if isinstance(rows, list):
            return RowsResult(rows=rows, raw=payload)
        url = payload.get("url")
        if isinstance(url, str) and url:
            raw_id = payload.get("id")
            return LinkResult(
                url=url,
                id=str(raw_id) if raw_id is not None else None,
                raw=payload,
            )
    return OpaqueResult(raw=payload)


def pretty(value: Any) -> str:
    """Render a JSON value with two-space indentation."""
    return json.dumps(value, indent=2, default=str)


class BackendClient:
    """POSTs JSON bodies to ``base_url + path`` with a bounded wait.

    Every failure mode (connection refused, timeout, non-2xx status,
    malformed JSON) surfaces as :class:`BackendError`.  There is no retry.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def post(self, path: str, body: dict[str, Any]) -> BackendResult:
        """POST *body* as JSON and classify the decoded reply."""
        url = f"{self._base_url}/{path.lstrip('/')}"
        logger.debug("POST %s", url)
        with _tracer.start_as_current_span(SPAN_BACKEND_POST) as span:
            span.set_attribute(ATTR_BACKEND_URL, url)
            try:
                async with httpx.AsyncClient(
                    timeout=self._timeout, transport=self._transport
                ) as client:
                    response = await client.post(url, json=body)
            except httpx.TimeoutException as exc:
                raise BackendError(f"Request to {url} timed out after {self._timeout}s") from exc
            except httpx.HTTPError as exc:
                raise BackendError(f"Request to {url} failed: {exc}") from exc

            span.set_attribute(ATTR_HTTP_STATUS, response.status_code)
            if not response.is_success:
                raise BackendError(
                    _error_detail(response),
                    status_code=response.status_code,
                    reason=response.reason_phrase,
                )

            try:
                payload = response.json()
            except ValueError as exc:
                raise BackendError(f"Invalid JSON from {url}: {exc}") from exc

        return classify(payload)


def _error_detail(response: httpx.Response) -> str:
    """Pull the backend's ``error`` string out of a failed reply, if it has one."""
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(payload, dict) and "error" in payload:
        return str(payload["error"])
    return response.text.strip()
