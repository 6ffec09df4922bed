"""Trace spans for the proxy and its backend calls.

Three spans are opened per ``tools/call``: ``toolbridge.dispatch`` around the
JSON-RPC request, ``toolbridge.tool.call`` around the tool, and
``toolbridge.backend.post`` around the HTTP round trip.  Until
:func:`configure_telemetry` installs an SDK provider, the OpenTelemetry API
hands out no-op tracers, so instrumented code never checks whether tracing
is on.

Exporting needs the ``otel`` extra: ``pip install toolbridge[otel]``.
"""

from __future__ import annotations

import json
import sys
from typing import Any

from opentelemetry import trace

ATTR_METHOD = "toolbridge.method"
ATTR_REQUEST_ID = "toolbridge.request.id"
ATTR_TOOL_NAME = "toolbridge.tool.name"
ATTR_BACKEND_URL = "toolbridge.backend.url"
ATTR_HTTP_STATUS = "toolbridge.http.status"

SPAN_DISPATCH = "toolbridge.dispatch"
SPAN_TOOL_CALL = "toolbridge.tool.call"
SPAN_BACKEND_POST = "toolbridge.backend.post"

_INSTRUMENTATION_NAME = "toolbridge"
_INSTALL_HINT = "Install it with: pip install toolbridge[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def request_attributes(method: str, request_id: Any) -> dict[str, str]:
    """Span attributes identifying one JSON-RPC request.

    A null id is left out.  String ids are recorded as-is; any other JSON
    id (number, boolean, object) is recorded in its JSON form, so ``true``
    reads ``"true"`` rather than Python's ``"True"``.
    """
    attributes = {ATTR_METHOD: method}
    if request_id is not None:
        attributes[ATTR_REQUEST_ID] = (
            request_id if isinstance(request_id, str) else json.dumps(request_id)
        )
    return attributes


def configure_telemetry(
    *,
    service_name: str = "toolbridge",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider for this process.

    Console spans go to stderr; stdout carries protocol frames.  When
    *otlp_endpoint* is set, spans are also batched to it over OTLP/gRPC.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, for OTLP,
            ``opentelemetry-exporter-otlp``) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        raise ImportError(
            f"opentelemetry-sdk is required for configure_telemetry(). {_INSTALL_HINT}"
        ) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if export_to_console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        provider.add_span_processor(BatchSpanProcessor(_otlp_exporter(otlp_endpoint)))

    trace.set_tracer_provider(provider)


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        raise ImportError(
            f"opentelemetry-exporter-otlp is required for OTLP export. {_INSTALL_HINT}"
        ) from exc
    return OTLPSpanExporter(endpoint=endpoint)
