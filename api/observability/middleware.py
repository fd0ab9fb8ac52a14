"""
Observability Middleware

Flask middleware for adding OpenTelemetry instrumentation and structured logging
to all HTTP requests.
"""

import time
import logging
from flask import Flask, request, g
from opentelemetry import trace
from opentelemetry.instrumentation.flask import FlaskInstrumentor

logger = logging.getLogger(__name__)


def add_observability_middleware(app: Flask):
    """Add OpenTelemetry instrumentation and request logging to Flask app."""

    FlaskInstrumentor().instrument_app(app)

    @app.before_request
    def before_request():
        """Start timing and capture the trace ID for correlation."""
        g.start_time = time.time()
        g.trace_id = None

        span = trace.get_current_span()
        if span.is_recording():
            g.trace_id = format(span.get_span_context().trace_id, "032x")
            span.set_attributes({
                "http.target": request.path,
                "http.query_present": bool(request.query_string)
            })

    @app.after_request
    def after_request(response):
        """Log request completion and expose the trace ID and data version."""
        duration_ms = round((time.time() - g.get('start_time', time.time())) * 1000, 2)
        snapshot = _current_snapshot(app)

        span = trace.get_current_span()
        if span.is_recording():
            span.set_attribute("http.duration_ms", duration_ms)

        # Search terms are citizen addresses; only the path is logged
        logger.info(
            "HTTP request completed",
            extra={
                "method": request.method,
                "path": request.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "trace_id": g.get('trace_id'),
                "data_loaded": snapshot is not None
            }
        )

        if snapshot is not None:
            response.headers['X-Data-Loaded-At'] = snapshot.loaded_at.isoformat()

        if g.get('trace_id'):
            response.headers['X-Trace-Id'] = g.trace_id

        return response


def _current_snapshot(app: Flask):
    data_store = getattr(app, 'data_store', None)
    return data_store.peek() if data_store is not None else None
