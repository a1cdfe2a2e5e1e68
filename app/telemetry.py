from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.flask import FlaskInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.instrumentation.requests import RequestsInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from models import db

TRACER_NAME = "ficago.payments"


def _exporter(app):
    kind = (app.config.get("OTEL_EXPORTER") or "otlp").lower()
    if kind == "console":
        return ConsoleSpanExporter()
    if kind == "otlp":
        return OTLPSpanExporter(endpoint=app.config.get("OTEL_EXPORTER_OTLP_ENDPOINT"))
    return None


def init_tracing(app):
    """Initialize OpenTelemetry tracing for the Flask app.

    The tracer provider is process wide, so it is installed by the first
    app only. Gateway HTTP calls go through ``requests`` and are traced
    with the same provider. ``OTEL_EXPORTER`` selects ``otlp``,
    ``console`` or ``none``.
    """
    if not isinstance(trace.get_tracer_provider(), TracerProvider):
        resource = Resource.create({"service.name": app.config.get("OTEL_SERVICE_NAME", "ficago-backend")})
        provider = TracerProvider(resource=resource)
        exporter = _exporter(app)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        set_global_textmap(TraceContextTextMapPropagator())

    FlaskInstrumentor().instrument_app(app, excluded_urls="health,metrics")
    requests_instrumentor = RequestsInstrumentor()
    if not requests_instrumentor.is_instrumented_by_opentelemetry:
        requests_instrumentor.instrument()
    with app.app_context():
        SQLAlchemyInstrumentor().instrument(engine=db.engine)


@contextmanager
def payment_span(gateway, operation, **attributes):
    """Span around one call to a payment gateway."""
    tracer = trace.get_tracer(TRACER_NAME)
    name = f"{gateway.lower()}.{operation}"
    attrs = {"payment.gateway": gateway, "payment.operation": operation}
    attrs.update({f"payment.{k}": v for k, v in attributes.items() if v is not None})
    with tracer.start_as_current_span(name, attributes=attrs) as span:
        yield span
