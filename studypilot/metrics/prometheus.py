# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "studypilot_requests_total",
    "Total HTTP requests to the planner service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "studypilot_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "studypilot_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
SCHEDULE_UPDATES = Counter(
    "studypilot_schedule_updates_total",
    "Total period updates applied",
    ["schedule"],
)
SCHEDULE_RESETS = Counter(
    "studypilot_schedule_resets_total",
    "Total schedule resets",
    ["schedule"],
)
STORAGE_WRITE_FAILURES = Counter(
    "studypilot_storage_write_failures_total",
    "Writes that could not be persisted (state kept in memory only)",
    ["key"],
)
STATE_RECOVERIES = Counter(
    "studypilot_state_recoveries_total",
    "Stored values replaced by defaults because they failed validation",
    ["key"],
)
LOGIN_ATTEMPTS = Counter(
    "studypilot_login_attempts_total",
    "Mock sign-in attempts",
    ["outcome"],
)
NOTES_STORED = Gauge(
    "studypilot_notes_stored",
    "Number of notes currently stored",
)
