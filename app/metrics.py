from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from flask import Response, request, g
import time
from functools import wraps

# API Metrics
api_request_duration_seconds = Histogram(
    "opsboard_api_request_duration_seconds", "API request duration", ["endpoint", "method"]
)

api_requests_total = Counter("opsboard_api_requests_total", "Total API requests", ["endpoint", "method", "status_code"])

# Board Metrics
board_mutations_total = Counter("opsboard_mutations_total", "Board mutations", ["entity", "action"])

board_active_items = Gauge("opsboard_active_items", "Active items on the board", ["collection"])

audit_failures_total = Counter("opsboard_audit_failures_total", "Activity log writes that failed")

snapshot_duration_seconds = Histogram("opsboard_snapshot_duration_seconds", "Board snapshot assembly duration")

# Realtime Metrics
board_broadcasts_total = Counter("opsboard_broadcasts_total", "Refresh signals sent to the board room", ["reason"])

socket_connections = Gauge("opsboard_socket_connections", "Open realtime connections")

socket_board_members = Gauge("opsboard_socket_board_members", "Connections joined to the board room")


def init_metrics(app):
    @app.route("/metrics")
    def metrics():
        return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration = time.time() - g.get("start_time", time.time())
        api_request_duration_seconds.labels(endpoint=request.endpoint or "unknown", method=request.method).observe(
            duration
        )
        api_requests_total.labels(
            endpoint=request.endpoint or "unknown", method=request.method, status_code=response.status_code
        ).inc()
        return response

    app.logger.info("Prometheus metrics initialized at /metrics")


def update_board_metrics(stats):
    board_active_items.labels(collection="out").set(stats["outCount"])
    board_active_items.labels(collection="low").set(stats["lowCount"])
    board_active_items.labels(collection="maintenance").set(stats["maintCount"])
    board_active_items.labels(collection="notes").set(stats["notesCount"])


def track_snapshot(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        with snapshot_duration_seconds.time():
            return func(*args, **kwargs)

    return wrapper
