"""Prometheus metrics for foldeb"""

from prometheus_client import Counter, Histogram

# ============================================================================
# Request Metrics
# ============================================================================

# Total number of fold requests
fold_requests_total = Counter(
    'foldeb_fold_requests_total',
    'Total number of fold requests',
    ['status'],  # success, invalid_language, error
)

fold_duration_seconds = Histogram(
    'foldeb_fold_duration_seconds',
    'Time spent segmenting and classifying a document',
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
    # 0.5ms to 2.5s - a document is processed in a single pass
)


# ============================================================================
# Document Metrics
# ============================================================================

document_lines = Histogram(
    'foldeb_document_lines',
    'Number of lines per processed document',
    buckets=[10, 50, 100, 500, 1000, 5000, 10000, 50000],
)

ranges_found_total = Counter('foldeb_ranges_found_total', 'Total number of error-handling ranges found', ['category'])


# ============================================================================
# HTTP Metrics
# ============================================================================

http_responses_total = Counter(
    'foldeb_http_responses_total', 'Total HTTP responses by status code', ['method', 'endpoint', 'status_code']
)


# ============================================================================
# Helper Functions
# ============================================================================


def record_fold_request(status: str, duration: float, num_lines: int, categories: list[str]):
    """
    Record metrics for a fold request.

    Args:
        status: Request status (success, invalid_language, error)
        duration: Request duration in seconds
        num_lines: Number of lines in the document
        categories: Category of every range found
    """
    fold_requests_total.labels(status=status).inc()
    fold_duration_seconds.observe(duration)
    document_lines.observe(num_lines)
    for category in categories:
        ranges_found_total.labels(category=category).inc()


def record_http_response(method: str, endpoint: str, status_code: int):
    """
    Record HTTP response.

    Args:
        method: HTTP method (GET, POST, etc.)
        endpoint: Endpoint path
        status_code: HTTP status code
    """
    http_responses_total.labels(method=method, endpoint=endpoint, status_code=str(status_code)).inc()
