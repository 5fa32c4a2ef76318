"""
Prometheus-based metrics for production monitoring.
Provides /metrics endpoint for scraping.
"""
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import APIRouter, Response


# Counters
image_generation_requests_total = Counter(
    "image_generation_requests_total",
    "Total image generation calls by outcome (success or error code)",
    ["model", "outcome"],
)

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests handled",
    ["path", "status_code"],
)

# Histograms
image_generation_duration_seconds = Histogram(
    "image_generation_duration_seconds",
    "Image generation call duration, including provider round trip",
    ["model"],
    buckets=[1, 5, 10, 30, 60, 120, 180],
)


# Metrics endpoint router
router = APIRouter()


@router.get("/metrics")
def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint for scraping."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


def record_generation(model: str, outcome: str, duration: float) -> None:
    image_generation_requests_total.labels(model=model, outcome=outcome).inc()
    image_generation_duration_seconds.labels(model=model).observe(duration)
