"""Prometheus metrics for observability."""

import time
from collections import defaultdict
from dataclasses import dataclass, field

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


def _format_labels(names: tuple[str, ...], values: tuple, extra: str = "") -> str:
    pairs = [f'{n}="{v}"' for n, v in zip(names, values)]
    if extra:
        pairs.append(extra)
    return "{" + ",".join(pairs) + "}" if pairs else ""


@dataclass
class Counter:
    """Monotonic counter."""

    name: str
    help: str
    labels: tuple[str, ...] = ()
    _values: dict[tuple, float] = field(default_factory=lambda: defaultdict(float))

    def _key(self, labels: dict[str, str]) -> tuple:
        return tuple(labels.get(name, "") for name in self.labels)

    def inc(self, amount: float = 1.0, **labels: str) -> None:
        self._values[self._key(labels)] += amount

    def get(self, **labels: str) -> float:
        return self._values[self._key(labels)]

    def render(self) -> list[str]:
        lines = [f"# HELP {self.name} {self.help}", f"# TYPE {self.name} counter"]
        for key, value in self._values.items():
            lines.append(f"{self.name}{_format_labels(self.labels, key)} {value}")
        return lines


@dataclass
class Gauge(Counter):
    """Value that can go up and down."""

    def dec(self, amount: float = 1.0, **labels: str) -> None:
        self._values[self._key(labels)] -= amount

    def render(self) -> list[str]:
        lines = super().render()
        lines[1] = f"# TYPE {self.name} gauge"
        return lines


@dataclass
class Histogram:
    """Histogram with fixed buckets."""

    name: str
    help: str
    labels: tuple[str, ...] = ()
    buckets: tuple[float, ...] = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)
    _counts: dict[tuple, dict[float, int]] = field(
        default_factory=lambda: defaultdict(lambda: defaultdict(int))
    )
    _sums: dict[tuple, float] = field(default_factory=lambda: defaultdict(float))
    _totals: dict[tuple, int] = field(default_factory=lambda: defaultdict(int))

    def observe(self, value: float, **labels: str) -> None:
        key = tuple(labels.get(name, "") for name in self.labels)
        self._sums[key] += value
        self._totals[key] += 1
        for bucket in self.buckets:
            if value <= bucket:
                self._counts[key][bucket] += 1

    def render(self) -> list[str]:
        lines = [f"# HELP {self.name} {self.help}", f"# TYPE {self.name} histogram"]
        for key, total in self._totals.items():
            # Buckets are counted independently in observe(), so they are cumulative already
            for bucket in self.buckets:
                le = _format_labels(self.labels, key, f'le="{bucket}"')
                lines.append(f"{self.name}_bucket{le} {self._counts[key].get(bucket, 0)}")
            inf = _format_labels(self.labels, key, 'le="+Inf"')
            lines.append(f"{self.name}_bucket{inf} {total}")
            lines.append(f"{self.name}_sum{_format_labels(self.labels, key)} {self._sums[key]}")
            lines.append(f"{self.name}_count{_format_labels(self.labels, key)} {total}")
        return lines


class MetricsRegistry:
    """Registry for all metrics."""

    def __init__(self) -> None:
        # HTTP metrics
        self.http_requests_total = Counter(
            name="http_requests_total",
            help="Total number of HTTP requests",
            labels=("method", "path", "status"),
        )
        self.http_request_duration_seconds = Histogram(
            name="http_request_duration_seconds",
            help="HTTP request duration in seconds",
            labels=("method", "path"),
        )
        self.http_requests_in_progress = Gauge(
            name="http_requests_in_progress",
            help="Number of HTTP requests in progress",
            labels=("method",),
        )

        # Domain events
        self.auth_events_total = Counter(
            name="auth_events_total",
            help="Signups and login attempts by outcome",
            labels=("event", "outcome"),
        )
        self.videos_uploaded_total = Counter(
            name="videos_uploaded_total",
            help="Total number of videos uploaded",
            labels=("category",),
        )
        self.video_views_total = Counter(
            name="video_views_total",
            help="Total number of counted video views",
        )
        self.video_reactions_total = Counter(
            name="video_reactions_total",
            help="Like/dislike requests by kind and action",
            labels=("kind", "action"),
        )
        self.comments_posted_total = Counter(
            name="comments_posted_total",
            help="Total number of comments posted",
        )

    def format_prometheus(self) -> str:
        """Format all metrics in Prometheus exposition format."""
        lines: list[str] = []
        for metric in vars(self).values():
            lines.extend(metric.render())
        return "\n".join(lines) + "\n"


metrics = MetricsRegistry()


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP metrics."""

    async def dispatch(self, request: Request, call_next) -> Response:
        method = request.method
        path = self._normalize_path(request.url.path)

        metrics.http_requests_in_progress.inc(method=method)
        start_time = time.monotonic()
        status = "500"
        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        finally:
            duration = time.monotonic() - start_time
            metrics.http_requests_total.inc(method=method, path=path, status=status)
            metrics.http_request_duration_seconds.observe(duration, method=method, path=path)
            metrics.http_requests_in_progress.dec(method=method)

    @staticmethod
    def _normalize_path(path: str) -> str:
        """Replace numeric ids with a placeholder to keep label cardinality low."""
        return "/".join(":id" if part.isdigit() else part for part in path.split("/"))
