from collections.abc import Callable

from fastapi import FastAPI
from prometheus_client import REGISTRY, Counter, Gauge
from prometheus_fastapi_instrumentator import Instrumentator

OUT_OF_SPACE_TOTAL = Counter(
    "webstorage_out_of_space",
    "Quota requests denied because the web storage budget is exhausted",
)
GLOBAL_LIMIT_BYTES = Gauge("webstorage_global_limit_bytes", "Disk budget shared by origin databases and the application cache")
APP_CACHE_MAX_SIZE_BYTES = Gauge("webstorage_app_cache_max_size_bytes", "Current maximum size of the application cache")


def out_of_space_count() -> int:
    """Number of out-of-space notifications fired by this process."""
    return int(REGISTRY.get_sample_value("webstorage_out_of_space_total") or 0)


def track_storage(global_limit: int, app_cache_max_size: Callable[[], int]) -> None:
    """Publish the budget of the active size manager."""
    GLOBAL_LIMIT_BYTES.set(global_limit)
    APP_CACHE_MAX_SIZE_BYTES.set_function(app_cache_max_size)


def setup_metrics(app: FastAPI) -> None:
    """Instrument HTTP requests and expose all metrics on /metrics."""
    Instrumentator().instrument(app).expose(app, include_in_schema=False)
