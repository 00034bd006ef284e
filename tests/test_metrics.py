from fastapi.testclient import TestClient

from tests.helpers import GLOBAL_LIMIT_OVERRIDE
from webstorage.size_manager import MIB


def sample_value(text: str, name: str) -> float:
    for line in text.splitlines():
        if line.startswith(name + " "):
            return float(line.split()[1])
    raise AssertionError(f"{name} not found in metrics output")


class TestMetrics:
    def test_metrics_endpoint_exists(self, client: TestClient):
        client.get("/storage")
        resp = client.get("/metrics")
        assert resp.status_code == 200
        assert "http_requests_total" in resp.text
        assert "http_request_duration_seconds" in resp.text

    def test_storage_gauges(self, client: TestClient):
        client.post("/quota/appcache", json={"space_needed": MIB, "total_used_quota": 0})

        text = client.get("/metrics").text

        assert sample_value(text, "webstorage_global_limit_bytes") == GLOBAL_LIMIT_OVERRIDE
        assert sample_value(text, "webstorage_app_cache_max_size_bytes") == GLOBAL_LIMIT_OVERRIDE // 4 + MIB

    def test_out_of_space_counter_matches_status(self, client: TestClient):
        before = sample_value(client.get("/metrics").text, "webstorage_out_of_space_total")

        client.post("/quota/appcache", json={"space_needed": 100 * MIB, "total_used_quota": 0})

        after = sample_value(client.get("/metrics").text, "webstorage_out_of_space_total")
        assert after == before + 1
        assert client.get("/storage").json()["out_of_space_count"] == after
