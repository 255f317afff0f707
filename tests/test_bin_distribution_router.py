from __future__ import annotations

from fastapi.testclient import TestClient

from lb_api.api.deps import get_plan_bin_distribution_use_case
from lb_api.application.use_cases.plan_bin_distribution import PlanBinDistributionUseCase
from lb_api.main import app


client = TestClient(app)


def test_router_returns_distribution_as_strings():
    response = client.post("/v1/bin-distribution", json={"strategy": "uniform", "num_bins": 10})

    assert response.status_code == 200
    payload = response.json()
    assert payload["strategy"] == "uniform"
    assert payload["precision"] == "1000000000000000000"
    assert payload["delta_ids"] == [-5, -4, -3, -2, -1, 0, 1, 2, 3, 4]
    assert payload["distribution_x"][5] == "111111111111111112"
    assert payload["distribution_y"][5] == "90909090909090910"
    assert sum(int(value) for value in payload["distribution_x"]) == 10**18
    assert sum(int(value) for value in payload["distribution_y"]) == 10**18


def test_router_accepts_precision_as_string():
    response = client.post(
        "/v1/bin-distribution",
        json={"strategy": "curve", "num_bins": 3, "precision": "10000"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["strategy"] == "bell_curve"
    assert sum(int(value) for value in payload["distribution_x"]) == 10000


def test_router_maps_invalid_bin_count_to_400():
    response = client.post("/v1/bin-distribution", json={"strategy": "uniform", "num_bins": 0})

    assert response.status_code == 400
    assert "num_bins" in response.json()["detail"]


def test_router_rejects_non_integer_bin_counts():
    for value in (True, "10", 10.5):
        response = client.post("/v1/bin-distribution", json={"strategy": "uniform", "num_bins": value})

        assert response.status_code == 422, value


def test_router_maps_unknown_strategy_to_400():
    response = client.post("/v1/bin-distribution", json={"strategy": "zigzag", "num_bins": 10})

    assert response.status_code == 400


def test_router_uses_overridden_use_case():
    calls = []

    class RecordingUseCase(PlanBinDistributionUseCase):
        def execute(self, command):
            calls.append(command)
            return super().execute(command)

    app.dependency_overrides[get_plan_bin_distribution_use_case] = lambda: RecordingUseCase()
    try:
        response = client.post("/v1/bin-distribution", json={"strategy": "u_shape", "num_bins": 5})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert len(calls) == 1
    assert calls[0].num_bins == 5


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
