"""Tests for the Weibull fitting endpoint."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

URL = "/api/v1/wind/weibull"


class TestHealth:
    async def test_health(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    async def test_request_id_header(self, client: AsyncClient):
        resp = await client.get("/health", headers={"X-Request-ID": "abc123"})
        assert resp.headers["X-Request-ID"] == "abc123"

    async def test_request_id_generated(self, client: AsyncClient):
        resp = await client.get("/health")
        assert len(resp.headers["X-Request-ID"]) == 8


class TestWeibullFit:
    async def test_fit(self, client: AsyncClient, weibull_wind):
        resp = await client.post(URL, json={"wind_speeds": weibull_wind.tolist()})
        assert resp.status_code == 200
        data = resp.json()
        assert abs(data["shape_k"] - 2.0) < 0.3
        assert abs(data["scale_c"] - 8.0) < 1.0
        assert data["n_samples"] == len(weibull_wind)
        assert data["iterations"] > 0
        assert data["mean_wind_speed"] == pytest.approx(float(weibull_wind.mean()), abs=1e-5)

    async def test_same_result_twice(self, client: AsyncClient, gusty_wind):
        body = {"wind_speeds": gusty_wind.tolist()}
        first = (await client.post(URL, json=body)).json()
        second = (await client.post(URL, json=body)).json()
        assert first == second

    async def test_legacy_median(self, client: AsyncClient):
        body = {"wind_speeds": [3.0, 9.0, 4.0, 6.5, 5.0], "median_convention": "legacy"}
        resp = await client.post(URL, json=body)
        assert resp.status_code == 200
        assert resp.json()["median_wind_speed"] == 6.5

    async def test_empty_sample(self, client: AsyncClient):
        resp = await client.post(URL, json={"wind_speeds": []})
        assert resp.status_code == 422
        assert resp.json()["detail"]["error"] == "empty_sample"

    async def test_calm_only_sample(self, client: AsyncClient):
        resp = await client.post(URL, json={"wind_speeds": [0.0] * 10})
        assert resp.status_code == 422
        assert resp.json()["detail"]["error"] == "invalid_sample"

    async def test_overflowing_moments(self, client: AsyncClient):
        resp = await client.post(URL, json={"wind_speeds": [1e103, 2e103, 3e103]})
        assert resp.status_code == 422
        assert resp.json()["detail"]["error"] == "invalid_sample"

    async def test_no_sign_change(self, client: AsyncClient):
        resp = await client.post(URL, json={"wind_speeds": [8.0] * 50})
        assert resp.status_code == 422
        assert resp.json()["detail"]["error"] == "no_sign_change"

    async def test_not_converged(self, client: AsyncClient, weibull_wind):
        body = {"wind_speeds": weibull_wind.tolist(), "max_iterations": 2}
        resp = await client.post(URL, json=body)
        assert resp.status_code == 422
        assert resp.json()["detail"]["error"] == "not_converged"

    async def test_bracket_override(self, client: AsyncClient, weibull_wind):
        body = {"wind_speeds": weibull_wind.tolist(), "kmin": 4.0, "kmax": 8.0}
        resp = await client.post(URL, json=body)
        assert resp.status_code == 422
        assert resp.json()["detail"]["error"] == "no_sign_change"

    async def test_half_open_bracket_override(self, client: AsyncClient, weibull_wind):
        body = {"wind_speeds": weibull_wind.tolist(), "kmin": 9.0}
        resp = await client.post(URL, json=body)
        assert resp.status_code == 422
        assert resp.json()["detail"]["error"] == "invalid_bracket"

    async def test_inverted_bracket_rejected_by_schema(self, client: AsyncClient):
        body = {"wind_speeds": [5.0, 6.0], "kmin": 8.0, "kmax": 1.0}
        resp = await client.post(URL, json=body)
        assert resp.status_code == 422

    async def test_legacy_median_out_of_range(self, client: AsyncClient):
        body = {"wind_speeds": [5.0, 6.0], "median_convention": "legacy"}
        resp = await client.post(URL, json=body)
        assert resp.status_code == 422
        assert resp.json()["detail"]["error"] == "invalid_sample"

    async def test_missing_body_field(self, client: AsyncClient):
        resp = await client.post(URL, json={"speeds": [1.0]})
        assert resp.status_code == 422

    async def test_unknown_convention(self, client: AsyncClient):
        body = {"wind_speeds": [5.0, 6.0, 7.0], "median_convention": "midpoint"}
        resp = await client.post(URL, json=body)
        assert resp.status_code == 422
