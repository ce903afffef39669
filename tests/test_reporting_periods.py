"""Tests for reporting period endpoints."""

from datetime import date, timedelta

import pytest

pytestmark = pytest.mark.asyncio

NEXT_MONTH = (date.today() + timedelta(days=30)).isoformat()


class TestReportingPeriods:
    async def test_create_and_list(self, async_client, auth_headers):
        response = await async_client.post(
            "/api/reporting-periods",
            json={"end_date": NEXT_MONTH, "end_sum": 1500},
            headers=auth_headers,
        )
        assert response.status_code == 201
        period = response.json()
        assert period["end_date"] == NEXT_MONTH
        assert period["end_sum"] == 1500

        response = await async_client.get("/api/reporting-periods", headers=auth_headers)
        assert [p["id"] for p in response.json()] == [period["id"]]

    async def test_end_date_in_past_rejected(self, async_client, auth_headers):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        response = await async_client.post(
            "/api/reporting-periods",
            json={"end_date": yesterday, "end_sum": 10},
            headers=auth_headers,
        )
        assert response.status_code == 422

    async def test_negative_end_sum_rejected(self, async_client, auth_headers):
        response = await async_client.post(
            "/api/reporting-periods",
            json={"end_date": NEXT_MONTH, "end_sum": -1},
            headers=auth_headers,
        )
        assert response.status_code == 422

    async def test_update_and_delete(self, async_client, auth_headers):
        response = await async_client.post(
            "/api/reporting-periods",
            json={"end_date": NEXT_MONTH, "end_sum": 100},
            headers=auth_headers,
        )
        period_id = response.json()["id"]

        response = await async_client.put(
            f"/api/reporting-periods/{period_id}",
            json={"end_date": NEXT_MONTH, "end_sum": 250},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["end_sum"] == 250

        response = await async_client.delete(
            f"/api/reporting-periods/{period_id}", headers=auth_headers
        )
        assert response.status_code == 204

        response = await async_client.get(
            f"/api/reporting-periods/{period_id}", headers=auth_headers
        )
        assert response.status_code == 404

    async def test_requires_auth(self, async_client, db_engine):
        response = await async_client.get("/api/reporting-periods")
        assert response.status_code == 401
