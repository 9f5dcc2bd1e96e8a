"""Integration tests for the execution log API."""

from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from dipstik.core.modules.vehicle_history.module import SAMPLE_RECORDS, SAMPLE_VIN


@pytest.mark.integration
@pytest.mark.usefixtures("clean_execution_logs")
class TestExecutionLogEndpoints:
    @pytest.mark.asyncio
    async def test_calls_are_logged(self, client: AsyncClient):
        await client.post(
            "/api/v1/modules/vehicle-history/execute",
            json={
                "vin": SAMPLE_VIN,
                "records": SAMPLE_RECORDS,
                "serviceId": "events",
                "serviceConfig": {"events": {"methodId": "supplied-records"}},
            },
            headers={"X-Trace-Id": "trace-exec"},
        )
        await client.post(
            "/api/v1/modules/vehicle-history/compare",
            json={
                "serviceId": "events",
                "methodIds": ["supplied-records", "vehicle-databases-api"],
                "vin": SAMPLE_VIN,
                "records": SAMPLE_RECORDS,
            },
        )
        await client.post("/api/v1/modules/comparator/test")

        response = await client.get("/api/v1/executions")
        assert response.status_code == status.HTTP_200_OK
        payload = response.json()
        assert payload["total"] == 3
        assert payload["page"] == 1
        assert {item["kind"] for item in payload["items"]} == {"execute", "compare", "test"}

        execute_entry = next(item for item in payload["items"] if item["kind"] == "execute")
        assert execute_entry["success"] is True
        assert execute_entry["service_id"] == "events"
        assert execute_entry["trace_id"] == "trace-exec"
        assert execute_entry["result"]["source"] == "supplied-records"

        compare_entry = next(item for item in payload["items"] if item["kind"] == "compare")
        assert compare_entry["success"] is False
        assert compare_entry["method_ids"] == ["supplied-records", "vehicle-databases-api"]

    @pytest.mark.asyncio
    async def test_filters_and_pagination(self, client: AsyncClient):
        for _ in range(3):
            await client.post("/api/v1/modules/comparator/test")
        await client.post("/api/v1/modules/vehicle-history/execute", json={"vin": "bad"})

        by_module = (await client.get("/api/v1/executions", params={"module_id": "comparator"})).json()
        assert by_module["total"] == 3

        by_kind = (await client.get("/api/v1/executions", params={"kind": "execute"})).json()
        assert by_kind["total"] == 1
        assert by_kind["items"][0]["success"] is False
        assert by_kind["items"][0]["error_message"].startswith("Validation failed")

        page = (await client.get("/api/v1/executions", params={"page": 2, "size": 3})).json()
        assert len(page["items"]) == 1
        assert page["total"] == 4

    @pytest.mark.asyncio
    async def test_invalid_kind_is_rejected(self, client: AsyncClient):
        response = await client.get("/api/v1/executions", params={"kind": "delete"})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_get_single_entry(self, client: AsyncClient):
        await client.post("/api/v1/modules/comparator/test")
        listing = (await client.get("/api/v1/executions")).json()
        entry_id = listing["items"][0]["id"]

        response = await client.get(f"/api/v1/executions/{entry_id}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["module_id"] == "comparator"

    @pytest.mark.asyncio
    async def test_unknown_entry_is_404(self, client: AsyncClient):
        response = await client.get(f"/api/v1/executions/{uuid4()}")
        assert response.status_code == status.HTTP_404_NOT_FOUND
