import pytest

from dipstik.core.repositories.execution_log_repository import ExecutionLogRepository
from tests.factories import ExecutionLogFactory


@pytest.mark.asyncio
async def test_execution_log_repository_operations(db_session, clean_execution_logs):
    repo = ExecutionLogRepository(db_session)

    ok = ExecutionLogFactory.build(kind="execute", module_id="vehicle-history", success=True)
    failed = ExecutionLogFactory.build(
        kind="compare",
        module_id="vehicle-history",
        service_id="events",
        method_ids=["supplied-records", "vehicle-databases-api"],
        success=False,
        error_message="vehicle-databases-api: API key is required",
    )
    other = ExecutionLogFactory.build(kind="test", module_id="comparator", success=True)

    for entry in (ok, failed, other):
        await repo.create(entry)
    await db_session.commit()

    fetched = await repo.get_by_id(failed.id)
    assert fetched is not None
    assert fetched.method_ids == ["supplied-records", "vehicle-databases-api"]
    assert fetched.created_at is not None

    assert await repo.count() == 3
    assert await repo.count_filtered(module_id="vehicle-history") == 2
    assert await repo.count_filtered(kind="test") == 1
    assert await repo.count_filtered(module_id="vehicle-history", kind="compare") == 1

    history = await repo.search(module_id="vehicle-history")
    assert {e.id for e in history} == {ok.id, failed.id}

    page = await repo.search(limit=2, offset=0)
    assert len(page) == 2

    failures = await repo.get_failed()
    assert [e.id for e in failures] == [failed.id]

    await repo.delete(other)
    await db_session.commit()
    assert await repo.get_by_id(other.id) is None


@pytest.mark.asyncio
async def test_execution_log_json_columns_round_trip(db_session, clean_execution_logs):
    repo = ExecutionLogRepository(db_session)
    entry = ExecutionLogFactory.build(
        params={"serviceConfig": {"events": {"methodId": "supplied-records"}}},
        result={"moduleId": "vehicle-history", "services": [], "totalServices": 0, "successful": 0},
    )
    await repo.create(entry)
    await db_session.commit()

    db_session.expunge_all()
    fetched = await repo.get_by_id(entry.id)
    assert fetched.params["serviceConfig"]["events"]["methodId"] == "supplied-records"
    assert fetched.result["moduleId"] == "vehicle-history"
