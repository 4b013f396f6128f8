# tests/modules/telemetry/test_service.py
"""
Unit tests for modules.telemetry.service

Coverage:
    log_error()     : user attached when known, DB failure swallowed
    list_errors()   : resolved filter forwarded
    resolve_error() : NotFound, already-resolved untouched
    record_metric() : DB failure swallowed
    performance()   : tracker snapshot
    store_samples() : tracker sink → PerformanceMetric rows
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from aura.infra.telemetry import PerformanceSample
from aura.modules.telemetry import service as telemetry_service
from aura.modules.telemetry.schemas import ErrorLogIn, MetricIn
from aura.modules.telemetry.service import TelemetryService, sample_to_metric, store_samples
from aura.shared.errors import NotFound, PersistenceFailure
from tests.conftest import make_async_db, make_error_log, make_tracker, make_user

pytestmark = pytest.mark.service

service = TelemetryService()


# ── Error logs ────────────────────────────────────────────────────────────────

class TestLogError:
    async def test_stored_with_user(self, mocker):
        create = mocker.patch(
            "aura.modules.telemetry.service.repo.create_error",
            AsyncMock(return_value=make_error_log()),
        )
        payload = ErrorLogIn(message="Boom", severity="warning", url="/dashboard")
        out = await service.log_error(make_async_db(), make_user(id=4), payload)

        assert out == {"success": True, "stored": True}
        _, user_id, data = create.await_args.args
        assert user_id == 4
        assert data["message"] == "Boom"
        assert data["url"] == "/dashboard"
        assert "stack" not in data

    async def test_anonymous(self, mocker):
        create = mocker.patch(
            "aura.modules.telemetry.service.repo.create_error",
            AsyncMock(return_value=make_error_log()),
        )
        await service.log_error(make_async_db(), None, ErrorLogIn(message="Boom"))
        assert create.await_args.args[1] is None

    async def test_db_failure_swallowed(self, mocker):
        mocker.patch(
            "aura.modules.telemetry.service.repo.create_error",
            AsyncMock(side_effect=PersistenceFailure("Failed to store error log")),
        )
        out = await service.log_error(make_async_db(), None, ErrorLogIn(message="Boom"))
        assert out == {"success": True, "stored": False}


class TestErrorAdmin:
    async def test_list_forwards_filter(self, mocker):
        list_errors = mocker.patch(
            "aura.modules.telemetry.service.repo.list_errors",
            AsyncMock(return_value=[make_error_log(id=1), make_error_log(id=2)]),
        )
        out = await service.list_errors(make_async_db(), resolved=False)
        assert out["total"] == 2
        assert list_errors.await_args.kwargs["resolved"] is False

    async def test_resolve_not_found(self, mocker):
        mocker.patch(
            "aura.modules.telemetry.service.repo.get_error",
            AsyncMock(return_value=None),
        )
        with pytest.raises(NotFound):
            await service.resolve_error(make_async_db(), 12)

    async def test_resolve(self, mocker):
        error = make_error_log(id=12)
        mocker.patch(
            "aura.modules.telemetry.service.repo.get_error",
            AsyncMock(return_value=error),
        )
        resolve = mocker.patch(
            "aura.modules.telemetry.service.repo.resolve_error",
            AsyncMock(return_value=make_error_log(id=12, resolved=True)),
        )
        out = await service.resolve_error(make_async_db(), 12)
        assert out["error"].resolved is True
        resolve.assert_awaited_once()

    async def test_resolve_twice_is_noop(self, mocker):
        mocker.patch(
            "aura.modules.telemetry.service.repo.get_error",
            AsyncMock(return_value=make_error_log(resolved=True)),
        )
        resolve = mocker.patch("aura.modules.telemetry.service.repo.resolve_error", AsyncMock())
        out = await service.resolve_error(make_async_db(), 1)
        assert out["success"] is True
        resolve.assert_not_awaited()


# ── Metrics ───────────────────────────────────────────────────────────────────

class TestMetrics:
    async def test_recorded(self, mocker):
        record = mocker.patch(
            "aura.modules.telemetry.service.repo.record_metric",
            AsyncMock(),
        )
        payload = MetricIn(name="page_load", value=812.5, tags={"page": "results"})
        out = await service.record_metric(make_async_db(), payload)
        assert out == {"success": True, "stored": True}
        assert record.await_args.args[1:4] == ("page_load", 812.5, {"page": "results"})

    async def test_db_failure_swallowed(self, mocker):
        mocker.patch(
            "aura.modules.telemetry.service.repo.record_metric",
            AsyncMock(side_effect=PersistenceFailure("Failed to store metric")),
        )
        out = await service.record_metric(make_async_db(), MetricIn(name="x", value=1))
        assert out == {"success": True, "stored": False}

    def test_performance_snapshot(self):
        tracker = make_tracker(threshold_ms=500)
        tracker.record("ai.insights", 900.0)
        out = service.performance(tracker)
        assert out["threshold_ms"] == 500
        assert out["capacity"] == 20
        assert out["samples"][0]["operation"] == "ai.insights"


# ── Tracker sink ──────────────────────────────────────────────────────────────

def test_sample_to_metric():
    row = sample_to_metric(PerformanceSample(
        operation="ai.adaptive_questions", duration_ms=2100.0,
        timestamp=1_700_000_000.0, metadata={"model": "deepseek-chat"},
    ))
    assert row["name"] == "ai.adaptive_questions"
    assert row["value"] == 2100.0
    assert row["tags"] == {"model": "deepseek-chat"}
    assert row["timestamp"].year == 2023


async def test_store_samples_uses_fresh_session(mocker):
    db = make_async_db()
    session_cm = MagicMock()
    session_cm.__aenter__ = AsyncMock(return_value=db)
    session_cm.__aexit__ = AsyncMock(return_value=False)
    mocker.patch.object(telemetry_service, "AsyncSessionLocal", MagicMock(return_value=session_cm))
    record = mocker.patch(
        "aura.modules.telemetry.service.repo.record_metrics",
        AsyncMock(return_value=2),
    )

    await store_samples([
        PerformanceSample("a", 1200.0, 0.0),
        PerformanceSample("b", 1300.0, 0.0),
    ])

    db_arg, rows = record.await_args.args
    assert db_arg is db
    assert [r["name"] for r in rows] == ["a", "b"]
