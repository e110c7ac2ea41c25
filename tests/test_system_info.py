import time

import psutil

from learn_python.services import system_info
from learn_python.services.system_info import collect_snapshot, probe_system


def test_collect_snapshot_reports_bytes() -> None:
    snapshot = collect_snapshot()
    assert snapshot.degraded is False
    assert snapshot.memory.total > 0
    assert snapshot.memory.used == snapshot.memory.total - snapshot.memory.available
    assert snapshot.system.hostname


async def test_probe_falls_back_when_provider_stalls(monkeypatch) -> None:
    def stalled():
        time.sleep(1.0)
        return collect_snapshot()

    monkeypatch.setattr(system_info, "collect_snapshot", stalled)

    started = time.perf_counter()
    snapshot = await probe_system(timeout=0.05)
    elapsed = time.perf_counter() - started

    assert elapsed < 0.9
    assert snapshot.degraded is True
    assert snapshot.memory.total == 0
    assert snapshot.memory.percent == 0.0
    assert snapshot.system.os


async def test_probe_falls_back_when_provider_fails(monkeypatch) -> None:
    def broken():
        raise psutil.AccessDenied()

    monkeypatch.setattr(system_info, "collect_snapshot", broken)

    snapshot = await probe_system(timeout=1.0)
    assert snapshot.degraded is True
    assert snapshot.memory.used == 0


async def test_healthz_stays_healthy_when_probe_degrades(api_client, monkeypatch) -> None:
    def broken():
        raise OSError("no /proc")

    monkeypatch.setattr(system_info, "collect_snapshot", broken)

    resp = await api_client.get("/healthz")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "healthy"
    assert data["degraded"] is True
    assert data["memory"] == {"total": 0, "available": 0, "used": 0, "percent": 0.0}
