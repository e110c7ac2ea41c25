from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from learn_python.models.envelope import ApiResponse, success
from learn_python.models.schemas import HealthData
from learn_python.services.system_info import probe_system
from learn_python.state import AppState, get_app_state

router = APIRouter(tags=["health"])


@router.get("/ping", response_class=PlainTextResponse)
async def ping() -> PlainTextResponse:
    return PlainTextResponse("pong")


@router.get("/healthz", response_model=ApiResponse[HealthData])
async def healthz(state: AppState = Depends(get_app_state)) -> ApiResponse[HealthData]:
    """Liveness report with uptime (seconds) and a memory snapshot (bytes).

    No dependency checks are made: the status is always "healthy" while the
    process can answer.
    """

    snapshot = await probe_system(state.settings.system_probe_timeout)
    health = HealthData(
        status="healthy",
        uptime=state.uptime_seconds(),
        memory=snapshot.memory,
        system=snapshot.system,
        degraded=snapshot.degraded,
    )
    return success(health)
