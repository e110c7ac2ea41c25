from __future__ import annotations

import platform

from fastapi import APIRouter, Depends

from learn_python.models.envelope import ApiResponse, success
from learn_python.models.schemas import DetailedSystemInfo, EnvironmentInfo, InfoData
from learn_python.services.system_info import probe_system
from learn_python.state import AppState, get_app_state

router = APIRouter(tags=["info"])


@router.get("/info", response_model=ApiResponse[InfoData])
async def info(state: AppState = Depends(get_app_state)) -> ApiResponse[InfoData]:
    snapshot = await probe_system(state.settings.system_probe_timeout)
    settings = state.settings
    data = InfoData(
        application=state.app_info,
        system=DetailedSystemInfo(
            **snapshot.system.model_dump(),
            uptime=state.uptime_seconds(),
            memory=snapshot.memory,
        ),
        environment=EnvironmentInfo(
            python_version=platform.python_version(),
            implementation=platform.python_implementation(),
            host=settings.host,
            port=settings.port,
        ),
    )
    return success(data)


@router.get("/version", response_model=ApiResponse[str])
async def version(state: AppState = Depends(get_app_state)) -> ApiResponse[str]:
    return success(state.app_info.version)
