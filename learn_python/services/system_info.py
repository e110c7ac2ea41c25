from __future__ import annotations

import asyncio
import os
import platform
import socket
from dataclasses import dataclass

import psutil
import structlog

from learn_python.models.schemas import MemoryInfo, SystemInfo

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SystemSnapshot:
    memory: MemoryInfo
    system: SystemInfo
    degraded: bool = False


def _hostname() -> str:
    try:
        return socket.gethostname() or "unknown"
    except OSError:
        return "unknown"


def _static_system_info(cpu_count: int | None = None) -> SystemInfo:
    return SystemInfo(
        os=platform.system().lower() or "unknown",
        arch=platform.machine() or "unknown",
        cpu_count=cpu_count if cpu_count is not None else (os.cpu_count() or 0),
        hostname=_hostname(),
    )


def collect_snapshot() -> SystemSnapshot:
    """Blocking psutil query; call through `probe_system` from request handlers."""

    vm = psutil.virtual_memory()
    used = max(0, int(vm.total) - int(vm.available))
    percent = (used / vm.total) * 100.0 if vm.total > 0 else 0.0
    memory = MemoryInfo(
        total=int(vm.total),
        available=int(vm.available),
        used=used,
        percent=round(percent, 2),
    )
    return SystemSnapshot(
        memory=memory,
        system=_static_system_info(psutil.cpu_count(logical=True)),
    )


def degraded_snapshot() -> SystemSnapshot:
    return SystemSnapshot(memory=MemoryInfo(), system=_static_system_info(), degraded=True)


async def probe_system(timeout: float) -> SystemSnapshot:
    """Collect a snapshot in a worker thread, falling back to zeroed memory figures.

    A stalled provider never holds the request longer than `timeout` seconds; the
    worker thread is left to finish on its own.
    """

    try:
        return await asyncio.wait_for(asyncio.to_thread(collect_snapshot), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("system_probe_timeout", timeout_s=timeout)
    except (psutil.Error, OSError) as exc:
        logger.warning("system_probe_failed", error=str(exc))
    return degraded_snapshot()
