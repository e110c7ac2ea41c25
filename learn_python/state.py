from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone

from fastapi import Request

from learn_python.config import Settings
from learn_python.models.schemas import AppInfo


@dataclass(frozen=True)
class AppState:
    """Boot snapshot shared read-only by every handler."""

    settings: Settings
    app_info: AppInfo
    started_at: datetime
    _started_monotonic: float = field(default_factory=time.monotonic, repr=False)

    @classmethod
    def boot(cls, settings: Settings) -> AppState:
        started_at = datetime.now(timezone.utc)
        info = AppInfo(
            name=settings.app_name,
            version=settings.app_version,
            description=settings.app_description,
            environment=settings.environment,
            started_at=started_at.isoformat(),
            build_date=settings.build_date,
            commit=settings.commit,
        )
        return cls(settings=settings, app_info=info, started_at=started_at)

    def uptime_seconds(self) -> float:
        # Monotonic: uptime never decreases within a process.
        return max(0.0, time.monotonic() - self._started_monotonic)


def get_app_state(request: Request) -> AppState:
    return request.app.state.app_state
