from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AppInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    description: str
    environment: str
    started_at: str
    build_date: str
    commit: str


class Endpoint(BaseModel):
    path: str
    method: str
    description: str


class Documentation(BaseModel):
    swagger: str | None = None
    openapi: str | None = None


class Links(BaseModel):
    repository: str
    issues: str


class WelcomeData(BaseModel):
    message: str
    description: str
    application: AppInfo
    documentation: Documentation
    links: Links
    endpoints: list[Endpoint]


class MemoryInfo(BaseModel):
    """Memory figures in bytes; percent is 0-100."""

    total: int = 0
    available: int = 0
    used: int = 0
    percent: float = 0.0


class SystemInfo(BaseModel):
    os: str
    arch: str
    cpu_count: int
    hostname: str


class HealthData(BaseModel):
    status: str
    uptime: float
    memory: MemoryInfo
    system: SystemInfo
    degraded: bool = False


class DetailedSystemInfo(SystemInfo):
    uptime: float
    memory: MemoryInfo


class EnvironmentInfo(BaseModel):
    python_version: str
    implementation: str
    host: str
    port: int


class InfoData(BaseModel):
    application: AppInfo
    system: DetailedSystemInfo
    environment: EnvironmentInfo
