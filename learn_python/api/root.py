from __future__ import annotations

from fastapi import APIRouter, Depends

from learn_python.models.envelope import ApiResponse, success
from learn_python.models.schemas import Documentation, Endpoint, Links, WelcomeData
from learn_python.state import AppState, get_app_state

router = APIRouter(tags=["info"])

ENDPOINTS: tuple[Endpoint, ...] = (
    Endpoint(path="/", method="GET", description="API welcome and documentation"),
    Endpoint(path="/ping", method="GET", description="Simple ping-pong response"),
    Endpoint(path="/healthz", method="GET", description="Health check endpoint"),
    Endpoint(path="/info", method="GET", description="Application and system information"),
    Endpoint(path="/version", method="GET", description="Application version information"),
    Endpoint(path="/echo", method="POST", description="Echo back the request body"),
    Endpoint(path="/metrics", method="GET", description="Prometheus metrics endpoint"),
    Endpoint(path="/openapi.json", method="GET", description="OpenAPI specification"),
    Endpoint(path="/docs", method="GET", description="Interactive API documentation"),
)


@router.get("/", response_model=ApiResponse[WelcomeData])
async def index(state: AppState = Depends(get_app_state)) -> ApiResponse[WelcomeData]:
    info = state.app_info
    repository = state.settings.repository_url.rstrip("/")
    welcome = WelcomeData(
        message=f"Welcome to {info.name} API",
        description=info.description,
        application=info,
        documentation=Documentation(swagger="/docs", openapi="/openapi.json"),
        links=Links(repository=repository, issues=f"{repository}/issues"),
        endpoints=list(ENDPOINTS),
    )
    return success(welcome)
