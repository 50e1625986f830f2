from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter

from ...schemas.response import HealthResponse, InfoResponse

SERVICE_NAME = "devops-practice-app"
APP_VERSION = "1.0.2"
APP_ENVIRONMENT = "production"
GREETING = "Hello from FastAPI on EKS!"
DEPLOYED_BY = "GitHub Actions"

router = APIRouter(tags=["demo"])


def _now() -> datetime:
    return datetime.now()


@router.get(
    "/hello",
    response_model=InfoResponse,
    response_model_exclude_none=True,
    summary="Greeting with build info and server time",
)
async def hello() -> InfoResponse:
    """
    Deployment smoke-test endpoint.

    Everything except `timestamp` is fixed at build time, so a rollout can be
    verified by checking `version` and `deployedBy`.
    """
    return InfoResponse(
        message=GREETING,
        timestamp=_now().isoformat(timespec="microseconds"),
        version=APP_VERSION,
        environment=APP_ENVIRONMENT,
        deployed_by=DEPLOYED_BY,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness/readiness probe",
)
async def health() -> HealthResponse:
    return HealthResponse(status="UP", service=SERVICE_NAME)
