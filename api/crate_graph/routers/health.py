"""Health report and liveness/readiness probes."""

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from crate_graph.services import health_service

router = APIRouter()

HEALTH_MEDIA_TYPE = "application/health+json"


@router.get("")
async def health(request: Request) -> JSONResponse:
    """Return the health report with an uptime check."""
    report = health_service.report(request.app.state.application_start)
    return JSONResponse(content=report.to_json(), media_type=HEALTH_MEDIA_TYPE)


@router.get("/liveness")
async def liveness() -> Response:
    return Response(status_code=200)


@router.get("/liveliness", include_in_schema=False)
async def liveliness() -> Response:
    return Response(status_code=200)


@router.get("/readiness")
async def readiness() -> Response:
    return Response(status_code=200)
