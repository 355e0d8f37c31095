import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from api_scheduler.log_store import LogStore
from api_scheduler.models import JobConfig, StartRequest, StopRequest
from api_scheduler.registry import Registry

logger = logging.getLogger("Api")


def create_app(registry: Registry, log_store: LogStore) -> FastAPI:
    """Build the control plane around an existing registry and log store."""
    api = FastAPI(title="API Scheduler")
    api.state.registry = registry
    api.state.log_store = log_store

    @api.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected {request.url.path} body: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request body.", "detail": jsonable_encoder(exc.errors())},
        )

    @api.post("/start")
    def start(body: StartRequest):
        config = JobConfig(**body.model_dump(exclude={"id"}))
        started = registry.start(body.id, config)
        return {"message": "Scheduler started.", "started": started}

    @api.post("/stop")
    def stop(body: StopRequest):
        stopped = registry.stop(body.id)
        return {"message": "Scheduler stopped.", "stopped": stopped}

    @api.get("/logs")
    def logs():
        return [entry.model_dump() for entry in log_store.entries()]

    @api.api_route("/fake-server", methods=["GET", "POST"])
    async def fake_server(request: Request):
        body = await request.body()
        return Response(content=body, media_type="application/json")

    return api
