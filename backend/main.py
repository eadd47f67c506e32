import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, MAX_BODY_BYTES, VERSION
from routers import contracts, frontend
from services.errors import GatewayError
from services.gateway import ContractGateway
from services.llm import TextProvider, build_provider

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _validation_message(exc: RequestValidationError) -> str:
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        if err.get("type") == "json_invalid":
            return "Request body is not valid JSON."
        if loc:
            return f"Invalid value for {'.'.join(loc)}: {err.get('msg')}"
    return "Invalid request body."


def create_app(settings: Optional[Settings] = None, provider: Optional[TextProvider] = None) -> FastAPI:
    """Build the application around one Settings instance and one provider."""
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    provider = provider or build_provider(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_startup(settings)
        yield

    app = FastAPI(
        title="Contract Assistant",
        description="Contract analysis, rewriting and drafting",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.gateway = ContractGateway(settings, provider)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > MAX_BODY_BYTES:
            return JSONResponse(status_code=413, content={"error": "Request body too large (max 10MB)."})
        return await call_next(request)

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        if exc.status_code < 500:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.info("%s %s rejected: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    app.include_router(contracts.router)
    # Catch-all front-end route, must stay last
    app.include_router(frontend.router)

    return app


def log_startup(settings: Settings):
    logger.info("Contract assistant running on http://%s:%s", settings.host, settings.port)
    logger.info("Provider: %s (model %s)", settings.provider, settings.model)
    if settings.configured:
        logger.info("Auth: configured (%s)", settings.auth_kind)
    else:
        logger.warning("Auth: MISSING, set %s", settings.api_key_var)


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)
