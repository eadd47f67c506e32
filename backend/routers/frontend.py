from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

from config import VERSION
from schemas.contracts import HealthResponse

router = APIRouter(tags=["frontend"])


@router.get("/api/health", response_model=HealthResponse)
def health(request: Request):
    """Liveness check; also reports which provider is configured"""
    settings = request.app.state.settings
    return HealthResponse(
        status="ok",
        version=VERSION,
        model=request.app.state.gateway.provider.model,
        provider=settings.provider,
        configured=settings.configured,
        auth=settings.auth_kind,
    )


@router.get("/{full_path:path}", include_in_schema=False)
def serve_frontend(full_path: str, request: Request):
    """Serve files from the front-end directory, falling back to index.html"""
    if full_path == "api" or full_path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not found")

    public_dir = Path(request.app.state.settings.public_dir).resolve()
    if full_path:
        candidate = (public_dir / full_path).resolve()
        if candidate.is_file() and candidate.is_relative_to(public_dir):
            return FileResponse(candidate)

    index = public_dir / "index.html"
    if not index.is_file():
        raise HTTPException(status_code=404, detail="Front-end not found")
    return FileResponse(index)
