"""FastAPI application serving project route tables."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..orchestrator import Orchestrator
from ..stores import EndpointCache


class ScanRequest(BaseModel):
    path: str
    refresh: bool = False


class EndpointModel(BaseModel):
    http_method: str
    full_path: str
    file: str
    line: int
    type_name: str
    method_name: Optional[str] = None
    impl_file: Optional[str] = None
    impl_line: Optional[int] = None
    impl_type_name: Optional[str] = None
    client_name: Optional[str] = None
    display: str


class ScanResponse(BaseModel):
    root: str
    count: int
    cached: bool
    endpoints: List[EndpointModel]


class CacheInfoResponse(BaseModel):
    has_cache: bool
    root_dir: Optional[str] = None
    endpoint_count: int
    timestamp: Optional[str] = None
    age_seconds: int


class ClearResponse(BaseModel):
    removed: bool


class HealthResponse(BaseModel):
    status: str


def _shared_orchestrator(orchestrator: Orchestrator) -> Callable[[], Orchestrator]:
    return lambda: orchestrator


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] | None = None,
) -> FastAPI:
    """Create the FastAPI application exposing restmap scans.

    The default orchestrator shares one in-memory cache across requests.
    """
    factory = orchestrator_factory or _shared_orchestrator(Orchestrator(cache=EndpointCache()))
    app = FastAPI(title="restmap", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        return factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/scan", response_model=ScanResponse)
    async def scan_project(
        payload: ScanRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ScanResponse:
        outcome = await asyncio.to_thread(
            orchestrator.run_scan, payload.path, refresh=payload.refresh
        )
        endpoints = [
            EndpointModel(**record.to_dict(), display=record.display())
            for record in outcome.records
        ]
        return ScanResponse(
            root=str(outcome.root),
            count=len(endpoints),
            cached=outcome.cached,
            endpoints=endpoints,
        )

    @app.get("/cache", response_model=CacheInfoResponse)
    async def cache_info(
        path: str,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> CacheInfoResponse:
        info = await asyncio.to_thread(orchestrator.cache_info, path)
        return CacheInfoResponse(**info)

    @app.delete("/cache", response_model=ClearResponse)
    async def clear_cache(
        path: str,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ClearResponse:
        removed = await asyncio.to_thread(orchestrator.clear_cache, path)
        return ClearResponse(removed=removed)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)


__all__ = ["create_app", "run_service"]
