from __future__ import annotations

from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .. import __version__


def create_app(directory: Path) -> FastAPI:
    app = FastAPI(title="siteware", version=__version__, docs_url=None, redoc_url=None, openapi_url=None)
    app.mount("/", StaticFiles(directory=str(directory), html=True), name="site")
    return app


def serve_directory(directory: Path, host: str, port: int) -> None:
    uvicorn.run(create_app(directory), host=host, port=port, reload=False, workers=1)


__all__ = ["create_app", "serve_directory"]
