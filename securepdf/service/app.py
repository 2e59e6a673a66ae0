import argparse
import logging
import os
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from starlette.datastructures import UploadFile as StarletteUploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from securepdf.config_loader import configure_logging, load_config
from securepdf.core.handler import UploadError, UploadHandler

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"
INDEX_PAGE = STATIC_DIR / "index.html"
APP_IMPORT_STRING = "securepdf.service.app:app"
API_PREFIX = "/api/"
FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class UploadResponse(BaseModel):
    """Body returned for a stored PDF."""

    message: str
    fileName: str
    downloadUrl: str


class ErrorResponse(BaseModel):
    message: str


def create_app(config_path: Optional[str] = None) -> FastAPI:
    """Create the FastAPI app around a configured UploadHandler."""

    cfg = load_config(config_path)
    logging.getLogger("securepdf").setLevel(getattr(logging, cfg.log_level, logging.INFO))

    handler = UploadHandler(cfg.upload_dir, download_prefix=cfg.download_prefix)
    page = INDEX_PAGE.read_text(encoding="utf-8")
    app = FastAPI(title=cfg.title, version="1.0.0")

    @app.exception_handler(UploadError)
    async def upload_error(request: Request, exc: UploadError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def not_found_to_page(request: Request, exc: StarletteHTTPException):
        # Misses under the upload mount fall through to the page like any unmatched route.
        if exc.status_code == 404 and not request.url.path.startswith(API_PREFIX):
            return HTMLResponse(page)
        return await http_exception_handler(request, exc)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post(
        "/api/upload",
        response_model=UploadResponse,
        responses={400: {"model": ErrorResponse}},
    )
    async def upload_pdf(pdfFile: Union[UploadFile, str, None] = File(None)):
        upload = pdfFile if isinstance(pdfFile, StarletteUploadFile) else None
        try:
            stored = await handler.save_upload(upload)
        except OSError as e:
            logger.exception("File upload failed")
            raise HTTPException(status_code=500, detail=f"Upload failed: {e}")
        return UploadResponse(**stored.to_response())

    @app.get("/", response_class=HTMLResponse)
    def index():
        return HTMLResponse(page)

    if cfg.serve_uploads:
        app.mount(
            cfg.download_prefix,
            StaticFiles(directory=str(cfg.upload_dir)),
            name="uploads",
        )

    # Registered last so the API routes and the upload mount match first.
    @app.api_route(
        "/{full_path:path}",
        methods=FALLBACK_METHODS,
        response_class=HTMLResponse,
        include_in_schema=False,
    )
    def fallback(full_path: str):
        return HTMLResponse(page)

    # Expose internals for reuse/tests
    app.state.config = cfg
    app.state.handler = handler

    return app


def serve(config_path: str, host: str, port: int, reload: bool = False) -> None:
    """Run the service with uvicorn.

    Reloading needs an import string, so the config path travels through
    ``SECUREPDF_CONFIG_PATH`` to the module-level ``app``.
    """
    import uvicorn

    if reload:
        os.environ["SECUREPDF_CONFIG_PATH"] = config_path
        uvicorn.run(APP_IMPORT_STRING, host=host, port=port, reload=True)
    else:
        uvicorn.run(create_app(config_path), host=host, port=port)


app = create_app()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the PDF upload service")
    parser.add_argument(
        "--config",
        default=os.getenv("SECUREPDF_CONFIG_PATH", "securepdf_config.yaml"),
        help="Path to service configuration file",
    )
    parser.add_argument("--host", default=os.getenv("SERVICE_HOST"))
    parser.add_argument("--port", type=int, default=os.getenv("SERVICE_PORT"))
    parser.add_argument("--reload", action="store_true", default=bool(os.getenv("SERVICE_RELOAD")))
    args = parser.parse_args()

    cfg = load_config(args.config)
    configure_logging(cfg.log_level)
    serve(args.config, args.host or cfg.host, args.port or cfg.port, reload=args.reload)
