from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import httpx
from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from .board import PriceBoard
from .config import Settings, load_settings
from .fetch import initialize
from .log import configure_logging
from .models import BoardResponse, CategoriesResponse, HealthResponse
from .normalize import decode_payload
from .query import category_choices
from .rules import PRICE_SUFFIX

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level, settings.json_logs)
        async with httpx.AsyncClient(timeout=settings.fetch_timeout, transport=transport) as client:
            app.state.client = client
            await initialize(app.state.board, settings, client)
            yield

    app = FastAPI(
        title="priceboard",
        description="Searchable price board fed by a spreadsheet CSV export",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.board = PriceBoard()

    def get_board(request: Request) -> PriceBoard:
        return request.app.state.board

    @app.get("/health", response_model=HealthResponse)
    def health(board: PriceBoard = Depends(get_board)):
        return HealthResponse(ok=True, ready=board.ready, records=len(board.records))

    @app.get("/api/prices", response_model=BoardResponse)
    def prices(search: str = "", category: str = "", board: PriceBoard = Depends(get_board)):
        return board.view(search, category)

    @app.get("/api/categories", response_model=CategoriesResponse)
    def categories(board: PriceBoard = Depends(get_board)):
        return CategoriesResponse(categories=category_choices(board.categories))

    @app.post("/api/reload", response_model=BoardResponse)
    async def reload(request: Request, board: PriceBoard = Depends(get_board)):
        await initialize(board, settings, request.app.state.client)
        return board.view()

    @app.post("/api/upload", response_model=BoardResponse)
    async def upload(file: UploadFile = File(...), board: PriceBoard = Depends(get_board)):
        if not (file.filename or "").lower().endswith(".csv"):
            raise HTTPException(status_code=422, detail="Only CSV files are supported")

        raw = await file.read()
        async with board.loading():
            if not board.load_text(decode_payload(raw)):
                raise HTTPException(status_code=422, detail=board.error.message)
        return board.view()

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request, search: str = "", category: str = "", board: PriceBoard = Depends(get_board)):
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "title": settings.title,
                "view": board.view(search, category),
                "price_suffix": PRICE_SUFFIX,
            },
            headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
        )

    return app


app = create_app()
