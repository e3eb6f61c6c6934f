# FILE: squirrito/routes/ui.py
"""
Serves the single-page UI for every non-API GET
"""
from functools import lru_cache
from pathlib import Path
from fastapi import APIRouter
from fastapi.responses import HTMLResponse, PlainTextResponse

router = APIRouter()

INDEX_PATH = Path(__file__).resolve().parent.parent / "static" / "index.html"


@lru_cache(maxsize=1)
def load_index() -> str:
    return INDEX_PATH.read_text(encoding="utf-8")


@router.get("/{full_path:path}", include_in_schema=False)
async def ui(full_path: str):
    if full_path == "api" or full_path.startswith("api/"):
        return PlainTextResponse("Not found", status_code=404)
    return HTMLResponse(load_index())
