"""Web routes: client assets and the entry-page fallback for client-side routing."""
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from ecotrack.core.config import Settings
from ecotrack.routers.auth import get_app_settings

router = APIRouter(tags=["web"])

ENTRY_PAGE = "index.html"


def _resolve_asset(static_dir: Path, full_path: str) -> Path | None:
    """Map a URL path to a file under static_dir; None if absent or outside it."""
    if not full_path:
        return None
    candidate = (static_dir / full_path).resolve()
    if not candidate.is_relative_to(static_dir) or not candidate.is_file():
        return None
    return candidate


@router.get("/{full_path:path}", include_in_schema=False)
def spa_fallback(
    full_path: str,
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    static_dir = Path(settings.static_dir).resolve()
    asset = _resolve_asset(static_dir, full_path)
    if asset is not None:
        return FileResponse(asset)

    entry = static_dir / ENTRY_PAGE
    if not entry.is_file():
        raise HTTPException(status_code=404, detail="Not found")
    return FileResponse(entry)
