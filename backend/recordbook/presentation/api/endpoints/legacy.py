"""Pre-namespacing location URLs, kept as redirects for older clients."""

from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import RedirectResponse

router = APIRouter(tags=["Legacy"], include_in_schema=False)


@router.get("/states")
async def legacy_states() -> RedirectResponse:
    return RedirectResponse(url="/api/location/states", status_code=302)


@router.get("/districts/{state}")
async def legacy_districts(state: str) -> RedirectResponse:
    return RedirectResponse(url=f"/api/location/districts/{quote(state)}", status_code=302)
