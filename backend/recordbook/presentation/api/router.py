"""Top-level API router — aggregates every /api endpoint router."""

from fastapi import APIRouter

from recordbook.presentation.api.endpoints.legacy import router as legacy_router
from recordbook.presentation.api.endpoints.location import router as location_router
from recordbook.presentation.api.endpoints.records import router as records_router

router = APIRouter(prefix="/api")
router.include_router(records_router)
router.include_router(location_router)
router.include_router(legacy_router)
