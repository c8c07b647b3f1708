"""HTTP API package."""

from fastapi import APIRouter

from psiproxy.api.routes import fallback, psi

router = APIRouter()
router.include_router(psi.router, tags=["psi"])
# Must stay last: it matches every path.
router.include_router(fallback.router, tags=["fallback"])
