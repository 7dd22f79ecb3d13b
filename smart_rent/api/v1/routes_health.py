# File: smart_rent/api/v1/routes_health.py

from fastapi import APIRouter

router = APIRouter()


@router.get("/health", summary="Liveness check")
def health():
    return {"ok": True}
