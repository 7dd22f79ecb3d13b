from fastapi import APIRouter

from smart_rent.api.v1.routes_auth import router as auth_router
from smart_rent.api.v1.routes_health import router as health_router
from smart_rent.api.v1.routes_listings import router as listings_router
from smart_rent.api.v1.routes_users import router as users_router


api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(listings_router, prefix="/listings", tags=["listings"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
