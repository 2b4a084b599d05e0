from fastapi import APIRouter


# Customer routes
from app.api.endpoints.customer import (
    auth,
    media,
    user_profile,
    search,
    streak,
    views,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="", tags=["Auth"])
api_router.include_router(media.router, prefix="", tags=["Media"])
api_router.include_router(user_profile.router, prefix="", tags=["Profile"])
api_router.include_router(search.router, prefix="", tags=["Search"])
api_router.include_router(views.router, prefix="", tags=["Views"])
api_router.include_router(streak.router, prefix="", tags=["Streak"])
