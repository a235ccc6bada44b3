"""API v1 router aggregator."""

from fastapi import APIRouter

from youniverse.api.v1.endpoints import auth, profiles, connections, chat, feed, notifications, realtime

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router)
api_router.include_router(profiles.router)
api_router.include_router(connections.router)
api_router.include_router(chat.router)
api_router.include_router(feed.router)
api_router.include_router(notifications.router)
api_router.include_router(realtime.router)

__all__ = ["api_router"]
