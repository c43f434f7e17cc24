from recordstore.web.routers.albums import router as albums_router
from recordstore.web.routers.auth import router as auth_router
from recordstore.web.routers.purchases import router as purchases_router

__all__ = [
    "albums_router",
    "auth_router",
    "purchases_router",
]
