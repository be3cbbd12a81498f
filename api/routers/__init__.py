"""API routers for gateway endpoints.

Routers are imported lazily within the app factory (api.main.create_app).

Individual routers can be imported directly from their modules:
    from api.routers.attachments import router as attachments_router
"""

__all__ = [
    "attachments",
    "chatrooms",
    "database",
    "messaging",
    "registry",
    "wechat",
]
