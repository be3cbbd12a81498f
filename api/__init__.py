"""FastAPI layer of the WeChat gateway.

Provides REST endpoints over one automation backend session.

Usage:
    from api import create_app

    app = create_app(backend)
"""

from .main import create_app

__all__ = ["create_app"]
