"""WCF Gateway - REST API over a local WeChat automation session.

Wraps a single backend capability object behind a lock and exposes its
operations as HTTP endpoints.
"""

__version__ = "39.5.1"

__all__ = ["__version__"]
