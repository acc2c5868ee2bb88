"""
Middleware package for Larder.
"""

from larder.middleware.queued_cookies import QueuedCookiesMiddleware

__all__ = [
    "QueuedCookiesMiddleware",
]
