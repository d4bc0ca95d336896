"""Middlewares HTTP da API."""

from api.middleware.access_control import (
    PUBLIC_PATHS,
    PUBLIC_PREFIXES,
    UNAUTHORIZED_MESSAGE,
    AccessControlMiddleware,
    is_public_path,
    is_static_asset,
)

__all__ = [
    "PUBLIC_PATHS",
    "PUBLIC_PREFIXES",
    "UNAUTHORIZED_MESSAGE",
    "AccessControlMiddleware",
    "is_public_path",
    "is_static_asset",
]
