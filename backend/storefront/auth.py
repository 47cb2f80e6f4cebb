# backend/storefront/auth.py
"""
Admin route guard.

There is no login yet: every caller is let through as an admin. Admin
routers depend on require_admin so a real check only has to land here.
"""

from fastapi import Request


def require_admin(request: Request) -> dict:
    identity = {
        "role": "admin",
        "client": request.client.host if request.client else None,
    }
    request.state.identity = identity
    return identity
