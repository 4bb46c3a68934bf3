"""Request-scoped dependencies shared by the routers."""

from __future__ import annotations

from fastapi import Header, Request

from services.container import AppServices

USER_HEADER = "X-User-Id"


def get_services(request: Request) -> AppServices:
    return request.app.state.services


def get_user_id(
    request: Request,
    x_user_id: str | None = Header(default=None, alias=USER_HEADER),
) -> str:
    """Caller identity from the trusted upstream header; blank means anonymous."""
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return get_services(request).settings.anonymous_user_id
