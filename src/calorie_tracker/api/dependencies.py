"""Shared FastAPI dependencies."""

from uuid import UUID

from fastapi import Header, HTTPException, status


async def require_user_id(x_user_id: str | None = Header(default=None)) -> UUID:
    """Return the authenticated user id forwarded by the auth layer."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        return UUID(x_user_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED) from exc
