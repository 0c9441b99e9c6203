from __future__ import annotations

from fastapi import Header, HTTPException

USER_ID_HEADER = "X-User-Id"


async def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
) -> str:
    """Return the caller's user id as forwarded by the auth gateway."""
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing user identity.")
    return x_user_id.strip()
