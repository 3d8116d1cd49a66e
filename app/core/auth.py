from typing import Optional

from fastapi import Header, HTTPException
from loguru import logger


# ------------------------------------------------------------
# Viewer identity
# ------------------------------------------------------------
# There are no sessions: the client sends the id of the logged-in
# user in X-User-Id and the backend trusts it.

def get_viewer_id(
    x_user_id: Optional[str] = Header(default=None),
) -> int | None:
    if x_user_id is None or not x_user_id.strip():
        return None

    try:
        return int(x_user_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="X-User-Id must be an integer")


def require_viewer_id(
    x_user_id: Optional[str] = Header(default=None),
) -> int:
    viewer_id = get_viewer_id(x_user_id)
    if viewer_id is None:
        logger.debug("[auth] request without X-User-Id rejected")
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return viewer_id
