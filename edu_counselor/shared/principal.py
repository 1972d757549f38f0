import uuid

from fastapi import Request


def current_user_id(request: Request) -> uuid.UUID | None:
    # set by api-gateway middleware (/auth/verify)
    user = getattr(request.state, "user", None)
    if not user or "sub" not in user:
        return None
    try:
        return uuid.UUID(str(user["sub"]))
    except ValueError:
        return None
