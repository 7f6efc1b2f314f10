from dataclasses import dataclass

from jose import JWTError, jwt
from starlette.requests import Request

from outreach.core.config import get_settings


ANONYMOUS = "anonymous"


@dataclass
class AuthUser:
    sub: str
    name: str | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.sub == ANONYMOUS


async def get_current_user(request: Request) -> AuthUser:
    """Identify the caller from an optional bearer token.

    Identity is informational only: it resolves the "me" assignee filter and
    nothing is refused when the token is missing or invalid.
    """
    auth_header = request.headers.get("authorization", "")
    token = auth_header.replace("Bearer ", "") if auth_header.startswith("Bearer ") else ""

    if not token:
        return AuthUser(sub=ANONYMOUS)

    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return AuthUser(sub=ANONYMOUS)

    name = payload.get("name")
    return AuthUser(sub=str(payload.get("sub", ANONYMOUS)), name=str(name) if name is not None else None)
