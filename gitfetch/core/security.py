from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.security import HTTPBearer


bearer_scheme = HTTPBearer(auto_error=False)


def resolve_github_token(
    credentials: HTTPAuthorizationCredentials | None, fallback: str | None
) -> str | None:
    """Prefer a caller-supplied Bearer token over the configured one.

    Raises:
        HTTPException: If an Authorization header is present but malformed or empty.
    """

    if credentials is None:
        return fallback

    if credentials.scheme.lower() != "bearer" or not credentials.credentials.strip():
        raise HTTPException(
            status_code=401,
            detail="Authorization must be a non-empty Bearer token",
        )

    return credentials.credentials.strip()
