"""Authentication helpers and route dependencies."""

from fastapi import Depends, Header, HTTPException, Request, status


def require_internal_token(
    request: Request,
    x_internal_token: str | None = Header(default=None, alias="X-Internal-Token"),
) -> None:
    """
    Ensure that administrative endpoints are protected by an internal token.

    The token is a shared secret taken from the application settings; when it
    is not configured the administrative routes are unavailable.
    """

    settings = request.app.state.settings
    expected_token = settings.internal_token
    if not expected_token:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin token is not configured.",
        )

    if x_internal_token != expected_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid administrative token.",
        )


InternalAuthDependency = Depends(require_internal_token)
