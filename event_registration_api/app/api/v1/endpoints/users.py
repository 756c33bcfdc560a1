"""
User endpoints for API v1.

Sign-up, login and the current user's profile.  The token returned by
``/login`` is what the event endpoints expect in the ``Authorization``
header.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from event_registration_api.app.core.security import create_access_token, get_current_user
from event_registration_api.app.schemas.user import Token, UserCreate, UserLogin, UserRead
from event_registration_api.app.services.user_service import UserService


router = APIRouter()


def _field_error(field: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": [{"field": field, "message": message}]},
    )


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(user: UserCreate):
    """Sign up a new organizer."""
    try:
        return await UserService.create_user(user)
    except ValueError as e:
        return _field_error("email", str(e))


@router.post("/login", response_model=Token)
async def login_user(credentials: UserLogin):
    """Authenticate with e‑mail and password and return a bearer token."""
    db_user = await UserService.authenticate(credentials.email, credentials.password)
    if not db_user:
        return _field_error("email", "Invalid credentials")
    return Token(access_token=create_access_token({"sub": db_user.email}))


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: dict = Depends(get_current_user)) -> UserRead:
    """Return the authenticated user's profile."""
    user = await UserService.get_user_by_id(current_user["user_id"])
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
