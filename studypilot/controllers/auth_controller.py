# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: Authentication — mock teacher sign-in."""
from fastapi import APIRouter, Depends, HTTPException

from studypilot.core.dependencies import get_auth_service, require_owner
from studypilot.core.errors import AuthenticationError
from studypilot.models.domain import TeacherProfile
from studypilot.schemas.planner import LoginRequest, LoginResponse
from studypilot.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    try:
        user = auth.login(payload.email, payload.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return LoginResponse(user=user)


@router.post("/logout")
def logout(auth: AuthService = Depends(get_auth_service)):
    auth.logout()
    return {"status": "signed_out"}


@router.get("/me", response_model=TeacherProfile)
def me(user: TeacherProfile = Depends(require_owner)):
    return user
