from typing import Optional

from fastapi import APIRouter, Body, Depends

from tenant_service.core.deps import get_auth_service, get_current_user
from tenant_service.models.tenant_user import TenantUser
from tenant_service.schemas import LoginRequest, LoginResult, RefreshRequest, TenantUserOut
from tenant_service.services.auth_service import AuthService


router = APIRouter()


def _pick_token(refresh_token: Optional[str], body: Optional[RefreshRequest]) -> str:
    # Query parameter wins over the JSON body
    if refresh_token:
        return refresh_token
    return body.refresh_token if body else ""


@router.post("/login", response_model=LoginResult)
def login(data: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    return auth.login(data.tenant_id, data.email, data.password)


@router.post("/refresh", response_model=LoginResult)
def refresh(
    refresh_token: Optional[str] = None,
    body: Optional[RefreshRequest] = Body(None),
    auth: AuthService = Depends(get_auth_service),
):
    return auth.refresh_token(_pick_token(refresh_token, body))


@router.post("/logout")
def logout(
    refresh_token: Optional[str] = None,
    body: Optional[RefreshRequest] = Body(None),
    auth: AuthService = Depends(get_auth_service),
):
    auth.logout(_pick_token(refresh_token, body))
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=TenantUserOut)
def me(user: TenantUser = Depends(get_current_user)):
    return user


@router.get("/health")
def health():
    return "Auth service is healthy"
