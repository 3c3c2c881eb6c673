"""Admin authentication endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from storefront.api.deps import get_auth_gate, get_current_admin
from storefront.core.security import create_access_token
from storefront.schemas.auth import AdminUser, LoginRequest, TokenResponse
from storefront.services.auth_service import AuthenticationError, AuthGate

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    request: Request,
    auth_gate: AuthGate = Depends(get_auth_gate),
) -> TokenResponse:
    try:
        user = auth_gate.login(request.session, payload.email, payload.password)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return TokenResponse(access_token=create_access_token(data={"sub": user.email, "uid": user.uid}))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(request: Request, auth_gate: AuthGate = Depends(get_auth_gate)) -> Response:
    auth_gate.logout(request.session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=AdminUser)
def me(current_admin: AdminUser = Depends(get_current_admin)) -> AdminUser:
    return current_admin
