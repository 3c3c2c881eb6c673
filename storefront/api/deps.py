"""Shared FastAPI dependencies and service wiring."""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials

from storefront.core.security import bearer_scheme, verify_token
from storefront.db import session as db_session
from storefront.db.base import Base
from storefront.schemas.auth import AdminUser
from storefront.services.auth_service import AuthGate, build_auth_gate
from storefront.services.data_service import DataService
from storefront.services.order_sync import OrderSheetDispatcher
from storefront.storage.document_store import get_document_store
from storefront.storage.local_cache import LocalCacheStore

logger = logging.getLogger(__name__)


def build_data_service() -> DataService:
    """Create the facade over the configured local cache and remote store."""
    Base.metadata.create_all(bind=db_session.engine)
    local = LocalCacheStore(db_session.SessionLocal)
    return DataService(local, get_document_store(), dispatcher=OrderSheetDispatcher())


def get_data_service(request: Request) -> DataService:
    service: DataService | None = getattr(request.app.state, "data_service", None)
    if service is None:
        service = build_data_service()
        request.app.state.data_service = service
    return service


def get_auth_gate(request: Request) -> AuthGate:
    gate: AuthGate | None = getattr(request.app.state, "auth_gate", None)
    if gate is None:
        gate = build_auth_gate()
        request.app.state.auth_gate = gate
    return gate


def get_current_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_gate: AuthGate = Depends(get_auth_gate),
) -> AdminUser:
    """Resolve the admin from a bearer token or the session token."""
    if credentials is not None:
        payload = verify_token(credentials.credentials)
        email = payload.get("sub")
        if not email:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid authentication token")
        return AdminUser(email=email, uid=str(payload.get("uid", "")), is_anonymous=False)

    user = auth_gate.current_user(request.session)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user
