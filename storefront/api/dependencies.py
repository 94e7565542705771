"""FastAPI dependencies for sessions, access control and services."""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from storefront.config import get_settings
from storefront.database import get_db
from storefront.errors import AuthError, ForbiddenError, InternalError, ValidationError
from storefront.services.auth import AuthService, create_session_cookie, decode_session_cookie
from storefront.services.catalog import ProductService
from storefront.services.inquiry import InquiryService
from storefront.services.sessions import SessionIdentity, SessionStore

logger = logging.getLogger(__name__)
settings = get_settings()

MAX_ID = 2**31 - 1


@dataclass(frozen=True)
class CurrentSession:
    """A live session attached to the request."""

    token: str
    identity: SessionIdentity


def get_session_store(request: Request) -> SessionStore:
    """The session store created at startup."""
    return request.app.state.session_store


def get_session_token(request: Request) -> str | None:
    """Session token from the signed cookie, if present and untampered."""
    cookie = request.cookies.get(settings.session_cookie_name)
    if not cookie:
        return None
    return decode_session_cookie(cookie)


def get_current_session(
    token: Annotated[str | None, Depends(get_session_token)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> CurrentSession | None:
    """Resolve the request's session, or None for anonymous callers."""
    identity = store.resolve(token)
    if token is None or identity is None:
        return None
    return CurrentSession(token=token, identity=identity)


def get_session_if_available(
    token: Annotated[str | None, Depends(get_session_token)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> CurrentSession | None:
    """Like ``get_current_session``, but a store outage reads as anonymous."""
    try:
        return get_current_session(token, store)
    except InternalError:
        logger.warning("Session store unavailable; treating caller as anonymous")
        return None


def require_user(
    session: Annotated[CurrentSession | None, Depends(get_current_session)],
) -> CurrentSession:
    """Guard: any logged-in user."""
    if session is None:
        raise AuthError("Please login to access this resource", error="Unauthorized")
    return session


def require_admin(
    session: Annotated[CurrentSession | None, Depends(get_current_session)],
) -> CurrentSession:
    """Guard: logged-in admin."""
    if session is None or not session.identity.is_admin:
        raise ForbiddenError("Admin privileges required")
    return session


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_cookie(token),
        max_age=settings.session_ttl_hours * 60 * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
    )


def parse_id(value: str, resource: str) -> int:
    """Parse a path identifier, rejecting anything that is not a positive integer.

    Only ASCII digits are accepted and the result must fit an ``Integer`` column.
    """
    if not (value.isascii() and value.isdigit()):
        raise ValidationError(f"Invalid {resource} ID format")
    parsed = int(value)
    if parsed == 0 or parsed > MAX_ID:
        raise ValidationError(f"Invalid {resource} ID format")
    return parsed


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, store)


def get_product_service(
    db: Annotated[Session, Depends(get_db)],
) -> ProductService:
    """Get product service with dependencies."""
    return ProductService(db)


def get_inquiry_service(
    db: Annotated[Session, Depends(get_db)],
) -> InquiryService:
    """Get inquiry service with dependencies."""
    return InquiryService(db)
