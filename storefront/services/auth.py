"""Authentication service: password handling, session cookies, and accounts."""

import logging
import re
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.config import get_settings
from storefront.errors import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from storefront.models.enums import Role
from storefront.models.user import User
from storefront.schemas.auth import AuthStatusResponse, SessionUser, UserLogin, UserRegister
from storefront.schemas.user import UserUpdate
from storefront.services.sessions import SessionIdentity, SessionStore

logger = logging.getLogger(__name__)
settings = get_settings()

MIN_PASSWORD_LENGTH = 6
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
INVALID_CREDENTIALS = "Invalid credentials"

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_session_cookie(token: str) -> str:
    """Sign a session token for use as the cookie value."""
    expire = datetime.now(UTC) + timedelta(hours=settings.session_ttl_hours)
    to_encode = {"sid": token, "exp": expire}
    return jwt.encode(to_encode, settings.session_secret, algorithm=settings.session_algorithm)


def decode_session_cookie(value: str) -> str | None:
    """Return the session token inside a signed cookie, or None if it is invalid."""
    try:
        payload = jwt.decode(
            value, settings.session_secret, algorithms=[settings.session_algorithm]
        )
    except JWTError:
        return None
    token = payload.get("sid")
    return token if isinstance(token, str) else None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def identity_for(user: User) -> SessionIdentity:
    """Session identity snapshot of a user."""
    return SessionIdentity(user_id=user.id, email=user.email, name=user.name, role=user.role)


class AuthService:
    """Registration, login and profile management on top of a session store."""

    def __init__(self, db: Session, sessions: SessionStore):
        self.db = db
        self.sessions = sessions

    def register(self, data: UserRegister, current_token: str | None = None) -> tuple[User, str]:
        """Create an account and log it in.

        Returns the new user and its session token.
        """
        name = (data.name or "").strip()
        if not name or not data.email or not data.password:
            raise ValidationError("Name, email and password are required")
        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        email = normalize_email(data.email)
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Invalid email format")

        if self.get_user_by_email(email, active_only=False):
            raise ConflictError("User with this email already exists")

        user = User(
            name=name,
            email=email,
            phone=data.phone or "",
            password_hash=get_password_hash(data.password),
            role=Role.USER.value,
            active=True,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError("User with this email already exists") from None
        self.db.refresh(user)

        logger.info(f"Registered user {user.id} ({user.email})")
        return user, self._start_session(user, current_token)

    def login(self, data: UserLogin, current_token: str | None = None) -> tuple[User, str]:
        """Check credentials and start a session."""
        if not data.email or not data.password:
            raise ValidationError("Email and password are required")

        user = self.authenticate_user(data.email, data.password)
        if user is None:
            logger.info(f"Failed login for {normalize_email(data.email)}")
            raise AuthError(INVALID_CREDENTIALS)

        logger.info(f"User {user.id} logged in")
        return user, self._start_session(user, current_token)

    def logout(self, token: str | None) -> None:
        """End the caller's session. Calling it without a live session is fine."""
        self.sessions.destroy(token)

    def status(self, identity: SessionIdentity | None) -> AuthStatusResponse:
        """Describe the current session without touching the database."""
        if identity is None:
            return AuthStatusResponse(authenticated=False)
        return AuthStatusResponse(
            authenticated=True,
            user=SessionUser(
                id=identity.user_id, name=identity.name, email=identity.email, role=identity.role
            ),
        )

    def get_profile(self, user_id: int, caller: SessionIdentity) -> User:
        """Fetch a profile the caller is allowed to see."""
        if not caller.is_admin and caller.user_id != user_id:
            raise ForbiddenError("You do not have permission to access this resource")
        return self._get_active_user(user_id)

    def update_profile(
        self,
        user_id: int,
        patch: UserUpdate,
        caller: SessionIdentity,
        caller_token: str | None = None,
    ) -> User:
        """Apply a profile patch as the owner or an admin."""
        is_admin = caller.is_admin
        is_own_profile = caller.user_id == user_id
        if not is_admin and not is_own_profile:
            raise ForbiddenError("You can only update your own profile")

        user = self._get_active_user(user_id)

        new_hash = None
        if patch.new_password:
            if len(patch.new_password) < MIN_PASSWORD_LENGTH:
                raise ValidationError(
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
                )
            if not is_admin:
                if not patch.current_password:
                    raise ValidationError("Current password is required to set a new password")
                if not verify_password(patch.current_password, user.password_hash):
                    raise AuthError("Current password is incorrect")
            new_hash = get_password_hash(patch.new_password)

        name = patch.name.strip() if patch.name else None
        if name:
            user.name = name
        if "phone" in patch.model_fields_set:
            user.phone = patch.phone or ""
        if new_hash is not None:
            user.password_hash = new_hash
        user.updated_at = datetime.now(UTC)

        self.db.commit()
        self.db.refresh(user)

        if name and is_own_profile and caller_token:
            self.sessions.update(caller_token, caller.with_name(user.name))

        logger.info(f"User {user.id} updated by {caller.user_id}")
        return user

    def authenticate_user(self, email: str, password: str) -> User | None:
        """Authenticate an active user by email and password."""
        user = self.get_user_by_email(normalize_email(email))
        if not user:
            # Spend the same time as a real check so unknown emails are not distinguishable
            pwd_context.dummy_verify()
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def get_user_by_email(self, email: str, active_only: bool = True) -> User | None:
        """Get a user by (already normalized) email."""
        query = self.db.query(User).filter(User.email == email)
        if active_only:
            query = query.filter(User.active.is_(True))
        return query.first()

    def _get_active_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id, User.active.is_(True)).first()
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _start_session(self, user: User, current_token: str | None) -> str:
        # Rotate rather than reuse whatever session the client already had
        if current_token:
            self.sessions.destroy(current_token)
        return self.sessions.create(identity_for(user))
