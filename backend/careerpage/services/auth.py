"""
Admin authentication: password sign-up / sign-in, opaque session tokens,
optional email confirmation.

Security features:
- bcrypt password hashes
- Account lockout after 5 failed sign-ins (30 min cooldown)
- Session tokens expire after SESSION_TTL_DAYS
- One-time confirmation tokens with their own expiry
"""
import enum
import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional

import bcrypt
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from careerpage.config import settings
from careerpage.exceptions import AuthFailure, ConflictError
from careerpage.models.admin_user import AdminUser
from careerpage.models.auth_session import AuthSession
from careerpage.schemas.auth import SignUpRequest
from careerpage.services.companies import add_company
from careerpage.services.email import email_service
from careerpage.services.mapping import utcnow
from careerpage.services.store import READ_ERRORS, commit_write, require_db

logger = logging.getLogger(__name__)

# Security constants
MAX_FAILED_ATTEMPTS = 5
ACCOUNT_LOCK_MINUTES = 30

SESSION_COOKIE = "auth_token"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in storage
        logger.warning("Stored password hash could not be parsed")
        return False


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class SignUpResult:
    user: AdminUser
    session: Optional[AuthSession] = None

    @property
    def confirmation_required(self) -> bool:
        return self.session is None


async def _create_session(db: AsyncSession, user: AdminUser) -> AuthSession:
    session = AuthSession(
        token=secrets.token_urlsafe(32),
        user_id=user.id,
        expires_at=utcnow() + timedelta(days=settings.session_ttl_days),
    )
    session.user = user
    db.add(session)
    await commit_write(db, "start session")
    return session


async def sign_up(db: Optional[AsyncSession], request: SignUpRequest) -> SignUpResult:
    """
    Register an admin account.

    When company_name is given, a company is created and linked to the new
    admin. With email confirmation required no session is started; the
    confirmation link is sent instead.
    """
    db = require_db(db)
    email = normalize_email(request.email)

    existing = await db.execute(select(AdminUser.id).where(AdminUser.email == email))
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("An account with this email already exists")

    company = None
    if request.company_name:
        company = await add_company(db, request.company_name, request.company_slug)

    user = AdminUser(
        email=email,
        full_name=request.full_name,
        company=company,
        password_hash=hash_password(request.password),
        failed_login_attempts=0,
    )
    if settings.require_email_confirmation:
        user.confirmation_token = secrets.token_urlsafe(32)
        user.confirmation_expires_at = utcnow() + timedelta(minutes=settings.confirmation_ttl_minutes)
    else:
        user.email_confirmed_at = utcnow()

    # Company (if any) and account are committed together
    db.add(user)
    await commit_write(db, "create account")
    logger.info(f"Admin account created: {email}")

    if user.confirmation_token:
        link = f"{settings.get_frontend_url()}/admin/auth/confirm?token={user.confirmation_token}"
        await email_service.send_confirmation_email(email, link)
        return SignUpResult(user=user)

    return SignUpResult(user=user, session=await _create_session(db, user))


async def sign_in(db: Optional[AsyncSession], email: str, password: str) -> AuthSession:
    """
    Check credentials and start a session.

    Raises AuthFailure with reason invalid_credentials, account_locked or
    email_not_confirmed.
    """
    db = require_db(db)
    email = normalize_email(email)
    result = await db.execute(select(AdminUser).where(AdminUser.email == email))
    user = result.scalar_one_or_none()

    if user is None:
        logger.warning(f"Sign-in attempt for unknown email: {email}")
        raise AuthFailure("Invalid email or password")

    if user.is_account_locked():
        logger.warning(f"Sign-in attempt on locked account: {email}")
        raise AuthFailure(
            f"Account temporarily locked. Try again after {user.account_locked_until.isoformat()}",
            AuthFailure.ACCOUNT_LOCKED,
        )

    if not verify_password(password, user.password_hash):
        user.failed_login_attempts = (user.failed_login_attempts or 0) + 1
        if user.failed_login_attempts >= MAX_FAILED_ATTEMPTS:
            user.account_locked_until = utcnow() + timedelta(minutes=ACCOUNT_LOCK_MINUTES)
            logger.warning(f"Account locked due to {MAX_FAILED_ATTEMPTS} failed attempts: {email}")
        await commit_write(db, "record failed sign-in")
        raise AuthFailure("Invalid email or password")

    if not user.is_email_confirmed():
        raise AuthFailure(
            "Please confirm your email before signing in",
            AuthFailure.EMAIL_NOT_CONFIRMED,
        )

    user.failed_login_attempts = 0
    user.account_locked_until = None
    user.last_login_at = utcnow()
    session = await _create_session(db, user)
    logger.info(f"Successful sign-in: {email}")
    return session


async def get_session(db: Optional[AsyncSession], token: Optional[str]) -> Optional[AuthSession]:
    """Resolve a cookie token to a live session, or None."""
    if db is None or not token:
        return None
    try:
        result = await db.execute(select(AuthSession).where(AuthSession.token == token))
        session = result.scalar_one_or_none()
    except READ_ERRORS as e:
        logger.warning(f"Error resolving session, treating as signed out: {e}")
        return None

    if session is None:
        return None
    if session.is_expired():
        logger.info(f"Expired session for user {session.user_id}")
        return None
    return session


async def sign_out(db: Optional[AsyncSession], token: Optional[str]) -> None:
    """Revoke a session token. Unknown tokens are ignored."""
    if db is None or not token:
        return
    await db.execute(delete(AuthSession).where(AuthSession.token == token))
    await commit_write(db, "end session")


async def confirm_email(db: Optional[AsyncSession], token: str) -> AdminUser:
    """Consume a confirmation token (one-time use)."""
    db = require_db(db)
    result = await db.execute(select(AdminUser).where(AdminUser.confirmation_token == token))
    user = result.scalar_one_or_none()

    if user is None:
        raise AuthFailure("Invalid confirmation link. Please sign up again.")
    if user.confirmation_expires_at and user.confirmation_expires_at < utcnow():
        raise AuthFailure("Confirmation link expired. Please sign up again.")

    user.email_confirmed_at = utcnow()
    user.confirmation_token = None
    user.confirmation_expires_at = None
    await commit_write(db, "confirm email")
    logger.info(f"Email confirmed: {user.email}")
    return user


class AuthEvent(str, enum.Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


Listener = Callable[[AuthEvent, Optional[AuthSession]], None]


class AuthContext:
    """
    Per-request authentication state.

    Built by the `get_auth_context` dependency: `load()` resolves the
    cookie's session once, listeners registered with `subscribe()` hear
    about every change (the API uses this to set or clear the cookie),
    and `sign_out()` tears the context down.
    """

    def __init__(self, db: Optional[AsyncSession], token: Optional[str] = None):
        self.db = db
        self._token = token
        self.session: Optional[AuthSession] = None
        self.loading = True
        self._listeners: list[Listener] = []
        self._closed = False

    @property
    def user(self) -> Optional[AdminUser]:
        return self.session.user if self.session else None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    async def load(self) -> Optional[AdminUser]:
        self.session = await get_session(self.db, self._token)
        self.loading = False
        self._notify(AuthEvent.INITIAL_SESSION)
        return self.user

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a session-change listener; returns its unsubscribe function."""
        if self._closed:
            raise RuntimeError("AuthContext has been torn down")
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def require_user(self) -> AdminUser:
        if self.user is None:
            raise AuthFailure("Not authenticated", AuthFailure.NOT_AUTHENTICATED)
        return self.user

    async def sign_up(self, request: SignUpRequest) -> SignUpResult:
        result = await sign_up(self.db, request)
        if result.session is not None:
            self._set_session(result.session, AuthEvent.SIGNED_IN)
        return result

    async def sign_in(self, email: str, password: str) -> AuthSession:
        session = await sign_in(self.db, email, password)
        self._set_session(session, AuthEvent.SIGNED_IN)
        return session

    async def sign_out(self) -> None:
        token = self.session.token if self.session else self._token
        await sign_out(self.db, token)
        if self.user is not None:
            logger.info(f"Admin signed out: {self.user.email}")
        self._set_session(None, AuthEvent.SIGNED_OUT)
        self._listeners.clear()
        self._closed = True

    def _set_session(self, session: Optional[AuthSession], event: AuthEvent) -> None:
        self.session = session
        self._token = session.token if session else None
        self._notify(event)

    def _notify(self, event: AuthEvent) -> None:
        for listener in list(self._listeners):
            listener(event, self.session)
