"""
Admin authentication endpoints.

Sessions are opaque tokens stored in the `auth_token` httpOnly cookie.
The cookie is written by a listener on the request's AuthContext, so every
sign-in, sign-up and sign-out path sets or clears it the same way.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from careerpage.api.errors import to_http_exception
from careerpage.config import settings
from careerpage.database import get_db
from careerpage.exceptions import CareerPageError
from careerpage.models.admin_user import AdminUser
from careerpage.models.auth_session import AuthSession
from careerpage.schemas.auth import AuthPage, AuthResponse, SignInRequest, SignUpRequest
from careerpage.services.admin import AUTH_PATH, get_admin_profile
from careerpage.services.auth import SESSION_COOKIE, AuthContext, AuthEvent, confirm_email

logger = logging.getLogger(__name__)
router = APIRouter()

EDITOR_ENTRY_PATH = "/admin/editor"


def set_auth_cookie(response: Response, token: str) -> None:
    # In production, set secure=True for HTTPS-only
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,  # Prevents JavaScript access (XSS protection)
        samesite="lax",  # CSRF protection
        max_age=86400 * settings.session_ttl_days,
        secure=False,
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(key=SESSION_COOKIE, httponly=True, samesite="lax")


def cookie_listener(response: Response):
    """Keep the response cookie in step with the session."""
    def listener(event: AuthEvent, session: Optional[AuthSession]) -> None:
        if event is AuthEvent.SIGNED_IN and session is not None:
            set_auth_cookie(response, session.token)
        elif event is AuthEvent.SIGNED_OUT:
            clear_auth_cookie(response)
    return listener


# Authentication Dependencies
async def get_auth_context(
    auth_token: Optional[str] = Cookie(None),
    db: Optional[AsyncSession] = Depends(get_db),
) -> AuthContext:
    """Per-request auth state, loaded from the cookie."""
    context = AuthContext(db, auth_token)
    await context.load()
    return context


async def get_current_admin(context: AuthContext = Depends(get_auth_context)) -> AdminUser:
    """
    Dependency to get the signed-in admin.

    Raises:
        HTTPException 401: No valid session cookie
        HTTPException 403: Account is locked
    """
    user = context.user
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    if user.is_account_locked():
        raise HTTPException(
            status_code=403,
            detail=f"Account temporarily locked. Try again after {user.account_locked_until.isoformat()}",
        )
    return user


# Endpoints
@router.get("", response_model=AuthPage)
async def auth_page(context: AuthContext = Depends(get_auth_context)):
    """Sign-in / sign-up screen state. Signed-in admins are sent to the editor."""
    return AuthPage(
        signed_in=context.is_authenticated,
        redirect_to=EDITOR_ENTRY_PATH if context.is_authenticated else None,
        min_password_length=settings.min_password_length,
        require_email_confirmation=settings.require_email_confirmation,
    )


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def sign_up(
    request: SignUpRequest,
    response: Response,
    context: AuthContext = Depends(get_auth_context),
):
    """
    Create an admin account (and optionally its company).

    Returns:
        201: Account created; signed in unless email confirmation is required
        409: Email or company URL already taken
        422: Validation failed
        503: Database unavailable
    """
    context.subscribe(cookie_listener(response))
    try:
        result = await context.sign_up(request)
    except CareerPageError as e:
        raise to_http_exception(e)

    if result.confirmation_required:
        return AuthResponse(
            authenticated=False,
            user=get_admin_profile(result.user),
            confirmation_required=True,
            message="Check your email to confirm your account.",
        )
    return AuthResponse(
        authenticated=True,
        user=get_admin_profile(result.user),
        redirect_to=EDITOR_ENTRY_PATH,
    )


@router.post("/signin", response_model=AuthResponse)
async def sign_in(
    request: SignInRequest,
    response: Response,
    context: AuthContext = Depends(get_auth_context),
):
    """
    Sign in with email and password.

    Returns:
        200: Signed in, cookie set
        401: Invalid credentials or email not confirmed
        403: Account locked due to failed attempts
        503: Database unavailable
    """
    context.subscribe(cookie_listener(response))
    try:
        session = await context.sign_in(request.email, request.password)
    except CareerPageError as e:
        raise to_http_exception(e)

    return AuthResponse(
        authenticated=True,
        user=get_admin_profile(session.user),
        redirect_to=EDITOR_ENTRY_PATH,
    )


@router.post("/signout")
async def sign_out(response: Response, context: AuthContext = Depends(get_auth_context)):
    """Revoke the session and clear the cookie. Safe to call when signed out."""
    context.subscribe(cookie_listener(response))
    try:
        await context.sign_out()
    except CareerPageError as e:
        raise to_http_exception(e)
    return {"message": "Successfully signed out", "redirectTo": AUTH_PATH}


@router.get("/session", response_model=AuthResponse)
async def current_session(context: AuthContext = Depends(get_auth_context)):
    """Who is signed in, if anyone."""
    if context.user is None:
        return AuthResponse(authenticated=False)
    return AuthResponse(authenticated=True, user=get_admin_profile(context.user))


@router.get("/confirm", response_model=AuthResponse)
async def confirm(
    token: str = Query(..., min_length=1),
    db: Optional[AsyncSession] = Depends(get_db),
):
    """Consume an email confirmation link."""
    try:
        user = await confirm_email(db, token)
    except CareerPageError as e:
        raise to_http_exception(e)
    return AuthResponse(
        authenticated=False,
        user=get_admin_profile(user),
        redirect_to=AUTH_PATH,
        message="Email confirmed. You can now sign in.",
    )
