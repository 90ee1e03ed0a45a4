from datetime import timedelta
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from libs.result import Error
from src.api.error import ClientError, ServerError
from src.api.utils.jwt import create_dev_session_token
from src.app.services.email_sender import IEmailSender
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    CheckTenantAccessResponse,
    CheckTenantAccessUseCase,
    DevLoginResponse,
    DevLoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    SendMagicLinkResponse,
    SendMagicLinkUseCase,
    VerifyMagicLinkResponse,
    VerifyMagicLinkUseCase,
)
from src.depends import (
    get_config,
    get_current_identity,
    get_email_sender,
    get_session_token,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SendMagicLinkRequest(BaseModel):
    """Magic link request payload"""

    email: EmailStr = Field(..., description="Address to send the link to")
    intent: str = Field("SIGNIN", description="SIGNIN, SIGNUP or INVITE")
    callback_url: Optional[str] = Field(None, description="Where to go after sign-in")
    tenant_slug: Optional[str] = Field(None, description="Restrict sign-in to this tenant")


class VerifyMagicLinkRequest(BaseModel):
    token: str = Field(..., description="Token from the magic link")
    email: EmailStr = Field(..., description="Email the link was sent to")


class DevLoginRequest(BaseModel):
    user_id: UUID = Field(..., description="Profile to sign in as")


class CheckTenantAccessRequest(BaseModel):
    tenant_id: Optional[UUID] = Field(None, description="Tenant to check")


def _set_session_cookie(response: Response, config, token: str):
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(timedelta(days=config.SESSION_TTL_DAYS).total_seconds()),
        httponly=True,
        samesite="lax",
    )


@router.post(
    "/magic-link/send",
    status_code=status.HTTP_200_OK,
    response_model=SendMagicLinkResponse,
)
async def send_magic_link(
    request: SendMagicLinkRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    Send Magic Link

    Issues a single-use sign-in link. The response does not reveal whether an
    account exists.

    Raises:
        - 400 Bad Request: INVALID_INTENT
        - 429 Too Many Requests: RATE_LIMITED
        - 500 Internal Server Error: Server error
    """
    use_case = SendMagicLinkUseCase(
        uow,
        email_sender,
        config.APP_BASE_URL,
        ttl_minutes=config.MAGIC_LINK_TTL_MINUTES,
        max_active=config.MAGIC_LINK_MAX_ACTIVE,
    )
    result = await use_case.execute(
        request.email, request.intent, request.callback_url, request.tenant_slug
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_INTENT":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "RATE_LIMITED":
            raise ClientError(error, status_code=status.HTTP_429_TOO_MANY_REQUESTS)
        raise ServerError(error)

    return result.value


@router.post(
    "/magic-link/verify",
    status_code=status.HTTP_200_OK,
    response_model=VerifyMagicLinkResponse,
)
async def verify_magic_link(
    request: VerifyMagicLinkRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Verify Magic Link

    Consumes the link exactly once. With an existing profile a session is
    opened and its token returned (and set as a cookie).

    Raises:
        - 403 Forbidden: TENANT_SUSPENDED
        - 410 Gone: INVALID_MAGIC_LINK
        - 500 Internal Server Error: Server error
    """
    use_case = VerifyMagicLinkUseCase(uow, session_ttl_days=config.SESSION_TTL_DAYS)
    result = await use_case.execute(request.token, request.email)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_MAGIC_LINK":
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        elif error.code == "TENANT_SUSPENDED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    if result.value.session_token:
        _set_session_cookie(response, config, result.value.session_token)

    return result.value


@router.post(
    "/dev-login",
    status_code=status.HTTP_200_OK,
    response_model=DevLoginResponse,
)
async def dev_login(
    request: DevLoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Development Login

    Signs in as any profile via a signed dev cookie. Does not exist unless
    DEV_MODE is enabled.

    Raises:
        - 404 Not Found: DEV_MODE off, or USER_NOT_FOUND
    """
    if not config.DEV_MODE:
        raise ClientError(Error("NOT_FOUND", "Not found"), status_code=status.HTTP_404_NOT_FOUND)

    use_case = DevLoginUseCase(uow)
    result = await use_case.execute(request.user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    ttl = timedelta(hours=config.DEV_SESSION_TTL_HOURS)
    claims = result.value.model_dump(exclude={"name"})
    response.set_cookie(
        key=config.DEV_SESSION_COOKIE_NAME,
        value=create_dev_session_token(claims, config.DEV_SESSION_SECRET, ttl),
        max_age=int(ttl.total_seconds()),
        httponly=True,
        samesite="lax",
    )

    return result.value


@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    response_model=LogoutResponse,
)
async def logout(
    response: Response,
    session_token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Logout

    Revokes the current session and clears session cookies. Idempotent.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(session_token)

    if result.is_err():
        raise ServerError(result.error)

    response.delete_cookie(config.SESSION_COOKIE_NAME)
    response.delete_cookie(config.DEV_SESSION_COOKIE_NAME)

    return result.value


@router.post(
    "/check-tenant-access",
    status_code=status.HTTP_200_OK,
    response_model=CheckTenantAccessResponse,
)
async def check_tenant_access(
    request: CheckTenantAccessRequest,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Check Tenant Access

    Reports whether the caller may enter a tenant.

    Raises:
        - 400 Bad Request: TENANT_ID_REQUIRED
        - 401 Unauthorized: Not authenticated
    """
    if request.tenant_id is None:
        raise ClientError(
            Error("TENANT_ID_REQUIRED", "Tenant ID is required"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    use_case = CheckTenantAccessUseCase(uow)
    result = await use_case.execute(identity.user_id, request.tenant_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
