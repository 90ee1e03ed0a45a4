from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.email_sender import IEmailSender
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invites import (
    ConsumeInviteResponse,
    ConsumeInviteUseCase,
    CreateInviteResponse,
    CreateInviteUseCase,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)
from src.depends import get_config, get_current_identity, get_email_sender, get_unit_of_work

router = APIRouter(prefix="/invitations", tags=["Invitations"])


class CreateInviteRequest(BaseModel):
    """
    Create invitation HTTP request payload
    """

    email: EmailStr = Field(..., description="Address to invite")
    role: str = Field(..., description="Role of the invitee (e.g. CUSTOMER, SALES_PERSON)")
    team_id: Optional[UUID] = Field(None, description="Team inside the inviter's tenant")


class ValidateInviteRequest(BaseModel):
    token: str = Field(..., description="Invitation token")


class AcceptInviteRequest(BaseModel):
    """
    Accept invitation HTTP request payload
    """

    token: str = Field(..., description="Invitation token")
    first_name: Optional[str] = Field(None, max_length=100, description="First name")
    last_name: Optional[str] = Field(None, max_length=100, description="Last name")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateInviteResponse,
)
async def create_invitation(
    request: CreateInviteRequest,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    Create Invitation

    Invites a person into the caller's tenant. The token expires in 7 days.

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: INSUFFICIENT_ROLE, TENANT_SUSPENDED
        - 404 Not Found: TEAM_NOT_FOUND, USER_NOT_FOUND
        - 409 Conflict: USER_ALREADY_EXISTS, INVITE_ALREADY_EXISTS
        - 500 Internal Server Error: Server error
    """
    use_case = CreateInviteUseCase(
        uow, email_sender, config.APP_BASE_URL, ttl_days=config.INVITE_TTL_DAYS
    )
    result = await use_case.execute(
        identity.user_id, request.email, request.role, request.team_id
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ROLE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("INSUFFICIENT_ROLE", "TENANT_SUSPENDED"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("TEAM_NOT_FOUND", "USER_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("USER_ALREADY_EXISTS", "INVITE_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post(
    "/validate",
    status_code=status.HTTP_200_OK,
    response_model=ValidateInviteResponse,
)
async def validate_invitation(
    request: ValidateInviteRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Validate Invitation

    Public, read-only. Always 200; the flags describe the token.
    """
    use_case = ValidateInviteUseCase(uow)
    result = await use_case.execute(request.token)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post(
    "/accept",
    status_code=status.HTTP_200_OK,
    response_model=ConsumeInviteResponse,
)
async def accept_invitation(
    request: AcceptInviteRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Accept Invitation

    Redeems the invitation exactly once, creates the profile and signs in.

    Raises:
        - 403 Forbidden: TENANT_SUSPENDED
        - 404 Not Found: INVALID_TOKEN
        - 409 Conflict: USER_ALREADY_EXISTS
        - 410 Gone: INVITE_ALREADY_USED, INVITE_EXPIRED
        - 500 Internal Server Error: Server error
    """
    use_case = ConsumeInviteUseCase(uow, session_ttl_days=config.SESSION_TTL_DAYS)
    result = await use_case.execute(request.token, request.first_name, request.last_name)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_TOKEN":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("INVITE_ALREADY_USED", "INVITE_EXPIRED"):
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        elif error.code == "TENANT_SUSPENDED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "USER_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=result.value.session_token,
        max_age=config.SESSION_TTL_DAYS * 24 * 3600,
        httponly=True,
        samesite="lax",
    )

    return result.value
