from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError, access_denial_status
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.referrals import (
    AcceptReferralResponse,
    AcceptReferralUseCase,
    GetReferralLinkUseCase,
    GetReferralTreeUseCase,
    ReferralLinkResponse,
    ReferralSignupResponse,
    ReferralSignupUseCase,
    ReferralTreeResponse,
    ResolveReferralVisitUseCase,
)
from src.depends import get_config, get_current_identity, get_optional_identity, get_unit_of_work

router = APIRouter(prefix="/referrals", tags=["Referrals"])

# Catch-all /{username}; must be included after every other router
visit_router = APIRouter(tags=["Referrals"])


class ReferralSignupRequest(BaseModel):
    """Referral signup HTTP request payload"""

    ref: str = Field(..., description="Referrer username")
    email: EmailStr = Field(..., description="Email of the new customer")
    first_name: Optional[str] = Field(None, max_length=100, description="First name")
    last_name: Optional[str] = Field(None, max_length=100, description="Last name")


class AcceptReferralRequest(BaseModel):
    ref: str = Field(..., description="Referrer username")


@router.get(
    "/my-link",
    status_code=status.HTTP_200_OK,
    response_model=ReferralLinkResponse,
)
async def get_my_referral_link(
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Get My Referral Link

    Raises:
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: ROLE_NOT_ELIGIBLE, TENANT_INACTIVE
        - 404 Not Found: USER_NOT_FOUND
    """
    result = await GetReferralLinkUseCase(uow, config.APP_BASE_URL).execute(identity.user_id)

    if result.is_err():
        error = result.error
        if error.code in ("ROLE_NOT_ELIGIBLE", "TENANT_INACTIVE"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=ReferralSignupResponse,
)
async def referral_signup(
    request: ReferralSignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Referral Signup

    Creates a CUSTOMER under the referrer. Sign-in follows via magic link.

    Raises:
        - 404 Not Found: INVALID_REFERRAL
        - 409 Conflict: USER_ALREADY_EXISTS
    """
    result = await ReferralSignupUseCase(uow).execute(
        request.ref, request.email, request.first_name, request.last_name
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_REFERRAL":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "USER_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post(
    "/accept",
    status_code=status.HTTP_201_CREATED,
    response_model=AcceptReferralResponse,
)
async def accept_referral(
    request: AcceptReferralRequest,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept Referral

    Raises:
        - 400 Bad Request: SELF_REFERRAL, REFERRAL_CYCLE
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: CROSS_TENANT
        - 404 Not Found: INVALID_REFERRAL, USER_NOT_FOUND
        - 409 Conflict: REFERRAL_ALREADY_EXISTS, REFERRAL_NOT_ALLOWED
    """
    result = await AcceptReferralUseCase(uow).execute(identity, request.ref)

    if result.is_err():
        error = result.error
        if error.code in ("SELF_REFERRAL", "REFERRAL_CYCLE"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "CROSS_TENANT":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("INVALID_REFERRAL", "USER_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("REFERRAL_ALREADY_EXISTS", "REFERRAL_NOT_ALLOWED"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/tree/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=ReferralTreeResponse,
)
async def get_referral_tree(
    user_id: UUID,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Referral Tree

    Raises:
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: CROSS_TENANT, TENANT_SUSPENDED, INSUFFICIENT_PERMISSION
        - 404 Not Found: USER_NOT_FOUND
    """
    result = await GetReferralTreeUseCase(uow).execute(identity, user_id)

    if result.is_err():
        error = result.error
        denial_status = access_denial_status(error)
        if denial_status is not None:
            raise ClientError(error, status_code=denial_status)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@visit_router.get("/{username}", include_in_schema=False)
async def referral_visit(
    username: str,
    identity: Optional[Identity] = Depends(get_optional_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Referral Link Visit

    Redirects to signup, the dashboard, or the landing page with an error marker.
    """
    result = await ResolveReferralVisitUseCase(uow).execute(username, identity)

    if result.is_err():
        raise ServerError(result.error)

    return RedirectResponse(result.value.redirect_url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
