"""
Send Magic Link Use Case

Issues short-lived passwordless sign-in links.
"""

import logging
from datetime import timedelta
from typing import Optional
from urllib.parse import urlencode

from libs.result import Error, Result, Return
from src.app.services.email_sender import IEmailSender
from src.app.services.email_templates import magic_link_email
from src.app.services.tokens import generate_token, hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import MagicLinkIntent, MagicLinkToken, TenantStatus

from .dtos import SendMagicLinkResponse

logger = logging.getLogger(__name__)

SENT_MESSAGE = "If an account exists for this email, a sign-in link has been sent"
MAX_TTL_MINUTES = 15


class SendMagicLinkUseCase:
    """
    Use case for requesting a magic link.

    Business Rules:
    - Link expires after at most 15 minutes and is single-use
    - SIGNIN links are only issued when a profile exists; the response is the
      same either way
    - An unknown or suspended tenant slug gets the same silent response
    - At most MAGIC_LINK_MAX_ACTIVE live links per email
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        app_base_url: str,
        ttl_minutes: int = MAX_TTL_MINUTES,
        max_active: int = 3,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.app_base_url = app_base_url.rstrip("/")
        self.ttl_minutes = min(ttl_minutes, MAX_TTL_MINUTES)
        self.max_active = max_active

    async def execute(
        self,
        email: str,
        intent: str = MagicLinkIntent.SIGNIN.value,
        callback_url: Optional[str] = None,
        tenant_slug: Optional[str] = None,
    ) -> Result[SendMagicLinkResponse]:
        try:
            link_intent = MagicLinkIntent(intent.upper())
        except ValueError:
            return Return.err(Error("INVALID_INTENT", f"Invalid intent: {intent}"))

        email = email.strip().lower()
        silent = SendMagicLinkResponse(message=SENT_MESSAGE)

        async with self.uow:
            tenant = None
            if tenant_slug:
                tenant = await self.uow.tenants.get_by_slug(tenant_slug.lower())
                if tenant is None or tenant.status == TenantStatus.SUSPENDED:
                    return Return.ok(silent)

            profiles = await self.uow.users.get_by_email(email)
            if tenant is not None:
                profiles = [p for p in profiles if p.tenant_id == tenant.id]
            profile = profiles[0] if profiles else None

            if link_intent == MagicLinkIntent.SIGNIN and profile is None:
                return Return.ok(silent)

            now = utcnow()
            active = await self.uow.magic_links.count_active_by_email(email, now)
            if active >= self.max_active:
                return Return.err(
                    Error("RATE_LIMITED", "Too many sign-in links requested, try again later")
                )

            if profile is not None:
                tenant_id = profile.tenant_id
            else:
                tenant_id = tenant.id if tenant is not None else None

            token = generate_token()
            magic_link = MagicLinkToken(
                token_hash=hash_token(token),
                email=email,
                intent=link_intent,
                tenant_id=tenant_id,
                callback_url=callback_url,
                expires_at=now + timedelta(minutes=self.ttl_minutes),
            )
            await self.uow.magic_links.create(magic_link)
            await self.uow.commit()

        link_url = (
            f"{self.app_base_url}/auth/magic-link/verify?"
            + urlencode({"token": token, "email": email})
        )
        subject, body = magic_link_email(link_intent, link_url, self.ttl_minutes)
        if not await self.email_sender.send(email, subject, body):
            logger.warning(f"Magic link issued but email delivery failed for {email}")

        return Return.ok(silent)
