"""
Accept Referral Use Case

Records a referral for an already signed-in user.
"""

from libs.result import Error, Result, Return
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, ReferralRelationship

from .dtos import AcceptReferralResponse
from .eligibility import can_refer, child_lineage


class AcceptReferralUseCase:
    """
    Use case for accepting a referral after sign-in.

    Business Rules:
    - Referrer and referee share a tenant; no self-referral
    - A referee has at most one referrer
    - The referrer may not be a descendant of the referee
    - A user who already has referees cannot be re-parented
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, ref: str) -> Result[AcceptReferralResponse]:
        async with self.uow:
            referee = await self.uow.users.get_by_id(identity.user_id)
            if referee is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            referrer = await self.uow.users.get_by_username(ref) if ref else None
            tenant = None
            if referrer is not None:
                tenant = await self.uow.tenants.get_by_id(referrer.tenant_id)
            if referrer is None or not can_refer(referrer, tenant):
                return Return.err(Error("INVALID_REFERRAL", "Invalid referral link"))

            if referrer.tenant_id != referee.tenant_id:
                return Return.err(
                    Error("CROSS_TENANT", "Referrer belongs to another organization")
                )

            if referrer.id == referee.id:
                return Return.err(Error("SELF_REFERRAL", "You cannot refer yourself"))

            if await self.uow.referrals.get_by_referee_id(referee.id) is not None:
                return Return.err(
                    Error("REFERRAL_ALREADY_EXISTS", "You already have a referrer")
                )

            if str(referee.id) in (referrer.lineage_path or []):
                return Return.err(
                    Error("REFERRAL_CYCLE", "This referral would create a cycle")
                )

            if await self.uow.referrals.get_by_referrer_id(referee.id):
                return Return.err(
                    Error(
                        "REFERRAL_NOT_ALLOWED",
                        "Users who already referred others cannot accept a referral",
                    )
                )

            referee.lineage_path = child_lineage(referrer)
            referee = await self.uow.users.update(referee)

            await self.uow.referrals.create(
                ReferralRelationship(
                    referrer_id=referrer.id, referee_id=referee.id, tenant_id=referee.tenant_id
                )
            )

            audit = AuditEvent(
                tenant_id=referee.tenant_id,
                user_id=referee.id,
                action="referral_recorded",
                event_metadata={"referrer_id": str(referrer.id), "via": "accept"},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                AcceptReferralResponse(
                    referrer_id=str(referrer.id),
                    referee_id=str(referee.id),
                    lineage_path=list(referee.lineage_path),
                )
            )
