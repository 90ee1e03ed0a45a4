"""
Get Referral Tree Use Case

Downline of a user, built from lineage paths.
"""

from collections import Counter, defaultdict
from typing import Dict, List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.access_validator import AccessValidator, denial_error
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PermissionAction, PermissionModule, UserProfile

from ..dtos import UserProfileInfo
from .dtos import ReferralTreeNode, ReferralTreeResponse, TierCount

MAX_TREE_DEPTH = 5


def _build_nodes(
    parent_id: str, children_of: Dict[str, List[UserProfile]], depth: int
) -> List[ReferralTreeNode]:
    if depth > MAX_TREE_DEPTH:
        return []
    return [
        ReferralTreeNode(
            user=UserProfileInfo.from_entity(child),
            joined_at=child.created_at.isoformat() if child.created_at else None,
            children=_build_nodes(str(child.id), children_of, depth + 1),
        )
        for child in children_of.get(parent_id, [])
    ]


class GetReferralTreeUseCase:
    """
    Use case for reading a referral downline.

    Business Rules:
    - Requires referrals:view in the user's tenant; other tenants are invisible
    - Tier n counts descendants n steps below the user
    - The nested tree is cut at five levels; the tier counts are not
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Optional[Identity], user_id: UUID
    ) -> Result[ReferralTreeResponse]:
        async with self.uow:
            root = await self.uow.users.get_by_id(user_id)
            if root is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            decision = await AccessValidator(self.uow).check(
                identity, root.tenant_id, PermissionModule.REFERRALS, PermissionAction.VIEW
            )
            if not decision.allowed:
                return Return.err(denial_error(decision))

            root_id = str(root.id)
            tiers = Counter()
            children_of = defaultdict(list)
            for profile in await self.uow.users.get_by_tenant_id(root.tenant_id):
                lineage = profile.lineage_path or []
                if root_id not in lineage:
                    continue
                tiers[len(lineage) - lineage.index(root_id)] += 1
                children_of[lineage[-1]].append(profile)

            return Return.ok(
                ReferralTreeResponse(
                    user_id=root_id,
                    total_referrals=tiers.get(1, 0),
                    total_downline=sum(tiers.values()),
                    levels=[TierCount(level=level, count=tiers[level]) for level in sorted(tiers)],
                    tree=_build_nodes(root_id, children_of, 1),
                )
            )
