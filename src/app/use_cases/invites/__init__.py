"""
Invitation Use Cases

Issuing, inspecting and redeeming single-use invitations.
"""

from .consume_invite_use_case import ConsumeInviteUseCase
from .create_invite_use_case import CreateInviteUseCase
from .dtos import ConsumeInviteResponse, CreateInviteResponse, ValidateInviteResponse
from .validate_invite_use_case import ValidateInviteUseCase

__all__ = [
    "CreateInviteUseCase",
    "ValidateInviteUseCase",
    "ConsumeInviteUseCase",
    "CreateInviteResponse",
    "ValidateInviteResponse",
    "ConsumeInviteResponse",
]
