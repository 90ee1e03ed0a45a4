"""
Username generation

Usernames are the public referral handle: globally unique, lowercase,
derived from the email local part.
"""

import re
import secrets

from src.app.services.unit_of_work import UnitOfWork

_INVALID = re.compile(r"[^a-z0-9_-]+")
MAX_ATTEMPTS = 5


def username_base(email: str) -> str:
    local = email.split("@", 1)[0].lower()
    base = _INVALID.sub("", local)[:48]
    return base or "user"


async def generate_unique_username(uow: UnitOfWork, email: str) -> str:
    """Email local part, suffixed with random hex while it is taken"""
    base = username_base(email)
    candidate = base
    for _ in range(MAX_ATTEMPTS):
        if await uow.users.get_by_username(candidate) is None:
            return candidate
        candidate = f"{base}-{secrets.token_hex(3)}"
    return f"{base}-{secrets.token_hex(6)}"
