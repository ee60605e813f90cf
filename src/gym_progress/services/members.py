"""Member registration."""

import logging
import re

from ..db.repositories import MemberRepository
from ..errors import InvalidInput
from ..models.member import Member

_LOGGER = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")


async def register_member(repo: MemberRepository, name: str, email: str) -> Member:
    """Create a member, rejecting blank names and taken or malformed emails."""
    name = (name or "").strip()
    email = (email or "").strip().lower()
    if not name:
        raise InvalidInput("Name is required")
    if not EMAIL_PATTERN.match(email):
        raise InvalidInput(f"Invalid email address: {email!r}")
    if await repo.get_by_email(email) is not None:
        raise InvalidInput(f"Email already registered: {email}")

    member_id = await repo.create(Member(name=name, email=email))
    _LOGGER.info("Registered member %s", member_id)
    return await repo.get(member_id)
