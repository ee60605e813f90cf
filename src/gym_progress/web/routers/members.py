"""Member registration routes."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...db.repositories import MemberRepository
from ...errors import NotFound
from ...services import register_member
from ..deps import current_member_id, get_member_repo

router = APIRouter(prefix="/members", tags=["members"])


class MemberIn(BaseModel):
    name: str
    email: str


@router.post("", status_code=201)
async def create_member(
    body: MemberIn,
    repo: MemberRepository = Depends(get_member_repo),
):
    """Register a new member."""
    member = await register_member(repo, body.name, body.email)
    return {"member": member.to_dict()}


@router.get("/me")
async def get_current_member(
    member_id: int = Depends(current_member_id),
    repo: MemberRepository = Depends(get_member_repo),
):
    """Get the calling member."""
    member = await repo.get(member_id)
    if member is None:
        raise NotFound(f"Member {member_id} not found")
    return {"member": member.to_dict()}
