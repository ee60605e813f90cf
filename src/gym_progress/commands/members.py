"""Member management commands."""

import click

from ..db.repositories import MemberRepository
from ..services import register_member
from .base import async_command, echo_info, echo_success, ensure_initialized, format_table


@click.group()
def members():
    """Register and list gym members."""
    pass


@members.command("add")
@click.argument("name")
@click.argument("email")
@click.pass_context
@async_command
async def add_member(ctx: click.Context, name: str, email: str):
    """Register a new member."""
    ensure_initialized(ctx)

    member = await register_member(MemberRepository(), name, email)
    echo_success(f"Registered {member.name} (ID: {member.id})")


@members.command("list")
@click.pass_context
@async_command
async def list_members(ctx: click.Context):
    """List all members."""
    ensure_initialized(ctx)

    all_members = await MemberRepository().list_all()
    if not all_members:
        echo_info("No members yet. Add one with 'gym-progress members add'.")
        return

    rows = [
        [str(m.id), m.name, m.email, "yes" if m.fitness_goals else "no"]
        for m in all_members
    ]
    click.echo(format_table(["ID", "Name", "Email", "Goals"], rows))
