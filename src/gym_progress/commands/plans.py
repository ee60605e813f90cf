"""Workout plan commands."""

import json
from pathlib import Path

import click

from ..db import MemberRepository, WorkoutPlanRepository
from ..errors import InvalidInput, NotFound
from ..services import PlanService
from .base import async_command, echo_info, echo_success, ensure_initialized, format_table


@click.group()
@click.pass_context
def plans(ctx):
    """Manage members' weekly workout plans.

    Plans are written as JSON files:

    \b
        {
          "member_id": 1,
          "name": "Strength Block",
          "start_date": "2025-05-01",
          "end_date": "2025-05-31",
          "days": {
            "Monday": [{"name": "Squats", "sets": 5, "reps": 5, "rest_duration": "3 min"}]
          }
        }
    """
    ensure_initialized(ctx)


@plans.command("create")
@click.argument("plan_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--trainer-id", "-t", type=int, required=True, help="Authoring trainer ID")
@async_command
async def create_plan(plan_file: Path, trainer_id: int):
    """Create a plan from a JSON file."""
    try:
        data = json.loads(plan_file.read_text())
    except json.JSONDecodeError as e:
        raise InvalidInput(f"{plan_file} is not valid JSON: {e}") from e

    plan = await PlanService().create_plan(trainer_id, data)
    echo_success(f"Created plan '{plan.name}' (ID: {plan.id}) for member {plan.member_id}")


@plans.command("list")
@click.argument("member_id", type=int)
@async_command
async def list_plans(member_id: int):
    """List a member's plans, newest first."""
    if await MemberRepository().get(member_id) is None:
        raise NotFound(f"Member {member_id} not found")

    member_plans = await PlanService().list_member_plans(member_id)
    if not member_plans:
        echo_info(f"No plans for member {member_id}.")
        return

    rows = [
        [
            str(p.id),
            p.name[:30] + "..." if len(p.name) > 30 else p.name,
            p.start_date.isoformat(),
            p.end_date.isoformat(),
            ", ".join(d.value[:3] for d in p.training_days),
            str(p.trainer_id),
        ]
        for p in member_plans
    ]
    click.echo()
    click.echo(format_table(["ID", "Name", "Start", "End", "Days", "Trainer"], rows))
    click.echo()
    click.echo(f"Total: {len(member_plans)} plan(s)")


@plans.command("show")
@click.argument("plan_id", type=int)
@async_command
async def show_plan(plan_id: int):
    """Show a plan's weekly schedule."""
    plan = await WorkoutPlanRepository().get(plan_id)
    if plan is None:
        raise NotFound(f"Workout plan {plan_id} not found")

    click.echo()
    click.echo("=" * 60)
    click.echo(f"Plan: {plan.name} (ID: {plan.id})")
    click.echo("=" * 60)
    click.echo(f"Member: {plan.member_id}   Trainer: {plan.trainer_id}")
    click.echo(
        f"Runs: {plan.start_date.isoformat()} to {plan.end_date.isoformat()} "
        f"({plan.duration_days} days)"
    )
    if plan.notes:
        click.echo(f"Notes: {plan.notes}")

    for weekday in plan.training_days:
        click.echo()
        click.echo(click.style(weekday.value, bold=True))
        for ex in plan.exercises_for(weekday):
            rest = f", rest {ex.rest_duration}" if ex.rest_duration else ""
            click.echo(f"  - {ex.name}: {ex.sets} x {ex.reps}{rest}")
            if ex.notes:
                click.echo(f"      {ex.notes}")
