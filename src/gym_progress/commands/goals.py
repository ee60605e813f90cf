"""Fitness goal commands."""

import click

from ..models.goals import PrimaryGoal, WorkoutTime
from ..services import GoalSynchronizer
from .base import async_command, echo_success, ensure_initialized


@click.group()
@click.pass_context
def goals(ctx):
    """View and update members' fitness goals."""
    ensure_initialized(ctx)


@goals.command("show")
@click.argument("member_id", type=int)
@async_command
async def show(member_id: int):
    """Show a member's fitness goals."""
    goal = await GoalSynchronizer().get_goals(member_id)

    click.echo()
    click.echo(click.style(f"Fitness goals for member {member_id}", bold=True))
    click.echo(f"  Primary goal:     {goal.primary_goal.value}")
    click.echo(f"  Current weight:   {goal.current_weight:g}")
    click.echo(f"  Target weight:    {goal.target_weight:g} ({goal.weight_to_go:+g})")
    click.echo(f"  Workouts / week:  {goal.weekly_workout_target:g}")
    click.echo(f"  Preferred time:   {goal.preferred_workout_time.value}")
    diet = ", ".join(goal.dietary_preferences) or "none"
    click.echo(f"  Diet:             {diet}")
    if goal.id is None:
        click.echo()
        click.echo("(defaults, nothing saved yet)")


@goals.command("set")
@click.argument("member_id", type=int)
@click.option(
    "--primary-goal",
    type=click.Choice([g.value for g in PrimaryGoal]),
    help="Primary fitness goal",
)
@click.option("--current-weight", type=float, help="Current body weight")
@click.option("--target-weight", type=float, help="Target body weight")
@click.option("--weekly-target", type=int, help="Workouts per week")
@click.option(
    "--preferred-time",
    type=click.Choice([t.value for t in WorkoutTime]),
    help="Preferred time of day to train",
)
@click.option("--diet", multiple=True, help="Dietary preference (repeatable)")
@async_command
async def set_goals(
    member_id: int,
    primary_goal: str | None,
    current_weight: float | None,
    target_weight: float | None,
    weekly_target: int | None,
    preferred_time: str | None,
    diet: tuple[str, ...],
):
    """Update some or all of a member's fitness goals."""
    values = {
        "primary_goal": primary_goal,
        "current_weight": current_weight,
        "target_weight": target_weight,
        "weekly_workout_target": weekly_target,
        "preferred_workout_time": preferred_time,
        "dietary_preferences": list(diet) if diet else None,
    }
    values = {k: v for k, v in values.items() if v is not None}

    goal = await GoalSynchronizer().upsert_goals(member_id, values)
    echo_success(
        f"Saved goals for member {member_id}: {goal.primary_goal.value}, "
        f"{goal.weekly_workout_target:g} workouts/week"
    )
