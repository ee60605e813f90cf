"""Daily workout and progress commands."""

import click

from ..models.progress import WorkoutProgress, completion_percentage
from ..services import ProgressReconciler, ScheduledWorkout, Scheduler
from .base import async_command, echo_info, echo_success, ensure_initialized, resolve_date

DATE_OPTION = click.option(
    "--date", "-d", "on", default=None, help="Date as YYYY-MM-DD (default: today)"
)


def _print_workout(workout: ScheduledWorkout, progress: WorkoutProgress | None = None) -> None:
    when = workout.date.isoformat() if workout.date else "next available"
    click.echo()
    click.echo(click.style(f"{workout.plan.name} (plan {workout.plan.id})", bold=True))
    click.echo(f"{workout.weekday.value}, {when}")
    click.echo("-" * 40)
    for ex in workout.exercises:
        mark = "[x]" if progress and progress.is_exercise_completed(ex.name) else "[ ]"
        rest = f", rest {ex.rest_duration}" if ex.rest_duration else ""
        click.echo(f"  {mark} {ex.name}: {ex.sets} x {ex.reps}{rest}")
    if progress is not None:
        click.echo()
        click.echo(f"Progress: {completion_percentage(progress)}%")


def _print_progress(progress: WorkoutProgress) -> None:
    click.echo()
    click.echo(f"{progress.day.value} {progress.date.isoformat()} (plan {progress.plan_id})")
    for ex in progress.exercises:
        click.echo(f"  {'[x]' if ex.completed else '[ ]'} {ex.name}")
    status = "complete" if progress.completed else "in progress"
    click.echo()
    click.echo(f"Progress: {completion_percentage(progress)}% ({status})")


@click.group()
@click.pass_context
def workout(ctx):
    """See scheduled workouts and mark exercises done."""
    ensure_initialized(ctx)


@workout.command("today")
@click.argument("member_id", type=int)
@DATE_OPTION
@async_command
async def today(member_id: int, on: str | None):
    """Show today's workout, or the next one if today is a rest day."""
    day = resolve_date(on)
    scheduled, is_today = await Scheduler().find_todays_or_next_workout(member_id, day)

    if scheduled is None:
        echo_info("No workouts scheduled.")
        return

    if is_today:
        progress = await ProgressReconciler().get_daily_progress(
            member_id, scheduled.plan.id, day
        )
        _print_workout(scheduled, progress)
    else:
        echo_info("Rest day. Next workout:")
        _print_workout(scheduled)


@workout.command("next")
@click.argument("member_id", type=int)
@DATE_OPTION
@async_command
async def next_workout(member_id: int, on: str | None):
    """Show the next workout after a date."""
    scheduled = await Scheduler().find_next_scheduled_workout(member_id, resolve_date(on))
    if scheduled is None:
        echo_info("No workouts scheduled.")
        return
    _print_workout(scheduled)


@workout.command("toggle")
@click.argument("member_id", type=int)
@click.argument("plan_id", type=int)
@click.argument("exercise")
@DATE_OPTION
@async_command
async def toggle(member_id: int, plan_id: int, exercise: str, on: str | None):
    """Mark an exercise done, or undo it."""
    progress = await ProgressReconciler().toggle_exercise(
        member_id, plan_id, resolve_date(on), exercise
    )
    state = "done" if progress.is_exercise_completed(exercise.strip()) else "not done"
    echo_success(f"{exercise.strip()} marked {state}")
    _print_progress(progress)


@workout.command("progress")
@click.argument("member_id", type=int)
@click.argument("plan_id", type=int)
@DATE_OPTION
@async_command
async def show_progress(member_id: int, plan_id: int, on: str | None):
    """Show a day's progress."""
    day = resolve_date(on)
    progress = await ProgressReconciler().get_daily_progress(member_id, plan_id, day)
    if progress is None:
        echo_info(f"Nothing marked on {day.isoformat()} (0%).")
        return
    _print_progress(progress)


@workout.command("reset")
@click.argument("member_id", type=int)
@click.argument("plan_id", type=int)
@DATE_OPTION
@click.confirmation_option(prompt="Clear this day's progress?")
@async_command
async def reset(member_id: int, plan_id: int, on: str | None):
    """Clear a day's progress."""
    day = resolve_date(on)
    await ProgressReconciler().reset_progress(member_id, plan_id, day)
    echo_success(f"Cleared progress for plan {plan_id} on {day.isoformat()}")
