"""Data access layer for gym-progress."""

import json
import logging
from datetime import date, datetime
from pathlib import Path

import aiosqlite

from ..errors import ConflictRetryExhausted
from ..models.goals import FitnessGoal, PrimaryGoal, WorkoutTime
from ..models.member import Member
from ..models.progress import ExerciseProgress, WorkoutProgress
from ..models.workout_plan import Weekday, WorkoutPlan
from .engine import get_db_path

_LOGGER = logging.getLogger(__name__)


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class MemberRepository:
    """Repository for gym members."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, member: Member) -> int:
        """Create a new member."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "INSERT INTO members (name, email, fitness_goals) VALUES (?, ?, ?)",
                (
                    member.name.strip(),
                    member.email.strip().lower(),
                    json.dumps(member.fitness_goals) if member.fitness_goals is not None else None,
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, member_id: int) -> Member | None:
        """Get a member by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM members WHERE id = ?", (member_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_member(row)

    async def get_by_email(self, email: str) -> Member | None:
        """Get a member by email address."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM members WHERE email = ?", (email.strip().lower(),)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_member(row)

    async def list_all(self) -> list[Member]:
        """List all members."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM members ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_member(row) for row in rows]

    async def set_fitness_goals(self, member_id: int, goals: dict | None) -> bool:
        """Overwrite the member's embedded fitness goals.

        Returns False when the member does not exist.
        """
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "UPDATE members SET fitness_goals = ? WHERE id = ?",
                (json.dumps(goals) if goals is not None else None, member_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_member(self, row: aiosqlite.Row) -> Member:
        """Convert a database row to a Member."""
        return Member(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            fitness_goals=json.loads(row["fitness_goals"]) if row["fitness_goals"] else None,
            created_at=_parse_timestamp(row["created_at"]),
        )


class WorkoutPlanRepository:
    """Repository for trainer-authored workout plans.

    Listings are ordered most recently created first; the scheduler
    relies on this order to break ties between overlapping plans.
    """

    ORDER = "ORDER BY created_at DESC, id DESC"

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, plan: WorkoutPlan) -> int:
        """Create a new plan."""
        data = plan.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_plans
                (member_id, trainer_id, name, start_date, end_date, days, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["member_id"],
                    data["trainer_id"],
                    data["name"],
                    data["start_date"],
                    data["end_date"],
                    json.dumps(data["days"]),
                    data["notes"],
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, plan_id: int) -> WorkoutPlan | None:
        """Get a plan by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workout_plans WHERE id = ?", (plan_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_plan(row)

    async def list_for_member(
        self,
        member_id: int,
        start: date | None = None,
        end: date | None = None,
    ) -> list[WorkoutPlan]:
        """List a member's plans, optionally only those overlapping [start, end]."""
        query = "SELECT * FROM workout_plans WHERE member_id = ?"
        params: list = [member_id]
        if end is not None:
            query += " AND start_date <= ?"
            params.append(end.isoformat())
        if start is not None:
            query += " AND end_date >= ?"
            params.append(start.isoformat())

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(f"{query} {self.ORDER}", params)
            rows = await cursor.fetchall()
            return [self._row_to_plan(row) for row in rows]

    async def list_active_for_member(self, member_id: int, on: date) -> list[WorkoutPlan]:
        """List a member's plans whose inclusive range contains a date."""
        return await self.list_for_member(member_id, start=on, end=on)

    async def list_for_trainer(
        self,
        trainer_id: int,
        member_id: int | None = None,
        limit: int = 100,
    ) -> list[WorkoutPlan]:
        """List plans written by a trainer, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            if member_id is not None:
                cursor = await db.execute(
                    f"""
                    SELECT * FROM workout_plans
                    WHERE trainer_id = ? AND member_id = ?
                    {self.ORDER} LIMIT ?
                    """,
                    (trainer_id, member_id, limit),
                )
            else:
                cursor = await db.execute(
                    f"SELECT * FROM workout_plans WHERE trainer_id = ? {self.ORDER} LIMIT ?",
                    (trainer_id, limit),
                )
            rows = await cursor.fetchall()
            return [self._row_to_plan(row) for row in rows]

    def _row_to_plan(self, row: aiosqlite.Row) -> WorkoutPlan:
        """Convert a database row to a WorkoutPlan."""
        data = {
            "member_id": row["member_id"],
            "trainer_id": row["trainer_id"],
            "name": row["name"],
            "start_date": row["start_date"],
            "end_date": row["end_date"],
            "days": json.loads(row["days"]),
            "notes": row["notes"],
        }
        return WorkoutPlan.from_dict(
            data,
            id=row["id"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class WorkoutProgressRepository:
    """Repository for daily workout progress.

    Exercise entries live in their own table so that toggling one exercise
    is a single-row update inside a write transaction. Concurrent toggles
    of different exercises on the same day therefore never overwrite each
    other.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        timeout: float = 5.0,
        max_attempts: int = 3,
    ):
        self.db_path = db_path or get_db_path()
        self.timeout = timeout
        self.max_attempts = max_attempts

    async def get(self, member_id: int, plan_id: int, day: date) -> WorkoutProgress | None:
        """Get the progress record for a member, plan and date."""
        async with aiosqlite.connect(self.db_path, timeout=self.timeout) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM workout_progress
                WHERE member_id = ? AND plan_id = ? AND date = ?
                """,
                (member_id, plan_id, day.isoformat()),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return await self._row_to_progress(db, row)

    async def list_for_member(
        self,
        member_id: int,
        plan_id: int | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[WorkoutProgress]:
        """List progress records, newest date first."""
        query = "SELECT * FROM workout_progress WHERE member_id = ?"
        params: list = [member_id]
        if plan_id is not None:
            query += " AND plan_id = ?"
            params.append(plan_id)
        if start is not None:
            query += " AND date >= ?"
            params.append(start.isoformat())
        if end is not None:
            query += " AND date <= ?"
            params.append(end.isoformat())
        query += " ORDER BY date DESC, id DESC"

        async with aiosqlite.connect(self.db_path, timeout=self.timeout) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [await self._row_to_progress(db, row) for row in rows]

    async def toggle_exercise(
        self,
        member_id: int,
        plan_id: int,
        day: date,
        weekday: Weekday,
        scheduled: list[str],
        exercise_name: str,
    ) -> WorkoutProgress:
        """Flip one exercise's completion flag, creating the record if needed.

        A new record gets one entry per scheduled exercise, all incomplete,
        before the flip. Retries while the database stays locked and raises
        ConflictRetryExhausted once the attempt budget is spent.
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await self._toggle_once(
                    member_id, plan_id, day, weekday, scheduled, exercise_name
                )
            except aiosqlite.OperationalError as e:
                if "locked" not in str(e) and "busy" not in str(e):
                    raise
                _LOGGER.warning(
                    "Database locked toggling %r for member=%s plan=%s date=%s (attempt %d/%d)",
                    exercise_name,
                    member_id,
                    plan_id,
                    day,
                    attempt,
                    self.max_attempts,
                )
        raise ConflictRetryExhausted(self.max_attempts)

    async def _toggle_once(
        self,
        member_id: int,
        plan_id: int,
        day: date,
        weekday: Weekday,
        scheduled: list[str],
        exercise_name: str,
    ) -> WorkoutProgress:
        async with aiosqlite.connect(
            self.db_path, timeout=self.timeout, isolation_level=None
        ) as db:
            db.row_factory = aiosqlite.Row
            # Take the write lock up front so the whole toggle is serialized
            await db.execute("BEGIN IMMEDIATE")
            try:
                cursor = await db.execute(
                    """
                    INSERT OR IGNORE INTO workout_progress (member_id, plan_id, date, day)
                    VALUES (?, ?, ?, ?)
                    """,
                    (member_id, plan_id, day.isoformat(), weekday.value),
                )
                created = cursor.rowcount == 1

                cursor = await db.execute(
                    """
                    SELECT id FROM workout_progress
                    WHERE member_id = ? AND plan_id = ? AND date = ?
                    """,
                    (member_id, plan_id, day.isoformat()),
                )
                progress_id = (await cursor.fetchone())["id"]

                if created:
                    await db.executemany(
                        """
                        INSERT OR IGNORE INTO workout_progress_exercises
                        (progress_id, position, name)
                        VALUES (?, ?, ?)
                        """,
                        [(progress_id, i, name) for i, name in enumerate(scheduled)],
                    )

                # Records created before a plan edit may lack the entry
                await db.execute(
                    """
                    INSERT OR IGNORE INTO workout_progress_exercises
                    (progress_id, position, name)
                    SELECT ?, COALESCE(MAX(position), -1) + 1, ?
                    FROM workout_progress_exercises WHERE progress_id = ?
                    """,
                    (progress_id, exercise_name, progress_id),
                )

                await db.execute(
                    """
                    UPDATE workout_progress_exercises
                    SET completed = NOT completed
                    WHERE progress_id = ? AND name = ?
                    """,
                    (progress_id, exercise_name),
                )

                await db.execute(
                    """
                    UPDATE workout_progress SET
                        completed = (
                            SELECT COUNT(*) > 0 AND MIN(completed) = 1
                            FROM workout_progress_exercises WHERE progress_id = ?
                        ),
                        updated_at = CURRENT_TIMESTAMP
                    WHERE id = ?
                    """,
                    (progress_id, progress_id),
                )
                await db.execute("COMMIT")
            except BaseException:
                await db.execute("ROLLBACK")
                raise

            if created:
                _LOGGER.debug(
                    "Created progress record %s for member=%s plan=%s date=%s",
                    progress_id,
                    member_id,
                    plan_id,
                    day,
                )

            cursor = await db.execute(
                "SELECT * FROM workout_progress WHERE id = ?", (progress_id,)
            )
            return await self._row_to_progress(db, await cursor.fetchone())

    async def delete(self, member_id: int, plan_id: int, day: date) -> bool:
        """Delete a day's progress record and its entries.

        Returns False when there was nothing to delete.
        """
        async with aiosqlite.connect(self.db_path, timeout=self.timeout) as db:
            await db.execute(
                """
                DELETE FROM workout_progress_exercises WHERE progress_id IN (
                    SELECT id FROM workout_progress
                    WHERE member_id = ? AND plan_id = ? AND date = ?
                )
                """,
                (member_id, plan_id, day.isoformat()),
            )
            cursor = await db.execute(
                """
                DELETE FROM workout_progress
                WHERE member_id = ? AND plan_id = ? AND date = ?
                """,
                (member_id, plan_id, day.isoformat()),
            )
            await db.commit()
            return cursor.rowcount > 0

    async def _row_to_progress(
        self, db: aiosqlite.Connection, row: aiosqlite.Row
    ) -> WorkoutProgress:
        """Convert a database row and its exercise entries to a WorkoutProgress."""
        cursor = await db.execute(
            """
            SELECT name, completed FROM workout_progress_exercises
            WHERE progress_id = ? ORDER BY position, id
            """,
            (row["id"],),
        )
        entries = await cursor.fetchall()
        return WorkoutProgress(
            id=row["id"],
            member_id=row["member_id"],
            plan_id=row["plan_id"],
            date=date.fromisoformat(row["date"]),
            day=Weekday(row["day"]),
            exercises=[
                ExerciseProgress(name=entry[0], completed=bool(entry[1]))
                for entry in entries
            ],
            completed=bool(row["completed"]),
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class FitnessGoalRepository:
    """Repository for standalone fitness goal records."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get_by_member(self, member_id: int) -> FitnessGoal | None:
        """Get the goal record for a member."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM fitness_goals WHERE member_id = ?", (member_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_goal(row)

    async def upsert(self, goal: FitnessGoal) -> FitnessGoal:
        """Create or replace the member's goal record and return it as stored."""
        values = goal.tracked_values()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO fitness_goals
                (member_id, primary_goal, current_weight, target_weight,
                 weekly_workout_target, preferred_workout_time, dietary_preferences)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(member_id) DO UPDATE SET
                    primary_goal = excluded.primary_goal,
                    current_weight = excluded.current_weight,
                    target_weight = excluded.target_weight,
                    weekly_workout_target = excluded.weekly_workout_target,
                    preferred_workout_time = excluded.preferred_workout_time,
                    dietary_preferences = excluded.dietary_preferences,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (
                    goal.member_id,
                    values["primary_goal"],
                    values["current_weight"],
                    values["target_weight"],
                    values["weekly_workout_target"],
                    values["preferred_workout_time"],
                    json.dumps(values["dietary_preferences"]),
                ),
            )
            await db.commit()
        return await self.get_by_member(goal.member_id)

    def _row_to_goal(self, row: aiosqlite.Row) -> FitnessGoal:
        """Convert a database row to a FitnessGoal."""
        return FitnessGoal(
            id=row["id"],
            member_id=row["member_id"],
            primary_goal=PrimaryGoal(row["primary_goal"]),
            current_weight=row["current_weight"],
            target_weight=row["target_weight"],
            weekly_workout_target=int(row["weekly_workout_target"]),
            preferred_workout_time=WorkoutTime(row["preferred_workout_time"]),
            dietary_preferences=json.loads(row["dietary_preferences"] or "[]"),
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )
