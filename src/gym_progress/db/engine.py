"""Database engine setup and initialization."""

import logging
import os
from pathlib import Path

import aiosqlite

_LOGGER = logging.getLogger(__name__)

# Default data directory, overridable with GYM_PROGRESS_DATA_DIR
DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"
DATA_DIR_ENV = "GYM_PROGRESS_DATA_DIR"
DB_FILENAME = "gym_progress.db"


def get_data_dir() -> Path:
    """Get the configured data directory."""
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override) if override else DATA_DIR


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DB_FILENAME


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Members, with an embedded copy of their fitness goals
        await db.execute("""
            CREATE TABLE IF NOT EXISTS members (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                email TEXT UNIQUE NOT NULL,
                fitness_goals TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Trainer-authored weekly plans
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_plans (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                member_id INTEGER NOT NULL,
                trainer_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                start_date TEXT NOT NULL,
                end_date TEXT NOT NULL,
                days TEXT NOT NULL DEFAULT '{}',
                notes TEXT DEFAULT '',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (member_id) REFERENCES members(id) ON DELETE CASCADE,
                CHECK (start_date <= end_date)
            )
        """)

        # One progress record per member, plan and date
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_progress (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                member_id INTEGER NOT NULL,
                plan_id INTEGER NOT NULL,
                date TEXT NOT NULL,
                day TEXT NOT NULL,
                completed INTEGER NOT NULL DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (member_id, plan_id, date),
                FOREIGN KEY (plan_id) REFERENCES workout_plans(id) ON DELETE CASCADE
            )
        """)

        # Exercise entries, one row each so a toggle updates a single row
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_progress_exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                progress_id INTEGER NOT NULL,
                position INTEGER NOT NULL,
                name TEXT NOT NULL,
                completed INTEGER NOT NULL DEFAULT 0,
                UNIQUE (progress_id, name),
                FOREIGN KEY (progress_id) REFERENCES workout_progress(id) ON DELETE CASCADE
            )
        """)

        # Standalone fitness goals (source of truth for the member's copy)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS fitness_goals (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                member_id INTEGER NOT NULL UNIQUE,
                primary_goal TEXT NOT NULL,
                current_weight REAL NOT NULL DEFAULT 0,
                target_weight REAL NOT NULL DEFAULT 0,
                weekly_workout_target INTEGER NOT NULL DEFAULT 3,
                preferred_workout_time TEXT NOT NULL,
                dietary_preferences TEXT DEFAULT '[]',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_plans_member
            ON workout_plans(member_id, start_date, end_date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_plans_trainer
            ON workout_plans(trainer_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_progress_member_date
            ON workout_progress(member_id, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_progress_exercises_progress
            ON workout_progress_exercises(progress_id)
        """)

        await db.commit()

    _LOGGER.debug("Database schema ready at %s", db_path)
