"""Request-scoped dependencies shared by the routers."""

from fastapi import Header, HTTPException, Request

from ..db.repositories import (
    FitnessGoalRepository,
    MemberRepository,
    WorkoutPlanRepository,
    WorkoutProgressRepository,
)
from ..services import GoalSynchronizer, PlanService, ProgressReconciler, Scheduler


def _parse_identity(value: str | None, role: str) -> int:
    if not value:
        raise HTTPException(status_code=401, detail=f"Unauthorized: no {role} identity")
    try:
        identity = int(value)
    except ValueError:
        raise HTTPException(status_code=401, detail=f"Unauthorized: invalid {role} identity")
    if identity < 1:
        raise HTTPException(status_code=401, detail=f"Unauthorized: invalid {role} identity")
    return identity


def current_member_id(x_member_id: str | None = Header(None)) -> int:
    """Member resolved by the session layer in front of this service."""
    return _parse_identity(x_member_id, "member")


def current_trainer_id(x_trainer_id: str | None = Header(None)) -> int:
    """Trainer resolved by the session layer in front of this service."""
    return _parse_identity(x_trainer_id, "trainer")


def get_member_repo(request: Request) -> MemberRepository:
    return MemberRepository(request.app.state.db_path)


def get_plan_service(request: Request) -> PlanService:
    db_path = request.app.state.db_path
    return PlanService(WorkoutPlanRepository(db_path), MemberRepository(db_path))


def get_scheduler(request: Request) -> Scheduler:
    return Scheduler(WorkoutPlanRepository(request.app.state.db_path))


def get_reconciler(request: Request) -> ProgressReconciler:
    db_path = request.app.state.db_path
    return ProgressReconciler(
        WorkoutPlanRepository(db_path), WorkoutProgressRepository(db_path)
    )


def get_goal_synchronizer(request: Request) -> GoalSynchronizer:
    db_path = request.app.state.db_path
    return GoalSynchronizer(FitnessGoalRepository(db_path), MemberRepository(db_path))
