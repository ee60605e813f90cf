"""CLI commands for gym-progress."""

from .goals import goals
from .init import init
from .members import members
from .plans import plans
from .serve import serve
from .workout import workout

__all__ = [
    "goals",
    "init",
    "members",
    "plans",
    "serve",
    "workout",
]
