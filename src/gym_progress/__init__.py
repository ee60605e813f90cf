"""gym-progress: workout plan scheduling and progress tracking for gym members."""

__version__ = "0.1.0"
