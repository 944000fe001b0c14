"""Move log loaders for Black Box."""

from .move_log_loader import MoveLogLoader

__all__ = ["MoveLogLoader"]
