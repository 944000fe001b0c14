"""Controller module for Black Box.

Contains the puzzle session and move logging.
"""

from controller.game_logger import GameLogger
from controller.game_session import PuzzleSession

__all__ = ["GameLogger", "PuzzleSession"]
