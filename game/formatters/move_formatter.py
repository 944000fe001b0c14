"""Black Box move notation.

Converts between action dictionaries and the compact move strings the
engine consumes:

    T<x>,<y>    toggle a ball guess on arena cell (x, y)
    LB<x>,<y>   toggle the lock on arena cell (x, y)
    LC<x>       lock/unlock column x
    LR<y>       lock/unlock row y
    F<n>        fire the probe at perimeter index n
    R           submit the guesses for checking
    S           reveal the solution
"""

import re

from game.errors import ProtocolMismatch


class MoveFormatter:
    """Converts actions to/from move strings."""

    _PATTERNS = (
        (re.compile(r"T(\d+),(\d+)"), "TOGGLE", ("x", "y")),
        (re.compile(r"LB(\d+),(\d+)"), "LOCK", ("x", "y")),
        (re.compile(r"LC(\d+)"), "LOCK_COLUMN", ("x",)),
        (re.compile(r"LR(\d+)"), "LOCK_ROW", ("y",)),
        (re.compile(r"F(\d+)"), "FIRE", ("index",)),
        (re.compile(r"R"), "SUBMIT", ()),
        (re.compile(r"S"), "SOLVE", ()),
    )

    @staticmethod
    def action_to_move(action_dict: dict) -> str:
        """Convert action_dict to a move string.

        Args:
            action_dict: Dictionary with an "action" key and its coordinates

        Returns:
            str: Move string (e.g. "T2,3", "F7", "R")

        Raises:
            ProtocolMismatch: unknown action or missing coordinates
        """
        action = action_dict.get("action")
        try:
            if action == "TOGGLE":
                return f"T{int(action_dict['x'])},{int(action_dict['y'])}"
            if action == "LOCK":
                return f"LB{int(action_dict['x'])},{int(action_dict['y'])}"
            if action == "LOCK_COLUMN":
                return f"LC{int(action_dict['x'])}"
            if action == "LOCK_ROW":
                return f"LR{int(action_dict['y'])}"
            if action == "FIRE":
                return f"F{int(action_dict['index'])}"
        except (KeyError, TypeError, ValueError) as e:
            raise ProtocolMismatch(f"Incomplete {action} action: {action_dict}") from e
        if action == "SUBMIT":
            return "R"
        if action == "SOLVE":
            return "S"
        raise ProtocolMismatch(f"Unknown action: {action!r}")

    @staticmethod
    def move_to_action_dict(move: str) -> dict:
        """Parse a move string to an action dictionary.

        Args:
            move: Move string (e.g. "LB4,1", "F0", "S")

        Returns:
            dict: Action dictionary with an "action" key plus "x"/"y"/"index" as needed

        Raises:
            ProtocolMismatch: the string is not a recognised move
        """
        move = move.strip()
        for pattern, action, fields in MoveFormatter._PATTERNS:
            match = pattern.fullmatch(move)
            if match:
                action_dict = {"action": action}
                action_dict.update(zip(fields, (int(g) for g in match.groups())))
                return action_dict
        raise ProtocolMismatch(f"Invalid move: {move!r}")
