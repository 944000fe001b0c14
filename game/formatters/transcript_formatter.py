"""Transcript lines for Black Box.

A transcript line is the literal form of an action dict, e.g.
"{'action': 'FIRE', 'index': 3}". Parsing accepts only dicts that also
form a valid move.
"""

import ast

from game.errors import ProtocolMismatch

from .move_formatter import MoveFormatter


class TranscriptFormatter:
    """Converts actions to/from transcript strings."""

    @staticmethod
    def action_to_transcript(action_dict: dict) -> str:
        # Round-trip through the move notation so key order and types are canonical
        return str(MoveFormatter.move_to_action_dict(MoveFormatter.action_to_move(action_dict)))

    @staticmethod
    def transcript_to_action_dict(transcript_str: str) -> dict:
        """Parse a transcript string back to an action dict.

        Raises:
            ProtocolMismatch: not a literal dict, or not a valid move
        """
        try:
            value = ast.literal_eval(transcript_str.strip())
        except (ValueError, SyntaxError) as e:
            raise ProtocolMismatch(f"Invalid transcript entry: {transcript_str!r}") from e
        if not isinstance(value, dict):
            raise ProtocolMismatch(f"Invalid transcript entry: {transcript_str!r}")
        return MoveFormatter.move_to_action_dict(MoveFormatter.action_to_move(value))
