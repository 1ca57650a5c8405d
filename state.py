"""
Round state and judge result records for Rock-Paper-Scissors-Bomb.

Only four values are tracked between rounds: the round number, both scores
and whether the bomb has been used. Everything else comes from the Judge.
"""

import logging
import os
import random
from dataclasses import dataclass, field, replace
from typing import Literal, Optional

logger = logging.getLogger(__name__)

TOTAL_ROUNDS = 3

VALID_MOVES = ("rock", "paper", "scissors", "bomb")
BOT_MOVES = ("rock", "paper", "scissors")
STATUSES = ("VALID", "INVALID", "UNCLEAR")
WINNERS = ("user", "bot", "draw")

Status = Literal["VALID", "INVALID", "UNCLEAR"]
Winner = Literal["user", "bot", "draw"]


@dataclass(frozen=True)
class RoundState:
    """Snapshot of the game between two rounds. Round is 1-based."""
    round: int = 1
    user_score: int = 0
    bot_score: int = 0
    bomb_used: bool = False

    def to_dict(self) -> dict:
        """Convert state to dictionary for serialization."""
        return {
            "round": self.round,
            "user_score": self.user_score,
            "bot_score": self.bot_score,
            "bomb_used": self.bomb_used,
        }


@dataclass
class Intent:
    """How the Judge classified the user's free-text move."""
    status: Status = "UNCLEAR"
    move: Optional[str] = None
    reason: str = ""


@dataclass
class JudgeResult:
    """
    Outcome of one Judge call.

    `raw` keeps the model's reply text for diagnostics and is None when no
    reply was received (missing key, provider error, empty reply).
    """
    intent: Intent = field(default_factory=Intent)
    round_winner: Optional[Winner] = None
    response: str = ""
    raw: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to the Judge's JSON output shape."""
        return {
            "intent": {
                "status": self.intent.status,
                "move": self.intent.move,
                "reason": self.intent.reason,
            },
            "round_winner": self.round_winner,
            "response": self.response,
        }


def create_state() -> RoundState:
    """Initialize a new game state."""
    return RoundState()


def get_total_rounds() -> int:
    """Total rounds per game, overridable with the TOTAL_ROUNDS env var."""
    value = os.getenv("TOTAL_ROUNDS")
    if not value:
        return TOTAL_ROUNDS
    try:
        rounds = int(value)
    except ValueError:
        logger.warning("Ignoring non-integer TOTAL_ROUNDS=%r, using %d", value, TOTAL_ROUNDS)
        return TOTAL_ROUNDS
    if rounds < 1:
        logger.warning("Ignoring non-positive TOTAL_ROUNDS=%r, using %d", value, TOTAL_ROUNDS)
        return TOTAL_ROUNDS
    return rounds


def apply_round_result(state: RoundState, result: JudgeResult) -> RoundState:
    """
    Advance to the next round and update scores/bomb from a judge result.

    The result is trusted as-is; field validation happens in the parser.

    Args:
        state: Current game state
        result: Parsed Judge result for this round

    Returns:
        New RoundState (the input is left untouched)
    """
    user_score = state.user_score
    bot_score = state.bot_score
    if result.round_winner == "user":
        user_score += 1
    elif result.round_winner == "bot":
        bot_score += 1

    # Invalid and unclear turns still count as rounds
    return replace(
        state,
        round=state.round + 1,
        user_score=user_score,
        bot_score=bot_score,
        bomb_used=state.bomb_used or result.intent.move == "bomb",
    )


def is_game_over(state: RoundState, total_rounds: int = TOTAL_ROUNDS) -> bool:
    return state.round > total_rounds


def get_final_result(state: RoundState) -> str:
    if state.user_score > state.bot_score:
        return "User wins"
    if state.bot_score > state.user_score:
        return "Bot wins"
    return "Draw"


def get_game_summary(state: RoundState) -> str:
    """
    Generate a human-readable game summary.

    Args:
        state: Final game state

    Returns:
        Formatted summary string
    """
    summary = "\n--- Final result ---\n"
    summary += f"Scores: User {state.user_score} - Bot {state.bot_score}\n"
    summary += f"{get_final_result(state)}.\n"
    return summary


def choose_bot_move() -> str:
    """Bot plays rock, paper or scissors uniformly; it never uses the bomb."""
    return random.choice(BOT_MOVES)
