"""
Spelling fixes for free-text moves (e.g. "scissor" -> "scissors").

Typo correction only; interpreting the move is still the Judge's job.
"""

import re
from typing import Dict

CANONICAL = ("rock", "paper", "scissors", "bomb")

TYPO_MAP: Dict[str, str] = {
    # scissors
    "scissor": "scissors",
    "scisors": "scissors",
    "scisor": "scissors",
    "sissors": "scissors",
    "sissor": "scissors",
    # rock
    "roc": "rock",
    "rok": "rock",
    "rck": "rock",
    # paper
    "papper": "paper",
    "pape": "paper",
    "papr": "paper",
    "paer": "paper",
    # bomb
    "bom": "bomb",
    "bmb": "bomb",
    "bome": "bomb",
}

_WORD_RE = re.compile(r"\w+")


def normalize_exact(user_input: str) -> str:
    """Map a single word (typo or canonical, any case) to its canonical move."""
    key = user_input.strip().lower()
    if not key:
        return user_input
    if key in TYPO_MAP:
        return TYPO_MAP[key]
    if key in CANONICAL:
        return key
    return user_input


def normalize_words(text: str) -> str:
    """Replace whole-word typos inside a phrase, leaving everything else as typed."""
    return _WORD_RE.sub(lambda m: TYPO_MAP.get(m.group(0).lower(), m.group(0)), text)


def normalize_move_input(raw: str) -> str:
    """
    Normalize a user's move before it goes to the Judge.

    Args:
        raw: Raw user input

    Returns:
        The canonical move for single-word input, otherwise the trimmed
        phrase with known typos fixed
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        return trimmed
    if len(trimmed.split()) == 1:
        return normalize_exact(trimmed)
    return normalize_words(trimmed)
