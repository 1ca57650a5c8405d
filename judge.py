"""
AI Judge: one model call per round (Claude or Gemini, whichever key is set).

The model does intent understanding, game logic and response generation.
This module only calls the API, retries on rate limits and validates the
structured output. No game logic here.
"""

import json
import logging
import math
import os
import re
import time
from typing import Optional, Tuple

import anthropic
from google import genai

from state import (
    BOT_MOVES,
    STATUSES,
    TOTAL_ROUNDS,
    VALID_MOVES,
    WINNERS,
    Intent,
    JudgeResult,
    RoundState,
)
from prompts import build_round_prompt

logger = logging.getLogger(__name__)

MAX_RETRIES = 2  # on rate limit only, 3 attempts total
DEFAULT_RETRY_SECONDS = 10
MAX_TOKENS = 1024
MAX_RAW_RESPONSE_CHARS = 500
MAX_ERROR_CHARS = 120

ANTHROPIC_DEFAULT_MODEL = "claude-3-5-haiku-latest"
GEMINI_DEFAULT_MODEL = "gemini-2.0-flash"

CLAUDE_SYSTEM_PROMPT = (
    "You are an AI Judge for a Rock-Paper-Scissors-Bomb game. "
    "Reply with only valid JSON, no markdown or extra text."
)

_RATE_LIMIT_RE = re.compile(r"429|quota|Too Many Requests|rate limit", re.IGNORECASE)
_RETRY_IN_RE = re.compile(r"retry in (\d+(?:\.\d+)?)\s*s", re.IGNORECASE)
_NOT_FOUND_RE = re.compile(r"404|not found", re.IGNORECASE)
_AUTH_RE = re.compile(r"401|403|API key", re.IGNORECASE)
_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*([\s\S]*?)```$")


def call_claude(prompt: str, api_key: str, model: str) -> str:
    """Call the Anthropic Messages API and return the reply text."""
    client = anthropic.Anthropic(api_key=api_key)
    message = client.messages.create(
        model=model,
        max_tokens=MAX_TOKENS,
        system=CLAUDE_SYSTEM_PROMPT,
        messages=[{"role": "user", "content": prompt}],
    )
    text = next(
        (block.text for block in message.content if block.type == "text"),
        "",
    )
    return (text or "").strip()


def call_gemini(prompt: str, api_key: str, model: str) -> str:
    """Call Gemini and return the reply text."""
    client = genai.Client(api_key=api_key)
    response = client.models.generate_content(model=model, contents=prompt)
    return (response.text or "").strip()


PROVIDERS = {
    "claude": call_claude,
    "gemini": call_gemini,
}

MODEL_ENV = {
    "claude": ("ANTHROPIC_MODEL", ANTHROPIC_DEFAULT_MODEL),
    "gemini": ("GEMINI_MODEL", GEMINI_DEFAULT_MODEL),
}


def get_provider(api_key: Optional[str] = None) -> Tuple[Optional[str], Optional[str]]:
    """
    Pick the provider from the available credentials. Claude wins if both are set.

    Args:
        api_key: Explicit Anthropic key, overrides ANTHROPIC_API_KEY

    Returns:
        (provider name, api key), or (None, None) when no key is configured
    """
    anthropic_key = api_key or os.getenv("ANTHROPIC_API_KEY")
    gemini_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    if anthropic_key:
        return "claude", anthropic_key
    if gemini_key:
        return "gemini", gemini_key
    return None, None


def resolve_model(provider: str, model: Optional[str] = None) -> str:
    if model:
        return model
    env_var, default = MODEL_ENV[provider]
    return os.getenv(env_var) or default


def is_rate_limit_error(err: Optional[BaseException]) -> bool:
    return bool(_RATE_LIMIT_RE.search(str(err or "")))


def parse_retry_delay(err: Optional[BaseException]) -> int:
    """Parse "Please retry in 7.845474055s" into whole seconds (8)."""
    match = _RETRY_IN_RE.search(str(err or ""))
    if match:
        return math.ceil(float(match.group(1)))
    return DEFAULT_RETRY_SECONDS


def short_error(err: Optional[BaseException], provider: Optional[str]) -> str:
    """Short user-facing message for an API error."""
    msg = str(err or "")
    if is_rate_limit_error(err):
        return f"Rate limit exceeded. Wait ~{parse_retry_delay(err)}s and try again."
    if _NOT_FOUND_RE.search(msg):
        if provider == "gemini":
            return "Model not found. Try setting GEMINI_MODEL (e.g. gemini-2.0-flash)."
        return "Model not found. Try setting ANTHROPIC_MODEL (e.g. claude-3-5-haiku-latest)."
    if _AUTH_RE.search(msg):
        return "Invalid or missing API key. Set GEMINI_API_KEY or ANTHROPIC_API_KEY."
    if len(msg) > MAX_ERROR_CHARS:
        return msg[:MAX_ERROR_CHARS] + "…"
    return msg


def _unclear(reason: str, response: str) -> JudgeResult:
    return JudgeResult(
        intent=Intent(status="UNCLEAR", move=None, reason=reason),
        round_winner=None,
        response=response,
    )


def parse_structured_output(text: str) -> JudgeResult:
    """
    Parse the Judge's JSON reply into a validated JudgeResult.

    A surrounding markdown code fence is stripped first. Every field is
    checked against its allowed values; anything out of range is coerced
    (status -> UNCLEAR, move/winner -> None) instead of rejected. A non-VALID
    status always clears move and winner.

    Args:
        text: Raw reply text from the model

    Returns:
        JudgeResult, never raises
    """
    json_str = text.strip()
    fenced = _CODE_FENCE_RE.match(json_str)
    if fenced:
        json_str = fenced.group(1).strip()

    try:
        obj = json.loads(json_str)
    except (ValueError, RecursionError):
        obj = None
    if not isinstance(obj, dict):
        return _unclear("Response was not valid JSON.", text[:MAX_RAW_RESPONSE_CHARS])

    raw_intent = obj.get("intent")
    if isinstance(raw_intent, dict):
        status = raw_intent.get("status")
        move = raw_intent.get("move")
        reason = raw_intent.get("reason")
        intent = Intent(
            status=status if status in STATUSES else "UNCLEAR",
            move=move if move in VALID_MOVES else None,
            reason=reason if isinstance(reason, str) else "",
        )
    else:
        intent = Intent(status="UNCLEAR", move=None, reason="Missing intent.")

    winner = obj.get("round_winner")
    round_winner = winner if winner in WINNERS else None
    if intent.status != "VALID":
        intent.move = None
        round_winner = None

    response = obj.get("response")
    return JudgeResult(
        intent=intent,
        round_winner=round_winner,
        response=response if isinstance(response, str) else "",
    )


def judge_round(
    state: RoundState,
    user_input: str,
    bot_move: str,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    total_rounds: int = TOTAL_ROUNDS
) -> JudgeResult:
    """
    Ask the Judge to decide one round.

    Makes exactly one model call, retried up to MAX_RETRIES times when the
    provider reports a rate limit. Provider errors never escape; they come
    back as an INVALID result with a short message.

    Args:
        state: Current game state (read only)
        user_input: User's free-text move, already normalized
        bot_move: Bot's move for this round
        api_key: Optional Anthropic key override
        model: Optional model name override
        total_rounds: Rounds in the game

    Returns:
        JudgeResult with `raw` set to the reply text on success
    """
    provider, key = get_provider(api_key)
    if not provider:
        return JudgeResult(
            intent=Intent(
                status="INVALID",
                move=None,
                reason="No API key. Set GEMINI_API_KEY or ANTHROPIC_API_KEY in .env.",
            ),
            round_winner=None,
            response="Cannot run AI Judge: set either GEMINI_API_KEY or ANTHROPIC_API_KEY in .env.",
        )

    if bot_move not in BOT_MOVES:
        logger.warning("Unexpected bot move %r passed to the Judge", bot_move)

    prompt = build_round_prompt(state, user_input, bot_move, total_rounds)
    model_id = resolve_model(provider, model)
    call = PROVIDERS[provider]
    last_err = None

    for attempt in range(MAX_RETRIES + 1):
        try:
            text = call(prompt, key, model_id)
        except Exception as e:
            last_err = e
            if attempt < MAX_RETRIES and is_rate_limit_error(e):
                delay = parse_retry_delay(e)
                logger.warning(
                    "AI Judge (%s): rate limit. Retrying in %ds (attempt %d/%d)",
                    provider, delay, attempt + 1, MAX_RETRIES + 1,
                )
                time.sleep(delay)
                continue
            break

        if not text:
            return _unclear("Model returned no content.", "No response from the Judge. Try again.")

        result = parse_structured_output(text)
        result.raw = text
        return result

    summary = short_error(last_err, provider)
    logger.error("AI Judge error: %s", summary)
    return JudgeResult(
        intent=Intent(status="INVALID", move=None, reason=summary),
        round_winner=None,
        response=f"Judge error: {summary}",
    )
