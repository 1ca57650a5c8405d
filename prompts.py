"""
Prompt for the AI Judge.

The rules live here, not in code: the model does intent understanding,
game logic and response generation from this text alone.
"""

from state import RoundState, TOTAL_ROUNDS


RULES = """
## Game rules (you must apply these exactly)

1. **Valid moves** (exactly these, nothing else):
   - rock
   - paper
   - scissors
   - bomb (can be used by the player ONLY ONCE in the entire game)

2. **Outcomes**:
   - rock beats scissors; scissors beats paper; paper beats rock.
   - bomb beats rock, paper, and scissors.
   - bomb vs bomb -> draw.

3. **Move interpretation**:
   - If the user's message clearly indicates one valid move -> VALID. Infer the move (rock/paper/scissors/bomb).
   - If the user's message is ambiguous or could mean multiple things -> UNCLEAR. Do not guess; set move to null.
   - If the user's message is not a valid move (wrong word, irrelevant, or bomb when already used) -> INVALID. Set move to null.

4. **Turn outcome**:
   - Invalid or unclear moves waste the turn (no score change; round_winner is null).
   - Valid move: determine round_winner from the user's move vs the bot's move using the rules above.
"""

OUTPUT_SCHEMA = """
## Output format (respond with valid JSON only, no markdown or extra text)

{
  "intent": {
    "status": "VALID" | "INVALID" | "UNCLEAR",
    "move": "rock" | "paper" | "scissors" | "bomb" | null,
    "reason": "One sentence: why this status?"
  },
  "round_winner": "user" | "bot" | "draw" | null,
  "response": "2-4 sentences for the user: round number, moves played, who won (or that the turn was wasted), and what happens next. Be clear and concise."
}
"""

ROUND_TEMPLATE = """{rules}
{output_schema}

---

## This round

- **Round number:** {round}
- **Current scores:** User {user_score} - Bot {bot_score}
- **Bomb already used by user this game?** {bomb_used}
- **User's message (free text):** "{user_input}"
- **Bot's move (already chosen):** {bot_move}
- **Is this the last round of the game?** {is_last_round}

---

## Your task

1. **Intent:** From the user's message, decide status (VALID / INVALID / UNCLEAR), the move if valid (rock/paper/scissors/bomb), and a short reason. If bomb was already used and user said bomb -> INVALID. If ambiguous -> UNCLEAR. Never invent a move the user did not clearly give.

2. **Game logic:** Only if intent is VALID, determine round_winner (user / bot / draw) using the rules. If INVALID or UNCLEAR, set both move and round_winner to null (turn wasted).

3. **Response:** Write the "response" string for the user: state the round number, what moves were played (or that the move was invalid/unclear), who won or that the turn was wasted, and what happens next (scores and next round, or final result if this is the last round). Do not include JSON in the response text, only in your overall output.

Reply with ONLY the JSON object (no markdown code fence, no explanation outside the JSON)."""


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def build_round_prompt(
    state: RoundState,
    user_input: str,
    bot_move: str,
    total_rounds: int = TOTAL_ROUNDS
) -> str:
    """
    Build the full prompt for one round.

    Args:
        state: Current game state
        user_input: User's free-text move, passed through verbatim
        bot_move: Bot's move for this round (rock/paper/scissors)
        total_rounds: Rounds in the game, so the Judge can announce the final result

    Returns:
        Prompt string
    """
    # User text is inserted literally, braces included
    return ROUND_TEMPLATE.format(
        rules=RULES,
        output_schema=OUTPUT_SCHEMA,
        round=state.round,
        user_score=state.user_score,
        bot_score=state.bot_score,
        bomb_used=_yes_no(state.bomb_used),
        user_input=user_input,
        bot_move=bot_move,
        is_last_round=_yes_no(state.round >= total_rounds),
    )
