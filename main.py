"""
Rock-Paper-Scissors-Bomb with an AI Judge.

CLI game loop. The Judge (Claude or Gemini) understands the move, decides
the round and writes the reply; this loop only reads input, picks the bot
move, calls the Judge and keeps the minimal state.
"""

import logging
import traceback

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from judge import judge_round
from normalize import normalize_move_input
from state import (
    apply_round_result,
    choose_bot_move,
    create_state,
    get_game_summary,
    get_total_rounds,
    is_game_over,
)

QUIT_COMMANDS = {"quit", "exit"}


def print_banner(total_rounds: int):
    print("=" * 60)
    print("ROCK-PAPER-SCISSORS-BOMB · AI JUDGE")
    print("=" * 60)
    print("Rules: Valid moves are rock, paper, scissors, bomb (bomb once only; bomb beats all).")
    print(f"You have {total_rounds} rounds. Enter your move in free text.\n")


def run_game():
    """Main game loop."""
    total_rounds = get_total_rounds()
    state = create_state()
    print_banner(total_rounds)

    try:
        while not is_game_over(state, total_rounds):
            print(f"--- Round {state.round} (User {state.user_score} - Bot {state.bot_score}) ---")
            user_input = input("Your move (free text): ").strip()
            if user_input.lower() in QUIT_COMMANDS:
                print("Game ended.")
                return

            result = judge_round(
                state,
                normalize_move_input(user_input),
                choose_bot_move(),
                total_rounds=total_rounds,
            )

            print(f"\n{result.response}\n")
            if result.intent.reason:
                print(f"[Intent: {result.intent.status} - {result.intent.reason}]\n")

            state = apply_round_result(state, result)

        print(get_game_summary(state))

    except (KeyboardInterrupt, EOFError):
        print("\nGame ended.")
    except Exception as e:
        print(f"\nError occurred: {e}")
        traceback.print_exc()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    run_game()


if __name__ == "__main__":
    main()
