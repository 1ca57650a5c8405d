"""Tests for the CLI game loop, with input and the Judge faked."""

import pytest

import main
from state import Intent, JudgeResult


def _result(winner, move="rock"):
    return JudgeResult(
        intent=Intent(status="VALID", move=move, reason="clear"),
        round_winner=winner,
        response=f"Round goes to {winner}.",
    )


@pytest.fixture
def typed(monkeypatch):
    def install(*lines):
        answers = iter(lines)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    return install


def test_three_rounds_to_a_draw(monkeypatch, typed, capsys):
    typed("rock", "scissor", "paper")
    winners = iter(["user", "bot", "draw"])
    seen = []

    def fake_judge(state, user_input, bot_move, **kwargs):
        seen.append((state.round, user_input))
        return _result(next(winners))
    monkeypatch.setattr(main, "judge_round", fake_judge)

    main.run_game()

    out = capsys.readouterr().out
    assert seen == [(1, "rock"), (2, "scissors"), (3, "paper")]
    assert "Round goes to bot." in out
    assert "[Intent: VALID - clear]" in out
    assert "Scores: User 1 - Bot 1" in out
    assert "Draw." in out


def test_quit_ends_game_early(monkeypatch, typed, capsys):
    typed("QUIT")
    monkeypatch.setattr(main, "judge_round", lambda *a, **k: pytest.fail("judge called"))

    main.run_game()

    assert "Game ended." in capsys.readouterr().out


def test_total_rounds_override(monkeypatch, typed, capsys):
    monkeypatch.setenv("TOTAL_ROUNDS", "1")
    typed("bomb")
    monkeypatch.setattr(main, "judge_round", lambda *a, **k: _result("user", "bomb"))

    main.run_game()

    out = capsys.readouterr().out
    assert "You have 1 rounds" in out
    assert "User wins." in out
