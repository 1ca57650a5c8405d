"""
Voice mode: the user speaks, ElevenLabs transcribes, the Judge decides,
and the Judge's response is read back with text-to-speech.

POST /api/voice takes base64 audio and returns the round outcome as JSON.
POST /api/new-game resets the game.
"""

import base64
import binascii
import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from judge import judge_round
from normalize import normalize_move_input
from speech import SpeechError, speak, transcribe
from state import (
    apply_round_result,
    choose_bot_move,
    create_state,
    get_final_result,
    get_total_rounds,
    is_game_over,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)

# One game per server process
game = {"state": create_state()}


def _game_over_payload(state):
    return {
        "gameOver": True,
        "finalResult": get_final_result(state),
        "userScore": state.user_score,
        "botScore": state.bot_score,
        "message": "Game over. Start a new game to play again.",
    }


@app.post("/api/voice")
def api_voice():
    api_key = os.getenv("ELEVENLABS_API_KEY")
    if not api_key:
        return jsonify({"error": "ELEVENLABS_API_KEY is not set."}), 500

    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        data = {}
    audio_b64 = data.get("audioBase64") or data.get("audio")
    mime_type = data.get("mimeType") or "audio/webm"
    if not audio_b64:
        return jsonify({"error": "Missing audioBase64 in body."}), 400

    total_rounds = get_total_rounds()
    state = game["state"]
    if is_game_over(state, total_rounds):
        return jsonify(_game_over_payload(state))

    try:
        audio = base64.b64decode(audio_b64)
    except (binascii.Error, ValueError):
        return jsonify({"error": "audioBase64 is not valid base64."}), 400

    try:
        transcribed = transcribe(audio, api_key, mime_type)
    except (SpeechError, OSError) as e:
        logger.error("Voice handler error: %s", e)
        return jsonify({"error": str(e) or "Server error."}), 500

    normalized = normalize_move_input(transcribed)
    result = judge_round(state, normalized, choose_bot_move(), total_rounds=total_rounds)
    state = apply_round_result(state, result)
    game["state"] = state

    audio_out = None
    try:
        spoken = speak(result.response, api_key)
        if spoken:
            audio_out = base64.b64encode(spoken).decode("ascii")
    except (SpeechError, OSError) as e:
        logger.error("TTS failed: %s", e)

    over = is_game_over(state, total_rounds)
    payload = result.to_dict()
    return jsonify({
        "transcribedText": transcribed or "(no speech detected)",
        "normalizedInput": normalized or transcribed,
        "response": payload["response"],
        "intent": payload["intent"],
        "roundWinner": payload["round_winner"],
        "round": total_rounds if over else state.round,
        "userScore": state.user_score,
        "botScore": state.bot_score,
        "gameOver": over,
        "finalResult": get_final_result(state) if over else None,
        "audioBase64": audio_out,
    })


@app.post("/api/new-game")
def api_new_game():
    game["state"] = create_state()
    return jsonify({"ok": True, "message": "New game started."})


def main():
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    port = int(os.getenv("VOICE_PORT") or 3001)
    logger.info("Voice mode: http://localhost:%d", port)
    logger.info("Set ELEVENLABS_API_KEY and ANTHROPIC_API_KEY (or GEMINI_API_KEY) in .env")
    app.run(port=port)


if __name__ == "__main__":
    main()
