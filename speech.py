"""
ElevenLabs speech-to-text and text-to-speech for voice mode.
"""

import requests

STT_URL = "https://api.elevenlabs.io/v1/speech-to-text"
STT_MODEL = "scribe_v2"
TTS_URL = "https://api.elevenlabs.io/v1/text-to-speech/{voice_id}"
TTS_MODEL = "eleven_turbo_v2_5"
DEFAULT_VOICE_ID = "pNInz6obpgDQGcFmaJgB"  # Adam
TIMEOUT = 60
MAX_ERROR_BODY_CHARS = 200


class SpeechError(Exception):
    """Raised when the speech service is not configured or rejects a request."""


def transcribe(audio: bytes, api_key: str, mime_type: str = "audio/webm") -> str:
    """
    Transcribe recorded audio to text with ElevenLabs Scribe.

    Args:
        audio: Raw audio bytes (WAV, MP3, WebM, ...)
        api_key: ELEVENLABS_API_KEY
        mime_type: MIME type of the recording

    Returns:
        Transcribed text, stripped (may be empty if no speech was detected)
    """
    if not api_key:
        raise SpeechError("ELEVENLABS_API_KEY is required")

    r = requests.post(
        STT_URL,
        headers={"xi-api-key": api_key},
        files={"file": ("audio.webm", audio, mime_type)},
        data={"model_id": STT_MODEL},
        timeout=TIMEOUT,
    )
    if r.status_code != 200:
        raise SpeechError(
            f"ElevenLabs STT failed ({r.status_code}): {r.text[:MAX_ERROR_BODY_CHARS]}"
        )
    data = r.json() or {}
    return str(data.get("text") or "").strip()


def speak(text: str, api_key: str, voice_id: str = DEFAULT_VOICE_ID) -> bytes:
    """Convert text to speech. Returns MP3 bytes, empty for empty text."""
    if not api_key:
        raise SpeechError("ELEVENLABS_API_KEY is required")
    if not text:
        return b""

    r = requests.post(
        TTS_URL.format(voice_id=voice_id),
        headers={
            "xi-api-key": api_key,
            "Content-Type": "application/json",
            "Accept": "audio/mpeg",
        },
        json={"text": text, "model_id": TTS_MODEL},
        timeout=TIMEOUT,
    )
    if not r.ok:
        raise SpeechError(
            f"ElevenLabs TTS failed ({r.status_code}): {r.text[:MAX_ERROR_BODY_CHARS]}"
        )
    return r.content
