import pytest

ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "ANTHROPIC_MODEL",
    "GEMINI_MODEL",
    "TOTAL_ROUNDS",
    "ELEVENLABS_API_KEY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Tests never see real credentials from the developer's shell."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
