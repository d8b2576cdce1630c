import os
import sys

import pytest

# Ensure project root is importable during tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from mcp_vision.config import Settings


@pytest.fixture
def settings():
    return Settings(api_key="test-key")


@pytest.fixture
def clean_env(monkeypatch):
    # keep developer machines' GEMINI_* variables out of config tests, and
    # drop whatever load_dotenv() adds to the process environment afterwards
    saved = dict(os.environ)
    for name in list(os.environ):
        if name.startswith(("GEMINI_", "VISION_", "GOOGLE_")) or name in ("IMAGE_QUALITY", "LOG_LEVEL", "DEBUG"):
            monkeypatch.delenv(name, raising=False)
    yield
    os.environ.clear()
    os.environ.update(saved)
