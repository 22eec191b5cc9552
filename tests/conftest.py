import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Re-read `LZS_*` settings for every test and drop them afterwards."""
    from lzs.configs import reset_settings

    for name in (
        'LZS_JSON_LIB', 'LZS_COMPACT', 'LZS_ENSURE_ASCII',
        'LZS_STRICT_REGISTRATION', 'LZS_LOG_LEVEL', 'LZS_DEBUG_ENABLED',
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
