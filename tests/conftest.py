import sys
from pathlib import Path

import pytest

# Make 'src' importable when the package has not been installed
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep every test away from the real user preferences directory."""
    monkeypatch.setenv("ROOMS_CONFIG_DIR", str(tmp_path / "rooms-config"))
    monkeypatch.delenv("ROOMS_LOG_LEVEL", raising=False)
    return tmp_path / "rooms-config"
