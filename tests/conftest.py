import pytest

from gpl2ase.core import config as config_module
from gpl2ase.core.config import Config
from gpl2ase.core.paths import Paths


# Two colors from a real GIMP palette and the archive the classic converter
# produced for them, byte for byte.
REFERENCE_COLORS = [(184, 194, 185), (56, 43, 38)]

REFERENCE_ARCHIVE = bytes.fromhex(
    "41534546 00010000 00000002"
    "0001 00000022 0007 0062 0038 0063 0032 0062 0039 0000"
    "52474220 3F38B8B9 3F42C2C3 3F39B9BA 0000"
    "0001 00000022 0007 0033 0038 0032 0062 0032 0036 0000"
    "52474220 3E60E0E1 3E2CACAD 3E189899 0000"
)


@pytest.fixture(autouse=True)
def isolated_user_data(tmp_path, monkeypatch):
    """Point config and history at a temp dir for every test."""
    user_dir = tmp_path / "userdata"
    user_dir.mkdir()
    monkeypatch.setattr(Paths, "_user_data_dir", str(user_dir))
    monkeypatch.setattr(config_module, "_global_config", None)
    return user_dir


@pytest.fixture
def config(tmp_path):
    cfg = Config(str(tmp_path / "config.json"))
    cfg.database_path = str(tmp_path / "history.db")
    return cfg


@pytest.fixture
def write_gpl(tmp_path):
    """Write a .gpl file from a list of lines and return its path."""
    def _write(lines, name="palette.gpl", newline="\n"):
        path = tmp_path / name
        path.write_bytes(newline.join(lines).encode("utf-8") + newline.encode("utf-8"))
        return str(path)
    return _write
