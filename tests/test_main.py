import main as launcher
from gpl2ase import __version__


def test_check_dependencies():
    all_ok, missing = launcher.check_dependencies()

    assert all_ok
    assert missing == []


def test_version(capsys):
    assert launcher.main(["--version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_paths(capsys, isolated_user_data):
    assert launcher.main(["--paths"]) == 0
    assert str(isolated_user_data) in capsys.readouterr().out


def test_check(capsys):
    assert launcher.main(["--check"]) == 0
    assert "[OK]" in capsys.readouterr().out


def test_forwards_to_cli(capsys, tmp_path):
    archive = tmp_path / "empty.ase"
    archive.write_bytes(b"ASEF\x00\x01\x00\x00\x00\x00\x00\x00")

    assert launcher.main(["inspect", str(archive)]) == 0
    assert "Total: 0 swatches" in capsys.readouterr().out
