import json

import pytest

from conftest import REFERENCE_ARCHIVE
from gpl2ase.cli import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, main
from gpl2ase.core.config import get_config


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "cli-config.json"
    path.write_text(json.dumps({"database_path": str(tmp_path / "cli-history.db")}),
                    encoding="utf-8")
    return str(path)


@pytest.fixture
def gpl(write_gpl):
    return write_gpl(["GIMP Palette", "Name: Ref", "184 194 185", "56 43 38"], name="ref.gpl")


def test_convert(gpl, config_file, tmp_path, capsys):
    code = main(["--config", config_file, "convert", gpl, str(tmp_path / "ref")])

    assert code == EXIT_OK
    assert (tmp_path / "ref.ase").read_bytes() == REFERENCE_ARCHIVE
    out = capsys.readouterr().out
    assert "2 colors saved" in out
    assert "Ref" in out


def test_convert_invalid_palette(write_gpl, config_file, capsys):
    bad = write_gpl(["GIMP Palette", "300 0 0"], name="bad.gpl")

    code = main(["--config", config_file, "convert", bad])

    assert code == EXIT_FAILURE
    assert "Invalid palette" in capsys.readouterr().err


def test_convert_missing_input(tmp_path, config_file, capsys):
    code = main(["--config", config_file, "convert", str(tmp_path / "missing.gpl")])

    assert code == EXIT_FAILURE
    assert capsys.readouterr().err


def test_convert_refuses_existing_with_no_overwrite(gpl, config_file, tmp_path):
    (tmp_path / "ref.ase").write_bytes(b"old")

    code = main(["--config", config_file, "convert", gpl, "--no-overwrite"])

    assert code == EXIT_FAILURE
    assert (tmp_path / "ref.ase").read_bytes() == b"old"


def test_convert_capacity_and_preview(write_gpl, config_file, tmp_path, capsys):
    source = write_gpl(["GIMP Palette"] + ["1 2 3"] * 5, name="five.gpl")

    code = main(["--config", config_file, "convert", source,
                 "--capacity", "2", "--preview", "--no-history"])

    assert code == EXIT_OK
    out = capsys.readouterr().out
    assert "2 colors saved" in out
    assert "max palette colors is 2" in out
    assert (tmp_path / "five.png").exists()
    assert not (tmp_path / "cli-history.db").exists()


def test_convert_bad_capacity(gpl, config_file):
    assert main(["--config", config_file, "convert", gpl, "--capacity", "-1"]) == EXIT_USAGE


def test_inspect(tmp_path, capsys):
    archive = tmp_path / "ref.ase"
    archive.write_bytes(REFERENCE_ARCHIVE)

    code = main(["inspect", str(archive)])

    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert "b8c2b9" in out
    assert "382b26" in out
    assert "Total: 2 swatches" in out


def test_inspect_limit(tmp_path, capsys):
    archive = tmp_path / "ref.ase"
    archive.write_bytes(REFERENCE_ARCHIVE)

    main(["inspect", str(archive), "--limit", "1"])

    assert "... and 1 more" in capsys.readouterr().out


def test_inspect_invalid_archive(tmp_path, capsys):
    archive = tmp_path / "junk.ase"
    archive.write_bytes(b"not an archive")

    assert main(["inspect", str(archive)]) == EXIT_FAILURE
    assert "Invalid archive" in capsys.readouterr().err


def test_history_and_stats(gpl, config_file, capsys):
    assert main(["--config", config_file, "history"]) == EXIT_OK
    assert "No conversions recorded" in capsys.readouterr().out

    main(["--config", config_file, "convert", gpl])
    capsys.readouterr()

    assert main(["--config", config_file, "history"]) == EXIT_OK
    assert "ref.ase" in capsys.readouterr().out

    assert main(["--config", config_file, "stats"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Conversions:          1" in out
    assert "Colors written:       2" in out


def test_no_command_prints_help(capsys):
    assert main([]) == EXIT_USAGE
    assert "usage:" in capsys.readouterr().out


def test_unknown_option_exits_with_usage_code():
    with pytest.raises(SystemExit) as excinfo:
        main(["convert"])
    assert excinfo.value.code == 2


def test_inspect_malformed_swatch_name(tmp_path, capsys):
    archive = tmp_path / "bad.ase"
    archive.write_bytes(
        b"ASEF\x00\x01\x00\x00\x00\x00\x00\x01"
        b"\x00\x01\x00\x00\x00\x18\x00\x02\xd8\x00\x00\x00"
        b"RGB " + b"\x00" * 12 + b"\x00\x00"
    )

    assert main(["inspect", str(archive)]) == EXIT_FAILURE
    assert "Invalid archive" in capsys.readouterr().err


def test_convert_flags_do_not_leak_into_global_config(gpl, tmp_path):
    code = main(["convert", gpl, str(tmp_path / "once"),
                 "--capacity", "1", "--preview", "--no-history", "--debug"])

    assert code == EXIT_OK
    config = get_config()
    assert config.palette_capacity == 2048
    assert config.generate_preview is False
    assert config.record_history is True
    assert config.debug_mode is False
    assert not config.modified
