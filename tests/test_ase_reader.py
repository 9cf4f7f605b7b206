import struct

import pytest

from conftest import REFERENCE_ARCHIVE
from gpl2ase.core.errors import FormatError
from gpl2ase.parsers.ase_reader import decode_archive, read_archive


def _name(text):
    text += "\x00"
    return struct.pack('>H', len(text)) + text.encode("utf-16-be")


def _block(block_type, payload):
    return struct.pack('>Hi', block_type, len(payload)) + payload


def _archive(blocks, count=None):
    count = len(blocks) if count is None else count
    return b"ASEF" + struct.pack('>HHi', 1, 0, count) + b"".join(blocks)


def test_decode_reference_archive():
    swatches = decode_archive(REFERENCE_ARCHIVE)

    assert [s.name for s in swatches] == ["b8c2b9", "382b26"]
    assert [s.to_rgb() for s in swatches] == [(184, 194, 185), (56, 43, 38)]
    assert swatches[0].color_type_name == "Global"


def test_groups_are_walked_over():
    color = _block(0x0001, _name("Red") + b"RGB " + struct.pack('>3f', 1.0, 0.0, 0.0)
                   + struct.pack('>h', 2))
    data = _archive([
        _block(0xC001, _name("Group")),
        color,
        _block(0xC002, b""),
    ])

    swatches = decode_archive(data)

    assert len(swatches) == 1
    assert swatches[0].name == "Red"
    assert swatches[0].to_rgb() == (255, 0, 0)
    assert swatches[0].color_type_name == "Normal"


def test_bad_signature():
    with pytest.raises(FormatError):
        decode_archive(b"ASEX" + REFERENCE_ARCHIVE[4:])


def test_bad_version():
    with pytest.raises(FormatError):
        decode_archive(b"ASEF\x00\x02\x00\x00\x00\x00\x00\x00")


def test_too_small():
    with pytest.raises(FormatError):
        decode_archive(b"ASEF")


def test_truncated_block():
    with pytest.raises(FormatError):
        decode_archive(REFERENCE_ARCHIVE[:-10])


def test_count_larger_than_blocks():
    with pytest.raises(FormatError):
        decode_archive(_archive([], count=1))


def test_unsupported_color_model():
    cmyk = _block(0x0001, _name("Ink") + b"CMYK" + struct.pack('>4f', 0, 0, 0, 1)
                  + struct.pack('>h', 0))

    with pytest.raises(FormatError) as excinfo:
        decode_archive(_archive([cmyk]), source="ink.ase")

    assert "CMYK" in str(excinfo.value)
    assert "ink.ase" in str(excinfo.value)


def test_read_archive_from_file(tmp_path):
    path = tmp_path / "ref.ase"
    path.write_bytes(REFERENCE_ARCHIVE)

    assert len(read_archive(str(path))) == 2


def test_malformed_swatch_name():
    # Lone high surrogate followed by the terminator
    bad_name = struct.pack('>H', 2) + b"\xd8\x00\x00\x00"
    block = _block(0x0001, bad_name + b"RGB " + struct.pack('>3f', 0, 0, 0)
                   + struct.pack('>h', 0))

    with pytest.raises(FormatError) as excinfo:
        decode_archive(_archive([block]), source="bad.ase")

    assert "Invalid swatch name" in str(excinfo.value)
