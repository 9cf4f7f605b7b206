import pytest

from gpl2ase.core.database import Database


@pytest.fixture
def db(tmp_path):
    database = Database(str(tmp_path / "data" / "history.db"))
    yield database
    database.close()


def test_record_conversion(db):
    conversion = db.record_conversion(
        "/p/forest.gpl", "/p/forest.ase", color_count=32,
        palette_name="Forest", source_md5="a" * 32, output_md5="b" * 32,
    )

    assert conversion.id is not None
    assert conversion.color_count == 32
    assert conversion.created_at is not None
    assert conversion.truncated is False


def test_recent_conversions_newest_first(db):
    for i in range(5):
        db.record_conversion(f"/p/{i}.gpl", f"/p/{i}.ase", color_count=i)

    recent = db.get_recent_conversions(limit=3)

    assert [c.color_count for c in recent] == [4, 3, 2]


def test_conversions_for_source(db):
    db.record_conversion("/p/a.gpl", "/p/a.ase", color_count=1)
    db.record_conversion("/p/b.gpl", "/p/b.ase", color_count=2)
    db.record_conversion("/p/a.gpl", "/p/a2.ase", color_count=3)

    rows = db.get_conversions_for_source("/p/a.gpl")

    assert [r.output_path for r in rows] == ["/p/a.ase", "/p/a2.ase"]


def test_stats(db):
    assert db.get_stats() == {'conversions': 0, 'colors': 0, 'truncated': 0, 'sources': 0}

    db.record_conversion("/p/a.gpl", "/p/a.ase", color_count=10)
    db.record_conversion("/p/a.gpl", "/p/a.ase", color_count=2048, truncated=True)
    db.record_conversion("/p/b.gpl", "/p/b.ase", color_count=5)

    assert db.get_stats() == {'conversions': 3, 'colors': 2063, 'truncated': 1, 'sources': 2}
