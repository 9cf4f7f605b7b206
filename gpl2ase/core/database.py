# ==============================================================================
# DATABASE MODULE
# ==============================================================================
# SQLite history of palette conversions. Uses SQLAlchemy ORM for clean data
# access.
#
# Tables:
#   - conversions: One row per .gpl -> .ase conversion
# ==============================================================================

import os
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import Boolean, Column, DateTime, Integer, String, create_engine, func
from sqlalchemy.orm import declarative_base, sessionmaker

# ==============================================================================
# SQLAlchemy Base Class
# ==============================================================================
Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ==============================================================================
# CONVERSION MODEL
# ==============================================================================
# One converted palette. Hashes let the user tell whether a source palette
# changed since it was last converted.
#
# Example:
#   conversion = Conversion(source_path="forest.gpl", output_path="forest.ase",
#                           color_count=32)
# ==============================================================================
class Conversion(Base):
    """
    A palette conversion that completed successfully.

    Attributes:
        id (int):            Unique identifier
        source_path (str):   Absolute path of the .gpl file
        output_path (str):   Absolute path of the written .ase file
        palette_name (str):  Value of the 'Name:' directive, if any
        color_count (int):   Number of colors written
        truncated (bool):    Whether colors were dropped at the capacity limit
        source_md5 (str):    MD5 of the .gpl file
        output_md5 (str):    MD5 of the .ase file
        preview_path (str):  PNG preview path, if one was written
        created_at:          When the conversion ran (UTC)
    """
    __tablename__ = 'conversions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    source_path = Column(String(500), nullable=False)
    output_path = Column(String(500), nullable=False)
    palette_name = Column(String(200), nullable=True)
    color_count = Column(Integer, nullable=False, default=0)
    truncated = Column(Boolean, default=False)
    source_md5 = Column(String(32), nullable=True)
    output_md5 = Column(String(32), nullable=True)
    preview_path = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=_utcnow)

    def __repr__(self):
        return (f"<Conversion(id={self.id}, source='{self.source_path}', "
                f"colors={self.color_count})>")


# ==============================================================================
# DATABASE CLASS
# ==============================================================================
# Usage:
#   db = Database("/home/me/.config/GPL2ASE/history.db")
#   db.record_conversion("forest.gpl", "forest.ase", color_count=32)
#   recent = db.get_recent_conversions(10)
# ==============================================================================
class Database:
    """
    Database manager for the conversion history.

    Attributes:
        db_path (str): Path to the SQLite database file
        engine: SQLAlchemy engine instance
        Session: SQLAlchemy session factory
    """

    def __init__(self, db_path: str):
        """
        Initialize the database connection.

        Args:
            db_path: Path to the SQLite database file.
                    The file will be created if it doesn't exist.
        """
        self.db_path = str(db_path)

        directory = os.path.dirname(self.db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        self.engine = create_engine(f'sqlite:///{self.db_path}', echo=False)

        # Objects stay readable after their session is closed
        self.Session = sessionmaker(bind=self.engine, expire_on_commit=False)

        Base.metadata.create_all(self.engine)

    def close(self):
        """Release pooled connections (closes the SQLite file)."""
        self.engine.dispose()

    # ==========================================================================
    # CONVERSION OPERATIONS
    # ==========================================================================

    def record_conversion(self, source_path: str, output_path: str,
                          color_count: int, truncated: bool = False,
                          palette_name: Optional[str] = None,
                          source_md5: Optional[str] = None,
                          output_md5: Optional[str] = None,
                          preview_path: Optional[str] = None) -> Conversion:
        """
        Store a finished conversion.

        Returns:
            The created Conversion object
        """
        session = self.Session()
        try:
            conversion = Conversion(
                source_path=source_path,
                output_path=output_path,
                palette_name=palette_name or None,
                color_count=color_count,
                truncated=truncated,
                source_md5=source_md5,
                output_md5=output_md5,
                preview_path=preview_path,
            )
            session.add(conversion)
            session.commit()
            return conversion
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get_recent_conversions(self, limit: int = 20) -> List[Conversion]:
        """Most recent conversions first."""
        session = self.Session()
        try:
            return (session.query(Conversion)
                    .order_by(Conversion.created_at.desc(), Conversion.id.desc())
                    .limit(limit)
                    .all())
        finally:
            session.close()

    def get_conversions_for_source(self, source_path: str) -> List[Conversion]:
        """All conversions of one .gpl file, oldest first."""
        session = self.Session()
        try:
            return (session.query(Conversion)
                    .filter(Conversion.source_path == source_path)
                    .order_by(Conversion.id)
                    .all())
        finally:
            session.close()

    def get_stats(self) -> Dict[str, int]:
        """
        Get overall history statistics.

        Returns:
            Dict with 'conversions', 'colors', 'truncated' and 'sources' counts
        """
        session = self.Session()
        try:
            return {
                'conversions': session.query(func.count(Conversion.id)).scalar() or 0,
                'colors': session.query(func.sum(Conversion.color_count)).scalar() or 0,
                'truncated': (session.query(func.count(Conversion.id))
                              .filter(Conversion.truncated.is_(True))
                              .scalar() or 0),
                'sources': (session.query(func.count(func.distinct(Conversion.source_path)))
                            .scalar() or 0),
            }
        finally:
            session.close()
