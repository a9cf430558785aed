"""
Database connection and session management
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from contextlib import contextmanager
from xero_audit.config import load_settings
from .models import Base


class Database:
    def __init__(self, db_url: str):
        self.db_url = db_url
        if self.db_url.startswith("sqlite"):
            self.engine = create_engine(
                self.db_url,
                connect_args={"check_same_thread": False},
                echo=False
            )
        else:
            self.engine = create_engine(self.db_url, echo=False)

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def create_tables(self):
        """Create all tables"""
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self):
        """Drop all tables"""
        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def get_session(self) -> Session:
        """Context manager for database sessions"""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self):
        self.engine.dispose()


# Process-wide instance for the web app and scripts
_db_instance = None


def get_db(db_url: str = None) -> Database:
    global _db_instance
    if _db_instance is None:
        _db_instance = Database(db_url or load_settings().database_url)
    return _db_instance
