"""
Database configuration
"""
from sqlmodel import SQLModel, create_engine

from core.config import get_settings

# Created on first use so tests can swap settings before anything connects
_engine = None


def get_engine():
    """
    Get or create the database engine.
    """
    global _engine
    if _engine is None:
        uri = str(get_settings().SQLALCHEMY_DATABASE_URI)
        # FastAPI runs sync routes in a threadpool
        connect_args = {"check_same_thread": False} if uri.startswith("sqlite") else {}
        _engine = create_engine(uri, echo=False, connect_args=connect_args)
    return _engine


def create_db_and_tables():
    """Create every table registered on SQLModel.metadata"""
    # Import models so they register with the metadata
    import api.auth.models  # noqa: F401
    import api.projects.models  # noqa: F401
    import api.experiences.models  # noqa: F401
    import api.resumes.models  # noqa: F401
    import api.certificates.models  # noqa: F401
    import api.settings.models  # noqa: F401

    SQLModel.metadata.create_all(get_engine())
