"""
Database configuration and session management using SQLAlchemy.
"""

import os

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

# Load environment variables
load_dotenv()

# Database URL from environment
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./smartflora.db")

# Base class for models
Base = declarative_base()


def make_engine(url: str, **kwargs) -> Engine:
    """
    Create an engine for the given URL.

    SQLite connections are shared with FastAPI's threadpool, so the
    same-thread check is disabled for them.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)  # Verify connections before using
    return create_engine(
        url,
        echo=os.getenv("DEBUG", "false").lower() == "true",
        **kwargs,
    )


# Create engine
engine = make_engine(DATABASE_URL)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine) -> None:
    """
    Initialize the database by creating all tables.

    Called on application startup; the schema is a single key-value table.
    """
    # Import models so they are registered on Base.metadata
    from smartflora import db_models  # noqa: F401

    Base.metadata.create_all(bind=bind)
