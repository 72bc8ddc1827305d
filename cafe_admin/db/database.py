"""SQLAlchemy engine and sessions for the menu database."""

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from cafe_admin.config import get_settings

settings = get_settings()


def engine_options(database_url: str, echo: bool = False) -> dict:
    """Keyword arguments for ``create_engine`` suited to the backend.

    Server databases get a pre-pinged connection pool. SQLite gets no pool
    sizing and may be shared across the threadpool FastAPI runs sync
    dependencies on.

    Args:
        database_url: SQLAlchemy database URL.
        echo: Log emitted SQL.

    Returns:
        dict: Engine options.
    """
    options: dict = {"echo": echo}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(pool_pre_ping=True, pool_size=5, max_overflow=10)
    return options


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores ``ON DELETE RESTRICT`` on ``menu_items.category_id``
    otherwise.
    """

    @event.listens_for(engine, "connect")
    def set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()


engine = create_engine(settings.database_url, **engine_options(settings.database_url, settings.debug))
if settings.database_url.startswith("sqlite"):
    enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session, closed when the request ends."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the menu tables when running in debug mode.

    Deployed databases are expected to have the categories, menu_items,
    allergens and menu_item_allergens tables already.
    """
    from cafe_admin.db.models import Base

    if settings.debug:
        Base.metadata.create_all(bind=engine)
