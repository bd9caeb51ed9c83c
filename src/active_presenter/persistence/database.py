# ABOUTME: Database manager for synchronous SQLModel sessions and transactions
# ABOUTME: Publishes the active session so presented records join the presenter's transaction

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar

from sqlalchemy import Engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from active_presenter.config import get_config
from active_presenter.exceptions import Rollback
from active_presenter.utils.logging import get_logger

logger = get_logger(__name__)

_current_session: ContextVar[Session | None] = ContextVar("active_presenter_session", default=None)


def current_session() -> Session | None:
    """Return the session of the transaction currently open in this context, if any."""
    return _current_session.get()


def _emit_sqlite_begin(engine: Engine) -> None:
    # pysqlite defers BEGIN until the first write, which breaks SAVEPOINT; let SQLAlchemy emit it
    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(connection):
        connection.exec_driver_sql("BEGIN")


class DatabaseManager:
    """Manages database sessions and the transaction boundary presenters save inside."""

    def __init__(self, database_url: str = "sqlite:///./active_presenter.db", echo: bool = False):
        """Initialize the database manager.

        Args:
            database_url: SQLAlchemy database URL (e.g. sqlite:///./db.db)
            echo: Log emitted SQL statements
        """
        self.database_url = database_url
        self.engine: Engine = create_engine(database_url, echo=echo, **self._engine_options(database_url))
        if self.engine.dialect.name == "sqlite":
            _emit_sqlite_begin(self.engine)

        self.session_factory = sessionmaker(
            self.engine,
            class_=Session,
            expire_on_commit=False,  # Allow access to attributes after commit
        )

    @staticmethod
    def _engine_options(database_url: str) -> dict:
        # In-memory SQLite is per-connection; share one connection so every session sees the same tables
        if database_url.startswith("sqlite") and (":memory:" in database_url or database_url.rstrip("/") == "sqlite:"):
            return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
        return {}

    def create_tables(self) -> None:
        """Create all database tables if they don't exist."""
        SQLModel.metadata.create_all(self.engine)

    def close(self) -> None:
        """Close the database connection."""
        self.engine.dispose()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Get a plain database session for reads.

        Usage:
            with db.session() as session:
                # Use session here
        """
        with self.session_factory() as session:
            yield session

    @contextmanager
    def transaction(self) -> Generator[Session, None, None]:
        """Run the body in one transaction.

        Commits on normal exit. Rolls back on :class:`Rollback` (swallowed) or
        on any other exception (re-raised). Entering while a transaction is
        already active in this context joins its session through a SAVEPOINT,
        so a rollback only undoes the inner block and the outer one carries on.
        """
        active = _current_session.get()
        if active is not None:
            yield from self._savepoint(active)
            return

        with self.session_factory() as session:
            token = _current_session.set(session)
            try:
                yield session
                session.commit()
                logger.debug("Transaction committed")
            except Rollback:
                session.rollback()
                logger.info("Transaction rolled back")
            except Exception:
                session.rollback()
                logger.warning("Transaction rolled back on error", exc_info=True)
                raise
            finally:
                _current_session.reset(token)

    @staticmethod
    def _savepoint(session: Session) -> Generator[Session, None, None]:
        savepoint = session.begin_nested()
        try:
            yield session
            savepoint.commit()
        except Rollback:
            savepoint.rollback()
            logger.info("Savepoint rolled back")
        except Exception:
            savepoint.rollback()
            logger.warning("Savepoint rolled back on error", exc_info=True)
            raise


# Global database instance - lazy loaded when first accessed
_database_instance: DatabaseManager | None = None


def get_database() -> DatabaseManager:
    """Get the global database manager, built from configuration on first access."""
    global _database_instance
    if _database_instance is None:
        config = get_config()
        _database_instance = DatabaseManager(config.database_url, echo=config.database_echo)
    return _database_instance


def set_database(database: DatabaseManager | None) -> None:
    """Replace the global database manager (``None`` resets to the configured default)."""
    global _database_instance
    _database_instance = database
