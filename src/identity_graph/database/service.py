# ABOUTME: Database service for managing SQLite connections, sessions and write transactions.
# ABOUTME: Writes are serialized by a process-wide lock and committed or rolled back as one unit.

import logging
import threading
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlmodel import Session, SQLModel, create_engine

from identity_graph.models import STATS_ROW_ID, RegistryStats

logger = logging.getLogger(__name__)


class DatabaseService:
    """Service for managing database connections and transactions."""

    DEFAULT_DB_PATH = Path.home() / ".identity-graph" / "graph.db"

    def __init__(self, db_path: Path | None = None, echo: bool = False) -> None:
        """Initialize the database service.

        Args:
            db_path: Path to the SQLite database file. Defaults to ~/.identity-graph/graph.db
            echo: Echo emitted SQL statements.
        """
        self.db_path = db_path if db_path is not None else self.DEFAULT_DB_PATH
        self._engine = create_engine(
            f"sqlite:///{self.db_path}",
            echo=echo,
            connect_args={"check_same_thread": False},
        )
        self._write_lock = threading.RLock()

    def init_db(self) -> None:
        """Create tables, parent directories and the zero-valued counters row."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        SQLModel.metadata.create_all(self._engine)
        with self.transaction() as session:
            if session.get(RegistryStats, STATS_ROW_ID) is None:
                session.add(RegistryStats(id=STATS_ROW_ID))
                logger.debug("Initialized registry counters in %s", self.db_path)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a read session as a context manager.

        Yields:
            SQLModel Session for database reads.
        """
        with Session(self._engine) as session:
            yield session

    @contextmanager
    def read_snapshot(self) -> Generator[Session, None, None]:
        """Get a read session whose queries all see the same committed state.

        Holds the write lock so no local write commits between the queries, and
        opens an explicit SQLite read transaction so writers in other processes
        wait until the session closes.

        Yields:
            SQLModel Session for a group of related reads.
        """
        with self._write_lock, Session(self._engine) as session:
            session.connection().exec_driver_sql("BEGIN")
            yield session

    @contextmanager
    def transaction(self) -> Generator[Session, None, None]:
        """Run a block as a single atomic write.

        Only one transaction runs at a time per service. The session is
        committed when the block exits normally and rolled back if it raises;
        the exception propagates unchanged.

        Yields:
            SQLModel Session whose objects stay readable after commit.
        """
        with self._write_lock, Session(self._engine, expire_on_commit=False) as session:
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise

    def dispose(self) -> None:
        """Release pooled connections held by the engine."""
        self._engine.dispose()
