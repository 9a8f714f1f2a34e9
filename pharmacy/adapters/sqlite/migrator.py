import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).with_name("migrations")


class SQLiteMigrator:
    """Applies the Up part of each pending ``NNN_name.sql`` file, one transaction per file."""

    def __init__(self, db_path: str, migrations_dir: str | Path = MIGRATIONS_DIR):
        self.db_path = db_path
        self.migrations_dir = Path(migrations_dir)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def pending(self, conn: sqlite3.Connection) -> list[Path]:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                filename TEXT UNIQUE NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
        """)
        conn.commit()
        done = {row[0] for row in conn.execute("SELECT filename FROM _migrations")}
        return [p for p in sorted(self.migrations_dir.glob("*.sql")) if p.name not in done]

    def run_migrations(self) -> list[str]:
        """Apply all pending migrations. Returns the filenames applied."""
        conn = self._connect()
        try:
            applied = []
            for path in self.pending(conn):
                logger.info("Applying migration: %s", path.name)
                self._apply(conn, path)
                applied.append(path.name)
            logger.info("Database schema up to date (%d applied).", len(applied))
            return applied
        finally:
            conn.close()

    @staticmethod
    def up_script(path: Path) -> str:
        # Anything after "-- Down" is the revert script and never runs here
        return path.read_text().split("-- Down", 1)[0]

    def _apply(self, conn: sqlite3.Connection, path: Path) -> None:
        # executescript() autocommits each statement unless wrapped in BEGIN/COMMIT
        up = self.up_script(path).rstrip()
        if not up.endswith(";"):
            up += ";"
        name = path.name.replace("'", "''")
        script = (
            "BEGIN;\n"
            f"{up}\n"
            f"INSERT INTO _migrations (filename) VALUES ('{name}');\n"
            "COMMIT;"
        )
        try:
            conn.executescript(script)
        except sqlite3.Error as e:
            if conn.in_transaction:
                conn.rollback()
            raise RuntimeError(f"Migration {path.name} failed: {e}") from e
