"""SQLite storage for players, sessions and guesses."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from game.domain.entities import Guess, Player, Session, SessionSummary
from game.errors import InvariantViolationError, StorageError

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"

SCHEMA = """
CREATE TABLE IF NOT EXISTS players
         (id       INTEGER PRIMARY KEY,
          nick     TEXT UNIQUE NOT NULL,
          score    INTEGER NOT NULL DEFAULT 0);

CREATE TABLE IF NOT EXISTS sessions
         (id               INTEGER PRIMARY KEY,
          start_date       INTEGER NOT NULL,
          end_date         INTEGER,
          planned_end_date INTEGER NOT NULL,
          word             TEXT NOT NULL,
          winner_id        INTEGER REFERENCES players(id) ON DELETE NO ACTION,
          active           INTEGER NOT NULL DEFAULT 1);

CREATE UNIQUE INDEX IF NOT EXISTS sessions_single_active
    ON sessions(active) WHERE active = 1;

CREATE TABLE IF NOT EXISTS current_session
         (id            INTEGER PRIMARY KEY DEFAULT 0 CHECK (id = 0),
          session_id    INTEGER REFERENCES sessions(id) ON DELETE NO ACTION);

INSERT OR IGNORE INTO current_session(id) VALUES (0);

CREATE TABLE IF NOT EXISTS guesses
         (id         INTEGER PRIMARY KEY,
          session_id INTEGER NOT NULL REFERENCES sessions(id) ON DELETE NO ACTION,
          player_id  INTEGER NOT NULL REFERENCES players(id) ON DELETE NO ACTION,
          guess      TEXT NOT NULL,
          similarity REAL NOT NULL);

CREATE INDEX IF NOT EXISTS guesses_by_session ON guesses(session_id);
"""

SESSION_COLUMNS = "id, start_date, end_date, planned_end_date, word, winner_id, active"


def to_timestamp(value: datetime) -> int:
    return int(value.timestamp())


def from_timestamp(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as exc:
        logger.error("Storage failure while %s: %s", action, exc)
        raise StorageError(f"{action} failed: {exc}") from exc


def _row_to_player(row: sqlite3.Row) -> Player:
    return Player(id=row["id"], nickname=row["nick"], score=row["score"])


def _row_to_session(row: sqlite3.Row) -> Session:
    return Session(
        id=row["id"],
        started_at=from_timestamp(row["start_date"]),
        planned_end_at=from_timestamp(row["planned_end_date"]),
        ended_at=from_timestamp(row["end_date"]),
        secret_word=row["word"],
        winner_id=row["winner_id"],
        active=bool(row["active"]),
    )


def _row_to_guess(row: sqlite3.Row) -> Guess:
    return Guess(
        id=row["id"],
        session_id=row["session_id"],
        player_id=row["player_id"],
        guess=row["guess"],
        similarity=row["similarity"],
    )


class GameStore:
    """Durable record of players, sessions and guesses.

    The connection is shared between worker threads; callers serialize
    access (see ``game.facade.Game``). Writes happen inside
    :meth:`transaction`, which joins an enclosing transaction when nested.
    """

    def __init__(self, db_path: str | Path = MEMORY_DB, read_only: bool = False):
        self._db_path = str(db_path)
        self._read_only = read_only
        if read_only and self._db_path == MEMORY_DB:
            raise ValueError("an in-memory database cannot be opened read-only")

        if read_only:
            # mode=ro never writes anything to disk
            target = Path(self._db_path).resolve().as_uri() + "?mode=ro"
        else:
            target = self._db_path
            if self._db_path != MEMORY_DB:
                Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

        with storage_errors("opening database"):
            self._conn = sqlite3.connect(target, check_same_thread=False, uri=read_only)
            try:
                self._conn.row_factory = sqlite3.Row
                self._conn.execute("PRAGMA foreign_keys=ON")
                if not read_only:
                    self._conn.executescript(SCHEMA)
                    self._conn.commit()
            except sqlite3.Error:
                self._conn.close()
                raise

        self._in_transaction = False
        logger.info(
            "Opened game database %s%s", self._db_path, " (read-only)" if read_only else ""
        )

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def read_only(self) -> bool:
        return self._read_only

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        if self._in_transaction:
            yield self._conn
            return

        self._in_transaction = True
        try:
            with storage_errors("transaction"):
                with self._conn:
                    yield self._conn
        finally:
            self._in_transaction = False

    def close(self) -> None:
        with storage_errors("closing database"):
            self._conn.close()
        logger.info("Closed game database %s", self._db_path)

    # Players

    def get_player(self, player_id: int) -> Optional[Player]:
        with storage_errors("loading player"):
            row = self._conn.execute(
                "SELECT id, nick, score FROM players WHERE id = ?", (player_id,)
            ).fetchone()
        return _row_to_player(row) if row else None

    def get_player_by_nickname(self, nickname: str) -> Optional[Player]:
        with storage_errors("loading player"):
            row = self._conn.execute(
                "SELECT id, nick, score FROM players WHERE nick = ?", (nickname,)
            ).fetchone()
        return _row_to_player(row) if row else None

    def get_or_create_player(self, nickname: str) -> Tuple[Player, bool]:
        player = self.get_player_by_nickname(nickname)
        if player is not None:
            return player, False

        with self.transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO players(nick, score) VALUES (?, 0)", (nickname,)
            )
        return Player(id=cursor.lastrowid, nickname=nickname, score=0), True

    def add_score(self, player_id: int, points: int) -> None:
        with self.transaction() as conn:
            cursor = conn.execute(
                "UPDATE players SET score = score + ? WHERE id = ?", (points, player_id)
            )
            if cursor.rowcount == 0:
                raise InvariantViolationError(f"player {player_id} does not exist")

    def list_players(self) -> List[Player]:
        with storage_errors("listing players"):
            rows = self._conn.execute(
                "SELECT id, nick, score FROM players ORDER BY score DESC, nick ASC"
            ).fetchall()
        return [_row_to_player(row) for row in rows]

    # Sessions

    def create_session(
        self,
        started_at: datetime,
        planned_end_at: datetime,
        secret_word: str,
    ) -> Session:
        with self.transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO sessions(start_date, planned_end_date, word, active) "
                "VALUES (?, ?, ?, 1)",
                (to_timestamp(started_at), to_timestamp(planned_end_at), secret_word),
            )
            session = self.get_session(cursor.lastrowid)

        logger.debug("Created session row %d", session.id)
        return session

    def end_session(
        self,
        session_id: int,
        ended_at: datetime,
        winner_id: Optional[int] = None,
    ) -> Session:
        with self.transaction() as conn:
            cursor = conn.execute(
                "UPDATE sessions SET end_date = ?, winner_id = ?, active = 0 "
                "WHERE id = ? AND active = 1",
                (to_timestamp(ended_at), winner_id, session_id),
            )
            if cursor.rowcount == 0:
                raise InvariantViolationError(f"session {session_id} is not active")
            session = self.get_session(session_id)

        return session

    def get_session(self, session_id: int) -> Optional[Session]:
        with storage_errors("loading session"):
            row = self._conn.execute(
                f"SELECT {SESSION_COLUMNS} FROM sessions WHERE id = ?", (session_id,)
            ).fetchone()
        return _row_to_session(row) if row else None

    def active_sessions(self) -> List[Session]:
        with storage_errors("listing active sessions"):
            rows = self._conn.execute(
                f"SELECT {SESSION_COLUMNS} FROM sessions WHERE active = 1 ORDER BY id"
            ).fetchall()
        return [_row_to_session(row) for row in rows]

    def recent_sessions(self, limit: int = 20) -> List[SessionSummary]:
        with storage_errors("listing sessions"):
            rows = self._conn.execute(
                """
                SELECT s.id, s.start_date, s.end_date, s.planned_end_date, s.word,
                       s.winner_id, s.active, p.nick AS winner_nick,
                       (SELECT COUNT(*) FROM guesses g WHERE g.session_id = s.id)
                           AS guess_count
                FROM sessions s
                LEFT JOIN players p ON p.id = s.winner_id
                ORDER BY s.id DESC
                LIMIT ?
                """,
                (limit,),
            ).fetchall()

        return [
            SessionSummary(
                **_row_to_session(row).model_dump(),
                winner_nickname=row["winner_nick"],
                guess_count=row["guess_count"],
            )
            for row in rows
        ]

    def current_session_id(self) -> Optional[int]:
        with storage_errors("loading current session"):
            row = self._conn.execute(
                "SELECT session_id FROM current_session WHERE id = 0"
            ).fetchone()
        return row["session_id"] if row else None

    def set_current_session(self, session_id: Optional[int]) -> None:
        with self.transaction() as conn:
            conn.execute(
                "UPDATE current_session SET session_id = ? WHERE id = 0", (session_id,)
            )

    # Guesses

    def insert_guess(
        self,
        session_id: int,
        player_id: int,
        guess: str,
        similarity: float,
    ) -> Guess:
        with self.transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO guesses(session_id, player_id, guess, similarity) "
                "VALUES (?, ?, ?, ?)",
                (session_id, player_id, guess, similarity),
            )
        return Guess(
            id=cursor.lastrowid,
            session_id=session_id,
            player_id=player_id,
            guess=guess,
            similarity=similarity,
        )

    def count_guesses(self, session_id: Optional[int] = None) -> int:
        with storage_errors("counting guesses"):
            if session_id is None:
                row = self._conn.execute("SELECT COUNT(*) FROM guesses").fetchone()
            else:
                row = self._conn.execute(
                    "SELECT COUNT(*) FROM guesses WHERE session_id = ?", (session_id,)
                ).fetchone()
        return row[0]

    def list_guesses(self, session_id: int) -> List[Guess]:
        with storage_errors("listing guesses"):
            rows = self._conn.execute(
                "SELECT id, session_id, player_id, guess, similarity FROM guesses "
                "WHERE session_id = ? ORDER BY id",
                (session_id,),
            ).fetchall()
        return [_row_to_guess(row) for row in rows]
