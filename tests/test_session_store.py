"""Tests for the SQLite game store."""

import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from game.errors import InvariantViolationError, StorageError
from game.storage import GameStore, from_timestamp, to_timestamp

START = datetime(2026, 3, 1, 8, 30, tzinfo=timezone.utc)
END = START + timedelta(days=1)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data" / "game.db"


class TestTimestamps:
    def test_round_trip_whole_seconds(self):
        assert from_timestamp(to_timestamp(START)) == START

    def test_none(self):
        assert from_timestamp(None) is None

    def test_result_is_utc(self):
        assert from_timestamp(0).tzinfo == timezone.utc


class TestPlayers:
    def test_get_or_create_player(self, store):
        player, created = store.get_or_create_player("alice")
        again, created_again = store.get_or_create_player("alice")

        assert created is True
        assert created_again is False
        assert again == player
        assert player.score == 0

    def test_nicknames_are_case_sensitive(self, store):
        alice, _ = store.get_or_create_player("alice")
        upper, created = store.get_or_create_player("Alice")

        assert created is True
        assert upper.id != alice.id

    def test_add_score(self, store):
        player, _ = store.get_or_create_player("bob")

        store.add_score(player.id, 1)
        store.add_score(player.id, 2)

        assert store.get_player(player.id).score == 3

    def test_add_score_unknown_player(self, store):
        with pytest.raises(InvariantViolationError):
            store.add_score(42, 1)

    def test_list_players_by_score(self, store):
        for nick in ("carol", "alice", "bob"):
            store.get_or_create_player(nick)
        bob = store.get_player_by_nickname("bob")
        store.add_score(bob.id, 5)

        assert [p.nickname for p in store.list_players()] == ["bob", "alice", "carol"]

    def test_unknown_player(self, store):
        assert store.get_player(1) is None
        assert store.get_player_by_nickname("nobody") is None


class TestSessions:
    def test_create_session(self, store):
        session = store.create_session(START, END, "dog")

        assert session.active is True
        assert session.started_at == START
        assert session.planned_end_at == END
        assert session.ended_at is None
        assert session.secret_word == "dog"
        assert session.winner_id is None

    def test_end_session(self, store):
        player, _ = store.get_or_create_player("alice")
        session = store.create_session(START, END, "dog")

        ended = store.end_session(session.id, START + timedelta(hours=1), player.id)

        assert ended.active is False
        assert ended.winner_id == player.id
        assert ended.ended_at == START + timedelta(hours=1)

    def test_end_session_twice(self, store):
        session = store.create_session(START, END, "dog")
        store.end_session(session.id, END)

        with pytest.raises(InvariantViolationError):
            store.end_session(session.id, END)

    def test_single_active_session(self, store):
        store.create_session(START, END, "dog")

        with pytest.raises(StorageError):
            store.create_session(START, END, "cat")

        assert len(store.active_sessions()) == 1

    def test_current_session_pointer(self, store):
        assert store.current_session_id() is None

        session = store.create_session(START, END, "dog")
        store.set_current_session(session.id)
        assert store.current_session_id() == session.id

        store.set_current_session(None)
        assert store.current_session_id() is None

    def test_pointer_to_missing_session_is_rejected(self, store):
        with pytest.raises(StorageError):
            store.set_current_session(99)

    def test_recent_sessions(self, store):
        alice, _ = store.get_or_create_player("alice")
        first = store.create_session(START, END, "dog")
        store.insert_guess(first.id, alice.id, "cat", 0.6)
        store.insert_guess(first.id, alice.id, "dog", 1.0)
        store.end_session(first.id, START + timedelta(minutes=5), alice.id)
        second = store.create_session(END, END + timedelta(days=1), "fish")

        recent = store.recent_sessions(10)

        assert [s.id for s in recent] == [second.id, first.id]
        assert recent[0].winner_nickname is None
        assert recent[0].guess_count == 0
        assert recent[1].winner_nickname == "alice"
        assert recent[1].guess_count == 2

    def test_recent_sessions_limit(self, store):
        for i in range(3):
            session = store.create_session(START, END, f"w{i}")
            store.end_session(session.id, END)

        assert len(store.recent_sessions(2)) == 2


class TestGuesses:
    def test_insert_and_list(self, store):
        player, _ = store.get_or_create_player("alice")
        session = store.create_session(START, END, "dog")

        guess = store.insert_guess(session.id, player.id, "cat", 0.6)

        assert store.list_guesses(session.id) == [guess]
        assert store.count_guesses(session.id) == 1
        assert store.count_guesses() == 1

    def test_guess_requires_existing_rows(self, store):
        with pytest.raises(StorageError):
            store.insert_guess(1, 1, "cat", 0.5)


class TestTransactions:
    def test_rollback_on_error(self, store):
        with pytest.raises(RuntimeError):
            with store.transaction():
                store.get_or_create_player("ghost")
                raise RuntimeError("boom")

        assert store.get_player_by_nickname("ghost") is None

    def test_nested_transaction_joins_outer(self, store):
        with pytest.raises(InvariantViolationError):
            with store.transaction():
                session = store.create_session(START, END, "dog")
                store.set_current_session(session.id)
                store.add_score(7, 1)

        assert store.active_sessions() == []
        assert store.current_session_id() is None


class TestPersistence:
    def test_reopen_file_database(self, db_path):
        store = GameStore(db_path)
        session = store.create_session(START, END, "dog")
        store.set_current_session(session.id)
        store.close()

        reopened = GameStore(db_path)
        try:
            assert reopened.current_session_id() == session.id
            assert reopened.get_session(session.id) == session
        finally:
            reopened.close()

    def test_corrupt_file_closes_connection(self, tmp_path, monkeypatch):
        path = tmp_path / "corrupt.db"
        path.write_bytes(b"this is not an sqlite database " * 64)
        opened = []
        real_connect = sqlite3.connect

        def recording_connect(*args, **kwargs):
            conn = real_connect(*args, **kwargs)
            opened.append(conn)
            return conn

        monkeypatch.setattr(sqlite3, "connect", recording_connect)

        with pytest.raises(StorageError):
            GameStore(path)

        assert len(opened) == 1
        with pytest.raises(sqlite3.ProgrammingError):
            opened[0].execute("SELECT 1")


class TestReadOnly:
    def test_read_only_store_reads_history(self, db_path):
        writer = GameStore(db_path)
        alice, _ = writer.get_or_create_player("alice")
        session = writer.create_session(START, END, "dog")
        writer.close()

        reader = GameStore(db_path, read_only=True)
        try:
            assert reader.read_only is True
            assert reader.list_players() == [alice]
            assert [s.id for s in reader.recent_sessions(5)] == [session.id]

            with pytest.raises(StorageError):
                reader.get_or_create_player("bob")
        finally:
            reader.close()

    def test_read_only_never_creates_database(self, db_path):
        with pytest.raises(StorageError):
            GameStore(db_path, read_only=True)

        assert not db_path.exists()
        assert not db_path.parent.exists()

    def test_read_only_memory_database(self):
        with pytest.raises(ValueError):
            GameStore(read_only=True)
