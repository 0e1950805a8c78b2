"""Tests for the Game facade used by async callers."""

import asyncio
from datetime import timedelta

import pytest

from game.domain.entities import OutcomeKind
from game.errors import NoActiveSessionError
from game.facade import Game


@pytest.fixture
def game(engine):
    return Game(engine, max_workers=4)


class TestGame:
    @pytest.mark.asyncio
    async def test_start_and_guess(self, game):
        session = await game.start_session(timedelta(hours=1))

        assert (await game.current_session()) == session

        outcome = await game.process_guess("alice", "cat")
        assert outcome.kind == OutcomeKind.MISS

        outcome = await game.process_guess("alice", "dog")
        assert outcome.is_win
        assert await game.current_session() is None

        await game.close()

    @pytest.mark.asyncio
    async def test_concurrent_winning_guesses_have_one_winner(self, game, store):
        session = await game.start_session(timedelta(hours=1))

        results = await asyncio.gather(
            *(game.process_guess(f"player{i}", "dog") for i in range(10)),
            return_exceptions=True,
        )

        wins = [r for r in results if not isinstance(r, Exception) and r.is_win]
        rejected = [r for r in results if isinstance(r, NoActiveSessionError)]
        assert len(wins) == 1
        assert len(rejected) == 9
        assert store.count_guesses(session.id) == 1
        assert [p.score for p in await game.players()][0] == 1

        await game.close()

    @pytest.mark.asyncio
    async def test_concurrent_misses_are_all_recorded(self, game, store):
        session = await game.start_session(timedelta(hours=1))

        await asyncio.gather(*(game.process_guess(f"p{i}", "fish") for i in range(20)))

        assert await game.guess_count(session.id) == 20
        assert len(store.list_players()) == 20

        await game.close()

    @pytest.mark.asyncio
    async def test_thesaurus(self, game):
        neighbors = await game.thesaurus("dog", 1)

        assert [n.term for n in neighbors] == ["fish"]
        assert await game.thesaurus("xyzzy", 1) is None

        await game.close()

    @pytest.mark.asyncio
    async def test_end_session_and_history(self, game):
        await game.start_session(timedelta(hours=1))
        await game.end_session()

        sessions = await game.recent_sessions(5)

        assert len(sessions) == 1
        assert sessions[0].active is False
        with pytest.raises(NoActiveSessionError):
            await game.process_guess("alice", "dog")

        await game.close()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, game):
        await game.close()
        await game.close()
