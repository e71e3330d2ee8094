"""Shared fixtures: a throwaway sqlite database and an in-memory store double."""

from datetime import date
from typing import Dict, List, Optional

import pytest
import pytest_asyncio

from courtside.database import Database, RecordStore, SQLRecordStore
from courtside.data_models.bracket import Bracket, BracketMatch, BracketPlayer
from courtside.data_models.leaderboard import LeaguePlayerCounters
from courtside.data_models.tier import BookingRecord
from courtside.utils.exceptions import StoreIOError


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'courtside_test.db'}")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def store(database):
    return SQLRecordStore(database)


async def add_rows(database, *rows):
    async with database.transaction() as session:
        session.add_all(rows)


def player(player_id: str) -> BracketPlayer:
    return BracketPlayer(id=player_id, name=player_id)


def bracket_match(match_id: str, round_number: int, match_number: int,
                  p1: Optional[str], p2: Optional[str], winner: Optional[str] = None) -> BracketMatch:
    return BracketMatch(
        id=match_id,
        round=round_number,
        match_number=match_number,
        player1=player(p1) if p1 else None,
        player2=player(p2) if p2 else None,
        winner=winner,
    )


@pytest.fixture
def four_player_bracket() -> Bracket:
    """A beats B and C beats D in the semifinals, A beats C in the final."""
    return Bracket(
        matches=(
            bracket_match("R2M1", 2, 1, "A", "C", winner="A"),
            bracket_match("R1M1", 1, 1, "A", "B", winner="A"),
            bracket_match("R1M2", 1, 2, "C", "D", winner="C"),
        ),
        rounds=2,
        round_names=("Semifinals", "Final"),
    )


class InMemoryStore(RecordStore):
    """Dict-backed store; set ``fail_on`` to make named operations raise."""

    def __init__(self):
        self.ratings: Dict[str, Optional[float]] = {}
        self.brackets: Dict[str, Bracket] = {}
        self.counters: Dict[tuple, LeaguePlayerCounters] = {}
        self.participations: Dict[str, list] = {}
        self.bookings: Dict[str, List[BookingRecord]] = {}
        self.rating_writes: List[tuple] = []
        self.fail_on: Dict[str, int] = {}  # operation -> fail on the nth call (1-based)
        self._calls: Dict[str, int] = {}

    def _check(self, operation: str):
        self._calls[operation] = self._calls.get(operation, 0) + 1
        if self.fail_on.get(operation) == self._calls[operation]:
            raise StoreIOError(operation, "simulated failure")

    async def get_participant_rating(self, player_id, sport=None):
        self._check("get_participant_rating")
        return self.ratings.get(player_id)

    async def set_participant_rating(self, player_id, rating):
        self._check("set_participant_rating")
        self.ratings[player_id] = rating
        self.rating_writes.append((player_id, rating))

    async def get_bracket(self, tournament_id):
        self._check("get_bracket")
        return self.brackets.get(tournament_id)

    async def save_bracket(self, tournament_id, bracket):
        self._check("save_bracket")
        self.brackets[tournament_id] = bracket

    async def get_league_player_counters(self, league_id, player_id):
        self._check("get_league_player_counters")
        return self.counters.get((league_id, player_id))

    async def increment_league_player_counters(self, league_id, player_id, deltas):
        self._check("increment_league_player_counters")
        current = self.counters[(league_id, player_id)]
        self.counters[(league_id, player_id)] = LeaguePlayerCounters(
            played=current.played + deltas.played,
            won=current.won + deltas.won,
            lost=current.lost + deltas.lost,
            points=current.points + deltas.points,
        )

    async def get_confirmed_bookings(self, player_id, since: date):
        self._check("get_confirmed_bookings")
        return sorted(
            (b for b in self.bookings.get(player_id, []) if b.booking_date >= since),
            key=lambda b: b.booking_date,
        )

    async def get_match_participations(self, match_id):
        self._check("get_match_participations")
        return self.participations.get(match_id)

    async def get_completed_tournaments(self):
        return []

    async def get_sport_players(self, sport):
        return []

    async def get_league_standings_rows(self, league_id):
        return None


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()
