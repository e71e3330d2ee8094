"""
Record Store Adapter

Typed read/write access to the record families the engine folds over:
player ratings, tournament brackets, league standings counters, match
participations and court bookings.

Architecture:
- RecordStore: the contract the engine components depend on
- SQLRecordStore: async SQLAlchemy implementation over the Database class

Every SQLAlchemy failure surfaces as StoreIOError. Each call runs in its
own session; there are no cross-call transactions, so concurrent writers
to the same row follow last-write-wins.
"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from datetime import date
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from courtside.constants import BookingConstants, TournamentConstants
from courtside.database.models import (
    Player, Tournament, MiniLeague, LeaguePlayer, Match, MatchPlayer, CourtBooking
)
from courtside.data_models.bracket import Bracket
from courtside.data_models.leaderboard import (
    LeaguePlayerCounters, LeagueStanding, ParticipationRecord, PlayerSummary, TournamentSummary
)
from courtside.data_models.tier import BookingRecord
from courtside.services.base import BaseService
from courtside.utils.exceptions import NotFoundError, StoreIOError
from courtside.utils.logger import setup_logger

logger = setup_logger(__name__)


class RecordStore(ABC):
    """Read/write contract between the engine and the record store."""

    @abstractmethod
    async def get_participant_rating(self, player_id: str, sport: Optional[str] = None) -> Optional[float]:
        """Current Elo rating, or None when the player is unknown or unrated."""

    @abstractmethod
    async def set_participant_rating(self, player_id: str, rating: float) -> None:
        pass

    @abstractmethod
    async def get_bracket(self, tournament_id: str) -> Optional[Bracket]:
        pass

    @abstractmethod
    async def save_bracket(self, tournament_id: str, bracket: Bracket) -> None:
        pass

    @abstractmethod
    async def get_league_player_counters(self, league_id: str, player_id: str) -> Optional[LeaguePlayerCounters]:
        pass

    @abstractmethod
    async def increment_league_player_counters(self, league_id: str, player_id: str,
                                               deltas: LeaguePlayerCounters) -> None:
        pass

    @abstractmethod
    async def get_confirmed_bookings(self, player_id: str, since: date) -> List[BookingRecord]:
        """Confirmed bookings on or after ``since``, ascending by booking date."""

    @abstractmethod
    async def get_match_participations(self, match_id: str) -> Optional[List[ParticipationRecord]]:
        """Participation records of a match, or None when the match is unknown."""

    @abstractmethod
    async def get_completed_tournaments(self) -> List[TournamentSummary]:
        """Completed tournaments that have a bracket, newest start date first."""

    @abstractmethod
    async def get_sport_players(self, sport: str) -> List[PlayerSummary]:
        pass

    @abstractmethod
    async def get_league_standings_rows(self, league_id: str) -> Optional[List[LeagueStanding]]:
        """Unordered standings rows (position 0), or None when the league is unknown."""


class SQLRecordStore(BaseService, RecordStore):
    """RecordStore backed by the async SQLAlchemy Database."""

    def __init__(self, database):
        self.db = database

    @property
    def session_factory(self):
        # Resolved per call so a store built before initialize() still works
        return self.db.async_session

    @asynccontextmanager
    async def _session(self, operation: str):
        if self.session_factory is None:
            raise StoreIOError("session", "database not initialized")
        try:
            async with self.get_session() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Store operation {operation} failed: {e}")
            raise StoreIOError(operation, str(e)) from e

    # Ratings
    async def get_participant_rating(self, player_id: str, sport: Optional[str] = None) -> Optional[float]:
        async with self._session("get_participant_rating") as session:
            query = select(Player.elo_rating).where(Player.id == player_id)
            if sport:
                query = query.where(Player.sport == sport)
            result = await session.execute(query)
            return result.scalar_one_or_none()

    async def set_participant_rating(self, player_id: str, rating: float) -> None:
        async with self._session("set_participant_rating") as session:
            result = await session.execute(
                update(Player)
                .where(Player.id == player_id)
                .values(elo_rating=rating)
            )
            if result.rowcount == 0:
                raise NotFoundError("player", player_id)

    # Brackets
    async def get_bracket(self, tournament_id: str) -> Optional[Bracket]:
        async with self._session("get_bracket") as session:
            tournament = await session.get(Tournament, tournament_id)
            if not tournament or not tournament.bracket_data:
                return None
            return self._parse_bracket(tournament)

    async def save_bracket(self, tournament_id: str, bracket: Bracket) -> None:
        async with self._session("save_bracket") as session:
            result = await session.execute(
                update(Tournament)
                .where(Tournament.id == tournament_id)
                .values(bracket_data=bracket.to_dict())
            )
            if result.rowcount == 0:
                raise NotFoundError("tournament", tournament_id)

    async def get_completed_tournaments(self) -> List[TournamentSummary]:
        async with self._session("get_completed_tournaments") as session:
            result = await session.execute(
                select(Tournament)
                .where(Tournament.status == TournamentConstants.COMPLETED)
                .order_by(Tournament.start_date.desc(), Tournament.id)
            )
            summaries = []
            for tournament in result.scalars().all():
                if not tournament.bracket_data:
                    continue
                summaries.append(TournamentSummary(
                    tournament_id=tournament.id,
                    name=tournament.name,
                    start_date=tournament.start_date,
                    bracket=self._parse_bracket(tournament),
                ))
            return summaries

    @staticmethod
    def _parse_bracket(tournament: Tournament) -> Bracket:
        try:
            return Bracket.from_dict(tournament.bracket_data, sport=tournament.sport)
        except (KeyError, TypeError, ValueError) as e:
            raise StoreIOError("parse_bracket", f"tournament {tournament.id}: {e}") from e

    # League standings
    async def get_league_player_counters(self, league_id: str, player_id: str) -> Optional[LeaguePlayerCounters]:
        async with self._session("get_league_player_counters") as session:
            result = await session.execute(
                select(LeaguePlayer).where(
                    LeaguePlayer.league_id == league_id,
                    LeaguePlayer.player_id == player_id,
                )
            )
            row = result.scalar_one_or_none()
            if row is None:
                return None
            return LeaguePlayerCounters(
                played=row.matches_played,
                won=row.matches_won,
                lost=row.matches_lost,
                points=row.points,
            )

    async def increment_league_player_counters(self, league_id: str, player_id: str,
                                               deltas: LeaguePlayerCounters) -> None:
        # Single UPDATE so the read-add-write happens inside the database
        async with self._session("increment_league_player_counters") as session:
            result = await session.execute(
                update(LeaguePlayer)
                .where(
                    LeaguePlayer.league_id == league_id,
                    LeaguePlayer.player_id == player_id,
                )
                .values(
                    matches_played=LeaguePlayer.matches_played + deltas.played,
                    matches_won=LeaguePlayer.matches_won + deltas.won,
                    matches_lost=LeaguePlayer.matches_lost + deltas.lost,
                    points=LeaguePlayer.points + deltas.points,
                )
            )
            if result.rowcount == 0:
                raise NotFoundError("league player", (league_id, player_id))

    async def get_league_standings_rows(self, league_id: str) -> Optional[List[LeagueStanding]]:
        async with self._session("get_league_standings_rows") as session:
            league = await session.get(MiniLeague, league_id)
            if league is None:
                return None
            result = await session.execute(
                select(LeaguePlayer, Player)
                .join(Player, Player.id == LeaguePlayer.player_id)
                .where(LeaguePlayer.league_id == league_id)
            )
            return [
                LeagueStanding(
                    position=0,
                    player_id=player.id,
                    name=player.name,
                    rating=player.skill_level,
                    played=entry.matches_played,
                    won=entry.matches_won,
                    lost=entry.matches_lost,
                    points=entry.points,
                )
                for entry, player in result.all()
            ]

    # Matches
    async def get_match_participations(self, match_id: str) -> Optional[List[ParticipationRecord]]:
        async with self._session("get_match_participations") as session:
            match = await session.get(Match, match_id)
            if match is None:
                return None
            result = await session.execute(
                select(MatchPlayer)
                .where(MatchPlayer.match_id == match_id)
                .order_by(MatchPlayer.id)
            )
            return [self._to_participation(mp) for mp in result.scalars().all()]

    async def get_sport_players(self, sport: str) -> List[PlayerSummary]:
        async with self._session("get_sport_players") as session:
            result = await session.execute(
                select(Player)
                .options(selectinload(Player.match_players))
                .where(Player.sport == sport)
                .order_by(Player.name)
            )
            return [
                PlayerSummary(
                    player_id=player.id,
                    name=player.name,
                    sport=player.sport,
                    elo_rating=player.elo_rating,
                    participations=[self._to_participation(mp) for mp in player.match_players],
                )
                for player in result.scalars().all()
            ]

    @staticmethod
    def _to_participation(match_player: MatchPlayer) -> ParticipationRecord:
        return ParticipationRecord(
            match_id=match_player.match_id,
            player_id=match_player.player_id,
            performance_rating=match_player.performance_rating,
            feedback=match_player.feedback,
            created_at=match_player.created_at,
        )

    # Bookings
    async def get_confirmed_bookings(self, player_id: str, since: date) -> List[BookingRecord]:
        async with self._session("get_confirmed_bookings") as session:
            result = await session.execute(
                select(CourtBooking)
                .where(
                    CourtBooking.player_id == player_id,
                    CourtBooking.status == BookingConstants.CONFIRMED,
                    CourtBooking.booking_date >= since,
                )
                .order_by(CourtBooking.booking_date, CourtBooking.id)
            )
            return [
                BookingRecord(
                    booking_date=booking.booking_date,
                    created_at=booking.created_at,
                    status=booking.status,
                )
                for booking in result.scalars().all()
            ]
