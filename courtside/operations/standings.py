"""
Standings Aggregator

Folds one completed league match into the cumulative league table. The
player with the higher performance rating wins; the update is additive
(played +1 for both, won +1 and points +3 for the winner, lost +1 for the
loser) and is applied to each league player row with a single atomic
increment.
"""

from dataclasses import dataclass
from typing import List, Optional

from courtside.config import Config
from courtside.data_models.leaderboard import LeaguePlayerCounters, ParticipationRecord
from courtside.utils.exceptions import InvalidMatchDataError, NotFoundError
from courtside.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class StandingsUpdate:
    """Counter deltas applied for one player"""
    player_id: str
    deltas: LeaguePlayerCounters


def determine_winner(participations: List[ParticipationRecord]) -> Optional[str]:
    """
    Winner of a two-player match by performance rating.

    Returns None when either rating is absent or both are equal. A tie
    leaves the match undecided rather than picking a row by position.

    Raises:
        InvalidMatchDataError: If there are not exactly two participations
    """
    if len(participations) != 2:
        match_id = participations[0].match_id if participations else None
        raise InvalidMatchDataError(match_id, len(participations))

    first, second = participations
    if first.performance_rating is None or second.performance_rating is None:
        return None
    if first.performance_rating == second.performance_rating:
        return None
    return first.player_id if first.performance_rating > second.performance_rating else second.player_id


def standings_deltas(participations: List[ParticipationRecord], winner_id: str,
                     config=None) -> List[StandingsUpdate]:
    """Counter deltas for each participant given the winner."""
    config = config or Config
    updates = []
    for participation in participations:
        won = participation.player_id == winner_id
        updates.append(StandingsUpdate(
            player_id=participation.player_id,
            deltas=LeaguePlayerCounters(
                played=1,
                won=1 if won else 0,
                lost=0 if won else 1,
                points=config.LEAGUE_WIN_POINTS if won else 0,
            ),
        ))
    return updates


class StandingsAggregator:
    """Applies completed match results to league standings."""

    def __init__(self, store, config=None):
        self.store = store
        self.config = config or Config

    async def update_league_standings(self, match_id: str, league_id: str) -> List[StandingsUpdate]:
        """
        Apply one match result to the league table.

        Returns:
            Applied updates; empty when no winner can be determined yet

        Raises:
            NotFoundError: If the match or a participant's league entry is absent
            InvalidMatchDataError: If the match does not have exactly two participations
            StoreIOError: If a read or write fails
        """
        participations = await self.store.get_match_participations(match_id)
        if participations is None:
            raise NotFoundError("match", match_id)
        if len(participations) != 2:
            raise InvalidMatchDataError(match_id, len(participations))

        winner_id = determine_winner(participations)
        if winner_id is None:
            logger.info(f"Match {match_id} has no winner yet; league {league_id} standings unchanged")
            return []

        # Both rows must exist before either is written
        for participation in participations:
            counters = await self.store.get_league_player_counters(league_id, participation.player_id)
            if counters is None:
                raise NotFoundError("league player", (league_id, participation.player_id))

        updates = standings_deltas(participations, winner_id, self.config)
        for update in updates:
            await self.store.increment_league_player_counters(league_id, update.player_id, update.deltas)

        logger.info(f"Updated league {league_id} standings from match {match_id}: winner {winner_id}")
        return updates
