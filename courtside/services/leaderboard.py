"""
Leaderboard projector

Read-only composition of Elo ratings and match performance for
presentation, plus the league standings table. Performs no writes.
"""

import math
from dataclasses import replace
from datetime import datetime, timedelta
from typing import List, Optional

from courtside.config import Config
from courtside.constants import PaginationConstants
from courtside.data_models.leaderboard import (
    LeaderboardEntry, LeaderboardPage, LeagueStanding, PlayerSummary
)
from courtside.utils.elo import EloCalculator
from courtside.utils.exceptions import NotFoundError
from courtside.utils.logger import setup_logger

logger = setup_logger(__name__)

SORT_KEYS = ('elo', 'performance')
WIN_MARKERS = ('won', 'victory')


class LeaderboardProjector:
    """Builds leaderboard pages and league tables from store reads."""

    def __init__(self, store, config=None):
        self.store = store
        self.config = config or Config

    def project_player(self, player: PlayerSummary, now: datetime,
                       current_player_id: Optional[str] = None) -> LeaderboardEntry:
        """Leaderboard row for one player; rank is assigned later."""
        participations = player.participations
        matches_played = len(participations)

        total_rating = sum(p.performance_rating or 0 for p in participations)
        performance = total_rating / matches_played if matches_played else 0.0

        # Feedback is the only win signal; matched case-insensitively so "Victory" counts
        wins = sum(
            1 for p in participations
            if p.feedback and any(marker in p.feedback.lower() for marker in WIN_MARKERS)
        )
        win_percentage = (wins / matches_played) * 100 if matches_played else 0.0

        recent_cutoff = now - timedelta(days=self.config.RECENT_MATCH_DAYS)
        recent = sum(1 for p in participations if p.created_at and p.created_at >= recent_cutoff)

        elo = self.config.DEFAULT_ELO if player.elo_rating is None else player.elo_rating

        return LeaderboardEntry(
            rank=0,
            player_id=player.player_id,
            name=player.name,
            sport=player.sport,
            elo_rating=elo,
            rank_description=EloCalculator.get_rank_description(elo),
            matches_played=matches_played,
            performance_rating=performance,
            win_percentage=win_percentage,
            recent_matches=recent,
            is_current_user=current_player_id is not None and current_player_id == player.player_id,
        )

    async def get_page(
        self,
        sport: str,
        sort_by: str = "elo",
        page: int = 1,
        page_size: int = PaginationConstants.DEFAULT_PAGE_SIZE,
        current_player_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LeaderboardPage:
        """Paginated leaderboard of players with at least one match."""
        if not isinstance(page, int) or page < 1:
            raise ValueError("page must be a positive integer")
        if not isinstance(page_size, int) or page_size < 1 or page_size > PaginationConstants.MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {PaginationConstants.MAX_PAGE_SIZE}")
        if sort_by not in SORT_KEYS:
            raise ValueError(f"Invalid sort_by value: {sort_by}")

        now = now or datetime.now()
        players = await self.store.get_sport_players(sport)
        entries = [
            self.project_player(player, now, current_player_id)
            for player in players
            if player.participations
        ]

        if sort_by == "elo":
            entries.sort(key=lambda e: (-e.elo_rating, e.name))
        else:
            entries.sort(key=lambda e: (-e.performance_rating, e.name))

        ranked = [
            replace(entry, rank=index + 1)
            for index, entry in enumerate(entries)
        ]

        total = len(ranked)
        offset = (page - 1) * page_size
        return LeaderboardPage(
            entries=ranked[offset:offset + page_size],
            current_page=page,
            total_pages=max(1, math.ceil(total / page_size)),
            total_players=total,
            sort_by=sort_by,
            sport=sport,
        )

    async def get_league_standings(self, league_id: str) -> List[LeagueStanding]:
        """League table ordered by points, then wins, then name."""
        rows = await self.store.get_league_standings_rows(league_id)
        if rows is None:
            raise NotFoundError("league", league_id)

        rows = sorted(rows, key=lambda r: (-r.points, -r.won, r.name))
        return [
            LeagueStanding(
                position=index + 1,
                player_id=row.player_id,
                name=row.name,
                rating=self.config.DEFAULT_SKILL_LEVEL if row.rating is None else row.rating,
                played=row.played,
                won=row.won,
                lost=row.lost,
                points=row.points,
            )
            for index, row in enumerate(rows)
        ]
