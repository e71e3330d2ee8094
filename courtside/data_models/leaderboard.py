"""
Leaderboard data models.

Provides immutable data transfer objects for leaderboard, standings and
achievement read views.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from courtside.data_models.bracket import Bracket


@dataclass(frozen=True)
class ParticipationRecord:
    """One player's record in one match."""
    match_id: str
    player_id: str
    performance_rating: Optional[float]
    feedback: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class LeaguePlayerCounters:
    played: int = 0
    won: int = 0
    lost: int = 0
    points: int = 0


@dataclass(frozen=True)
class PlayerSummary:
    """Player row with the participations the leaderboard folds over."""
    player_id: str
    name: str
    sport: str
    elo_rating: Optional[float]
    participations: List[ParticipationRecord]


@dataclass(frozen=True)
class LeaderboardEntry:
    """Single leaderboard row."""
    rank: int
    player_id: str
    name: str
    sport: str
    elo_rating: float
    rank_description: str
    matches_played: int
    performance_rating: float
    win_percentage: float
    recent_matches: int
    is_current_user: bool


@dataclass(frozen=True)
class LeaderboardPage:
    """Paginated leaderboard data."""
    entries: List[LeaderboardEntry]
    current_page: int
    total_pages: int
    total_players: int
    sort_by: str
    sport: str


@dataclass(frozen=True)
class LeagueStanding:
    position: int
    player_id: str
    name: str
    rating: Optional[float]
    played: int
    won: int
    lost: int
    points: int


@dataclass(frozen=True)
class TournamentSummary:
    """Completed tournament with its bracket, as read for achievements."""
    tournament_id: str
    name: str
    start_date: Optional[date]
    bracket: Bracket


@dataclass(frozen=True)
class TournamentAchievement:
    type: str  # 'winner', 'runner_up', 'semifinalist'
    tournament_id: str
    tournament_name: str
    date: Optional[date]
