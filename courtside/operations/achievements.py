"""
Tournament placement extraction.

Classifies how far each player got in a single-elimination bracket, with
precedence winner > runner-up > semifinalist. A player receives at most
one placement per tournament.
"""

from typing import Dict, List, Optional

from courtside.constants import AchievementConstants
from courtside.data_models.bracket import Bracket
from courtside.data_models.leaderboard import TournamentAchievement
from courtside.utils.logger import setup_logger

logger = setup_logger(__name__)


def classify_player(bracket: Bracket, player_id: str) -> Optional[str]:
    """
    Highest placement of one player in a bracket.

    The final is the first match of round ``bracket.rounds``. Anyone in a
    final with both slots filled who is not its recorded winner is a
    runner-up, whether or not a winner has been recorded yet.

    Returns:
        'winner', 'runner_up', 'semifinalist' or None
    """
    final = bracket.final_match()
    if final is not None:
        if final.winner and final.winner == player_id:
            return AchievementConstants.WINNER
        if final.has_both_players and final.involves(player_id):
            return AchievementConstants.RUNNER_UP

    for semifinal in bracket.matches_in_round(bracket.rounds - 1):
        if semifinal.involves(player_id) and semifinal.winner != player_id:
            return AchievementConstants.SEMIFINALIST

    return None


def extract_placements(bracket: Bracket) -> Dict[str, str]:
    """Placement for every player in the bracket that earned one."""
    placements = {}
    for player_id in bracket.participant_ids():
        placement = classify_player(bracket, player_id)
        if placement:
            placements[player_id] = placement
    return placements


class AchievementService:
    """Reads completed tournaments and reports a player's placements."""

    def __init__(self, store):
        self.store = store

    async def fetch_player_achievements(self, player_id: str) -> List[TournamentAchievement]:
        """
        Placements of one player across completed tournaments, newest first.

        Raises:
            StoreIOError: If the tournaments cannot be read
        """
        achievements = []
        for tournament in await self.store.get_completed_tournaments():
            placement = classify_player(tournament.bracket, player_id)
            if placement is None:
                continue
            achievements.append(TournamentAchievement(
                type=placement,
                tournament_id=tournament.tournament_id,
                tournament_name=tournament.name,
                date=tournament.start_date,
            ))

        logger.debug(f"Found {len(achievements)} achievements for player {player_id}")
        return achievements
