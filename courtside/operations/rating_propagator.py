"""
Rating Propagator

Walks a completed tournament bracket and updates every participant's Elo
rating with pairwise comparative updates, one per decided match.

Traversal order is part of the contract: matches are folded ascending by
round, then by match number within the round, and each update sees the
ratings already adjusted by earlier matches in the same pass. A player
who wins a semifinal therefore enters the final with the post-semifinal
rating.

Writes happen after the whole fold, one row at a time. A failed write
raises and leaves the ratings written before it in place.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from courtside.config import Config
from courtside.data_models.bracket import Bracket, BracketMatch
from courtside.utils.elo import EloCalculator
from courtside.utils.exceptions import NotFoundError
from courtside.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class RatingChange:
    """Per-match rating movement for one player"""
    match_id: str
    player_id: str
    old_rating: int
    new_rating: int
    k_factor: int
    expected_score: float
    actual_score: float

    @property
    def delta(self) -> int:
        return self.new_rating - self.old_rating


@dataclass
class PropagationResult:
    """Outcome of folding one bracket"""
    initial_ratings: Dict[str, float]
    final_ratings: Dict[str, float]
    changes: List[RatingChange]

    @property
    def updated_player_ids(self) -> List[str]:
        """Players touched by at least one decided match, in first-touch order"""
        seen = []
        for change in self.changes:
            if change.player_id not in seen:
                seen.append(change.player_id)
        return seen


class RatingPropagator:
    """Applies tournament bracket results to player ratings."""

    def __init__(self, store=None, config=None):
        self.store = store
        self.config = config or Config

    def propagate(self, bracket: Bracket, initial_ratings: Dict[str, Optional[float]]) -> PropagationResult:
        """
        Fold every decided match of the bracket into a working rating map.

        Args:
            bracket: The tournament bracket
            initial_ratings: Ratings before this pass; missing or None use DEFAULT_ELO

        Returns:
            PropagationResult with the starting map, the final map and per-match changes
        """
        ratings = {
            player_id: self._rating_or_default(initial_ratings.get(player_id))
            for player_id in bracket.participant_ids()
        }
        starting = dict(ratings)
        changes: List[RatingChange] = []

        for match in bracket.ordered_matches():
            if not match.player1_id or not match.player2_id or not match.winner:
                continue
            if not match.is_decided:
                logger.warning(
                    f"Skipping match {match.id}: winner {match.winner} is not one of its players"
                )
                continue
            changes.extend(self._apply_match(match, ratings))

        return PropagationResult(initial_ratings=starting, final_ratings=ratings, changes=changes)

    def _apply_match(self, match: BracketMatch, ratings: Dict[str, float]) -> List[RatingChange]:
        player1, player2 = match.player1_id, match.player2_id
        rating1, rating2 = ratings[player1], ratings[player2]

        expected1 = EloCalculator.calculate_expected_score(rating1, rating2)
        expected2 = 1 - expected1
        k_factor = EloCalculator.get_tournament_k_factor(match.round, self.config)

        actual1 = 1.0 if match.winner == player1 else 0.0
        actual2 = 1.0 - actual1

        new1 = EloCalculator.apply(rating1, actual1, expected1, k_factor)
        new2 = EloCalculator.apply(rating2, actual2, expected2, k_factor)
        ratings[player1] = new1
        ratings[player2] = new2

        return [
            RatingChange(match.id, player1, rating1, new1, k_factor, expected1, actual1),
            RatingChange(match.id, player2, rating2, new2, k_factor, expected2, actual2),
        ]

    def _rating_or_default(self, rating: Optional[float]) -> float:
        return self.config.DEFAULT_ELO if rating is None else rating

    async def propagate_tournament(self, tournament_id: str) -> PropagationResult:
        """
        Read a tournament's bracket and ratings, fold, and write changed ratings back.

        Raises:
            NotFoundError: If the tournament or its bracket is absent
            StoreIOError: If a read or write fails; earlier writes are not rolled back
        """
        bracket = await self.store.get_bracket(tournament_id)
        if bracket is None:
            raise NotFoundError("bracket", tournament_id)

        initial = {}
        for player_id in bracket.participant_ids():
            initial[player_id] = await self.store.get_participant_rating(player_id, bracket.sport)

        result = self.propagate(bracket, initial)

        for player_id in result.updated_player_ids:
            await self.store.set_participant_rating(player_id, result.final_ratings[player_id])

        logger.info(
            f"Propagated {len(result.changes) // 2} decided matches for tournament {tournament_id}; "
            f"wrote {len(result.updated_player_ids)} ratings"
        )
        return result
