import math
from typing import Dict, Iterable, Mapping, Optional, Tuple
from courtside.config import Config

# (minimum rating, description), highest first
RANK_DESCRIPTIONS = (
    (2200, "Grandmaster"),
    (2000, "Master"),
    (1800, "Expert"),
    (1600, "Skilled"),
    (1400, "Average"),
    (1200, "Novice"),
)

class EloCalculator:
    """Handles Elo rating calculations for tournaments and quick matches"""

    @staticmethod
    def calculate_expected_score(rating_a: float, rating_b: float) -> float:
        """
        Calculate the expected score for player A against player B

        Args:
            rating_a: Player A's current Elo rating
            rating_b: Player B's current Elo rating

        Returns:
            Expected score (0.0 to 1.0) for player A
        """
        return 1 / (1 + math.pow(10, (rating_b - rating_a) / 400))

    @staticmethod
    def get_tournament_k_factor(round_number: int, config=None) -> int:
        """
        Get the K-factor for a bracket match. Later rounds move ratings more.

        Args:
            round_number: 1-based round of the match

        Returns:
            K-factor to use in Elo calculation
        """
        config = config or Config
        return config.TOURNAMENT_K_BASE + config.TOURNAMENT_K_PER_ROUND * round_number

    @staticmethod
    def apply(old_rating: float, actual_score: float, expected_score: float, k_factor: float) -> int:
        """New rating rounded to the nearest integer"""
        return _round_half_up(old_rating + k_factor * (actual_score - expected_score))

    @staticmethod
    def calculate_new_ratings(winner_rating: float, loser_rating: float,
                              k_factor: Optional[float] = None) -> Tuple[int, int]:
        """
        Calculate new ratings for a decided 1v1 result

        Args:
            winner_rating: The winner's current rating
            loser_rating: The loser's current rating
            k_factor: Override for Config.MATCH_K_FACTOR

        Returns:
            Tuple of (winner_new_rating, loser_new_rating)
        """
        if k_factor is None:
            k_factor = Config.MATCH_K_FACTOR
        expected_winner = EloCalculator.calculate_expected_score(winner_rating, loser_rating)
        expected_loser = EloCalculator.calculate_expected_score(loser_rating, winner_rating)

        return (
            EloCalculator.apply(winner_rating, 1.0, expected_winner, k_factor),
            EloCalculator.apply(loser_rating, 0.0, expected_loser, k_factor),
        )

    @staticmethod
    def process_team_result(player_ratings: Mapping[str, Optional[float]],
                            winner_ids: Iterable[str], loser_ids: Iterable[str],
                            k_factor: Optional[float] = None,
                            config=None) -> Dict[str, float]:
        """
        Calculate new ratings for a team (or doubles) result.

        Each side is rated at its average; the change computed for the
        averages is applied to every member of that side.

        Args:
            player_ratings: Current ratings; missing or None entries use the default
            winner_ids: Players on the winning side
            loser_ids: Players on the losing side

        Returns:
            Mapping of player id to new rating for every listed player
        """
        config = config or Config
        winner_ids = list(winner_ids)
        loser_ids = list(loser_ids)

        def rating_of(player_id):
            rating = player_ratings.get(player_id)
            return config.DEFAULT_ELO if rating is None else rating

        winners_avg = sum(rating_of(p) for p in winner_ids) / (len(winner_ids) or 1)
        losers_avg = sum(rating_of(p) for p in loser_ids) / (len(loser_ids) or 1)

        winner_new, loser_new = EloCalculator.calculate_new_ratings(
            winners_avg, losers_avg, k_factor if k_factor is not None else config.MATCH_K_FACTOR
        )
        winner_delta = winner_new - winners_avg
        loser_delta = loser_new - losers_avg

        new_ratings = {}
        for player_id in winner_ids:
            new_ratings[player_id] = rating_of(player_id) + winner_delta
        for player_id in loser_ids:
            new_ratings[player_id] = rating_of(player_id) + loser_delta
        return new_ratings

    @staticmethod
    def calculate_win_probability(rating_a: float, rating_b: float) -> float:
        """
        Calculate win probability for player A against player B

        Returns:
            Win probability as percentage (0.0 to 100.0)
        """
        return EloCalculator.calculate_expected_score(rating_a, rating_b) * 100

    @staticmethod
    def get_rank_description(elo_rating: float) -> str:
        """Describe a rating band, e.g. 1650 -> 'Skilled'"""
        for minimum, description in RANK_DESCRIPTIONS:
            if elo_rating >= minimum:
                return description
        return "Beginner"

    @staticmethod
    def format_elo_change(elo_change: int) -> str:
        """
        Format Elo change for display

        Args:
            elo_change: The Elo change value

        Returns:
            Formatted string with an explicit sign
        """
        if elo_change > 0:
            return f"+{elo_change}"
        elif elo_change < 0:
            return str(elo_change)
        else:
            return "±0"


def _round_half_up(value: float) -> int:
    # Halves round up, never to even
    return int(math.floor(value + 0.5))
