"""
Bracket Operations

Builds seeded single-elimination brackets and records match winners,
advancing each winner into the next round's slot.
"""

import random
from dataclasses import replace
from typing import List, Optional, Sequence

from courtside.config import Config
from courtside.constants import TournamentConstants
from courtside.data_models.bracket import Bracket, BracketMatch, BracketPlayer
from courtside.utils.exceptions import BracketError, NotFoundError
from courtside.utils.logger import setup_logger

logger = setup_logger(__name__)


def seeding_order(field_size: int) -> List[int]:
    """Seed numbers in slot order, e.g. 8 -> [1, 8, 4, 5, 2, 7, 3, 6]."""
    order = [1]
    while len(order) < field_size:
        total = len(order) * 2 + 1
        order = [seed for top in order for seed in (top, total - top)]
    return order


def round_name(players_remaining: int) -> str:
    if players_remaining == 2:
        return "Final"
    if players_remaining == 4:
        return "Semifinals"
    if players_remaining == 8:
        return "Quarterfinals"
    return f"Round of {players_remaining}"


def _match_id(round_number: int, match_number: int) -> str:
    return f"R{round_number}M{match_number}"


def build_single_elimination_bracket(players: Sequence[BracketPlayer],
                                     rng: Optional[random.Random] = None,
                                     config=None) -> Bracket:
    """
    Seed and lay out a single-elimination bracket.

    The highest-rated players (up to four, at most half the field) are
    seeded in rating order; the rest are shuffled. Round 1 is filled
    using the standard seeding order so that top seeds meet as late as
    possible. Later rounds are empty until winners are recorded.

    Raises:
        BracketError: If the field is smaller than 2 or not a power of two
    """
    config = config or Config
    field_size = len(players)
    if field_size < 2 or field_size & (field_size - 1):
        raise BracketError(f"A bracket needs a power-of-two field of at least 2 players, got {field_size}")

    rng = rng or random.Random()
    ranked = sorted(
        players,
        key=lambda p: config.DEFAULT_ELO if p.elo_rating is None else p.elo_rating,
        reverse=True,
    )
    seed_count = min(TournamentConstants.MAX_SEEDS, field_size // 2)
    seeded = [replace(p, seed=i + 1) for i, p in enumerate(ranked[:seed_count])]
    unseeded = [replace(p, seed=None) for p in ranked[seed_count:]]
    rng.shuffle(unseeded)
    entrants = seeded + unseeded

    rounds = field_size.bit_length() - 1
    slots = seeding_order(field_size)
    matches = []
    for i in range(field_size // 2):
        matches.append(BracketMatch(
            id=_match_id(1, i + 1),
            round=1,
            match_number=i + 1,
            player1=entrants[slots[i * 2] - 1],
            player2=entrants[slots[i * 2 + 1] - 1],
            next_match_id=_match_id(2, i // 2 + 1) if rounds > 1 else None,
        ))
    for round_number in range(2, rounds + 1):
        for i in range(field_size >> round_number):
            matches.append(BracketMatch(
                id=_match_id(round_number, i + 1),
                round=round_number,
                match_number=i + 1,
                next_match_id=_match_id(round_number + 1, i // 2 + 1) if round_number < rounds else None,
            ))

    return Bracket(
        matches=tuple(matches),
        rounds=rounds,
        round_names=tuple(round_name(field_size >> (r - 1)) for r in range(1, rounds + 1)),
    )


def record_bracket_result(bracket: Bracket, match_id: str, winner_id: str) -> Bracket:
    """
    Set a match winner and move them into the next match.

    Odd-numbered matches feed the next match's player1 slot, even-numbered
    matches its player2 slot.

    Raises:
        BracketError: If the match is unknown or the winner did not play in it
    """
    match = bracket.get_match(match_id)
    if match is None:
        raise BracketError(f"Match {match_id} not found in bracket")
    if not match.involves(winner_id):
        raise BracketError(f"Player {winner_id} is not part of match {match_id}")

    updated = bracket.with_match(replace(match, winner=winner_id))

    if match.next_match_id:
        next_match = updated.get_match(match.next_match_id)
        if next_match is not None:
            winner = match.player1 if match.player1_id == winner_id else match.player2
            if match.match_number % 2 == 1:
                next_match = replace(next_match, player1=winner)
            else:
                next_match = replace(next_match, player2=winner)
            updated = updated.with_match(next_match)

    return updated


class BracketOperations:
    """Store-backed bracket creation and advancement."""

    def __init__(self, store, config=None):
        self.store = store
        self.config = config or Config

    async def create_bracket(self, tournament_id: str, sport: str, field_size: int = 16,
                             rng: Optional[random.Random] = None) -> Bracket:
        """
        Seed the top ``field_size`` players of a sport by Elo and save the bracket.

        Raises:
            BracketError: If the sport has fewer players than the field size
            NotFoundError: If the tournament is absent
        """
        players = await self.store.get_sport_players(sport)
        if len(players) < field_size:
            raise BracketError(
                f"Not enough players for a {field_size}-player bracket: found {len(players)}"
            )

        ranked = sorted(
            players,
            key=lambda p: self.config.DEFAULT_ELO if p.elo_rating is None else p.elo_rating,
            reverse=True,
        )
        entrants = [
            BracketPlayer(
                id=p.player_id,
                name=p.name,
                elo_rating=self.config.DEFAULT_ELO if p.elo_rating is None else p.elo_rating,
            )
            for p in ranked[:field_size]
        ]

        bracket = replace(build_single_elimination_bracket(entrants, rng, self.config), sport=sport)
        await self.store.save_bracket(tournament_id, bracket)
        logger.info(f"Created {field_size}-player bracket for tournament {tournament_id}")
        return bracket

    async def advance(self, tournament_id: str, match_id: str, winner_id: str) -> Bracket:
        """
        Record a winner in a stored bracket.

        Raises:
            NotFoundError: If the tournament has no bracket
            BracketError: If the match or winner is invalid
        """
        bracket = await self.store.get_bracket(tournament_id)
        if bracket is None:
            raise NotFoundError("bracket", tournament_id)

        updated = record_bracket_result(bracket, match_id, winner_id)
        await self.store.save_bracket(tournament_id, updated)
        logger.info(f"Recorded {winner_id} as winner of {match_id} in tournament {tournament_id}")
        return updated
