"""Tests for bracket seeding and winner advancement."""

import random

import pytest

from courtside.data_models.bracket import Bracket, BracketPlayer
from courtside.database.models import Player, Tournament
from courtside.operations.bracket_operations import (
    BracketOperations, build_single_elimination_bracket, record_bracket_result, round_name, seeding_order,
)
from courtside.operations.achievements import extract_placements
from courtside.operations.rating_propagator import RatingPropagator
from courtside.utils.exceptions import BracketError, NotFoundError

from conftest import add_rows


def field(size):
    return [BracketPlayer(id=f"p{i}", name=f"Player {i}", elo_rating=2000 - i * 10) for i in range(1, size + 1)]


class TestBuild:

    def test_seeding_order(self):
        assert seeding_order(2) == [1, 2]
        assert seeding_order(8) == [1, 8, 4, 5, 2, 7, 3, 6]

    def test_round_names(self):
        assert [round_name(n) for n in (16, 8, 4, 2)] == ["Round of 16", "Quarterfinals", "Semifinals", "Final"]

    def test_eight_player_layout(self):
        bracket = build_single_elimination_bracket(field(8), rng=random.Random(7))

        assert bracket.rounds == 3
        assert bracket.round_names == ("Quarterfinals", "Semifinals", "Final")
        assert [len(bracket.matches_in_round(r)) for r in (1, 2, 3)] == [4, 2, 1]
        assert sorted(bracket.participant_ids()) == sorted(p.id for p in field(8))
        assert bracket.get_match("R1M3").next_match_id == "R2M2"
        assert bracket.final_match().next_match_id is None

    def test_top_seeds_kept_apart(self):
        bracket = build_single_elimination_bracket(list(reversed(field(8))), rng=random.Random(1))
        first_round = bracket.matches_in_round(1)

        seeds = {m.player1.seed: m.match_number for m in first_round if m.player1.seed}
        assert seeds == {1: 1, 4: 2, 2: 3, 3: 4}
        assert all(m.player2.seed is None for m in first_round)

    def test_unrated_players_use_default(self):
        players = [BracketPlayer(id="a", elo_rating=1400), BracketPlayer(id="b")]
        bracket = build_single_elimination_bracket(players, rng=random.Random(0))
        assert bracket.get_match("R1M1").player1.id == "b"

    @pytest.mark.parametrize("size", [0, 1, 6])
    def test_invalid_field(self, size):
        with pytest.raises(BracketError):
            build_single_elimination_bracket(field(size))


class TestRecordResult:

    def test_advances_into_next_slot(self):
        bracket = build_single_elimination_bracket(field(4), rng=random.Random(3))
        m1, m2 = bracket.matches_in_round(1)

        bracket = record_bracket_result(bracket, "R1M1", m1.player2_id)
        bracket = record_bracket_result(bracket, "R1M2", m2.player1_id)

        final = bracket.final_match()
        assert final.player1_id == m1.player2_id
        assert final.player2_id == m2.player1_id
        assert bracket.get_match("R1M1").winner == m1.player2_id

    def test_input_bracket_unchanged(self):
        bracket = build_single_elimination_bracket(field(2), rng=random.Random(3))
        winner = bracket.final_match().player1_id

        updated = record_bracket_result(bracket, "R1M1", winner)

        assert bracket.final_match().winner is None
        assert updated.final_match().winner == winner

    def test_rejects_outsider(self):
        bracket = build_single_elimination_bracket(field(4), rng=random.Random(3))
        with pytest.raises(BracketError):
            record_bracket_result(bracket, "R1M1", "nobody")

    def test_rejects_unknown_match(self):
        bracket = build_single_elimination_bracket(field(4), rng=random.Random(3))
        with pytest.raises(BracketError):
            record_bracket_result(bracket, "R9M9", "p1")

    def test_played_out_bracket_feeds_engine(self):
        bracket = build_single_elimination_bracket(field(4), rng=random.Random(5))
        for match in bracket.matches_in_round(1):
            bracket = record_bracket_result(bracket, match.id, match.player1_id)
        final = bracket.final_match()
        bracket = record_bracket_result(bracket, final.id, final.player2_id)

        placements = extract_placements(bracket)
        assert placements[final.player2_id] == "winner"
        assert placements[final.player1_id] == "runner_up"
        assert list(placements.values()).count("semifinalist") == 2

        result = RatingPropagator().propagate(bracket, {})
        assert len(result.changes) == 6


class TestBracketOperations:

    @pytest.mark.asyncio
    async def test_create_and_advance(self, database, store):
        rows = [Tournament(id="t1", name="Club Champs", sport="padel")]
        rows += [Player(id=f"p{i}", name=f"Player {i}", sport="padel", elo_rating=1500 + i) for i in range(5)]
        await add_rows(database, *rows)
        operations = BracketOperations(store)

        created = await operations.create_bracket("t1", "padel", field_size=4, rng=random.Random(2))

        assert "p0" not in created.participant_ids()
        stored = await store.get_bracket("t1")
        assert stored.sport == "padel"
        assert stored.to_dict() == created.to_dict()

        first = stored.get_match("R1M1")
        advanced = await operations.advance("t1", "R1M1", first.player1_id)
        assert advanced.final_match().player1_id == first.player1_id
        assert (await store.get_bracket("t1")).final_match().player1_id == first.player1_id

    @pytest.mark.asyncio
    async def test_create_needs_enough_players(self, database, store):
        await add_rows(database, Tournament(id="t1", name="Club Champs", sport="padel"),
                       Player(id="p1", name="Solo", sport="padel"))
        with pytest.raises(BracketError):
            await BracketOperations(store).create_bracket("t1", "padel", field_size=2)

    @pytest.mark.asyncio
    async def test_advance_without_bracket(self, database, store):
        await add_rows(database, Tournament(id="t1", name="Club Champs", sport="padel"))
        with pytest.raises(NotFoundError):
            await BracketOperations(store).advance("t1", "R1M1", "p1")
