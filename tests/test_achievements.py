"""Tests for tournament placement extraction."""

from datetime import date

import pytest

from courtside.data_models.bracket import Bracket
from courtside.database.models import Tournament
from courtside.operations.achievements import AchievementService, classify_player, extract_placements

from conftest import add_rows, bracket_match


def test_four_player_placements(four_player_bracket):
    assert extract_placements(four_player_bracket) == {
        "A": "winner",
        "B": "semifinalist",
        "C": "runner_up",
        "D": "semifinalist",
    }


def test_winner_and_runner_up_are_not_semifinalists():
    bracket = Bracket(
        matches=(
            bracket_match("R1M1", 1, 1, "X", "P", winner="X"),
            bracket_match("R1M2", 1, 2, "Y", "Q", winner="Y"),
            bracket_match("R2M1", 2, 1, "X", "Y", winner="X"),
        ),
        rounds=2,
    )
    placements = extract_placements(bracket)

    assert placements["X"] == "winner"
    assert placements["Y"] == "runner_up"
    assert list(placements.values()).count("winner") == 1
    assert list(placements.values()).count("runner_up") == 1


def test_final_without_winner_makes_both_finalists_runners_up():
    bracket = Bracket(
        matches=(
            bracket_match("R1M1", 1, 1, "A", "B", winner="A"),
            bracket_match("R1M2", 1, 2, "C", "D", winner="C"),
            bracket_match("R2M1", 2, 1, "A", "C"),
        ),
        rounds=2,
    )
    assert classify_player(bracket, "A") == "runner_up"
    assert classify_player(bracket, "C") == "runner_up"


def test_half_filled_final_falls_through_to_semifinals():
    bracket = Bracket(
        matches=(
            bracket_match("R1M1", 1, 1, "A", "B", winner="A"),
            bracket_match("R1M2", 1, 2, "C", "D"),
            bracket_match("R2M1", 2, 1, "A", None),
        ),
        rounds=2,
    )
    assert classify_player(bracket, "A") is None
    assert classify_player(bracket, "C") == "semifinalist"
    assert classify_player(bracket, "D") == "semifinalist"


def test_early_round_losers_get_nothing():
    bracket = Bracket(
        matches=(
            bracket_match("R1M1", 1, 1, "E", "F", winner="E"),
            bracket_match("R2M1", 2, 1, "E", "G", winner="G"),
            bracket_match("R3M1", 3, 1, "G", "H", winner="H"),
        ),
        rounds=3,
    )
    assert classify_player(bracket, "F") is None
    assert classify_player(bracket, "E") == "semifinalist"


@pytest.mark.asyncio
async def test_fetch_player_achievements(database, store, four_player_bracket):
    await add_rows(
        database,
        Tournament(id="old", name="Winter Cup", sport="padel", status="completed",
                   start_date=date(2024, 1, 10), bracket_data=four_player_bracket.to_dict()),
        Tournament(id="new", name="Spring Open", sport="padel", status="completed",
                   start_date=date(2024, 4, 2), bracket_data=four_player_bracket.to_dict()),
        Tournament(id="live", name="Summer Slam", sport="padel", status="in_progress",
                   start_date=date(2024, 7, 1), bracket_data=four_player_bracket.to_dict()),
        Tournament(id="empty", name="No Bracket", sport="padel", status="completed",
                   start_date=date(2024, 5, 1)),
    )

    achievements = await AchievementService(store).fetch_player_achievements("C")

    assert [(a.tournament_id, a.type) for a in achievements] == [("new", "runner_up"), ("old", "runner_up")]
    assert achievements[0].tournament_name == "Spring Open"
    assert achievements[0].date == date(2024, 4, 2)
