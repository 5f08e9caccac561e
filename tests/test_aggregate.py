import json
from collections import Counter

import pytest

from conftest import game, member, season, team
from league_legacy.data_loader import validate_stats
from league_legacy.league.aggregate import Accumulators, aggregate, fold_season, is_tie, pair_key
from league_legacy.models import SeasonRecord


def stats_by_id(result):
    return {s.member_id: s for s in result.member_stats}


def test_two_season_rivalry_end_to_end():
    seasons = [
        season(2020, {1: "A", 2: "B"}, [(1, 1, 110, 2, 90)]),
        season(2021, {1: "A", 2: "B"}, [(1, 2, 105, 1, 95)]),
    ]
    result = aggregate(seasons)
    stats = stats_by_id(result)

    assert (stats["A"].wins, stats["A"].losses, stats["A"].ties) == (1, 1, 0)
    assert stats["A"].total_points == 205
    assert (stats["B"].wins, stats["B"].losses, stats["B"].ties) == (1, 1, 0)
    assert stats["B"].total_points == 185

    assert len(result.head_to_head) == 1
    h2h = result.head_to_head[0]
    assert h2h.to_dict() == {"member1": "A", "member2": "B", "member1Wins": 1, "member2Wins": 1, "ties": 0}


def test_team_ids_are_scoped_to_their_season():
    # team 1 belongs to different members in different years
    seasons = [
        season(2019, {1: "A", 2: "B"}, [(1, 1, 100, 2, 80)]),
        season(2020, {1: "C", 2: "B"}, [(1, 1, 100, 2, 80)]),
    ]
    stats = stats_by_id(aggregate(seasons))

    assert stats["A"].wins == 1
    assert stats["C"].wins == 1
    assert stats["B"].losses == 2


def test_scoreless_matchup_counts_for_nobody():
    result = aggregate([season(2020, {1: "A", 2: "B"}, [(1, 1, 0, 2, 0)])])
    stats = stats_by_id(result)

    for member_id in ("A", "B"):
        assert (stats[member_id].wins, stats[member_id].losses, stats[member_id].ties) == (0, 0, 0)
        assert stats[member_id].total_points == 0
    assert result.head_to_head[0].games == 0
    assert result.weekly_high_scores == []


def test_equal_positive_scores_are_a_tie():
    result = aggregate([season(2020, {1: "B", 2: "A"}, [(1, 1, 85.5, 2, 85.5)])])
    stats = stats_by_id(result)

    assert stats["A"].ties == 1
    assert stats["B"].ties == 1
    assert stats["A"].total_points == 85.5
    h2h = result.head_to_head[0]
    assert (h2h.member1, h2h.member2, h2h.ties) == ("A", "B", 1)


def test_head_to_head_wins_follow_canonical_slot():
    # "Z" is home and wins, but sorts after "M" so it lands in member2
    result = aggregate([season(2020, {1: "Z", 2: "M"}, [(1, 1, 120, 2, 100), (2, 2, 130, 1, 90)])])
    h2h = result.head_to_head[0]

    assert (h2h.member1, h2h.member2) == ("M", "Z")
    assert h2h.member1_wins == 1
    assert h2h.member2_wins == 1


def test_unattributed_team_is_excluded_everywhere():
    record = SeasonRecord(
        year=2020,
        members=(member("A", "Alice"),),
        teams=(team(1, 2020, owner="A", rank=1), team(2, 2020, owner=None, owners=(), rank=2)),
        matchups=(game(2020, 1, 1, 150.0, 2, 90.0),),
    )
    result = aggregate([record])

    assert result.member_stats == []
    assert result.head_to_head == []
    assert result.weekly_high_scores == []
    # the finish still counts: it belongs to an attributed team
    assert [(f.member_id, f.rank) for f in result.season_finishes] == [("A", 1)]


def test_owner_falls_back_to_first_listed_owner():
    record = SeasonRecord(
        year=2020,
        members=(member("A", "Alice"), member("B", "Bob")),
        teams=(team(1, 2020, owner="", owners=("A", "X")), team(2, 2020, owners=("B",))),
        matchups=(game(2020, 1, 1, 100.0, 2, 90.0),),
    )
    stats = stats_by_id(aggregate([record]))
    assert stats["A"].wins == 1
    assert stats["B"].losses == 1


def test_weekly_high_score_first_to_reach_max_keeps_it():
    record = season(
        2020,
        {1: "A", 2: "B", 3: "C", 4: "D"},
        [(1, 1, 100, 2, 120), (1, 3, 120, 4, 90)],
    )
    result = aggregate([record])

    assert len(result.weekly_high_scores) == 1
    high = result.weekly_high_scores[0]
    assert (high.season, high.week, high.member_id, high.score) == (2020, 1, "B", 120)
    stats = stats_by_id(result)
    assert stats["B"].high_scores == 1
    assert stats["C"].high_scores == 0


def test_weekly_high_score_home_keeps_equal_score_within_matchup():
    result = aggregate([season(2020, {1: "B", 2: "A"}, [(1, 1, 99, 2, 99)])])
    assert result.weekly_high_scores[0].member_id == "B"


def test_weekly_high_scores_sorted_by_score_descending():
    seasons = [
        season(2020, {1: "A", 2: "B"}, [(1, 1, 100, 2, 80), (2, 1, 90, 2, 140)]),
        season(2021, {1: "A", 2: "B"}, [(1, 1, 120, 2, 80)]),
    ]
    result = aggregate(seasons)

    assert [w.score for w in result.weekly_high_scores] == [140, 120, 100]
    assert [(w.season, w.week) for w in result.weekly_high_scores] == [(2020, 2), (2021, 1), (2020, 1)]
    stats = stats_by_id(result)
    assert stats["A"].high_scores == 2
    assert stats["B"].high_scores == 1


def test_season_finishes_sorted_by_season_then_rank():
    seasons = [
        season(2021, {1: "A", 2: "B"}, [], ranks={1: 2, 2: 1}),
        season(2020, {1: "A", 2: "B"}, [], ranks={1: 1, 2: 2}),
    ]
    result = aggregate(seasons)

    assert [(f.season, f.rank, f.member_id) for f in result.season_finishes] == [
        (2020, 1, "A"),
        (2020, 2, "B"),
        (2021, 1, "B"),
        (2021, 2, "A"),
    ]


def test_final_rank_is_seeded_from_first_season_member_appears():
    seasons = [
        season(2020, {1: "A", 2: "B"}, [(1, 1, 100, 2, 90)], ranks={1: 3, 2: 1}),
        season(2021, {1: "A", 2: "B"}, [(1, 1, 100, 2, 90)], ranks={1: 1, 2: 4}),
    ]
    stats = stats_by_id(aggregate(seasons))

    assert stats["A"].final_standings_rank == 3
    assert stats["B"].final_standings_rank == 1


def test_final_rank_stays_absent_when_first_season_had_none():
    seasons = [
        season(2020, {1: "A", 2: "B"}, [(1, 1, 100, 2, 90)]),
        season(2021, {1: "A", 2: "B"}, [(1, 1, 100, 2, 90)], ranks={1: 1, 2: 2}),
    ]
    stats = stats_by_id(aggregate(seasons))

    assert stats["A"].final_standings_rank is None
    assert "finalStandingsRank" not in stats["A"].to_dict()


def test_names_use_overrides_then_source_then_unknown():
    record = SeasonRecord(
        year=2020,
        members=(member("A", "alice_a"), member("B", None, first="Bob", last="Brown")),
        teams=(team(1, 2020, owner="A", rank=1), team(2, 2020, owner="B", rank=2), team(3, 2020, owner="C", rank=3)),
        matchups=(game(2020, 1, 1, 100.0, 2, 90.0), game(2020, 1, 3, 80.0, 1, 70.0)),
    )
    result = aggregate([record], {"A": "Alice (Commish)"})
    names = {s.member_id: s.member_name for s in result.member_stats}

    assert names == {"A": "Alice (Commish)", "B": "Bob Brown", "C": "Unknown"}
    assert [f.member_name for f in result.season_finishes] == ["Alice (Commish)", "Bob Brown", "Unknown"]


def test_member_owning_both_sides_gets_no_head_to_head():
    result = aggregate([season(2020, {1: "A", 2: "A"}, [(1, 1, 100, 2, 90)])])
    stats = stats_by_id(result)

    assert result.head_to_head == []
    assert (stats["A"].wins, stats["A"].losses) == (1, 1)


def test_member_owning_two_teams_gets_the_later_teams_rank():
    record = season(2020, {1: "A", 2: "A", 3: "B"}, [(1, 1, 100, 3, 90)], ranks={1: 5, 2: 2, 3: 1})
    result = aggregate([record])

    assert [(f.member_id, f.rank) for f in result.season_finishes if f.member_id == "A"] == [("A", 2)]
    assert stats_by_id(result)["A"].final_standings_rank == 2


def test_non_finite_scores_count_as_zero():
    record = season(2020, {1: "A", 2: "B"}, [(1, 1, float("nan"), 2, 90), (2, 1, float("inf"), 2, 50)])
    result = aggregate([record])
    stats = stats_by_id(result)

    assert stats["A"].total_points == 0
    assert stats["B"].total_points == 140
    assert (stats["B"].wins, stats["A"].losses) == (2, 2)
    assert [(w.week, w.member_id, w.score) for w in result.weekly_high_scores] == [(1, "B", 90), (2, "B", 50)]
    payload = result.to_dict()
    json.dumps(payload, allow_nan=False)
    assert validate_stats(payload) == []


def test_record_counts_match_matchups_played():
    owners = {1: "d", 2: "a", 3: "c", 4: "b"}
    games = [
        (1, 1, 100, 2, 90), (1, 3, 80, 4, 80), (2, 1, 70, 3, 75), (2, 2, 0, 4, 0),
        (3, 1, 110, 4, 110), (3, 2, 95, 3, 60), (4, 4, 101, 2, 99), (4, 3, 0, 1, 55),
    ]
    seasons = [season(2020, owners, games), season(2021, owners, games[:5])]
    result = aggregate(seasons)

    decided = Counter()
    pair_games = Counter()
    for record in seasons:
        for m in record.matchups:
            home, away = owners[m.home.team_id], owners[m.away.team_id]
            if m.home.score == 0 and m.away.score == 0:
                continue
            decided[home] += 1
            decided[away] += 1
            pair_games[pair_key(home, away)] += 1

    for stats in result.member_stats:
        assert stats.games == decided[stats.member_id]
    for h2h in result.head_to_head:
        assert h2h.member1 < h2h.member2
        assert h2h.games == pair_games[h2h.key]


def test_aggregation_is_repeatable():
    seasons = [
        season(2020, {1: "A", 2: "B", 3: "C", 4: "D"}, [(1, 1, 100, 2, 120), (1, 3, 120, 4, 90)], ranks={1: 1, 2: 4}),
        season(2021, {1: "B", 2: "C"}, [(1, 1, 85.5, 2, 85.5)], ranks={1: 2, 2: 1}),
    ]
    first = json.dumps(aggregate(seasons).to_dict(), sort_keys=True)
    second = json.dumps(aggregate(seasons).to_dict(), sort_keys=True)
    assert first == second


def test_separate_runs_do_not_share_state():
    record = season(2020, {1: "A", 2: "B"}, [(1, 1, 100, 2, 90)])
    aggregate([record])
    result = aggregate([record])
    assert stats_by_id(result)["A"].wins == 1


def test_fold_season_accumulates_into_given_state():
    acc = Accumulators()
    fold_season(acc, season(2020, {1: "A", 2: "B"}, [(1, 1, 100, 2, 90)]))
    fold_season(acc, season(2021, {1: "A", 2: "B"}, [(1, 1, 100, 2, 90)]))
    assert acc.member_stats["A"].wins == 2
    assert acc.head_to_head[("A", "B")].member1_wins == 2


def test_no_seasons_gives_empty_well_formed_output():
    payload = aggregate([]).to_dict()
    assert payload == {"memberStats": [], "headToHead": [], "weeklyHighScores": [], "seasonFinishes": []}
    assert validate_stats(payload) == []


def test_output_matches_stats_schema():
    seasons = [season(2020, {1: "A", 2: "B"}, [(1, 1, 100, 2, 90)], ranks={1: 1, 2: 2})]
    assert validate_stats(aggregate(seasons).to_dict()) == []


@pytest.mark.parametrize("bad", [None, "2020", {"year": 2020}, iter([]), 2020])
def test_non_sequence_input_is_rejected(bad):
    with pytest.raises(TypeError):
        aggregate(bad)


def test_non_season_items_are_rejected():
    with pytest.raises(TypeError):
        aggregate([{"year": 2020, "teams": []}])


@pytest.mark.parametrize(
    "home,away,expected",
    [(85.5, 85.5, True), (0, 0, False), (10, 0, False), (0, 10, False), (50, 60, False)],
)
def test_is_tie(home, away, expected):
    assert is_tie(home, away) is expected
