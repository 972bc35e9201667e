from datetime import datetime, timezone

import pytest

from scouting.errors import DanglingReferenceError
from scouting.storage import EntityStore


def _d(month, day):
    return datetime(2025, month, day, tzinfo=timezone.utc)


def test_top_players_ordered_by_recruitment_match(store):
    for score in (99, 96, 95, 97):
        store.create_player({"name": f"P{score}", "recruitment_match": score})
    store.create_player_metrics({"player_id": 1, "speed": 88})

    top = store.get_top_players(2)

    assert [p["id"] for p in top] == [1, 4]
    assert top[0]["metrics"]["speed"] == 88
    assert top[1]["metrics"] is None


def test_top_players_treats_missing_score_as_zero(store):
    store.create_player({"name": "none"})
    store.create_player({"name": "neg", "recruitment_match": -5})
    store.create_player({"name": "low", "recruitment_match": 1})
    assert [p["name"] for p in store.get_top_players(10)] == ["low", "none", "neg"]


def test_top_players_limit_larger_than_collection(store):
    store.create_player({"name": "only"})
    assert len(store.get_top_players(50)) == 1
    assert store.get_top_players(0) == []


def test_recent_videos_newest_first(store):
    store.create_video({"title": "older", "file_name": "a"})
    store.create_video({"title": "newer", "file_name": "b"})
    recent = store.get_recent_videos(1)
    assert [v["title"] for v in recent] == ["newer"]


def test_recent_videos_ties_broken_by_id():
    fixed = datetime(2025, 1, 1, tzinfo=timezone.utc)
    store = EntityStore(clock=lambda: fixed)
    for name in ("a", "b", "c"):
        store.create_video({"title": name, "file_name": name})
    assert [v["id"] for v in store.get_recent_videos(5)] == [3, 2, 1]


def test_upcoming_f1_races_sorted_by_date(store):
    store.create_f1_race({"name": "Monaco", "date": _d(5, 24), "status": "upcoming"})
    store.create_f1_race({"name": "Jeddah", "date": _d(4, 15), "status": "upcoming"})
    store.create_f1_race({"name": "Melbourne", "date": _d(3, 23), "status": "upcoming"})
    store.create_f1_race({"name": "Done", "date": _d(1, 1), "status": "completed"})

    races = store.get_upcoming_f1_races()

    assert [r["date"] for r in races] == [_d(3, 23), _d(4, 15), _d(5, 24)]


def test_upcoming_without_date_sorts_last(store):
    store.create_football_match({"home_team_id": 1, "away_team_id": 2, "date": None})
    store.create_football_match({"home_team_id": 3, "away_team_id": 4, "date": _d(6, 1)})
    store.create_football_match({"home_team_id": 5, "away_team_id": 6, "date": _d(2, 1)})
    assert [m["id"] for m in store.get_upcoming_football_matches()] == [3, 2, 1]


def test_completed_match_leaves_upcoming_list(store):
    match = store.create_football_match({"home_team_id": 1, "away_team_id": 2, "date": _d(4, 12)})
    store.update_football_match(match["id"], {"status": "completed", "home_score": 2, "away_score": 1})
    assert store.get_upcoming_football_matches() == []
    assert store.get_football_match(match["id"])["home_score"] == 2


def test_f1_predictions_sorted_and_joined(store):
    max_v = store.create_f1_driver({"name": "Max Verstappen", "team": "Red Bull Racing"})
    lewis = store.create_f1_driver({"name": "Lewis Hamilton", "team": "Mercedes"})
    race = store.create_f1_race({"name": "Monaco"})
    other = store.create_f1_race({"name": "Spain"})
    store.create_f1_prediction({"race_id": race["id"], "driver_id": lewis["id"], "position": 2})
    store.create_f1_prediction({"race_id": race["id"], "driver_id": max_v["id"], "position": 1})
    store.create_f1_prediction({"race_id": other["id"], "driver_id": max_v["id"], "position": 1})

    predictions = store.get_f1_predictions(race["id"])

    assert [p["position"] for p in predictions] == [1, 2]
    assert [p["driver"]["name"] for p in predictions] == ["Max Verstappen", "Lewis Hamilton"]


def test_f1_predictions_skip_missing_driver(store):
    driver = store.create_f1_driver({"name": "Max Verstappen", "team": "Red Bull Racing"})
    store.create_f1_prediction({"race_id": 1, "driver_id": driver["id"], "position": 1})
    store.create_f1_prediction({"race_id": 1, "driver_id": 404, "position": 2})

    predictions = store.get_f1_predictions(1)

    assert [p["driver_id"] for p in predictions] == [driver["id"]]


def test_f1_predictions_strict_raises_on_missing_driver(store):
    store.create_f1_prediction({"race_id": 1, "driver_id": 404, "position": 1})
    with pytest.raises(DanglingReferenceError) as excinfo:
        store.get_f1_predictions(1, strict=True)
    assert excinfo.value.value == 404


def test_team_stats_filtered_by_league(store):
    city = store.create_football_team({"name": "Manchester City", "league": "Premier League"})
    hilal = store.create_football_team({"name": "Al Hilal", "league": "Roshn Saudi League"})
    nassr = store.create_football_team({"name": "Al Nassr", "league": "Roshn Saudi League"})
    store.create_football_team_stat(nassr["id"], {"league_position": 2})
    store.create_football_team_stat(city["id"], {"league_position": 1})
    store.create_football_team_stat(hilal["id"], {"league_position": 1})

    saudi = store.get_football_team_stats("Roshn Saudi League")
    everything = store.get_football_team_stats()

    assert [s["team_id"] for s in saudi] == [hilal["id"], nassr["id"]]
    assert city["id"] not in {s["team_id"] for s in saudi}
    assert [s["league_position"] for s in everything] == [1, 1, 2]
    assert store.get_football_team_stats("La Liga") == []


def test_team_stat_uses_given_team_id(store):
    created = store.create_football_team_stat(3, {"team_id": 9, "points": 72})
    assert created["team_id"] == 3
    fetched = store.get_football_team_stat(3)
    assert fetched["team_id"] == 3
    assert fetched["points"] == 72
    assert store.get_football_team_stat(9) is None


def test_football_prediction_lookup_by_match(store):
    store.create_football_prediction({"match_id": 2, "confidence": 75})
    assert store.get_football_prediction(2)["confidence"] == 75
    assert store.get_football_prediction(1) is None
