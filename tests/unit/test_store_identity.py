from datetime import datetime


def test_ids_start_at_one_and_increase_per_collection(store):
    first = store.create_player({"name": "A"})
    team = store.create_football_team({"name": "T"})
    second = store.create_player({"name": "B"})
    driver = store.create_f1_driver({"name": "D", "team": "X"})
    third = store.create_player({"name": "C"})

    assert [first["id"], second["id"], third["id"]] == [1, 2, 3]
    # Other families keep their own counters
    assert team["id"] == 1
    assert driver["id"] == 1


def test_get_after_create_returns_equal_record(store):
    created = store.create_player({"name": "Lionel Messi", "age": 36, "recruitment_match": 99})
    assert store.get_player(created["id"]) == created


def test_created_at_is_assigned_by_store(store):
    forged = datetime(1999, 1, 1)
    player = store.create_player({"name": "A", "created_at": forged, "id": 42})
    assert player["id"] == 1
    assert player["created_at"] != forged
    assert player["created_at"].tzinfo is not None


def test_only_timestamped_families_get_created_at(store):
    assert "created_at" in store.create_video({"title": "t", "file_name": "f"})
    assert "created_at" in store.create_f1_prediction({"race_id": 1, "driver_id": 1})
    assert "created_at" not in store.create_f1_driver({"name": "D", "team": "X"})
    assert "created_at" not in store.create_football_team({"name": "T"})


def test_returned_records_are_copies(store):
    video = store.create_video({"title": "t", "file_name": "f", "analysis_results": {"speed": 80}})
    video["title"] = "changed"
    video["analysis_results"]["speed"] = 1
    fetched = store.get_video(video["id"])
    assert fetched["title"] == "t"
    assert fetched["analysis_results"] == {"speed": 80}


def test_update_merges_and_keeps_identity(store):
    player = store.create_player({"name": "A", "team": "Old FC", "age": 20})
    updated = store.update_player(player["id"], {"team": "New FC", "id": 99, "created_at": None})

    assert updated["id"] == player["id"]
    assert updated["created_at"] == player["created_at"]
    assert updated["team"] == "New FC"
    assert updated["age"] == 20
    assert store.get_player(player["id"]) == updated


def test_update_with_none_clears_field(store):
    player = store.create_player({"name": "A", "team": "Old FC"})
    updated = store.update_player(player["id"], {"team": None})
    assert updated["team"] is None
    assert "team" in store.get_player(player["id"])


def test_update_missing_returns_none_without_side_effects(store):
    assert store.update_player(5, {"name": "ghost"}) is None
    assert store.get_players() == []
    # The failed update did not consume an id
    assert store.create_player({"name": "A"})["id"] == 1


def test_delete_video(store):
    video = store.create_video({"title": "t", "file_name": "f"})
    assert store.delete_video(video["id"]) is True
    assert store.get_video(video["id"]) is None
    assert store.delete_video(video["id"]) is False
    assert store.delete_video(12345) is False


def test_deleted_ids_are_never_reused(store):
    first = store.create_video({"title": "a", "file_name": "a"})
    store.delete_video(first["id"])
    second = store.create_video({"title": "b", "file_name": "b"})
    assert second["id"] == 2


def test_deleting_player_video_parent_is_not_cascaded(store):
    player = store.create_player({"name": "A"})
    store.create_video({"title": "t", "file_name": "f", "player_id": player["id"]})
    store.create_video({"title": "t2", "file_name": "f2", "player_id": 77})
    # Orphaned player_id is tolerated by readers
    assert [v["title"] for v in store.get_videos_by_player(77)] == ["t2"]


def test_missing_lookups_return_none(store):
    assert store.get_player(1) is None
    assert store.get_user(1) is None
    assert store.get_f1_race(1) is None
    assert store.get_football_match(1) is None
    assert store.get_player_metrics(1) is None
    assert store.get_football_prediction(1) is None
    assert store.get_football_team_stat(1) is None


def test_defaults_applied_when_missing(store):
    assert store.create_user({"username": "u", "password": "p"})["role"] == "scout"
    assert store.create_video({"title": "t", "file_name": "f"})["status"] == "pending"
    assert store.create_f1_race({"name": "R"})["status"] == "upcoming"
    assert store.create_football_match({"home_team_id": 1, "away_team_id": 2})["status"] == "upcoming"


def test_user_lookup_by_username(store):
    store.create_user({"username": "demo", "password": "pw"})
    user = store.create_user({"username": "scout2", "password": "pw"})
    assert store.get_user_by_username("scout2") == user
    assert store.get_user_by_username("nobody") is None
