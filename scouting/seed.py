"""Demo dataset for local runs and the UI walkthrough.

``load_demo_data`` expects an empty store; ids in the comments below assume
that (players 1-8, drivers 1-3, races 1-4, teams 1-6, matches 1-5).
"""

from datetime import datetime, timezone
from typing import Any, Dict, List


def _date(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


_PLAYERS_WITH_METRICS: List[Dict[str, Any]] = [
    {
        "player": {
            "name": "Lionel Messi",
            "age": 36,
            "team": "Inter Miami CF",
            "position": "Forward",
            "description": "One of the greatest footballers of all time. Known for his exceptional dribbling skills, vision, and goalscoring ability.",
            "avatar_url": "/assets/player-images/messi.jpg",
            "recruitment_match": 99,
        },
        "metrics": {
            "speed": 88, "agility": 95, "ball_control": 98, "pace": 87,
            "technique": 97, "finishing": 94, "passing": 96, "vision": 95,
            "stamina": 85, "tackling": 48, "strength": 72, "positioning": 93,
        },
    },
    {
        "player": {
            "name": "Erling Haaland",
            "age": 23,
            "team": "Manchester City",
            "position": "Forward",
            "description": "Phenomenal striker with incredible speed, strength and finishing ability. Natural goalscorer with great positioning.",
            "avatar_url": "/assets/player-images/haaland.jpg",
            "recruitment_match": 96,
        },
        "metrics": {
            "speed": 92, "agility": 85, "ball_control": 86, "pace": 90,
            "technique": 85, "finishing": 95, "passing": 75, "vision": 82,
            "stamina": 88, "tackling": 45, "strength": 94, "positioning": 92,
        },
    },
    {
        "player": {
            "name": "Jude Bellingham",
            "age": 20,
            "team": "Real Madrid",
            "position": "Midfielder",
            "description": "Complete midfielder with exceptional technical ability and game intelligence. Natural leader with great potential.",
            "avatar_url": "/assets/player-images/bellingham.jpg",
            "recruitment_match": 95,
        },
        "metrics": {
            "speed": 84, "agility": 88, "ball_control": 90, "pace": 83,
            "technique": 89, "finishing": 82, "passing": 88, "vision": 87,
            "stamina": 92, "tackling": 85, "strength": 86, "positioning": 88,
        },
    },
    {
        "player": {
            "name": "Kylian Mbappé",
            "age": 25,
            "team": "Paris Saint-Germain",
            "position": "Forward",
            "description": "Explosive forward with blistering pace and clinical finishing. Modern complete forward with great potential.",
            "avatar_url": "/assets/player-images/mbappe.jpg",
            "recruitment_match": 97,
        },
        "metrics": {
            "speed": 97, "agility": 93, "ball_control": 89, "pace": 96,
            "technique": 90, "finishing": 91, "passing": 83, "vision": 85,
            "stamina": 88, "tackling": 42, "strength": 78, "positioning": 90,
        },
    },
    {
        "player": {
            "name": "Cristiano Ronaldo",
            "age": 40,
            "team": "Al Nassr FC",
            "position": "Forward",
            "description": "One of the greatest footballers of all time. Known for his goalscoring ability, athleticism, and leadership on the field. Currently plays in the Roshn Saudi League for Al Nassr FC.",
            "avatar_url": "/assets/player-images/cristiano.jpg",
            "recruitment_match": 98,
        },
        "metrics": {
            "speed": 85, "agility": 83, "ball_control": 90, "pace": 84,
            "technique": 92, "finishing": 95, "passing": 83, "vision": 87,
            "stamina": 88, "tackling": 52, "strength": 88, "positioning": 94,
        },
    },
]

_PLAYERS_WITHOUT_METRICS: List[Dict[str, Any]] = [
    {
        "name": "Sarah Williams",
        "age": 24,
        "team": "Chelsea FC",
        "position": "Forward",
        "description": "Exceptional speed and finishing ability. Excellent movement off the ball.",
        "avatar_url": "https://images.unsplash.com/photo-1494790108377-be9c29b29330?ixlib=rb-1.2.1&auto=format&fit=crop&w=100&q=80",
        "recruitment_match": 94,
    },
    {
        "name": "David Chen",
        "age": 26,
        "team": "Arsenal FC",
        "position": "Midfielder",
        "description": "Great vision and passing range. Controls the tempo of the game.",
        "avatar_url": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?ixlib=rb-1.2.1&auto=format&fit=crop&w=100&q=80",
        "recruitment_match": 91,
    },
    {
        "name": "Alex Morgan",
        "age": 25,
        "team": "Liverpool FC",
        "position": "Defender",
        "description": "Strong in the tackle with excellent positional awareness.",
        "avatar_url": "https://images.unsplash.com/photo-1570295999919-56ceb5ecca61?ixlib=rb-1.2.1&auto=format&fit=crop&w=100&q=80",
        "recruitment_match": 89,
    },
]

_MONACO_CONDITIONS = {
    "trackTemperature": "28°C",
    "weather": "Clear Skies",
    "trackType": "Street Circuit",
}


def _seed_scouting(store) -> None:
    store.create_user({
        "username": "demo",
        "password": "password",
        "full_name": "John Carter",
        "role": "Head Scout",
        "avatar_url": "https://images.unsplash.com/photo-1568602471122-7832951cc4c5?ixlib=rb-1.2.1&auto=format&fit=crop&w=100&q=80",
    })

    for entry in _PLAYERS_WITH_METRICS:
        player = store.create_player(entry["player"])
        store.create_player_metrics({"player_id": player["id"], **entry["metrics"]})
    for fields in _PLAYERS_WITHOUT_METRICS:
        store.create_player(fields)

    # Both clips belong to player 1 (Messi), uploaded by the demo user.
    store.create_video({
        "title": "Training_Session_June15.mp4",
        "file_name": "Training_Session_June15.mp4",
        "file_size": 10200000,
        "duration": 300,
        "player_id": 1,
        "uploaded_by_id": 1,
        "status": "completed",
        "analysis_results": {"speed": 86, "agility": 78, "ballControl": 92},
    })
    store.create_video({
        "title": "Match_Highlights_FC_Barcelona.mp4",
        "file_name": "Match_Highlights_FC_Barcelona.mp4",
        "file_size": 32700000,
        "duration": 480,
        "player_id": 1,
        "uploaded_by_id": 1,
        "status": "completed",
        "analysis_results": {"speed": 84, "agility": 76, "ballControl": 90},
    })


def _seed_f1(store) -> None:
    verstappen = store.create_f1_driver({"name": "Max Verstappen", "team": "Red Bull Racing", "number": 1, "avatar_url": ""})
    hamilton = store.create_f1_driver({"name": "Lewis Hamilton", "team": "Mercedes", "number": 44, "avatar_url": ""})
    leclerc = store.create_f1_driver({"name": "Charles Leclerc", "team": "Ferrari", "number": 16, "avatar_url": ""})

    monaco = store.create_f1_race({
        "name": "Monaco Grand Prix",
        "location": "Monte Carlo, Monaco",
        "date": _date(2025, 5, 24),
        "status": "upcoming",
    })
    store.create_f1_race({
        "name": "Saudi Arabian Grand Prix",
        "location": "Jeddah, Saudi Arabia",
        "date": _date(2025, 4, 15),
        "status": "upcoming",
    })
    store.create_f1_race({
        "name": "Australian Grand Prix",
        "location": "Melbourne, Australia",
        "date": _date(2025, 3, 23),
        "status": "upcoming",
    })
    store.create_f1_race({
        "name": "Spanish Grand Prix",
        "location": "Barcelona, Spain",
        "date": _date(2025, 6, 8),
        "status": "upcoming",
    })

    picks = [
        (verstappen, 1, 68, "Medium → Hard", "Maximum", "High Performance"),
        (hamilton, 2, 53, "Soft → Medium", "Maximum", "Balanced"),
        (leclerc, 3, 42, "Medium → Hard", "High", "Fuel Saving"),
    ]
    for driver, position, win_probability, tires, downforce, engine in picks:
        store.create_f1_prediction({
            "race_id": monaco["id"],
            "driver_id": driver["id"],
            "position": position,
            "win_probability": win_probability,
            "factors": {
                **_MONACO_CONDITIONS,
                "tireStrategy": tires,
                "downforceLevel": downforce,
                "engineMode": engine,
            },
        })


def _recent(*results: tuple) -> List[Dict[str, str]]:
    return [{"opponent": o, "result": r, "score": s} for o, r, s in results]


def _seed_football(store) -> None:
    man_city = store.create_football_team({
        "name": "Manchester City",
        "league": "Premier League",
        "logo_url": "https://upload.wikimedia.org/wikipedia/en/e/eb/Manchester_City_FC_badge.svg",
    })
    liverpool = store.create_football_team({
        "name": "Liverpool",
        "league": "Premier League",
        "logo_url": "https://upload.wikimedia.org/wikipedia/en/0/0c/Liverpool_FC.svg",
    })
    al_hilal = store.create_football_team({
        "name": "Al Hilal",
        "league": "Roshn Saudi League",
        "logo_url": "https://upload.wikimedia.org/wikipedia/en/a/a9/Al_Hilal_FC_logo.svg",
    })
    al_nassr = store.create_football_team({
        "name": "Al Nassr",
        "league": "Roshn Saudi League",
        "logo_url": "https://upload.wikimedia.org/wikipedia/en/a/a0/Al_Nassr_FC.png",
    })
    al_ahli = store.create_football_team({
        "name": "Al Ahli",
        "league": "Roshn Saudi League",
        "logo_url": "https://upload.wikimedia.org/wikipedia/en/e/eb/Al_Ahli_Saudi_FC_logo.png",
    })
    al_ittihad = store.create_football_team({
        "name": "Al Ittihad",
        "league": "Roshn Saudi League",
        "logo_url": "https://upload.wikimedia.org/wikipedia/en/2/24/Ittihad_FC.png",
    })

    fixtures = [
        (man_city, liverpool, _date(2025, 4, 12)),
        (al_hilal, al_nassr, _date(2025, 3, 15)),
        (al_ahli, al_ittihad, _date(2025, 4, 5)),
        (al_nassr, al_ahli, _date(2025, 5, 20)),
        (al_ittihad, al_hilal, _date(2025, 6, 10)),
    ]
    matches = [
        store.create_football_match({
            "home_team_id": home["id"],
            "away_team_id": away["id"],
            "date": kickoff,
            "status": "upcoming",
            "home_score": None,
            "away_score": None,
        })
        for home, away, kickoff in fixtures
    ]

    forecasts = [
        (matches[0], 3, 1, 62, 26, 12, 87, [58, 42], [2.4, 1.1], [7, 4]),
        (matches[1], 2, 2, 38, 40, 22, 75, [45, 55], [1.8, 2.0], [5, 6]),
        (matches[2], 1, 3, 28, 25, 47, 82, [40, 60], [1.2, 2.6], [4, 8]),
    ]
    for match, home, away, win, draw, loss, confidence, possession, xg, shots in forecasts:
        store.create_football_prediction({
            "match_id": match["id"],
            "predicted_home_score": home,
            "predicted_away_score": away,
            "win_probability": win,
            "draw_probability": draw,
            "loss_probability": loss,
            "confidence": confidence,
            "stats": {"possession": possession, "expectedGoals": xg, "shotsOnTarget": shots},
        })

    store.create_football_team_stat(al_hilal["id"], {
        "league_position": 1,
        "win_probability": 45,
        "form": "WWDWW",
        "goal_difference": 28,
        "points": 72,
        "recent_results": _recent(
            ("Al Nassr", "W", "3-1"), ("Al Ahli", "W", "2-0"), ("Al Ittihad", "D", "1-1"),
            ("Al Shabab", "W", "3-0"), ("Al Taawoun", "W", "2-1"),
        ),
    })
    store.create_football_team_stat(al_nassr["id"], {
        "league_position": 2,
        "win_probability": 30,
        "form": "WLWWW",
        "goal_difference": 22,
        "points": 68,
        "recent_results": _recent(
            ("Al Hilal", "L", "1-3"), ("Al Ahli", "W", "2-1"), ("Al Ittihad", "W", "3-0"),
            ("Al Shabab", "W", "2-1"), ("Al Taawoun", "W", "3-2"),
        ),
    })
    store.create_football_team_stat(al_ahli["id"], {
        "league_position": 3,
        "win_probability": 15,
        "form": "LWWLD",
        "goal_difference": 18,
        "points": 61,
        "recent_results": _recent(
            ("Al Hilal", "L", "0-2"), ("Al Nassr", "L", "1-2"), ("Al Ittihad", "W", "2-1"),
            ("Al Shabab", "W", "2-0"), ("Al Taawoun", "D", "1-1"),
        ),
    })
    store.create_football_team_stat(al_ittihad["id"], {
        "league_position": 4,
        "win_probability": 10,
        "form": "WDLWW",
        "goal_difference": 15,
        "points": 58,
        "recent_results": _recent(
            ("Al Hilal", "D", "1-1"), ("Al Nassr", "L", "0-3"), ("Al Ahli", "L", "1-2"),
            ("Al Shabab", "W", "2-0"), ("Al Taawoun", "W", "2-1"),
        ),
    })


def load_demo_data(store) -> None:
    _seed_scouting(store)
    _seed_f1(store)
    _seed_football(store)
