import copy
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from .errors import DanglingReferenceError, DuplicateEntityError


log = logging.getLogger(__name__)

Record = Dict[str, Any]
Predicate = Callable[[Record], bool]

# Store-assigned fields; anything a caller sends under these keys is dropped.
_READ_ONLY_FIELDS = ("id", "created_at")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _nulls_last(field: str) -> Callable[[Record], tuple]:
    """Ascending sort key on ``field`` with missing values last, then by id."""
    def _key(row: Record) -> tuple:
        value = row.get(field)
        return (value is None, value, row["id"])
    return _key


class Collection:
    """One identity-keyed family of records with its own id counter.

    Ids start at 1 and are never reused, even after ``delete``. All mutation
    and iteration happens under the collection lock so concurrent request
    threads cannot race on the counter or observe a half-applied merge.
    Records are copied on the way in and on the way out.
    """

    def __init__(
        self,
        name: str,
        timestamped: bool = False,
        unique_on: Optional[str] = None,
        defaults: Optional[Dict[str, Any]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.name = name
        self.timestamped = timestamped
        self.unique_on = unique_on
        self.defaults = dict(defaults or {})
        self._clock = clock
        self._rows: Dict[int, Record] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def _check_unique(self, fields: Record, exclude_id: Optional[int] = None) -> None:
        # Caller holds the lock.
        value = fields.get(self.unique_on)
        if value is None:
            return
        for record_id, row in self._rows.items():
            if record_id != exclude_id and row.get(self.unique_on) == value:
                raise DuplicateEntityError(self.name, self.unique_on, value)

    def create(self, fields: Record) -> Record:
        payload = {k: v for k, v in fields.items() if k not in _READ_ONLY_FIELDS}
        for key, value in self.defaults.items():
            payload.setdefault(key, value)
        with self._lock:
            if self.unique_on:
                self._check_unique(payload)
            record_id = self._next_id
            self._next_id += 1
            record: Record = {"id": record_id, **copy.deepcopy(payload)}
            if self.timestamped:
                record["created_at"] = self._clock()
            self._rows[record_id] = record
            result = copy.deepcopy(record)
        log.debug("%s created id=%s", self.name, record_id)
        return result

    def get(self, record_id: Optional[int]) -> Optional[Record]:
        with self._lock:
            row = self._rows.get(record_id)  # type: ignore[arg-type]
            return copy.deepcopy(row) if row is not None else None

    def update(self, record_id: int, fields: Record) -> Optional[Record]:
        """Shallow-merge ``fields`` over the stored record.

        Keys present in ``fields`` overwrite, including explicit ``None``;
        keys absent from ``fields`` keep their prior value. Returns ``None``
        when no record has ``record_id``.
        """
        changes = {k: v for k, v in fields.items() if k not in _READ_ONLY_FIELDS}
        with self._lock:
            existing = self._rows.get(record_id)
            if existing is None:
                return None
            if self.unique_on and self.unique_on in changes:
                self._check_unique(changes, exclude_id=record_id)
            merged = {**existing, **copy.deepcopy(changes)}
            self._rows[record_id] = merged
            result = copy.deepcopy(merged)
        log.debug("%s updated id=%s fields=%s", self.name, record_id, sorted(changes))
        return result

    def delete(self, record_id: int) -> bool:
        with self._lock:
            removed = self._rows.pop(record_id, None) is not None
        if removed:
            log.debug("%s deleted id=%s", self.name, record_id)
        return removed

    def list(self) -> List[Record]:
        with self._lock:
            return [copy.deepcopy(self._rows[k]) for k in sorted(self._rows)]

    def filter(self, predicate: Predicate) -> List[Record]:
        with self._lock:
            return [
                copy.deepcopy(self._rows[k])
                for k in sorted(self._rows)
                if predicate(self._rows[k])
            ]

    def find_first(self, predicate: Predicate) -> Optional[Record]:
        """Return the lowest-id record matching ``predicate``, if any."""
        with self._lock:
            for record_id in sorted(self._rows):
                row = self._rows[record_id]
                if predicate(row):
                    return copy.deepcopy(row)
        return None


class EntityStore:
    """In-memory repository for the scouting, F1 and football families.

    Construct one per process (or per test) and hand it to ``create_app``.
    Demo data is never loaded implicitly; call :meth:`seed` for that.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self.users = Collection("users", defaults={"role": "scout"}, clock=clock)
        self.players = Collection("players", timestamped=True, clock=clock)
        self.player_metrics = Collection(
            "player_metrics", timestamped=True, unique_on="player_id", clock=clock
        )
        self.videos = Collection(
            "videos", timestamped=True, defaults={"status": "pending"}, clock=clock
        )
        self.f1_drivers = Collection("f1_drivers", clock=clock)
        self.f1_races = Collection("f1_races", defaults={"status": "upcoming"}, clock=clock)
        self.f1_predictions = Collection("f1_predictions", timestamped=True, clock=clock)
        self.football_teams = Collection("football_teams", clock=clock)
        self.football_matches = Collection(
            "football_matches", defaults={"status": "upcoming"}, clock=clock
        )
        self.football_predictions = Collection(
            "football_predictions", timestamped=True, unique_on="match_id", clock=clock
        )
        self.football_team_stats = Collection(
            "football_team_stats", timestamped=True, unique_on="team_id", clock=clock
        )
        self._seeded = False
        self._seed_lock = threading.Lock()

    def _collections(self) -> List[Collection]:
        return [
            self.users,
            self.players,
            self.player_metrics,
            self.videos,
            self.f1_drivers,
            self.f1_races,
            self.f1_predictions,
            self.football_teams,
            self.football_matches,
            self.football_predictions,
            self.football_team_stats,
        ]

    def counts(self) -> Dict[str, int]:
        return {c.name: len(c) for c in self._collections()}

    def seed(self) -> Dict[str, int]:
        """Load the demo fixture once; later calls are no-ops.

        Returns the per-family record counts after seeding.
        """
        from .seed import load_demo_data

        with self._seed_lock:
            if self._seeded:
                log.info("Demo data already loaded; skipping seed")
                return self.counts()
            load_demo_data(self)
            self._seeded = True
        counts = self.counts()
        log.info("Demo data loaded: %s", counts)
        return counts

    # Users

    def get_user(self, user_id: int) -> Optional[Record]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[Record]:
        return self.users.find_first(lambda u: u.get("username") == username)

    def create_user(self, fields: Record) -> Record:
        return self.users.create(fields)

    # Players

    def get_player(self, player_id: int) -> Optional[Record]:
        return self.players.get(player_id)

    def get_players(self) -> List[Record]:
        return self.players.list()

    def get_top_players(self, limit: int) -> List[Record]:
        """Players by ``recruitment_match`` descending, each with its metrics.

        A missing score counts as 0; equal scores keep id order. A player
        without metrics gets ``metrics: None``.
        """
        players = sorted(
            self.players.list(),
            key=lambda p: (-(p.get("recruitment_match") or 0), p["id"]),
        )[: max(limit, 0)]
        for player in players:
            player["metrics"] = self.get_player_metrics(player["id"])
        return players

    def create_player(self, fields: Record) -> Record:
        return self.players.create(fields)

    def update_player(self, player_id: int, fields: Record) -> Optional[Record]:
        return self.players.update(player_id, fields)

    # Player metrics

    def get_player_metrics(self, player_id: int) -> Optional[Record]:
        return self.player_metrics.find_first(lambda m: m.get("player_id") == player_id)

    def create_player_metrics(self, fields: Record) -> Record:
        return self.player_metrics.create(fields)

    def update_player_metrics(self, metrics_id: int, fields: Record) -> Optional[Record]:
        return self.player_metrics.update(metrics_id, fields)

    # Videos

    def get_video(self, video_id: int) -> Optional[Record]:
        return self.videos.get(video_id)

    def get_videos(self) -> List[Record]:
        return self.videos.list()

    def get_videos_by_player(self, player_id: int) -> List[Record]:
        return self.videos.filter(lambda v: v.get("player_id") == player_id)

    def get_recent_videos(self, limit: int) -> List[Record]:
        videos = sorted(
            self.videos.list(),
            key=lambda v: (v["created_at"], v["id"]),
            reverse=True,
        )
        return videos[: max(limit, 0)]

    def create_video(self, fields: Record) -> Record:
        return self.videos.create(fields)

    def update_video(self, video_id: int, fields: Record) -> Optional[Record]:
        return self.videos.update(video_id, fields)

    def delete_video(self, video_id: int) -> bool:
        return self.videos.delete(video_id)

    # Formula 1

    def get_f1_driver(self, driver_id: int) -> Optional[Record]:
        return self.f1_drivers.get(driver_id)

    def get_f1_drivers(self) -> List[Record]:
        return self.f1_drivers.list()

    def create_f1_driver(self, fields: Record) -> Record:
        return self.f1_drivers.create(fields)

    def get_f1_race(self, race_id: int) -> Optional[Record]:
        return self.f1_races.get(race_id)

    def get_f1_races(self) -> List[Record]:
        return self.f1_races.list()

    def get_upcoming_f1_races(self) -> List[Record]:
        races = self.f1_races.filter(lambda r: r.get("status") == "upcoming")
        return sorted(races, key=_nulls_last("date"))

    def create_f1_race(self, fields: Record) -> Record:
        return self.f1_races.create(fields)

    def update_f1_race(self, race_id: int, fields: Record) -> Optional[Record]:
        return self.f1_races.update(race_id, fields)

    def get_f1_predictions(self, race_id: int, strict: bool = False) -> List[Record]:
        """Predictions for a race by finishing position, each with its driver.

        A prediction whose driver no longer exists is skipped with a warning,
        or raises :class:`DanglingReferenceError` when ``strict`` is set.
        """
        predictions = sorted(
            self.f1_predictions.filter(lambda p: p.get("race_id") == race_id),
            key=_nulls_last("position"),
        )
        joined = []
        for prediction in predictions:
            driver = self.f1_drivers.get(prediction.get("driver_id"))
            if driver is None:
                if strict:
                    raise DanglingReferenceError(
                        "f1_predictions", "driver_id", prediction.get("driver_id")
                    )
                log.warning(
                    "Skipping f1 prediction id=%s: driver_id=%s not found",
                    prediction["id"],
                    prediction.get("driver_id"),
                )
                continue
            prediction["driver"] = driver
            joined.append(prediction)
        return joined

    def create_f1_prediction(self, fields: Record) -> Record:
        return self.f1_predictions.create(fields)

    # Football

    def get_football_team(self, team_id: int) -> Optional[Record]:
        return self.football_teams.get(team_id)

    def get_football_teams(self) -> List[Record]:
        return self.football_teams.list()

    def create_football_team(self, fields: Record) -> Record:
        return self.football_teams.create(fields)

    def get_football_match(self, match_id: int) -> Optional[Record]:
        return self.football_matches.get(match_id)

    def get_football_matches(self) -> List[Record]:
        return self.football_matches.list()

    def get_upcoming_football_matches(self) -> List[Record]:
        matches = self.football_matches.filter(lambda m: m.get("status") == "upcoming")
        return sorted(matches, key=_nulls_last("date"))

    def create_football_match(self, fields: Record) -> Record:
        return self.football_matches.create(fields)

    def update_football_match(self, match_id: int, fields: Record) -> Optional[Record]:
        return self.football_matches.update(match_id, fields)

    def get_football_prediction(self, match_id: int) -> Optional[Record]:
        return self.football_predictions.find_first(lambda p: p.get("match_id") == match_id)

    def create_football_prediction(self, fields: Record) -> Record:
        return self.football_predictions.create(fields)

    def get_football_team_stat(self, team_id: int) -> Optional[Record]:
        return self.football_team_stats.find_first(lambda s: s.get("team_id") == team_id)

    def get_football_team_stats(self, league: Optional[str] = None) -> List[Record]:
        """Team stat rows by league position, optionally limited to one league.

        ``league`` is resolved to the ids of the teams playing in it; stat rows
        for any other team (or for a team that no longer exists) are dropped.
        """
        stats = self.football_team_stats.list()
        if league:
            team_ids = {
                t["id"] for t in self.football_teams.filter(lambda t: t.get("league") == league)
            }
            stats = [s for s in stats if s.get("team_id") in team_ids]
        return sorted(stats, key=_nulls_last("league_position"))

    def create_football_team_stat(self, team_id: int, fields: Record) -> Record:
        payload = {k: v for k, v in fields.items() if k != "team_id"}
        payload["team_id"] = team_id
        return self.football_team_stats.create(payload)
