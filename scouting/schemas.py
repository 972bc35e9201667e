from datetime import datetime, timezone
from functools import lru_cache
from typing import Annotated, Any, Dict, Optional, Type, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError, create_model
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken as UTC so every stored date compares cleanly.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class InsertModel(BaseModel):
    """Base for request bodies: camelCase on the wire, snake_case in the store.

    Unknown keys (including ``id`` and ``createdAt``) are dropped. Bodies are
    validated strictly, so a JSON string is never coerced into a number.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", strict=True)


class InsertPlayer(InsertModel):
    name: str
    age: Optional[int] = None
    team: Optional[str] = None
    position: Optional[str] = None
    description: Optional[str] = None
    avatar_url: Optional[str] = None
    recruitment_match: Optional[int] = None


class InsertPlayerMetrics(InsertModel):
    player_id: int
    pace: Optional[float] = None
    technique: Optional[float] = None
    finishing: Optional[float] = None
    passing: Optional[float] = None
    vision: Optional[float] = None
    stamina: Optional[float] = None
    tackling: Optional[float] = None
    strength: Optional[float] = None
    positioning: Optional[float] = None
    agility: Optional[float] = None
    ball_control: Optional[float] = None
    speed: Optional[float] = None


class InsertVideo(InsertModel):
    title: str
    file_name: str
    file_size: Optional[int] = None
    duration: Optional[int] = None
    player_id: Optional[int] = None
    uploaded_by_id: Optional[int] = None
    status: Optional[str] = "pending"  # pending, analyzing, completed
    analysis_results: Optional[Any] = None


class InsertF1Driver(InsertModel):
    name: str
    team: str
    number: Optional[int] = None
    avatar_url: Optional[str] = None


class InsertF1Race(InsertModel):
    name: str
    location: Optional[str] = None
    date: Optional[UtcDatetime] = None
    status: Optional[str] = "upcoming"  # upcoming, completed


class InsertF1Prediction(InsertModel):
    race_id: int
    driver_id: int
    position: Optional[int] = None
    win_probability: Optional[float] = None
    factors: Optional[Any] = None


class InsertFootballTeam(InsertModel):
    name: str
    league: Optional[str] = None
    logo_url: Optional[str] = None


class InsertFootballMatch(InsertModel):
    home_team_id: int
    away_team_id: int
    date: Optional[UtcDatetime] = None
    status: Optional[str] = "upcoming"
    home_score: Optional[int] = None
    away_score: Optional[int] = None


class InsertFootballPrediction(InsertModel):
    match_id: int
    predicted_home_score: Optional[int] = None
    predicted_away_score: Optional[int] = None
    win_probability: Optional[float] = None
    draw_probability: Optional[float] = None
    loss_probability: Optional[float] = None
    confidence: Optional[int] = None
    stats: Optional[Any] = None


class InsertFootballTeamStat(InsertModel):
    """Team stat body; the team id always comes from the URL, never the body."""

    league_position: Optional[int] = None
    win_probability: Optional[float] = None
    form: Optional[str] = None
    goal_difference: Optional[int] = None
    points: Optional[int] = None
    recent_results: Optional[Any] = None


@lru_cache(maxsize=None)
def partial_model(model: Type[InsertModel]) -> Type[InsertModel]:
    """Variant of ``model`` where every field may be omitted.

    Field types are unchanged, so a required field still rejects ``null``.
    """
    fields = {name: (f.annotation, None) for name, f in model.model_fields.items()}
    return create_model(f"Partial{model.__name__}", __base__=InsertModel, **fields)


def _validate(model: Type[InsertModel], raw: Union[str, bytes, None]) -> InsertModel:
    # An empty body is an empty object; anything else must be a JSON object.
    return model.model_validate_json(raw or "{}")


def parse_insert(model: Type[InsertModel], raw: Union[str, bytes, None]) -> Dict[str, Any]:
    """Validate a raw JSON request body and return store fields."""
    return _validate(model, raw).model_dump()


def parse_partial(model: Type[InsertModel], raw: Union[str, bytes, None]) -> Dict[str, Any]:
    """Validate a PATCH body; only keys the client actually sent are returned."""
    instance = _validate(partial_model(model), raw)
    return instance.model_dump(exclude_unset=True)


def format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f'{err.get("msg")} at "{loc}"' if loc else str(err.get("msg")))
    return "Validation error: " + "; ".join(parts)


# Joined child records that are themselves entities and need key conversion.
_JOINED_KEYS = ("metrics", "driver")


def dump_record(record: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Convert a stored record to its JSON wire shape.

    Top-level keys become camelCase and datetimes become ISO-8601 strings.
    Free-form JSON payloads (``factors``, ``stats`` ...) pass through as-is.
    """
    if record is None:
        return None
    out: Dict[str, Any] = {}
    for key, value in record.items():
        if key in _JOINED_KEYS:
            value = dump_record(value)
        elif isinstance(value, datetime):
            value = value.isoformat()
        out[to_camel(key)] = value
    return out
