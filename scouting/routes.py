from flask import Blueprint, current_app, request
from pydantic import ValidationError
from pydantic.alias_generators import to_camel
from werkzeug.exceptions import HTTPException

from .errors import DuplicateEntityError
from .schemas import (
    InsertF1Driver,
    InsertF1Prediction,
    InsertF1Race,
    InsertFootballMatch,
    InsertFootballPrediction,
    InsertFootballTeam,
    InsertFootballTeamStat,
    InsertPlayer,
    InsertPlayerMetrics,
    InsertVideo,
    dump_record,
    format_validation_error,
    parse_insert,
    parse_partial,
)
from .storage import EntityStore


bp = Blueprint('main', __name__)

_DEFAULT_LIMIT = 5


def _store() -> EntityStore:
    return current_app.extensions['entity_store']


def _limit_arg() -> int:
    """Positive integer ``?limit=``; anything else falls back to the default."""
    try:
        value = int(request.args.get('limit', ''))
    except ValueError:
        return _DEFAULT_LIMIT
    return value if value > 0 else _DEFAULT_LIMIT


def _body() -> bytes:
    return request.get_data()


def _not_found(what: str):
    return {'message': f'{what} not found'}, 404


def _many(records):
    return [dump_record(r) for r in records]


@bp.errorhandler(ValidationError)
def _validation_failed(exc):
    return {'message': format_validation_error(exc)}, 400


# Client-facing names for the collections that enforce one record per parent.
_CONFLICT_SUBJECTS = {
    'player_metrics': 'Metrics record',
    'football_predictions': 'Prediction',
    'football_team_stats': 'Team stats record',
}


@bp.errorhandler(DuplicateEntityError)
def _duplicate(exc):
    subject = _CONFLICT_SUBJECTS.get(exc.family, 'Record')
    return {'message': f'{subject} already exists for {to_camel(exc.field)} {exc.value}'}, 409


@bp.errorhandler(Exception)
def _unexpected(exc):
    if isinstance(exc, HTTPException):
        return exc
    current_app.logger.exception("Unhandled error serving %s %s", request.method, request.path)
    return {'message': 'Internal server error'}, 500


@bp.route('/health')
def health():
    """Liveness check with per-family record counts."""
    return {'status': 'ok', 'counts': _store().counts()}


#<players>
@bp.route('/api/players')
def list_players():
    return _many(_store().get_players())


@bp.route('/api/players/image-upload', methods=['POST'])
def upload_player_image():
    # Uploads are not stored yet; the UI only needs a usable image path back.
    return {'success': True, 'imageUrl': '/assets/player-images/ronaldo.jpg'}


@bp.route('/api/players/top')
def top_players():
    return _many(_store().get_top_players(_limit_arg()))


@bp.route('/api/players/<int:player_id>')
def get_player(player_id):
    """Player detail with its metrics row (``metrics: null`` when none)."""
    store = _store()
    player = store.get_player(player_id)
    if not player:
        return _not_found('Player')
    player['metrics'] = store.get_player_metrics(player_id)
    return dump_record(player)


@bp.route('/api/players', methods=['POST'])
def create_player():
    player = _store().create_player(parse_insert(InsertPlayer, _body()))
    return dump_record(player), 201


@bp.route('/api/players/<int:player_id>', methods=['PATCH'])
def update_player(player_id):
    updated = _store().update_player(player_id, parse_partial(InsertPlayer, _body()))
    if not updated:
        return _not_found('Player')
    return dump_record(updated)
#</players>


#<metrics>
@bp.route('/api/player-metrics', methods=['POST'])
def create_player_metrics():
    metrics = _store().create_player_metrics(parse_insert(InsertPlayerMetrics, _body()))
    return dump_record(metrics), 201


@bp.route('/api/player-metrics/<int:metrics_id>', methods=['PATCH'])
def update_player_metrics(metrics_id):
    updated = _store().update_player_metrics(metrics_id, parse_partial(InsertPlayerMetrics, _body()))
    if not updated:
        return _not_found('Metrics')
    return dump_record(updated)
#</metrics>


#<videos>
@bp.route('/api/videos/recent')
def recent_videos():
    return _many(_store().get_recent_videos(_limit_arg()))


@bp.route('/api/videos/player/<int:player_id>')
def videos_by_player(player_id):
    return _many(_store().get_videos_by_player(player_id))


@bp.route('/api/videos/<int:video_id>')
def get_video(video_id):
    video = _store().get_video(video_id)
    if not video:
        return _not_found('Video')
    return dump_record(video)


@bp.route('/api/videos', methods=['POST'])
def create_video():
    video = _store().create_video(parse_insert(InsertVideo, _body()))
    return dump_record(video), 201


@bp.route('/api/videos/<int:video_id>', methods=['PATCH'])
def update_video(video_id):
    updated = _store().update_video(video_id, parse_partial(InsertVideo, _body()))
    if not updated:
        return _not_found('Video')
    return dump_record(updated)


@bp.route('/api/videos/<int:video_id>', methods=['DELETE'])
def delete_video(video_id):
    if not _store().delete_video(video_id):
        return _not_found('Video')
    return '', 204
#</videos>


#<f1>
@bp.route('/api/f1/drivers')
def list_f1_drivers():
    return _many(_store().get_f1_drivers())


@bp.route('/api/f1/drivers/<int:driver_id>')
def get_f1_driver(driver_id):
    driver = _store().get_f1_driver(driver_id)
    if not driver:
        return _not_found('Driver')
    return dump_record(driver)


@bp.route('/api/f1/drivers', methods=['POST'])
def create_f1_driver():
    driver = _store().create_f1_driver(parse_insert(InsertF1Driver, _body()))
    return dump_record(driver), 201


@bp.route('/api/f1/races/upcoming')
def upcoming_f1_races():
    return _many(_store().get_upcoming_f1_races())


@bp.route('/api/f1/races/<int:race_id>')
def get_f1_race(race_id):
    race = _store().get_f1_race(race_id)
    if not race:
        return _not_found('Race')
    return dump_record(race)


@bp.route('/api/f1/races', methods=['POST'])
def create_f1_race():
    race = _store().create_f1_race(parse_insert(InsertF1Race, _body()))
    return dump_record(race), 201


@bp.route('/api/f1/races/<int:race_id>', methods=['PATCH'])
def update_f1_race(race_id):
    updated = _store().update_f1_race(race_id, parse_partial(InsertF1Race, _body()))
    if not updated:
        return _not_found('Race')
    return dump_record(updated)


@bp.route('/api/f1/predictions/<int:race_id>')
def f1_predictions(race_id):
    """Predictions for one race ordered by position, each with its driver."""
    return _many(_store().get_f1_predictions(race_id))


@bp.route('/api/f1/predictions', methods=['POST'])
def create_f1_prediction():
    prediction = _store().create_f1_prediction(parse_insert(InsertF1Prediction, _body()))
    return dump_record(prediction), 201
#</f1>


#<football>
@bp.route('/api/football/teams')
def list_football_teams():
    return _many(_store().get_football_teams())


@bp.route('/api/football/teams/<int:team_id>')
def get_football_team(team_id):
    team = _store().get_football_team(team_id)
    if not team:
        return _not_found('Team')
    return dump_record(team)


@bp.route('/api/football/teams', methods=['POST'])
def create_football_team():
    team = _store().create_football_team(parse_insert(InsertFootballTeam, _body()))
    return dump_record(team), 201


@bp.route('/api/football/matches/upcoming')
def upcoming_football_matches():
    return _many(_store().get_upcoming_football_matches())


@bp.route('/api/football/matches/<int:match_id>')
def get_football_match(match_id):
    match = _store().get_football_match(match_id)
    if not match:
        return _not_found('Match')
    return dump_record(match)


@bp.route('/api/football/matches', methods=['POST'])
def create_football_match():
    match = _store().create_football_match(parse_insert(InsertFootballMatch, _body()))
    return dump_record(match), 201


@bp.route('/api/football/matches/<int:match_id>', methods=['PATCH'])
def update_football_match(match_id):
    updated = _store().update_football_match(match_id, parse_partial(InsertFootballMatch, _body()))
    if not updated:
        return _not_found('Match')
    return dump_record(updated)


@bp.route('/api/football/predictions/<int:match_id>')
def football_prediction(match_id):
    prediction = _store().get_football_prediction(match_id)
    if not prediction:
        return _not_found('Prediction')
    return dump_record(prediction)


@bp.route('/api/football/predictions', methods=['POST'])
def create_football_prediction():
    prediction = _store().create_football_prediction(parse_insert(InsertFootballPrediction, _body()))
    return dump_record(prediction), 201


@bp.route('/api/football/team-stats')
def football_team_stats():
    """League table rows; ``?league=`` limits them to teams in that league."""
    league = request.args.get('league') or None
    return _many(_store().get_football_team_stats(league))


@bp.route('/api/football/team-stats/<int:team_id>')
def football_team_stat(team_id):
    stat = _store().get_football_team_stat(team_id)
    if not stat:
        return _not_found('Team stats')
    return dump_record(stat)


@bp.route('/api/football/team-stats/<int:team_id>', methods=['POST'])
def create_football_team_stat(team_id):
    stat = _store().create_football_team_stat(team_id, parse_insert(InsertFootballTeamStat, _body()))
    return dump_record(stat), 201
#</football>
