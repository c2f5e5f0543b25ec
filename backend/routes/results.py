from __future__ import annotations

import asyncio

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from drawfeed.errors import (
    DrawFeedError,
    EmptyResultError,
    UnknownGameTypeError,
    UpstreamShapeError,
    UpstreamUnavailableError,
)
from drawfeed.pipeline import ResultPipeline

from ..config import load_settings
from ..schemas import DrawResponse, ErrorResponse, GameListResponse, ResultsQuery

bp = Blueprint("results", __name__)

ERROR_STATUS = {
    UnknownGameTypeError: 400,
    UpstreamUnavailableError: 502,
    UpstreamShapeError: 502,
    EmptyResultError: 500,
}


def get_pipeline() -> ResultPipeline:
    return current_app.extensions["drawfeed.pipeline"]


def _error(message: str, kind: str, status: int, game_type=None):
    body = ErrorResponse(error=message, kind=kind, game_type=game_type)
    return jsonify(body.model_dump()), status


@bp.after_request
def apply_http_policy(response):
    policy = load_settings().http
    response.headers["Access-Control-Allow-Origin"] = policy.cors_allow_origin
    response.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    if request.method == "GET" and response.status_code == 200:
        response.headers["Cache-Control"] = f"s-maxage={policy.cache_max_age}, stale-while-revalidate"
    return response


@bp.get("/games")
def list_games():
    games = [game.value for game in get_pipeline().game_types]
    return jsonify(GameListResponse(games=games).model_dump())


@bp.get("/results")
def get_results():
    try:
        query = ResultsQuery(type=request.args.get("type", ""))
    except ValidationError:
        return _error("Invalid lottery type provided.", "invalid_selector", 400, request.args.get("type"))

    try:
        result = asyncio.run(get_pipeline().get_results(query.type))
    except DrawFeedError as exc:
        status = ERROR_STATUS.get(type(exc), 500)
        if status >= 500:
            current_app.logger.error("Error fetching results for %s: %s", query.type.value, exc)
        return _error(str(exc), exc.kind, status, exc.game_type)

    draws = [DrawResponse(**record).model_dump() for record in result.to_list()]
    return jsonify(draws)
