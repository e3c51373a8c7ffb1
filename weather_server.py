import logging
import math
import os
import re
from dataclasses import asdict

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS

from forecast import ErrorResponse, ForecastError, WeatherResponse, classify_temperature
from nws_client import NWS_BASE_URL, NWS_USER_AGENT, NWSForecastClient

# ------------------ Configuration ------------------
PORT = int(os.environ.get('PORT', 8080))
HOST = os.environ.get('HOST', '0.0.0.0')
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'

NWS_TIMEOUT = os.environ.get('NWS_TIMEOUT')  # seconds, unset means no timeout

# ASCII decimal with optional exponent
DECIMAL_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def json_error(message, status_code):
    """Error body in the same JSON shape for every failure."""
    return jsonify(asdict(ErrorResponse(error=message))), status_code


class InvalidParameter(ValueError):
    """A required query parameter is missing or not a number."""


def parse_coordinate(name):
    """Read a required float query parameter, raising InvalidParameter with a client-facing message."""
    raw = request.args.get(name, '')
    if raw == '':
        raise InvalidParameter(f"Query parameter `{name}` is missing")
    value = float(raw) if DECIMAL_RE.fullmatch(raw) else math.nan
    if not math.isfinite(value):
        raise InvalidParameter(f"Unable to parse query parameter `{name}` to float")
    return value


def get_weather():
    """Short forecast and a Cold/Moderate/Hot label for the given lat/lon."""
    # HEAD reaches the view because Flask adds it to every GET route
    if request.method != 'GET':
        return json_error("Not found", 404)

    try:
        lat = parse_coordinate('lat')
        lon = parse_coordinate('lon')
    except InvalidParameter as e:
        return json_error(str(e), 400)

    current_app.logger.info("External weather request (lat: %.4f, lon: %.4f)", lat, lon)

    client = current_app.config['FORECAST_CLIENT']
    try:
        periods = client.forecast(lat, lon)
    except ForecastError as e:
        current_app.logger.error("External weather service error: %s", e)
        return json_error("External weather service error", 500)

    if not periods:
        current_app.logger.warning("No weather data returned")
        return json_error("No weather data returned from external service", 500)

    # First period is the nearest-term forecast
    period = periods[0]
    result = WeatherResponse(
        temperature=classify_temperature(period.temperature),
        forecast=period.summary,
    )

    try:
        return jsonify(asdict(result)), 200
    except (TypeError, ValueError) as e:
        current_app.logger.error("Error serializing JSON: %s", e)
        return json_error("Error serializing JSON", 500)


def create_app(forecast_client=None):
    app = Flask(__name__)
    CORS(app)
    app.json.sort_keys = False

    if forecast_client is None:
        forecast_client = NWSForecastClient(
            base_url=os.environ.get('NWS_BASE_URL', NWS_BASE_URL),
            user_agent=os.environ.get('NWS_USER_AGENT', NWS_USER_AGENT),
            timeout=float(NWS_TIMEOUT) if NWS_TIMEOUT else None,
        )
    app.config['FORECAST_CLIENT'] = forecast_client

    app.add_url_rule("/", view_func=get_weather, methods=["GET"], provide_automatic_options=False)

    @app.errorhandler(404)
    @app.errorhandler(405)
    def not_found(e):
        return json_error("Not found", 404)

    @app.errorhandler(500)
    def internal_error(e):
        return json_error("Internal server error", 500)

    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    app = create_app()
    app.run(host=HOST, port=PORT, debug=DEBUG)
