import pytest

from forecast import ForecastError, ForecastPeriod
from weather_server import create_app

from stubs import StubForecastClient


@pytest.fixture
def stub_client():
    return StubForecastClient(periods=[ForecastPeriod(temperature=72, summary="Partly Cloudy")])


@pytest.fixture
def app(stub_client):
    app = create_app(forecast_client=stub_client)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def failing_client():
    return StubForecastClient(error=ForecastError("503 Service Unavailable from api.weather.gov"))
