"""Tests for the Overpass geodata adapter."""

from unittest.mock import MagicMock

import pytest
import requests
from geopy.extra.rate_limiter import RateLimiter
from requests.adapters import HTTPAdapter

from pathfinder.adapters.cache import InMemoryCache
from pathfinder.adapters.geodata import OverpassGeodataSource
from pathfinder.config import OverpassConfig
from pathfinder.domain.errors import ConfigurationError, DataFetchError
from pathfinder.domain.models import Coordinate, FetchCircle
from pathfinder.geo.corridor import generate_corridor

PAYLOAD = {
    "elements": [
        {
            "type": "way",
            "id": 100,
            "nodes": [1, 2, 3],
            "geometry": [
                {"lat": 64.2238, "lon": 27.7241},
                {"lat": 64.2230, "lon": 27.7300},
                {"lat": 64.2214, "lon": 27.7381},
            ],
            "tags": {"highway": "residential"},
        }
    ]
}


def _response(status=200, payload=None, json_error=None):
    response = MagicMock()
    response.status_code = status
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload if payload is not None else PAYLOAD
    return response


@pytest.fixture
def config():
    return OverpassConfig(
        base_url="https://overpass.test/api/interpreter",
        rate_limit_delay=0,
        error_wait_seconds=0,
        max_retries=2,
    )


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def source(config, session):
    return OverpassGeodataSource(
        config=config, cache=InMemoryCache(name="test"), session=session
    )


CIRCLE = FetchCircle(center=Coordinate(64.2226, 27.7311), radius_m=800)


class TestOverpassGeodataSource:
    """Test suite for OverpassGeodataSource."""

    def test_fetch_circle_parses_ways(self, source, session):
        session.get.return_value = _response()

        ways = source.fetch_circle(CIRCLE)

        assert len(ways) == 1
        assert ways[0].node_ids == (1, 2, 3)
        args, kwargs = session.get.call_args
        assert args[0] == "https://overpass.test/api/interpreter"
        query = kwargs["params"]["data"]
        assert query.startswith("[out:json]")
        assert "way(around:800,64.2226000,27.7311000)" in query
        assert '"highway"~"^(' in query
        assert query.endswith("out geom;")

    def test_fetch_corridor_sends_polygon(self, source, session):
        session.get.return_value = _response()
        corridor = generate_corridor(
            Coordinate(64.0, 27.0), Coordinate(64.5, 27.5), width_m=2000, padding_m=1000
        )

        source.fetch_corridor(corridor)

        query = session.get.call_args.kwargs["params"]["data"]
        assert 'way(poly:"' in query
        polygon = query.split('poly:"')[1].split('"')[0]
        assert len(polygon.split()) == 8

    def test_repeated_query_served_from_cache(self, source, session):
        session.get.return_value = _response()

        source.fetch_circle(CIRCLE)
        source.fetch_circle(CIRCLE)

        assert session.get.call_count == 1

    def test_retry_policy_mounted_on_session(self, source, session):
        mounted = {call.args[0]: call.args[1] for call in session.mount.call_args_list}

        assert set(mounted) == {"https://", "http://"}
        adapter = mounted["https://"]
        assert isinstance(adapter, HTTPAdapter)
        retry = adapter.max_retries
        assert retry.total == 2
        assert set(retry.status_forcelist) == {429, 500, 502, 503, 504}
        assert retry.backoff_factor == 0
        assert retry.raise_on_status is False

    def test_real_session_gets_retry_adapter(self, config):
        source = OverpassGeodataSource(config=config)

        adapter = source.session.get_adapter(config.base_url)

        assert adapter.max_retries.total == config.max_retries

    def test_requests_paced_by_rate_limiter(self):
        config = OverpassConfig(base_url="https://overpass.test/api", rate_limit_delay=1.5)
        source = OverpassGeodataSource(config=config, session=MagicMock())

        assert isinstance(source._get, RateLimiter)
        assert source._get.min_delay_seconds == 1.5

    def test_transport_error_after_retries_raises(self, source, session):
        error = requests.ConnectionError("max retries exceeded")
        session.get.side_effect = error

        with pytest.raises(DataFetchError) as excinfo:
            source.fetch_circle(CIRCLE)

        assert excinfo.value.cause is error
        assert excinfo.value.status_code is None
        assert session.get.call_count == 1

    def test_retryable_status_left_after_retries_raises(self, source, session):
        session.get.return_value = _response(status=503)

        with pytest.raises(DataFetchError) as excinfo:
            source.fetch_circle(CIRCLE)

        assert excinfo.value.status_code == 503

    def test_client_error_raises(self, source, session):
        session.get.return_value = _response(status=400)

        with pytest.raises(DataFetchError) as excinfo:
            source.fetch_circle(CIRCLE)

        assert excinfo.value.status_code == 400

    def test_default_cache_created(self, config, session):
        source = OverpassGeodataSource(config=config, session=session)
        assert isinstance(source.cache, InMemoryCache)

    def test_invalid_json_raises(self, source, session):
        session.get.return_value = _response(json_error=ValueError("not json"))

        with pytest.raises(DataFetchError):
            source.fetch_circle(CIRCLE)

    def test_malformed_way_raises_fetch_error(self, source, session):
        bad = {"elements": [{"type": "way", "id": 1, "nodes": [1, 2], "geometry": []}]}
        session.get.return_value = _response(payload=bad)

        with pytest.raises(DataFetchError):
            source.fetch_circle(CIRCLE)

    def test_failed_fetch_is_not_cached(self, source, session):
        session.get.side_effect = [_response(status=400), _response()]

        with pytest.raises(DataFetchError):
            source.fetch_circle(CIRCLE)
        assert len(source.fetch_circle(CIRCLE)) == 1

    def test_missing_base_url_is_configuration_error(self, session):
        with pytest.raises(ConfigurationError):
            OverpassGeodataSource(config=OverpassConfig(base_url=""), session=session)
