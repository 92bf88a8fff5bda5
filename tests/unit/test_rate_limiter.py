"""
Unit tests for rate limiter helpers.
"""
from starlette.requests import Request

from shared.utils.rate_limiter import RATE_LIMITS, get_client_identifier, get_real_client_ip


def make_request(headers=None, client=("10.0.0.1", 1234)):
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw, "client": client})


def test_forwarded_for_takes_first_ip():
    request = make_request({"X-Forwarded-For": "1.2.3.4, 10.0.0.2"})
    assert get_real_client_ip(request) == "1.2.3.4"


def test_falls_back_to_remote_address():
    assert get_real_client_ip(make_request()) == "10.0.0.1"


def test_identifier_hashes_credential():
    identifier = get_client_identifier(make_request({"Authorization": "Bearer secret"}))

    assert identifier.startswith("10.0.0.1:")
    assert "secret" not in identifier


def test_only_limits_applied_by_routes_are_declared():
    # Solo los endpoints sin autenticación (get-cards, attendee/create) tienen límite propio
    assert RATE_LIMITS == {"public": "60/minute"}
