import pytest
import requests

from coop_banker.client import HypixelClient
from coop_banker.errors import FeedError


class _Response:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        return self._payload


class _Session:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append((url, params, headers, timeout))
        if self.exc is not None:
            raise self.exc
        return self.response


PROFILE_PAYLOAD = {
    "success": True,
    "profile": {
        "profile_id": "coop",
        "created_at": 1600000000000,
        "community_upgrades": {},
        "members": {"uuid-a": {"leveling": {"completed_tasks": ["BANK_UPGRADE_GOLD"]}}},
        "banking": {
            "balance": 12.5,
            "transactions": [
                {"amount": 12.5, "timestamp": 5, "action": "DEPOSIT", "initiator_name": "§aalice"}
            ],
        },
    },
}


def test_profile_parses_payload_and_sends_key():
    session = _Session(_Response(200, PROFILE_PAYLOAD))
    client = HypixelClient("secret", base_url="https://example.test/v2/", session=session)
    profile = client.profile("coop")

    assert profile.banking.balance == 12.5
    assert profile.banking.transactions[0].initiator_name == "§aalice"
    url, params, headers, timeout = session.calls[0]
    assert url == "https://example.test/v2/skyblock/profile"
    assert params == {"profile": "coop"}
    assert headers == {"API-Key": "secret"}
    assert timeout == 40


def test_non_200_is_feed_error():
    session = _Session(_Response(403, text="Invalid API key"))
    with pytest.raises(FeedError, match="403"):
        HypixelClient("bad", session=session).profile("coop")


def test_unsuccessful_payload_is_feed_error():
    session = _Session(_Response(200, {"success": False, "cause": "Key throttled"}))
    with pytest.raises(FeedError, match="Key throttled"):
        HypixelClient("k", session=session).profile("coop")


def test_malformed_payload_is_feed_error():
    session = _Session(_Response(200, {"success": True, "profile": {"banking": {}}}))
    with pytest.raises(FeedError):
        HypixelClient("k", session=session).profile("coop")


def test_network_failure_is_feed_error():
    session = _Session(exc=requests.ConnectionError("down"))
    with pytest.raises(FeedError, match="down"):
        HypixelClient("k", session=session).profile("coop")


class _BadJsonResponse(_Response):
    def json(self):
        raise ValueError("Expecting value: line 1 column 1 (char 0)")


def test_non_json_body_is_feed_error():
    session = _Session(_BadJsonResponse(200, text="<html>maintenance</html>"))
    with pytest.raises(FeedError, match="non-JSON"):
        HypixelClient("k", session=session).profile("coop")
