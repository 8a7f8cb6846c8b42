import sys, pathlib

import pytest

# Ensure project server directory is on path for tests
PROJECT_ROOT = pathlib.Path(__file__).parent.parent
SERVER = PROJECT_ROOT / "server"
if str(SERVER) not in sys.path:
    sys.path.insert(0, str(SERVER))


SAMPLE_CSV = (
    "Timestamp,URL,Used for,Name\r\n"
    "1/2/2024 10:00:00,https://b.example.com,Docs,beta\r\n"
    '1/2/2024 10:01:00,https://a.example.com,"Search, mostly",Alpha\r\n'
    "1/2/2024 10:02:00,https://c.example.com,,Charlie\r\n"
)


class FakeResponse:
    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code
        self.encoding = None

    def raise_for_status(self):
        import requests

        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class _Calls(list):
    """URLs passed to the stubbed requests.get."""


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV


@pytest.fixture
def fake_get(monkeypatch):
    """Stub requests.get; returns a list that records each call's URL."""
    import requests

    calls = _Calls()
    state = {"response": FakeResponse(SAMPLE_CSV)}

    def _get(url, **kwargs):
        calls.append(url)
        resp = state["response"]
        if isinstance(resp, Exception):
            raise resp
        return resp

    monkeypatch.setattr(requests, "get", _get)
    calls.set_response = lambda r: state.__setitem__("response", r)
    return calls
