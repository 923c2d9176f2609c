"""Expose the project root on sys.path and provide Qt/network fixtures."""

from __future__ import annotations

import sys

from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from PySide6.QtCore import QCoreApplication  # noqa: E402

from exceptions import ApiError  # noqa: E402
from network_manager import ApiCall  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """One QCoreApplication for the whole run; signals are delivered directly."""

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeNetworkManager:
    """Records requests and hands back ApiCalls that tests resolve by hand."""

    def __init__(self):
        self.language_calls = []
        self.execute_calls = []
        self.health_calls = []

    def fetch_languages(self):
        call = ApiCall("GET /languages")
        self.language_calls.append(call)
        return call

    def execute(self, request):
        call = ApiCall("POST /execute")
        self.execute_calls.append((request, call))
        return call

    def check_health(self):
        call = ApiCall("GET /health")
        self.health_calls.append(call)
        return call

    @property
    def last_execute(self):
        return self.execute_calls[-1]


class SignalRecorder:
    """Collects every emission of the signals it is connected to, in order."""

    def __init__(self):
        self.events = []

    def track(self, name, signal):
        signal.connect(lambda *args: self.events.append((name,) + args))

    def names(self):
        return [event[0] for event in self.events]

    def count(self, name):
        return self.names().count(name)


@pytest.fixture()
def network():
    return FakeNetworkManager()


@pytest.fixture()
def recorder():
    return SignalRecorder()


@pytest.fixture()
def api_error():
    def make(message="Connection refused", status_code=None, body=None):
        return ApiError(message, status_code=status_code, body=body)

    return make
