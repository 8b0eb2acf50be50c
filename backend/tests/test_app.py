"""
Tests for the HTTP surface (app.py) and the locked host (services/game_host.py).

Ticks are driven by hand through host.drive(); only TestClock starts the
real clock thread.
"""

import os
import random
import sys
import time
from unittest.mock import Mock

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app  # noqa: E402
from config import GameConfig  # noqa: E402
from engine.session import SessionController  # noqa: E402
from services.game_host import GameHost  # noqa: E402


@pytest.fixture
def host():
    controller = SessionController(step_interval=0.25, rng=random.Random(0))
    return GameHost(controller, fps=50)


@pytest.fixture
def client(host):
    app = create_app(host, GameConfig())
    app.config["TESTING"] = True
    return app.test_client()


class TestStateRoutes:

    def test_initial_state(self, client):
        response = client.get("/api/state")
        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "idle"
        assert data["snake"] == [[0, 0], [-1, 0], [-2, 0]]
        assert data["food"] == [3, 0]
        assert data["direction"] == "RIGHT"
        assert data["score"] == 0
        assert data["level"] == 1

    def test_state_error_returns_500(self, host, client):
        host.state = Mock(side_effect=RuntimeError("broken"))
        response = client.get("/api/state")
        assert response.status_code == 500
        assert "error" in response.get_json()

    def test_cors_header_for_allowed_origin(self, client):
        response = client.get("/api/state", headers={"Origin": "http://localhost:3000"})
        assert response.headers.get("Access-Control-Allow-Origin") == "http://localhost:3000"


class TestLifecycleRoutes:

    def test_start_pause_resume(self, client):
        response = client.post("/api/start")
        assert response.get_json()["changed"] is True
        assert response.get_json()["state"]["status"] == "running"
        assert client.post("/api/start").get_json()["changed"] is False

        response = client.post("/api/pause")
        assert response.get_json()["changed"] is True
        assert response.get_json()["state"]["status"] == "paused"

        response = client.post("/api/resume")
        assert response.get_json()["changed"] is True
        assert response.get_json()["state"]["status"] == "running"

    def test_reset(self, host, client):
        client.post("/api/start")
        host.drive(0.25)
        assert host.state()["tick"] == 1

        response = client.post("/api/reset")

        assert response.get_json()["state"]["tick"] == 0
        assert response.get_json()["state"]["status"] == "running"


class TestIntentRoute:

    def test_intent_steers_next_tick(self, host, client):
        client.post("/api/start")
        response = client.post("/api/intent", json={"direction": "UP"})
        assert response.status_code == 200
        assert response.get_json() == {"accepted": True}

        host.drive(0.25)

        assert host.state()["snake"][0] == [0, 1]

    @pytest.mark.parametrize("body", [{}, {"direction": "NORTH"}, {"direction": [1, 1]}, {"direction": [1.7, 0]}])
    def test_bad_intent_is_400(self, client, body):
        response = client.post("/api/intent", json=body)
        assert response.status_code == 400

    def test_intent_without_json_is_400(self, client):
        response = client.post("/api/intent", data="UP")
        assert response.status_code == 400


class TestIdentifierRoute:

    def test_name_recorded_at_game_over(self, host, client):
        client.post("/api/identifier", json={"name": " ZED "})
        client.post("/api/start")
        host.controller.state.obstacles = [(1, 0)]
        host.drive(0.25)

        data = client.get("/api/scoreboard").get_json()
        assert data["scoreboard"] == [{"name": "ZED", "score": 0}]
        assert data["high_score"] == 0

    def test_name_applies_to_one_game_only(self, host, client):
        client.post("/api/identifier", json={"name": "ZED"})
        client.post("/api/start")
        host.controller.state.obstacles = [(1, 0)]
        host.drive(0.25)

        client.post("/api/reset")
        host.controller.state.obstacles = [(1, 0)]
        host.drive(0.25)

        names = [entry["name"] for entry in client.get("/api/scoreboard").get_json()["scoreboard"]]
        assert names == ["ZED", "AAA"]

    def test_without_name_default_is_used(self, host, client):
        client.post("/api/start")
        host.controller.state.obstacles = [(1, 0)]
        host.drive(0.25)

        assert client.get("/api/scoreboard").get_json()["scoreboard"][0]["name"] == "AAA"

    def test_non_string_name_is_400(self, client):
        response = client.post("/api/identifier", json={"name": 42})
        assert response.status_code == 400


class TestClock:

    def test_clock_drives_ticks(self):
        controller = SessionController(step_interval=0.05, rng=random.Random(0))
        host = GameHost(controller, fps=100)
        host.start()
        host.start_clock()
        try:
            time.sleep(0.5)
        finally:
            host.stop_clock()

        assert host.state()["tick"] >= 1
        assert host._thread is None

    def test_start_clock_twice_keeps_one_thread(self, host):
        host.start_clock()
        try:
            thread = host._thread
            host.start_clock()
            assert host._thread is thread
        finally:
            host.stop_clock()

    def test_from_config_without_persistence(self):
        config = GameConfig(board_size=6, host_fps=30, rng_seed=1)
        host = GameHost.from_config(config, persist=False)

        assert host.fps == 30
        assert host.controller.size == 6
        assert host.state()["high_score"] == 0
