"""
Tests for system endpoints and the feed snapshot endpoints.
"""

import asyncio

import pytest

from factories import NOW, attempt, failed, ok, profile, rating_change
from portfolio.services.feeds import RatingHistoryFeed, StatsFeed


@pytest.fixture
def feeds(app, client, fake_cf):
    """Feeds installed after startup, sharing one upstream client."""

    upstream = fake_cf.client()
    app.state.feeds = {
        "stats": StatsFeed("tourist", upstream, clock=lambda: NOW),
        "rating": RatingHistoryFeed("tourist", upstream, clock=lambda: NOW),
    }
    yield app.state.feeds
    asyncio.run(upstream.aclose())


def test_health(client):
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/healthz").json() == {"ok": True}


def test_config_reports_handle_and_interval(client):
    data = client.get("/config").json()

    assert data["codeforces_handle"]
    assert data["refresh_interval_seconds"] > 0
    assert data["feeds"] == []


def test_no_debug_routes_are_exposed(app, client):
    paths = {route.path for route in app.routes}

    assert not any(path.startswith("/_debug") for path in paths)
    assert client.get("/_debug/cors").status_code == 404


def test_feed_endpoints_unavailable_when_disabled(client):
    response = client.get("/api/codeforces/stats")

    assert response.status_code == 503
    assert response.json() == {"detail": "Codeforces feeds are disabled"}


def test_stats_snapshot_starts_idle_and_refreshes(feeds, client, fake_cf):
    fake_cf.reply("user.info", ok([profile()]))
    fake_cf.reply("user.status", ok([attempt(1, rating=1300), attempt(2, index="B")]))

    idle = client.get("/api/codeforces/stats").json()
    assert idle["status"] == "idle"
    assert idle["data"] is None

    refreshed = client.post("/api/codeforces/stats/refresh")
    assert refreshed.status_code == 200
    body = refreshed.json()
    assert body["status"] == "ready"
    assert body["data"]["stats"]["solved"] == 2
    assert body["data"]["stats"]["average_difficulty"] == 1300
    assert body["data"]["profile"]["handle"] == "tourist"

    assert client.get("/api/codeforces/stats").json() == body


def test_stats_snapshot_reports_upstream_error(feeds, client, fake_cf):
    fake_cf.reply("user.info", failed("handles: User with handle tourist not found"))

    body = client.post("/api/codeforces/stats/refresh").json()

    assert body["status"] == "error"
    assert body["error"] == "handles: User with handle tourist not found"


def test_rating_graph_snapshot(feeds, client, fake_cf):
    fake_cf.reply(
        "user.rating",
        ok([rating_change(1, 0, 1100), rating_change(2, 1100, 1250), rating_change(3, 1250, 1210)]),
    )

    body = client.post("/api/codeforces/rating-graph/refresh").json()

    assert body["status"] == "ready"
    graph = body["data"]["graph"]
    assert graph["contest_count"] == 3
    assert [point["y"] for point in graph["points"]] == [1100, 1250, 1210]
    assert graph["points"][0]["color"]["name"] == "newbie"
    assert graph["points"][1]["color"]["name"] == "pupil"
    assert [contest["delta"] for contest in graph["recent"]] == [-40, 150, 1100]
    assert graph["path"].startswith("M 40,")

    assert client.get("/api/codeforces/rating-graph").json() == body
