"""
Tests for the Codeforces proxy endpoint.
"""

import httpx

from factories import failed, ok, profile


def test_missing_handle_returns_400(client, fake_cf):
    response = client.get("/api/codeforces", params={"endpoint": "user.info"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required parameters"}
    assert fake_cf.requests == []


def test_missing_endpoint_returns_400(client, fake_cf):
    response = client.get("/api/codeforces", params={"handle": "tourist"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required parameters"}
    assert fake_cf.requests == []


def test_empty_handle_counts_as_missing(client):
    response = client.get("/api/codeforces?endpoint=user.info&handle=")

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required parameters"}


def test_rating_endpoint_uses_singular_handle(client, fake_cf):
    fake_cf.reply("user.rating", ok([]))

    response = client.get(
        "/api/codeforces", params={"endpoint": "user.rating", "handle": "tourist", "count": "5"}
    )

    assert response.status_code == 200
    (request,) = fake_cf.requests
    assert str(request.url) == "https://codeforces.com/api/user.rating?handle=tourist"
    assert "handles" not in request.url.params
    assert "count" not in request.url.params


def test_count_is_forwarded(client, fake_cf):
    fake_cf.reply("user.status", ok([]))

    response = client.get(
        "/api/codeforces", params={"endpoint": "user.status", "handle": "tourist", "count": "50"}
    )

    assert response.status_code == 200
    (request,) = fake_cf.requests
    assert str(request.url) == "https://codeforces.com/api/user.status?handle=tourist&count=50"


def test_no_count_uses_plural_handles(client, fake_cf):
    fake_cf.reply("user.info", ok([profile()]))

    response = client.get("/api/codeforces", params={"endpoint": "user.info", "handle": "tourist"})

    assert response.status_code == 200
    (request,) = fake_cf.requests
    assert str(request.url) == "https://codeforces.com/api/user.info?handles=tourist"


def test_upstream_headers(client, fake_cf):
    fake_cf.reply("user.info", ok([profile()]))

    client.get("/api/codeforces", params={"endpoint": "user.info", "handle": "tourist"})

    (request,) = fake_cf.requests
    assert request.headers["user-agent"] == "Mozilla/5.0 (compatible; Portfolio-Bot/1.0)"
    assert request.headers["accept"] == "application/json"


def test_success_passes_body_through_with_cache_headers(client, fake_cf):
    body = ok([profile()])
    body["result"][0]["unknownField"] = {"kept": True}
    fake_cf.reply("user.info", body)

    response = client.get("/api/codeforces", params={"endpoint": "user.info", "handle": "tourist"})

    assert response.status_code == 200
    assert response.json() == body
    assert response.headers["cache-control"] == "public, s-maxage=300, stale-while-revalidate=600"


def test_upstream_failed_status_with_200_is_passed_through(client, fake_cf):
    fake_cf.reply("user.info", failed("handles: User with handle nobody not found"))

    response = client.get("/api/codeforces", params={"endpoint": "user.info", "handle": "nobody"})

    assert response.status_code == 200
    assert response.json()["comment"] == "handles: User with handle nobody not found"


def test_upstream_http_error_returns_failure_envelope(client, fake_cf):
    fake_cf.reply("user.info", failed("Call limit exceeded"), status_code=503)

    response = client.get("/api/codeforces", params={"endpoint": "user.info", "handle": "tourist"})

    assert response.status_code == 500
    assert response.json() == {
        "status": "FAILED",
        "comment": "Failed to fetch data from Codeforces API",
        "error": "HTTP error! status: 503",
    }
    assert "cache-control" not in response.headers


def test_transport_error_returns_failure_envelope(client, fake_cf):
    fake_cf.fail("user.info", httpx.ConnectError("connection refused"))

    response = client.get("/api/codeforces", params={"endpoint": "user.info", "handle": "tourist"})

    assert response.status_code == 500
    data = response.json()
    assert data["status"] == "FAILED"
    assert data["comment"] == "Failed to fetch data from Codeforces API"
    assert data["error"] == "connection refused"


def test_non_json_body_returns_failure_envelope(client, fake_cf):
    fake_cf.reply_text("user.info", "<html>Codeforces is temporarily unavailable</html>")

    response = client.get("/api/codeforces", params={"endpoint": "user.info", "handle": "tourist"})

    assert response.status_code == 500
    data = response.json()
    assert data["status"] == "FAILED"
    assert data["comment"] == "Failed to fetch data from Codeforces API"
    assert data["error"]


def test_invalid_count_rejected(client, fake_cf):
    for count in ("abc", "0", "-3"):
        response = client.get(
            "/api/codeforces",
            params={"endpoint": "user.status", "handle": "tourist", "count": count},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid count parameter"}
    assert fake_cf.requests == []


def test_invalid_endpoint_rejected(client, fake_cf):
    response = client.get(
        "/api/codeforces", params={"endpoint": "../../admin", "handle": "tourist"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid endpoint parameter"}
    assert fake_cf.requests == []
