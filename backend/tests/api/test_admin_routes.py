"""
Tests for admin tracking endpoints.
"""

START = {"location": {"lat": 12.9716, "lng": 77.5946, "address": "MG Road"}}


def _field_day(client, headers, lats):
    """Start a day and send one fix per latitude, one second apart."""
    client.post("/api/v1/field/attendance/start", headers=headers, json=START)
    for second, lat in enumerate(lats):
        client.post("/api/v1/field/location/track", headers=headers, json={
            "lat": lat,
            "lng": 77.5946,
            "captured_at": f"2026-03-02T09:00:{second:02d}",
        })


class TestAdminAccess:

    def test_field_officer_forbidden(self, client, field_auth):
        headers, _ = field_auth
        response = client.get("/api/v1/admin/tracking/live-locations", headers=headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Only admin allowed"

    def test_anonymous_rejected(self, client):
        assert client.get("/api/v1/admin/tracking/live-locations").status_code == 401


class TestLiveLocations:

    def test_live_locations(self, client, field_auth, admin_auth):
        field_headers, officer_id = field_auth
        admin_headers, _ = admin_auth
        _field_day(client, field_headers, [12.9716, 12.9718])

        response = client.get("/api/v1/admin/tracking/live-locations", headers=admin_headers)

        assert response.status_code == 200
        officers = response.json()
        assert len(officers) == 1
        entry = officers[0]
        assert entry["officer"]["id"] == officer_id
        assert entry["is_active"] is True
        assert entry["location"]["lat"] == 12.9718
        assert entry["last_updated"] == "2026-03-02 09:00:01"
        assert 0.02 < entry["distance_travelled_km"] < 0.025

    def test_officer_without_fixes(self, client, field_auth, admin_auth):
        _, officer_id = field_auth
        admin_headers, _ = admin_auth

        response = client.get(f"/api/v1/admin/tracking/officer/{officer_id}", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["location"] is None
        assert body["last_updated"] == "No data"
        assert body["is_active"] is False

    def test_unknown_officer(self, client, admin_auth):
        admin_headers, _ = admin_auth
        response = client.get("/api/v1/admin/tracking/officer/missing", headers=admin_headers)
        assert response.status_code == 404


class TestHistoryAndReplay:

    def test_location_history(self, client, field_auth, admin_auth):
        field_headers, officer_id = field_auth
        admin_headers, _ = admin_auth
        client.post("/api/v1/field/attendance/start", headers=field_headers, json=START)
        client.post("/api/v1/field/location/track", headers=field_headers,
                    json={"lat": 12.9716, "lng": 77.5946})

        response = client.get(
            f"/api/v1/admin/tracking/location-history/{officer_id}?hours=2",
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_replay_matches_stored_total(self, client, field_auth, admin_auth):
        field_headers, _ = field_auth
        admin_headers, _ = admin_auth
        _field_day(client, field_headers, [12.9716, 12.9718, 12.9720, 12.97201, 12.9722])
        session_id = client.get(
            "/api/v1/field/dashboard", headers=field_headers
        ).json()["active_session"]["id"]

        response = client.get(
            f"/api/v1/admin/tracking/session/{session_id}/replay", headers=admin_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["fix_count"] == 5
        assert abs(body["replayed_total_km"] - body["stored_total_km"]) < 1e-9

    def test_replay_unknown_session(self, client, admin_auth):
        admin_headers, _ = admin_auth
        response = client.get(
            "/api/v1/admin/tracking/session/missing/replay", headers=admin_headers
        )
        assert response.status_code == 404
