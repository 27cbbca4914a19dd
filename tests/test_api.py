"""Integration tests for the HTTP layer.

These go through routing, role guard, payload validation, rate limiting
and error mapping down to the store.
"""
import pytest
from fastapi.testclient import TestClient

from apps.api.main import create_app
from core.settings import Settings


INTERVIEWER = {"X-User-Role": "Interviewer"}
COORDINATOR = {"X-User-Role": "Coordinator"}


def slot_payload(start="2024-03-11T10:00:00Z", end="2024-03-11T11:00:00Z", interviewer_id="i-3"):
    return {
        "interviewerId": interviewer_id,
        "startTime": start,
        "endTime": end,
        "location": "Zoom",
    }


@pytest.mark.integration
class TestReadEndpoints:
    """Test endpoints without role requirements."""

    def test_health(self, client):
        """Test health check."""
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_people(self, client):
        """Test reference data listing."""
        body = client.get("/api/people").json()
        assert [i["id"] for i in body["interviewers"]] == ["i-1", "i-2", "i-3"]
        assert body["candidates"][0] == {"id": "cand-1", "name": "Alex Rivers", "email": "alex@example.com"}

    def test_list_slots(self, client):
        """Test slot listing uses camelCase and UTC timestamps."""
        body = client.get("/api/slots").json()

        assert len(body["slots"]) == 3
        first = body["slots"][0]
        assert first["id"] == "s-1"
        assert first["interviewerId"] == "i-1"
        assert first["startTime"] == "2024-03-12T08:00:00.000Z"
        assert first["status"] == "available"
        assert "people" in body

    def test_list_slots_filters(self, client):
        """Test query filters."""
        body = client.get("/api/slots", params={"interviewerId": "i-1", "status": "booked"}).json()
        assert [s["id"] for s in body["slots"]] == ["s-3"]

        body = client.get("/api/slots", params={"from": "2024-03-13T00:00:00Z"}).json()
        assert [s["id"] for s in body["slots"]] == ["s-2", "s-3"]

    @pytest.mark.parametrize("params", [{"status": "pending"}, {"from": "yesterday"}])
    def test_list_slots_invalid_filters(self, client, params):
        """Test invalid filters map to invalid_input / 400."""
        response = client.get("/api/slots", params=params)
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"

    def test_calendar(self, client):
        """Test the interviewer calendar."""
        body = client.get("/api/calendar", params={"interviewerId": "i-1"}).json()

        assert len(body["calendar"]) == 1
        entry = body["calendar"][0]
        assert entry["booking"]["id"] == "b-1"
        assert entry["slot"]["id"] == "s-3"
        assert entry["candidate"]["name"] == "Alex Rivers"

    def test_calendar_requires_interviewer(self, client):
        """Test that interviewerId is required."""
        response = client.get("/api/calendar")
        assert response.status_code == 400
        assert response.json() == {"code": "invalid_input", "message": "interviewerId is required"}


@pytest.mark.integration
class TestCreateSlotEndpoint:
    """Test slot publication over HTTP."""

    def test_missing_role_unauthorized(self, client):
        """Test 401 without a role header."""
        response = client.post("/api/slots", json=slot_payload())
        assert response.status_code == 401
        assert response.json()["code"] == "unauthorized"

    def test_wrong_role_forbidden(self, client):
        """Test 403 for coordinators."""
        response = client.post("/api/slots", json=slot_payload(), headers=COORDINATOR)
        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"

    def test_guard_runs_before_validation(self, client):
        """Test that an unauthenticated malformed payload is still 401."""
        response = client.post("/api/slots", json={"location": ""})
        assert response.status_code == 401

    def test_guard_runs_before_json_decoding(self, client):
        """Test that a body that is not JSON is rejected by role first."""
        unauthenticated = client.post("/api/slots", content=b"{not json")
        wrong_role = client.post("/api/slots", content=b"{not json", headers=COORDINATOR)
        malformed = client.post("/api/slots", content=b"{not json", headers=INTERVIEWER)

        assert unauthenticated.status_code == 401
        assert wrong_role.status_code == 403
        assert malformed.status_code == 400
        assert malformed.json() == {"code": "invalid_input", "message": "Request body must be valid JSON"}

    def test_create_slot(self, client):
        """Test successful creation."""
        response = client.post("/api/slots", json=slot_payload(), headers=INTERVIEWER)

        assert response.status_code == 201
        body = response.json()
        assert body["interviewerId"] == "i-3"
        assert body["status"] == "available"
        assert body["startTime"] == "2024-03-11T10:00:00.000Z"

    def test_invalid_payload(self, client):
        """Test missing fields map to invalid_input."""
        response = client.post("/api/slots", json={"interviewerId": "i-3"}, headers=INTERVIEWER)
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"

    def test_start_after_end(self, client):
        """Test domain-level timestamp ordering."""
        response = client.post(
            "/api/slots",
            json=slot_payload(start="2024-03-11T12:00:00Z", end="2024-03-11T11:00:00Z"),
            headers=INTERVIEWER,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "startTime must be before endTime"

    def test_overlap_conflict(self, client):
        """Test overlap maps to 409."""
        client.post("/api/slots", json=slot_payload(), headers=INTERVIEWER)
        response = client.post(
            "/api/slots",
            json=slot_payload(start="2024-03-11T10:30:00Z", end="2024-03-11T11:30:00Z"),
            headers=INTERVIEWER,
        )
        assert response.status_code == 409
        assert response.json()["code"] == "overlap"

    def test_two_day_limit(self, client):
        """Test the seed interviewer's third day maps to 409."""
        response = client.post(
            "/api/slots",
            json=slot_payload(start="2024-03-15T10:00:00Z", end="2024-03-15T11:00:00Z", interviewer_id="i-1"),
            headers=INTERVIEWER,
        )
        assert response.status_code == 409
        assert response.json()["code"] == "two_day_limit"


@pytest.mark.integration
class TestBookingEndpoints:
    """Test booking, rescheduling and cancellation over HTTP."""

    def test_book_slot(self, client):
        """Test successful booking."""
        response = client.post(
            "/api/book",
            json={"slotId": "s-1", "candidateId": "cand-2", "coordinatorId": "c-1"},
            headers=COORDINATOR,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["slotId"] == "s-1"
        assert body["status"] == "booked"

    @pytest.mark.parametrize("path", ["/api/book", "/api/reschedule"])
    def test_role_checked_before_body(self, client, rate_limiter, path):
        """Test that a caller without a role gets 401 whatever the body holds."""
        assert client.post(path, content=b"{not json").status_code == 401
        assert client.post(path, json={"slotId": 3}).status_code == 401

        response = client.post(path, json={"slotId": "s-1"}, headers=COORDINATOR)
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"
        assert response.json()["details"]
        assert rate_limiter.get_state("c-1") is None

    def test_book_requires_coordinator(self, client):
        """Test that interviewers cannot book."""
        response = client.post(
            "/api/book",
            json={"slotId": "s-1", "candidateId": "cand-2", "coordinatorId": "c-1"},
            headers=INTERVIEWER,
        )
        assert response.status_code == 403

    def test_book_not_found_and_conflict(self, client):
        """Test 404 and 409 mapping."""
        missing = client.post(
            "/api/book",
            json={"slotId": "nope", "candidateId": "cand-2", "coordinatorId": "c-1"},
            headers=COORDINATOR,
        )
        taken = client.post(
            "/api/book",
            json={"slotId": "s-3", "candidateId": "cand-2", "coordinatorId": "c-1"},
            headers=COORDINATOR,
        )

        assert missing.status_code == 404
        assert missing.json()["code"] == "not_found"
        assert taken.status_code == 409
        assert taken.json()["code"] == "conflict"

    def test_booking_rate_limited(self, client, store):
        """Test [ok x5, rate_limited] for one coordinator."""
        slot_ids = [
            store.create_slot("i-3", f"2024-03-11T{hour:02d}:00:00Z", f"2024-03-11T{hour:02d}:30:00Z", "Zoom").id
            for hour in range(9, 15)
        ]

        statuses = [
            client.post(
                "/api/book",
                json={"slotId": slot_id, "candidateId": "cand-2", "coordinatorId": "c-2"},
                headers=COORDINATOR,
            )
            for slot_id in slot_ids
        ]

        assert [r.status_code for r in statuses] == [201] * 5 + [429]
        limited = statuses[-1].json()
        assert limited["code"] == "rate_limited"
        assert "resetAt" in limited["details"]
        assert store.get_slot(slot_ids[-1]).status.value == "available"

    def test_reschedule(self, client, store):
        """Test successful reschedule releases the old slot."""
        response = client.post(
            "/api/reschedule",
            json={"bookingId": "b-1", "newSlotId": "s-1", "coordinatorId": "c-1"},
            headers=COORDINATOR,
        )

        assert response.status_code == 200
        assert response.json()["slotId"] == "s-1"
        assert store.get_slot("s-3").status.value == "available"

    def test_reschedule_errors(self, client):
        """Test reschedule failure mapping."""
        missing = client.post(
            "/api/reschedule",
            json={"bookingId": "nope", "newSlotId": "s-1", "coordinatorId": "c-1"},
            headers=COORDINATOR,
        )
        taken = client.post(
            "/api/reschedule",
            json={"bookingId": "b-1", "newSlotId": "s-3", "coordinatorId": "c-1"},
            headers=COORDINATOR,
        )

        assert missing.status_code == 404
        assert taken.status_code == 409

    def test_cancel_booking(self, client, store):
        """Test cancellation, idempotence and slot release."""
        first = client.delete("/api/booking/b-1", headers=COORDINATOR)
        second = client.delete("/api/booking/b-1", headers=COORDINATOR)

        assert first.status_code == 200
        assert first.json()["status"] == "cancelled"
        assert second.json() == first.json()
        assert store.get_slot("s-3").status.value == "available"

    def test_cancel_errors(self, client):
        """Test cancel guard and not_found mapping."""
        assert client.delete("/api/booking/b-1").status_code == 401
        assert client.delete("/api/booking/b-1", headers=INTERVIEWER).status_code == 403
        assert client.delete("/api/booking/nope", headers=COORDINATOR).status_code == 404

    def test_cancel_not_rate_limited(self, client, rate_limiter):
        """Test that cancellations do not consume the rate limit."""
        for _ in range(10):
            client.delete("/api/booking/b-1", headers=COORDINATOR)
        assert rate_limiter.get_state("c-1") is None


@pytest.mark.integration
class TestAdminEndpoints:
    """Test reset, snapshot and audit log endpoints."""

    def test_reset(self, client, store, rate_limiter):
        """Test reset restores the seed dataset and clears counters."""
        client.delete("/api/booking/b-1", headers=COORDINATOR)
        client.post(
            "/api/book",
            json={"slotId": "s-1", "candidateId": "cand-2", "coordinatorId": "c-1"},
            headers=COORDINATOR,
        )

        response = client.post("/api/admin/reset")

        assert response.status_code == 200
        assert response.json() == {"status": "reset"}
        assert store.get_slot("s-3").status.value == "booked"
        assert rate_limiter.get_state("c-1") is None

    def test_reset_disabled(self, store, rate_limiter):
        """Test reset is hidden when disabled."""
        app = create_app(
            config=Settings(enable_reset_endpoint=False),
            store=store,
            rate_limiter=rate_limiter,
        )
        with TestClient(app) as disabled_client:
            response = disabled_client.post("/api/admin/reset")
        assert response.status_code == 404

    def test_snapshot_and_audit_log(self, client):
        """Test snapshot and audit log listing."""
        client.delete("/api/booking/b-1", headers=COORDINATOR)

        snapshot = client.get("/api/admin/snapshot").json()
        assert len(snapshot["slots"]) == 3
        assert snapshot["bookings"][0]["status"] == "cancelled"

        audit = client.get("/api/admin/audit-log", params={"entityId": "b-1"}).json()
        assert [entry["action"] for entry in audit] == ["booking_cancelled"]


@pytest.mark.integration
def test_create_app_logs_composition(caplog, store, rate_limiter, test_settings):
    """Test that building the app reports its scheduling components."""
    with caplog.at_level("INFO", logger="apps.api.main"):
        create_app(config=test_settings, store=store, rate_limiter=rate_limiter)

    record = next(r for r in caplog.records if r.getMessage() == "Scheduling components ready")
    assert record.phase == "composition"
    assert record.slot_count == 3
    assert record.weekly_day_limit == 2
    assert record.rate_limit == "5/60s"
