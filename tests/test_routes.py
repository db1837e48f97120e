"""Integration tests for the HTTP surface.

Run with: pytest tests/test_routes.py -v
"""

import asyncio
import csv
import io

from cachefest import config
from cachefest.schemas import EventOption, NewRegistration

FORM = {
    "name": "Asha",
    "email": "asha@example.com",
    "phone": "9876543210",
    "college": "GVP College",
    "roll_number": "21A001",
    "section": "B",
}


def register(client, events=("web-dev", "tech-quiz"), **overrides):
    data = {**FORM, **overrides, "selected_events": list(events)}
    return client.post("/register", data=data)


class TestRegistrationPage:
    """Tests for GET/POST /register"""

    def test_form_lists_catalog(self, client):
        response = client.get("/register")

        assert response.status_code == 200
        assert "Web Development Challenge" in response.text
        assert "Tech Meme Contest" in response.text

    def test_event_query_param_preselects(self, client):
        response = client.get("/register", params={"event": "bgmi"})

        assert 'value="bgmi" checked' in response.text
        assert "Total Amount" in response.text

    def test_unknown_event_param_is_ignored(self, client):
        response = client.get("/register", params={"event": "ghost"})

        assert response.status_code == 200
        assert "checked" not in response.text

    def test_successful_submission(self, client, sql_store):
        response = register(client)

        assert response.status_code == 200
        assert "Welcome Asha!" in response.text
        assert "2 event(s)" in response.text
        assert "&#8377;300" in response.text

    def test_missing_field_keeps_form_values(self, client):
        response = register(client, college="")

        assert response.status_code == 400
        assert "Please fill in all required fields" in response.text
        assert 'value="asha@example.com"' in response.text

    def test_no_events_selected(self, client):
        response = register(client, events=())

        assert response.status_code == 400
        assert "Please select at least one event" in response.text

    def test_store_failure_is_reported(self, failing_client):
        response = register(failing_client)

        assert response.status_code == 503
        assert "Please try again" in response.text
        assert 'value="Asha"' in response.text

    def test_root_redirects_to_register(self, client):
        response = client.get("/", follow_redirects=False)

        assert response.headers["location"] == "/register"


class TestJsonApi:
    """Tests for /api/events and /api/registrations"""

    def test_catalog(self, client):
        body = client.get("/api/events").json()

        assert len(body["technical"]) == 5
        assert body["non_technical"][0] == {"id": "photography", "name": "Photography Contest", "price": 150}

    def test_create_registration(self, client):
        response = client.post("/api/registrations", json={**FORM, "selected_events": ["pymaster"]})

        assert response.status_code == 201
        body = response.json()
        assert body["total_amount"] == 150
        assert body["selected_events"] == [{"id": "pymaster", "name": "PyMaster Contest", "price": 150}]
        assert body["id"]

    def test_domain_error_maps_to_400(self, client):
        response = client.post("/api/registrations", json={**FORM, "selected_events": ["ghost"]})

        assert response.status_code == 400
        assert response.json()["code"] == "UNKNOWN_EVENT"

    def test_store_error_maps_to_503(self, failing_client):
        response = failing_client.post("/api/registrations", json={**FORM, "selected_events": ["bgmi"]})

        assert response.status_code == 503
        assert response.json()["code"] == "STORE_UNAVAILABLE"


class TestOrganizersPage:
    def test_lists_team(self, client):
        response = client.get("/organizers")

        assert response.status_code == 200
        assert "Abhivan Charan" in response.text
        assert "RK" in response.text


class TestAdminGate:
    """Tests for the admin login flow."""

    def test_dashboard_redirects_to_login(self, client):
        response = client.get("/admin", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/admin/login"

    def test_api_requires_login(self, client):
        assert client.get("/api/admin/stats").status_code == 401
        assert client.get("/api/admin/export/registrations.csv").status_code == 401

    def test_wrong_password(self, client):
        response = client.post("/admin/login", data={"password": config.ADMIN_PASSWORD + "x"})

        assert response.status_code == 401
        assert "Incorrect password" in response.text

    def test_logout_clears_session(self, admin_client):
        admin_client.post("/admin/logout")

        assert admin_client.get("/admin", follow_redirects=False).status_code == 303

    def test_login_page_redirects_when_logged_in(self, admin_client):
        response = admin_client.get("/admin/login", follow_redirects=False)

        assert response.headers["location"] == "/admin"


class TestAdminDashboard:
    """Tests for GET /admin and admin JSON/exports."""

    def test_dashboard_shows_stats(self, admin_client):
        register(admin_client, events=("web-dev", "bgmi"))
        register(admin_client, events=("web-dev",), name="Bala")

        response = admin_client.get("/admin")

        assert response.status_code == 200
        assert "Web Development Challenge" in response.text
        assert "&#8377;650" in response.text
        assert "Bala" in response.text

    def test_stats_json(self, admin_client):
        register(admin_client, events=("web-dev", "tech-quiz"))
        register(admin_client, events=("web-dev",), name="Bala")

        body = admin_client.get("/api/admin/stats").json()

        assert body["totals"] == {"participants": 2, "revenue": 500, "events": 2}
        assert {s["event_id"]: (s["participant_count"], s["revenue"]) for s in body["stats"]} == {
            "web-dev": (2, 400),
            "tech-quiz": (1, 100),
        }

    def test_export_all_csv(self, admin_client):
        register(admin_client, name="Asha")
        register(admin_client, name="Bala")

        response = admin_client.get("/api/admin/export/registrations.csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="registrations_' in response.headers["content-disposition"]
        rows = list(csv.reader(io.StringIO(response.text)))
        assert [row[0] for row in rows[1:]] == ["Bala", "Asha"]

    def test_export_event_csv(self, admin_client):
        register(admin_client, events=("web-dev", "tech-quiz"), name="Asha")
        register(admin_client, events=("web-dev",), name="Bala")

        response = admin_client.get("/api/admin/export/events/tech-quiz/participants.csv")

        assert response.headers["content-disposition"] == 'attachment; filename="Technical_Quiz_participants.csv"'
        rows = list(csv.reader(io.StringIO(response.text)))
        assert [row[0] for row in rows[1:]] == ["Asha"]

    def test_export_event_follows_id_across_renames(self, admin_client, sql_store):
        stored = [
            ("OldSnap", EventOption(id="tech-quiz", name="Tech Quiz", price=100)),
            ("Imposter", EventOption(id="retired-quiz", name="Technical Quiz", price=100)),
            ("New", EventOption(id="tech-quiz", name="Technical Quiz", price=100)),
        ]
        for name, event in stored:
            record = NewRegistration(
                **{k: v for k, v in FORM.items() if k != "name"},
                name=name,
                selected_events=[event],
                total_amount=event.price,
            )
            asyncio.run(sql_store.insert(record))

        response = admin_client.get("/api/admin/export/events/tech-quiz/participants.csv")

        assert response.headers["content-disposition"] == 'attachment; filename="Technical_Quiz_participants.csv"'
        rows = list(csv.reader(io.StringIO(response.text)))
        assert [row[0] for row in rows[1:]] == ["New", "OldSnap"]

    def test_export_event_without_participants(self, admin_client):
        response = admin_client.get("/api/admin/export/events/drawing/participants.csv")

        assert response.status_code == 200
        assert len(response.text.splitlines()) == 1

    def test_export_unknown_event(self, admin_client):
        assert admin_client.get("/api/admin/export/events/ghost/participants.csv").status_code == 404

    def test_export_xlsx(self, admin_client):
        register(admin_client)

        response = admin_client.get("/api/admin/export/registrations.xlsx")

        assert response.status_code == 200
        assert response.content[:2] == b"PK"

    def test_store_failure_shows_notice(self, failing_client):
        failing_client.post("/admin/login", data={"password": config.ADMIN_PASSWORD})

        response = failing_client.get("/admin")

        assert response.status_code == 200
        assert "Failed to fetch registration data" in response.text

    def test_store_failure_on_export(self, failing_client):
        failing_client.post("/admin/login", data={"password": config.ADMIN_PASSWORD})

        assert failing_client.get("/api/admin/export/registrations.csv").status_code == 503
