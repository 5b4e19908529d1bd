"""
Tests for the HTTP surface: rollup invocation, CORS and snapshot reads.
"""
import httpx
import pytest

from eduassist_analytics.core.database import get_db
from eduassist_analytics.main import app
from eduassist_analytics.routers.class_analytics import get_rollup_service
from eduassist_analytics.services.source_service import ScopeService

ROLLUP_URL = "/api/v1/class-analytics/rollup"
ORIGIN = "https://dashboard.example.com"


@pytest.fixture
async def client(rollup_service, session_factory):
    async def override_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_rollup_service] = lambda: rollup_service
    app.dependency_overrides[get_db] = override_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def graded_class(seeder):
    school = await seeder.school()
    klass = await seeder.klass(school)
    students = await seeder.students(klass, 2)
    await seeder.grades(klass, [
        (students[0], None, 70, "Term 1", 2024),
        (students[1], None, 90, "Term 1", 2024),
    ])
    return school, klass


class TestRollupEndpoint:
    async def test_empty_body_means_all_scope(self, client, graded_class):
        response = await client.post(ROLLUP_URL)
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "processed": 1}

    async def test_unparsable_body_is_treated_as_empty(self, client, graded_class):
        response = await client.post(
            ROLLUP_URL, content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 200
        assert response.json()["processed"] == 1

    async def test_debug_includes_per_class_detail(self, client, graded_class):
        school, klass = graded_class
        response = await client.post(ROLLUP_URL, json={"classId": str(klass.id), "debug": True})

        body = response.json()
        assert body["processed"] == 1
        [detail] = body["detail"]
        assert detail["class_id"] == str(klass.id)
        assert detail["school_id"] == str(school.id)
        assert detail["status"] == "succeeded"
        assert detail["reporting_period"] == "Term 1-2024"
        assert detail["avg_grade"] == pytest.approx(80)
        assert detail["attendance"] is None
        assert detail["error"] is None

    async def test_detail_omitted_without_debug(self, client, graded_class):
        response = await client.post(ROLLUP_URL, json={"period": "Term 1-2024"})
        assert "detail" not in response.json()

    async def test_school_filter_with_unknown_school(self, client, graded_class):
        response = await client.post(ROLLUP_URL, json={"schoolId": "7f1e6d1e-2b9e-4c53-9d7a-6f1a0c3b9e11"})
        assert response.json() == {"status": "ok", "processed": 0}

    async def test_malformed_field_is_rejected(self, client):
        response = await client.post(ROLLUP_URL, json={"classId": "not-a-uuid"})
        assert response.status_code == 422
        assert "classId" in response.json()["error"]

    async def test_scope_failure_is_a_single_top_level_error(self, client, monkeypatch):
        async def broken(self, school_id=None, class_id=None):
            raise RuntimeError("connection refused")

        monkeypatch.setattr(ScopeService, "list_class_targets", broken)
        response = await client.post(ROLLUP_URL, headers={"Origin": ORIGIN})

        assert response.status_code == 500
        assert "connection refused" in response.json()["error"]
        assert response.headers["access-control-allow-origin"] == "*"


class TestCors:
    async def test_preflight_is_accepted(self, client):
        response = await client.options(ROLLUP_URL, headers={
            "Origin": ORIGIN,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, x-client-info, apikey, content-type",
        })
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]

    async def test_cors_headers_on_success(self, client, graded_class):
        response = await client.post(ROLLUP_URL, headers={"Origin": ORIGIN})
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


class TestSnapshotRead:
    async def test_returns_stored_snapshots(self, client, graded_class):
        _, klass = graded_class
        await client.post(ROLLUP_URL)

        response = await client.get(f"/api/v1/class-analytics/{klass.id}")

        assert response.status_code == 200
        [snapshot] = response.json()
        assert snapshot["reporting_period"] == "Term 1-2024"
        assert snapshot["performance_trend"] == "stable"
        assert len(snapshot["top_students"]) == 2

    async def test_missing_period_is_404(self, client, graded_class):
        _, klass = graded_class
        response = await client.get(
            f"/api/v1/class-analytics/{klass.id}", params={"reporting_period": "Term 9-1999"}
        )
        assert response.status_code == 404
        assert "Term 9-1999" in response.json()["error"]


class TestHealth:
    async def test_liveness(self, client):
        response = await client.get("/health/")
        assert response.json()["status"] == "healthy"
