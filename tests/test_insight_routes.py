"""
API tests for the insight and profile endpoints.
"""

from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from career_insights.db import db
from career_insights.insights.errors import UpstreamUnavailable
from career_insights.insights.normalizer import default_insights
from career_insights.models import IndustryInsight, User

from conftest import make_token


def _profile_payload(**overrides):
    payload = {"industry": "Fintech", "experience": "4", "bio": "Backend engineer", "skills": "Python, SQL"}
    payload.update(overrides)
    return payload


class TestIndustryInsightEndpoint:

    def test_requires_identity(self, client):
        response = client.get('/api/insights/industry')
        assert response.status_code == 401
        assert response.get_json() == {"error": "Unauthorized"}

    def test_rejects_token_with_wrong_signature(self, client, user):
        headers = {"Authorization": f"Bearer {make_token(secret='some-other-secret-that-is-long-enough')}"}
        response = client.get('/api/insights/industry', headers=headers)
        assert response.status_code == 401

    def test_rejects_malformed_header(self, client, user):
        response = client.get('/api/insights/industry', headers={"Authorization": "Bearer "})
        assert response.status_code == 401

    def test_unknown_user(self, client):
        headers = {"Authorization": f"Bearer {make_token('ghost@example.com')}"}
        response = client.get('/api/insights/industry', headers=headers)
        assert response.status_code == 404

    def test_user_without_industry(self, client, user, auth_headers):
        response = client.get('/api/insights/industry', headers=auth_headers)
        assert response.status_code == 404

    def test_generates_insight_on_first_read(self, client, user, auth_headers, text_client):
        user.industry = "Data"
        db.session.commit()

        response = client.get('/api/insights/industry', headers=auth_headers)

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["industry"] == "Data"
        assert data["demandLevel"] == "High"
        assert data["topSkills"] == ["Python", "SQL", "Spark"]
        assert data["nextUpdate"] is not None
        assert data["isStale"] is False
        assert len(text_client.prompts) == 1

        client.get('/api/insights/industry', headers=auth_headers)
        assert len(text_client.prompts) == 1

    def test_model_failure_still_returns_default_record(self, client, app, user, auth_headers):
        app.extensions["insight_text_client"].error = UpstreamUnavailable("down")
        user.industry = "Mining"
        db.session.commit()

        response = client.get('/api/insights/industry', headers=auth_headers)

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["demandLevel"] == "Medium"
        assert data["marketOutlook"] == "Neutral"
        assert data["salaryRanges"] == []
        assert data["growthRate"] == 0

    def test_email_claim_is_case_insensitive(self, client, user):
        user.industry = "Data"
        db.session.commit()
        headers = {"Authorization": f"Bearer {make_token('ADA@Example.com')}"}

        response = client.get('/api/insights/industry', headers=headers)

        assert response.status_code == 200


class TestUpdateProfileEndpoint:

    def test_requires_identity(self, client):
        response = client.put('/api/user/profile', json=_profile_payload())
        assert response.status_code == 401

    def test_unknown_user(self, client):
        headers = {"Authorization": f"Bearer {make_token('ghost@example.com')}"}
        response = client.put('/api/user/profile', json=_profile_payload(), headers=headers)
        assert response.status_code == 404
        assert response.get_json() == {"error": "User not found"}

    def test_industry_is_required(self, client, user, auth_headers):
        response = client.put('/api/user/profile', json=_profile_payload(industry="  "), headers=auth_headers)
        assert response.status_code == 400

    def test_invalid_experience(self, client, user, auth_headers):
        response = client.put('/api/user/profile', json=_profile_payload(experience="lots"), headers=auth_headers)
        assert response.status_code == 400

    def test_updates_profile_and_creates_insight(self, client, user, auth_headers, text_client):
        response = client.put('/api/user/profile', json=_profile_payload(), headers=auth_headers)

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["industry"] == "Fintech"
        assert data["experience"] == 4
        assert data["bio"] == "Backend engineer"
        assert data["skills"] == ["Python", "SQL"]
        assert IndustryInsight.query.filter_by(industry="Fintech").count() == 1
        assert len(text_client.prompts) == 1

    def test_existing_insight_is_not_overwritten(self, client, user, auth_headers, text_client):
        existing = IndustryInsight.from_payload("Fintech", default_insights())
        db.session.add(existing)
        db.session.commit()

        response = client.post('/api/user/profile', json=_profile_payload(skills=["Go"]), headers=auth_headers)

        assert response.status_code == 200
        db.session.expire_all()
        insight = IndustryInsight.query.filter_by(industry="Fintech").one()
        assert insight.id == existing.id
        assert insight.demand_level == "Medium"
        assert text_client.prompts == []

    def test_switching_industry_keeps_previous_insight(self, client, user, auth_headers):
        client.put('/api/user/profile', json=_profile_payload(industry="Fintech"), headers=auth_headers)
        client.put('/api/user/profile', json=_profile_payload(industry="Healthcare"), headers=auth_headers)

        assert {i.industry for i in IndustryInsight.query.all()} == {"Fintech", "Healthcare"}
        db.session.expire_all()
        assert db.session.get(User, user.id).industry == "Healthcare"

    def test_profile_updated_when_insight_storage_fails(self, client, user, auth_headers):
        with patch("career_insights.insights.service.InsightRepository.get_or_create",
                   side_effect=OperationalError("INSERT", {}, Exception("db locked"))):
            response = client.put('/api/user/profile', json=_profile_payload(), headers=auth_headers)

        assert response.status_code == 200
        db.session.expire_all()
        assert db.session.get(User, user.id).industry == "Fintech"

    def test_profile_write_failure_is_opaque(self, client, user, auth_headers):
        real_commit = db.session.commit
        calls = []

        def failing_profile_commit():
            calls.append(1)
            # first commit stores the insight, second one is the profile write
            if len(calls) > 1:
                raise OperationalError("UPDATE users", {}, Exception("disk I/O error"))
            return real_commit()

        with patch.object(db.session, "commit", side_effect=failing_profile_commit):
            response = client.put('/api/user/profile', json=_profile_payload(), headers=auth_headers)

        assert response.status_code == 500
        assert response.get_json() == {"error": "Failed to update profile"}
        assert "disk" not in response.get_data(as_text=True)


class TestOnboardingStatusEndpoint:

    def test_not_onboarded(self, client, user, auth_headers):
        response = client.get('/api/user/onboarding-status', headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json() == {"isOnboarded": False}

    def test_onboarded_after_profile_update(self, client, user, auth_headers):
        client.put('/api/user/profile', json=_profile_payload(), headers=auth_headers)
        response = client.get('/api/user/onboarding-status', headers=auth_headers)
        assert response.get_json() == {"isOnboarded": True}

    def test_requires_identity(self, client):
        assert client.get('/api/user/onboarding-status').status_code == 401


def test_insight_health(client):
    response = client.get('/api/insights/health')
    assert response.status_code == 200
    assert response.get_json()["service_status"] == "healthy"


def test_app_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json()["status"] == "healthy"
