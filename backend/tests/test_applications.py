from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import event

from jobboard.auth import Actor
from jobboard.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from jobboard.models import Application, ApplicationStatus, ApprovalStatus, Role
from jobboard.schemas.application import ApplicationCreate
from jobboard.services.applications import ALREADY_APPLIED, ApplicationWorkflow


def _application_payload(job_id, **overrides):
    payload = {
        "job_id": job_id,
        "full_name": "Jane Doe",
        "year_of_birth": 1994,
        "address": "Bole Road",
        "phone": "+251911000000",
        "portfolio": "https://jane.example.com",
        "profession": "Software Engineer",
        "career_level": "Senior",
        "cover_letter": "I have shipped many services.",
        "experiences": [
            {
                "job_title": "Engineer",
                "company_name": "Previous Co",
                "location": "Remote",
                "responsibilities": "Built APIs",
            }
        ],
        "degree_type": "BSc",
        "institution": "AAU",
        "graduation_date": "2016-07-01",
        "skills": ["Python", "SQL"],
        "certifications": [],
        "languages": ["English", "Amharic"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def workflow():
    return ApplicationWorkflow()


class TestApplicationPayload:
    def test_more_than_five_skills_is_invalid(self):
        with pytest.raises(PydanticValidationError):
            ApplicationCreate(**_application_payload(1, skills=["a", "b", "c", "d", "e", "f"]))

    def test_at_least_one_experience(self):
        with pytest.raises(PydanticValidationError):
            ApplicationCreate(**_application_payload(1, experiences=[]))

    def test_year_of_birth_in_future(self):
        with pytest.raises(PydanticValidationError):
            ApplicationCreate(**_application_payload(1, year_of_birth=date.today().year + 1))

    def test_portfolio_must_be_a_url(self):
        with pytest.raises(PydanticValidationError):
            ApplicationCreate(**_application_payload(1, portfolio="not a url"))


class TestCreateApplication:
    def test_creates_pending_application_with_account_email(self, workflow, factory, db_session):
        seeker = factory.user(email="seeker@example.com")
        job = factory.job(factory.company())

        application = workflow.create(db_session, ApplicationCreate(**_application_payload(job.id)), factory.actor(seeker))

        assert application.status == ApplicationStatus.PENDING.value
        assert application.email == "seeker@example.com"
        assert application.experiences[0]["company_name"] == "Previous Co"
        assert application.portfolio == "https://jane.example.com/"

    def test_duplicate_application_conflicts(self, workflow, factory, db_session):
        seeker = factory.user()
        job = factory.job(factory.company())
        payload = ApplicationCreate(**_application_payload(job.id))
        workflow.create(db_session, payload, factory.actor(seeker))

        with pytest.raises(ConflictError, match=ALREADY_APPLIED):
            workflow.create(db_session, payload, factory.actor(seeker))
        assert db_session.query(Application).count() == 1

    def test_concurrent_duplicate_maps_to_conflict(self, workflow, factory, db_session):
        seeker = factory.user()
        job = factory.job(factory.company())

        def submit_elsewhere(session, flush_context, instances):
            factory.application(seeker, job)

        # The competing submission commits after the duplicate check and before our insert.
        event.listen(db_session, "before_flush", submit_elsewhere, once=True)

        with pytest.raises(ConflictError, match=ALREADY_APPLIED):
            workflow.create(db_session, ApplicationCreate(**_application_payload(job.id)), factory.actor(seeker))

        assert db_session.query(Application).count() == 1

    def test_cannot_apply_to_unapproved_job(self, workflow, factory, db_session):
        seeker = factory.user()
        job = factory.job(factory.company(), status=ApprovalStatus.PENDING)

        with pytest.raises(NotFoundError):
            workflow.create(db_session, ApplicationCreate(**_application_payload(job.id)), factory.actor(seeker))

    def test_company_admin_cannot_apply(self, workflow, factory, db_session):
        company = factory.company()
        job = factory.job(company)

        with pytest.raises(AuthorizationError):
            workflow.create(
                db_session,
                ApplicationCreate(**_application_payload(job.id)),
                factory.actor(company.admin, company),
            )


class TestApplicationStatus:
    def test_owning_company_admin_updates_status(self, workflow, factory, db_session):
        company = factory.company()
        application = factory.application(factory.user(), factory.job(company))

        updated = workflow.set_status(db_session, application.id, "Reviewed", factory.actor(company.admin, company))

        assert updated.status == "Reviewed"

    def test_other_company_admin_is_forbidden(self, workflow, factory, db_session):
        company = factory.company()
        other = factory.company()
        application = factory.application(factory.user(), factory.job(company))

        with pytest.raises(AuthorizationError, match="Unauthorized to update this application"):
            workflow.set_status(db_session, application.id, "Accepted", factory.actor(other.admin, other))

        db_session.expire_all()
        assert db_session.get(Application, application.id).status == "Pending"

    def test_invalid_status(self, workflow, factory, db_session):
        company = factory.company()
        application = factory.application(factory.user(), factory.job(company))

        with pytest.raises(ValidationError):
            workflow.set_status(db_session, application.id, "Hired", factory.actor(company.admin, company))

    def test_unknown_application(self, workflow, factory, db_session):
        company = factory.company()
        with pytest.raises(NotFoundError):
            workflow.set_status(db_session, 404, "Accepted", factory.actor(company.admin, company))

    def test_platform_admin_cannot_review(self, workflow, factory, db_session):
        application = factory.application(factory.user(), factory.job(factory.company()))
        with pytest.raises(AuthorizationError):
            workflow.set_status(db_session, application.id, "Accepted", Actor(user_id=1, role=Role.ADMIN))


class TestApplicationReads:
    def test_applicant_lists_own_applications(self, client, factory):
        company = factory.company()
        job = factory.job(company, title="Platform Engineer")
        seeker = factory.user()
        factory.application(seeker, job)
        factory.application(factory.user(), job)

        response = client.get("/api/applications/me", headers=factory.headers(seeker))

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 1
        assert body[0]["title"] == "Platform Engineer"
        assert body[0]["company"] == company.name

    def test_check_has_applied(self, client, factory):
        seeker = factory.user()
        job = factory.job(factory.company())
        other_job = factory.job(factory.company())
        factory.application(seeker, job)

        applied = client.get("/api/applications/check", params={"job_id": job.id}, headers=factory.headers(seeker))
        not_applied = client.get(
            "/api/applications/check", params={"job_id": other_job.id}, headers=factory.headers(seeker)
        )

        assert applied.json() == {"has_applied": True}
        assert not_applied.json() == {"has_applied": False}

    def test_company_admin_lists_applicants_of_own_job_only(self, client, factory):
        company = factory.company()
        other = factory.company()
        job = factory.job(company)
        factory.application(factory.user(), job)

        own = client.get(f"/api/applications/job/{job.id}", headers=factory.headers(company.admin, company))
        foreign = client.get(f"/api/applications/job/{job.id}", headers=factory.headers(other.admin, other))

        assert own.status_code == 200
        assert len(own.json()) == 1
        assert foreign.status_code == 404

    def test_view_application_permissions(self, client, factory):
        company = factory.company()
        seeker = factory.user()
        stranger = factory.user()
        admin = factory.user(role=Role.ADMIN)
        application = factory.application(seeker, factory.job(company))
        url = f"/api/applications/{application.id}"

        assert client.get(url, headers=factory.headers(seeker)).status_code == 200
        assert client.get(url, headers=factory.headers(company.admin, company)).status_code == 200
        assert client.get(url, headers=factory.headers(admin)).status_code == 200
        assert client.get(url, headers=factory.headers(stranger)).status_code == 403

    def test_admin_lists_all_applications(self, client, factory):
        admin = factory.user(role=Role.ADMIN)
        job = factory.job(factory.company())
        factory.application(factory.user(), job)
        factory.application(factory.user(), job)

        response = client.get("/api/applications/admin", headers=factory.headers(admin))

        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_too_many_languages_is_a_bad_request(self, client, factory):
        seeker = factory.user()
        job = factory.job(factory.company())
        response = client.post(
            "/api/applications",
            json=_application_payload(job.id, languages=["a", "b", "c", "d", "e", "f"]),
            headers=factory.headers(seeker),
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "languages"
