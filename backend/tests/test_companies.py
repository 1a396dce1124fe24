import pytest

from jobboard.auth import Actor
from jobboard.errors import AuthorizationError, NotFoundError, ValidationError
from jobboard.models import ApprovalStatus, Company, Job, Qualification, Role, User
from jobboard.services.companies import CompanyWorkflow


ADMIN = Actor(user_id=1, role=Role.ADMIN)


@pytest.fixture
def workflow(notifier, blob_store):
    return CompanyWorkflow(notifier, blob_store)


class TestCompanyStatus:
    def test_approve_sends_welcome_email(self, workflow, notifier, factory, db_session):
        company = factory.company(status=ApprovalStatus.PENDING)

        updated = workflow.set_status(db_session, company.id, ApprovalStatus.APPROVED, ADMIN)

        assert updated.status == "APPROVED"
        assert notifier.sent == [(company.admin_email, f'Welcome to JobBoard! Your company "{company.name}" has been approved')]

    def test_reapproval_does_not_send_twice(self, workflow, notifier, factory, db_session):
        company = factory.company(status=ApprovalStatus.PENDING)

        workflow.set_status(db_session, company.id, "APPROVED", ADMIN)
        workflow.set_status(db_session, company.id, "APPROVED", ADMIN)

        assert len(notifier.sent) == 1

    def test_reject_sends_rejection_email(self, workflow, notifier, factory, db_session):
        company = factory.company(status=ApprovalStatus.PENDING)

        workflow.set_status(db_session, company.id, ApprovalStatus.REJECTED, ADMIN, reason="Missing license")

        to, subject = notifier.sent[0]
        assert to == company.admin_email
        assert subject.startswith("Update on your JobBoard application")

    def test_notifier_failure_keeps_transition(self, workflow, notifier, factory, db_session):
        company = factory.company(status=ApprovalStatus.PENDING)
        notifier.fail = True

        updated = workflow.set_status(db_session, company.id, ApprovalStatus.APPROVED, ADMIN)

        assert updated.status == "APPROVED"
        db_session.expire_all()
        assert db_session.get(Company, company.id).status == "APPROVED"

    @pytest.mark.parametrize("status", ["PENDING", "ARCHIVED"])
    def test_invalid_status(self, workflow, factory, db_session, status):
        company = factory.company(status=ApprovalStatus.PENDING)
        with pytest.raises(ValidationError):
            workflow.set_status(db_session, company.id, status, ADMIN)

    def test_non_admin_is_forbidden(self, workflow, notifier, factory, db_session):
        company = factory.company(status=ApprovalStatus.PENDING)
        with pytest.raises(AuthorizationError):
            workflow.set_status(db_session, company.id, "APPROVED", factory.actor(company.admin, company))
        assert notifier.sent == []

    def test_unknown_company(self, workflow, db_session):
        with pytest.raises(NotFoundError):
            workflow.set_status(db_session, 999, "APPROVED", ADMIN)


class TestCompanyDelete:
    def test_delete_removes_company_admin_and_jobs(self, workflow, blob_store, factory, db_session):
        company = factory.company(logo="https://gateway.example.com/ipfs/logo-cid")
        job = factory.job(company)
        seeker = factory.user()
        factory.application(seeker, job)

        workflow.delete(db_session, company.id, ADMIN)

        db_session.expire_all()
        assert db_session.get(Company, company.id) is None
        assert db_session.get(User, company.admin_id) is None
        assert db_session.get(Job, job.id) is None
        assert db_session.query(Qualification).count() == 0
        assert db_session.get(User, seeker.id) is not None
        assert blob_store.deleted == ["https://gateway.example.com/ipfs/logo-cid"]

    def test_blob_failure_does_not_undo_delete(self, workflow, blob_store, factory, db_session):
        company = factory.company(logo="https://gateway.example.com/ipfs/logo-cid")
        blob_store.fail_delete = True

        workflow.delete(db_session, company.id, ADMIN)

        db_session.expire_all()
        assert db_session.get(Company, company.id) is None

    def test_failed_delete_keeps_company_and_admin(self, workflow, blob_store, factory, db_session, fail_on_delete):
        company = factory.company(logo="https://gateway.example.com/ipfs/logo-cid")
        job = factory.job(company)
        fail_on_delete("companies")

        with pytest.raises(RuntimeError):
            workflow.delete(db_session, company.id, ADMIN)

        db_session.expire_all()
        stored = db_session.get(Company, company.id)
        assert stored is not None
        assert stored.admin_id == company.admin_id
        assert db_session.get(User, company.admin_id) is not None
        assert db_session.get(Job, job.id) is not None
        assert blob_store.deleted == []

    def test_delete_unknown_company(self, workflow, db_session):
        with pytest.raises(NotFoundError):
            workflow.delete(db_session, 404, ADMIN)


class TestCompanyRoutes:
    def test_register_creates_pending_company(self, client):
        response = client.post(
            "/api/companies/register",
            json={
                "name": "Acme",
                "email": "hr@example.com",
                "password": "secret123",
                "address": "Bole Road",
                "about": "We build things.",
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["company"]["status"] == "PENDING"
        assert body["company"]["admin_email"] == "hr@example.com"

        login = client.post("/api/auth/login", json={"email": "hr@example.com", "password": "secret123"})
        assert login.json()["role"] == "COMPANY_ADMIN"
        assert login.json()["company_id"] == body["company"]["id"]

    def test_register_duplicate_email(self, client, factory):
        company = factory.company()
        response = client.post(
            "/api/companies/register",
            json={"name": "Copy", "email": company.admin_email, "password": "secret123", "address": "Somewhere"},
        )
        assert response.status_code == 409

    def test_admin_lists_companies_by_status(self, client, factory):
        admin = factory.user(role=Role.ADMIN)
        pending = factory.company(status=ApprovalStatus.PENDING)
        factory.company(status=ApprovalStatus.APPROVED)

        response = client.get("/api/companies", params={"status": "PENDING"}, headers=factory.headers(admin))

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [pending.id]

    def test_company_admin_sees_own_company(self, client, factory):
        company = factory.company()
        response = client.get("/api/companies/me", headers=factory.headers(company.admin, company))
        assert response.status_code == 200
        assert response.json()["id"] == company.id

    def test_status_route_rejects_pending(self, client, factory):
        admin = factory.user(role=Role.ADMIN)
        company = factory.company(status=ApprovalStatus.PENDING)
        response = client.patch(
            f"/api/companies/{company.id}/status",
            json={"status": "PENDING"},
            headers=factory.headers(admin),
        )
        assert response.status_code == 400

    def test_delete_route(self, client, factory):
        admin = factory.user(role=Role.ADMIN)
        company = factory.company()
        response = client.delete(f"/api/companies/{company.id}", headers=factory.headers(admin))
        assert response.status_code == 200
        assert response.json() == {"status": "deleted", "company_id": company.id}
        assert client.get(f"/api/companies/{company.id}", headers=factory.headers(admin)).status_code == 404
