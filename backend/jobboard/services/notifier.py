from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx
from jinja2 import Template
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from jobboard.config import settings


logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com"


class CompanyEmailTemplates:
    def __init__(self, app_name: str, base_url: str) -> None:
        self.app_name = app_name
        self.base_url = base_url.rstrip("/")
        self.approval = Template(
            """
<html>
  <body>
    <h1>Congratulations!</h1>
    <h2>Welcome to {{ app_name }}, {{ company_name }}!</h2>
    <p>Your company registration has been reviewed and approved by our admin team.
    You can now access your company dashboard and start posting job opportunities.</p>
    <p><a href="{{ base_url }}/dashboard/company">Go to your dashboard</a></p>
    <p><strong>Login details:</strong><br>Email: {{ admin_email }}</p>
    <p><strong>{{ app_name }} Team</strong></p>
  </body>
</html>
            """.strip(),
            autoescape=True,
        )
        self.rejection = Template(
            """
<html>
  <body>
    <h1>Application Update</h1>
    <p>Thank you for your interest in joining {{ app_name }}. After careful review, we are unable
    to approve your company registration for "{{ company_name }}" at this time.</p>
    {% if reason %}<div class="reason-box">
      <h3>Reason for rejection:</h3>
      <p>{{ reason }}</p>
    </div>
    {% endif %}<p>You are welcome to review our registration requirements and
    <a href="{{ base_url }}/register/company">submit a new registration</a>.</p>
    <p><strong>{{ app_name }} Team</strong></p>
  </body>
</html>
            """.strip(),
            autoescape=True,
        )

    def render_approval(self, company_name: str, admin_email: str) -> tuple[str, str]:
        subject = f'Welcome to {self.app_name}! Your company "{company_name}" has been approved'
        html = self.approval.render(
            app_name=self.app_name,
            base_url=self.base_url,
            company_name=company_name,
            admin_email=admin_email,
        )
        return subject, html

    def render_rejection(self, company_name: str, reason: str | None = None) -> tuple[str, str]:
        subject = f'Update on your {self.app_name} application for "{company_name}"'
        html = self.rejection.render(
            app_name=self.app_name,
            base_url=self.base_url,
            company_name=company_name,
            reason=(reason or "").strip(),
        )
        return subject, html


class Notifier(ABC):
    """Sends company approval and rejection emails."""

    def __init__(self, templates: CompanyEmailTemplates | None = None) -> None:
        self.templates = templates or CompanyEmailTemplates(settings.app_name, settings.public_base_url)

    def send_approval_email(self, company_name: str, admin_email: str) -> None:
        subject, html = self.templates.render_approval(company_name, admin_email)
        self.send(admin_email, subject, html)

    def send_rejection_email(self, company_name: str, admin_email: str, reason: str | None = None) -> None:
        subject, html = self.templates.render_rejection(company_name, reason)
        self.send(admin_email, subject, html)

    @abstractmethod
    def send(self, to: str, subject: str, html: str) -> None:
        """Deliver one HTML email."""


class LoggingNotifier(Notifier):
    def send(self, to: str, subject: str, html: str) -> None:
        logger.info("Email delivery disabled; would send %r to %s", subject, to)


class ResendNotifier(Notifier):
    def __init__(
        self,
        api_key: str,
        from_email: str,
        templates: CompanyEmailTemplates | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(templates)
        self.api_key = api_key
        self.from_email = from_email
        self.transport = transport

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=1, max=8),
        reraise=True,
    )
    def send(self, to: str, subject: str, html: str) -> None:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        payload = {"from": self.from_email, "to": [to], "subject": subject, "html": html}
        with httpx.Client(base_url=RESEND_API_URL, timeout=10, transport=self.transport) as client:
            response = client.post("/emails", json=payload, headers=headers)
            response.raise_for_status()
        logger.info("Email %r sent to %s", subject, to)


def build_notifier() -> Notifier:
    if settings.resend_api_key:
        return ResendNotifier(settings.resend_api_key, settings.resend_from_email)
    return LoggingNotifier()
