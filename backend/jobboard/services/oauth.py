from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from jobboard.errors import AuthenticationError, DependencyError, ValidationError


logger = logging.getLogger(__name__)

USERINFO_URLS = {
    "google": "https://openidconnect.googleapis.com/v1/userinfo",
    "linkedin": "https://api.linkedin.com/v2/userinfo",
}


@dataclass
class OAuthProfile:
    provider: str
    account_id: str
    email: str
    name: str | None = None


class OAuthClient:
    """Resolves a provider access token to the account's OpenID Connect profile."""

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self.transport = transport

    def fetch_profile(self, provider: str, access_token: str) -> OAuthProfile:
        url = USERINFO_URLS.get(provider)
        if url is None:
            raise ValidationError(f"Unsupported OAuth provider: {provider}")

        try:
            with httpx.Client(timeout=10, transport=self.transport) as client:
                response = client.get(url, headers={"Authorization": f"Bearer {access_token}"})
        except httpx.HTTPError as exc:
            logger.error("Could not reach %s userinfo endpoint", provider, exc_info=True)
            raise DependencyError() from exc

        if response.status_code in (400, 401, 403):
            raise AuthenticationError()
        if response.is_error:
            logger.error("%s userinfo returned HTTP %s", provider, response.status_code)
            raise DependencyError()

        data = response.json()
        account_id = str(data.get("sub") or "").strip()
        email = str(data.get("email") or "").strip().lower()
        if not account_id or not email:
            raise AuthenticationError()
        if data.get("email_verified") not in (True, "true"):
            logger.warning("Rejected %s login for account %s: email not verified", provider, account_id)
            raise AuthenticationError("Email address is not verified")
        return OAuthProfile(provider=provider, account_id=account_id, email=email, name=data.get("name"))
