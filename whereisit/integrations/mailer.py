"""
Invitation Mailer

Sends household invitation emails through the Resend HTTP API.

Delivery is best effort: every failure (missing API key, network error,
non-2xx answer) is logged and reported as False, never raised. The invitation
itself is already committed when this runs.
"""

import logging
from typing import Optional

import httpx

from whereisit.core.config import settings

logger = logging.getLogger(__name__)


def build_invitation_email(household_name: str, invitation_code: str, download_url: str) -> dict:
    """Return subject and HTML body for an invitation."""
    subject = f"You're invited to join {household_name} on WhereIsIt!"
    html = f"""
<div style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif;">
  <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1 style="color: #111827;">You're invited to join a household!</h1>
    <p style="color: #6B7280; font-size: 16px;">
      Someone has invited you to join the <strong>{household_name}</strong> household on WhereIsIt,
      a family-shared inventory app.
    </p>
    <div style="background: #F3F4F6; border-left: 4px solid #3B82F6; padding: 20px; margin: 24px 0;">
      <p style="color: #6B7280; margin: 0 0 12px 0; font-size: 14px;">Your invitation code:</p>
      <p style="color: #111827; font-size: 28px; font-weight: 700; letter-spacing: 2px; text-align: center; font-family: monospace;">
        {invitation_code}
      </p>
    </div>
    <h2 style="color: #111827; font-size: 18px;">How to join:</h2>
    <ol style="color: #6B7280; font-size: 16px; line-height: 1.8;">
      <li>Download WhereIsIt</li>
      <li>Sign in or create an account</li>
      <li>Go to <strong>Settings &rarr; Household &rarr; Join with Code</strong></li>
      <li>Enter the code above: <strong>{invitation_code}</strong></li>
    </ol>
    <div style="margin-top: 32px; text-align: center;">
      <a href="{download_url}" style="background: #3B82F6; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px;">
        Download WhereIsIt
      </a>
    </div>
  </div>
</div>
"""
    return {"subject": subject, "html": html}


class ResendMailer:
    """
    Minimal Resend client.

    A custom httpx transport can be injected; tests use httpx.MockTransport
    to capture requests without network access.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        from_email: Optional[str] = None,
        download_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 10.0
    ):
        self.api_key = settings.RESEND_API_KEY if api_key is None else api_key
        self.api_url = api_url or settings.RESEND_API_URL
        self.from_email = from_email or settings.INVITE_FROM_EMAIL
        self.download_url = download_url or settings.APP_DOWNLOAD_URL
        self.transport = transport
        self.timeout = timeout

    def send_invite(self, to_email: str, household_name: str, invitation_code: str) -> bool:
        """
        Send one invitation email.

        Returns:
            True if Resend accepted the message, False otherwise
        """
        if not self.api_key:
            logger.warning("[Email] Resend API key not configured, skipping email send")
            return False

        content = build_invitation_email(household_name, invitation_code, self.download_url)
        payload = {
            "from": self.from_email,
            "to": [to_email],
            "subject": content["subject"],
            "html": content["html"],
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(
                    self.api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"}
                )
        except httpx.TimeoutException:
            logger.error(f"[Email] Timeout sending invitation to {to_email}")
            return False
        except httpx.HTTPError as e:
            logger.error(f"[Email] Failed to send invitation to {to_email}: {e}")
            return False

        if response.status_code >= 300:
            logger.error(f"[Email] Resend rejected invitation to {to_email}: HTTP {response.status_code} - {response.text}")
            return False

        logger.info(f"[Email] Invitation sent to {to_email}")
        return True


# Singleton instance
mailer = ResendMailer()
