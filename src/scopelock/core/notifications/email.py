"""Status notification emails using the Resend API.

One email per status change only: no per-note emails, no reminders.
"""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from uuid import UUID

import resend

from src.scopelock.core.config import Settings
from src.scopelock.core.logging import get_logger

logger = get_logger(__name__)

# Thread pool for email sending with timeout support
_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

# Shared email styles
_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_BUTTON_STYLE = (
    "background-color: #2563eb; color: white; padding: 12px 24px; "
    "text-decoration: none; border-radius: 6px; display: inline-block; font-weight: 500;"
)
_MUTED_STYLE = "color: #666; font-size: 14px;"


class EmailNotifier:
    """Sends the five status emails of a review engagement.

    Built once at startup with the process settings. Every public method
    returns False instead of raising, so callers can treat it as
    fire-and-forget.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def review_url(self, token: str) -> str:
        return f"{self.settings.app_url}/review/{token}"

    def send_version_uploaded(
        self, client_email: str, client_name: str, token: str, version_number: int
    ) -> bool:
        """Version uploaded: send the client their review link."""
        review_url = self.review_url(token)
        body = (
            f"<p>Your video version {version_number} is ready for review.</p>"
            f'<p style="margin: 32px 0;"><a href="{review_url}" style="{_BUTTON_STYLE}">'
            "Review and add notes</a></p>"
            f'<p style="{_MUTED_STYLE}">This link takes you directly to your project, '
            "no login required.</p>"
        )
        return self._send(
            to=client_email,
            subject=f"Video Version {version_number} Ready for Review",
            html_body=_render(f"Hi {html.escape(client_name)},", body),
            email_type="version_uploaded",
        )

    def send_revision_submitted(
        self, editor_email: str, client_name: str, round_number: int, note_count: int
    ) -> bool:
        """Round submitted: tell the editor notes are waiting."""
        body = (
            f"<p><strong>{html.escape(client_name)}</strong> has submitted "
            f"{note_count} note(s) for revision.</p>"
            "<p>Review the notes in your dashboard to begin working on the changes.</p>"
        )
        return self._send(
            to=editor_email,
            subject=f"New Revision Notes from {client_name}",
            html_body=_render(f"Revision Round {round_number} Submitted", body),
            email_type="revision_submitted",
        )

    def send_final_revision_used(
        self, client_email: str, client_name: str, token: str, revision_cap: int
    ) -> bool:
        """Cap reached: warn the client that included revisions are used up."""
        review_url = self.review_url(token)
        body = (
            f"<p><strong>Your package includes {revision_cap} revision round(s), "
            "which are now complete.</strong></p>"
            "<p>You can still approve the project or request additional changes "
            "(which may require an add-on).</p>"
            f'<p style="margin: 32px 0;"><a href="{review_url}" style="{_BUTTON_STYLE}">'
            "View your project</a></p>"
        )
        return self._send(
            to=client_email,
            subject="Included Revisions Complete",
            html_body=_render(f"Hi {html.escape(client_name)},", body),
            email_type="final_revision_used",
        )

    def send_approval_request(
        self, client_email: str, client_name: str, token: str, version_number: int
    ) -> bool:
        """Updated version after the cap: ask the client to approve."""
        review_url = self.review_url(token)
        body = (
            f"<p>Your updated video (version {version_number}) is ready for review.</p>"
            f'<p style="margin: 32px 0;"><a href="{review_url}" style="{_BUTTON_STYLE}">'
            "Review and approve your video</a></p>"
            "<p>If everything looks good, you can approve the project to mark it complete.</p>"
        )
        return self._send(
            to=client_email,
            subject=f"Updated Version {version_number} - Ready for Approval",
            html_body=_render(f"Hi {html.escape(client_name)},", body),
            email_type="approval_request",
        )

    def send_project_approved(self, editor_email: str, client_name: str, project_id: UUID) -> bool:
        """Approved: confirm to the editor that the project is locked."""
        body = (
            f"<p><strong>{html.escape(client_name)}</strong> has approved their project.</p>"
            "<p>The project is now locked and no further changes can be made.</p>"
            f'<p style="{_MUTED_STYLE}">Project ID: {project_id}</p>'
        )
        return self._send(
            to=editor_email,
            subject=f"Project Approved - {client_name}",
            html_body=_render("Project Approved!", body),
            email_type="project_approved",
        )

    def _send(self, to: str, subject: str, html_body: str, email_type: str) -> bool:
        settings = self.settings

        if not settings.resend_api_key:
            # Dev mode: log instead of sending
            logger.warning(
                "RESEND_API_KEY not set - email not sent",
                to=to,
                email_type=email_type,
            )
            return True

        resend.api_key = settings.resend_api_key

        def _deliver() -> None:
            resend.Emails.send(
                {
                    "from": settings.email_from,
                    "to": [to],
                    "subject": subject,
                    "html": html_body,
                }
            )

        try:
            future = _email_executor.submit(_deliver)
            future.result(timeout=settings.email_send_timeout_seconds)
            logger.info("Email sent", to=to, email_type=email_type)
            return True
        except FuturesTimeoutError:
            logger.error(
                "Email send timed out",
                to=to,
                email_type=email_type,
                timeout=settings.email_send_timeout_seconds,
            )
            return False
        except Exception as e:
            logger.error("Failed to send email", to=to, email_type=email_type, error=str(e))
            return False


def _render(heading: str, body: str) -> str:
    """Wrap a message body in the shared email layout."""
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="{_BODY_STYLE}">
    <h2 style="color: #2563eb; margin-bottom: 24px;">{heading}</h2>
    {body}
</body>
</html>"""
