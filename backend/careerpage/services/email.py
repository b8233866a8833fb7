"""Email service for admin account confirmation links."""
import logging

from careerpage.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    """Handles email sending in dev and production modes."""

    def __init__(self):
        self.mode = settings.email_mode
        self.sendgrid_client = None

    def _client(self):
        if self.sendgrid_client is None:
            try:
                from sendgrid import SendGridAPIClient
            except ImportError:
                logger.error("SendGrid not installed but email_mode is 'prod'")
                raise
            self.sendgrid_client = SendGridAPIClient(settings.sendgrid_api_key)
        return self.sendgrid_client

    async def send_confirmation_email(self, email: str, confirmation_link: str) -> bool:
        """Send the sign-up confirmation link."""
        subject = "Confirm your careers page admin account"
        hours = settings.confirmation_ttl_minutes // 60

        html_content = f"""
        <html>
            <body style="margin: 0; padding: 24px; background: #f8fafc; font-family: Inter, Helvetica, sans-serif;">
                <table role="presentation" width="100%" style="max-width: 560px; margin: 0 auto; background: #ffffff; border: 1px solid #e2e8f0; border-radius: 12px;">
                    <tr><td style="padding: 32px;">
                        <h1 style="margin: 0 0 12px; font-size: 20px; color: #0f172a;">One step before your careers page goes live</h1>
                        <p style="margin: 0 0 24px; color: #475569; line-height: 1.5;">
                            Confirm {email} to finish creating your admin account.
                        </p>
                        <a href="{confirmation_link}" style="display: inline-block; padding: 10px 24px; background: #0f172a; color: #ffffff; border-radius: 6px; text-decoration: none;">
                            Confirm my email
                        </a>
                        <p style="margin: 24px 0 0; color: #94a3b8; font-size: 13px;">
                            The link stops working after {hours} hours. If the button does not work, paste this address into your browser:<br>
                            {confirmation_link}
                        </p>
                    </td></tr>
                </table>
            </body>
        </html>
        """

        text_content = (
            f"Confirm {email} to finish creating your careers page admin account:\n"
            f"{confirmation_link}\n\n"
            f"The link stops working after {hours} hours."
        )

        return await self._send_email(email, subject, text_content, html_content)

    async def _send_email(self, to_email: str, subject: str, text_content: str, html_content: str) -> bool:
        """Internal method to send email via SendGrid or dev console."""
        if self.mode == "dev":
            logger.info(f"[DEV MODE] Email to {to_email}: {subject}")
            logger.info(f"[DEV MODE] Content:\n{text_content}")
            return True

        try:
            from sendgrid.helpers.mail import Mail, Email, To, Content

            mail = Mail(
                from_email=Email(settings.email_from, "Careers Page Builder"),
                to_emails=To(to_email),
                subject=subject,
                plain_text_content=Content("text/plain", text_content),
                html_content=Content("text/html", html_content)
            )

            response = self._client().send(mail)

            if 200 <= response.status_code < 300:
                logger.info(f"Email sent to {to_email}: {subject}")
                return True
            logger.error(f"Failed to send email to {to_email}: {response.status_code}")
            return False
        except Exception as e:
            logger.error(f"Error sending email to {to_email}: {str(e)}", exc_info=True)
            return False


# Global email service instance
email_service = EmailService()
