"""
Email service for sending notifications.
"""

import logging
import os
from typing import Any, Dict, Optional

import requests
from fastapi import Request
from jinja2 import Environment, FileSystemLoader, select_autoescape

from casefolio.services.config_service import AppConfig

logger = logging.getLogger("casefolio.email")

SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"


class EmailService:
    def __init__(self, config: AppConfig, timeout: float = 10.0):
        self.api_key = config.sendgrid_api_key
        self.admin_email = config.notify_email
        self.from_email = config.sender_email
        self.site_url = config.site_url
        self.development = config.is_development
        self.timeout = timeout

        if not self.api_key:
            logger.warning("SENDGRID_API_KEY not set. Email notifications are disabled.")

        package_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        template_dir = os.path.join(package_dir, "templates")
        self.jinja_env = Environment(loader=FileSystemLoader(template_dir), autoescape=select_autoescape(["html"]))

    def _render(self, name: str, context: Dict[str, Any]) -> Dict[str, str]:
        return {
            "text": self.jinja_env.get_template(f"email/{name}.txt").render(**context),
            "html": self.jinja_env.get_template(f"email/{name}.html").render(**context),
        }

    def _send_email(self, to_email: str, subject: str, text_content: str, html_content: Optional[str] = None) -> bool:
        """
        Send email through the SendGrid v3 API.

        Args:
            to_email: Recipient email address
            subject: Email subject
            text_content: Plain text email content
            html_content: HTML email content (optional)

        Returns:
            bool: True if email sent successfully, False otherwise
        """
        if not self.api_key:
            logger.error(f"Cannot send email to {to_email}: SENDGRID_API_KEY not set")
            return False

        if self.development:
            logger.info(
                f"Email not sent in development mode to={to_email} from={self.from_email} "
                f"subject={subject}\n{text_content}"
            )
            return True

        content = [{"type": "text/plain", "value": text_content}]
        if html_content:
            content.append({"type": "text/html", "value": html_content})

        payload = {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": self.from_email},
            "subject": subject,
            "content": content,
        }

        try:
            response = requests.post(
                SENDGRID_SEND_URL,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            return False

        if response.status_code >= 400:
            logger.error(f"SendGrid rejected email to {to_email}: status={response.status_code} body={response.text}")
            return False

        logger.info(f"Email sent successfully to {to_email}, subject: {subject}")
        return True

    def send_contact_form_email(self, name: str, email: str, subject: str, message: str) -> bool:
        """
        Notify the site owner about a contact form submission.

        Returns:
            bool: True if email sent successfully
        """
        try:
            bodies = self._render("contact_form", {"name": name, "email": email, "subject": subject, "message": message})
        except Exception as e:
            logger.error(f"Failed to render contact form email: {e}")
            return False

        return self._send_email(self.admin_email, f"New Contact Form Submission: {subject}", bodies["text"], bodies["html"])

    def send_new_case_study_notification(self, title: str, slug: str, client: Optional[str] = None) -> bool:
        """
        Notify the site owner that a case study was published.

        Returns:
            bool: True if email sent successfully
        """
        url = f"{self.site_url}/case-studies/{slug}"
        try:
            bodies = self._render("new_case_study", {"title": title, "client": client, "url": url})
        except Exception as e:
            logger.error(f"Failed to render case study notification: {e}")
            return False

        return self._send_email(self.admin_email, f"New Case Study Added: {title}", bodies["text"], bodies["html"])


def get_email_service(request: Request) -> EmailService:
    """Dependency returning the application's email service."""
    return request.app.state.email_service
