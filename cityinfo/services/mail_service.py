"""
CityInfo API - Mail Notification Service
=========================================

What:  Sends a short notification mail when a point of interest is deleted.
Why:   Deletions are irreversible; an administrator is told about each one.
How:   MailService is the interface; two implementations are selected by the
       MAIL_SERVICE setting:
       - LocalMailService: writes the mail to the application log
         (development: nothing leaves the process)
       - CloudMailService: POSTs the mail as JSON to a mail relay over HTTP
Who:   Called by PointOfInterestService after a delete has been saved.
When:  Scheduled as a FastAPI background task, after the 204 response is
       produced. Delivery is fire-and-forget: the client is never told about,
       and the request never waits for, the outcome.

Relay payload (CloudMailService):
    {
        "from": "noreply@cityinfo.local",
        "to": "admin@cityinfo.local",
        "subject": "Point of interest deleted.",
        "message": "Point of interest Central Park with id 1 was deleted."
    }
"""

import logging
from abc import ABC, abstractmethod

import httpx

from cityinfo.config import Settings

logger = logging.getLogger(__name__)


class MailService(ABC):
    """Interface for outbound notification mail."""

    def __init__(self, mail_from: str, mail_to: str):
        self.mail_from = mail_from
        self.mail_to = mail_to

    @abstractmethod
    async def send(self, subject: str, message: str) -> None:
        """
        Deliver one mail to the configured recipient.

        Errors are not caught here; callers run this as a background task
        and accept that a failed delivery is only visible in the logs.
        """
        ...


class LocalMailService(MailService):
    """Writes mails to the log instead of sending them."""

    async def send(self, subject: str, message: str) -> None:
        logger.info(
            "Mail from %s to %s, with %s. Subject: %s | Message: %s",
            self.mail_from,
            self.mail_to,
            type(self).__name__,
            subject,
            message,
        )


class CloudMailService(MailService):
    """Hands mails to an HTTP mail relay."""

    def __init__(self, mail_from: str, mail_to: str, api_url: str, timeout: float = 10.0):
        super().__init__(mail_from, mail_to)
        self.api_url = api_url
        self.timeout = timeout

    async def send(self, subject: str, message: str) -> None:
        payload = {
            "from": self.mail_from,
            "to": self.mail_to,
            "subject": subject,
            "message": message,
        }
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(self.api_url, json=payload)
            response.raise_for_status()
        logger.info(
            "Mail relayed to %s for %s (status %d)",
            self.api_url,
            self.mail_to,
            response.status_code,
        )


def create_mail_service(app_settings: Settings) -> MailService:
    """Build the MailService selected by MAIL_SERVICE."""
    if app_settings.mail_service == "cloud":
        return CloudMailService(
            mail_from=app_settings.mail_from_address,
            mail_to=app_settings.mail_to_address,
            api_url=app_settings.mail_api_url,
            timeout=app_settings.mail_timeout,
        )
    return LocalMailService(
        mail_from=app_settings.mail_from_address,
        mail_to=app_settings.mail_to_address,
    )
