"""Outbound email with a bounded retry.

A send is attempted up to EMAIL_SEND_ATTEMPTS times (3) with a fixed
EMAIL_RETRY_DELAY (1 second) between attempts. There is no backoff and no
queue: the request that triggered the email waits for the outcome.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives

logger = logging.getLogger(__name__)


@dataclass
class EmailResult:
    success: bool
    attempts: int
    error: Optional[str] = None


def send_with_retry(
    send: Callable[[], int],
    attempts: Optional[int] = None,
    delay: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> EmailResult:
    """Call `send` until it reports at least one delivered message.

    `send` returns the number of messages handed to the backend (the return
    value of `EmailMessage.send`). Exceptions and a zero count both count as a
    failed attempt.
    """
    attempts = attempts or settings.EMAIL_SEND_ATTEMPTS
    delay = settings.EMAIL_RETRY_DELAY if delay is None else delay
    last_error = None

    for attempt in range(1, attempts + 1):
        try:
            if send():
                return EmailResult(success=True, attempts=attempt)
            last_error = "Email backend did not accept the message"
        except Exception as exc:  # backend errors are reported, not raised
            last_error = str(exc) or exc.__class__.__name__
        logger.warning("Email attempt %s/%s failed: %s", attempt, attempts, last_error)
        if attempt < attempts:
            sleep(delay)

    return EmailResult(success=False, attempts=attempts, error=last_error)


def build_email(subject: str, to, text_body: str, html_body: str = "", cc=None, bcc=None):
    """Create a multipart email from the default sender."""
    message = EmailMultiAlternatives(
        subject=subject,
        body=text_body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=list(to),
        cc=list(cc or []),
        bcc=list(bcc or []),
    )
    if html_body:
        message.attach_alternative(html_body, "text/html")
    return message
