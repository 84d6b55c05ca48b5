# services/weight-balance-service/src/apps/core/services/mail_service.py
"""
Mail Service

Sends load sheet PDFs over the configured Django mail backend and maps
transport failures to API errors.
"""

import re
import smtplib
import logging
from typing import Iterable

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.mail import EmailMessage

from shared.common.validators import validate_email

from ..exceptions import (
    MailCredentialsError,
    MailDeliveryError,
    MailPayloadError,
    MailRateLimitError,
)
from .pdf_service import build_pdf_filename

logger = logging.getLogger(__name__)

THROTTLE_SMTP_CODES = frozenset({421, 450, 451, 452})
THROTTLE_TEXT_RE = re.compile(r'\b(rate|quota)', re.IGNORECASE)


def _reply_codes(exc: Exception) -> Iterable[int]:
    code = getattr(exc, 'smtp_code', None)
    if code is not None:
        yield code
    for reply in (getattr(exc, 'recipients', None) or {}).values():
        if isinstance(reply, tuple) and reply:
            yield reply[0]


def _reply_text(exc: Exception) -> str:
    parts = [str(exc)]
    error = getattr(exc, 'smtp_error', None)
    if error:
        parts.append(error.decode(errors='replace') if isinstance(error, bytes) else str(error))
    for reply in (getattr(exc, 'recipients', None) or {}).values():
        if isinstance(reply, tuple) and len(reply) > 1:
            message = reply[1]
            parts.append(message.decode(errors='replace') if isinstance(message, bytes) else str(message))
    return ' '.join(parts)


def is_rate_limited(exc: Exception) -> bool:
    """Provider throttling: SMTP 421/450/451/452 or a rate/quota reply."""
    if any(code in THROTTLE_SMTP_CODES for code in _reply_codes(exc)):
        return True
    return bool(THROTTLE_TEXT_RE.search(_reply_text(exc)))


def map_transport_error(exc: Exception):
    """Translate a mail transport exception into the matching API error."""
    if isinstance(exc, smtplib.SMTPAuthenticationError):
        return MailCredentialsError()
    if is_rate_limited(exc):
        return MailRateLimitError()
    if isinstance(exc, (
        smtplib.SMTPRecipientsRefused,
        smtplib.SMTPSenderRefused,
        smtplib.SMTPDataError,
        ValueError,
    )):
        return MailPayloadError()
    return MailDeliveryError()


class MailService:
    """Service for emailing load sheets."""

    SUBJECT_TEMPLATE = "Weight and Balance Sheet - {aircraft_type} - {date}"
    BODY_TEMPLATE = "Attached is your Weight and Balance Sheet for {aircraft_type} generated on {date}."

    @classmethod
    def send_sheet_pdf(cls, email: str, aircraft_type: str, date: str, pdf_bytes: bytes) -> None:
        """
        Email a load sheet PDF as an attachment.

        Args:
            email: Recipient address
            aircraft_type: Aircraft type for subject and filename
            date: Sheet date for subject and filename
            pdf_bytes: Rendered PDF

        Raises:
            MailPayloadError: Invalid recipient or refused message (400)
            MailCredentialsError: Transport rejected the credentials (401)
            MailRateLimitError: Provider throttled the delivery (429)
            MailDeliveryError: Any other transport failure (500)
        """
        try:
            validate_email(email)
        except DjangoValidationError:
            raise MailPayloadError("Invalid recipient email address")
        if not pdf_bytes:
            raise MailPayloadError("Generated PDF is empty")

        context = {'aircraft_type': aircraft_type, 'date': date}
        message = EmailMessage(
            subject=cls.SUBJECT_TEMPLATE.format(**context),
            body=cls.BODY_TEMPLATE.format(**context),
            from_email=getattr(settings, 'DEFAULT_FROM_EMAIL', None),
            to=[email],
        )
        message.attach(build_pdf_filename(aircraft_type, date), pdf_bytes, 'application/pdf')

        try:
            message.send(fail_silently=False)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            error = map_transport_error(e)
            logger.exception(
                f"Failed to email weight & balance PDF to {email}: {e}",
                extra={'error_code': error.error_code},
            )
            raise error from e

        logger.info(f"Emailed weight & balance PDF for {aircraft_type} to {email}")
