# services/weight-balance-service/src/tests/test_mail_service.py
"""
Mail Service Tests
"""

import smtplib
import pytest
from unittest.mock import patch

from django.core import mail

from apps.core.exceptions import (
    MailCredentialsError,
    MailDeliveryError,
    MailPayloadError,
    MailRateLimitError,
)
from apps.core.services import MailService
from apps.core.services.mail_service import is_rate_limited, map_transport_error

PDF_BYTES = b'%PDF-1.4 test'


class TestMailService:
    """Tests for emailing load sheets."""

    def test_send(self):
        MailService.send_sheet_pdf('pilot@example.com', 'C-172', '2024-05-01', PDF_BYTES)

        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.to == ['pilot@example.com']
        assert message.subject == 'Weight and Balance Sheet - C-172 - 2024-05-01'
        assert 'generated on 2024-05-01' in message.body
        filename, content, mimetype = message.attachments[0]
        assert filename == 'weight_balance_C-172_2024-05-01.pdf'
        assert content == PDF_BYTES
        assert mimetype == 'application/pdf'

    def test_invalid_address(self):
        with pytest.raises(MailPayloadError):
            MailService.send_sheet_pdf('not-an-email', 'C-172', '2024-05-01', PDF_BYTES)

        assert len(mail.outbox) == 0

    def test_empty_pdf(self):
        with pytest.raises(MailPayloadError):
            MailService.send_sheet_pdf('pilot@example.com', 'C-172', '2024-05-01', b'')

    @pytest.mark.parametrize('error,expected', [
        (smtplib.SMTPAuthenticationError(535, b'5.7.8 Username and Password not accepted'), MailCredentialsError),
        (smtplib.SMTPResponseException(421, b'Service not available'), MailRateLimitError),
        (smtplib.SMTPDataError(554, b'Daily sending quota exceeded'), MailRateLimitError),
        (smtplib.SMTPRecipientsRefused({'pilot@example.com': (550, b'No such user')}), MailPayloadError),
        (smtplib.SMTPServerDisconnected('Connection unexpectedly closed'), MailDeliveryError),
        (ConnectionRefusedError(111, 'Connection refused'), MailDeliveryError),
    ])
    def test_transport_errors_mapped(self, error, expected):
        with patch('apps.core.services.mail_service.EmailMessage.send', side_effect=error):
            with pytest.raises(expected):
                MailService.send_sheet_pdf('pilot@example.com', 'C-172', '2024-05-01', PDF_BYTES)


class TestTransportErrorMapping:
    """Tests for status mapping of transport errors."""

    def test_status_codes(self):
        assert map_transport_error(smtplib.SMTPAuthenticationError(535, b'bad')).status_code == 401
        assert map_transport_error(smtplib.SMTPResponseException(450, b'later')).status_code == 429
        assert map_transport_error(smtplib.SMTPSenderRefused(553, b'no', 'a@b.c')).status_code == 400
        assert map_transport_error(OSError('network down')).status_code == 500

    def test_rate_limit_text(self):
        assert is_rate_limited(smtplib.SMTPResponseException(550, b'Rate limit exceeded'))
        assert not is_rate_limited(smtplib.SMTPResponseException(550, b'Mailbox unavailable'))

    def test_throttled_recipient(self):
        error = smtplib.SMTPRecipientsRefused({'pilot@example.com': (452, b'Too many recipients')})

        assert isinstance(map_transport_error(error), MailRateLimitError)
