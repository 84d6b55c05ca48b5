"""
Weight & Balance Service Exceptions.
"""
from rest_framework import status

from shared.common.exceptions import BaseAPIException


class WeightBalanceServiceException(BaseAPIException):
    """Base exception for weight & balance service."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "An error occurred in the weight & balance service."
    default_code = "weight_balance_service_error"
    error_code = "WEIGHT_BALANCE_ERROR"


class InvalidGraphImage(WeightBalanceServiceException):
    """Raised when a graph image is not a base64 PNG data URI."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Graph image must be a base64 encoded PNG data URI."
    default_code = "invalid_graph_image"
    error_code = "INVALID_GRAPH_IMAGE"


class PDFGenerationFailed(WeightBalanceServiceException):
    """Raised when the PDF document cannot be built."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to process PDF"
    default_code = "pdf_generation_failed"
    error_code = "PDF_GENERATION_FAILED"


class MailPayloadError(WeightBalanceServiceException):
    """Raised when the mail transport refuses the message content."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid email payload"
    default_code = "invalid_email_payload"
    error_code = "INVALID_EMAIL_PAYLOAD"


class MailCredentialsError(WeightBalanceServiceException):
    """Raised when the mail transport rejects the configured credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid email service credentials"
    default_code = "invalid_email_credentials"
    error_code = "INVALID_EMAIL_CREDENTIALS"


class MailRateLimitError(WeightBalanceServiceException):
    """Raised when the mail provider throttles delivery."""
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = "Email rate limit exceeded. Please try again later."
    default_code = "email_rate_limited"
    error_code = "EMAIL_RATE_LIMITED"


class MailDeliveryError(WeightBalanceServiceException):
    """Raised when mail delivery fails for any other reason."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to process PDF"
    default_code = "email_delivery_failed"
    error_code = "EMAIL_DELIVERY_FAILED"


class SheetSaveFailed(WeightBalanceServiceException):
    """Raised when a sheet cannot be persisted."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Error saving sheet"
    default_code = "sheet_save_failed"
    error_code = "SHEET_SAVE_FAILED"


class SheetFetchFailed(WeightBalanceServiceException):
    """Raised when stored sheets cannot be read."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Error fetching records"
    default_code = "sheet_fetch_failed"
    error_code = "SHEET_FETCH_FAILED"
