"""Errors raised by the VPC API and the HTTP status each one maps to."""


class VpcApiError(Exception):
    status_code = 500


class ConfigurationError(VpcApiError):
    """Required environment configuration is missing."""


class RequestValidationError(VpcApiError):
    status_code = 400


class VpcNotFoundError(VpcApiError):
    status_code = 404


class ProvisioningError(VpcApiError):
    """EC2 rejected or failed a call."""


class MetadataStoreError(VpcApiError):
    """DynamoDB rejected or failed a call."""


class RecordDecodeError(MetadataStoreError):
    """A stored item does not have the shape of a VPC record."""
