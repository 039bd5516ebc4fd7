"""Common utilities and exceptions."""

from libs.common.exceptions import ConfigurationError, SignerGatewayError
from libs.common.log_sanitizer import mask_bearer_token, mask_private_key, sanitize_value

__all__ = [
    "SignerGatewayError",
    "ConfigurationError",
    "mask_bearer_token",
    "mask_private_key",
    "sanitize_value",
]
