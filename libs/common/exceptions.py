"""
Exception hierarchy for the order signer gateway.

Every custom exception raised by the service derives from SignerGatewayError,
so route-level handlers can tell expected outcomes apart from real faults.
"""


class SignerGatewayError(Exception):
    """
    Base exception for all order signer gateway errors.

    Example:
        >>> try:
        ...     # gateway code
        ...     pass
        ... except SignerGatewayError as e:
        ...     logger.error(f"Gateway error: {e}")
    """

    pass


class ConfigurationError(SignerGatewayError):
    """
    Raised when required startup configuration is missing or malformed.

    This is the only error allowed to escape to the process level: the
    service refuses to start serving until it is fixed.

    Example:
        >>> if not signer_token:
        ...     raise ConfigurationError("SIGNER_TOKEN not configured")
    """

    pass
