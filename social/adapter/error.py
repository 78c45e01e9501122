"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class IdentityVerificationError(ProviderError):
    """ID token was rejected or could not be verified in time."""

    pass
