"""Exception types for the Rostr core."""


class RostrError(Exception):
    """Base class for all Rostr errors."""


class StorageError(RostrError):
    """A key/value backend failed to read or write."""


class ReferralNotLoadedError(RostrError):
    """Referral data was read before the startup load finished."""
