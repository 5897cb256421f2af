"""Exception hierarchy for the Living Hash engine."""


class LivingHashError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(LivingHashError, ValueError):
    """Raised when a rate/capacity pair cannot describe a 1600-bit sponge."""


class OperationError(LivingHashError, ValueError):
    """Raised when absorb or squeeze receives an argument it cannot process."""


class PaddingAlignmentError(LivingHashError, AssertionError):
    """Raised when padded input is not aligned to the rate."""
