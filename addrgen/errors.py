"""Allocator error hierarchy."""


class AddressGeneratorError(Exception):
    """Base class for address allocation failures."""


class ExhaustedSpaceError(AddressGeneratorError):
    """Raised when no unallocated network or host address remains."""


class UninitializedMaskError(AddressGeneratorError):
    """Raised when a prefix length is used before it was seeded."""

    def __init__(self, prefix_length: int) -> None:
        super().__init__(f"Prefix length /{prefix_length} is not initialized")
        self.prefix_length = prefix_length


class MalformedMaskError(AddressGeneratorError, ValueError):
    """Raised when a mask is not a contiguous run of high-order bits."""


class DuplicateAllocationError(AddressGeneratorError):
    """Raised when sequential allocation produces an already issued value."""
