"""Process-wide IPv4 address and network allocator."""

from addrgen.errors import (
    AddressGeneratorError,
    DuplicateAllocationError,
    ExhaustedSpaceError,
    MalformedMaskError,
    UninitializedMaskError,
)
from addrgen.generator import (
    add_allocated,
    add_network_allocated,
    enable_test_mode,
    get_address,
    get_generator,
    get_network,
    init,
    init_address,
    is_address_allocated,
    is_network_allocated,
    next_address,
    next_network,
    reset,
)
from addrgen.services.address_generator import AddressGenerator, ErrorMode

__all__ = [
    "AddressGenerator",
    "AddressGeneratorError",
    "DuplicateAllocationError",
    "ErrorMode",
    "ExhaustedSpaceError",
    "MalformedMaskError",
    "UninitializedMaskError",
    "add_allocated",
    "add_network_allocated",
    "enable_test_mode",
    "get_address",
    "get_generator",
    "get_network",
    "init",
    "init_address",
    "is_address_allocated",
    "is_network_allocated",
    "next_address",
    "next_network",
    "reset",
]
