"""Shared allocator instance and module-level shortcuts.

Every caller in the process allocates from the same ``AddressGenerator``,
so independent pieces of topology code never hand out the same address.
"""

from __future__ import annotations

from functools import lru_cache
from ipaddress import IPv4Address

from addrgen.config import get_settings
from addrgen.services.address_generator import AddressGenerator, ErrorMode
from addrgen.utils.bits import AddressLike, MaskLike


@lru_cache(maxsize=1)
def get_generator() -> AddressGenerator:
    """Return the process-wide generator, built from settings on first use."""

    settings = get_settings()
    return AddressGenerator(
        error_mode=ErrorMode.TEST if settings.test_mode else ErrorMode.FATAL,
        default_base_address=settings.default_base_address,
    )


def init(net: AddressLike, mask: MaskLike, addr: AddressLike | None = None) -> None:
    get_generator().init(net, mask, addr)


def next_network(mask: MaskLike) -> IPv4Address | None:
    return get_generator().next_network(mask)


def get_network(mask: MaskLike) -> IPv4Address | None:
    return get_generator().get_network(mask)


def init_address(addr: AddressLike, mask: MaskLike) -> None:
    get_generator().init_address(addr, mask)


def next_address(mask: MaskLike) -> IPv4Address | None:
    return get_generator().next_address(mask)


def get_address(mask: MaskLike) -> IPv4Address | None:
    return get_generator().get_address(mask)


def reset() -> None:
    get_generator().reset()


def add_allocated(addr: AddressLike) -> bool:
    return get_generator().add_allocated(addr)


def add_network_allocated(addr: AddressLike, mask: MaskLike) -> bool:
    return get_generator().add_network_allocated(addr, mask)


def is_address_allocated(addr: AddressLike) -> bool:
    return get_generator().is_address_allocated(addr)


def is_network_allocated(addr: AddressLike, mask: MaskLike) -> bool:
    return get_generator().is_network_allocated(addr, mask)


def enable_test_mode() -> None:
    """Switch the shared generator to test mode for the rest of the process."""

    get_generator().enable_test_mode()
