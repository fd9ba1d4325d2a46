"""Bit-level helpers for 32-bit addresses and prefix masks."""

from __future__ import annotations

from ipaddress import AddressValueError, IPv4Address

from addrgen.errors import MalformedMaskError

ADDRESS_BITS = 32
ALL_ONES = 0xFFFFFFFF

AddressLike = IPv4Address | str | int
MaskLike = IPv4Address | str | int


def to_int(value: AddressLike) -> int:
    """Return the unsigned 32-bit value of an address."""

    if isinstance(value, IPv4Address):
        return int(value)
    if isinstance(value, bool):
        raise ValueError(f"Not an IPv4 address: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= ALL_ONES:
            raise ValueError(f"Address out of 32-bit range: {value}")
        return value
    if isinstance(value, str):
        return int(IPv4Address(value.strip()))
    raise ValueError(f"Not an IPv4 address: {value!r}")


def to_address(value: int) -> IPv4Address:
    return IPv4Address(value)


def prefix_length(mask: MaskLike) -> int:
    """Return the prefix length of a mask.

    Accepts ``"/24"``, ``"255.255.255.0"``, an ``IPv4Address`` or the raw
    mask value as an int. Non-contiguous masks raise ``MalformedMaskError``.
    """

    if isinstance(mask, str) and mask.strip().startswith("/"):
        raw = mask.strip()[1:]
        if not raw.isdigit() or not 0 <= int(raw) <= ADDRESS_BITS:
            raise MalformedMaskError(f"Invalid prefix length: {mask!r}")
        return int(raw)

    try:
        bits = to_int(mask)
    except (AddressValueError, ValueError) as exc:
        raise MalformedMaskError(f"Invalid mask: {mask!r}") from exc

    host_bits = ~bits & ALL_ONES
    # contiguous iff the host part is 2**n - 1
    if host_bits & (host_bits + 1):
        raise MalformedMaskError(f"Mask {to_address(bits)} is not a contiguous prefix")
    return ADDRESS_BITS - host_bits.bit_length()


def mask_bits(prefix: int) -> int:
    if prefix == 0:
        return 0
    return ALL_ONES >> (ADDRESS_BITS - prefix) << (ADDRESS_BITS - prefix)


def network_of(addr: int, prefix: int) -> int:
    return addr & mask_bits(prefix)


def host_of(addr: int, prefix: int) -> int:
    return addr & ~mask_bits(prefix) & ALL_ONES


def network_step(prefix: int) -> int:
    """Distance between two consecutive networks of the given length."""

    return 1 << (ADDRESS_BITS - prefix)


def last_host_offset(prefix: int) -> int:
    """Highest host offset below the broadcast address (< 1 means none)."""

    return network_step(prefix) - 2
