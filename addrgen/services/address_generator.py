"""Sequential network and host address allocation over a shared ledger."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from ipaddress import IPv4Address
from typing import Any

import structlog

from addrgen.errors import AddressGeneratorError, DuplicateAllocationError, ExhaustedSpaceError, UninitializedMaskError
from addrgen.services.ledger import AllocationLedger
from addrgen.utils.bits import (
    ALL_ONES,
    AddressLike,
    MaskLike,
    host_of,
    last_host_offset,
    network_of,
    network_step,
    prefix_length,
    to_address,
    to_int,
)

FIRST_HOST_OFFSET = 1


class ErrorMode(str, Enum):
    """How recoverable violations are reported."""

    FATAL = "fatal"
    TEST = "test"


@dataclass(slots=True)
class NetworkCursor:
    """Allocation position for one prefix length."""

    prefix_length: int
    network: int
    base: int
    offset: int
    reserved: int | None = None

    def address(self, offset: int) -> int:
        return self.network | offset


@dataclass(slots=True)
class AddressGenerator:
    """Hands out unique networks and addresses from one shared pool.

    There is one cursor per prefix length. Every network and address the
    generator issues is recorded in the ledger, and sequential allocation
    skips anything already recorded there, including entries registered by
    external allocators through ``add_allocated``.

    The generator does no locking; callers on several threads must
    serialize access themselves.
    """

    error_mode: ErrorMode = ErrorMode.FATAL
    default_base_address: str = "0.0.0.1"
    last_error: AddressGeneratorError | None = field(default=None, init=False)
    _cursors: dict[int, NetworkCursor] = field(default_factory=dict, init=False, repr=False)
    _ledger: AllocationLedger = field(default_factory=AllocationLedger, init=False, repr=False)
    _logger: Any = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = structlog.get_logger(__name__)

    @property
    def ledger(self) -> AllocationLedger:
        return self._ledger

    def _fail(self, error: AddressGeneratorError, record: bool = True) -> None:
        """Raise ``error`` in fatal mode, record it in test mode.

        Peeks pass ``record=False`` so they leave ``last_error`` untouched.
        """

        if self.error_mode is ErrorMode.TEST:
            self._logger.warning("Allocation error suppressed in test mode", error=str(error))
            if record:
                self.last_error = error
            return
        self._logger.error("Allocation failed", error=str(error))
        raise error

    def _duplicate(self, error: DuplicateAllocationError) -> None:
        self._logger.error("Sequential allocation produced a duplicate", error=str(error))
        raise error

    def _cursor(self, prefix: int, record: bool = True) -> NetworkCursor | None:
        cursor = self._cursors.get(prefix)
        if cursor is None:
            self._fail(UninitializedMaskError(prefix), record)
        return cursor

    def _pending_offset(self, cursor: NetworkCursor, record: bool = True) -> int | None:
        """Return the host offset the next allocation would use, skipping the ledger."""

        offset = max(cursor.offset, FIRST_HOST_OFFSET)
        last = last_host_offset(cursor.prefix_length)
        while offset <= last:
            address = cursor.address(offset)
            if address == cursor.reserved or not self._ledger.is_address_allocated(address):
                return offset
            offset += 1

        self._fail(
            ExhaustedSpaceError(
                f"No free host address left in {to_address(cursor.network)}/{cursor.prefix_length}"
            ),
            record,
        )
        return None

    def _next_free_network(self, cursor: NetworkCursor) -> int | None:
        step = network_step(cursor.prefix_length)
        candidate = cursor.network + step
        while candidate <= ALL_ONES:
            if not self._ledger.is_network_allocated(candidate, cursor.prefix_length):
                return candidate
            candidate += step

        self._fail(ExhaustedSpaceError(f"No free /{cursor.prefix_length} network left"))
        return None

    def init(self, net: AddressLike, mask: MaskLike, addr: AddressLike | None = None) -> None:
        """Seed the base network, mask and first address for a prefix length.

        The first ``next_address`` or ``get_address`` for ``mask`` returns
        ``addr`` placed in ``net``. Both the network and that address are
        claimed in the ledger right away.
        """

        prefix = prefix_length(mask)
        network = network_of(to_int(net), prefix)
        base = host_of(to_int(self.default_base_address if addr is None else addr), prefix)

        cursor = NetworkCursor(prefix_length=prefix, network=network, base=base, offset=base)
        self._ledger.add_network(network, prefix)

        first = cursor.address(base)
        if FIRST_HOST_OFFSET <= base <= last_host_offset(prefix) and self._ledger.add_address(first):
            cursor.reserved = first

        self._cursors[prefix] = cursor
        self._logger.debug(
            "Initialized network",
            network=str(to_address(network)),
            prefix_length=prefix,
            first_address=str(to_address(first)),
        )

    def next_network(self, mask: MaskLike) -> IPv4Address | None:
        """Advance to the next free network for ``mask`` and return it.

        Pre-increment: the returned value is the new current network. The
        host cursor goes back to the base offset given to ``init``.
        """

        prefix = prefix_length(mask)
        cursor = self._cursor(prefix)
        if cursor is None:
            return None

        network = self._next_free_network(cursor)
        if network is None:
            return None
        if not self._ledger.add_network(network, prefix):
            self._duplicate(DuplicateAllocationError(f"Network {to_address(network)}/{prefix} already allocated"))

        cursor.network = network
        cursor.offset = cursor.base
        cursor.reserved = None
        self._logger.debug("Allocated network", network=str(to_address(network)), prefix_length=prefix)
        return to_address(network)

    def get_network(self, mask: MaskLike) -> IPv4Address | None:
        cursor = self._cursor(prefix_length(mask), record=False)
        if cursor is None:
            return None
        return to_address(cursor.network)

    def init_address(self, addr: AddressLike, mask: MaskLike) -> None:
        """Set the host offset the next ``next_address`` for ``mask`` starts from.

        The current network of an initialized prefix length is left alone;
        an uninitialized one is seeded with the network ``addr`` belongs to.
        """

        prefix = prefix_length(mask)
        value = to_int(addr)
        offset = host_of(value, prefix)

        cursor = self._cursors.get(prefix)
        if cursor is None:
            self._cursors[prefix] = NetworkCursor(
                prefix_length=prefix,
                network=network_of(value, prefix),
                base=offset,
                offset=offset,
            )
        else:
            cursor.offset = offset
            if cursor.address(offset) != cursor.reserved:
                cursor.reserved = None
        self._logger.debug("Initialized address", address=str(to_address(value)), prefix_length=prefix)

    def next_address(self, mask: MaskLike) -> IPv4Address | None:
        """Return the pending address for ``mask`` and move past it (post-increment)."""

        prefix = prefix_length(mask)
        cursor = self._cursor(prefix)
        if cursor is None:
            return None

        offset = self._pending_offset(cursor)
        if offset is None:
            return None

        address = cursor.address(offset)
        if address == cursor.reserved:
            cursor.reserved = None
        elif not self._ledger.add_address(address):
            self._duplicate(DuplicateAllocationError(f"Address {to_address(address)} already allocated"))

        cursor.offset = offset + 1
        self._logger.debug("Allocated address", address=str(to_address(address)), prefix_length=prefix)
        return to_address(address)

    def get_address(self, mask: MaskLike) -> IPv4Address | None:
        cursor = self._cursor(prefix_length(mask), record=False)
        if cursor is None:
            return None
        offset = self._pending_offset(cursor, record=False)
        if offset is None:
            return None
        return to_address(cursor.address(offset))

    def reset(self) -> None:
        """Forget every cursor and ledger entry. The error mode is kept."""

        self._cursors.clear()
        self._ledger.clear()
        self.last_error = None
        self._logger.info("Address generator reset")

    def add_allocated(self, addr: AddressLike) -> bool:
        """Register an address issued elsewhere. False if it is already taken."""

        value = to_int(addr)
        added = self._ledger.add_address(value)
        if not added:
            self._logger.warning("Address already allocated", address=str(to_address(value)))
        return added

    def add_network_allocated(self, addr: AddressLike, mask: MaskLike) -> bool:
        """Register the network containing ``addr``. False if it is already taken."""

        prefix = prefix_length(mask)
        network = network_of(to_int(addr), prefix)
        added = self._ledger.add_network(network, prefix)
        if not added:
            self._logger.warning("Network already allocated", network=str(to_address(network)), prefix_length=prefix)
        return added

    def is_address_allocated(self, addr: AddressLike) -> bool:
        return self._ledger.is_address_allocated(to_int(addr))

    def is_network_allocated(self, addr: AddressLike, mask: MaskLike) -> bool:
        prefix = prefix_length(mask)
        return self._ledger.is_network_allocated(network_of(to_int(addr), prefix), prefix)

    def enable_test_mode(self) -> None:
        """Report exhaustion and uninitialized masks as ``None`` instead of raising."""

        self.error_mode = ErrorMode.TEST
        self._logger.info("Test mode enabled")
