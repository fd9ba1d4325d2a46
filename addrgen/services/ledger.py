"""Duplicate-detection store for allocated addresses and networks."""

from __future__ import annotations

from addrgen.utils.bits import ADDRESS_BITS


class _Node:
    __slots__ = ("children", "network", "address")

    def __init__(self) -> None:
        self.children: list[_Node | None] = [None, None]
        self.network = False
        self.address = False


class AllocationLedger:
    """Binary trie over the 32 address bits.

    A node at depth ``n`` stands for the prefix formed by the first ``n``
    bits of the path leading to it. Network marks live on the node of their
    prefix length and address marks on depth-32 leaves, so ``10.1.1.0/24``,
    ``10.1.1.0/25`` and the host ``10.1.1.0`` are three separate entries.
    """

    def __init__(self) -> None:
        self._root = _Node()
        self._addresses = 0
        self._networks = 0

    @property
    def address_count(self) -> int:
        return self._addresses

    @property
    def network_count(self) -> int:
        return self._networks

    def _find(self, value: int, depth: int) -> _Node | None:
        node: _Node | None = self._root
        for bit in range(ADDRESS_BITS - 1, ADDRESS_BITS - 1 - depth, -1):
            node = node.children[(value >> bit) & 1]
            if node is None:
                return None
        return node

    def _insert(self, value: int, depth: int) -> _Node:
        node = self._root
        for bit in range(ADDRESS_BITS - 1, ADDRESS_BITS - 1 - depth, -1):
            index = (value >> bit) & 1
            child = node.children[index]
            if child is None:
                child = _Node()
                node.children[index] = child
            node = child
        return node

    def add_address(self, addr: int) -> bool:
        """Record a single address. Returns False if it was already present."""

        node = self._insert(addr, ADDRESS_BITS)
        if node.address:
            return False
        node.address = True
        self._addresses += 1
        return True

    def is_address_allocated(self, addr: int) -> bool:
        node = self._find(addr, ADDRESS_BITS)
        return node is not None and node.address

    def add_network(self, network: int, prefix: int) -> bool:
        """Record a network. ``network`` must already have its host bits cleared."""

        node = self._insert(network, prefix)
        if node.network:
            return False
        node.network = True
        self._networks += 1
        return True

    def is_network_allocated(self, network: int, prefix: int) -> bool:
        node = self._find(network, prefix)
        return node is not None and node.network

    def clear(self) -> None:
        self._root = _Node()
        self._addresses = 0
        self._networks = 0
