from addrgen.services.ledger import AllocationLedger
from addrgen.utils.bits import to_int


def test_add_address_rejects_duplicate() -> None:
    ledger = AllocationLedger()
    addr = to_int("10.1.1.1")

    assert ledger.add_address(addr) is True
    assert ledger.add_address(addr) is False
    assert ledger.is_address_allocated(addr)
    assert not ledger.is_address_allocated(addr + 1)
    assert ledger.address_count == 1


def test_network_marks_are_per_prefix_length() -> None:
    ledger = AllocationLedger()
    network = to_int("10.1.1.0")

    assert ledger.add_network(network, 24)
    assert ledger.is_network_allocated(network, 24)
    assert not ledger.is_network_allocated(network, 25)
    assert not ledger.is_network_allocated(to_int("10.1.0.0"), 16)
    assert ledger.add_network(network, 25)
    assert not ledger.add_network(network, 24)
    assert ledger.network_count == 2


def test_address_and_network_marks_do_not_mix() -> None:
    ledger = AllocationLedger()
    network = to_int("10.1.1.0")

    ledger.add_address(network)
    assert not ledger.is_network_allocated(network, 24)
    assert not ledger.is_network_allocated(network, 32)

    ledger.add_network(to_int("10.2.0.0"), 32)
    assert not ledger.is_address_allocated(to_int("10.2.0.0"))


def test_zero_length_prefix_is_the_root() -> None:
    ledger = AllocationLedger()

    assert not ledger.is_network_allocated(0, 0)
    assert ledger.add_network(0, 0)
    assert ledger.is_network_allocated(0, 0)


def test_clear_empties_everything() -> None:
    ledger = AllocationLedger()
    ledger.add_address(to_int("10.0.0.1"))
    ledger.add_network(to_int("10.0.0.0"), 8)

    ledger.clear()

    assert not ledger.is_address_allocated(to_int("10.0.0.1"))
    assert not ledger.is_network_allocated(to_int("10.0.0.0"), 8)
    assert ledger.address_count == 0
    assert ledger.network_count == 0
