"""Utils package exports."""

from addrgen.utils.bits import network_of, prefix_length, to_address, to_int
from addrgen.utils.logger import setup_logging

__all__ = ["network_of", "prefix_length", "setup_logging", "to_address", "to_int"]
