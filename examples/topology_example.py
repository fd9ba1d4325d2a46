"""Example: number the point-to-point links and LAN hosts of a small topology."""

from addrgen import generator
from addrgen.config import get_settings
from addrgen.utils.logger import setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.log_file_path)

    generator.init("10.1.0.0", "/30")
    links = []
    for _ in range(4):
        left = generator.next_address("/30")
        right = generator.next_address("/30")
        links.append((generator.get_network("/30"), left, right))
        generator.next_network("/30")

    generator.init("192.168.10.0", "255.255.255.0", "0.0.0.10")
    hosts = [generator.next_address("255.255.255.0") for _ in range(5)]

    for network, left, right in links:
        print(f"link {network}/30: {left} <-> {right}")
    print("lan 192.168.10.0/24:", ", ".join(str(host) for host in hosts))


if __name__ == "__main__":
    main()
