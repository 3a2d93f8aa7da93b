# This file is part of netapply. See LICENSE file for license information.

import abc
from typing import List, Optional

__all__ = (
    "IPV4",
    "IPV6",
    "Interface",
    "Network",
)

IPV4 = "ipv4"
IPV6 = "ipv6"


class Interface:
    """Snapshot of a live network adapter.

    ``index`` is assigned by the OS and survives a rename; ``name`` and
    ``mac`` are whatever the OS reported when the snapshot was taken.
    """

    def __init__(self, name, mac, index=None):
        self.name = name
        self.mac = mac
        self.index = index

    def __eq__(self, other):
        return (
            isinstance(other, Interface)
            and self.mac == other.mac
            and self.name == other.name
            and self.index == other.index
        )

    def __repr__(self):
        return "Interface(name=%r, mac=%r, index=%r)" % (
            self.name,
            self.mac,
            self.index,
        )


class Network(metaclass=abc.ABCMeta):
    """The live adapter table of the underlying platform.

    Queries always go to the OS: nothing is cached between calls.  Every
    command raises :class:`netapply.subp.ProcessExecutionError` when the OS
    reports a failure.
    """

    @abc.abstractmethod
    def interfaces(self) -> List[Interface]:
        """Get a list of available interfaces."""

    @abc.abstractmethod
    def interface_by_index(self, index) -> Optional[Interface]:
        """Look up an interface by its OS index, None once it is gone."""

    @abc.abstractmethod
    def rename_interface(self, name: str, new_name: str):
        """Request the OS to rename an interface."""

    @abc.abstractmethod
    def set_ipv4_dhcp(self, name: str):
        """Switch ipv4 addressing of the interface back to DHCP."""

    @abc.abstractmethod
    def reset_ipv6(self, name: str):
        """Reset the ipv6 stack to its defaults."""

    @abc.abstractmethod
    def add_ipv4_address(self, name: str, address: str, netmask: str):
        pass

    @abc.abstractmethod
    def add_ipv6_address(self, name: str, address: str, prefix: int):
        pass

    @abc.abstractmethod
    def add_route(
        self,
        name: str,
        family: str,
        destination: str,
        metric: Optional[int] = None,
        gateway: Optional[str] = None,
    ):
        """Add a route; without a gateway the route is on-link."""

    @abc.abstractmethod
    def set_dns_server(self, name: str, family: str, address: str):
        """Make address the only, primary, static DNS server."""

    @abc.abstractmethod
    def add_dns_server(self, name: str, family: str, address: str, index):
        """Add a secondary DNS server at the given position."""

    @abc.abstractmethod
    def set_mtu(self, name: str, mtu: int):
        """Persistently change the mtu of the interface."""
