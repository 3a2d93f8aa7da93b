# This file is part of netapply. See LICENSE file for license information.

import textwrap

from netapply.osys.network import Interface, Network
from netapply.subp import ProcessExecutionError

QUERIES = ("interfaces", "interface_by_index")


class FakeNetwork(Network):
    """In-memory adapter table.

    Every call is recorded in ``calls`` as a tuple of the method name and
    its arguments.  Methods listed in ``fail`` raise ProcessExecutionError.
    A rename becomes visible after ``rename_delay`` queries; with
    ``rename_delay=None`` it never does.
    """

    def __init__(self, interfaces=(), fail=(), rename_delay=0):
        self._interfaces = [
            Interface(i.name, i.mac, i.index) for i in interfaces
        ]
        self.fail = set(fail)
        self.rename_delay = rename_delay
        self.calls = []
        self._pending = {}

    @property
    def commands(self):
        return [call for call in self.calls if call[0] not in QUERIES]

    def _record(self, method, *args):
        self.calls.append((method,) + args)
        if method in self.fail:
            raise ProcessExecutionError(
                cmd=[method] + [str(a) for a in args], exit_code=1
            )

    def _tick(self):
        for index, pending in list(self._pending.items()):
            pending[1] -= 1
            if pending[1] <= 0:
                self._by_index(index).name = pending[0]
                del self._pending[index]

    def _by_index(self, index):
        return next((i for i in self._interfaces if i.index == index), None)

    def _snapshot(self, interface):
        return Interface(interface.name, interface.mac, interface.index)

    def interfaces(self):
        self._record("interfaces")
        self._tick()
        return [self._snapshot(i) for i in self._interfaces]

    def interface_by_index(self, index):
        self._record("interface_by_index", index)
        self._tick()
        interface = self._by_index(index)
        return self._snapshot(interface) if interface else None

    def rename_interface(self, name, new_name):
        self._record("rename_interface", name, new_name)
        interface = next(i for i in self._interfaces if i.name == name)
        if self.rename_delay == 0:
            interface.name = new_name
        elif self.rename_delay is not None:
            self._pending[interface.index] = [new_name, self.rename_delay]

    def set_ipv4_dhcp(self, name):
        self._record("set_ipv4_dhcp", name)

    def reset_ipv6(self, name):
        self._record("reset_ipv6", name)

    def add_ipv4_address(self, name, address, netmask):
        self._record("add_ipv4_address", name, address, netmask)

    def add_ipv6_address(self, name, address, prefix):
        self._record("add_ipv6_address", name, address, prefix)

    def add_route(self, name, family, destination, metric=None, gateway=None):
        self._record("add_route", name, family, destination, metric, gateway)

    def set_dns_server(self, name, family, address):
        self._record("set_dns_server", name, family, address)

    def add_dns_server(self, name, family, address, index):
        self._record("add_dns_server", name, family, address, index)

    def set_mtu(self, name, mtu):
        self._record("set_mtu", name, mtu)


def dedent(text):
    return textwrap.dedent(text).lstrip("\n")


NETWORK_CONFIG = dedent(
    """
    # network-config written by the provisioning service
    version: 2
    ethernets:
      eth0:
        match:
          macaddress: "AA-BB-CC-DD-EE-FF"
        set-name: Ethernet0
        addresses:
          - 10.0.0.5/24
          - 2001:db8::1/64
        routes:
          - to: 0.0.0.0/0
            via: 10.0.0.1
            metric: 100
          - to: ::/0
            via: ::0
            metric: 200
        nameservers:
          addresses:
            - 8.8.8.8
            - 1.1.1.1
            - 2001:4860:4860::8888
        mtu: 1450

      eth1:
        match:
          macaddress: 52:54:00:12:34:ab
        set-name: Ethernet1
        addresses: [192.168.10.2/24]
    """
)
