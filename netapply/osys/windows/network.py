# This file is part of netapply. See LICENSE file for license information.

import logging
from typing import List, Optional

import wmi

from netapply import subp
from netapply.osys import network
from netapply.osys.windows import general

LOG = logging.getLogger(__name__)

_STANDARD_CIMV2 = "//./root/StandardCimv2"
_ADAPTER_QUERY = "SELECT * FROM MSFT_NetAdapter"
_IP_INTERFACE_QUERY = (
    "SELECT * FROM MSFT_NetIPInterface"
    " WHERE InterfaceAlias = '%s' AND AddressFamily = %d"
)
_AF_INET = 2
_DHCP_ENABLED = 1
# Smallest link mtu ipv6 accepts
IPV6_MIN_MTU = 1280


def _netsh(*args) -> subp.SubpResult:
    netsh_path = general.General().system_tool("netsh.exe")
    return subp.subp([netsh_path, *args])


def _powershell(command: str) -> subp.SubpResult:
    powershell_path = general.General().system_tool(
        "WindowsPowerShell\\v1.0\\powershell.exe"
    )
    return subp.subp(
        [powershell_path, "-NoProfile", "-NonInteractive", "-Command", command]
    )


def _ps_quote(value: str) -> str:
    return "'%s'" % value.replace("'", "''")


def _to_interface(adapter) -> network.Interface:
    return network.Interface(
        name=adapter.Name, mac=adapter.MacAddress, index=adapter.InterfaceIndex
    )


class Network(network.Network):
    """Network namespace object tailored for the Windows platform.

    Adapters are read through WMI, changes are made with netsh.
    """

    @staticmethod
    def _query(wql: str):
        conn = wmi.WMI(moniker=_STANDARD_CIMV2)
        return conn.query(wql)

    def interfaces(self) -> List[network.Interface]:
        """Get a list of available interfaces."""
        return [
            _to_interface(adapter)
            for adapter in self._query(_ADAPTER_QUERY)
            if adapter.MacAddress
        ]

    def interface_by_index(self, index) -> Optional[network.Interface]:
        adapters = self._query(
            "%s WHERE InterfaceIndex = %d" % (_ADAPTER_QUERY, int(index))
        )
        if not adapters:
            return None
        return _to_interface(adapters[0])

    def rename_interface(self, name, new_name):
        _netsh("interface", "set", "interface", name, "newname=%s" % new_name)

    def _ipv4_dhcp_enabled(self, name) -> bool:
        alias = name.replace("\\", "\\\\").replace("'", "\\'")
        ip_interfaces = self._query(_IP_INTERFACE_QUERY % (alias, _AF_INET))
        return bool(ip_interfaces) and ip_interfaces[0].Dhcp == _DHCP_ENABLED

    def set_ipv4_dhcp(self, name):
        # netsh fails when DHCP is enabled already
        if self._ipv4_dhcp_enabled(name):
            LOG.debug("DHCP is already enabled for ipv4 on %s", name)
            return
        _netsh("interface", "ipv4", "set", "address", name, "source=dhcp")

    def reset_ipv6(self, name):
        # netsh only knows a global ipv6 reset, which would also wipe the
        # interfaces configured before this one.
        alias = _ps_quote(name)
        _powershell(
            "Get-NetIPAddress -InterfaceAlias %(alias)s -AddressFamily IPv6"
            " -PrefixOrigin Manual -ErrorAction SilentlyContinue"
            " | Remove-NetIPAddress -Confirm:$false;"
            " Set-NetIPInterface -InterfaceAlias %(alias)s"
            " -AddressFamily IPv6 -Dhcp Enabled -RouterDiscovery Enabled"
            % {"alias": alias}
        )

    def add_ipv4_address(self, name, address, netmask):
        _netsh(
            "interface",
            "ipv4",
            "add",
            "address",
            name,
            "address=%s" % address,
            "mask=%s" % netmask,
        )

    def add_ipv6_address(self, name, address, prefix):
        _netsh(
            "interface",
            "ipv6",
            "add",
            "address",
            name,
            "address=%s/%s" % (address, prefix),
        )

    def add_route(
        self, name, family, destination, metric=None, gateway=None
    ):
        args = ["interface", family, "add", "route", destination, name]
        if gateway:
            args.append("nexthop=%s" % gateway)
        if metric is not None:
            args.append("metric=%s" % metric)
        _netsh(*args)

    def set_dns_server(self, name, family, address):
        _netsh(
            "interface",
            family,
            "set",
            "dnsservers",
            name,
            "source=static",
            "address=%s" % address,
            "register=primary",
            "validate=no",
        )

    def add_dns_server(self, name, family, address, index):
        _netsh(
            "interface",
            family,
            "add",
            "dnsservers",
            name,
            "address=%s" % address,
            "index=%s" % index,
            "validate=no",
        )

    def set_mtu(self, name, mtu):
        families = [network.IPV4]
        if int(mtu) >= IPV6_MIN_MTU:
            families.append(network.IPV6)
        else:
            LOG.warning(
                "Not setting ipv6 mtu %s on %s, below the minimum of %d",
                mtu,
                name,
                IPV6_MIN_MTU,
            )
        for family in families:
            _netsh(
                "interface",
                family,
                "set",
                "subinterface",
                name,
                "mtu=%s" % mtu,
                "store=persistent",
            )
