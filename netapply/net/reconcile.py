# This file is part of netapply. See LICENSE file for license information.
"""Bring a renamed interface in line with its network config entry.

Every step is a separate command against the OS.  A failing step is logged
and counted; the following steps still run, and nothing is rolled back.
"""

import logging
from typing import NamedTuple

from netapply import net, settings, subp
from netapply.net.network_config import InterfaceEntry, RouteSpec
from netapply.osys.network import IPV4, IPV6, Network

LOG = logging.getLogger(__name__)

# Indexes handed to the OS for secondary DNS servers start after the primary
SECONDARY_DNS_START_INDEX = 2


class ReconcileResult(NamedTuple):
    key: str
    name: str
    steps: int
    failed: int

    @property
    def ok(self) -> bool:
        return not self.failed


class Reconciler:
    def __init__(self, network: Network):
        self.network = network

    def reconcile(self, entry: InterfaceEntry, name: str) -> ReconcileResult:
        """Apply addresses, routes, DNS servers and mtu of ``entry`` to the
        interface called ``name``.

        The interface is first reset to DHCP for ipv4 and to defaults for
        ipv6, so the outcome does not depend on earlier runs.  DNS servers
        of a family without any server in ``entry`` are left alone.
        """
        run = _StepRunner(entry.key, name)

        run("reset ipv4 to dhcp", self.network.set_ipv4_dhcp, name)
        run("reset ipv6", self.network.reset_ipv6, name)
        for address in entry.addresses:
            run("add address %s" % address, self._add_address, name, address)
        for route in entry.routes:
            run("add route %s" % route.to, self._add_route, name, route)
        self._set_dns(run, name, entry.nameservers)
        if entry.mtu is not None:
            run(
                "set mtu %s" % entry.mtu,
                self.network.set_mtu,
                name,
                entry.mtu,
            )

        return ReconcileResult(entry.key, name, run.steps, run.failed)

    def _add_address(self, name: str, address: str):
        host, _, prefix = address.partition("/")
        if net.is_ipv6_address(host):
            self.network.add_ipv6_address(name, host, int(prefix or 128))
        else:
            netmask = net.net_prefix_to_ipv4_mask(prefix or 32)
            self.network.add_ipv4_address(name, host, netmask)

    def _add_route(self, name: str, route: RouteSpec):
        if net.is_ipv6_address(route.to):
            family, no_gateway = IPV6, settings.IPV6_NO_GATEWAY
        else:
            family, no_gateway = IPV4, settings.IPV4_NO_GATEWAY
        gateway = route.via
        if not gateway or gateway == no_gateway:
            gateway = None
        self.network.add_route(
            name, family, route.to, metric=route.metric, gateway=gateway
        )

    def _set_dns(self, run, name, nameservers):
        by_family = {IPV4: [], IPV6: []}
        for server in nameservers:
            family = IPV6 if net.is_ipv6_address(server) else IPV4
            by_family[family].append(server)

        for family in (IPV4, IPV6):
            servers = by_family[family]
            if not servers:
                continue
            ok = run(
                "set %s dns server %s" % (family, servers[0]),
                self.network.set_dns_server,
                name,
                family,
                servers[0],
            )
            for index, server in enumerate(
                servers[1:], start=SECONDARY_DNS_START_INDEX
            ):
                if not ok:
                    LOG.warning(
                        "Skipping %s dns server %s after earlier failure",
                        family,
                        server,
                    )
                    continue
                ok = run(
                    "add %s dns server %s" % (family, server),
                    self.network.add_dns_server,
                    name,
                    family,
                    server,
                    index,
                )


class _StepRunner:
    """Run reconcile steps, logging before and after each of them."""

    def __init__(self, key: str, name: str):
        self.key = key
        self.name = name
        self.steps = 0
        self.failed = 0

    def __call__(self, description, func, *args):
        self.steps += 1
        LOG.info("[%s] %s: %s", self.key, self.name, description)
        try:
            func(*args)
        except (subp.ProcessExecutionError, ValueError) as e:
            self.failed += 1
            LOG.error(
                "[%s] %s: failed to %s: %s",
                self.key,
                self.name,
                description,
                e,
            )
            return False
        LOG.info("[%s] %s: done %s", self.key, self.name, description)
        return True
