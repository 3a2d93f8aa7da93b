# This file is part of netapply. See LICENSE file for license information.
"""Typed view over a parsed network-config document."""

import logging
from typing import Dict, NamedTuple, Optional, Tuple

from netapply import parser
from netapply.exceptions import NetworkConfigError

LOG = logging.getLogger(__name__)


class RouteSpec(NamedTuple):
    to: str
    via: Optional[str]
    metric: Optional[int]


class InterfaceEntry(NamedTuple):
    key: str
    macaddress: str
    set_name: str
    addresses: Tuple[str, ...] = ()
    routes: Tuple[RouteSpec, ...] = ()
    nameservers: Tuple[str, ...] = ()
    mtu: Optional[int] = None


class NetworkConfig:
    """Interface entries keyed by their document key, in document order."""

    def __init__(self, ethernets: Dict[str, InterfaceEntry]):
        self.ethernets = ethernets

    def __iter__(self):
        return iter(self.ethernets.values())

    def __len__(self):
        return len(self.ethernets)

    def as_dict(self) -> dict:
        """Plain representation, used by ``netapply show``."""
        ethernets = {}
        for entry in self:
            cfg: dict = {
                "match": {"macaddress": entry.macaddress},
                "set-name": entry.set_name,
            }
            if entry.addresses:
                cfg["addresses"] = list(entry.addresses)
            if entry.routes:
                cfg["routes"] = [
                    {k: v for k, v in r._asdict().items() if v is not None}
                    for r in entry.routes
                ]
            if entry.nameservers:
                cfg["nameservers"] = {"addresses": list(entry.nameservers)}
            if entry.mtu is not None:
                cfg["mtu"] = entry.mtu
            ethernets[entry.key] = cfg
        return {"ethernets": ethernets}


def _scalar(node) -> Optional[str]:
    """Value of a scalar node; anything else counts as absent."""
    if isinstance(node, parser.Scalar):
        return node.value
    return None


def _mapping(node) -> parser.Mapping:
    if isinstance(node, parser.Mapping):
        return node
    return parser.Mapping()


def _scalars(node) -> Tuple[str, ...]:
    if isinstance(node, parser.Sequence):
        return tuple(item.value for item in node if _scalar(item))
    value = _scalar(node)
    return (value,) if value else ()


def _int(node, what: str, where: str) -> Optional[int]:
    value = _scalar(node)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        LOG.warning("Ignoring invalid %s '%s' in %s", what, value, where)
        return None


def _routes(node, where: str) -> Tuple[RouteSpec, ...]:
    if not isinstance(node, parser.Sequence):
        return ()
    routes = []
    for item in node:
        if not isinstance(item, parser.Mapping):
            LOG.warning("Ignoring malformed route %r in %s", item, where)
            continue
        to = _scalar(item.get("to"))
        if not to:
            LOG.warning("Ignoring route without destination in %s", where)
            continue
        routes.append(
            RouteSpec(
                to=to,
                via=_scalar(item.get("via")),
                metric=_int(item.get("metric"), "route metric", where),
            )
        )
    return tuple(routes)


def read_interface_entry(key: str, node) -> InterfaceEntry:
    entry = _mapping(node)
    return InterfaceEntry(
        key=key,
        macaddress=_scalar(_mapping(entry.get("match")).get("macaddress"))
        or "",
        set_name=_scalar(entry.get("set-name")) or "",
        addresses=_scalars(entry.get("addresses")),
        routes=_routes(entry.get("routes"), key),
        nameservers=_scalars(
            _mapping(entry.get("nameservers")).get("addresses")
        ),
        mtu=_int(entry.get("mtu"), "mtu", key),
    )


def read_network_config(tree) -> NetworkConfig:
    """Build a :class:`NetworkConfig` from a parsed document.

    A top level ``network:`` key is unwrapped first, so both the bare
    ``ethernets:`` form and the ``network: {version: 2, ...}`` form are
    accepted.
    """
    doc = _mapping(tree)
    if "network" in doc:
        doc = _mapping(doc["network"])
    ethernets = doc.get("ethernets")
    if not isinstance(ethernets, parser.Mapping):
        raise NetworkConfigError(
            "Network config has no 'ethernets' section"
        )
    return NetworkConfig(
        ethernets={
            key: read_interface_entry(key, node)
            for key, node in ethernets.items()
        }
    )


def load_network_config(text: str) -> NetworkConfig:
    return read_network_config(parser.parse(text))
