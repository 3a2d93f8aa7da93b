# This file is part of netapply. See LICENSE file for license information.

import logging
from typing import Iterable, Optional

LOG = logging.getLogger(__name__)


def normalize_mac(mac: Optional[str]) -> str:
    """Return a lower case, colon separated form of a hardware address.

    Windows reports addresses as ``AA-BB-CC-DD-EE-FF``, Cisco style
    documents use ``aabb.ccdd.eeff``; all separators become ``:``.
    An empty or missing address normalizes to the empty string, which is
    never a match.
    """
    if not mac:
        return ""
    return mac.lower().replace("-", ":").replace(".", ":")


def net_prefix_to_ipv4_mask(prefix) -> str:
    """Convert a network prefix to an ipv4 netmask.

        24 -> "255.255.255.0"
    Also supports input as a string."""
    prefix = int(prefix)
    if not 0 <= prefix <= 32:
        raise ValueError("Invalid ipv4 network prefix '%s'" % prefix)
    mask = (0xFFFFFFFF << (32 - prefix)) & 0xFFFFFFFF
    return ".".join(str((mask >> shift) & 0xFF) for shift in (24, 16, 8, 0))


def is_ipv6_address(address: str) -> bool:
    """Addresses and prefixes are told apart by the ':' separator only."""
    return ":" in address


def find_interface_by_mac(interfaces: Iterable, mac: Optional[str]):
    """Return the first interface whose normalized mac equals ``mac``.

    When several interfaces share the address (teamed or virtual adapters)
    the first one reported wins and the others are logged.
    """
    wanted = normalize_mac(mac)
    if not wanted:
        return None
    matches = [i for i in interfaces if normalize_mac(i.mac) == wanted]
    if not matches:
        return None
    if len(matches) > 1:
        LOG.warning(
            "Multiple interfaces match mac %s: %s. Using %s",
            wanted,
            ", ".join(i.name for i in matches),
            matches[0].name,
        )
    return matches[0]
