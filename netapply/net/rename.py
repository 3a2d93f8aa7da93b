# This file is part of netapply. See LICENSE file for license information.
"""Match interface entries to live adapters and rename them.

Each entry walks through::

    SEEKING -> FOUND -> ALREADY_NAMED
                     -> RENAMING -> VERIFYING -> VERIFIED
                                             -> TIMED_OUT
            -> NOT_FOUND

A rename is only trusted once the OS reports the adapter, looked up by its
index, under the new name.
"""

import logging
import time
from enum import Enum
from typing import Callable, Iterable, List, NamedTuple, Optional

from netapply import net, settings, subp
from netapply.exceptions import RenameError
from netapply.net.network_config import InterfaceEntry
from netapply.osys.network import Interface, Network

LOG = logging.getLogger(__name__)


class RenameState(Enum):
    SEEKING = "seeking"
    FOUND = "found"
    ALREADY_NAMED = "already-named"
    RENAMING = "renaming"
    VERIFYING = "verifying"
    VERIFIED = "verified"
    TIMED_OUT = "timed-out"
    NOT_FOUND = "not-found"

    def __str__(self):  # pylint: disable=invalid-str-returned
        return self.value


# Entries in these states carry an interface known by its final name.
READY_STATES = (RenameState.ALREADY_NAMED, RenameState.VERIFIED)


class RenameResult(NamedTuple):
    entry: InterfaceEntry
    state: RenameState
    interface: Optional[Interface] = None

    @property
    def ready(self) -> bool:
        return self.state in READY_STATES


class InterfaceRenamer:
    """Rename adapters after the entries of a network config.

    ``attempts`` and ``interval`` bound the verification of a rename: the
    adapter is looked up at most ``attempts`` times, ``interval`` seconds
    apart.
    """

    def __init__(
        self,
        network: Network,
        attempts: int = settings.RENAME_POLL_ATTEMPTS,
        interval: float = settings.RENAME_POLL_INTERVAL,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.network = network
        self.attempts = attempts
        self.interval = interval
        self._sleep = sleep or time.sleep

    def rename_all(
        self, entries: Iterable[InterfaceEntry]
    ) -> List[RenameResult]:
        """Rename every entry, in order.

        :raises RenameError: when a rename request cannot be issued; no
            further entries are processed.
        """
        return [self.rename(entry) for entry in entries]

    def rename(self, entry: InterfaceEntry) -> RenameResult:
        state = RenameState.SEEKING
        LOG.debug("[%s] %s mac %s", entry.key, state, entry.macaddress)
        interface = net.find_interface_by_mac(
            self.network.interfaces(), entry.macaddress
        )
        if interface is None:
            LOG.error(
                "[%s] No interface found with mac '%s'",
                entry.key,
                entry.macaddress,
            )
            return RenameResult(entry, RenameState.NOT_FOUND)

        state = RenameState.FOUND
        LOG.debug(
            "[%s] %s interface '%s' (index %s)",
            entry.key,
            state,
            interface.name,
            interface.index,
        )
        if not entry.set_name:
            LOG.warning(
                "[%s] No set-name given, keeping interface name '%s'",
                entry.key,
                interface.name,
            )
            return RenameResult(entry, RenameState.ALREADY_NAMED, interface)
        if interface.name == entry.set_name:
            LOG.info(
                "[%s] Interface '%s' already has the expected name",
                entry.key,
                interface.name,
            )
            return RenameResult(entry, RenameState.ALREADY_NAMED, interface)

        LOG.info(
            "[%s] Renaming interface '%s' to '%s'",
            entry.key,
            interface.name,
            entry.set_name,
        )
        try:
            self.network.rename_interface(interface.name, entry.set_name)
        except subp.ProcessExecutionError as e:
            raise RenameError(interface.name, entry.set_name, e) from e

        return self._verify(entry, interface)

    def _verify(self, entry: InterfaceEntry, interface: Interface):
        for attempt in range(1, self.attempts + 1):
            current = self.network.interface_by_index(interface.index)
            if current is not None and current.name == entry.set_name:
                LOG.info(
                    "[%s] Renamed interface '%s' to '%s'",
                    entry.key,
                    interface.name,
                    entry.set_name,
                )
                return RenameResult(entry, RenameState.VERIFIED, current)
            LOG.debug(
                "[%s] %s rename of index %s, attempt %d/%d",
                entry.key,
                RenameState.VERIFYING,
                interface.index,
                attempt,
                self.attempts,
            )
            if attempt < self.attempts:
                self._sleep(self.interval)

        LOG.error(
            "[%s] Interface '%s' did not show up as '%s' after %d attempts",
            entry.key,
            interface.name,
            entry.set_name,
            self.attempts,
        )
        return RenameResult(entry, RenameState.TIMED_OUT, interface)
