# This file is part of netapply. See LICENSE file for license information.

import logging
from typing import List, NamedTuple

from netapply import settings
from netapply.net.network_config import NetworkConfig
from netapply.net.reconcile import Reconciler, ReconcileResult
from netapply.net.rename import InterfaceRenamer, RenameResult
from netapply.osys.network import Network

LOG = logging.getLogger(__name__)


class ApplyReport(NamedTuple):
    renames: List[RenameResult]
    reconciled: List[ReconcileResult]

    @property
    def failures(self) -> int:
        return sum(1 for r in self.renames if not r.ready) + sum(
            r.failed for r in self.reconciled
        )

    def summary(self) -> str:
        return "%d of %d interfaces renamed, %d reconciled, %d failures" % (
            sum(1 for r in self.renames if r.ready),
            len(self.renames),
            len(self.reconciled),
            self.failures,
        )


def apply_network_config(
    config: NetworkConfig,
    network: Network,
    rename_attempts: int = settings.RENAME_POLL_ATTEMPTS,
    rename_interval: float = settings.RENAME_POLL_INTERVAL,
) -> ApplyReport:
    """Rename every adapter of ``config``, then reconcile their settings.

    All renames happen before any address is touched, since the later steps
    refer to interfaces by their final name.  Entries whose adapter was not
    found or whose rename could not be verified are not reconciled.

    :raises RenameError: when a rename request fails; nothing is
        reconciled in that case.
    """
    renamer = InterfaceRenamer(
        network, attempts=rename_attempts, interval=rename_interval
    )
    LOG.info("Renaming %d interfaces", len(config))
    renames = renamer.rename_all(config)

    reconciler = Reconciler(network)
    reconciled = []
    for result in renames:
        if not result.ready:
            LOG.warning(
                "[%s] Skipping configuration, interface is %s",
                result.entry.key,
                result.state,
            )
            continue
        reconciled.append(
            reconciler.reconcile(result.entry, result.interface.name)
        )
    return ApplyReport(renames, reconciled)
