# This file is part of netapply. See LICENSE file for license information.

import logging
from typing import List

import wmi

LOG = logging.getLogger(__name__)


class Filesystem:
    """Filesystem namespace object tailored for the Windows platform."""

    @staticmethod
    def volumes_by_label(label: str) -> List[str]:
        """Root paths of the mounted volumes carrying ``label``.

        Labels are compared case-insensitively, the way Windows does.
        Volumes without a mount point are skipped.
        """
        conn = wmi.WMI(moniker="//./root/cimv2")
        paths = []
        for volume in conn.query("SELECT * FROM Win32_Volume"):
            if (volume.Label or "").lower() != label.lower():
                continue
            if not volume.Name:
                LOG.debug(
                    "Volume %s is labeled %s but not mounted",
                    volume.DeviceID,
                    label,
                )
                continue
            paths.append(volume.Name)
        return paths
