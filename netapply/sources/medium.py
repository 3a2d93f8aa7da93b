# This file is part of netapply. See LICENSE file for license information.
"""Locate the network-config document on its configuration volume."""

import logging
import os
from typing import Iterable

from netapply import settings
from netapply.exceptions import ConfigNotFoundError, NoMediumError

LOG = logging.getLogger(__name__)


def read_network_config(path: str) -> str:
    """Return the text of the document at ``path``.

    A byte order mark, as left by some Windows editors, is dropped.
    """
    try:
        with open(path, encoding="utf-8-sig") as stream:
            return stream.read()
    except OSError as e:
        raise ConfigNotFoundError(
            "Unable to read network config '%s': %s" % (path, e)
        ) from e


def find_config_volume(
    filesystem, labels: Iterable[str] = tuple(settings.CONFIG_LABELS)
) -> str:
    """Return the root of the first volume carrying one of ``labels``."""
    labels = list(labels)
    for label in labels:
        paths = filesystem.volumes_by_label(label)
        if paths:
            LOG.debug("Found volume(s) %s with label %s", paths, label)
            return paths[0]
    raise NoMediumError(
        "No volume found with label(s): %s" % ", ".join(labels)
    )


def fetch_network_config(
    filesystem,
    labels: Iterable[str] = tuple(settings.CONFIG_LABELS),
    filename: str = settings.NETWORK_CONFIG_FILENAME,
) -> str:
    root = find_config_volume(filesystem, labels)
    path = os.path.join(root, filename)
    if not os.path.isfile(path):
        raise ConfigNotFoundError(
            "Volume %s has no %s file" % (root, filename)
        )
    LOG.info("Reading network config from %s", path)
    return read_network_config(path)
