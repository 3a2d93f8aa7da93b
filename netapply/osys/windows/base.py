# This file is part of netapply. See LICENSE file for license information.

from netapply.osys import base
from netapply.osys.windows import filesystem as filesystem_module
from netapply.osys.windows import network as network_module

__all__ = ("OSUtils",)


class OSUtils(base.OSUtils):
    """The OS utils namespace for the Windows platform."""

    name = "windows"

    network = network_module.Network()
    filesystem = filesystem_module.Filesystem()
