# This file is part of netapply. See LICENSE file for license information.

import abc
import importlib
import platform

from netapply.exceptions import UnsupportedPlatformError

__all__ = (
    "get_osutils",
    "OSUtils",
)


def get_osutils():
    """Obtain the OS utils object for the underlying platform."""
    name = platform.system().lower()
    location = "netapply.osys.{0}.base".format(name)
    try:
        module = importlib.import_module(location)
    except ImportError as e:
        raise UnsupportedPlatformError(
            "No OS support available for platform '%s': %s" % (name, e)
        ) from e
    return module.OSUtils()


class OSUtils(metaclass=abc.ABCMeta):
    """Base class for an OS utils namespace.

    Each supported platform provides a subclass giving access to its
    adapter table and to its mounted volumes.
    """

    name = None

    @property
    @abc.abstractmethod
    def network(self):
        """Get the network object for the underlying platform."""

    @property
    @abc.abstractmethod
    def filesystem(self):
        """Get the filesystem object for the underlying platform."""
