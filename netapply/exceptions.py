# This file is part of netapply. See LICENSE file for license information.


class NetapplyError(Exception):
    pass


class NoMediumError(NetapplyError):
    """No volume carrying one of the expected labels was found."""


class ConfigNotFoundError(NetapplyError):
    """The network-config document could not be read."""


class NetworkConfigError(NetapplyError):
    """The document does not describe any ethernets."""


class UnsupportedPlatformError(NetapplyError):
    pass


class RenameError(NetapplyError):
    """A rename request could not be issued.

    The adapter table is left in an unknown state, so the remainder of the
    renaming phase is abandoned.
    """

    def __init__(self, name, new_name, cause=None):
        self.name = name
        self.new_name = new_name
        self.cause = cause
        super(RenameError, self).__init__(
            "Failed to rename interface '%s' to '%s': %s"
            % (name, new_name, cause)
        )
