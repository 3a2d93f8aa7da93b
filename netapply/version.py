# This file is part of netapply. See LICENSE file for license information.

__VERSION__ = "0.3.0"


def version_string():
    """Extract a version string from netapply."""
    return __VERSION__
