# This file is part of netapply. See LICENSE file for license information.

import os
import struct


class General:
    """General utilities namespace for Windows."""

    @staticmethod
    def _is_64bit_arch():
        # interpreter's bits
        return struct.calcsize("P") == 8

    @staticmethod
    def system32_dir():
        return os.path.expandvars("%windir%\\system32")

    @staticmethod
    def sysnative_dir():
        return os.path.expandvars("%windir%\\sysnative")

    @staticmethod
    def syswow64_dir():
        return os.path.expandvars("%windir%\\syswow64")

    def system_dir(self, sysnative=True):
        """Directory holding the native system tools.

        A 32 bit interpreter on a 64 bit Windows only sees the native
        tools through the ``sysnative`` alias.
        """
        if sysnative and os.path.isdir(self.sysnative_dir()):
            return self.sysnative_dir()
        if not sysnative and self._is_64bit_arch():
            return self.syswow64_dir()
        return self.system32_dir()

    def system_tool(self, name):
        return os.path.join(self.system_dir(), name)
