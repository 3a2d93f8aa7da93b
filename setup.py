# This file is part of netapply. See LICENSE file for license information.

# Distutils magic for netapply

import os
import sys

import setuptools

# Python-path here is a little unpredictable as setup.py could be run
# from a directory other than the root of the repo, so ensure we can find
# our utils
sys.path.insert(0, os.path.dirname(os.path.realpath(__file__)))
# isort: off
from setup_utils import get_version, read_requires  # noqa: E402

# isort: on
del sys.path[0]

setuptools.setup(
    name="netapply",
    version=get_version(),
    description="Apply cloud-init style network-config to network adapters",
    packages=setuptools.find_packages(exclude=["tests.*", "tests"]),
    license="Apache 2.0",
    python_requires=">=3.8",
    install_requires=read_requires("requirements.txt"),
    extras_require={"test": read_requires("test-requirements.txt")},
    entry_points={
        "console_scripts": [
            "netapply = netapply.cmd.main:main",
        ],
    },
)
