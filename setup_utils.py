import os
import re
from typing import List

TOP_DIR = os.path.dirname(os.path.realpath(__file__))


def get_version() -> str:
    with open(os.path.join(TOP_DIR, "netapply", "version.py")) as stream:
        match = re.search(r'^__VERSION__ = "([^"]+)"', stream.read(), re.M)
    if not match:
        raise RuntimeError("Unable to find the netapply version")
    return match.group(1)


def read_requires(filename="requirements.txt") -> List[str]:
    requires = []
    with open(os.path.join(TOP_DIR, filename)) as stream:
        for line in stream:
            line = line.split("#", 1)[0].strip()
            if line:
                requires.append(line)
    return requires
