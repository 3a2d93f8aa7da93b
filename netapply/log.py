# This file is part of netapply. See LICENSE file for license information.

import logging
import sys
import time

DEFAULT_LOG_FORMAT = "%(asctime)s - %(filename)s[%(levelname)s]: %(message)s"


def setup_basic_logging(level=logging.INFO, formatter=None):
    formatter = formatter or logging.Formatter(DEFAULT_LOG_FORMAT)
    # Always format logging timestamps as UTC time
    formatter.converter = time.gmtime
    root = logging.getLogger()
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    console.setLevel(level)
    root.addHandler(console)
    root.setLevel(level)


def flush_loggers(root):
    if not root:
        return
    for h in root.handlers:
        if isinstance(h, logging.StreamHandler):
            try:
                h.flush()
            except IOError:
                pass
    flush_loggers(root.parent)
