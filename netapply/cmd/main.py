#!/usr/bin/env python3
# This file is part of netapply. See LICENSE file for license information.

"""Apply a network-config document to the network adapters of this host."""

import argparse
import logging
import sys

import yaml

from netapply import log
from netapply import parser as netparser
from netapply import settings, version
from netapply.exceptions import NetapplyError
from netapply.net.apply import apply_network_config
from netapply.net.network_config import read_network_config
from netapply.osys import base as osys_base
from netapply.sources import medium

NAME = "netapply"
LOG = logging.getLogger(__name__)


def _add_source_args(parser):
    parser.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        help=(
            "Read the network config from PATH instead of looking for a"
            " configuration volume."
        ),
    )
    parser.add_argument(
        "-l",
        "--label",
        dest="labels",
        action="append",
        metavar="LABEL",
        help=(
            "Volume label to look for, may be repeated."
            " Default: %s" % ", ".join(settings.CONFIG_LABELS)
        ),
    )
    parser.add_argument(
        "-f",
        "--filename",
        default=settings.NETWORK_CONFIG_FILENAME,
        help="Name of the network config file on the volume. Default: %s"
        % settings.NETWORK_CONFIG_FILENAME,
    )


def get_parser(parser=None):
    """Build or extend an arg parser for the netapply utility.

    @param parser: Optional existing ArgumentParser instance representing the
        subcommand which will be extended to support the args of this utility.

    @returns: ArgumentParser with proper argument configuration.
    """
    if not parser:
        parser = argparse.ArgumentParser(prog=NAME, description=__doc__)
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version="%(prog)s " + version.version_string(),
    )
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        default=False,
        help="Show additional pre-action logging (default: %(default)s).",
    )
    subparsers = parser.add_subparsers(title="Subcommands", dest="subcommand")
    subparsers.required = True

    apply_parser = subparsers.add_parser(
        "apply", help="Rename and configure network adapters."
    )
    _add_source_args(apply_parser)
    apply_parser.add_argument(
        "--rename-attempts",
        type=int,
        default=settings.RENAME_POLL_ATTEMPTS,
        help="How often to check that a rename took effect."
        " Default: %(default)s",
    )
    apply_parser.add_argument(
        "--rename-interval",
        type=float,
        default=settings.RENAME_POLL_INTERVAL,
        help="Seconds between rename checks. Default: %(default)s",
    )
    apply_parser.set_defaults(action=handle_apply)

    show_parser = subparsers.add_parser(
        "show", help="Print the network config as it was understood."
    )
    _add_source_args(show_parser)
    show_parser.add_argument(
        "--format",
        choices=["yaml", "network-config"],
        default="yaml",
        help=(
            "yaml: the interface entries that would be applied."
            " network-config: the parsed document, re-rendered."
        ),
    )
    show_parser.set_defaults(action=handle_show)
    return parser


def _load_text(args, osutils_getter=None):
    if args.config:
        return medium.read_network_config(args.config)
    osutils = (osutils_getter or osys_base.get_osutils)()
    return medium.fetch_network_config(
        osutils.filesystem,
        labels=args.labels or settings.CONFIG_LABELS,
        filename=args.filename,
    )


def handle_apply(args):
    osutils = osys_base.get_osutils()
    text = _load_text(args, lambda: osutils)
    config = read_network_config(netparser.parse(text))
    report = apply_network_config(
        config,
        osutils.network,
        rename_attempts=args.rename_attempts,
        rename_interval=args.rename_interval,
    )
    LOG.info("Finished: %s", report.summary())
    return 0


def handle_show(args):
    tree = netparser.parse(_load_text(args))
    if args.format == "network-config":
        sys.stdout.write(netparser.dumps(tree))
        return 0
    config = read_network_config(tree)
    sys.stdout.write(
        yaml.safe_dump(
            config.as_dict(), default_flow_style=False, sort_keys=False
        )
    )
    return 0


def main(sysv_args=None):
    args = get_parser().parse_args(sysv_args)
    log.setup_basic_logging(
        level=logging.DEBUG if args.debug else logging.INFO
    )
    try:
        return args.action(args)
    except NetapplyError as e:
        LOG.error("%s", e)
        return 1
    finally:
        log.flush_loggers(LOG)


if __name__ == "__main__":
    sys.exit(main())
