"""List packages from an xbps package database or repodata file."""

import argparse
import asyncio
import logging
import sys

from xbpspkgdb.constants import ARCH, MIRROR, PKGDB
from xbpspkgdb.errors import PkgdbError
from xbpspkgdb.fetcher import fetch_repodata
from xbpspkgdb.filters import and_, has_state, is_auto, is_manual, is_repolocked
from xbpspkgdb.log import setup_logging
from xbpspkgdb.models import PackageDB
from xbpspkgdb.plist import decode_file
from xbpspkgdb.repodata import decode_archive_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xbpspkgdb", description=__doc__)

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--pkgdb", default=PKGDB, help="installed package database (default: %(default)s)")
    source.add_argument("--repodata", help="local <arch>-repodata archive")
    source.add_argument("--fetch", action="store_true", help="download repodata from --mirror")
    parser.add_argument("--mirror", default=MIRROR, help="repository URL used with --fetch (default: %(default)s)")
    parser.add_argument("--arch", default=ARCH, help="architecture used with --fetch (default: %(default)s)")

    selection = parser.add_mutually_exclusive_group()
    selection.add_argument("--manual", action="store_true", help="only explicitly installed packages")
    selection.add_argument("--auto", action="store_true", help="only automatically installed packages")
    parser.add_argument("--repolocked", action="store_true", help="only packages locked to their repository")
    parser.add_argument("--state", help="only packages in this state (e.g. installed, unpacked)")

    parser.add_argument("--pkgver", action="store_true", help="print pkgver instead of the package name")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def load(args: argparse.Namespace) -> PackageDB:
    if args.fetch:
        return asyncio.run(fetch_repodata(args.mirror, args.arch))
    if args.repodata:
        return decode_archive_file(args.repodata)
    return decode_file(args.pkgdb)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        packages = load(args)
    except PkgdbError as e:
        logger.error(f"{e}")
        return 1

    filters = []
    if args.manual:
        filters.append(is_manual)
    if args.auto:
        filters.append(is_auto)
    if args.repolocked:
        filters.append(is_repolocked)
    if args.state:
        filters.append(has_state(args.state))

    for name in packages.filter_keys(and_(*filters)):
        print(packages[name].pkgver if args.pkgver else name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
