"""Reader for XBPS package databases and repository indexes."""

from xbpspkgdb.errors import MalformedDocumentError, PkgdbError, PkgdbIOError
from xbpspkgdb.filters import and_, is_auto, is_manual, not_, or_
from xbpspkgdb.models import FilterFunc, Package, PackageDB
from xbpspkgdb.plist import decode, decode_file
from xbpspkgdb.repodata import SENTINEL, decode_archive, decode_archive_file

__all__ = [
    "SENTINEL",
    "FilterFunc",
    "MalformedDocumentError",
    "Package",
    "PackageDB",
    "PkgdbError",
    "PkgdbIOError",
    "and_",
    "decode",
    "decode_archive",
    "decode_archive_file",
    "decode_file",
    "is_auto",
    "is_manual",
    "not_",
    "or_",
]
