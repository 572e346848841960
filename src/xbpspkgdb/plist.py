"""Decoder for xbps property-list package indexes (pkgdb and repodata index.plist)."""

import logging
import os
import plistlib
from typing import BinaryIO
from xml.parsers.expat import ExpatError

from pydantic import ValidationError

from xbpspkgdb.errors import MalformedDocumentError, PkgdbIOError
from xbpspkgdb.models import Package, PackageDB

logger = logging.getLogger(__name__)


def open_binary(path: str | os.PathLike) -> BinaryIO:
    """Open `path` for binary reading, raising `PkgdbIOError` if that is not possible."""
    try:
        return open(path, "rb")
    except OSError as e:
        raise PkgdbIOError(f"Unable to open {path}: {e}") from e


def decode(stream: BinaryIO) -> PackageDB:
    """Parse an xbps plist stream into a `PackageDB`.

    Args:
        stream: Binary stream holding one XML or binary property list whose root maps
            package names to package dictionaries

    Returns:
        A new PackageDB with one entry per top-level key

    Raises:
        MalformedDocumentError: The stream is not a property list of the expected shape
        PkgdbIOError: Reading the stream failed
    """
    try:
        data = stream.read()
    except OSError as e:
        raise PkgdbIOError(f"Unable to read property list: {e}") from e

    try:
        document = plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, ValueError, AttributeError, TypeError) as e:
        raise MalformedDocumentError(f"Invalid property list: {e}") from e

    if not isinstance(document, dict):
        raise MalformedDocumentError(f"Expected a dictionary at the root, got {type(document).__name__}")

    packages: dict[str, Package] = {}
    for name, entry in document.items():
        if not isinstance(entry, dict):
            raise MalformedDocumentError(f"Entry for {name!r} is a {type(entry).__name__}, not a dictionary")
        try:
            packages[name] = Package.model_validate(entry)
        except ValidationError as e:
            raise MalformedDocumentError(f"Invalid metadata for {name!r}: {e}") from e

    logger.debug(f"Decoded {len(packages)} packages")
    return PackageDB(packages)


def decode_file(path: str | os.PathLike) -> PackageDB:
    """Convenience function to parse an xbps plist file such as ``pkgdb-0.38.plist``."""
    with open_binary(path) as f:
        return decode(f)
