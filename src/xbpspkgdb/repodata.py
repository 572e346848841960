"""Reader for xbps repodata archives (``<arch>-repodata``).

A repodata file is a compressed tar stream. Older xbps releases compress it with gzip,
current ones with zstd. The package index lives in the member named ``index.plist``.
"""

import gzip
import logging
import os
import tarfile
import zlib
from typing import BinaryIO

import zstandard

from xbpspkgdb.errors import MalformedDocumentError, PkgdbError, PkgdbIOError
from xbpspkgdb.models import PackageDB
from xbpspkgdb.plist import decode, open_binary

logger = logging.getLogger(__name__)

SENTINEL = "index.plist"
ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"


def _sniff_magic(stream: BinaryIO) -> bytes:
    """Look at the leading bytes of `stream` without consuming them.

    Streams that can neither peek nor seek yield an empty result and are treated as gzip.
    """
    size = len(ZSTD_MAGIC)
    if hasattr(stream, "peek"):
        return stream.peek(size)[:size]
    if getattr(stream, "seekable", lambda: False)():
        pos = stream.tell()
        magic = stream.read(size)
        stream.seek(pos)
        return magic
    return b""


def _decompressed(stream: BinaryIO):
    if _sniff_magic(stream) == ZSTD_MAGIC:
        logger.debug("Reading zstd compressed repodata")
        return zstandard.ZstdDecompressor().stream_reader(stream, closefd=False)
    return gzip.GzipFile(fileobj=stream, mode="rb")


def decode_archive(stream: BinaryIO) -> PackageDB:
    """Parse a stream of repodata into a `PackageDB`.

    The archive is decompressed and scanned lazily; scanning stops at the first
    ``index.plist`` member.

    Raises:
        MalformedDocumentError: Broken compression or tar framing, no ``index.plist``
            member, or an invalid index
        PkgdbIOError: Reading the underlying stream failed
    """
    try:
        with _decompressed(stream) as reader, tarfile.open(fileobj=reader, mode="r|") as archive:
            # errors while advancing to the next member surface here, before any name check;
            # a corrupt header after the first member ends the stream like an end-of-archive marker
            for member in archive:
                if member.name != SENTINEL:
                    logger.debug(f"Skipping repodata member {member.name}")
                    continue
                index = archive.extractfile(member)
                if index is None:
                    raise MalformedDocumentError(f"Repodata member {SENTINEL} is not a regular file")
                with index:
                    return decode(index)
    except PkgdbError:
        raise
    except (tarfile.TarError, gzip.BadGzipFile, zlib.error, EOFError, zstandard.ZstdError) as e:
        raise MalformedDocumentError(f"Invalid repodata archive: {e}") from e
    except OSError as e:
        raise PkgdbIOError(f"Unable to read repodata archive: {e}") from e

    raise MalformedDocumentError(f"Repodata archive has no {SENTINEL} member")


def decode_archive_file(path: str | os.PathLike) -> PackageDB:
    """Convenience function to parse xbps repodata files."""
    with open_binary(path) as f:
        return decode_archive(f)
