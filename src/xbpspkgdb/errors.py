"""Error types raised while reading XBPS package metadata."""


class PkgdbError(Exception):
    """Base class for every error raised by xbpspkgdb."""


class PkgdbIOError(PkgdbError, OSError):
    """The byte source (file, archive member, download) could not be opened or read."""


class MalformedDocumentError(PkgdbError, ValueError):
    """The input is not a well-formed package index.

    Raised for invalid property-list syntax, a root that is not a mapping of mappings,
    a record whose values have the wrong types, broken tar/gzip/zstd framing, or a
    repodata archive without an ``index.plist`` member.
    """
