from os import getenv
from pathlib import Path

# directories are created on demand by the fetcher, not here
DATA_DIR = Path(getenv("XBPSPKGDB_DATA_DIR", "data")).resolve()
REPODATA_DIR = DATA_DIR / "repodata"

# installed package database of the running system
PKGDB = Path(getenv("XBPSPKGDB_PKGDB", "/var/db/xbps/pkgdb-0.38.plist"))

# defaults used when fetching remote repodata
ARCH = getenv("XBPSPKGDB_ARCH", "x86_64")
MIRROR = getenv("XBPSPKGDB_MIRROR", "https://repo-default.voidlinux.org/current/")
