"""Shared test fixtures."""

from __future__ import annotations

import gzip
import io
import plistlib
import tarfile
from collections.abc import Callable
from pathlib import Path

import pytest
import zstandard

INDEX = {
    "pkgA": {
        "pkgver": "pkgA-1.0_1",
        "automatic-install": False,
        "architecture": "x86_64",
        "state": "installed",
        "install-date": "2024-01-15 10:20 UTC",
        "build-date": "2023-12-01 09:00 UTC",
        "installed_size": 2048,
        "filename-size": 1024,
        "filename-sha256": "ab" * 32,
        "run_depends": ["zlib>=1.2_1", "glibc>=2.32_1"],
        "conf_files": ["/etc/pkgA/z.conf", "/etc/pkgA/a.conf"],
        "alternatives": {"sh": ["/usr/bin/sh:pkgA", "/usr/share/man/man1/sh.1:pkgA.1"]},
        "shlib-provides": ["libpkgA.so.1"],
        "install-msg": b"Run pkgA-setup once.\n",
        "archive-compression-type": "zstd",
    },
    "pkgB": {
        "pkgver": "pkgB-2.3_2",
        "automatic-install": True,
        "architecture": "noarch",
        "state": "installed",
        "repolock": True,
        "preserve": True,
        "provides": ["awk-0_1"],
        "shlib-requires": ["libc.so.6"],
        "remove-script": b"#!/bin/sh\nexit 0\n",
    },
}


def build_tar(members: list[tuple[str, bytes]]) -> bytes:
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w") as tar:
        for name, data in members:
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


@pytest.fixture
def index_bytes() -> bytes:
    return plistlib.dumps(INDEX)


@pytest.fixture
def index_path(tmp_path: Path, index_bytes: bytes) -> Path:
    path = tmp_path / "index.plist"
    path.write_bytes(index_bytes)
    return path


@pytest.fixture
def make_repodata() -> Callable[..., bytes]:
    """Build an in-memory repodata archive from (name, data) members."""

    def _make(members: list[tuple[str, bytes]], compression: str = "gzip") -> bytes:
        tar = build_tar(members)
        if compression == "zstd":
            return zstandard.ZstdCompressor().compress(tar)
        return gzip.compress(tar)

    return _make


@pytest.fixture
def repodata_bytes(make_repodata: Callable[..., bytes], index_bytes: bytes) -> bytes:
    return make_repodata([("index-meta.plist", plistlib.dumps({})), ("index.plist", index_bytes)])


@pytest.fixture
def repodata_path(tmp_path: Path, repodata_bytes: bytes) -> Path:
    path = tmp_path / "x86_64-repodata"
    path.write_bytes(repodata_bytes)
    return path


@pytest.fixture
def make_tar() -> Callable[[list[tuple[str, bytes]]], bytes]:
    return build_tar
