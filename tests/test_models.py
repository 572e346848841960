import datetime

import pytest
from pydantic import ValidationError

from xbpspkgdb.models import Package, PackageDB


def test_package_reads_plist_keys() -> None:
    pkg = Package.model_validate(
        {
            "pkgver": "bash-5.2.21_1",
            "automatic-install": True,
            "shlib-requires": ["libc.so.6", "libreadline.so.8"],
            "installed_size": 8_500_000,
            "source-revisions": "bash:abc123",
        }
    )
    assert pkg.pkgver == "bash-5.2.21_1"
    assert pkg.automatic_install is True
    assert pkg.shlib_requires == ["libc.so.6", "libreadline.so.8"]
    assert pkg.installed_size == 8_500_000
    assert pkg.source_revisions == "bash:abc123"


def test_package_defaults_when_keys_are_missing() -> None:
    pkg = Package.model_validate({})
    assert pkg.pkgver == ""
    assert pkg.automatic_install is False
    assert pkg.repolock is False
    assert pkg.installed_size == 0
    assert pkg.filename_size == 0
    assert pkg.conflicts == []
    assert pkg.alternatives == {}
    assert pkg.install_msg == b""
    assert pkg.remove_script == b""


def test_package_ignores_unknown_keys() -> None:
    pkg = Package.model_validate({"archive-compression-type": "zstd", "pkgver": "a-1_1"})
    assert pkg.pkgver == "a-1_1"
    assert not hasattr(pkg, "archive_compression_type")


def test_package_ignores_key_spelling_variants() -> None:
    pkg = Package.model_validate(
        {
            "automatic_install": True,
            "build_date": "2024-01-15 10:20 UTC",
            "shlib_requires": ["libc.so.6"],
            "installed-size": 4096,
            "run_depends": ["b>=0"],
        }
    )
    assert pkg.automatic_install is False
    assert pkg.build_date == ""
    assert pkg.shlib_requires == []
    assert pkg.installed_size == 0
    assert pkg.run_depends == ["b>=0"]


def test_package_is_frozen() -> None:
    pkg = Package()
    with pytest.raises(ValidationError):
        pkg.state = "installed"


@pytest.mark.parametrize(
    ("pkgver", "name", "version"),
    [
        ("foo-1.0_1", "foo", "1.0_1"),
        ("python3-dateutil-2.9.0_2", "python3-dateutil", "2.9.0_2"),
        ("nodash", "nodash", ""),
    ],
)
def test_pkgver_split(pkgver: str, name: str, version: str) -> None:
    pkg = Package(pkgver=pkgver)
    assert pkg.pkgname == name
    assert pkg.version == version


def test_human_readable_sizes() -> None:
    pkg = Package.model_validate({"installed_size": 2048, "filename-size": 512})
    assert pkg.installed_size_str == "2.0KiB"
    assert pkg.filename_size_str == "512B"


def test_dates_are_parsed_leniently() -> None:
    pkg = Package.model_validate({"install-date": "2024-01-15 10:20 UTC", "build-date": "not a date"})
    assert pkg.install_datetime == datetime.datetime(2024, 1, 15, 10, 20, tzinfo=datetime.UTC)
    assert pkg.build_datetime is None
    assert Package().install_datetime is None


def test_packagedb_is_a_read_only_mapping() -> None:
    source = {"a": Package(pkgver="a-1_1")}
    db = PackageDB(source)
    source["b"] = Package()

    assert list(db) == ["a"]
    assert len(db) == 1
    assert "a" in db
    assert db["a"].pkgver == "a-1_1"
    with pytest.raises(TypeError):
        db["c"] = Package()  # type: ignore[index]


def test_packagedb_equality_is_deep() -> None:
    assert PackageDB({"a": Package(pkgver="a-1_1")}) == PackageDB({"a": Package(pkgver="a-1_1")})
    assert PackageDB({"a": Package(pkgver="a-1_1")}) != PackageDB({"a": Package(pkgver="a-1_2")})
    assert PackageDB() == PackageDB({})
