"""Data models for XBPS package metadata."""

import datetime
from collections.abc import Callable, Iterator, Mapping

from pydantic import BaseModel, ByteSize, ConfigDict, Field, computed_field

from xbpspkgdb.utils import try_parse_date


class Package(BaseModel):
    """Metadata of a single package as stored in pkgdb or repodata ``index.plist``.

    Field aliases are the plist keys written by xbps. A package has no name field;
    its name is the key it is stored under in a `PackageDB`.
    """

    model_config = ConfigDict(frozen=True)

    alternatives: dict[str, list[str]] = Field(default_factory=dict)
    architecture: str = ""
    automatic_install: bool = Field(default=False, alias="automatic-install")
    build_date: str = Field(default="", alias="build-date")
    build_options: str = Field(default="", alias="build-options")
    conf_files: list[str] = Field(default_factory=list)
    conflicts: list[str] = Field(default_factory=list)
    filename_sha256: str = Field(default="", alias="filename-sha256")
    filename_size: ByteSize = Field(default=ByteSize(0), alias="filename-size")
    homepage: str = ""
    install_date: str = Field(default="", alias="install-date")
    install_msg: bytes = Field(default=b"", alias="install-msg")
    install_script: list[str] = Field(default_factory=list, alias="install-script")
    installed_size: ByteSize = ByteSize(0)
    license: str = ""
    maintainer: str = ""
    metafile_sha256: str = Field(default="", alias="metafile-sha256")
    pkgver: str = ""
    preserve: bool = False
    provides: list[str] = Field(default_factory=list)
    remove_msg: bytes = Field(default=b"", alias="remove-msg")
    remove_script: bytes = Field(default=b"", alias="remove-script")
    replaces: list[str] = Field(default_factory=list)
    repolock: bool = False
    repository: str = ""
    reverts: list[str] = Field(default_factory=list)
    run_depends: list[str] = Field(default_factory=list)
    shlib_provides: list[str] = Field(default_factory=list, alias="shlib-provides")
    shlib_requires: list[str] = Field(default_factory=list, alias="shlib-requires")
    short_desc: str = ""
    source_revisions: str = Field(default="", alias="source-revisions")
    state: str = ""

    @property
    def pkgname(self) -> str:
        """Package name part of ``pkgver`` (``foo`` for ``foo-1.0_1``)."""
        name, sep, _ = self.pkgver.rpartition("-")
        return name if sep else self.pkgver

    @property
    def version(self) -> str:
        """Version part of ``pkgver`` (``1.0_1`` for ``foo-1.0_1``)."""
        _, sep, version = self.pkgver.rpartition("-")
        return version if sep else ""

    @computed_field
    @property
    def installed_size_str(self) -> str:
        """Installed size formatted as a human-readable string."""
        return self.installed_size.human_readable()

    @computed_field
    @property
    def filename_size_str(self) -> str:
        """Binary package size formatted as a human-readable string."""
        return self.filename_size.human_readable()

    @property
    def build_datetime(self) -> datetime.datetime | None:
        return try_parse_date(self.build_date)

    @property
    def install_datetime(self) -> datetime.datetime | None:
        return try_parse_date(self.install_date)


type FilterFunc = Callable[[Package], bool]


class PackageDB(Mapping[str, Package]):
    """Read-only mapping of package name to its metadata."""

    __slots__ = ("_packages",)

    def __init__(self, packages: Mapping[str, Package] | None = None) -> None:
        self._packages: dict[str, Package] = dict(packages or {})

    def __getitem__(self, name: str) -> Package:
        return self._packages[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} packages)"

    def filter_keys(self, f: FilterFunc) -> list[str]:
        """Return the sorted names of all packages matching `f`."""
        return sorted(name for name, pkg in self._packages.items() if f(pkg))

    def filter(self, f: FilterFunc) -> "PackageDB":
        """Return a new `PackageDB` holding only the packages matching `f`."""
        return PackageDB({name: pkg for name, pkg in self._packages.items() if f(pkg)})
