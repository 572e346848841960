"""Composable predicates for `PackageDB.filter` and `PackageDB.filter_keys`.

Combinators are named with a trailing underscore since ``not``, ``and`` and ``or``
are reserved words.
"""

from xbpspkgdb.models import FilterFunc, Package

__all__ = [
    "FilterFunc",
    "always",
    "and_",
    "has_state",
    "is_auto",
    "is_manual",
    "is_preserved",
    "is_repolocked",
    "not_",
    "or_",
    "provides",
]


def not_(f: FilterFunc) -> FilterFunc:
    """Negate another filter."""

    def _not(p: Package) -> bool:
        return not f(p)

    return _not


def and_(*fs: FilterFunc) -> FilterFunc:
    """Match if every filter matches. With no filters, everything matches."""

    def _and(p: Package) -> bool:
        for f in fs:
            if not f(p):
                return False
        return True

    return _and


def or_(*fs: FilterFunc) -> FilterFunc:
    """Match if any filter matches. With no filters, nothing matches."""

    def _or(p: Package) -> bool:
        for f in fs:
            if f(p):
                return True
        return False

    return _or


def always(p: Package) -> bool:
    return True


def is_manual(p: Package) -> bool:
    """True if the package was installed explicitly."""
    return not p.automatic_install


def is_auto(p: Package) -> bool:
    """True if the package was installed as a dependency."""
    return p.automatic_install


def is_repolocked(p: Package) -> bool:
    return p.repolock


def is_preserved(p: Package) -> bool:
    return p.preserve


def has_state(state: str) -> FilterFunc:
    """Match packages in the given state (e.g. ``installed``, ``unpacked``)."""

    def _has_state(p: Package) -> bool:
        return p.state == state

    return _has_state


def provides(virtual: str) -> FilterFunc:
    """Match packages providing `virtual`, either as full pkgver or by name only."""

    def _provides(p: Package) -> bool:
        for entry in p.provides:
            if entry == virtual or entry.rpartition("-")[0] == virtual:
                return True
        return False

    return _provides
