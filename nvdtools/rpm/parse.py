"""Parsing of RPM package file names (name-[epoch:]version-release.arch.rpm)."""

from __future__ import annotations

from dataclasses import dataclass, field


class PackageParseError(ValueError):
    """Raised when a string is not a valid RPM package name."""


@dataclass(frozen=True)
class Label:
    """The epoch, version and release used to order RPM packages."""

    epoch: str = ""
    version: str = ""
    release: str = ""


@dataclass(frozen=True)
class Package:
    """One RPM package."""

    name: str = ""
    label: Label = field(default_factory=Label)
    arch: str = ""

    @property
    def epoch(self) -> str:
        return self.label.epoch

    @property
    def version(self) -> str:
        return self.label.version

    @property
    def release(self) -> str:
        return self.label.release


def parse(pkg: str) -> Package:
    """Parse ``name-[epoch:]version-release.arch[.rpm]`` into a Package.

    Architectures ``src`` and ``noarch`` are reported as an empty arch, and
    the name is lower-cased.
    """
    if pkg.endswith(".rpm"):
        pkg = pkg[: -len(".rpm")]

    rest, sep, arch = pkg.rpartition(".")
    if not sep:
        raise PackageParseError(f"can't find arch in pkg {pkg!r}")
    if arch in ("src", "noarch"):
        arch = ""

    head, sep, release = rest.rpartition("-")
    if not sep:
        raise PackageParseError(f"can't find release in pkg {rest!r}")

    name, sep, ver = head.rpartition("-")
    if not sep:
        raise PackageParseError(f"can't find version in pkg {head!r}")

    epoch, colon, version = ver.partition(":")
    if not colon:
        epoch, version = "", ver

    return Package(
        name=name.lower(),
        label=Label(epoch=epoch, version=version, release=release),
        arch=arch,
    )