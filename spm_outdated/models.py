"""Core data models for spm-outdated."""

from dataclasses import dataclass, field

from .version import Version


@dataclass(frozen=True)
class Pin:
    """A single dependency pinned in Package.resolved."""

    identity: str
    location: str
    revision: str | None = None
    version: Version | None = None

    @property
    def has_resolved_version(self) -> bool:
        """True if the pin carries a semantic version, regardless of revision."""
        return self.version is not None


@dataclass(frozen=True)
class OutdatedPackage:
    """A pin for which a newer qualifying version was found upstream."""

    identity: str
    current_version: Version
    latest_version: Version
    url: str

    @property
    def major_versions_behind(self) -> int:
        return self.latest_version.major_delta(self.current_version)


@dataclass
class PackageCollection:
    """Result of a collection run, ready for rendering."""

    outdated_packages: list[OutdatedPackage] = field(default_factory=list)
    ignored_packages: list[Pin] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Plain representation used by the JSON renderer and the HTTP API."""
        return {
            "outdated_packages": [
                {
                    "package": package.identity,
                    "current_version": str(package.current_version),
                    "latest_version": str(package.latest_version),
                    "url": package.url,
                }
                for package in self.outdated_packages
            ],
            "ignored_packages": [
                {
                    "package": pin.identity,
                    "url": pin.location,
                    "revision": pin.revision,
                }
                for pin in self.ignored_packages
            ],
        }
