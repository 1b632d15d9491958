"""Concurrent version collection and outdated detection."""

import asyncio
import logging

from .errors import LookupFailure
from .models import OutdatedPackage, PackageCollection, Pin
from .tags import GitTagSource, versions_from_refs
from .version import Version


def latest_version(
    all_versions: list[Version],
    current_version: Version,
    ignore_prerelease: bool = False,
    only_major_updates: bool = False,
) -> Version | None:
    """Pick the newest version allowed by the active filters.

    Args:
        all_versions: Available versions, sorted ascending
        current_version: Version currently pinned
        ignore_prerelease: Drop versions with pre-release identifiers
        only_major_updates: Keep only versions with a higher major version

    Returns:
        The last remaining version, or None if the filters leave nothing
    """
    candidates = all_versions
    if ignore_prerelease:
        candidates = [v for v in candidates if not v.is_prerelease]
    if only_major_updates:
        candidates = [v for v in candidates if v.major_delta(current_version) > 0]
    return candidates[-1] if candidates else None


def evaluate_package(
    pin: Pin,
    all_versions: list[Version],
    ignore_prerelease: bool = False,
    only_major_updates: bool = False,
) -> OutdatedPackage | None:
    """Decide whether a pin is outdated.

    The pinned version is compared by value only, so it does not need to be
    among the discovered versions.
    """
    if pin.version is None:
        return None

    latest = latest_version(all_versions, pin.version, ignore_prerelease, only_major_updates)
    if latest is None or latest == pin.version:
        return None

    return OutdatedPackage(
        identity=pin.identity,
        current_version=pin.version,
        latest_version=latest,
        url=pin.location,
    )


class VersionCollector:
    """Looks up available versions for pins and classifies them."""

    def __init__(
        self,
        tag_source: GitTagSource | None = None,
        max_concurrency: int = 6,
        timeout: float | None = 30.0,
        logger: logging.Logger | None = None,
    ):
        """Initialize version collector.

        Args:
            tag_source: Source of remote tags, defaults to ``git ls-remote``
            max_concurrency: Maximum concurrent remote lookups
            timeout: Per-lookup timeout in seconds when no tag source is given
            logger: Diagnostics sink, defaults to the module logger
        """
        self.tag_source = tag_source or GitTagSource(timeout=timeout)
        self.max_concurrency = max_concurrency
        self.logger = logger or logging.getLogger(__name__)

    async def available_versions(self, pin: Pin) -> list[Version]:
        """Get the versions tagged in a pin's repository.

        A failed lookup yields an empty list so one unreachable repository
        never aborts the run.
        """
        self.logger.debug("Running git ls-remote for %s.", pin.identity)
        try:
            refs = await self.tag_source.list_tag_refs(pin.location)
        except LookupFailure as e:
            self.logger.warning("Error on git ls-remote for %s: %s", pin.identity, e.reason)
            return []
        return versions_from_refs(refs)

    async def collect(
        self,
        pins: list[Pin],
        ignore_prerelease: bool = False,
        only_major_updates: bool = False,
    ) -> PackageCollection:
        """Collect versions for all pins concurrently and build the report.

        Args:
            pins: Pins loaded from Package.resolved
            ignore_prerelease: Ignore pre-release versions
            only_major_updates: Only report major version updates

        Returns:
            Outdated packages sorted by identity and ignored pins in input order
        """
        self.logger.info("Collecting versions for %s.", ", ".join(pin.identity for pin in pins))
        resolved = [pin for pin in pins if pin.has_resolved_version]
        ignored = [pin for pin in pins if not pin.has_resolved_version]

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def fetch(pin: Pin) -> tuple[Pin, list[Version]]:
            async with semaphore:
                versions = await self.available_versions(pin)
            self.logger.info("Found %d versions for %s.", len(versions), pin.identity)
            return pin, versions

        for pin in resolved:
            self.logger.info("Package %s has resolved version, queueing version fetch.", pin.identity)
        results = await asyncio.gather(*(fetch(pin) for pin in resolved))
        available = dict(results)

        outdated = []
        for pin, versions in available.items():
            package = evaluate_package(pin, versions, ignore_prerelease, only_major_updates)
            if package:
                self.logger.info("Package %s is outdated.", pin.identity)
                outdated.append(package)
            else:
                self.logger.info("Package %s is up to date.", pin.identity)
        outdated.sort(key=lambda package: package.identity)

        if ignored:
            self.logger.info(
                "Ignoring %s because of non-version pins.",
                ", ".join(pin.identity for pin in ignored),
            )
        return PackageCollection(outdated_packages=outdated, ignored_packages=ignored)
