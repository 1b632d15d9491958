"""Locating and parsing Package.resolved files."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .errors import PackageResolvedNotFound, PackageResolvedNotReadable
from .models import Pin
from .version import Version

logger = logging.getLogger(__name__)

ROOT_RESOLVED_PATHS = (
    "Package.resolved",
    ".package.resolved",
    "xcshareddata/swiftpm/Package.resolved",
    "project.xcworkspace/xcshareddata/swiftpm/Package.resolved",
)
WORKSPACE_RESOLVED_PATH = "xcshareddata/swiftpm/Package.resolved"
PROJECT_RESOLVED_PATH = "project.xcworkspace/xcshareddata/swiftpm/Package.resolved"


class PinState(BaseModel):
    """Pinned state shared by all schema versions."""

    revision: str | None = None
    version: str | None = None
    branch: str | None = None


class PinV1(BaseModel):
    package: str
    repository_url: str = Field(alias="repositoryURL")
    state: PinState


class PinsV1(BaseModel):
    pins: list[PinV1]


class ResolvedV1(BaseModel):
    """Schema version 1, pins nested under ``object``."""

    object_: PinsV1 = Field(alias="object")


class PinV2(BaseModel):
    identity: str
    kind: str | None = None
    location: str
    state: PinState


class ResolvedV2(BaseModel):
    """Schema versions 2 and 3, top-level ``pins`` keyed by identity."""

    pins: list[PinV2]


def _pin(identity: str, location: str, state: PinState) -> Pin:
    return Pin(
        identity=identity,
        location=location,
        revision=state.revision,
        version=Version.parse_or_none(state.version),
    )


def parse_package_resolved(data: str | bytes) -> list[Pin]:
    """Parse Package.resolved content into pins.

    Each known schema is tried in turn; content matching none of them
    yields no pins.

    Args:
        data: Raw Package.resolved content

    Returns:
        Pins in file order
    """
    try:
        resolved_v1 = ResolvedV1.model_validate_json(data)
        return [_pin(p.package, p.repository_url, p.state) for p in resolved_v1.object_.pins]
    except ValidationError:
        logger.debug("Package.resolved is not schema version 1")

    try:
        resolved_v2 = ResolvedV2.model_validate_json(data)
        return [_pin(p.identity, p.location, p.state) for p in resolved_v2.pins]
    except ValidationError:
        logger.debug("Package.resolved is not schema version 2 or 3")

    return []


def _first_container(folder: Path, suffix: str) -> Path | None:
    containers = sorted(p for p in folder.iterdir() if p.is_dir() and p.name.endswith(suffix))
    if not containers:
        return None
    if len(containers) > 1:
        logger.warning("Multiple %s found. Using %s", suffix, containers[0].relative_to(folder))
    return containers[0]


def find_package_resolved(folder: Path) -> Path:
    """Find the Package.resolved file for a package or Xcode project.

    Args:
        folder: Directory containing Package.swift, an Xcode workspace or project

    Returns:
        Path to the Package.resolved file

    Raises:
        PackageResolvedNotFound: If no Package.resolved can be located
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise PackageResolvedNotFound(f"Directory {folder} not found")

    for relative in ROOT_RESOLVED_PATHS:
        candidate = folder / relative
        if candidate.is_file():
            logger.info("Found package pins at %s", relative)
            return candidate

    # Xcode workspaces take precedence over projects
    for suffix, relative in (
        ("xcworkspace", WORKSPACE_RESOLVED_PATH),
        ("xcodeproj", PROJECT_RESOLVED_PATH),
    ):
        container = _first_container(folder, suffix)
        if container is None:
            continue
        candidate = container / relative
        if not candidate.is_file():
            raise PackageResolvedNotFound()
        logger.info("Found package pins at %s", candidate.relative_to(folder))
        return candidate

    raise PackageResolvedNotFound()


def current_package_pins(folder: Path) -> list[Pin]:
    """Load the pins of the Package.resolved file belonging to ``folder``.

    Raises:
        PackageResolvedNotFound: If no Package.resolved can be located
        PackageResolvedNotReadable: If the file cannot be read
    """
    path = find_package_resolved(folder)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise PackageResolvedNotReadable(f"Could not read {path}: {e}") from e
    return parse_package_resolved(data)
