"""Direct dependency extraction from Package.swift."""

import logging
import re
from pathlib import Path

from .errors import ManifestUnavailable
from .models import Pin

logger = logging.getLogger(__name__)

DEPENDENCIES_SECTION_RE = re.compile(r"dependencies:\s*\[([\s\S]*?)\],")
PACKAGE_URL_RE = re.compile(r'\.package\s*\(\s*url:\s*"([^"]+)"')


def extract_dependencies_section(source: str) -> str | None:
    """Return the body of the first ``dependencies: [...]`` list in ``source``."""
    match = DEPENDENCIES_SECTION_RE.search(source)
    return match.group(1) if match else None


def extract_package_names(section: str) -> list[str]:
    """Extract repository names from ``.package(url: ...)`` declarations.

    Args:
        section: Body of the dependencies list

    Returns:
        Repository names (last URL path component without ``.git``)
    """
    names = []
    for url in PACKAGE_URL_RE.findall(section):
        components = [part for part in url.split("/") if part]
        if len(components) < 2:
            continue
        name = components[-1]
        if name.endswith(".git"):
            name = name[: -len(".git")]
        names.append(name)
    return names


def direct_dependencies_from_source(source: str) -> list[str]:
    """Extract direct dependency names from Package.swift source.

    Raises:
        ManifestUnavailable: If there is no dependencies section
    """
    section = extract_dependencies_section(source)
    if section is None:
        raise ManifestUnavailable("Could not find dependencies section in Package.swift")
    return extract_package_names(section)


def read_direct_dependencies(folder: Path) -> list[str] | None:
    """Read direct dependency names from the Package.swift in ``folder``.

    Returns:
        Dependency names, or None if they could not be determined
    """
    manifest = Path(folder) / "Package.swift"
    if not manifest.is_file():
        logger.warning("Package.swift file not found")
        return None

    try:
        dependencies = direct_dependencies_from_source(manifest.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read Package.swift: %s", e)
        return None
    except ManifestUnavailable as e:
        logger.warning("%s", e)
        return None

    logger.info("Found %d direct dependencies in Package.swift", len(dependencies))
    return dependencies


def filter_direct_dependencies(pins: list[Pin], direct_dependencies: list[str] | None) -> list[Pin]:
    """Keep only pins declared as direct dependencies.

    Names are matched case-insensitively. Without a dependency list all pins
    are kept.
    """
    if direct_dependencies is None:
        logger.warning("Could not read direct dependencies from Package.swift, showing all dependencies")
        return pins

    names = {name.lower() for name in direct_dependencies}
    return [pin for pin in pins if pin.identity.lower() in names]
