"""Semantic version parsing and ordering."""

import semantic_version

from .errors import ParseError


class Version:
    """A semantic version backed by :class:`semantic_version.Version`.

    Build metadata is kept for display but never affects equality,
    hashing or ordering.
    """

    __slots__ = ("_version",)

    def __init__(self, major: int, minor: int, patch: int, prerelease=(), build=()):
        try:
            self._version = semantic_version.Version(
                major=major,
                minor=minor,
                patch=patch,
                prerelease=tuple(prerelease),
                build=tuple(build),
            )
        except ValueError as e:
            raise ParseError(f"Invalid semantic version: {e}") from e

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse ``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]``.

        Args:
            text: Version string, surrounding whitespace is ignored

        Returns:
            Parsed Version

        Raises:
            ParseError: If the text is not a semantic version
        """
        if not text:
            raise ParseError(f"Invalid semantic version: {text!r}")
        try:
            parsed = semantic_version.Version(text.strip())
        except ValueError as e:
            # Also covers int() refusing components past the digit limit
            raise ParseError(f"Invalid semantic version: {text[:64]!r}") from e
        return cls(parsed.major, parsed.minor, parsed.patch, parsed.prerelease, parsed.build)

    @classmethod
    def parse_or_none(cls, text: str | None) -> "Version | None":
        """Parse a version, returning None for missing or malformed input."""
        if not text:
            return None
        try:
            return cls.parse(text)
        except ParseError:
            return None

    @property
    def major(self) -> int:
        return self._version.major

    @property
    def minor(self) -> int:
        return self._version.minor

    @property
    def patch(self) -> int:
        return self._version.patch

    @property
    def prerelease(self) -> tuple[str, ...]:
        return self._version.prerelease

    @property
    def build(self) -> tuple[str, ...]:
        return self._version.build

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def major_delta(self, other: "Version") -> int:
        """Number of major versions this version is ahead of ``other``."""
        return self.major - other.major

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._version.precedence_key == other._version.precedence_key

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._version.precedence_key < other._version.precedence_key

    def __le__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return not other < self

    def __gt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return other < self

    def __ge__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return not self < other

    def __hash__(self) -> int:
        # precedence_key holds unhashable identifier objects; numeric
        # identifiers never carry leading zeros, so the raw parts agree with it
        return hash((self.major, self.minor, self.patch, self.prerelease))

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"

    def __str__(self) -> str:
        return str(self._version)


def compare_versions(a: Version, b: Version) -> int:
    """Return -1, 0 or 1 as ``a`` sorts before, equal to or after ``b``."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0
