"""Remote tag discovery through ``git ls-remote``."""

import asyncio
import os
import re

from .errors import LookupFailure, ParseError
from .version import Version

_TAG_PREFIX_RE = re.compile(r"refs/tags/(v(?=\d))?")
DEREFERENCE_SUFFIX = "^{}"


def normalize_tag_ref(ref: str) -> str:
    """Strip the ``refs/tags/`` namespace and a ``v`` that precedes a digit."""
    return _TAG_PREFIX_RE.sub("", ref.strip())


def parse_ls_remote(output: str) -> list[tuple[str, bool]]:
    """Split ``git ls-remote --tags`` output into (tag name, dereferenced) pairs.

    Args:
        output: Raw stdout, one ``<sha>\\t<ref>`` line per reference

    Returns:
        Normalized tag names paired with whether the line is an annotated-tag
        dereference (``^{}``) entry
    """
    refs: list[tuple[str, bool]] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        ref = line.split("\t")[-1].strip()
        dereferenced = ref.endswith(DEREFERENCE_SUFFIX)
        if dereferenced:
            ref = ref[: -len(DEREFERENCE_SUFFIX)]
        refs.append((normalize_tag_ref(ref), dereferenced))
    return refs


def versions_from_refs(refs: list[tuple[str, bool]]) -> list[Version]:
    """Turn tag references into an ascending list of versions.

    Dereferenced entries are skipped since the same tag is also listed as a
    plain reference. Tags that are not semantic versions are dropped.
    """
    versions = []
    for name, dereferenced in refs:
        if dereferenced:
            continue
        try:
            versions.append(Version.parse(name))
        except ParseError:
            continue  # Not every tag is a release
    return sorted(versions)


class GitTagSource:
    """Lists the tags of a remote git repository."""

    def __init__(self, timeout: float | None = 30.0, git_executable: str = "git"):
        """Initialize tag source.

        Args:
            timeout: Seconds to wait for a single ``git ls-remote``, None to wait forever
            git_executable: Name or path of the git binary
        """
        self.timeout = timeout
        self.git_executable = git_executable

    async def list_tag_refs(self, location: str) -> list[tuple[str, bool]]:
        """List tag references of the repository at ``location``.

        Raises:
            LookupFailure: If git is missing, exits non-zero or times out
        """
        output = await self._run_ls_remote(location)
        return parse_ls_remote(output)

    async def _run_ls_remote(self, location: str) -> str:
        if location.startswith("-"):
            raise LookupFailure(location, "refusing location that looks like a git option")
        # Never let git block on a credential prompt
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        try:
            process = await asyncio.create_subprocess_exec(
                self.git_executable,
                "ls-remote",
                "--tags",
                "--",
                location,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
            )
        except OSError as e:
            raise LookupFailure(location, f"could not start {self.git_executable}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise LookupFailure(location, f"timed out after {self.timeout}s") from e

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise LookupFailure(location, message or f"git exited with {process.returncode}")

        return stdout.decode("utf-8", errors="replace")
