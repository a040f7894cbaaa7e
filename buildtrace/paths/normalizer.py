"""Maps absolute file paths to include-relative display names."""

import os

from ..logging_config import get_logger

logger = get_logger(__name__)


class PathNormalizer:
    """Relative display names for absolute paths, with conflict detection.

    A file registered with the include directory it was found in displays
    as the path relative to that directory. When two different files would
    display under the same relative name, both fall back to their absolute
    paths.
    """

    def __init__(self):
        self._include_dirs: dict[str, str] = {}
        self._normalized: dict[str, str] = {}
        self._claimed: dict[str, str] = {}  # normalized name -> first path
        self._conflicted: set[str] = set()
        self._aliases: dict[str, str] = {}

    def register(self, file_path: str, include_dir: str) -> None:
        """Record the include directory a file was found in."""
        if file_path in self._include_dirs:
            return
        self._include_dirs[file_path] = include_dir

        prefix = include_dir.rstrip(os.sep)
        if not file_path.startswith(prefix + os.sep):
            logger.warning(
                "Can't normalize path %s against %s", file_path, include_dir
            )
            return

        normalized = file_path[len(prefix) + 1 :]
        self._normalized[file_path] = normalized

        owner = self._claimed.setdefault(normalized, file_path)
        if owner != file_path:
            logger.warning(
                "%s and %s both normalize to %s; using absolute paths",
                owner,
                file_path,
                normalized,
            )
            self._conflicted.add(normalized)

    def alias(self, identifier: str, file_path: str) -> None:
        """Let a host-reported identifier resolve through a registered path."""
        if identifier != file_path:
            self._aliases.setdefault(identifier, file_path)

    def resolve(self, file_path: str) -> str:
        """Display name for a path; the path itself when no clean name exists."""
        canonical = self._aliases.get(file_path, file_path)
        normalized = self._normalized.get(canonical)
        if normalized is None or normalized in self._conflicted:
            return file_path
        return normalized

    def is_registered(self, file_path: str) -> bool:
        return file_path in self._include_dirs

    @property
    def conflicts(self) -> frozenset[str]:
        return frozenset(self._conflicted)
