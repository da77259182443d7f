"""Vault connector for reading notes under a set of root folders."""

import fnmatch
import logging
from pathlib import Path

from taskcollect.vault.listtree import SourceFile
from taskcollect.vault.parser import note_body

logger = logging.getLogger(__name__)


class RootPathNotFoundError(FileNotFoundError):
    """A root path that is not a folder inside the vault."""


class VaultConnector:
    """Connects to an Obsidian vault and reads notes."""

    DEFAULT_EXCLUDES = [
        ".obsidian/*",
        ".trash/*",
        "node_modules/*",
        ".git/*",
    ]

    def __init__(
        self,
        vault_path: Path,
        include_patterns: list[str] | None = None,
        exclude_patterns: list[str] | None = None,
    ) -> None:
        """Initialize the vault connector.

        Args:
            vault_path: Path to the Obsidian vault root.
            include_patterns: Glob patterns for files to include. Defaults to ["**/*.md"].
            exclude_patterns: Glob patterns for files to exclude.
        """
        self.vault_path = vault_path
        self.include_patterns = include_patterns or ["**/*.md"]
        self.exclude_patterns = (
            exclude_patterns if exclude_patterns is not None else self.DEFAULT_EXCLUDES
        )

    def _should_exclude(self, relative_path: str) -> bool:
        """Check if a file should be excluded based on patterns."""
        return any(fnmatch.fnmatch(relative_path, pattern) for pattern in self.exclude_patterns)

    def root_dir(self, root_path: str) -> Path:
        """Resolve a vault-relative root folder; "" is the vault itself.

        Raises:
            RootPathNotFoundError: If the folder does not exist.
        """
        root = self.vault_path / root_path.strip().strip("/")
        if not root.resolve().is_relative_to(self.vault_path.resolve()) or not root.is_dir():
            raise RootPathNotFoundError(f"No root folder found: {root_path!r}")
        return root

    def list_notes(self, root_path: str = "") -> list[Path]:
        """List note files under a root folder.

        Returns:
            Paths relative to the vault root, sorted.
        """
        root = self.root_dir(root_path)
        notes: list[Path] = []
        for pattern in self.include_patterns:
            for file_path in root.glob(pattern):
                if file_path.is_file():
                    relative = file_path.relative_to(self.vault_path)
                    if not self._should_exclude(relative.as_posix()):
                        notes.append(relative)
        return sorted(set(notes))

    def read_note(self, relative_path: Path) -> str:
        """Read a single note.

        Args:
            relative_path: Path to the note, relative to vault root.

        Returns:
            The note body without its frontmatter.
        """
        full_path = self.vault_path / relative_path
        return note_body(full_path.read_text(encoding="utf-8"))

    def source_file(self, root_path: str, relative_path: Path) -> SourceFile:
        """Identity of a note: a file URI and its path below the root, sans .md."""
        full_path = (self.vault_path / relative_path).resolve()
        root = root_path.strip().strip("/")
        below_root = relative_path.relative_to(root) if root else relative_path
        return SourceFile(
            open_uri=full_path.as_uri(),
            display_name=below_root.with_suffix("").as_posix(),
        )

    def read_source(self, root_path: str, relative_path: Path) -> tuple[SourceFile, str]:
        """Read a note body, frontmatter removed, with its source identity."""
        return self.source_file(root_path, relative_path), self.read_note(relative_path)
