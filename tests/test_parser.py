"""Tests for markdown parsing and the vault connector."""

from pathlib import Path

import pytest

from taskcollect.vault.connector import RootPathNotFoundError, VaultConnector
from taskcollect.vault.parser import note_body


class TestNoteBody:
    def test_frontmatter_removed(self):
        body = note_body("---\ntitle: Week 10\ntags: [a]\n---\n- 2025/03/05\n")
        assert body.strip() == "- 2025/03/05"

    def test_frontmatter_lists_removed(self):
        body = note_body("---\ntags:\n  - 2025/03/05\n---\nbody\n")
        assert "2025/03/05" not in body

    def test_no_frontmatter(self):
        assert note_body("- 2025/03/05\n").strip() == "- 2025/03/05"


class TestVaultConnector:
    def test_list_notes_sorted_and_excludes(self, vault: Path, write_note):
        write_note("b.md", "x")
        write_note("a/c.md", "x")
        write_note(".obsidian/workspace.md", "x")
        write_note("notes.txt", "x")

        notes = VaultConnector(vault).list_notes()

        assert notes == [Path("a/c.md"), Path("b.md")]

    def test_list_notes_under_root(self, vault: Path, write_note):
        write_note("journal/a.md", "x")
        write_note("other/b.md", "x")

        assert VaultConnector(vault).list_notes("journal/") == [Path("journal/a.md")]

    def test_missing_root(self, vault: Path):
        with pytest.raises(RootPathNotFoundError):
            VaultConnector(vault).list_notes("missing")

    def test_root_outside_vault(self, vault: Path):
        (vault.parent / "outside").mkdir()
        with pytest.raises(RootPathNotFoundError):
            VaultConnector(vault).list_notes("../outside")

    def test_root_must_be_a_folder(self, vault: Path, write_note):
        write_note("file.md", "x")
        with pytest.raises(RootPathNotFoundError):
            VaultConnector(vault).list_notes("file.md")

    def test_read_source(self, vault: Path, write_note):
        write_note("journal/w10.md", "---\ntitle: t\n---\n- 2025/03/05\n")

        source, content = VaultConnector(vault).read_source("journal", Path("journal/w10.md"))

        assert source.display_name == "w10"
        assert source.open_uri.startswith("file://")
        assert source.open_uri.endswith("/journal/w10.md")
        assert content.strip() == "- 2025/03/05"
