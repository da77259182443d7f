"""Vault connector, Markdown list parsing and checkbox state."""

from taskcollect.vault.checkbox import is_all_checked
from taskcollect.vault.connector import VaultConnector
from taskcollect.vault.listtree import ListNode, SourceFile, build_tree
from taskcollect.vault.parser import note_body

__all__ = [
    "ListNode",
    "SourceFile",
    "VaultConnector",
    "build_tree",
    "is_all_checked",
    "note_body",
]
