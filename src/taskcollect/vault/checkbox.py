"""Completion state of checklist subtrees."""

from taskcollect.vault.lines import CheckState
from taskcollect.vault.listtree import ListNode


def has_unchecked(node: ListNode) -> bool | None:
    """Tri-state search for an undone checkbox in a subtree.

    Returns True as soon as any descendant subtree reports an undone box.
    Otherwise falls back to the node's own box: True if undone, False if
    done, None if it has no checkbox. Checkbox-less nodes are transparent.
    """
    for child in node.children:
        if has_unchecked(child):
            return True
    state = node.checkbox_state
    if state is None:
        return None
    return state is CheckState.UNDONE


def is_all_checked(node: ListNode) -> bool:
    """True when nothing under ``node`` is undone and ``node`` itself is done.

    A node without a checkbox of its own is never all checked, even when
    every descendant is done.
    """
    if has_unchecked(node):
        return False
    return node.checkbox_state is CheckState.DONE
