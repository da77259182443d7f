"""Build parent/child bullet trees from indentation alone."""

from __future__ import annotations

import weakref
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from taskcollect.vault.lines import CheckState, ListLine, parse_checkbox
from taskcollect.visitor import NodeKind, walk

DEFAULT_INDENT_STEP = 2
MARKDOWN_INDENT = "  "


@dataclass(frozen=True)
class SourceFile:
    """Where a bullet came from: a URI to open it and a name to show."""

    open_uri: str
    display_name: str


ROOT_SOURCE = SourceFile(open_uri="ROOT", display_name="ROOT")


class ListParseError(ValueError):
    """A hunk whose indentation cannot be turned into a tree."""

    def __init__(self, source_file: SourceFile, message: str) -> None:
        super().__init__(f"{source_file.display_name}: Unable to parse: {message}")
        self.source_file = source_file


class MalformedIndentationError(ListParseError):
    """A line indented by something other than a multiple of the hunk's step."""


class IndentJumpError(ListParseError):
    """A line nested more than one level deeper than the line before it."""


@dataclass(eq=False)
class ListNode:
    """One bullet and its nested bullets, in document order.

    The parent link is a weak reference; the tree is owned top-down through
    ``children``.
    """

    source_file: SourceFile
    text: str
    check_mark: str | None = None
    children: list[ListNode] = field(default_factory=list)
    _parent: weakref.ReferenceType[ListNode] | None = field(default=None, repr=False)

    @classmethod
    def from_content(cls, source_file: SourceFile, content: str) -> ListNode:
        checkbox = parse_checkbox(content)
        if checkbox is None:
            return cls(source_file=source_file, text=content)
        mark, text = checkbox
        return cls(source_file=source_file, text=text, check_mark=mark)

    @classmethod
    def new_root(cls) -> ListNode:
        return cls(source_file=ROOT_SOURCE, text="ROOT")

    @property
    def kind(self) -> NodeKind:
        return NodeKind.LIST

    @property
    def parent(self) -> ListNode | None:
        return self._parent() if self._parent is not None else None

    @property
    def is_root(self) -> bool:
        return self.source_file == ROOT_SOURCE and self._parent is None

    @property
    def checkbox_state(self) -> CheckState | None:
        return CheckState.from_mark(self.check_mark)

    @property
    def raw_text(self) -> str:
        """Bullet content as written, checkbox included."""
        if self.check_mark is None:
            return self.text
        return f"[{self.check_mark}] {self.text}"

    def add_child(self, child: ListNode) -> None:
        child._parent = weakref.ref(self)
        self.children.append(child)

    def generate_markdown(self, initial_indent: int = 0) -> str:
        """Render this node and its descendants as a 2-space indented list."""
        generator = _MarkdownGenerator()
        walk(self, generator, initial_indent)
        return "".join(f"{line}\n" for line in generator.lines)


class _MarkdownGenerator:
    """Visitor whose context is the indentation depth of the current node."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def enter(self, node: ListNode, ctx: int) -> Callable[[], int]:
        self.lines.append(f"{MARKDOWN_INDENT * ctx}- {node.raw_text}".rstrip())
        return lambda: ctx + 1

    def exit(self, node: ListNode, ctx: int, children_ctx: list[int], children_results: list[None]) -> None:
        return None


def minimum_indent_step(lines: Sequence[ListLine]) -> int:
    """Smallest positive raw indentation in the hunk, or 2 if nothing is indented."""
    indents = [line.indent_len for line in lines if line.indent_len > 0]
    return min(indents) if indents else DEFAULT_INDENT_STEP


def build_tree(source_file: SourceFile, lines: Sequence[ListLine]) -> ListNode:
    """Turn one hunk of bullet lines into a tree under a sentinel root.

    Each line is attached relative to the previous one: same level makes a
    sibling, one level deeper makes a child, shallower walks up the parent
    links. Any tab or space width works as long as it is consistent within
    the hunk.

    Raises:
        MalformedIndentationError: A line's indentation is not a multiple of
            the hunk's indentation step.
        IndentJumpError: A line is more than one level deeper than the
            previous line.
    """
    step = minimum_indent_step(lines)
    root = ListNode.new_root()
    last_node = root
    last_level = -1
    for line in lines:
        level = line.indent_level(step)
        if level is None:
            raise MalformedIndentationError(
                source_file,
                f"Malformed indentation ({line.indent_len} chars, step {step}): {line.raw_text!r}",
            )
        if level > last_level + 1:
            raise IndentJumpError(
                source_file, f"Indent level increased: from {last_level} to {level}"
            )

        if level == last_level + 1:
            parent = last_node
        else:
            parent = last_node.parent
            for _ in range(last_level - level):
                parent = parent.parent if parent is not None else None
        if parent is None:
            raise ListParseError(source_file, f"No parent at level {level}: {line.raw_text!r}")

        node = ListNode.from_content(source_file, line.content)
        parent.add_child(node)
        last_node = node
        last_level = level
    return root
