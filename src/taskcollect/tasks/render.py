"""Render an aggregate tree as a Markdown overview."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from taskcollect.tasks.tree import RootAggregate, SourceNode, TaskNode, TemporalNode
from taskcollect.temporal.classifier import Day, Temporal, WeekRange
from taskcollect.temporal.dates import YMD, gen_dates
from taskcollect.vault.checkbox import is_all_checked
from taskcollect.visitor import NodeKind, walk

logger = logging.getLogger(__name__)

INDENT = "  "
DEFAULT_OLD_TASK_DAYS = 7
NO_TASKS_TEXT = "No tasks found."


@dataclass
class _Block:
    """Lines rendered for one node, at a given list depth."""

    depth: int
    lines: list[str] = field(default_factory=list)


class MarkdownRenderer:
    """Visitor producing the Markdown overview.

    Each child gets its own block from the parent's context factory; parents
    assemble the blocks on exit. The number of hidden (all checked) tasks is
    returned from ``exit`` and summed on the way up. The tree is only read,
    never reordered; the root lays temporal blocks out day by day from the
    earliest to the latest date.
    """

    def __init__(self, today: YMD | None = None, old_task_days: int = DEFAULT_OLD_TASK_DAYS) -> None:
        self.today = today or YMD.today()
        self.old_bound = self.today.add_days(-old_task_days)

    def render(self, tasks: RootAggregate) -> str:
        if not tasks.has_valid_data() and not tasks.has_malformed_entries():
            return f"{NO_TASKS_TEXT}\n"
        block = _Block(depth=0)
        walk(tasks, self, block)
        return "\n".join(block.lines) + "\n"

    def enter(self, node: Any, ctx: _Block) -> Callable[[], _Block]:
        kind = node.kind
        if kind is NodeKind.ROOT:
            return lambda: _Block(depth=0)
        if kind in (NodeKind.TEMPORAL, NodeKind.SOURCE):
            return lambda: _Block(depth=ctx.depth + 1)
        if kind is NodeKind.TASK:
            return lambda: _Block(depth=ctx.depth)
        raise ValueError(f"Unexpected node kind: {kind}")

    def exit(
        self,
        node: Any,
        ctx: _Block,
        children_ctx: list[_Block],
        children_results: list[int],
    ) -> int:
        kind = node.kind
        if kind is NodeKind.TASK:
            return self._exit_task(node, ctx)
        if kind is NodeKind.SOURCE:
            return self._exit_source(node, ctx, children_ctx, children_results)
        if kind is NodeKind.TEMPORAL:
            return self._exit_temporal(node, ctx, children_ctx, children_results)
        if kind is NodeKind.ROOT:
            return self._exit_root(node, ctx, children_ctx, children_results)
        raise ValueError(f"Unexpected node kind: {kind}")

    def _exit_task(self, node: TaskNode, ctx: _Block) -> int:
        if is_all_checked(node.list_subtree):
            return 1
        ctx.lines.extend(node.list_subtree.generate_markdown(ctx.depth).splitlines())
        return 0

    def _exit_source(
        self, node: SourceNode, ctx: _Block, children_ctx: list[_Block], skipped: list[int]
    ) -> int:
        visible = [child for child in children_ctx if child.lines]
        if visible:
            ctx.lines.append(f"{INDENT * ctx.depth}- {node.source_file.display_name}")
            for child in visible:
                ctx.lines.extend(child.lines)
        return sum(skipped)

    def _exit_temporal(
        self, node: TemporalNode, ctx: _Block, children_ctx: list[_Block], skipped: list[int]
    ) -> int:
        ctx.lines.append(f"{INDENT * ctx.depth}- {self._label(node.temporal)}")
        for child in children_ctx:
            ctx.lines.extend(child.lines)
        total = sum(skipped)
        if total:
            ctx.lines.append(f"{INDENT * (ctx.depth + 1)}- {total} checked tasks")
        return total

    def _exit_root(
        self, node: RootAggregate, ctx: _Block, children_ctx: list[_Block], skipped: list[int]
    ) -> int:
        blocks = {
            temporal_node.temporal: child.lines
            for temporal_node, child in zip(node.children, children_ctx, strict=True)
        }
        old: list[str] = []
        current: list[str] = []
        bounds = node.earliest_latest()
        if bounds is not None:
            # One line per calendar day; a week goes right before its Monday
            for date in gen_dates(*bounds):
                target = old if date < self.old_bound else current
                week = node.week_starting(date)
                if week is not None:
                    target.extend(blocks[WeekRange(week[0])])
                day = Day(date)
                target.extend(blocks.get(day) or [f"- {self._label(day)}"])

        for title, lines in (("Old Tasks", old), ("Tasks", current)):
            if lines:
                ctx.lines.extend([f"## {title}", "", *lines, ""])

        if node.has_malformed_entries():
            ctx.lines.extend(["## Malformed contents", ""])
            ctx.lines.extend(f"- {entry}" for entry in node.malformed_entries)
            ctx.lines.append("")

        while ctx.lines and not ctx.lines[-1]:
            ctx.lines.pop()
        return sum(skipped)

    def _label(self, temporal: Temporal) -> str:
        if isinstance(temporal, WeekRange) and temporal.does_include(self.today):
            return f"**{temporal} (THIS WEEK)**"
        if isinstance(temporal, Day) and temporal.date == self.today:
            return f"**{temporal} (TODAY)**"
        return str(temporal)


def render_markdown(
    tasks: RootAggregate, *, today: YMD | None = None, old_task_days: int = DEFAULT_OLD_TASK_DAYS
) -> str:
    """Render the overview of a collected aggregate."""
    return MarkdownRenderer(today=today, old_task_days=old_task_days).render(tasks)


def write_rendered_file(output_file: Path, content: str) -> bool:
    """Write ``content`` unless the file already holds it.

    Returns:
        True if the file was written.
    """
    if output_file.exists() and output_file.read_text(encoding="utf-8") == content:
        logger.info("Rendered file unchanged: %s", output_file)
        return False
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(content, encoding="utf-8")
    logger.info("Wrote rendered file: %s", output_file)
    return True
