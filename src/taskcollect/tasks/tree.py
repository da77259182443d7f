"""Aggregate tree: Root -> Temporal -> Source -> Task.

Tasks from many files are grouped under one node per temporal value, then
one node per source file. Task payloads are the raw bullet subtrees and are
never inspected or rewritten here.
"""

from __future__ import annotations

import datetime
import logging
import weakref
from dataclasses import dataclass, field

from taskcollect.temporal.classifier import Day, Temporal, WeekRange
from taskcollect.temporal.dates import YMD, Week
from taskcollect.vault.listtree import ListNode, SourceFile
from taskcollect.visitor import NodeKind

logger = logging.getLogger(__name__)


class AggregateInvariantError(RuntimeError):
    """A task inserted under a temporal/source chain it does not belong to."""


@dataclass(frozen=True)
class MalformedEntry:
    """A root-level bullet whose text is neither a day nor a week."""

    reason: str
    node: ListNode

    def __str__(self) -> str:
        return f"{self.node.source_file.display_name}: Malformed because: {self.reason}"


@dataclass(eq=False)
class TaskNode:
    """A leaf wrapping one task bullet and its nested checklist."""

    temporal: Temporal
    source_file: SourceFile
    list_subtree: ListNode
    _parent: weakref.ReferenceType[SourceNode] | None = field(default=None, repr=False)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.TASK

    @property
    def children(self) -> tuple[()]:
        return ()

    @property
    def parent(self) -> SourceNode | None:
        return self._parent() if self._parent is not None else None


@dataclass(eq=False)
class SourceNode:
    """All tasks one file contributed to one temporal value."""

    temporal: Temporal
    source_file: SourceFile
    children: list[TaskNode] = field(default_factory=list)
    _parent: weakref.ReferenceType[TemporalNode] | None = field(default=None, repr=False)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.SOURCE

    @property
    def parent(self) -> TemporalNode | None:
        return self._parent() if self._parent is not None else None

    def add_task(self, task: TaskNode) -> None:
        if task.temporal != self.temporal or task.source_file != self.source_file:
            raise AggregateInvariantError(
                f"Task for ({task.temporal}, {task.source_file.display_name}) inserted under "
                f"({self.temporal}, {self.source_file.display_name})"
            )
        task._parent = weakref.ref(self)
        self.children.append(task)


@dataclass(eq=False)
class TemporalNode:
    """Sources grouped under one day or week, unique by source file."""

    temporal: Temporal
    children: list[SourceNode] = field(default_factory=list)
    _parent: weakref.ReferenceType[RootAggregate] | None = field(default=None, repr=False)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.TEMPORAL

    @property
    def parent(self) -> RootAggregate | None:
        return self._parent() if self._parent is not None else None

    def find_source(self, source_file: SourceFile) -> SourceNode | None:
        for source in self.children:
            if source.source_file == source_file:
                return source
        return None

    def add_source(self, source: SourceNode) -> None:
        if source.temporal != self.temporal:
            raise AggregateInvariantError(
                f"Source for {source.temporal} inserted under {self.temporal}"
            )
        if self.find_source(source.source_file) is not None:
            raise AggregateInvariantError(
                f"Duplicate source {source.source_file.display_name} under {self.temporal}"
            )
        source._parent = weakref.ref(self)
        self.children.append(source)

    def find_or_create_source(self, source_file: SourceFile) -> SourceNode:
        source = self.find_source(source_file)
        if source is None:
            source = SourceNode(temporal=self.temporal, source_file=source_file)
            self.add_source(source)
        return source

    def tasks(self) -> list[TaskNode]:
        return [task for source in self.children for task in source.children]


@dataclass(eq=False)
class RootAggregate:
    """Top of one collection run.

    ``malformed_entries`` is a side channel; malformed bullets never enter
    the temporal hierarchy.
    """

    children: list[TemporalNode] = field(default_factory=list)
    malformed_entries: list[MalformedEntry] = field(default_factory=list)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ROOT

    def has_valid_data(self) -> bool:
        return len(self.children) > 0

    def has_malformed_entries(self) -> bool:
        return len(self.malformed_entries) > 0

    def add_malformed(self, *entries: MalformedEntry) -> None:
        self.malformed_entries.extend(entries)

    def find_temporal(self, temporal: Temporal) -> TemporalNode | None:
        for node in self.children:
            if node.temporal == temporal:
                return node
        return None

    def add_temporal(self, node: TemporalNode) -> None:
        if self.find_temporal(node.temporal) is not None:
            raise AggregateInvariantError(f"Duplicate temporal node {node.temporal}")
        node._parent = weakref.ref(self)
        self.children.append(node)

    def find_or_create_temporal(self, temporal: Temporal) -> TemporalNode:
        node = self.find_temporal(temporal)
        if node is None:
            node = TemporalNode(temporal=temporal)
            self.add_temporal(node)
        return node

    def add_task(self, temporal: Temporal, source_file: SourceFile, list_subtree: ListNode) -> TaskNode:
        """Insert one task, creating its temporal and source nodes as needed.

        Identical tasks are not de-duplicated.
        """
        source = self.find_or_create_temporal(temporal).find_or_create_source(source_file)
        task = TaskNode(temporal=temporal, source_file=source_file, list_subtree=list_subtree)
        source.add_task(task)
        return task

    def add_tasks(
        self, temporal: Temporal, source_file: SourceFile, list_subtrees: list[ListNode]
    ) -> list[TaskNode]:
        # Registers the temporal/source shells even for a date with no tasks yet
        self.find_or_create_temporal(temporal).find_or_create_source(source_file)
        return [self.add_task(temporal, source_file, subtree) for subtree in list_subtrees]

    def merge(self, other: RootAggregate) -> None:
        """Move everything from ``other`` into this tree, leaving ``other`` empty.

        Temporal nodes missing here are moved across whole. Otherwise source
        nodes are moved or, when the source already exists, their tasks are
        appended. Child order follows merge order.
        """
        if other is self:
            return
        for temporal_node in other.children:
            target = self.find_temporal(temporal_node.temporal)
            if target is None:
                self.add_temporal(temporal_node)
                continue
            for source_node in temporal_node.children:
                existing = target.find_source(source_node.source_file)
                if existing is None:
                    target.add_source(source_node)
                    continue
                for task in source_node.children:
                    existing.add_task(task)
        self.add_malformed(*other.malformed_entries)
        other.children = []
        other.malformed_entries = []

    def sort_by_date(self, *, descending: bool = False) -> None:
        """Order temporal nodes by anchor date. Run on demand, not on insert.

        A week sorts before the day that shares its anchor.
        """
        self.children.sort(key=_temporal_sort_key, reverse=descending)

    def tasks_for(self, temporal: Temporal) -> list[TaskNode] | None:
        node = self.find_temporal(temporal)
        return node.tasks() if node is not None else None

    def tasks_for_day(self, date: YMD) -> list[TaskNode] | None:
        return self.tasks_for(Day(date))

    def tasks_for_week(self, week: Week) -> list[TaskNode] | None:
        return self.tasks_for(WeekRange(week))

    def week_starting(self, date: YMD) -> tuple[Week, list[TaskNode]] | None:
        """Find the week whose first day is ``date``."""
        for node in self.children:
            if isinstance(node.temporal, WeekRange) and node.temporal.week.start == date:
                return node.temporal.week, node.tasks()
        return None

    def earliest_latest(self) -> tuple[YMD, YMD] | None:
        """Earliest and latest dates mentioned by any day or week end."""
        dates: list[YMD] = []
        for node in self.children:
            if isinstance(node.temporal, WeekRange):
                dates.extend((node.temporal.week.start, node.temporal.week.end))
            else:
                dates.append(node.temporal.date)
        if not dates:
            return None
        return min(dates, key=YMD.to_date), max(dates, key=YMD.to_date)

    def task_count(self) -> int:
        return sum(len(node.tasks()) for node in self.children)


def _temporal_sort_key(node: TemporalNode) -> tuple[datetime.date, int]:
    temporal = node.temporal
    return temporal.anchor.to_date(), 0 if isinstance(temporal, WeekRange) else 1
