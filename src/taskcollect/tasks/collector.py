"""Collect tasks from note text into aggregate trees."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from taskcollect.tasks.tree import MalformedEntry, RootAggregate
from taskcollect.temporal.classifier import TemporalClassificationError, classify_temporal
from taskcollect.vault.connector import VaultConnector
from taskcollect.vault.lines import split_hunks
from taskcollect.vault.listtree import ListNode, ListParseError, SourceFile, build_tree

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 1.0


def aggregate_hunk(list_root: ListNode) -> RootAggregate:
    """Classify each root-level bullet of a parsed hunk.

    Bullets that are not a day or a week are recorded as malformed entries
    and processing continues with the next one.
    """
    tasks = RootAggregate()
    for dated in list_root.children:
        try:
            temporal = classify_temporal(dated.text)
        except TemporalClassificationError as e:
            tasks.add_malformed(MalformedEntry(reason=e.reason, node=dated))
            continue
        tasks.add_tasks(temporal, dated.source_file, list(dated.children))
    return tasks


def parse_content_to_tasks(source_file: SourceFile, content: str) -> RootAggregate | None:
    """Build the partial aggregate for one file.

    Hunks without any day or week are dropped whole, malformed bullets
    included, so incidental lists in prose do not show up as malformed.
    Hunks with broken indentation are skipped with a warning.

    Returns:
        The file's aggregate, or None when it contributes no tasks.
    """
    tasks = RootAggregate()
    for hunk in split_hunks(content):
        try:
            list_root = build_tree(source_file, hunk)
        except ListParseError as e:
            logger.warning("Skipping hunk: %s", e)
            continue
        hunk_tasks = aggregate_hunk(list_root)
        if hunk_tasks.has_valid_data():
            tasks.merge(hunk_tasks)
    return tasks if tasks.has_valid_data() else None


def collect_tasks(connector: VaultConnector, root_paths: Iterable[str]) -> RootAggregate:
    """Collect tasks from every note under the given root paths."""
    start = time.time()
    tasks = RootAggregate()
    files = 0
    seen: set[Path] = set()
    for root_path in sorted(root_paths_key(root_paths)):
        for relative in connector.list_notes(root_path):
            if relative in seen:
                continue
            seen.add(relative)
            try:
                source_file, content = connector.read_source(root_path, relative)
            except Exception as e:
                # Log error but continue with other notes
                logger.warning("Error reading %s: %s", relative, e)
                continue
            files += 1
            file_tasks = parse_content_to_tasks(source_file, content)
            if file_tasks is None:
                continue
            for entry in file_tasks.malformed_entries:
                logger.info("%s", entry)
            tasks.merge(file_tasks)
    tasks.sort_by_date()
    logger.info(
        "Collected %d tasks in %d periods from %d files (%d malformed) in %dms",
        tasks.task_count(),
        len(tasks.children),
        files,
        len(tasks.malformed_entries),
        int((time.time() - start) * 1000),
    )
    return tasks


def root_paths_key(root_paths: Iterable[str]) -> frozenset[str]:
    """Order-independent cache key for a set of root paths."""
    return frozenset(path.strip().strip("/") for path in root_paths)


@dataclass
class CollectionCache:
    """Last collected tree per root-path set, with a short staleness window.

    A collection for a key is skipped when the previous one for the same key
    started less than ``staleness_seconds`` ago. Collections are serialised
    by a lock, so concurrent requests never race on the timestamps.
    """

    staleness_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    clock: Callable[[], float] = time.monotonic
    _entries: dict[frozenset[str], tuple[float, RootAggregate]] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get_or_collect(
        self, root_paths: Iterable[str], collect: Callable[[], RootAggregate]
    ) -> RootAggregate:
        key = root_paths_key(root_paths)
        with self._lock:
            now = self.clock()
            cached = self._entries.get(key)
            if cached is not None and now < cached[0] + self.staleness_seconds:
                logger.debug("Debounce %s", sorted(key))
                return cached[1]
            logger.debug("Update %s", sorted(key))
            tasks = collect()
            self._entries[key] = (now, tasks)
            return tasks

    def invalidate(self, root_paths: Iterable[str] | None = None) -> None:
        with self._lock:
            if root_paths is None:
                self._entries.clear()
            else:
                self._entries.pop(root_paths_key(root_paths), None)
