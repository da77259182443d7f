"""Task aggregation, collection and rendering."""

from taskcollect.tasks.collector import (
    CollectionCache,
    collect_tasks,
    parse_content_to_tasks,
)
from taskcollect.tasks.render import render_markdown
from taskcollect.tasks.template import generate_task_list_template
from taskcollect.tasks.tree import MalformedEntry, RootAggregate

__all__ = [
    "CollectionCache",
    "MalformedEntry",
    "RootAggregate",
    "collect_tasks",
    "generate_task_list_template",
    "parse_content_to_tasks",
    "render_markdown",
]
