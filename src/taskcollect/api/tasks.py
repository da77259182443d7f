"""Task collection API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from taskcollect.api.dependencies import get_collection_cache, get_connector, get_settings
from taskcollect.config import Settings
from taskcollect.models import (
    CollectionResponse,
    ListItemResponse,
    MalformedEntryResponse,
    PeriodTasksResponse,
    SourceResponse,
    TaskResponse,
    TemporalResponse,
)
from taskcollect.tasks.collector import CollectionCache, collect_tasks
from taskcollect.tasks.render import render_markdown
from taskcollect.tasks.template import generate_task_list_template
from taskcollect.tasks.tree import MalformedEntry, RootAggregate, TaskNode, TemporalNode
from taskcollect.temporal.classifier import WeekRange
from taskcollect.temporal.dates import DateFormatError, InvalidRangeError, Week, YMD
from taskcollect.vault.checkbox import is_all_checked
from taskcollect.vault.connector import RootPathNotFoundError
from taskcollect.vault.listtree import ListNode

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["tasks"])

RootPaths = Annotated[list[str] | None, Query(alias="root")]


def _get_collected(
    settings: Settings, cache: CollectionCache, root_paths: list[str] | None
) -> tuple[RootAggregate, list[str]]:
    """Collect tasks for the requested roots, debounced through the cache."""
    connector = get_connector(settings)
    if connector is None:
        raise HTTPException(status_code=503, detail="Vault path not configured or missing")

    roots = root_paths or settings.root_paths
    try:
        tasks = cache.get_or_collect(roots, lambda: collect_tasks(connector, roots))
    except RootPathNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return tasks, roots


def _checkbox_value(node: ListNode) -> str | None:
    state = node.checkbox_state
    return state.value if state is not None else None


def _list_item(node: ListNode) -> ListItemResponse:
    return ListItemResponse(
        text=node.text,
        raw_text=node.raw_text,
        checkbox=_checkbox_value(node),
        children=[_list_item(child) for child in node.children],
    )


def _task(task: TaskNode) -> TaskResponse:
    subtree = task.list_subtree
    return TaskResponse(
        text=subtree.text,
        raw_text=subtree.raw_text,
        checkbox=_checkbox_value(subtree),
        all_checked=is_all_checked(subtree),
        children=[_list_item(child) for child in subtree.children],
    )


def _temporal(node: TemporalNode) -> TemporalResponse:
    temporal = node.temporal
    if isinstance(temporal, WeekRange):
        kind, start, end = "week", temporal.week.start, temporal.week.end
    else:
        kind, start, end = "day", temporal.date, temporal.date
    return TemporalResponse(
        kind=kind,
        label=str(temporal),
        anchor=str(temporal.anchor),
        start=str(start),
        end=str(end),
        sources=[
            SourceResponse(
                open_uri=source.source_file.open_uri,
                display_name=source.source_file.display_name,
                tasks=[_task(task) for task in source.children],
            )
            for source in node.children
        ],
    )


def _malformed(entry: MalformedEntry) -> MalformedEntryResponse:
    return MalformedEntryResponse(
        reason=entry.reason,
        text=entry.node.raw_text,
        open_uri=entry.node.source_file.open_uri,
        display_name=entry.node.source_file.display_name,
        message=str(entry),
    )


@router.get("/tasks", response_model=CollectionResponse)
def list_tasks(
    settings: Annotated[Settings, Depends(get_settings)],
    cache: Annotated[CollectionCache, Depends(get_collection_cache)],
    root: RootPaths = None,
) -> CollectionResponse:
    """Collected days and weeks with their sources and tasks."""
    tasks, roots = _get_collected(settings, cache, root)
    return CollectionResponse(
        root_paths=roots,
        task_count=tasks.task_count(),
        temporals=[_temporal(node) for node in tasks.children],
        malformed=[_malformed(entry) for entry in tasks.malformed_entries],
    )


@router.get("/tasks/markdown", response_class=PlainTextResponse)
def tasks_markdown(
    settings: Annotated[Settings, Depends(get_settings)],
    cache: Annotated[CollectionCache, Depends(get_collection_cache)],
    root: RootPaths = None,
) -> PlainTextResponse:
    """The collected tasks rendered as a Markdown overview."""
    tasks, _roots = _get_collected(settings, cache, root)
    content = render_markdown(tasks, old_task_days=settings.old_task_days)
    return PlainTextResponse(content, media_type="text/markdown")


@router.get("/tasks/template", response_class=PlainTextResponse)
def task_template(
    start: Annotated[str, Query(description="First day, YYYY/MM/DD")],
    end: Annotated[str, Query(description="Last day, YYYY/MM/DD")],
) -> PlainTextResponse:
    """A daily/weekly skeleton to paste into a note."""
    try:
        text = generate_task_list_template(YMD.parse(start), YMD.parse(end))
    except (DateFormatError, InvalidRangeError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return PlainTextResponse(text, media_type="text/markdown")


def _parse_date(text: str) -> YMD:
    try:
        return YMD.parse(text)
    except DateFormatError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/tasks/day", response_model=PeriodTasksResponse)
def tasks_for_day(
    date: Annotated[str, Query(description="Day, YYYY/MM/DD")],
    settings: Annotated[Settings, Depends(get_settings)],
    cache: Annotated[CollectionCache, Depends(get_collection_cache)],
    root: RootPaths = None,
) -> PeriodTasksResponse:
    """Tasks listed under a single day."""
    ymd = _parse_date(date)
    tasks, _roots = _get_collected(settings, cache, root)
    found = tasks.tasks_for_day(ymd)
    if found is None:
        raise HTTPException(status_code=404, detail=f"No tasks for {ymd}")
    return PeriodTasksResponse(label=str(ymd), tasks=[_task(task) for task in found])


@router.get("/tasks/week", response_model=PeriodTasksResponse)
def tasks_for_week(
    date: Annotated[str, Query(description="Any day of the week, YYYY/MM/DD")],
    settings: Annotated[Settings, Depends(get_settings)],
    cache: Annotated[CollectionCache, Depends(get_collection_cache)],
    root: RootPaths = None,
) -> PeriodTasksResponse:
    """Tasks listed under the Monday-to-Sunday week containing ``date``."""
    week = Week.from_ymd(_parse_date(date))
    tasks, _roots = _get_collected(settings, cache, root)
    found = tasks.tasks_for_week(week)
    if found is None:
        raise HTTPException(status_code=404, detail=f"No tasks for {week}")
    return PeriodTasksResponse(label=str(week), tasks=[_task(task) for task in found])
