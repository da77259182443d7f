"""Pydantic models for the TaskCollect API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

CheckboxValue = Literal["done", "undone"]


class ListItemResponse(BaseModel):
    """A bullet inside a task's checklist."""

    text: str
    raw_text: str
    checkbox: CheckboxValue | None = None
    children: list[ListItemResponse] = Field(default_factory=list)


class TaskResponse(BaseModel):
    """One task bullet with its nested checklist."""

    text: str
    raw_text: str
    checkbox: CheckboxValue | None = None
    all_checked: bool
    children: list[ListItemResponse] = Field(default_factory=list)


class SourceResponse(BaseModel):
    """Tasks one file contributed to a day or week."""

    open_uri: str
    display_name: str
    tasks: list[TaskResponse]


class TemporalResponse(BaseModel):
    """A day or a Monday-to-Sunday week with its sources."""

    kind: Literal["day", "week"]
    label: str
    anchor: str
    start: str
    end: str
    sources: list[SourceResponse]


class MalformedEntryResponse(BaseModel):
    """A root bullet that is neither a day nor a week."""

    reason: str
    text: str
    open_uri: str
    display_name: str
    message: str


class CollectionResponse(BaseModel):
    """Response body for the /tasks endpoint."""

    root_paths: list[str]
    task_count: int
    temporals: list[TemporalResponse]
    malformed: list[MalformedEntryResponse]


class PeriodTasksResponse(BaseModel):
    """Tasks recorded for one day or one week, across all sources."""

    label: str
    tasks: list[TaskResponse]
