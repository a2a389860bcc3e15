from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..todo_api.data_models import TaskState


class TaskModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    label: str = Field(min_length=1)
    state: TaskState = TaskState.open
    dueDate: Optional[str] = None  # keep ISO string
    lateDate: Optional[str] = None
    completionDate: Optional[str] = None
    createdDate: Optional[str] = None
    doneVisibleHours: Optional[float] = None
    archived: bool = False
    collapsed: bool = False
    children: List[TaskModel] = []
    # allow other fields (notes, tags, etc.)

    @field_validator("label")
    @classmethod
    def label_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("label must not be blank")
        return v

    @field_validator("state", mode="before")
    @classmethod
    def normalise_state(cls, v):  # noqa D401
        """Accept 'in_progress' / 'In Progress' spellings for in-progress."""
        if isinstance(v, str):
            return v.strip().lower().replace("_", "-").replace(" ", "-")
        return v


class TaskListModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    doneVisibleHours: Optional[float] = None
    tasks: List[TaskModel] = []

    @field_validator("tasks", mode="before")
    @classmethod
    def ensure_list(cls, v):  # noqa D401
        """Allow a single top-level task object instead of a list."""
        if isinstance(v, dict):
            return [v]
        return v


TaskModel.model_rebuild()
