"""
Task endpoints: the HTML form write path, the line-delimited read path and a
small JSON API over the same task collection.
"""
from datetime import datetime
from typing import Iterable, List, Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request
from fastapi.responses import RedirectResponse, StreamingResponse
from pydantic import AliasChoices, BaseModel, Field
import logging

from app.core.config import settings
from app.models.task import Task, TaskOrder, InvalidArgument
from app.services.form_parsing import (
    InvalidFormField,
    parse_date,
    parse_duration,
    parse_importance,
    parse_task_id,
)
from app.services.task_collection import TaskCollection, TaskNotFound
from app.services.task_store import TaskStoreError

# Initialize logger
logger = logging.getLogger(__name__)

form_router = APIRouter(tags=["tasks"])
router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def get_task_collection(request: Request) -> TaskCollection:
    """The collection owned by the running application."""
    return request.app.state.task_collection


# Pydantic schemas for request/response validation
class TaskResponse(BaseModel):
    """Wire format of a task."""
    name: str
    due_date: datetime = Field(
        ...,
        validation_alias=AliasChoices("dueDate", "due_date"),
        serialization_alias="dueDate",
    )
    category: int
    duration: int
    id: int

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "name": "Finish quarterly report",
                "dueDate": "2025-12-15T00:00:00Z",
                "category": 1,
                "duration": 30,
                "id": 1
            }
        }


class TaskListResponse(BaseModel):
    """Response schema for list of tasks."""
    tasks: List[TaskResponse]
    total: int


class CategoryUpdate(BaseModel):
    """Request schema for moving a task to another quadrant."""
    category: int = Field(..., description="Eisenhower quadrant, 1 (do first) to 4 (eliminate)")

    class Config:
        json_schema_extra = {
            "example": {"category": 2}
        }


def task_to_json(task: Task) -> str:
    return TaskResponse.model_validate(task).model_dump_json(by_alias=True)


def _json_lines(tasks: Iterable[Task]):
    for task in tasks:
        yield task_to_json(task) + "\n"


def _parse_order(order: Optional[str]) -> TaskOrder:
    try:
        return TaskOrder.parse(order)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))


def _store_unavailable(e: TaskStoreError) -> HTTPException:
    return HTTPException(status_code=503, detail=f"Task store unavailable: {e}")


# ============================================================================
# FORM ENDPOINTS
# ============================================================================


@form_router.get("/add-task")
async def stream_tasks(
    order: Optional[str] = Query(None, description="category, duration or due_date"),
    collection: TaskCollection = Depends(get_task_collection),
):
    """
    Emit every task as one JSON document per line, sorted by `order`
    (category by default).
    """
    tasks = collection.list_sorted_by(_parse_order(order))
    return StreamingResponse(_json_lines(tasks), media_type="application/json")


@form_router.post("/add-task")
async def submit_task_form(
    name: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    importance: Optional[str] = Form(None),
    duration: Optional[str] = Form(None),
    id: Optional[str] = Form(None),
    collection: TaskCollection = Depends(get_task_collection),
):
    """
    Create or delete a task from the matrix form.

    A non-blank `id` field selects the delete path; otherwise a task is
    created from `name`, `date` (yyyy-MM-dd), `importance` (1-4) and an
    optional `duration` in minutes. Redirects to / on success only.
    """
    try:
        if id is not None and id.strip():
            await collection.remove(parse_task_id(id))
        else:
            await collection.create(
                name or "",
                parse_date(date),
                parse_importance(importance),
                parse_duration(duration, settings.default_task_duration),
            )
    except (InvalidFormField, InvalidArgument) as e:
        logger.info(f"Rejected task form: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except TaskStoreError as e:
        raise _store_unavailable(e)

    return RedirectResponse(url="/", status_code=303)


# ============================================================================
# JSON API
# ============================================================================


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    order: Optional[str] = Query(None, description="category, duration or due_date"),
    collection: TaskCollection = Depends(get_task_collection),
):
    """List tasks sorted by a single key (category by default)."""
    tasks = collection.list_sorted_by(_parse_order(order))
    return TaskListResponse(tasks=tasks, total=len(tasks))


@router.post("/reload")
async def reload_tasks(collection: TaskCollection = Depends(get_task_collection)):
    """Rebuild the in-memory collection from the task store."""
    try:
        loaded = await collection.load()
    except TaskStoreError as e:
        raise _store_unavailable(e)
    return {"loaded": loaded}


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, collection: TaskCollection = Depends(get_task_collection)):
    task = collection.get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@router.patch("/{task_id}/category", response_model=TaskResponse)
async def update_task_category(
    task_id: int,
    payload: CategoryUpdate,
    collection: TaskCollection = Depends(get_task_collection),
):
    """Move a task to another Eisenhower quadrant."""
    try:
        return await collection.reclassify(task_id, payload.category)
    except TaskNotFound:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TaskStoreError as e:
        raise _store_unavailable(e)


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: int, collection: TaskCollection = Depends(get_task_collection)):
    """
    Delete a task from the store and the collection.

    Returns 204 whether or not the task existed.
    """
    try:
        await collection.remove(task_id)
    except TaskStoreError as e:
        raise _store_unavailable(e)
    return None
