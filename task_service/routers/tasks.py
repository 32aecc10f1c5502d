import logging
import re
from typing import List
from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.exceptions import BadRequest, DecodeError
from ..core.task_store import TaskStore
from ..schemas.task import TaskPayload, TaskResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Task ids are signed 64-bit integers; anything outside is an invalid id
TASK_ID_MIN = -(2 ** 63)
TASK_ID_MAX = 2 ** 63 - 1
TASK_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# Body is read by hand, so document it for the OpenAPI schema explicitly
TASK_PAYLOAD_OPENAPI = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": TaskPayload.model_json_schema()}},
    }
}


def get_task_store(db: Session = Depends(get_db)) -> TaskStore:
    """Task store bound to the request's database session"""
    return TaskStore(db)


async def read_task_payload(request: Request) -> TaskPayload:
    """
    Decode the raw request body as a task payload

    The body is parsed as JSON whatever the Content-Type header says.
    """
    raw = await request.body()
    try:
        return TaskPayload.model_validate_json(raw)
    except PydanticValidationError as e:
        logger.info(f"Failed to decode request body: {e}")
        raise DecodeError() from e


def parse_task_id(raw_id: str) -> int:
    """Parse a base-10 task id, rejecting anything that is not a plain integer"""
    if not TASK_ID_PATTERN.fullmatch(raw_id):
        logger.info(f"Invalid task ID: {raw_id!r}")
        raise BadRequest()

    task_id = int(raw_id)
    if not TASK_ID_MIN <= task_id <= TASK_ID_MAX:
        logger.info(f"Task ID out of range: {raw_id!r}")
        raise BadRequest()
    return task_id


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_200_OK,
    openapi_extra=TASK_PAYLOAD_OPENAPI
)
def create_task(
    task_data: TaskPayload = Depends(read_task_payload),
    store: TaskStore = Depends(get_task_store)
):
    """Create a new task"""
    task_data.ensure_required()

    task = store.insert(task_data.title, task_data.description, task_data.status)
    return TaskResponse(**task.to_dict())


@router.get("", response_model=List[TaskResponse])
def get_tasks(store: TaskStore = Depends(get_task_store)):
    """List every task"""
    return [TaskResponse(**task.to_dict()) for task in store.fetch_all()]


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    store: TaskStore = Depends(get_task_store)
):
    """Get a specific task by ID"""
    task = store.fetch_by_id(parse_task_id(task_id))
    return TaskResponse(**task.to_dict())


@router.put(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    openapi_extra=TASK_PAYLOAD_OPENAPI
)
def update_task(
    task_id: str,
    task_data: TaskPayload = Depends(read_task_payload),
    store: TaskStore = Depends(get_task_store)
):
    """
    Overwrite title, description and status of a task

    Responds 204 even when no task has this id.
    """
    parsed_id = parse_task_id(task_id)
    task_data.ensure_required()

    store.update(parsed_id, task_data.title, task_data.description, task_data.status)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    store: TaskStore = Depends(get_task_store)
):
    """Delete a task; deleting a missing task is a no-op"""
    store.delete(parse_task_id(task_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
