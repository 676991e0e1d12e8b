"""Board page and task JSON API."""

from fastapi import APIRouter, Query, Request, Response, status
from fastapi.templating import Jinja2Templates

from eisenhower.core.config import constants
from eisenhower.domain.create_models import TaskCreate
from eisenhower.domain.task import BOARD_COLUMNS, COLUMN_TITLES, Board, Task
from eisenhower.domain.update_models import BucketReorder, TaskMove, TaskTitleUpdate
from eisenhower.services import task_service


router = APIRouter(tags=["tasks"])

templates = Jinja2Templates(directory=str(constants.TEMPLATES_DIR))


@router.get("/")
async def get_board_page(request: Request) -> Response:
    """Render the matrix with its five columns and the completed list."""
    board = await task_service.list_board()
    return templates.TemplateResponse(
        request,
        name="board.html",
        context={
            "columns": [(bucket, COLUMN_TITLES[bucket], board.columns[bucket]) for bucket in BOARD_COLUMNS],
            "completed": board.completed[: constants.COMPLETED_LIST_LIMIT],
        },
    )


@router.get("/api/board")
async def get_board() -> Board:
    """Active columns in display order plus the completed list."""
    return await task_service.list_board()


@router.get("/api/tasks/completed")
async def get_completed(limit: int = Query(default=constants.COMPLETED_LIST_LIMIT, ge=1)) -> list[Task]:
    """Completed panel, most recently completed first."""
    return await task_service.list_completed(limit=limit)


@router.get("/api/tasks/{task_id}")
async def get_task(task_id: int) -> Task:
    return await task_service.get_task(task_id=task_id)


@router.post("/api/tasks", status_code=status.HTTP_201_CREATED)
async def create_task(payload: TaskCreate) -> Task:
    return await task_service.create_task(title=payload.title, bucket=payload.bucket)


@router.patch("/api/tasks/{task_id}")
async def edit_task_title(task_id: int, payload: TaskTitleUpdate) -> Task:
    return await task_service.edit_title(task_id=task_id, title=payload.title)


@router.post("/api/tasks/move")
async def move_task(payload: TaskMove) -> Task:
    """Drop a task at ``index`` of ``bucket``."""
    return await task_service.move_task(task_id=payload.id, bucket=payload.bucket, index=payload.index)


@router.post("/api/tasks/reorder", status_code=status.HTTP_204_NO_CONTENT)
async def reorder_bucket(payload: BucketReorder) -> Response:
    """Persist the order of one column after a drag within it."""
    await task_service.reorder_bucket(bucket=payload.bucket, ordered_ids=payload.ordered_ids)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/api/tasks/{task_id}/complete")
async def complete_task(task_id: int) -> Task:
    return await task_service.complete_task(task_id=task_id)


@router.post("/api/tasks/{task_id}/restore")
async def restore_task(task_id: int) -> Task:
    return await task_service.restore_task(task_id=task_id)


@router.post("/api/tasks/{task_id}/toggle")
async def toggle_task(task_id: int) -> Task:
    """Done/undo button: complete an active task or restore a completed one."""
    return await task_service.toggle_task(task_id=task_id)


@router.delete("/api/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int) -> Response:
    await task_service.delete_task(task_id=task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
