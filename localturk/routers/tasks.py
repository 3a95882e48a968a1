import logging
import os
import signal
from pathlib import Path
from urllib.parse import quote
from fastapi import APIRouter, BackgroundTasks, Depends, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from ..auth import is_known_user
from ..config import Settings
from ..services.render import DEFAULT_LOGIN_PAGE, render_login_page, render_task_page, worker_field
from ..services.turk import TaskService
from ..storage.csv_store import EmptyTableError

logger = logging.getLogger(__name__)

router = APIRouter()

def get_service(request: Request) -> TaskService:
    return request.app.state.service

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def _shutdown():
    logger.info("All tasks completed, shutting down")
    os.kill(os.getpid(), signal.SIGINT)

@router.get("/", response_class=HTMLResponse)
def login_page(msg: str | None = None, settings: Settings = Depends(get_settings)):
    path = Path(settings.login_page)
    page = path.read_text(encoding="utf-8") if path.exists() else DEFAULT_LOGIN_PAGE
    message = "Invalid id, try again!" if msg == "invalidId" else ""
    return render_login_page(page, message)

@router.post("/login-form")
def login(uid: str = Form(""), settings: Settings = Depends(get_settings)):
    if is_known_user(uid, settings.user_db):
        return RedirectResponse(f"/task?uid={quote(uid.strip())}", status_code=303)
    return RedirectResponse("/?msg=invalidId", status_code=303)

@router.get("/task", response_class=HTMLResponse)
def next_task(
    background: BackgroundTasks,
    uid: str | None = Query(default=None),
    service: TaskService = Depends(get_service),
    settings: Settings = Depends(get_settings),
):
    if not uid:
        return HTMLResponse('No User ID <a href="/">Go to login screen</a>', status_code=400)
    stats = service.next_task()
    if stats.done:
        logger.info("No tasks left (%d / %d)", stats.num_completed, stats.num_total)
        if settings.exit_when_done:
            background.add_task(_shutdown)
        return HTMLResponse("DONE")
    logger.info("Serving task to %s: %s", uid, stats.task)
    template = Path(settings.template_file).read_text(encoding="utf-8")
    return render_task_page(template, stats, uid, service.flash.take_and_clear())

@router.post("/submit")
async def submit(request: Request, service: TaskService = Depends(get_service)):
    form = await request.form()
    columns = set(service.tasks.read_headers())
    record = {}
    for k in form.keys():
        values = [str(v) for v in form.getlist(k)]
        # hidden echo of the task value comes first in the page
        record[k] = values[0] if k in columns else ",".join(values)
    service.submit(record)
    uid = record.get(worker_field(columns), "")
    return RedirectResponse(f"/task?uid={quote(uid)}", status_code=303)

@router.post("/delete-last")
def delete_last(service: TaskService = Depends(get_service)):
    try:
        service.undo_last()
    except EmptyTableError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return RedirectResponse("/", status_code=303)
