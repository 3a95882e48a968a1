import random
from typing import Optional
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from .config import Settings, settings as default_settings
from .routers import tasks
from .services.turk import TaskService

__version__ = "2.0.3"

def create_app(settings: Optional[Settings] = None, rng: Optional[random.Random] = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="localturk", version=__version__)
    app.state.settings = settings
    app.state.service = TaskService.from_settings(settings, rng=rng)
    app.include_router(tasks.router)
    static_dir = settings.resolved_static_dir()
    if static_dir.is_dir():
        # mounted last so the routes above take precedence
        app.mount("/", StaticFiles(directory=str(static_dir)), name="static")
    return app

app = create_app()
