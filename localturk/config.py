from pydantic import BaseModel
from pathlib import Path
from typing import Optional
import os

def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}

class Settings(BaseModel):
    template_file: str = os.getenv("LOCALTURK_TEMPLATE", "template.html")
    tasks_file: str = os.getenv("LOCALTURK_TASKS", "tasks.csv")
    outputs_file: str = os.getenv("LOCALTURK_OUTPUTS", "outputs.csv")
    port: int = int(os.getenv("LOCALTURK_PORT", 4321))
    static_dir: Optional[str] = os.getenv("LOCALTURK_STATIC_DIR")
    user_db: str = os.getenv("LOCALTURK_USER_DB", "meta/user_db.csv")
    login_page: str = os.getenv("LOCALTURK_LOGIN_PAGE", "login.html")
    exit_when_done: bool = _flag("LOCALTURK_EXIT_WHEN_DONE")
    open_browser: bool = _flag("LOCALTURK_OPEN_BROWSER", "1")
    log_level: str = os.getenv("LOCALTURK_LOG_LEVEL", "INFO")

    def resolved_static_dir(self) -> Path:
        # Handy when the template lives in a temp dir but its images do not.
        if self.static_dir:
            return Path(self.static_dir).resolve()
        return Path(self.template_file).resolve().parent

settings = Settings()
