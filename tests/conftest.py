from pathlib import Path
import random
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from localturk.config import Settings
from localturk.services.turk import TaskService
from localturk.storage.csv_store import CsvStore

from .helpers import write_csv


@pytest.fixture()
def tasks_file(tmp_path):
    return write_csv(tmp_path / "tasks.csv", [
        ["a", "b"],
        ["1", "x"],
        ["2", "y"],
        ["3", "z"],
    ])


@pytest.fixture()
def outputs_file(tmp_path):
    return tmp_path / "outputs.csv"


@pytest.fixture()
def service(tasks_file, outputs_file):
    return TaskService(CsvStore(tasks_file), CsvStore(outputs_file), rng=random.Random(7))


@pytest.fixture()
def settings(tmp_path, tasks_file, outputs_file):
    template = tmp_path / "template.html"
    template.write_text('<p>a=${a} b=${b}</p><input name="answer">', encoding="utf-8")
    return Settings(
        template_file=str(template),
        tasks_file=str(tasks_file),
        outputs_file=str(outputs_file),
        user_db=str(tmp_path / "users.csv"),
        login_page=str(tmp_path / "missing-login.html"),
        exit_when_done=False,
        open_browser=False,
    )
