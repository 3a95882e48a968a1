import logging
import random
from typing import Dict, Iterator, Optional
from ..config import Settings
from ..models import Task, TaskStats
from ..storage.csv_store import CsvStore
from .completion import CompletionIndex
from .integrity import FlashMessage, check_output
from .selector import TaskSelector

logger = logging.getLogger(__name__)

class TaskService:
    """Serves tasks from the task table and records answers in the output table.

    Nothing is cached between calls: both CSV files are read again on every
    request so edits made on disk (or by undo) show up immediately. There is
    no locking around the output file; concurrent submissions are assumed to
    be rare enough that a plain append is acceptable.
    """

    def __init__(self, tasks: CsvStore, outputs: CsvStore, rng: Optional[random.Random] = None):
        self.tasks = tasks
        self.outputs = outputs
        self.selector = TaskSelector(rng)
        self.flash = FlashMessage()

    @classmethod
    def from_settings(cls, settings: Settings, rng: Optional[random.Random] = None) -> "TaskService":
        return cls(CsvStore(settings.tasks_file), CsvStore(settings.outputs_file), rng=rng)

    def completed_outputs(self) -> Iterator[Dict[str, str]]:
        if not self.outputs.exists():
            return iter(())
        return self.outputs.read_all()

    def next_task(self) -> TaskStats:
        index = CompletionIndex.build(self.completed_outputs())
        return self.selector.select_next(self.tasks.read_all(), index)

    def submit(self, record: Task) -> Optional[str]:
        self.outputs.append(record)
        logger.info("Saved %s", record)
        warning = check_output(record, self.tasks.read_headers())
        if warning:
            self.flash.set(warning)
        return warning

    def undo_last(self) -> Task:
        row = self.outputs.remove_last()
        logger.info("Deleted last output row %s", row)
        return row
