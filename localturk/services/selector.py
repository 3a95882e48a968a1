import random
from typing import Iterable, List, Optional
from ..models import Task, TaskStats
from .completion import CompletionIndex

class TaskSelector:
    def __init__(self, rng: Optional[random.Random] = None):
        # tests pass a seeded Random; production shuffles unseeded
        self.rng = rng or random.Random()

    def shuffled(self, tasks: Iterable[Task]) -> List[Task]:
        order = list(tasks)
        self.rng.shuffle(order)
        return order

    def select_next(self, tasks: Iterable[Task], index: CompletionIndex) -> TaskStats:
        next_task: Optional[Task] = None
        num_total = 0
        for task in self.shuffled(tasks):
            num_total += 1
            if next_task is None and not index.contains(task):
                next_task = task
        return TaskStats(task=next_task, num_completed=len(index), num_total=num_total)
