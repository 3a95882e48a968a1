from pydantic import BaseModel, Field
from typing import Dict, Optional

Task = Dict[str, str]

class TaskStats(BaseModel):
    task: Optional[Task] = None  # None once every task has an output row
    num_completed: int = Field(ge=0)
    num_total: int = Field(ge=0)

    @property
    def done(self) -> bool:
        return self.task is None
