import random

import pytest

from localturk.services.integrity import NO_NEW_KEYS_WARNING
from localturk.services.turk import TaskService
from localturk.storage.csv_store import CsvStore, EmptyTableError

from .helpers import write_csv


def test_missing_output_table_means_nothing_completed(service, outputs_file):
    assert not outputs_file.exists()
    stats = service.next_task()
    assert stats.num_completed == 0
    assert stats.num_total == 3
    assert stats.task is not None


@pytest.mark.parametrize("seed", [0, 3, 11])
def test_every_task_is_served_exactly_once(tasks_file, outputs_file, seed):
    service = TaskService(CsvStore(tasks_file), CsvStore(outputs_file), rng=random.Random(seed))
    served = []
    while True:
        stats = service.next_task()
        if stats.done:
            break
        assert stats.num_completed == len(served)
        served.append(stats.task)
        service.submit(dict(stats.task, uid="bob", answer="yes"))
    assert len(served) == 3
    assert sorted(t["a"] for t in served) == ["1", "2", "3"]
    assert stats.num_completed == stats.num_total == 3


def test_state_survives_a_new_service_instance(tasks_file, outputs_file):
    first = TaskService(CsvStore(tasks_file), CsvStore(outputs_file), rng=random.Random(1))
    task = first.next_task().task
    first.submit(dict(task, uid="bob", answer="no"))

    restarted = TaskService(CsvStore(tasks_file), CsvStore(outputs_file), rng=random.Random(1))
    for _ in range(20):
        stats = restarted.next_task()
        assert stats.task != task
        assert stats.num_completed == 1


def test_empty_task_table_is_done_immediately(tmp_path, outputs_file):
    tasks = write_csv(tmp_path / "empty.csv", [["a", "b"]])
    stats = TaskService(CsvStore(tasks), CsvStore(outputs_file)).next_task()
    assert stats.done
    assert stats.num_total == 0


def test_submission_without_answer_fields_sets_flash(service):
    task = service.next_task().task
    assert service.submit(dict(task, uid="bob")) is None  # uid is new to the task table
    assert service.flash.take_and_clear() is None

    assert service.submit({"a": "1", "b": "x"}) == NO_NEW_KEYS_WARNING
    assert service.flash.take_and_clear() == NO_NEW_KEYS_WARNING
    assert service.flash.take_and_clear() is None


def test_submission_is_kept_even_with_a_warning(service, outputs_file):
    service.submit({"a": "1", "b": "x"})
    assert list(CsvStore(outputs_file).read_all()) == [{"a": "1", "b": "x"}]


def test_undo_makes_the_task_available_again(tasks_file, outputs_file):
    service = TaskService(CsvStore(tasks_file), CsvStore(outputs_file))
    for row in CsvStore(tasks_file).read_all():
        service.submit(dict(row, answer="y"))
    assert service.next_task().done

    removed = service.undo_last()
    assert removed == {"a": "3", "b": "z", "answer": "y"}
    stats = service.next_task()
    assert stats.task == {"a": "3", "b": "z"}
    assert stats.num_completed == 2


def test_undo_with_no_outputs(service):
    with pytest.raises(EmptyTableError):
        service.undo_last()
