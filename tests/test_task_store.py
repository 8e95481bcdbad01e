"""
Unit tests for taskmanager.store.task_store.TaskStore.
"""
import threading

import pytest

from taskmanager.errors import NotFoundError
from taskmanager.models import NewTask, TaskChanges, TaskStatus
from taskmanager.store import TaskStore


class TestSeed:
    def test_seeded_store(self, store):
        tasks = store.list()
        assert len(tasks) == 1
        assert tasks[0].id == 1
        assert tasks[0].title == "Sample Task"
        assert tasks[0].description == "This is a sample task"
        assert tasks[0].status is TaskStatus.PENDING
        assert store.next_id == 2

    def test_unseeded_store(self, empty_store):
        assert empty_store.list() == []
        assert empty_store.next_id == 1

    def test_instances_are_independent(self, clock):
        a = TaskStore(clock=clock)
        b = TaskStore(clock=clock)
        a.create(NewTask(title="only in a"))
        assert len(a) == 2
        assert len(b) == 1


class TestCreate:
    def test_assigns_sequential_ids(self, store):
        first = store.create(NewTask(title="a"))
        second = store.create(NewTask(title="b"))
        assert (first.id, second.id) == (2, 3)

    def test_stamps_both_timestamps_equal(self, store):
        task = store.create(NewTask(title="a"))
        assert task.created_at == task.updated_at

    def test_keeps_insertion_order(self, empty_store):
        for title in ("c", "a", "b"):
            empty_store.create(NewTask(title=title))
        assert [t.title for t in empty_store.list()] == ["c", "a", "b"]

    def test_ids_not_reused_after_delete(self, store):
        task = store.create(NewTask(title="a"))
        store.delete(task.id)
        again = store.create(NewTask(title="b"))
        assert again.id == task.id + 1


class TestGet:
    def test_get_existing(self, store):
        assert store.get(1).title == "Sample Task"

    def test_get_missing(self, store):
        with pytest.raises(NotFoundError):
            store.get(99)

    def test_returns_copy(self, store):
        task = store.get(1)
        task.title = "mutated"
        assert store.get(1).title == "Sample Task"


class TestList:
    @pytest.fixture
    def mixed(self, empty_store):
        empty_store.create(NewTask(title="p"))
        empty_store.create(NewTask(title="i", status=TaskStatus.IN_PROGRESS))
        empty_store.create(NewTask(title="c1", status=TaskStatus.COMPLETED))
        empty_store.create(NewTask(title="c2", status=TaskStatus.COMPLETED))
        return empty_store

    def test_filter_exact(self, mixed):
        assert [t.title for t in mixed.list("completed")] == ["c1", "c2"]
        assert [t.title for t in mixed.list("in-progress")] == ["i"]

    def test_unknown_filter_is_empty(self, mixed):
        assert mixed.list("Completed") == []
        assert mixed.list("done") == []

    @pytest.mark.parametrize("status", [None, ""])
    def test_no_filter(self, mixed, status):
        assert len(mixed.list(status)) == 4


class TestUpdate:
    def test_applies_only_supplied_fields(self, store):
        before = store.get(1)
        after = store.update(1, TaskChanges(status=TaskStatus.COMPLETED))
        assert after.title == before.title
        assert after.description == before.description
        assert after.status is TaskStatus.COMPLETED

    def test_empty_description_clears(self, store):
        assert store.update(1, TaskChanges(description="")).description == ""

    def test_absent_description_unchanged(self, store):
        assert store.update(1, TaskChanges(title="New")).description == "This is a sample task"

    def test_refreshes_updated_at_only(self, store):
        before = store.get(1)
        after = store.update(1, TaskChanges(title="New"))
        assert after.updated_at > before.updated_at
        assert after.created_at == before.created_at

    def test_missing(self, store):
        with pytest.raises(NotFoundError):
            store.update(42, TaskChanges(title="x"))


class TestSetStatus:
    @pytest.mark.parametrize("status", list(TaskStatus))
    def test_any_transition(self, store, status):
        store.set_status(1, TaskStatus.COMPLETED)
        assert store.set_status(1, status).status is status

    def test_refreshes_updated_at(self, store):
        before = store.get(1)
        assert store.set_status(1, TaskStatus.COMPLETED).updated_at > before.updated_at

    def test_missing(self, store):
        with pytest.raises(NotFoundError):
            store.set_status(42, TaskStatus.PENDING)


class TestDelete:
    def test_returns_removed_record(self, store):
        removed = store.delete(1)
        assert removed.id == 1
        assert len(store) == 0

    def test_second_delete_fails(self, store):
        store.delete(1)
        with pytest.raises(NotFoundError):
            store.delete(1)
        with pytest.raises(NotFoundError):
            store.get(1)


class TestStats:
    def test_counts(self, store):
        store.create(NewTask(title="a", status=TaskStatus.IN_PROGRESS))
        store.create(NewTask(title="b", status=TaskStatus.COMPLETED))
        store.create(NewTask(title="c", status=TaskStatus.COMPLETED))
        stats = store.stats()
        assert (stats.total, stats.pending, stats.in_progress, stats.completed) == (4, 1, 1, 2)

    def test_buckets_sum_to_total_through_mutations(self, empty_store):
        statuses = list(TaskStatus)
        for i in range(12):
            empty_store.create(NewTask(title=f"t{i}", status=statuses[i % 3]))
        empty_store.set_status(1, TaskStatus.COMPLETED)
        empty_store.update(2, TaskChanges(status=TaskStatus.PENDING))
        empty_store.delete(3)
        empty_store.delete(7)
        stats = empty_store.stats()
        assert stats.total == 10
        assert stats.pending + stats.in_progress + stats.completed == stats.total

    def test_empty(self, empty_store):
        assert empty_store.stats().to_dict() == {"total": 0, "pending": 0, "in-progress": 0, "completed": 0}


class TestConcurrency:
    def test_parallel_creates_get_unique_ids(self, empty_store):
        def worker():
            for _ in range(50):
                empty_store.create(NewTask(title="t"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [t.id for t in empty_store.list()]
        assert len(ids) == 400
        assert len(set(ids)) == 400
        assert empty_store.next_id == 401
