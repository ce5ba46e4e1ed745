from datetime import timezone

from tasktrack import models
from tasktrack.models import Priority
from tasktrack.result import ValidationError


def test_new_task_defaults():
    t = models.new_task(1, "Buy milk")
    assert t.id == 1
    assert t.description == "Buy milk"
    assert t.completed is False
    assert t.priority is Priority.MEDIUM
    assert t.tags == ()
    assert t.created_at.tzinfo == timezone.utc


def test_complete_and_uncomplete_are_idempotent():
    t = models.new_task(1, "A")
    done = models.complete(t)
    assert done.completed is True
    assert models.complete(done) == done
    assert t.completed is False

    undone = models.uncomplete(done)
    assert undone.completed is False
    assert models.uncomplete(undone) == undone
    assert undone.created_at == t.created_at


def test_set_priority_ok():
    t = models.new_task(1, "A")
    res = models.set_priority(t, Priority.HIGH)
    assert res.is_ok()
    assert res.value.priority is Priority.HIGH

    res = models.set_priority(t, "low")
    assert res.unwrap().priority is Priority.LOW


def test_set_priority_invalid_leaves_task_unchanged():
    t = models.set_priority(models.new_task(1, "A"), "high").unwrap()
    res = models.set_priority(t, "urgent")
    assert not res.is_ok()
    assert isinstance(res.error, ValidationError)
    assert t.priority is Priority.HIGH

    assert not models.set_priority(t, None).is_ok()
    assert not models.set_priority(t, 3).is_ok()


def test_add_tag_prepends_without_dedup():
    t = models.new_task(1, "A")
    t2 = models.add_tag(models.add_tag(t, "home"), "urgent")
    t3 = models.add_tag(t2, "home")
    assert t2.tags == ("urgent", "home")
    assert t3.tags == ("home", "urgent", "home")
    assert t.tags == ()
