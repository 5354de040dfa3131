import pytest

from taskflow.modules.groups.schemas import GroupCreate, GroupJoin
from taskflow.modules.groups.service import GroupService
from taskflow.modules.notifications.schemas import TASK_ASSIGNED, TASK_DONE
from taskflow.modules.notifications.service import NotificationService


@pytest.fixture()
def household(supabase, make_user, fresh):
    """alice and bob share a group; returns (alice, bob, group id)."""
    alice, bob = make_user("alice"), make_user("bob")
    groups = GroupService(supabase)
    group = groups.create_group(alice, GroupCreate(name="Home"))
    groups.join_group(bob, GroupJoin(invite_code=group.invite_code))
    return fresh(alice), fresh(bob), group.id


def _task(group_id, **overrides):
    task = {"id": "t1", "title": "Trash", "creator_id": "creator", "assignee": None,
            "group_id": group_id, "owner_id": None}
    task.update(overrides)
    return task


def test_assigned_message_names_actor_and_title(supabase, household, fresh):
    alice, bob, group_id = household
    service = NotificationService(supabase)

    assert service.notify_assigned(alice, _task(group_id, creator_id=alice["id"], assignee=bob["id"])) is True

    [notification] = fresh(bob)["notifications"]
    assert notification["type"] == TASK_ASSIGNED
    assert notification["text"] == 'alice assigned you "Trash"'
    assert notification["task_id"] == "t1"
    assert len(notification["id"]) == 8


def test_self_assignment_by_actor_is_silent(supabase, household, fresh):
    alice, bob, group_id = household

    sent = NotificationService(supabase).notify_assigned(
        bob, _task(group_id, creator_id=alice["id"], assignee=bob["id"])
    )

    assert sent is False
    assert fresh(bob)["notifications"] == []


def test_done_message_goes_to_creator(supabase, household, fresh):
    alice, bob, group_id = household
    service = NotificationService(supabase)

    assert service.notify_done(bob, _task(group_id, creator_id=alice["id"])) is True
    assert service.notify_done(alice, _task(group_id, creator_id=alice["id"])) is False

    [notification] = fresh(alice)["notifications"]
    assert notification["type"] == TASK_DONE
    assert notification["text"] == 'bob completed "Trash"'


def test_unknown_assignee_is_skipped(supabase, household):
    alice, _, group_id = household

    assert NotificationService(supabase).notify_assigned(alice, _task(group_id, assignee="ghost")) is False


def test_assignee_outside_task_scope_is_skipped(supabase, household, make_user, fresh):
    alice, _, group_id = household
    carol = make_user("carol")
    service = NotificationService(supabase)

    group_task = _task(group_id, creator_id=alice["id"], assignee=carol["id"])
    solo_task = _task(None, creator_id=alice["id"], owner_id=alice["id"], assignee=carol["id"])

    assert service.notify_assigned(alice, group_task) is False
    assert service.notify_assigned(alice, solo_task) is False
    assert fresh(carol)["notifications"] == []


def test_mailbox_keeps_append_order_and_clears(supabase, household, fresh):
    alice, bob, group_id = household
    service = NotificationService(supabase)
    service.notify_assigned(alice, _task(group_id, id="t1", creator_id=alice["id"], assignee=bob["id"]))
    service.notify_assigned(alice, _task(group_id, id="t2", creator_id=alice["id"], assignee=bob["id"]))

    listed = service.list_notifications(fresh(bob))
    assert [n.task_id for n in listed] == ["t1", "t2"]

    assert service.clear_notifications(bob) is True
    assert service.list_notifications(fresh(bob)) == []


def test_dispatch_failure_is_swallowed(supabase, household, fresh):
    alice, bob, group_id = household
    supabase.failures.add(("users", "update"))

    result = NotificationService(supabase).notify_assigned(
        alice, _task(group_id, creator_id=alice["id"], assignee=bob["id"])
    )

    assert result is False
    supabase.failures.clear()
    assert fresh(bob)["notifications"] == []
