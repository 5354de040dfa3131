import pytest

from taskflow.core.exceptions import ConflictError, ValidationError
from taskflow.modules.appstate.service import AppStateService
from taskflow.modules.groups.schemas import GroupCreate, GroupJoin
from taskflow.modules.groups.service import GroupService
from taskflow.modules.tasks.service import TaskService
from taskflow.modules.users.schemas import LoginRequest, UserUpdate
from taskflow.modules.users.service import USER_COLORS, UserService


def test_login_creates_user_once(supabase):
    service = UserService(supabase)

    first = service.login(LoginRequest(username=" alice "))
    second = service.login(LoginRequest(username="alice"))

    assert first.user_id == second.user_id
    assert first.token == second.token
    assert len(first.token) == 64
    assert first.needs_setup is True
    stored = supabase.get("users", first.user_id)
    assert stored["name"] == "alice"
    assert stored["color"] in USER_COLORS
    assert stored["notifications"] == []


def test_login_requires_username(supabase):
    with pytest.raises(ValidationError):
        UserService(supabase).login(LoginRequest(username="  "))


def test_token_lookup(supabase):
    service = UserService(supabase)
    login = service.login(LoginRequest(username="alice"))

    assert service.get_user_by_token(login.token)["id"] == login.user_id
    assert service.get_user_by_token("nope") is None


def test_update_profile(supabase, make_user):
    alice = make_user("alice")

    updated = UserService(supabase).update_user(alice, UserUpdate(
        name="  ", color="#000000", color_overrides={"u2": "#ffffff"}, solo=True, theme="dark"
    ))

    assert updated.name == "alice"
    assert updated.color == "#000000"
    assert updated.color_overrides == {"u2": "#ffffff"}
    assert updated.solo is True
    assert updated.theme == "dark"


def test_solo_requires_leaving_group(supabase, make_user, fresh):
    alice = make_user("alice")
    GroupService(supabase).create_group(alice, GroupCreate(name="Home"))

    with pytest.raises(ConflictError):
        UserService(supabase).update_user(fresh(alice), UserUpdate(solo=True))


def test_visible_users_strip_private_fields(supabase, make_user, fresh):
    alice, bob, carol = make_user("alice"), make_user("bob"), make_user("carol")
    groups = GroupService(supabase)
    group = groups.create_group(alice, GroupCreate(name="Home"))
    groups.join_group(bob, GroupJoin(invite_code=group.invite_code))
    service = UserService(supabase)

    members = service.list_visible_users(fresh(alice))
    alone = service.list_visible_users(carol)

    assert sorted(m["name"] for m in members) == ["alice", "bob"]
    assert [m["name"] for m in alone] == ["carol"]
    for member in members + alone:
        assert "token" not in member
        assert "notifications" not in member


def test_delete_account_removes_private_data(supabase, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    tasks = TaskService(supabase)
    tasks.create_task(alice, {"title": "Mine"})
    tasks.create_task(bob, {"title": "Bob's"})
    AppStateService(supabase).set_app_state(alice, {"x": 1})

    UserService(supabase).delete_account(alice)

    assert supabase.get("users", alice["id"]) is None
    assert [t["title"] for t in supabase.rows("tasks")] == ["Bob's"]
    assert supabase.rows("app_state") == []
