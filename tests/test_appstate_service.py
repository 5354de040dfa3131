from taskflow.modules.appstate.service import AppStateService
from taskflow.modules.groups.schemas import GroupCreate, GroupJoin
from taskflow.modules.groups.service import GroupService


def test_missing_state_reads_as_empty(supabase, make_user):
    assert AppStateService(supabase).get_app_state(make_user("alice")) == {}


def test_writes_replace_wholesale(supabase, make_user):
    alice = make_user("alice")
    service = AppStateService(supabase)

    service.set_app_state(alice, {"rewards": ["cake"], "categories": ["home"]})
    service.set_app_state(alice, {"rewards": []})

    assert service.get_app_state(alice) == {"rewards": []}
    assert len(supabase.rows("app_state")) == 1


def test_group_members_share_one_blob(supabase, make_user, fresh):
    alice, bob, carol = make_user("alice"), make_user("bob"), make_user("carol")
    groups = GroupService(supabase)
    group = groups.create_group(alice, GroupCreate(name="Home"))
    groups.join_group(bob, GroupJoin(invite_code=group.invite_code))
    service = AppStateService(supabase)

    service.set_app_state(fresh(alice), {"pool": [1, 2]})

    assert service.get_app_state(fresh(bob)) == {"pool": [1, 2]}
    assert service.get_app_state(carol) == {}
    assert supabase.rows("app_state")[0]["id"] == group.id
