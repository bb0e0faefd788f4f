import pytest

from filmorate_api.app.core.exceptions import NotFoundError, ValidationError
from filmorate_api.app.schemas.user import UserUpdate
from filmorate_api.app.services.user_service import UserService
from tests.factories import make_user


pytestmark = pytest.mark.anyio


@pytest.fixture
def service(storages):
    return UserService(storages.users)


async def _create(service, *logins):
    return [await service.create_user(make_user(login)) for login in logins]


async def test_create_user_defaults_name_to_login(service):
    user = await service.create_user(make_user("dolore", name=""))
    assert user.id == 1
    assert user.name == "dolore"


async def test_invalid_user_is_not_stored(service):
    with pytest.raises(ValidationError):
        await service.create_user(make_user("do lore"))
    assert await service.list_users() == []


async def test_update_user_requires_id(service):
    with pytest.raises(ValidationError):
        await service.update_user(UserUpdate(**make_user("alice").model_dump()))


async def test_update_unknown_user(service):
    with pytest.raises(NotFoundError):
        await service.update_user(UserUpdate(id=9999, **make_user("alice").model_dump()))


async def test_update_user(service):
    (user,) = await _create(service, "alice")
    payload = UserUpdate(id=user.id, **make_user("alice", name="", email="new@example.com").model_dump())
    updated = await service.update_user(payload)
    assert updated.email == "new@example.com"
    assert updated.name == "alice"
    assert (await service.get_user(user.id)).email == "new@example.com"


async def test_friendship_is_mutual(service):
    a, b = await _create(service, "a", "b")
    await service.add_friend(a.id, b.id)
    assert [user.id for user in await service.get_friends(a.id)] == [b.id]
    assert [user.id for user in await service.get_friends(b.id)] == [a.id]


async def test_cannot_befriend_self(service):
    (a,) = await _create(service, "a")
    with pytest.raises(ValidationError):
        await service.add_friend(a.id, a.id)
    assert await service.get_friends(a.id) == []


async def test_add_unknown_friend_leaves_graph_untouched(service):
    a, b = await _create(service, "a", "b")
    await service.add_friend(a.id, b.id)
    with pytest.raises(NotFoundError):
        await service.add_friend(a.id, 9999)
    assert [user.id for user in await service.get_friends(a.id)] == [b.id]


async def test_remove_friend_is_idempotent(service):
    a, b = await _create(service, "a", "b")
    await service.add_friend(a.id, b.id)
    await service.remove_friend(a.id, b.id)
    await service.remove_friend(a.id, b.id)
    assert await service.get_friends(a.id) == []
    assert await service.get_friends(b.id) == []


async def test_friends_of_unknown_user(service):
    with pytest.raises(NotFoundError):
        await service.get_friends(9999)


async def test_friends_ordered_by_id(service):
    a, b, c, d = await _create(service, "a", "b", "c", "d")
    await service.add_friend(a.id, d.id)
    await service.add_friend(a.id, b.id)
    await service.add_friend(c.id, a.id)
    assert [user.id for user in await service.get_friends(a.id)] == [b.id, c.id, d.id]


async def test_common_friends(service):
    a, b, c, d = await _create(service, "a", "b", "c", "d")
    await service.add_friend(a.id, c.id)
    await service.add_friend(b.id, c.id)
    await service.add_friend(a.id, d.id)
    common = await service.get_common_friends(a.id, b.id)
    assert [user.id for user in common] == [c.id]
    assert [user.id for user in await service.get_common_friends(b.id, a.id)] == [c.id]


async def test_common_friends_empty_when_one_side_has_none(service):
    a, b, c = await _create(service, "a", "b", "c")
    await service.add_friend(a.id, c.id)
    assert await service.get_common_friends(a.id, b.id) == []


async def test_common_friends_unknown_user(service):
    (a,) = await _create(service, "a")
    with pytest.raises(NotFoundError):
        await service.get_common_friends(a.id, 9999)


async def test_common_friends_of_a_triangle(service):
    a, b, c = await _create(service, "a", "b", "c")
    await service.add_friend(a.id, b.id)
    await service.add_friend(a.id, c.id)
    await service.add_friend(b.id, c.id)
    assert [user.id for user in await service.get_common_friends(a.id, b.id)] == [c.id]
