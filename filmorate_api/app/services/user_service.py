"""
Business logic for users and the friend graph.

``UserService`` validates user payloads before they reach storage and
derives friend lists from the storage's friendship edges.  Friendship
is mutual: one ``add_friend`` call makes each user appear in the
other's friend list.  The service keeps no state of its own.
"""

import logging
from typing import List

from ..core.exceptions import ValidationError
from ..schemas.user import UserCreate, UserRead, UserUpdate
from ..storage.base import UserStorage
from .validation import normalize_user, validate_user


logger = logging.getLogger(__name__)


class UserService:
    """Сервис для работы с пользователями и списками друзей."""

    def __init__(self, users: UserStorage) -> None:
        self.users = users

    async def create_user(self, data: UserCreate) -> UserRead:
        """Validate and store a new user.

        A blank ``name`` is replaced by the login before storing.
        """
        validate_user(data)
        user = self.users.add_user(normalize_user(data))
        logger.info("Создан пользователь %s (%s)", user.id, user.login)
        return user

    async def update_user(self, data: UserUpdate) -> UserRead:
        """Replace the stored user identified by ``data.id``.

        Raises ``ValidationError`` when the id is missing or the payload
        is invalid, ``NotFoundError`` when no such user exists.
        """
        if data.id is None:
            raise ValidationError("Для обновления пользователя необходимо указать id.")
        validate_user(data)
        user = self.users.update_user(data.id, normalize_user(data))
        logger.info("Обновлён пользователь %s", user.id)
        return user

    async def list_users(self) -> List[UserRead]:
        return self.users.list_users()

    async def get_user(self, user_id: int) -> UserRead:
        logger.debug("Получение пользователя по id %s", user_id)
        return self.users.get_user(user_id)

    async def add_friend(self, user_id: int, friend_id: int) -> None:
        """Make two existing users friends.

        Both users are looked up first, so a missing user leaves the
        friend graph untouched.  Adding an existing friendship is a
        no-op; befriending oneself is rejected.
        """
        if user_id == friend_id:
            raise ValidationError("Пользователь не может добавить в друзья самого себя.")
        self.users.get_user(user_id)
        self.users.get_user(friend_id)
        self.users.add_friend(user_id, friend_id)
        logger.info("Пользователи %s и %s теперь друзья", user_id, friend_id)

    async def remove_friend(self, user_id: int, friend_id: int) -> None:
        """End a friendship between two existing users; silent if there was none."""
        self.users.get_user(user_id)
        self.users.get_user(friend_id)
        self.users.remove_friend(user_id, friend_id)
        logger.info("Пользователи %s и %s больше не друзья", user_id, friend_id)

    async def get_friends(self, user_id: int) -> List[UserRead]:
        self.users.get_user(user_id)
        return self.users.get_users(self.users.get_friend_ids(user_id))

    async def get_common_friends(self, user_id: int, other_id: int) -> List[UserRead]:
        """Return the users who are friends of both ``user_id`` and ``other_id``."""
        self.users.get_user(user_id)
        self.users.get_user(other_id)
        user_friends = self.users.get_friend_ids(user_id)
        other_friends = self.users.get_friend_ids(other_id)
        if not user_friends or not other_friends:
            return []
        return self.users.get_users(user_friends & other_friends)
