"""
User endpoints for API v1.

CRUD for users plus the friend graph: adding and removing friends,
listing a user's friends and the friends two users have in common.
Errors raised by the service are turned into HTTP responses by the
exception handlers registered in ``main.py``.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from filmorate_api.app.api.deps import get_user_service
from filmorate_api.app.schemas.user import UserCreate, UserRead, UserUpdate
from filmorate_api.app.services.user_service import UserService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Register a new user.  An empty ``name`` is replaced by the login."""
    logger.info("POST /users: %s", user.login)
    return await service.create_user(user)


@router.put("", response_model=UserRead)
async def update_user(
    user: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Replace the user identified by ``id`` in the body."""
    logger.info("PUT /users: %s", user.id)
    return await service.update_user(user)


@router.get("", response_model=List[UserRead])
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    return await service.list_users()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    return await service.get_user(user_id)


@router.put("/{user_id}/friends/{friend_id}", status_code=status.HTTP_204_NO_CONTENT)
async def add_friend(
    user_id: int,
    friend_id: int,
    service: UserService = Depends(get_user_service),
) -> None:
    """Make two users friends.  Friendship is mutual."""
    await service.add_friend(user_id, friend_id)


@router.delete("/{user_id}/friends/{friend_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_friend(
    user_id: int,
    friend_id: int,
    service: UserService = Depends(get_user_service),
) -> None:
    """End a friendship.  Succeeds even if the users were not friends."""
    await service.remove_friend(user_id, friend_id)


@router.get("/{user_id}/friends", response_model=List[UserRead])
async def get_friends(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> List[UserRead]:
    return await service.get_friends(user_id)


@router.get("/{user_id}/friends/common/{other_id}", response_model=List[UserRead])
async def get_common_friends(
    user_id: int,
    other_id: int,
    service: UserService = Depends(get_user_service),
) -> List[UserRead]:
    return await service.get_common_friends(user_id, other_id)
