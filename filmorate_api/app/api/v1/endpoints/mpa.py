"""MPA rating endpoints for API v1 (read only)."""

from typing import List

from fastapi import APIRouter, Depends

from filmorate_api.app.api.deps import get_mpa_service
from filmorate_api.app.schemas.mpa import MpaRead
from filmorate_api.app.services.mpa_service import MpaService


router = APIRouter()


@router.get("", response_model=List[MpaRead])
async def list_mpa(service: MpaService = Depends(get_mpa_service)) -> List[MpaRead]:
    return await service.list_mpa()


@router.get("/{mpa_id}", response_model=MpaRead)
async def get_mpa(
    mpa_id: int,
    service: MpaService = Depends(get_mpa_service),
) -> MpaRead:
    return await service.get_mpa(mpa_id)
