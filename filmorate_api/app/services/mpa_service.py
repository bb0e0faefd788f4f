"""Read access to the MPA rating reference table."""

import logging
from typing import List

from ..schemas.mpa import MpaRead
from ..storage.base import MpaStorage


logger = logging.getLogger(__name__)


class MpaService:
    def __init__(self, mpa: MpaStorage) -> None:
        self.mpa = mpa

    async def list_mpa(self) -> List[MpaRead]:
        return self.mpa.list_mpa()

    async def get_mpa(self, mpa_id: int) -> MpaRead:
        logger.debug("Поиск MPA рейтинга по id %s", mpa_id)
        return self.mpa.get_mpa(mpa_id)
