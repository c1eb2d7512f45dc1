import logging
from models.race_upload import RegistrationStatus
from repositories.race_marker_repository import RaceMarkerRepository

logger = logging.getLogger(__name__)


class RaceRegistrar:
    """Ensures a single durable marker exists for every uploaded race id.

    Registration is an idempotent marker only: an id that is already known is
    reported as ALREADY_EXISTED and the upload carries on, so the same race
    can be uploaded again to publish corrections.
    """

    def __init__(self, repository: RaceMarkerRepository):
        self.repository = repository

    async def ensure_registered(self, race_id: str) -> RegistrationStatus:
        """
        Register race_id if it has never been seen.

        Args:
            race_id: Non-empty race identifier

        Returns:
            REGISTERED if a marker was inserted, ALREADY_EXISTED otherwise

        Raises:
            StoreError: the marker store failed for a reason other than "not found"
        """
        if not race_id:
            raise ValueError("race_id must be a non-empty string")

        if await self.repository.exists(race_id):
            logger.info(f"[Registrar] Race {race_id} already registered")
            return RegistrationStatus.ALREADY_EXISTED

        logger.info(f"[Registrar] No race of id {race_id} found, registering")

        if not await self.repository.insert_if_absent(race_id):
            logger.info(f"[Registrar] Race {race_id} registered concurrently")
            return RegistrationStatus.ALREADY_EXISTED

        return RegistrationStatus.REGISTERED
