"""
Reference indices built from fetched seasons and quests.
"""
import logging
from typing import Dict, Iterable, Optional

from gw2api.errors import CatalogError
from gw2api.schemas import Quest, Season

from .storylines import STORYLINES, Storyline

logger = logging.getLogger(__name__)


class ReferenceCatalog:
    """Season-by-storyline and quest-by-id lookups."""

    def __init__(self, seasons: Dict[str, Season], quests: Dict[int, Quest]):
        self.seasons = seasons
        self.quests = quests

    @classmethod
    def build(
        cls,
        seasons: Iterable[Season],
        quests: Iterable[Quest],
        storylines: Iterable[Storyline] = STORYLINES
    ) -> "ReferenceCatalog":
        """
        Index fetched collections.

        Args:
            seasons: Fetched story seasons
            quests: Fetched quest details
            storylines: Storylines that must each have a season

        Returns:
            ReferenceCatalog over the given data

        Raises:
            CatalogError: A storyline has no matching season
        """
        seasons_by_id = {season.id: season for season in seasons}

        missing = [storyline.key for storyline in storylines if storyline.id not in seasons_by_id]
        if missing:
            raise CatalogError(f"No season fetched for storylines: {', '.join(missing)}")

        quests_by_id = {quest.id: quest for quest in quests}
        logger.info(f"Catalog built: {len(seasons_by_id)} seasons, {len(quests_by_id)} quests")
        return cls(seasons_by_id, quests_by_id)

    def season_for(self, storyline: Storyline) -> Season:
        """Season of a storyline."""
        try:
            return self.seasons[storyline.id]
        except KeyError:
            raise CatalogError(f"No season for storyline {storyline.key}") from None

    def quest(self, quest_id: int) -> Optional[Quest]:
        """Quest by id, or None when the catalog does not know it."""
        return self.quests.get(quest_id)
