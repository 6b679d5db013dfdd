"""
Per-character identity and quest completion.

Characters listed in the input do not have to exist on the account. Missing
characters resolve to random profession and race with no completion data.
"""
import logging
from typing import Dict, FrozenSet, Iterable, Optional

from pydantic import BaseModel

from gw2api.fetcher import ResourceFetcher
from gw2api.schemas import RemoteCharacter

from .catalog import ReferenceCatalog
from .defaults import RANDOM
from .storylines import Storyline

logger = logging.getLogger(__name__)


class CharacterProgress(BaseModel):
    """Resolved identity and completed quests of one character."""

    name: str
    profession: str = RANDOM
    race: str = RANDOM
    completed_quest_ids: Optional[FrozenSet[int]] = None

    @property
    def found(self) -> bool:
        return self.completed_quest_ids is not None


class CharacterProgressResolver:
    """Resolves selected characters against the account."""

    def __init__(
        self,
        fetcher: ResourceFetcher,
        characters: Dict[str, RemoteCharacter],
        catalog: ReferenceCatalog
    ):
        self.fetcher = fetcher
        self.characters = characters
        self.catalog = catalog

    def _progress(self, name: str, completed: Optional[Iterable[int]]) -> CharacterProgress:
        character = self.characters.get(name)
        if character is None:
            logger.info(f"Character {name} not found on account, using random profession and race")
            return CharacterProgress(name=name)

        return CharacterProgress(
            name=name,
            profession=character.profession,
            race=character.race,
            completed_quest_ids=frozenset(completed or ())
        )

    async def resolve(self, name: str) -> CharacterProgress:
        """
        Resolve one character.

        Args:
            name: Character name from the input

        Returns:
            CharacterProgress; profession and race are "random" and the
            completed set is None when the account has no such character
        """
        completed = None
        if name in self.characters:
            completed = await self.fetcher.fetch_completed_quests(name)
        return self._progress(name, completed)

    async def resolve_all(self, names: Iterable[str]) -> Dict[str, CharacterProgress]:
        """
        Resolve several characters, fetching completed quests concurrently.

        Returns:
            CharacterProgress by name, in the order names were given
        """
        names = list(names)
        found = [name for name in names if name in self.characters]
        completed = await self.fetcher.fetch_completed_quests_for(found)
        logger.info(f"Resolved {len(names)} characters, {len(found)} found on account")

        return {name: self._progress(name, completed.get(name)) for name in names}

    def completed_count(self, progress: CharacterProgress, storyline: Storyline) -> int:
        """
        Number of the character's completed quests that belong to a storyline.

        Quest ids the catalog does not know are skipped.
        """
        if progress.completed_quest_ids is None:
            return 0

        season = self.catalog.season_for(storyline)
        count = 0
        for quest_id in progress.completed_quest_ids:
            quest = self.catalog.quest(quest_id)
            if quest is None:
                logger.debug(f"Completed quest {quest_id} of {progress.name} not in catalog")
                continue
            if quest.story_id in season.story_ids:
                count += 1
        return count
