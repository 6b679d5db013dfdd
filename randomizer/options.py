"""
Weighted option and trigger generation.

Every selected character produces a character trigger that fixes its
profession and race and offers its storylines, followed by one trigger per
offered storyline that sets the storyline and the number of quests still left
in it.
"""
import logging
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from .defaults import DEFAULT_WEIGHT
from .models import CharacterSelection, ScalarOption, TableOption, Trigger
from .resolver import CharacterProgress, CharacterProgressResolver
from .storylines import STORYLINES, STORYLINES_BY_KEY, Storyline

logger = logging.getLogger(__name__)


class CharacterOptions(BaseModel):
    """Everything one character contributes to the output document."""

    name: str
    weight: int
    triggers: List[Trigger] = Field(default_factory=list)


def storyline_weight(selection: CharacterSelection, storyline: Storyline) -> Optional[int]:
    """
    Effective weight of a storyline for a character.

    Returns:
        The override weight, the storyline default when the character has no
        overrides, or None when overrides exist but do not name the storyline
    """
    if selection.storyline is None:
        return storyline.default_weight
    return selection.storyline.get(storyline.key)


def storyline_option(storyline: Storyline, character_name: str) -> str:
    """Value of the storyline option that selects a storyline for a character."""
    return f"{storyline.key} {character_name}"


class OptionAggregator:
    """Builds weighted options and triggers for selected characters."""

    def __init__(self, resolver: CharacterProgressResolver, storylines: Iterable[Storyline] = STORYLINES):
        self.resolver = resolver
        self.storylines = tuple(storylines)

    def storyline_trigger(self, storyline: Storyline, character_name: str, completed_count: int) -> Trigger:
        """Trigger applied once a character's storyline option is picked."""
        trigger = Trigger(
            option_name="storyline",
            option_result=storyline_option(storyline, character_name)
        )
        options = trigger.game_options()
        # Can go negative when the account completed more than the known maximum
        options["max_quests"] = ScalarOption(value=str(storyline.max_quests - completed_count))
        options["storyline"] = ScalarOption(value=storyline.key)
        return trigger

    def aggregate(self, name: str, selection: CharacterSelection, progress: CharacterProgress) -> CharacterOptions:
        """
        Build the options of one character.

        Args:
            name: Character name
            selection: User options for the character
            progress: Resolved identity and completion

        Returns:
            CharacterOptions with the character trigger first
        """
        if selection.storyline:
            unknown = sorted(set(selection.storyline) - set(STORYLINES_BY_KEY))
            if unknown:
                logger.debug(f"Ignoring unknown storylines for {name}: {unknown}")

        profession = TableOption()
        profession.insert(progress.profession, DEFAULT_WEIGHT)
        race = TableOption()
        race.insert(progress.race, DEFAULT_WEIGHT)
        storylines = TableOption()

        character_trigger = Trigger(option_name="character", option_result=name)
        options = character_trigger.game_options()
        options["character_profession"] = profession
        options["character_race"] = race
        options["storyline"] = storylines

        storyline_triggers = []
        for storyline in self.storylines:
            weight = storyline_weight(selection, storyline)
            if weight is None:
                continue

            completed = self.resolver.completed_count(progress, storyline)
            logger.debug(f"{name}: {storyline.key} weight={weight} completed={completed}")

            storylines.insert(storyline_option(storyline, name), weight)
            storyline_triggers.append(self.storyline_trigger(storyline, name, completed))

        return CharacterOptions(
            name=name,
            weight=selection.weight,
            triggers=[character_trigger] + storyline_triggers
        )

    def aggregate_all(
        self,
        selections: Dict[str, CharacterSelection],
        progress: Dict[str, CharacterProgress]
    ) -> List[CharacterOptions]:
        """Build options for every selected character, in selection order."""
        return [
            self.aggregate(name, selection, progress[name])
            for name, selection in selections.items()
        ]
