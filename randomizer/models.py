"""
Input and output document models.
"""
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer

from .defaults import (
    DEFAULT_OPTION_TABLES,
    DEFAULT_WEIGHT,
    EXTRA_MIST_FRAGMENTS,
    GAME_NAME,
    REQUIRED_MIST_FRAGMENTS,
)

Weight = Annotated[int, Field(ge=0)]


class CharacterSelection(BaseModel):
    """User options for one character."""

    model_config = ConfigDict(frozen=True)

    weight: Weight = DEFAULT_WEIGHT
    # Storyline key -> weight; when given, only these storylines are offered
    storyline: Optional[Dict[str, Weight]] = None


class GeneratorInput(BaseModel):
    """Contents of the input document."""

    api_key: str = Field(..., min_length=1)
    characters: Dict[str, CharacterSelection] = Field(default_factory=dict)

    @field_validator("characters", mode="before")
    @classmethod
    def _empty_selections(cls, value: Any) -> Any:
        # "Name:" with no options parses as None
        if value is None:
            return {}
        if isinstance(value, dict):
            return {name: ({} if options is None else options) for name, options in value.items()}
        return value


class ScalarOption(BaseModel):
    """Fixed option value; serializes as its text."""

    kind: Literal["scalar"] = "scalar"
    value: str

    @model_serializer
    def _serialize(self) -> str:
        return self.value


class TableOption(BaseModel):
    """Weighted option table; serializes as its mapping."""

    kind: Literal["table"] = "table"
    weights: Dict[str, int] = Field(default_factory=dict)

    def insert(self, value: str, weight: int) -> Optional[int]:
        """Set the weight of a value, returning the previous weight if any."""
        previous = self.weights.get(value)
        self.weights[value] = weight
        return previous

    @model_serializer
    def _serialize(self) -> Dict[str, int]:
        return dict(self.weights)


OptionValue = Annotated[Union[ScalarOption, TableOption], Field(discriminator="kind")]


class Trigger(BaseModel):
    """Options applied when option_name resolves to option_result."""

    option_category: str = GAME_NAME
    option_name: str
    option_result: str
    options: Dict[str, Dict[str, OptionValue]] = Field(default_factory=dict)

    def game_options(self) -> Dict[str, OptionValue]:
        """Options block for the game, created on first use."""
        return self.options.setdefault(GAME_NAME, {})


def _default_table(name: str):
    return lambda: dict(DEFAULT_OPTION_TABLES[name])


class GameOptions(BaseModel):
    """The game block of the output document, in output order."""

    progression_balancing: Dict[str, int] = Field(default_factory=_default_table("progression_balancing"))
    accessibility: Dict[str, int] = Field(default_factory=_default_table("accessibility"))
    character: Dict[str, int] = Field(default_factory=dict)
    triggers: List[Trigger] = Field(default_factory=list)
    character_profession: Dict[str, int] = Field(default_factory=dict)
    character_race: Dict[str, int] = Field(default_factory=dict)
    starting_mainhand_weapon: Dict[str, int] = Field(default_factory=_default_table("starting_mainhand_weapon"))
    starting_offhand_weapon: Dict[str, int] = Field(default_factory=_default_table("starting_offhand_weapon"))
    group_content: Dict[str, int] = Field(default_factory=_default_table("group_content"))
    include_competitive: Dict[str, int] = Field(default_factory=_default_table("include_competitive"))
    achievement_weight: Dict[str, int] = Field(default_factory=_default_table("achievement_weight"))
    quest_weight: Dict[str, int] = Field(default_factory=_default_table("quest_weight"))
    training_weight: Dict[str, int] = Field(default_factory=_default_table("training_weight"))
    world_boss_weight: Dict[str, int] = Field(default_factory=_default_table("world_boss_weight"))
    storyline: Dict[str, int] = Field(default_factory=dict)
    required_mist_fragments: int = REQUIRED_MIST_FRAGMENTS
    extra_mist_fragments: int = EXTRA_MIST_FRAGMENTS
    heal_skill: Dict[str, int] = Field(default_factory=_default_table("heal_skill"))
    gear_slots: Dict[str, int] = Field(default_factory=_default_table("gear_slots"))


class OutputDocument(BaseModel):
    """The generated randomizer configuration."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = "Player{number}"
    description: str = "Customized Guild Wars 2 Template"
    game: str = GAME_NAME
    game_options: GameOptions = Field(default_factory=GameOptions, alias=GAME_NAME)

    def to_data(self) -> Dict[str, Any]:
        """Plain nested data ready for serialization."""
        return self.model_dump(by_alias=True)
