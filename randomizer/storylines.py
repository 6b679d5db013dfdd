"""
Storyline reference data.

Each storyline maps to one story season on the API. The ids are season UUIDs,
the keys are used in user overrides and in the generated configuration.
"""
from typing import Dict, Tuple
from pydantic import BaseModel, ConfigDict


class Storyline(BaseModel):
    """A story arc the randomizer can pick."""
    
    model_config = ConfigDict(frozen=True)
    
    id: str
    key: str
    default_weight: int
    max_quests: int


STORYLINES: Tuple[Storyline, ...] = (
    Storyline(id="215AAA0F-CDAC-4F93-86DA-C155A99B5784", key="core", default_weight=1, max_quests=49),
    Storyline(id="A49D0CD7-E725-4141-8E10-180F1CED7CAF", key="season_1", default_weight=2, max_quests=30),
    Storyline(id="A515A1D3-4BD7-4594-AE30-2C5D05FF5960", key="season_2", default_weight=4, max_quests=32),
    Storyline(id="B8901E58-DC9D-4525-ADB2-79C93593291E", key="heart_of_thorns", default_weight=8, max_quests=16),
    Storyline(id="09766A86-D88D-4DF2-9385-259E9A8CA583", key="season_3", default_weight=16, max_quests=36),
    Storyline(id="EAB597C0-C484-4FD3-9430-31433BAC81B6", key="path_of_fire", default_weight=32, max_quests=16),
    Storyline(id="C22AFD21-667A-4AA8-8210-AC74EAEE58BB", key="season_4", default_weight=64, max_quests=30),
    Storyline(id="EDCAE800-302A-4D9B-8331-3CC769ADA0B3", key="icebrood_saga", default_weight=128, max_quests=41),
    Storyline(id="D1B709AB-92B6-4EE9-8B40-2B7C628E5022", key="end_of_dragons", default_weight=256, max_quests=27),
    Storyline(id="AEE99452-D323-4ABB-8F49-D7C0A752CBD1", key="secrets_of_the_obscure", default_weight=512, max_quests=20),
)

STORYLINES_BY_KEY: Dict[str, Storyline] = {storyline.key: storyline for storyline in STORYLINES}
