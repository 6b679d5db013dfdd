"""
Default option weights of the generated configuration.

Tables not listed here start empty. Weights of 0 keep an option visible in
the output so it can be edited by hand.
"""

GAME_NAME = "Guild Wars 2"

DEFAULT_WEIGHT = 50

RANDOM = "random"

DEFAULT_OPTION_TABLES = {
    "progression_balancing": {
        "random": 0,
        "random-low": 0,
        "random-high": 0,
        "disabled": 0,
        "normal": 50,
        "extreme": 0,
    },
    "accessibility": {
        "locations": 0,
        "items": 50,
        "minimal": 0,
    },
    "starting_mainhand_weapon": {
        "none": 0,
        "axe": 0,
        "dagger": 0,
        "mace": 0,
        "pistol": 0,
        "sword": 0,
        "scepter": 0,
        "greatsword": 0,
        "hammer": 0,
        "longbow": 0,
        "rifle": 0,
        "short_bow": 0,
        "staff": 0,
        "random_proficient": 50,
        "random_proficient_one_handed": 0,
        "random_proficient_two_handed": 0,
    },
    "starting_offhand_weapon": {
        "none": 0,
        "scepter": 0,
        "focus": 0,
        "shield": 0,
        "torch": 0,
        "warhorn": 0,
        "random_proficient": 50,
    },
    "group_content": {
        "none": 50,
        "five_man": 25,
        "ten_man": 10,
    },
    "include_competitive": {
        "false": 50,
        "true": 10,
    },
    "achievement_weight": {
        "500": 50,
        "random": 0,
        "random-low": 0,
        "random-high": 0,
    },
    "quest_weight": {
        "100": 50,
        "random": 0,
        "random-low": 0,
        "random-high": 0,
    },
    "training_weight": {
        "100": 50,
        "random": 0,
        "random-low": 0,
        "random-high": 0,
    },
    "world_boss_weight": {
        "250": 50,
        "random": 0,
        "random-low": 0,
        "random-high": 0,
    },
    "heal_skill": {
        "randomize": 1,
        "early": 10,
        "starting": 50,
    },
    "gear_slots": {
        "randomize": 5,
        "early": 50,
        "starting": 10,
    },
}

REQUIRED_MIST_FRAGMENTS = 10
EXTRA_MIST_FRAGMENTS = 5
