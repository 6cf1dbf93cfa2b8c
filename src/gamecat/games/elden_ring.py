"""Elden Ring asset schemas.

Six variants keyed by ``type``: weapons, armors, spells, talismans,
ashes-of-war, spirit-ashes.
"""

from __future__ import annotations

from gamecat.domain.fields import (
    array,
    boolean,
    enum,
    field,
    null,
    obj,
    string,
)
from gamecat.domain.rules import (
    LinkedNullability,
    MutuallyExclusive,
    NotAllNull,
    PositiveOnlyForCategory,
    VocabularyByCategory,
)
from gamecat.domain.variants import GameProfile
from gamecat.games.base import SLUG_MESSAGE, SLUG_PATTERN, stat, variant, weight

GAME_ID = "elden-ring"

WEAPON_CATEGORIES = (
    "daggers",
    "straight-swords",
    "greatswords",
    "colossal-swords",
    "thrusting-swords",
    "heavy-thrusting-swords",
    "curved-swords",
    "curved-greatswords",
    "katanas",
    "twinblades",
    "axes",
    "greataxes",
    "hammers",
    "flails",
    "great-hammers",
    "colossal-weapons",
    "spears",
    "great-spears",
    "halberds",
    "reapers",
    "whips",
    "fists",
    "claws",
    "light-bows",
    "bows",
    "greatbows",
    "crossbows",
    "ballistas",
    "staffs",
    "seals",
    "torches",
    "thrusting-shields",
    "hand-to-hand-arts",
    "throwing-blades",
    "backhand-blades",
    "perfumes",
    "beast-claws",
    "light-greatswords",
    "great-katanas",
    "shields",
)

ARMOR_CATEGORIES = ("helmets", "chest", "gauntlets", "legs")
SPELL_CATEGORIES = ("incantations", "sorceries")

ATTACK_TYPES = ("physical", "magical", "fire", "lightning", "holy", "critical")
GUARD_TYPES = ("physical", "magical", "fire", "lightning", "holy", "boost")
ATTRIBUTES = ("strength", "dexterity", "intelligence", "faith", "arcane")
SCALING_GRADES = ("S", "A", "B", "C", "D", "E")
DAMAGE_TYPES = ("pierce", "slash", "blunt")
STATUS_EFFECTS = (
    "hemorrhage",
    "poison",
    "scarlet-rot",
    "frostbite",
    "sleep",
    "madness",
    "death-blight",
)

NEGATION_TYPES = ("physical", "strike", "slash", "pierce", "magical", "fire", "lightning", "holy")
RESISTANCE_TYPES = ("immunity", "robustness", "focus", "vitality", "poise")

SORCERY_SCHOOLS = (
    "carian",
    "cold",
    "crystalian",
    "death",
    "finger",
    "glintstone",
    "gravity",
    "magma",
    "night",
    "oracle",
    "thorn",
)
INCANTATION_SCHOOLS = (
    "bestial",
    "black-flame",
    "blood-oath",
    "dragon-communion",
    "dragon-cult",
    "erdtree",
    "frenzied-flame",
    "giants-flame",
    "golden-order",
    "messmers-flame",
    "miquellan",
    "servants-of-rot",
    "spiral-tower",
    "two-fingers",
)
SPELL_ATTRIBUTES = ("intelligence", "faith", "arcane")

AFFINITIES = (
    "standard",
    "heavy",
    "keen",
    "quality",
    "magic",
    "frost",
    "fire",
    "flame-art",
    "lightning",
    "sacred",
    "poison",
    "blood",
    "occult",
)

# Catalysts whose attack is magic-affinity by definition.
MAGIC_WEAPON_CATEGORY = "staffs"

TALISMAN_EFFECT_PATTERN = r"[A-Za-z0-9\s+%()\-→↑]+"


def _weapons():
    return variant(
        GAME_ID,
        "weapons",
        category=enum(*WEAPON_CATEGORIES),
        data=(
            field("attack", obj(*(field(t, stat(999)) for t in ATTACK_TYPES))),
            field("guard", obj(*(field(t, stat(100)) for t in GUARD_TYPES))),
            field(
                "scaling",
                obj(*(field(a, enum(*SCALING_GRADES, nullable=True)) for a in ATTRIBUTES)),
            ),
            field("requires", obj(*(field(a, stat(100, nullable=True)) for a in ATTRIBUTES))),
            field("damage", array(enum(*DAMAGE_TYPES), min_items=1, max_items=2)),
            field(
                "aow",
                obj(
                    field(
                        "slug",
                        string(pattern=SLUG_PATTERN, pattern_message=SLUG_MESSAGE),
                    ),
                    field("compatible", boolean(), default=True),
                ),
            ),
            field(
                "effect",
                obj(
                    field("effect", enum(*STATUS_EFFECTS, nullable=True)),
                    field("value", stat(200, nullable=True)),
                ),
            ),
            field("weight", weight()),
        ),
        rules=(
            LinkedNullability("data.effect.effect", "data.effect.value"),
            PositiveOnlyForCategory("data.attack.magical", MAGIC_WEAPON_CATEGORY),
        ),
    )


def _armors():
    return variant(
        GAME_ID,
        "armors",
        category=enum(*ARMOR_CATEGORIES),
        data=(
            field(
                "negation",
                obj(*(field(t, weight()) for t in NEGATION_TYPES)),
            ),
            field("resistance", obj(*(field(t, stat(100)) for t in RESISTANCE_TYPES))),
            field("weight", weight()),
        ),
    )


def _spells():
    return variant(
        GAME_ID,
        "spells",
        category=enum(*SPELL_CATEGORIES),
        data=(
            field("spellType", string(strip=True)),
            field("cost", stat(100, lower=1)),
            field("slots", stat(3, lower=1)),
            field(
                "requirements",
                obj(*(field(a, stat(100, nullable=True)) for a in SPELL_ATTRIBUTES)),
            ),
        ),
        rules=(
            VocabularyByCategory(
                "data.spellType",
                {"sorceries": SORCERY_SCHOOLS, "incantations": INCANTATION_SCHOOLS},
            ),
            NotAllNull("data.requirements", SPELL_ATTRIBUTES),
        ),
    )


def _talismans():
    return variant(
        GAME_ID,
        "talismans",
        category=null(),
        data=(
            field(
                "effect",
                string(
                    strip=True,
                    min_length=1,
                    max_length=200,
                    pattern=TALISMAN_EFFECT_PATTERN,
                    pattern_message=(
                        "effect can only contain letters, numbers, spaces, %, +, "
                        "parentheses, arrows, and hyphens"
                    ),
                    forbid=r"\d+%.*%",
                    forbid_message="effect cannot contain more than one % per number",
                ),
                example="Raises maximum HP by 6%",
            ),
            field("weight", weight()),
        ),
    )


def _ashes_of_war():
    return variant(
        GAME_ID,
        "ashes-of-war",
        category=null(),
        data=(
            field("affinity", enum(*AFFINITIES)),
            field("cost", stat(100)),
            field("allowedWeapons", array(enum(*WEAPON_CATEGORIES), min_items=1)),
        ),
    )


def _spirit_ashes():
    return variant(
        GAME_ID,
        "spirit-ashes",
        category=null(),
        data=(
            field(
                "cost",
                obj(
                    field("fp", stat(999, lower=1, nullable=True)),
                    field("hp", stat(999, lower=1, nullable=True)),
                ),
            ),
        ),
        rules=(MutuallyExclusive("data.cost", ("fp", "hp")),),
    )


def elden_ring_profile() -> GameProfile:
    return GameProfile(
        GAME_ID,
        [
            _weapons(),
            _armors(),
            _spells(),
            _talismans(),
            _ashes_of_war(),
            _spirit_ashes(),
        ],
    )
