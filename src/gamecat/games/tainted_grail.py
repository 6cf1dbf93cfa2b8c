"""Tainted Grail asset schemas.

Five variants keyed by ``type``: weapon, armor, jewelry, magic, relic.
Damage is a ``[min, max]`` pair throughout.
"""

from __future__ import annotations

from gamecat.domain.fields import enum, field, null, number, obj, string, tuple_of
from gamecat.domain.rules import MutuallyExclusive, OrderedPair, RequiredForCategories
from gamecat.domain.variants import GameProfile
from gamecat.games.base import stat, variant, weight

GAME_ID = "tainted-grail"

WEAPON_CATEGORIES = ("bows", "one-handed", "two-handed", "wands", "shields")
ARMOR_CATEGORIES = ("cuirasses", "greaves", "boots", "gauntlets", "helmets", "back")
JEWELRY_CATEGORIES = ("rings", "amulets")
RELIC_CATEGORIES = ("armor", "weapon")

ATTRIBUTES = (
    "strength",
    "dexterity",
    "spirituality",
    "perception",
    "endurance",
    "practicality",
)
CAST_TYPES = (
    "area-of-effect",
    "channeled",
    "buff",
    "projectile",
    "ray",
    "trap",
    "summon",
)
COST_TYPES = ("mana", "health")
CASTS = ("lightCast", "heavyCast")

# Categories that must declare a block value.
BLOCKING_CATEGORIES = ("shields", "wands")

DAMAGE_LABELS = ("min damage", "max damage")


def _damage(*, nullable: bool = False):
    return tuple_of(stat(9999, lower=1), stat(9999, lower=1), nullable=nullable)


def _common(*, requirements: bool = True):
    fields = [field("gold", stat(99999)), field("weight", weight())]
    if requirements:
        fields.append(
            field("requirements", obj(*(field(a, stat(100, nullable=True)) for a in ATTRIBUTES)))
        )
    return fields


def _cast():
    return obj(
        field("damage", _damage(nullable=True)),
        field("healing", stat(100, lower=1, nullable=True)),
        field("type", enum(*CAST_TYPES)),
        field(
            "cost",
            obj(
                field("costType", enum(*COST_TYPES)),
                field("value", stat(500, lower=1)),
            ),
        ),
        field("effect", string(max_length=500)),
        nullable=True,
    )


def _weapon():
    return variant(
        GAME_ID,
        "weapon",
        category=enum(*WEAPON_CATEGORIES),
        data=(
            field("damage", _damage(), example=[12, 18]),
            field("stamina", stat(100, lower=1)),
            field("block", stat(100, lower=1, nullable=True)),
            *_common(),
        ),
        rules=(
            OrderedPair("data.damage", DAMAGE_LABELS),
            RequiredForCategories("data.block", BLOCKING_CATEGORIES),
        ),
    )


def _armor():
    return variant(
        GAME_ID,
        "armor",
        category=enum(*ARMOR_CATEGORIES),
        data=(
            field("armor", number(ge=1, le=100, multiple_of=0.1)),
            *_common(),
        ),
    )


def _jewelry():
    return variant(
        GAME_ID,
        "jewelry",
        category=enum(*JEWELRY_CATEGORIES),
        data=_common(requirements=False),
    )


def _magic():
    rules = []
    for cast in CASTS:
        rules.append(OrderedPair(f"data.magic.{cast}.damage", DAMAGE_LABELS))
        rules.append(
            MutuallyExclusive(f"data.magic.{cast}", ("damage", "healing"), require_one=False)
        )
    return variant(
        GAME_ID,
        "magic",
        category=null(),
        data=(
            field("magic", obj(*(field(cast, _cast()) for cast in CASTS))),
            *_common(),
        ),
        rules=rules,
    )


def _relic():
    return variant(
        GAME_ID,
        "relic",
        category=enum(*RELIC_CATEGORIES),
        data=_common(requirements=False),
    )


def tainted_grail_profile() -> GameProfile:
    return GameProfile(
        GAME_ID,
        [_weapon(), _armor(), _jewelry(), _magic(), _relic()],
    )
