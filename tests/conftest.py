"""Shared pytest fixtures and test helpers for gamecat tests."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from gamecat.domain.engine import ValidationEngine
from gamecat.games import DEFAULT_REGISTRY

ICON_URL = "/media/games/{game}/assets/{slug}-{type}-{game}.webp"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def engine() -> ValidationEngine:
    """Engine over the built-in game rulesets."""
    return ValidationEngine(DEFAULT_REGISTRY)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no config overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test
    classes so a stray gamecat.toml never leaks into the run.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GAMECAT_CONFIG", raising=False)


# ---------------------------------------------------------------------------
# Record builders
# ---------------------------------------------------------------------------

_VALID_DATA: dict[tuple[str, str], dict[str, Any]] = {
    ("elden-ring", "weapons"): {
        "attack": {
            "physical": 110,
            "magical": 0,
            "fire": 0,
            "lightning": 0,
            "holy": 0,
            "critical": 100,
        },
        "guard": {
            "physical": 58,
            "magical": 35,
            "fire": 35,
            "lightning": 35,
            "holy": 35,
            "boost": 36,
        },
        "scaling": {
            "strength": "D",
            "dexterity": "D",
            "intelligence": None,
            "faith": None,
            "arcane": None,
        },
        "requires": {
            "strength": 10,
            "dexterity": 10,
            "intelligence": None,
            "faith": None,
            "arcane": None,
        },
        "damage": ["slash", "pierce"],
        "aow": {"slug": "square-off", "compatible": True},
        "effect": {"effect": None, "value": None},
        "weight": 3.5,
    },
    ("elden-ring", "armors"): {
        "negation": {
            "physical": 4.2,
            "strike": 3.6,
            "slash": 4.2,
            "pierce": 4.2,
            "magical": 5.1,
            "fire": 5.5,
            "lightning": 4.8,
            "holy": 5.1,
        },
        "resistance": {
            "immunity": 22,
            "robustness": 14,
            "focus": 18,
            "vitality": 20,
            "poise": 3,
        },
        "weight": 2.1,
    },
    ("elden-ring", "spells"): {
        "spellType": "glintstone",
        "cost": 7,
        "slots": 1,
        "requirements": {"intelligence": 10, "faith": None, "arcane": None},
    },
    ("elden-ring", "talismans"): {
        "effect": "Raises maximum HP by 6%",
        "weight": 0.6,
    },
    ("elden-ring", "ashes-of-war"): {
        "affinity": "keen",
        "cost": 3,
        "allowedWeapons": ["straight-swords", "katanas"],
    },
    ("elden-ring", "spirit-ashes"): {
        "cost": {"fp": 31, "hp": None},
    },
    ("tainted-grail", "weapon"): {
        "damage": [12, 18],
        "stamina": 20,
        "block": None,
        "gold": 150,
        "weight": 4.0,
        "requirements": {
            "strength": 12,
            "dexterity": None,
            "spirituality": None,
            "perception": None,
            "endurance": None,
            "practicality": None,
        },
    },
    ("tainted-grail", "armor"): {
        "armor": 12.5,
        "gold": 80,
        "weight": 6.0,
        "requirements": {
            "strength": None,
            "dexterity": None,
            "spirituality": None,
            "perception": None,
            "endurance": 8,
            "practicality": None,
        },
    },
    ("tainted-grail", "jewelry"): {"gold": 300, "weight": 0.1},
    ("tainted-grail", "magic"): {
        "magic": {
            "lightCast": {
                "damage": [8, 14],
                "healing": None,
                "type": "projectile",
                "cost": {"costType": "mana", "value": 15},
                "effect": "Hurls a bolt of frost.",
            },
            "heavyCast": None,
        },
        "gold": 500,
        "weight": 0.5,
        "requirements": {
            "strength": None,
            "dexterity": None,
            "spirituality": 14,
            "perception": None,
            "endurance": None,
            "practicality": None,
        },
    },
    ("tainted-grail", "relic"): {"gold": 1200, "weight": 0.3},
}

_CATEGORIES: dict[tuple[str, str], str | None] = {
    ("elden-ring", "weapons"): "straight-swords",
    ("elden-ring", "armors"): "helmets",
    ("elden-ring", "spells"): "sorceries",
    ("elden-ring", "talismans"): None,
    ("elden-ring", "ashes-of-war"): None,
    ("elden-ring", "spirit-ashes"): None,
    ("tainted-grail", "weapon"): "one-handed",
    ("tainted-grail", "armor"): "cuirasses",
    ("tainted-grail", "jewelry"): "rings",
    ("tainted-grail", "magic"): None,
    ("tainted-grail", "relic"): "weapon",
}

VARIANTS: list[tuple[str, str]] = list(_VALID_DATA)


def make_record(
    game: str,
    variant_type: str,
    *,
    slug: str = "test-asset",
    data: dict[str, Any] | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Build a valid record for *game*/*variant_type*.

    *data* entries are merged over the default payload (one level deep);
    *overrides* replace top-level keys. ``iconUrl`` follows *slug* unless
    overridden.
    """
    payload = copy.deepcopy(_VALID_DATA[(game, variant_type)])
    payload.update(data or {})
    record: dict[str, Any] = {
        "name": "Test Asset",
        "slug": slug,
        "gameSlug": game,
        "type": variant_type,
        "category": _CATEGORIES[(game, variant_type)],
        "description": "A test asset.",
        "shortDescription": None,
        "iconUrl": ICON_URL.format(game=game, slug=slug, type=variant_type),
        "data": payload,
    }
    record.update(overrides)
    return record


def write_json(path: Path, document: Any) -> Path:
    """Write *document* as JSON to *path* and return the path."""
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def issue_paths(result: Any) -> list[str]:
    """Dotted paths of every issue in a ValidationResult."""
    return [issue.dotted for issue in result.issues]
