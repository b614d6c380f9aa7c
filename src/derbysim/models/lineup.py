"""Default race field: one player against AI opponents."""

import logging
from collections.abc import Callable

import numpy as np

from derbysim.models.racer import RacerDescriptor

logger = logging.getLogger(__name__)

PLAYER_ID = "player"
DEFAULT_JOCKEY = "Speedy Steed"

# (name, jockey) pairs for the built-in opponents
AI_OPPONENTS = [
    ("Rival", "Gallop Ghost"),
    ("Challenger", "Star Strider"),
    ("Maverick", "Night Runner"),
]


def build_lineup(
    player_name: str = "Player 1",
    opponents: int = len(AI_OPPONENTS),
    rng: np.random.Generator | None = None,
    name_provider: Callable[[str], str] | None = None,
) -> list[RacerDescriptor]:
    """Build a field with the player first, followed by AI opponents.

    Every racer gets a fresh seed drawn from ``rng``. The optional
    ``name_provider`` is asked for the player's jockey name; if it fails the
    default jockey is used and the race can still start.

    Args:
        player_name: Player's display name
        opponents: Number of AI opponents
        rng: Random number generator for seeds
        name_provider: Callable mapping a player name to a jockey name

    Returns:
        Racer descriptors in starting order
    """
    rng = rng if rng is not None else np.random.default_rng()

    jockey = DEFAULT_JOCKEY
    if name_provider is not None:
        try:
            jockey = name_provider(player_name) or DEFAULT_JOCKEY
        except Exception as exc:
            # Labels are cosmetic, so a broken name service must not block the race
            logger.warning("Jockey name generation failed for %s: %s", player_name, exc)

    racers = [
        RacerDescriptor(
            id=PLAYER_ID,
            seed=float(rng.random()),
            label=f"{player_name} ({jockey})",
        )
    ]

    for index in range(opponents):
        if index < len(AI_OPPONENTS):
            name, ai_jockey = AI_OPPONENTS[index]
            label = f"{name} ({ai_jockey})"
        else:
            label = f"Opponent {index + 1}"
        racers.append(RacerDescriptor(id=f"ai-{index}", seed=float(rng.random()), label=label))

    return racers
