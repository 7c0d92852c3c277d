"""
Level Progression Rules

Academic level is derived from cumulative credits earned. Levels only move
upward; see AcademicHistoryService.check_level_progression.
"""
from typing import Dict

# Level -> credits earned required to reach it
LEVEL_PROGRESSION_RULES: Dict[int, int] = {
    100: 0,    # Starting level
    200: 24,
    300: 60,
    400: 96,
}

STARTING_LEVEL = min(LEVEL_PROGRESSION_RULES)
MAX_LEVEL = max(LEVEL_PROGRESSION_RULES)


def resolve_level(credits_earned: int) -> int:
    """Return the highest level whose credit threshold is met."""
    resolved = STARTING_LEVEL
    for level, required in sorted(LEVEL_PROGRESSION_RULES.items()):
        if credits_earned >= required:
            resolved = level
    return resolved


def credits_to_next_level(current_level: int, credits_earned: int) -> int:
    """
    Credits still needed to reach the level above current_level.

    Returns 0 at the top level.
    """
    higher_levels = [level for level in LEVEL_PROGRESSION_RULES if level > current_level]
    if not higher_levels:
        return 0

    required = LEVEL_PROGRESSION_RULES[min(higher_levels)]
    return max(0, required - credits_earned)
