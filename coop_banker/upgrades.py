from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .models import Profile


# Ordered by capacity, smallest first.
BANK_UPGRADES: Mapping[str, int] = MappingProxyType(
    {
        "BANK_UPGRADE_STARTER": 5_000_000,
        "BANK_UPGRADE_GOLD": 100_000_000,
        "BANK_UPGRADE_DELUXE": 250_000_000,
        "BANK_UPGRADE_SUPER_DELUXE": 500_000_000,
        "BANK_UPGRADE_PREMIER": 1_000_000_000,
        "BANK_UPGRADE_LUXURIOUS": 6_000_000_000,
        "BANK_UPGRADE_PALATIAL": 60_000_000_000,
    }
)


def member_capacity(completed_tasks: Iterable[str]) -> Optional[int]:
    capacities = [BANK_UPGRADES[task] for task in completed_tasks if task in BANK_UPGRADES]
    return max(capacities) if capacities else None


def resolve_upgrade_cap(completed_tasks_by_member: Mapping[str, Iterable[str]]) -> Optional[int]:
    """Highest bank capacity unlocked by any single member, or None if unknown."""
    best: Optional[int] = None
    for tasks in completed_tasks_by_member.values():
        capacity = member_capacity(tasks)
        if capacity is not None and (best is None or capacity > best):
            best = capacity
    return best


def profile_upgrade_cap(profile: Profile) -> Optional[int]:
    return resolve_upgrade_cap(
        {uuid: member.leveling.completed_tasks for uuid, member in profile.members.items()}
    )
