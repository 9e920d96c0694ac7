from __future__ import annotations

from dataclasses import dataclass

# Typed data transfer objects shared across pipeline stages


@dataclass
class TeamDiscoveryEntry:
    team_id: str
    roster_url: str
    display_name: str
    club_id: str = ""
