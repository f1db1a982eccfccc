from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EnvironmentStatus:
    exists: bool
    name: str | None
