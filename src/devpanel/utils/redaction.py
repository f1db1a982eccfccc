from __future__ import annotations

from dataclasses import dataclass, field

_VISIBLE_PREFIX = 4


@dataclass
class Redactor:
    enabled: bool = True
    _id_map: dict[str, int] = field(default_factory=dict)
    _id_counter: int = 0

    def redact_id(self, device_id: str) -> str:
        """Hide a serial/UDID, keeping a short prefix and a stable counter."""
        if not self.enabled:
            return device_id
        if device_id.startswith("emulator-"):
            return device_id
        if len(device_id) <= _VISIBLE_PREFIX:
            return device_id
        counter = self._id_map.get(device_id)
        if counter is None:
            self._id_counter += 1
            counter = self._id_counter
            self._id_map[device_id] = counter
        return f"{device_id[:_VISIBLE_PREFIX]}-xxxx-{counter:02d}"

