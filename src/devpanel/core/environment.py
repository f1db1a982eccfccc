from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from devpanel.config import EnvironmentConfig
from devpanel.models import EnvironmentStatus

logger = logging.getLogger(__name__)

_ENV_ASSIGNMENT = re.compile(
    r"^\s*(?:ENV|ENVIRONMENT)\s*=\s*['\"]?(?P<name>[\w-]+)['\"]?\s*$",
    re.MULTILINE,
)


class EnvironmentManager:
    """Switch a project's ``.env`` between per-environment templates.

    Templates live in ``<project>/<template_dir>/.env.<name>`` and are copied
    verbatim over ``<project>/<target_file>``.
    """

    def __init__(self, project_dir: Path, config: EnvironmentConfig) -> None:
        self._project_dir = project_dir
        self._config = config
        self._template_dir = project_dir / config.template_dir
        self._target_path = project_dir / config.target_file

    @property
    def target_path(self) -> Path:
        return self._target_path

    def template_path(self, name: str) -> Path:
        return self._template_dir / f".env.{name}"

    def templates(self) -> dict[str, bool]:
        return {name: self.template_path(name).exists() for name in self._config.names}

    def current(self) -> EnvironmentStatus:
        if not self._target_path.exists():
            return EnvironmentStatus(exists=False, name=None)

        content = self._target_path.read_text(errors="replace")
        for match in _ENV_ASSIGNMENT.finditer(content):
            name = match.group("name")
            if name in self._config.names:
                return EnvironmentStatus(exists=True, name=name)
        return EnvironmentStatus(exists=True, name=None)

    def switch(self, name: str) -> Path:
        if name not in self._config.names:
            known = ", ".join(self._config.names)
            raise ValueError(f"Unknown environment '{name}' (expected one of: {known})")

        template = self.template_path(name)
        if not template.exists():
            raise FileNotFoundError(
                f"Environment file for '{name}' not found: {template}"
            )

        shutil.copyfile(template, self._target_path)
        logger.info("Copied %s to %s", template, self._target_path)
        return self._target_path
