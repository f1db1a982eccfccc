from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from devpanel.models import DeviceSource

from .paths import default_config_path, expand_path

CONFIG_ENV_VAR = "DEVPANEL_CONFIG"


class DevicesConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    ios_command: list[str] = Field(
        default_factory=lambda: ["xcrun", "xctrace", "list", "devices"],
        min_length=1,
    )
    adb_command: list[str] = Field(
        default_factory=lambda: ["adb", "devices", "-l"], min_length=1
    )
    avd_command: list[str] = Field(
        default_factory=lambda: ["emulator", "-list-avds"], min_length=1
    )
    timeout: float = Field(default=30.0, gt=0)
    max_attempts: int = Field(default=3, ge=1)
    ios_escape_token: str = ""
    android_escape_token: str = "e"

    def escape_token(self, source: DeviceSource) -> str | None:
        token = (
            self.ios_escape_token
            if source is DeviceSource.IOS
            else self.android_escape_token
        )
        return token or None


class EnvironmentConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    template_dir: str = "environment"
    target_file: str = ".env"
    names: list[str] = Field(
        default_factory=lambda: ["development", "staging", "production"],
        min_length=1,
    )


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    devices: DevicesConfig = Field(default_factory=DevicesConfig)
    environment: EnvironmentConfig = Field(default_factory=EnvironmentConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def _toml_value(value: str | list[str]) -> str:
    # JSON strings and string arrays are valid TOML
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    devices = settings.devices
    environment = settings.environment
    lines = [
        "# devpanel configuration",
        "",
        "[devices]",
        f"ios_command = {_toml_value(devices.ios_command)}",
        f"adb_command = {_toml_value(devices.adb_command)}",
        f"avd_command = {_toml_value(devices.avd_command)}",
        f"timeout = {devices.timeout}",
        f"max_attempts = {devices.max_attempts}",
        f"ios_escape_token = {_toml_value(devices.ios_escape_token)}",
        f"android_escape_token = {_toml_value(devices.android_escape_token)}",
        "",
        "[environment]",
        f"template_dir = {_toml_value(environment.template_dir)}",
        f"target_file = {_toml_value(environment.target_file)}",
        f"names = {_toml_value(environment.names)}",
        "",
    ]
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
