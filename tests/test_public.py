"""Tests for the public API."""

from __future__ import annotations

from typer.testing import CliRunner

from devpanel import (
    DEFAULT_DEVICE,
    CategorizedDevices,
    Device,
    DeviceCategory,
    DeviceSource,
    __version__,
)
from devpanel.cli.app import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"devpanel version {__version__}" in result.stdout


def test_public_exports():
    assert CategorizedDevices.empty().all_devices() == []
    assert repr(DEFAULT_DEVICE) == "DEFAULT_DEVICE"


def test_models_are_documented():
    for model in (Device, DeviceCategory, DeviceSource, CategorizedDevices):
        assert model.__doc__
