from __future__ import annotations

import io

import pytest
from rich.console import Console

from devpanel.core.selector import (
    DeviceSelector,
    number_devices,
    resolve_choice,
    select_device,
)
from devpanel.models import (
    DEFAULT_DEVICE,
    CategorizedDevices,
    Device,
    DeviceCategory,
    DeviceSource,
)


def _devices() -> CategorizedDevices:
    return CategorizedDevices(
        physical_devices=[
            Device(id="PHONE-1", name="Jane's iPhone", category=DeviceCategory.PHYSICAL),
            Device(id="PHONE-2", name="Test iPhone", category=DeviceCategory.PHYSICAL),
        ],
        offline_devices=[
            Device(id="OFF-1", name="Old iPhone", category=DeviceCategory.OFFLINE),
        ],
        simulators=[
            Device(id="SIM-1", name="iPhone 15", category=DeviceCategory.SIMULATOR),
            Device(id="SIM-2", name="iPhone 16", category=DeviceCategory.SIMULATOR),
        ],
    )


def _console() -> Console:
    return Console(file=io.StringIO(), width=120)


def _output(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


class ScriptedPrompt:
    def __init__(self, *answers: str) -> None:
        self._answers = list(answers)
        self.calls = 0

    def __call__(self, _text: str) -> str:
        self.calls += 1
        if not self._answers:
            raise AssertionError("prompted more often than expected")
        return self._answers.pop(0)


def test_indices_are_contiguous_across_categories():
    choices = number_devices(_devices())

    assert list(choices) == [1, 2, 3, 4]
    assert [device.id for device in choices.values()] == [
        "PHONE-1",
        "PHONE-2",
        "SIM-1",
        "SIM-2",
    ]
    assert all(device.index == index for index, device in choices.items())


def test_render_lists_offline_devices_without_numbers():
    console = _console()
    selector = DeviceSelector(
        _devices(), DeviceSource.IOS, console, ScriptedPrompt()
    )

    selector.render()

    output = _output(console)
    assert "1 - Jane's iPhone (PHONE-1)" in output
    assert "2 - Test iPhone (PHONE-2)" in output
    assert "Device unavailable - Old iPhone (OFF-1)" in output
    assert "== Simulators ==" in output
    assert "3 - iPhone 15 (SIM-1)" in output
    assert "4 - iPhone 16 (SIM-2)" in output


def test_android_titles_emulators():
    console = _console()
    DeviceSelector(_devices(), DeviceSource.ANDROID, console, ScriptedPrompt()).render()

    assert "== Emulators ==" in _output(console)


def test_select_by_number():
    prompt = ScriptedPrompt("3")

    selection = select_device(
        _devices(), DeviceSource.IOS, console=_console(), prompt=prompt
    )

    assert isinstance(selection, Device)
    assert selection.id == "SIM-1"
    assert selection.index == 3
    assert prompt.calls == 1


def test_no_selectable_devices_returns_none_without_prompting():
    devices = CategorizedDevices(
        offline_devices=[
            Device(id="OFF-1", name="Old iPhone", category=DeviceCategory.OFFLINE)
        ]
    )
    prompt = ScriptedPrompt()

    selection = select_device(
        devices, DeviceSource.IOS, console=_console(), prompt=prompt
    )

    assert selection is None
    assert prompt.calls == 0


def test_escape_token_is_case_insensitive():
    selection = select_device(
        _devices(),
        DeviceSource.ANDROID,
        console=_console(),
        prompt=ScriptedPrompt("E"),
        escape_token="e",
    )

    assert selection is DEFAULT_DEVICE


def test_escape_token_is_invalid_when_source_has_none():
    prompt = ScriptedPrompt("e", "1")

    selection = select_device(
        _devices(), DeviceSource.IOS, console=_console(), prompt=prompt
    )

    assert isinstance(selection, Device)
    assert selection.id == "PHONE-1"
    assert prompt.calls == 2


def test_three_invalid_inputs_redisplay_and_keep_prompting():
    console = _console()
    prompt = ScriptedPrompt("x", "9", "", "2")

    selection = select_device(
        _devices(), DeviceSource.IOS, console=console, prompt=prompt
    )

    output = _output(console)
    assert isinstance(selection, Device)
    assert selection.id == "PHONE-2"
    assert output.count("Invalid selection") == 3
    assert output.count("Maximum attempts reached") == 1
    assert output.count("== Devices ==") == 2


def test_attempt_counter_resets_after_redisplay():
    console = _console()
    prompt = ScriptedPrompt("a", "b", "c", "d", "e", "f", "g", "4")

    selection = select_device(
        _devices(), DeviceSource.IOS, console=console, prompt=prompt
    )

    output = _output(console)
    assert isinstance(selection, Device)
    assert selection.id == "SIM-2"
    assert output.count("Maximum attempts reached") == 2
    assert output.count("== Devices ==") == 3


def test_intercepted_input_is_not_an_attempt():
    console = _console()
    seen: list[tuple[str, str]] = []

    def intercept(answer: str, step: str) -> bool:
        seen.append((answer, step))
        return answer == "help"

    selection = select_device(
        _devices(),
        DeviceSource.IOS,
        console=console,
        prompt=ScriptedPrompt("help", "help", "help", "1"),
        intercept=intercept,
    )

    assert isinstance(selection, Device)
    assert selection.id == "PHONE-1"
    assert seen[0] == ("help", "device")
    assert "Invalid selection" not in _output(console)


def test_interceptor_exception_propagates():
    class Skipped(Exception):
        pass

    def intercept(answer: str, step: str) -> bool:
        raise Skipped

    with pytest.raises(Skipped):
        select_device(
            _devices(),
            DeviceSource.IOS,
            console=_console(),
            prompt=ScriptedPrompt("skip"),
            intercept=intercept,
        )


def test_resolve_choice_rejects_unassigned_index():
    phone = Device(id="A", name="a", category=DeviceCategory.PHYSICAL, index=1)
    sim = Device(id="B", name="b", category=DeviceCategory.SIMULATOR, index=3)
    choices = {1: phone, 3: sim}

    assert resolve_choice("2", choices) is None
    assert resolve_choice(" 3 ", choices) is sim
    assert resolve_choice("1", choices) is phone
    assert resolve_choice("1.0", choices) is None
    assert resolve_choice("-1", choices) is None
    assert resolve_choice("e", choices) is None
    assert resolve_choice("e", choices, escape_token="e") is DEFAULT_DEVICE


def test_resolve_choice_accepts_ascii_digits_only():
    sim = Device(id="B", name="b", category=DeviceCategory.SIMULATOR, index=3)

    assert resolve_choice("３", {3: sim}) is None
    assert resolve_choice("٣", {3: sim}) is None
    assert resolve_choice("3", {3: sim}) is sim
