from __future__ import annotations

from pathlib import Path

import pytest

from buttplug_osc.core.errors import PatternValidationError
from buttplug_osc.core.pattern_loader import load_patterns


@pytest.fixture(autouse=True)
def isolated_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))


def _write_pattern(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_load_packaged_patterns() -> None:
    loaded = load_patterns()
    assert set(loaded.patterns) >= {1, 2}
    pulse = loaded.patterns[2]
    assert pulse.name == "pulse"
    assert [(s.motor, s.intensity, s.duration_ms) for s in pulse.steps] == [
        (1, 100, 500),
        (1, 0, 500),
    ] * 3
    assert loaded.warnings == ()


def test_user_pattern_added(tmp_path: Path) -> None:
    _write_pattern(
        tmp_path / "data" / "buttplug-osc" / "patterns" / "tease.yaml",
        """
index: 7
name: tease
steps:
  - {motor: 0, intensity: 40, duration_ms: 1000}
""",
    )
    loaded = load_patterns()
    assert loaded.patterns[7].total_ms == 1000


def test_user_pattern_overrides_packaged(tmp_path: Path) -> None:
    _write_pattern(
        tmp_path / "cfg" / "buttplug-osc" / "patterns" / "pulse.yaml",
        """
index: 2
name: softer pulse
steps:
  - {motor: 1, intensity: 50, duration_ms: 300}
""",
    )
    loaded = load_patterns()
    assert loaded.patterns[2].name == "softer pulse"
    assert any("overrides" in warning for warning in loaded.warnings)


@pytest.mark.parametrize(
    "content",
    [
        "index: 5\nname: loud\nsteps:\n  - {motor: 0, intensity: 150, duration_ms: 10}\n",
        "index: 5\nname: empty\nsteps: []\n",
        "index: 5\nname: missing\n",
        "index: 5\nname: typo\nsteps:\n  - {motor: 0, intensity: 10, duration: 10}\n",
        "- just\n- a list\n",
        "index: 5\nindex: 6\nname: dup\nsteps:\n  - {motor: 0, intensity: 10, duration_ms: 10}\n",
    ],
)
def test_invalid_user_pattern_rejected(tmp_path: Path, content: str) -> None:
    _write_pattern(tmp_path / "cfg" / "buttplug-osc" / "patterns" / "bad.yaml", content)
    with pytest.raises(PatternValidationError):
        load_patterns()


def test_duplicate_user_index_rejected(tmp_path: Path) -> None:
    body = "index: 9\nname: {name}\nsteps:\n  - {{motor: 0, intensity: 10, duration_ms: 10}}\n"
    _write_pattern(tmp_path / "cfg" / "buttplug-osc" / "patterns" / "a.yaml", body.format(name="a"))
    _write_pattern(tmp_path / "data" / "buttplug-osc" / "patterns" / "b.yaml", body.format(name="b"))
    with pytest.raises(PatternValidationError):
        load_patterns()
