"""Calculator settings and their persistent configuration file."""

import contextlib
import json
import os
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

_DEFAULT_FORMAT = "%1.15lg"
_MAX_FORMAT_LENGTH = 15
_CONFIG_NAME = "SCalka.json"


class AngleUnit(IntEnum):
    """Unit in which trigonometric arguments and results are expressed."""

    DEGREES = 0
    RADIANS = 1
    GRADS = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass
class Settings:
    """Runtime settings; x and y are working registers and are not stored."""

    angle_unit: AngleUnit = AngleUnit.DEGREES
    fmt: str = _DEFAULT_FORMAT
    auto_recalc: bool = True
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        self.angle_unit = AngleUnit(self.angle_unit)
        if not isinstance(self.fmt, str):
            raise TypeError("format must be a string")
        if not 1 <= len(self.fmt) <= _MAX_FORMAT_LENGTH:
            raise ValueError(
                f"format must be 1 to {_MAX_FORMAT_LENGTH} characters long"
            )
        self.auto_recalc = bool(self.auto_recalc)


def default_config_path() -> Path:
    """Location of the configuration file for the current user."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "scalka" / _CONFIG_NAME


def save_settings(settings: Settings, path: "str | os.PathLike[str] | None" = None) -> None:
    """Write the persistent part of the settings."""
    target = Path(path) if path is not None else default_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "angle": int(settings.angle_unit),
        "fmt": settings.fmt,
        "realtime": settings.auto_recalc,
    }
    target.write_text(json.dumps(data, indent=2), encoding="utf-8")


def load_settings(path: "str | os.PathLike[str] | None" = None) -> Settings:
    """Read settings; a missing or unreadable file is replaced by the defaults."""
    target = Path(path) if path is not None else default_config_path()
    try:
        data = json.loads(target.read_text(encoding="utf-8"))
        angle, fmt, realtime = data["angle"], data["fmt"], data["realtime"]
        if not isinstance(angle, int) or not isinstance(realtime, bool):
            raise TypeError("malformed configuration")
        return Settings(angle_unit=angle, fmt=fmt, auto_recalc=realtime)
    except (OSError, ValueError, KeyError, TypeError):
        settings = Settings()
        with contextlib.suppress(OSError):
            save_settings(settings, target)
        return settings