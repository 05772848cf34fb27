"""Persistent user settings, stored as 32-bit values."""

from __future__ import annotations

import enum
import json
import os
from dataclasses import dataclass
from typing import Iterable, Union

__all__ = [
    "SettingsStore",
    "Setting",
    "Settings",
    "HashColorType",
    "ColorSetting",
    "SETTING_DEFAULTS",
    "color_settings",
    "rgb",
]

_DWORD_MASK = 0xFFFFFFFF

SettingValue = Union[bool, int]


def rgb(r: int, g: int, b: int) -> int:
    """Pack a colour as a little-endian 0x00BBGGRR value."""
    return (r & 0xFF) | (g & 0xFF) << 8 | (b & 0xFF) << 16


class SettingsStore:
    """Named 32-bit values, optionally persisted to a JSON file."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self._path = path
        self._values: dict[str, int] = {}
        if path is not None and os.path.exists(path):
            with open(path, encoding="utf-8") as handle:
                loaded = json.load(handle)
            if isinstance(loaded, dict):
                self._values = {
                    str(key): int(value) & _DWORD_MASK
                    for key, value in loaded.items()
                    if isinstance(value, int)
                }

    def get(self, name: str, default: int) -> int:
        """Return the stored value, or ``default`` if there is none."""
        return self._values.get(name, default)

    def set(self, name: str, value: int) -> None:
        """Store a value and write it out if the store has a file."""
        self._values[name] = int(value) & _DWORD_MASK
        if self._path is not None:
            with open(self._path, "w", encoding="utf-8") as handle:
                json.dump(self._values, handle, indent=2, sort_keys=True)


def _to_dword(value: SettingValue) -> int:
    return int(value) & _DWORD_MASK


def _from_dword(dword: int, kind: type) -> SettingValue:
    if kind is bool:
        # A boolean occupies the low byte of the stored value.
        return bool(dword & 0xFF)
    return dword & _DWORD_MASK


class Setting:
    """A single value backed by a store entry."""

    def __init__(self, store: SettingsStore, key: str, default: SettingValue) -> None:
        self.key = key
        self._store = store
        self._kind = bool if isinstance(default, bool) else int
        self._value = _from_dword(store.get(key, _to_dword(default)), self._kind)

    @property
    def value(self) -> SettingValue:
        return self._value

    def set(self, value: SettingValue) -> None:
        """Change the value and persist it."""
        self._value = _from_dword(_to_dword(value), self._kind)
        self._store.set(self.key, _to_dword(self._value))

    def set_no_save(self, value: SettingValue) -> None:
        """Change the value for this session only."""
        self._value = _from_dword(_to_dword(value), self._kind)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __int__(self) -> int:
        return int(self._value)

    def __repr__(self) -> str:
        return f"Setting({self.key!r}, {self._value!r})"


_DEFAULT_ALGORITHMS = ("MD5", "SHA-1", "SHA-256", "SHA-512")

# (attribute, stored name, default)
SETTING_DEFAULTS: tuple[tuple[str, str, SettingValue], ...] = (
    ("display_uppercase", "DisplayUppercase", True),
    ("display_monospace", "DisplayMonospace", True),
    ("look_for_sumfiles", "LookForSumfiles", False),
    ("sumfile_uppercase", "SumfileUppercase", True),
    ("sumfile_unix_endings", "SumfileLF", True),
    ("sumfile_use_double_space", "SumfileDoubleSpace", False),
    ("sumfile_forward_slashes", "SumfileForwardSlash", True),
    ("sumfile_dot_hash_compatible", "SumfileDotHashCompat", True),
    ("sumfile_banner", "SumfileBanner", True),
    ("sumfile_banner_date", "SumfileBannerDate", False),
    ("virustotal_tos", "VTToS", False),
    ("clipboard_autoenable", "ClipboardAutoenable", True),
    ("clipboard_autoenable_if_none", "ClipboardAutoenableIfNone", True),
    ("clipboard_autoenable_exclusive", "ClipboardAutoenableExclusive", False),
    ("checkagainst_autoformat", "CheckAgainstAutoformat", False),
    ("checkagainst_strict", "CheckAgainstStruct", False),
    ("hash_sumfile_too", "HashSumfileToo", False),
    ("sumfile_algorithm_only", "SumfileAlgorithmOnly", True),
    # Colours: no hash to compare against uses system colours, errors show
    # red text, mismatches a red background, secure matches green and
    # insecure matches orange.
    ("unknown_fg_enabled", "UnknownFgEnabled", False),
    ("unknown_fg_color", "UnknownFgColor", rgb(0, 0, 0)),
    ("unknown_bg_enabled", "UnknownBgEnabled", False),
    ("unknown_bg_color", "UnknownBgColor", rgb(255, 255, 255)),
    ("match_fg_enabled", "MatchFgEnabled", True),
    ("match_fg_color", "MatchFgColor", rgb(255, 255, 255)),
    ("match_bg_enabled", "MatchBgEnabled", True),
    ("match_bg_color", "MatchBgColor", rgb(45, 170, 23)),
    ("mismatch_fg_enabled", "MismatchFgEnabled", True),
    ("mismatch_fg_color", "MismatchFgColor", rgb(255, 255, 255)),
    ("mismatch_bg_enabled", "MismatchBgEnabled", True),
    ("mismatch_bg_color", "MismatchBgColor", rgb(230, 55, 23)),
    ("insecure_fg_enabled", "InsecureFgEnabled", True),
    ("insecure_fg_color", "InsecureFgColor", rgb(255, 255, 255)),
    ("insecure_bg_enabled", "InsecureBgEnabled", True),
    ("insecure_bg_color", "InsecureBgColor", rgb(170, 82, 23)),
    ("error_fg_enabled", "ErrorFgEnabled", True),
    ("error_fg_color", "ErrorFgColor", rgb(255, 55, 23)),
    ("error_bg_enabled", "ErrorBgEnabled", False),
    ("error_bg_color", "ErrorBgColor", rgb(255, 255, 255)),
)


class Settings:
    """All user settings, loaded from a store.

    Each entry of ``SETTING_DEFAULTS`` becomes an attribute holding a
    ``Setting``; ``algorithms`` maps algorithm names to enable flags.
    """

    def __init__(self, store: SettingsStore, algorithm_names: Iterable[str]) -> None:
        self.store = store
        self.algorithms: dict[str, Setting] = {
            name: Setting(store, name, name in _DEFAULT_ALGORITHMS) for name in algorithm_names
        }
        for attribute, key, default in SETTING_DEFAULTS:
            setattr(self, attribute, Setting(store, key, default))


class HashColorType(enum.Enum):
    ERROR = "error"
    MATCH = "match"
    INSECURE = "insecure"
    MISMATCH = "mismatch"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ColorSetting:
    """The four settings that style one kind of hash result."""

    fg_enabled: Setting
    fg_color: Setting
    bg_enabled: Setting
    bg_color: Setting


def color_settings(settings: Settings, color_type: HashColorType) -> ColorSetting:
    """Return the colour settings for a kind of hash result."""
    prefix = HashColorType(color_type).value
    return ColorSetting(
        fg_enabled=getattr(settings, f"{prefix}_fg_enabled"),
        fg_color=getattr(settings, f"{prefix}_fg_color"),
        bg_enabled=getattr(settings, f"{prefix}_bg_enabled"),
        bg_color=getattr(settings, f"{prefix}_bg_color"),
    )