"""Operations behind the preferences window: option toggles and colour display."""

from __future__ import annotations

from dataclasses import dataclass

from hashtab.settings import Settings

__all__ = [
    "CheckboxAvailability",
    "format_color",
    "checkbox_availability",
    "set_option",
    "set_algorithm_enabled",
]

# Boolean options that the preferences window offers as checkboxes.
_OPTION_NAMES = (
    "display_uppercase",
    "display_monospace",
    "look_for_sumfiles",
    "sumfile_uppercase",
    "sumfile_unix_endings",
    "sumfile_use_double_space",
    "sumfile_forward_slashes",
    "sumfile_dot_hash_compatible",
    "sumfile_banner",
    "sumfile_banner_date",
    "clipboard_autoenable",
    "clipboard_autoenable_if_none",
    "clipboard_autoenable_exclusive",
    "checkagainst_autoformat",
    "checkagainst_strict",
    "hash_sumfile_too",
    "sumfile_algorithm_only",
)


@dataclass(frozen=True)
class CheckboxAvailability:
    """Which dependent options can currently be changed."""

    sumfile_banner_date: bool
    clipboard_autoenable_if_none: bool
    clipboard_autoenable_exclusive: bool


def format_color(color: int) -> str:
    """Format a packed 0x00BBGGRR colour as an ``#RRGGBB`` string."""
    red = color & 0xFF
    green = (color >> 8) & 0xFF
    blue = (color >> 16) & 0xFF
    return f"#{red << 16 | green << 8 | blue:06X}"


def checkbox_availability(settings: Settings) -> CheckboxAvailability:
    """Work out which dependent options are enabled by their parent option."""
    banner = bool(settings.sumfile_banner)
    clipboard = bool(settings.clipboard_autoenable)
    return CheckboxAvailability(
        sumfile_banner_date=banner,
        clipboard_autoenable_if_none=clipboard,
        clipboard_autoenable_exclusive=clipboard,
    )


def set_option(settings: Settings, name: str, checked: bool) -> CheckboxAvailability:
    """Persist one checkbox option and return the resulting availability.

    Raises KeyError if ``name`` is not one of the checkbox options.
    """
    if name not in _OPTION_NAMES:
        raise KeyError(name)
    getattr(settings, name).set(bool(checked))
    return checkbox_availability(settings)


def set_algorithm_enabled(settings: Settings, algorithm: str, enabled: bool) -> None:
    """Persist whether an algorithm is enabled; raises KeyError if unknown."""
    settings.algorithms[algorithm].set(bool(enabled))