from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
FONTS_DIR = Path("assets") / "fonts"


def _bundle_root() -> Path:
    """Read-only resources: PyInstaller's extraction dir when frozen, else the project root."""
    meipass = getattr(sys, "_MEIPASS", None)
    if getattr(sys, "frozen", False) and meipass:
        return Path(meipass)
    return PROJECT_ROOT


def data_dir() -> Path:
    """Writable location for settings and generated sheets (next to the executable when frozen)."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return PROJECT_ROOT


def font_path(filename: str) -> Path:
    """Optional TrueType font shipped under assets/fonts; may not exist."""
    return _bundle_root() / FONTS_DIR / filename


def settings_path() -> Path:
    return data_dir() / "settings.json"


def default_output_dir() -> Path:
    return data_dir() / "fichas"
