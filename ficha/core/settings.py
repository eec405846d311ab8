from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import os
import logging

from ficha.core.paths import settings_path, default_output_dir
from ficha.data.models import StudioBranding, DEFAULT_STUDIO_NAME

logger = logging.getLogger(__name__)

# Path to the settings.json (runtime-aware)
SETTINGS_PATH = settings_path()


@dataclass
class Settings:
	studio_name: str = DEFAULT_STUDIO_NAME
	studio_phone: Optional[str] = None
	# Shown in the footer without its http(s):// prefix
	studio_website: Optional[str] = None
	# Folder for generated sheets; if None, defaults to <project>/fichas
	output_dir: Optional[str] = None
	# Fold accents out of file names ("ana-lopez" instead of "ana-lópez")
	ascii_filenames: bool = False

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Settings":
		# Merge provided values over defaults, ignore unknown keys
		defaults = asdict(cls())
		merged: Dict[str, Any] = {**defaults, **{k: v for k, v in data.items() if k in defaults}}
		return cls(**merged)

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)

	def studio(self) -> StudioBranding:
		return StudioBranding(name=self.studio_name, phone=self.studio_phone, website=self.studio_website)

	def resolved_output_dir(self) -> Path:
		return Path(self.output_dir) if self.output_dir else default_output_dir()


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
	"""
	Read settings.json. A missing file is created with defaults; an unreadable one
	is left untouched and defaults are used for this run.
	"""
	target = Path(path or SETTINGS_PATH)
	if not target.is_file():
		return save_settings(Settings(), target)

	try:
		raw = json.loads(target.read_text(encoding="utf-8"))
	except (ValueError, OSError) as exc:
		logger.warning("Ignoring settings file %s: %s", target, exc)
		return Settings()

	if not isinstance(raw, dict):
		logger.warning("Ignoring settings file %s: expected a JSON object", target)
		return Settings()
	return Settings.from_dict(raw)


def save_settings(settings: Settings, path: Optional[Union[str, Path]] = None) -> Settings:
	"""Write settings as indented UTF-8 JSON through a temp file, then return them."""
	target = Path(path or SETTINGS_PATH)
	target.parent.mkdir(parents=True, exist_ok=True)
	staging = target.parent / f".{target.name}.tmp"
	staging.write_text(json.dumps(settings.to_dict(), indent=2, ensure_ascii=False) + "\n", encoding="utf-8", newline="\n")
	os.replace(staging, target)
	return settings
