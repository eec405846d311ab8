from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional

from sqlmodel import Field, SQLModel


DEFAULT_STUDIO_NAME = "Atelier Elizabeth"

GENDER_LABELS: Dict[str, str] = {
	"femenino": "Femenino",
	"masculino": "Masculino",
	"otro": "Otro",
}


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
	"""First non-None value among keys (camelCase from the client app, then snake_case)."""
	for key in keys:
		value = data.get(key)
		if value is not None:
			return value
	return None


def _text(value: Any) -> Optional[str]:
	return None if value is None else str(value)


class _Record(SQLModel):
	# Subclasses provide from_dict()
	@classmethod
	def coerce(cls, obj: Any):
		"""Accept a record, a plain mapping, None, or any object exposing the same attributes."""
		if isinstance(obj, cls):
			return obj
		if obj is None:
			return cls()
		if isinstance(obj, Mapping):
			return cls.from_dict(obj)
		return cls.model_validate(obj, from_attributes=True)


class ClientRecord(_Record):
	name: Optional[str] = None
	# femenino | masculino | otro; other values are shown as given
	gender: Optional[str] = None
	phone: Optional[str] = None
	email: Optional[str] = None

	@classmethod
	def from_dict(cls, data: Mapping[str, Any]) -> "ClientRecord":
		return cls(
			name=_text(_pick(data, "name")),
			gender=_text(_pick(data, "gender")),
			phone=_text(_pick(data, "phone")),
			email=_text(_pick(data, "email")),
		)

	def gender_label(self) -> Optional[str]:
		if not self.gender:
			return None
		return GENDER_LABELS.get(self.gender, self.gender)


class MeasurementRecord(_Record):
	label: Optional[str] = None
	fit_type: Optional[str] = None
	fabric_type: Optional[str] = None
	suggested_size: Optional[str] = None
	technical_notes: Optional[str] = None
	# Measurement key -> centimeters; values are not validated
	upper: Dict[str, Any] = Field(default_factory=dict)
	arms: Dict[str, Any] = Field(default_factory=dict)
	pants: Dict[str, Any] = Field(default_factory=dict)
	lower: Dict[str, Any] = Field(default_factory=dict)

	@classmethod
	def from_dict(cls, data: Mapping[str, Any]) -> "MeasurementRecord":
		def group(key: str) -> Dict[str, Any]:
			raw = data.get(key)
			return dict(raw) if isinstance(raw, Mapping) else {}

		return cls(
			label=_text(_pick(data, "label")),
			fit_type=_text(_pick(data, "fitType", "fit_type")),
			fabric_type=_text(_pick(data, "fabricType", "fabric_type")),
			suggested_size=_text(_pick(data, "suggestedSize", "suggested_size")),
			technical_notes=_text(_pick(data, "technicalNotes", "technical_notes")),
			upper=group("upper"),
			arms=group("arms"),
			pants=group("pants"),
			lower=group("lower"),
		)


class StudioBranding(_Record):
	name: Optional[str] = None
	phone: Optional[str] = None
	website: Optional[str] = None

	@classmethod
	def from_dict(cls, data: Mapping[str, Any]) -> "StudioBranding":
		return cls(
			name=_text(_pick(data, "name")),
			phone=_text(_pick(data, "phone")),
			website=_text(_pick(data, "website")),
		)

	def display_name(self) -> str:
		return self.name or DEFAULT_STUDIO_NAME
