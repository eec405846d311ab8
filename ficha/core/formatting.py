from __future__ import annotations

import datetime as _dt
import re
from decimal import Decimal
from typing import Any, Iterable, Optional

from slugify import slugify

PLACEHOLDER = "—"
DEFAULT_SLUG = "cliente"

MONTHS_ES = (
	"enero", "febrero", "marzo", "abril", "mayo", "junio",
	"julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)

_PROTOCOL_RE = re.compile(r"^https?://", re.IGNORECASE)


def is_missing(value: Any) -> bool:
	"""True for values the sheet shows as a placeholder: None, empty text, zero or NaN."""
	if value is None:
		return True
	if isinstance(value, str):
		return value == ""
	if isinstance(value, (int, float, Decimal)):
		return value == 0 or value != value
	return False


def fmt_number(value: Any) -> str:
	"""Trim float noise: 90.0 -> '90', 85.5 -> '85.5'. Non-numeric values pass through as text."""
	if isinstance(value, float) and value.is_integer():
		return str(int(value))
	return str(value)


def fmt_cm(value: Any) -> str:
	if is_missing(value):
		return PLACEHOLDER
	return f"{fmt_number(value)} cm"


def _as_date(val: _dt.date | _dt.datetime) -> _dt.date:
	return val.date() if isinstance(val, _dt.datetime) else val


def fmt_long_date(val: _dt.date | _dt.datetime) -> str:
	"""Spanish long form, e.g. '9 de agosto de 2025'."""
	d = _as_date(val)
	return f"{d.day} de {MONTHS_ES[d.month - 1]} de {d.year}"


def fmt_file_date(val: _dt.date | _dt.datetime) -> str:
	return _as_date(val).strftime("%d%m%Y")


def slug_name(name: Optional[str], ascii_fold: bool = False) -> str:
	"""Lowercase and hyphenate whitespace runs; accents are kept unless ascii_fold."""
	raw = (name or "").strip() or DEFAULT_SLUG
	if ascii_fold:
		return slugify(raw) or DEFAULT_SLUG
	slug = re.sub(r"\s+", "-", raw).lower()
	# Never let a client name introduce directories
	return slug.replace("/", "-").replace("\\", "-")


def strip_protocol(url: str) -> str:
	return _PROTOCOL_RE.sub("", url)


def contact_line(phone: Any, website: Any, sep: str = " · ") -> str:
	parts: Iterable[str] = (
		str(phone) if phone else "",
		strip_protocol(str(website)) if website else "",
	)
	return sep.join(p for p in parts if p)
