"""Ordered catalog of the 34 atelier measurements, grouped as on the sheet.

Keys match the client app's stored JSON; labels are what the sheet prints.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from ficha.core.formatting import is_missing


@dataclass(frozen=True)
class MeasurementField:
	key: str
	label: str
	# Older client versions stored some values under misspelled keys
	legacy_keys: Tuple[str, ...] = ()

	def lookup(self, values: Mapping[str, Any]) -> Any:
		value = values.get(self.key)
		if is_missing(value):
			for alt in self.legacy_keys:
				if not is_missing(values.get(alt)):
					return values[alt]
		return value


@dataclass(frozen=True)
class MeasurementGroup:
	# Attribute name on MeasurementRecord
	attr: str
	number: int
	title: str
	fields: Tuple[MeasurementField, ...]

	@property
	def heading(self) -> str:
		return f"{self.number}. {self.title} ({len(self.fields)})"


UPPER = MeasurementGroup("upper", 1, "Medidas Delanteras", (
	MeasurementField("contornoCuello", "Contorno de cuello"),
	MeasurementField("contornoSobreBusto", "Contorno sobre busto"),
	MeasurementField("contornoBusto", "Contorno de busto"),
	MeasurementField("contornoBajoBusto", "Contorno bajo busto"),
	MeasurementField("contornoCintura", "Contorno de cintura"),
	MeasurementField("contornoCadera", "Contorno de cadera"),
	MeasurementField("hombros", "Hombros"),
	MeasurementField("anchoHombro", "Ancho de hombro"),
	MeasurementField("caidaHombro", "Caída de hombro"),
	MeasurementField("anchoBusto", "Ancho de busto"),
	MeasurementField("alturaBusto", "Altura de busto"),
	MeasurementField("alturaCadera", "Altura de cadera", legacy_keys=("alturaCapdera",)),
	MeasurementField("largoTalle", "Largo de talle"),
	MeasurementField("largoTalleCentro", "Largo de talle centro"),
))

ARMS = MeasurementGroup("arms", 2, "Medidas de Brazo", (
	MeasurementField("largoBrazo", "Largo de brazo"),
	MeasurementField("contornoBiceps", "Contorno de bíceps"),
	MeasurementField("bajoElBrazo", "Bajo el brazo"),
	MeasurementField("contornoCodo", "Contorno de codo"),
	MeasurementField("contornoMuneca", "Contorno de muñeca"),
	MeasurementField("contornoPuno", "Contorno de puño"),
))

PANTS = MeasurementGroup("pants", 3, "Medidas de Pantalón / Falda", (
	MeasurementField("contornoCintura", "Contorno de cintura"),
	MeasurementField("alturaCadera", "Altura de cadera"),
	MeasurementField("contornoCadera", "Contorno de cadera"),
	MeasurementField("alturaAsiento", "Altura de asiento"),
	MeasurementField("largoPantalon", "Largo de pantalón"),
	MeasurementField("largoFalda", "Largo de falda"),
))

LOWER = MeasurementGroup("lower", 4, "Medidas Traseras", (
	MeasurementField("largoTalleTrasero", "Largo talle trasero"),
	MeasurementField("anchoHombrosTrasero", "Ancho hombros trasero"),
	MeasurementField("largoCentroTrasero", "Largo centro trasero"),
	MeasurementField("reboqueCuelloTrasero", "Reboque de cuello"),
	MeasurementField("largoCaidaTrasero", "Largo caída trasero"),
	MeasurementField("anchoToraxTrasero", "Ancho tórax trasero"),
	MeasurementField("anchoOmoplatosTrasero", "Ancho omóplatos trasero"),
	MeasurementField("anchoCinturaTrasero", "Ancho cintura trasero"),
))

GROUPS: Tuple[MeasurementGroup, ...] = (UPPER, ARMS, PANTS, LOWER)

TOTAL_FIELDS = sum(len(g.fields) for g in GROUPS)
