from __future__ import annotations

import math

import pytest

from ficha.core.formatting import PLACEHOLDER, fmt_cm
from ficha.data.catalog import ARMS, GROUPS, LOWER, PANTS, TOTAL_FIELDS, UPPER
from ficha.data.models import MeasurementRecord
from ficha.pdf.report_draw import distribute_centers, summary_items, total_present
from ficha.pdf.table_layout import (
    build_measurement_table,
    count_present,
    measurement_rows,
    to_double_rows,
)
from ficha.styles.tokens import SECTION_STYLES


def _full_measure() -> MeasurementRecord:
    return MeasurementRecord.from_dict(
        {g.attr: {f.key: 40 + i for i, f in enumerate(g.fields)} for g in GROUPS}
    )


def test_catalog_has_34_fields() -> None:
    assert [len(g.fields) for g in GROUPS] == [14, 6, 6, 8]
    assert TOTAL_FIELDS == 34


@pytest.mark.parametrize("group", GROUPS, ids=lambda g: g.attr)
def test_placeholders_plus_present_equal_group_size(group) -> None:
    # Fill every other field; the rest must show the placeholder
    values = {f.key: 50 for f in group.fields[::2]}
    rows = measurement_rows(group, values)

    placeholders = sum(1 for _label, v in rows if v == PLACEHOLDER)
    assert placeholders + count_present(rows) == len(group.fields)
    assert count_present(rows) == len(group.fields[::2])


def test_rows_follow_catalog_order_and_format() -> None:
    rows = measurement_rows(ARMS, {"largoBrazo": 58.0, "contornoBiceps": 27.5})

    assert rows[0] == ("Largo de brazo", "58 cm")
    assert rows[1] == ("Contorno de bíceps", "27.5 cm")
    assert rows[2] == ("Bajo el brazo", PLACEHOLDER)


def test_missing_values_render_placeholder_not_zero() -> None:
    assert fmt_cm(None) == PLACEHOLDER
    assert fmt_cm("") == PLACEHOLDER
    assert fmt_cm(0) == PLACEHOLDER
    assert fmt_cm(float("nan")) == PLACEHOLDER
    # Malformed values are passed through, not validated
    assert fmt_cm("aprox. 40") == "aprox. 40 cm"


def test_legacy_hip_height_key_is_read() -> None:
    rows = dict(measurement_rows(UPPER, {"alturaCapdera": 21}))
    assert rows["Altura de cadera"] == "21 cm"


@pytest.mark.parametrize("primary", ["", 0, None])
def test_legacy_hip_height_key_used_when_primary_is_blank(primary: object) -> None:
    rows = dict(measurement_rows(UPPER, {"alturaCadera": primary, "alturaCapdera": 21}))
    assert rows["Altura de cadera"] == "21 cm"


def test_primary_hip_height_key_wins_over_legacy() -> None:
    rows = dict(measurement_rows(UPPER, {"alturaCadera": 19, "alturaCapdera": 21}))
    assert rows["Altura de cadera"] == "19 cm"


@pytest.mark.parametrize("length", [0, 1, 2, 5, 6, 14])
def test_to_double_rows_packs_two_pairs_per_row(length: int) -> None:
    pairs = [(f"m{i}", f"{i} cm") for i in range(length)]
    rows = to_double_rows(pairs)

    assert len(rows) == math.ceil(length / 2)
    assert all(len(r) == 4 for r in rows)
    if length % 2:
        assert rows[-1][2:] == ["", ""]
    if length:
        assert rows[0][:2] == ["m0", "0 cm"]


def test_table_has_header_plus_packed_rows() -> None:
    rows = to_double_rows(measurement_rows(LOWER, {}))
    table = build_measurement_table(rows, SECTION_STYLES["lower"], 500)

    cells = table._cellvalues
    assert len(cells) == 1 + 4
    assert cells[0] == ["Medida", "Valor", "Medida", "Valor"]
    assert cells[1][1] == PLACEHOLDER


def test_total_present_counts_across_groups() -> None:
    assert total_present(_full_measure()) == 34

    partial = MeasurementRecord.from_dict({
        "upper": {"contornoCuello": 34},
        "pants": {"largoFalda": 60, "desconocida": 99},
    })
    assert total_present(partial) == 2
    assert total_present(MeasurementRecord()) == 0


def test_summary_reads_full_count() -> None:
    items = summary_items(_full_measure(), total_present(_full_measure()))
    assert items == ["Total medidas: 34 / 34"]


def test_summary_includes_only_supplied_items_in_order() -> None:
    measure = MeasurementRecord(fit_type="Holgado", fabric_type="Lana")
    items = summary_items(measure, 3)

    assert items == ["Total medidas: 3 / 34", "Ajuste: Holgado", "Tela: Lana"]


def test_summary_items_evenly_distributed() -> None:
    assert distribute_centers(3, 0, 100) == [25, 50, 75]
    assert distribute_centers(1, 10, 100) == [60]


def test_every_section_has_its_own_style() -> None:
    assert set(SECTION_STYLES) == {g.attr for g in GROUPS}
    accents = {id(s.accent) for s in SECTION_STYLES.values()}
    assert len(accents) == len(GROUPS)
    assert PANTS.heading == "3. Medidas de Pantalón / Falda (6)"
