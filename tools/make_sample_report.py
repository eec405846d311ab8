from __future__ import annotations

from datetime import datetime
from pathlib import Path
import logging
import sys

# Ensure we can import the ficha package when running this script directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ficha.core.settings import load_settings
from ficha.pdf.report_draw import render_report


def _measure() -> dict:
    # Realistic session with a few gaps so placeholders show up
    return {
        "label": "Prueba vestido de novia",
        "fitType": "Entallado",
        "fabricType": "Crepé de seda",
        "suggestedSize": "M",
        "technicalNotes": (
            "Hombro derecho 1 cm más bajo que el izquierdo.\n"
            "Prefiere la cintura marcada y el largo por debajo de la rodilla. "
            "Dejar 2 cm de margen en costuras laterales para la segunda prueba."
        ),
        "upper": {
            "contornoCuello": 34, "contornoSobreBusto": 82, "contornoBusto": 88,
            "contornoBajoBusto": 74, "contornoCintura": 68, "contornoCadera": 96,
            "hombros": 38, "anchoHombro": 12.5, "caidaHombro": 4,
            "anchoBusto": 18, "alturaBusto": 24, "alturaCadera": 20,
            "largoTalle": 41, "largoTalleCentro": 35.5,
        },
        "arms": {"largoBrazo": 58, "contornoBiceps": 27, "contornoMuneca": 15},
        "pants": {"contornoCintura": 68, "contornoCadera": 96, "largoFalda": 62},
        "lower": {
            "largoTalleTrasero": 40, "anchoHombrosTrasero": 37,
            "largoCentroTrasero": 39, "anchoCinturaTrasero": 34,
        },
    }


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = load_settings()

    client = {"name": "Ana López", "gender": "femenino", "phone": "600 123 456", "email": "ana@example.com"}

    # Write under repository assets/samples to avoid permission or file-lock issues
    out_dir = ROOT / "assets" / "samples"
    try:
        out_pdf = render_report(client, _measure(), out_dir=out_dir, settings=settings)
    except PermissionError:
        # If the file is open/locked, write to a timestamped folder instead
        ts = datetime.now().strftime("%Y%m%d-%H%M%S")
        out_pdf = render_report(client, _measure(), out_dir=out_dir / ts, settings=settings)
    print(f"Wrote sample to: {out_pdf}")


if __name__ == "__main__":
    main()
