"""Exportación JSON de la lista mostrada.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Vuelca exactamente lo que devolvió el último Load, sin reordenar filas.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.domain.models import Category


def export_categories_json(*, records: Iterable[Category], output_path: Path) -> Path:
    """Exporta las filas a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [record.model_dump(mode="json", by_alias=True) for record in records]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
