"""
json_export.py - Exportacao JSON da tabela de enums

Proposito:
    Gravar os enums validados de uma unidade (nomes, entradas e codigos)
    junto com os diagnosticos, para consumo por ferramentas externas.

Componentes principais:
    - build_json_payload: resultado -> dict serializavel
    - export_json: escrita em arquivo

Dependencias criticas:
    - json: serializacao
    - eenum.compiler: TransformResult

Exemplo de uso:
    from eenum.exporters.json_export import export_json
    export_json(result, Path("colors.json"))

Notas de implementacao:
    - Enums aparecem na ordem de descoberta.
    - Atomos sao exportados pelo nome, sem aspas Erlang.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from eenum.compiler import TransformResult


def build_json_payload(result: TransformResult) -> Dict[str, Any]:
    return {
        "file": result.filename,
        "outcome": result.outcome.value,
        "enums": result.table.to_dict(),
        "functions": [f"{f.name.name}/{f.arity}" for f in result.generated],
        "warnings": [
            {
                "line": diagnostic.location.line,
                "message": diagnostic.to_diagnostic(),
            }
            for diagnostic in result.all_warnings()
        ],
        "stats": {
            "declarations": result.stats.declaration_count,
            "enums": result.stats.enum_count,
            "entries": result.stats.entry_count,
            "functions": result.stats.function_count,
        },
    }


def export_json(result: TransformResult, path: Path) -> None:
    payload = build_json_payload(result)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
