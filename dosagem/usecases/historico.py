# dosagem/usecases/historico.py
"""
UC: Histórico de cálculos.
- listar_historico(): itens do mais recente para o mais antigo, em dicionários.
- remover_com_confirmacao(): exclusão pendente que pode ser cancelada.
- exportar_historico(path): grava CSV ou XLSX usando pandas.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List

import pandas as pd

from dosagem.domain.models import ItemHistorico
from dosagem.infra.repositories import HistoricoRepo
from dosagem.infra.logger import log_file_operation, log_system_event


COLUNAS = [
    "id", "medicamento", "prescricaoValor", "prescricaoUnidade",
    "disponivelValor", "disponivelUnidade", "forma", "resultado", "alerta",
]


def listar_historico(repo: HistoricoRepo) -> List[Dict[str, Any]]:
    return [item.para_dict() for item in repo.listar()]


def remover_com_confirmacao(
    repo: HistoricoRepo,
    item_id: int,
    confirmar: Callable[[ItemHistorico], bool],
) -> bool:
    """Remove o item somente se ``confirmar`` aprovar.

    Retorna ``True`` se algo foi removido. Cancelar (``confirmar`` devolve
    ``False``) ou informar um id inexistente não altera o histórico.
    """
    item = repo.obter(item_id)
    if item is None:
        log_system_event("remocao_id_inexistente", {"id": item_id})
        return False
    if not confirmar(item):
        log_system_event("remocao_cancelada", {"id": item_id})
        return False
    return repo.remover(item_id)


def exportar_historico(repo: HistoricoRepo, path: str) -> Dict[str, Any]:
    """Exporta o histórico para ``.csv`` ou ``.xlsx``."""
    destino = Path(path)
    sufixo = destino.suffix.lower()
    if sufixo not in {".csv", ".xlsx"}:
        raise ValueError(f"Formato de exportação não suportado: {sufixo or '(sem extensão)'}")

    df = pd.DataFrame(listar_historico(repo), columns=COLUNAS)
    try:
        if sufixo == ".csv":
            df.to_csv(destino, index=False, encoding="utf-8")
        else:
            df.to_excel(destino, index=False)
    except Exception as e:
        log_system_event("exportacao_error", {"file_path": str(destino), "error": str(e)}, level="error")
        raise

    log_file_operation("export", str(destino), rows_processed=len(df))
    return {"arquivo": str(destino), "linhas": len(df)}
