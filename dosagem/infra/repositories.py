# dosagem/infra/repositories.py
"""
Repositório do histórico de cálculos.

O histórico é uma sequência ordenada (mais recente primeiro) mantida em
memória e gravada por inteiro no registro durável a cada alteração.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, List, Optional, Union

from dosagem.config import HISTORICO_CHAVE, HISTORICO_DIR
from dosagem.domain.models import ItemHistorico
from dosagem.infra.armazenamento import ArquivoJson
from dosagem.infra.logger import log_historico, log_system_event


def _agora_ms() -> int:
    return time.time_ns() // 1_000_000


def _desserializar(dados: Any) -> List[ItemHistorico]:
    """Converte o documento persistido; qualquer inconsistência → lista vazia."""
    if dados is None:
        return []
    if not isinstance(dados, list):
        log_system_event("historico_invalido", {"tipo": type(dados).__name__}, level="warning")
        return []
    try:
        return [ItemHistorico.de_dict(d) for d in dados]
    except ValueError as e:
        log_system_event("historico_invalido", {"error": str(e)}, level="warning")
        return []


class HistoricoRepo:
    def __init__(self, diretorio: Union[str, Path] = HISTORICO_DIR, chave: str = HISTORICO_CHAVE):
        self.arquivo = ArquivoJson(diretorio, chave)
        self._itens: List[ItemHistorico] = []
        self.carregar()

    def carregar(self) -> None:
        """Carrega a sequência inteira do registro durável."""
        self._itens = _desserializar(self.arquivo.ler())
        log_historico("load", total=len(self._itens), path=str(self.arquivo.path))

    def salvar(self) -> None:
        """Regrava a sequência inteira no registro durável."""
        self._gravar(self._itens)

    def _gravar(self, itens: List[ItemHistorico]) -> None:
        self.arquivo.gravar([item.para_dict() for item in itens])
        log_historico("save", total=len(itens))

    def _novo_id(self) -> int:
        novo = _agora_ms()
        if self._itens:
            maior = max(item.id for item in self._itens)
            if novo <= maior:
                novo = maior + 1
        return novo

    def adicionar(
        self,
        medicamento: str,
        prescricao_valor: float,
        prescricao_unidade: str,
        disponivel_valor: float,
        disponivel_unidade: str,
        forma: str,
        resultado: str,
        alerta: str,
    ) -> ItemHistorico:
        item = ItemHistorico(
            id=self._novo_id(),
            medicamento=medicamento,
            prescricao_valor=prescricao_valor,
            prescricao_unidade=prescricao_unidade,
            disponivel_valor=disponivel_valor,
            disponivel_unidade=disponivel_unidade,
            forma=forma,
            resultado=resultado,
            alerta=alerta,
        )
        # grava antes de trocar a cópia em memória
        novos = [item] + self._itens
        self._gravar(novos)
        self._itens = novos
        log_historico("add", item.id, total=len(self._itens), medicamento=medicamento)
        return item

    def remover(self, item_id: int) -> bool:
        """Remove o item pelo id. Id inexistente não é erro."""
        antes = len(self._itens)
        restantes = [item for item in self._itens if item.id != item_id]
        self._gravar(restantes)
        self._itens = restantes
        removido = len(self._itens) < antes
        log_historico("remove", item_id, total=len(self._itens), removido=removido)
        return removido

    def obter(self, item_id: int) -> Optional[ItemHistorico]:
        for item in self._itens:
            if item.id == item_id:
                return item
        return None

    def listar(self) -> List[ItemHistorico]:
        """Cópia da sequência, do mais recente para o mais antigo."""
        return list(self._itens)
