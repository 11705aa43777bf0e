# dosagem/usecases/calcular_dose.py
"""
UC: Calcular dose.
- validar_entrada(): checagens de presença/positividade feitas antes do motor.
- run_calculo(): calcula, verifica a segurança e registra no histórico.

Obs.:
- Só cálculos bem-sucedidos entram no histórico.
- A unidade de concentração é guardada como informada (ex.: 'mg/ml');
  a unidade base correspondente só é informada no resultado.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from dosagem.domain.calculo import calcular_dosagem
from dosagem.domain.conversoes import unidade_base_concentracao
from dosagem.domain.seguranca import verificar_seguranca
from dosagem.infra.repositories import HistoricoRepo
from dosagem.infra.logger import log_calculo, log_system_event


MSG_MEDICAMENTO = "Selecione o medicamento."
MSG_PRESCRICAO = "Insira um valor numérico válido (maior que 0)."
MSG_DISPONIVEL = MSG_PRESCRICAO
MSG_FORMA = "Selecione a forma farmacêutica."


def _vazio(x: Any) -> bool:
    return x is None or not str(x).strip()


def _positivo(x: Optional[float]) -> bool:
    return x is not None and math.isfinite(x) and x > 0


def validar_entrada(
    medicamento: Optional[str],
    prescricao_valor: Optional[float],
    disponivel_valor: Optional[float],
    forma: Optional[str],
) -> Dict[str, str]:
    """Retorna os erros por campo; dicionário vazio significa entrada válida."""
    erros: Dict[str, str] = {}
    if _vazio(medicamento):
        erros["medicamento"] = MSG_MEDICAMENTO
    if not _positivo(prescricao_valor):
        erros["prescricao"] = MSG_PRESCRICAO
    if not _positivo(disponivel_valor):
        erros["disponivel"] = MSG_DISPONIVEL
    if _vazio(forma):
        erros["forma"] = MSG_FORMA
    return erros


def run_calculo(
    medicamento: str,
    prescricao_valor: float,
    prescricao_unidade: str,
    disponivel_valor: float,
    disponivel_unidade_concentracao: str,
    forma: str,
    repo: HistoricoRepo,
) -> Dict[str, Any]:
    """Executa o cálculo completo e registra o resultado no histórico."""
    dados = {
        "medicamento": medicamento,
        "prescricao_valor": prescricao_valor,
        "prescricao_unidade": prescricao_unidade,
        "disponivel_valor": disponivel_valor,
        "disponivel_unidade": disponivel_unidade_concentracao,
        "forma": forma,
    }
    log_system_event("calculo_start", dados)

    # A divisão usa o valor disponível como está; a unidade base só é informada.
    unidade_base = unidade_base_concentracao(disponivel_unidade_concentracao)

    res = calcular_dosagem(prescricao_valor, prescricao_unidade, disponivel_valor, forma, medicamento)

    if not res.sucesso:
        log_calculo(dados, error=res.resultado)
        return {
            "resultado": res.resultado,
            "sucesso": False,
            "falha": res.falha.value,
            "alerta": {"mensagem": res.resultado, "tipo": "error"},
            "item": None,
        }

    veredito = verificar_seguranca(res.prescricao_mg, medicamento)
    try:
        item = repo.adicionar(
            medicamento,
            prescricao_valor,
            prescricao_unidade,
            disponivel_valor,
            disponivel_unidade_concentracao,
            forma,
            res.resultado,
            veredito.mensagem,
        )
    except Exception as e:
        log_system_event("calculo_historico_error", {"error": str(e)}, level="error")
        raise

    log_calculo(dados, result={"quantidade": res.quantidade, "alerta": veredito.tipo.value})
    return {
        "resultado": res.resultado,
        "sucesso": True,
        "quantidade": res.quantidade,
        "prescricao_mg": res.prescricao_mg,
        "disponivel_unidade_base": unidade_base,
        "alerta": {"mensagem": veredito.mensagem, "tipo": veredito.tipo.value},
        "item": item,
    }
