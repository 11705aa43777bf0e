"""
Conversão de unidades para miligramas.

A tabela de conversão expressa cada unidade reconhecida como um
multiplicador em miligramas. Unidades desconhecidas não são erro: o
multiplicador padrão é 1, ou seja, o valor é tratado como se já
estivesse em miligramas.

Observação sobre ``ml`` e ``ui``: ambos valem 1. Não há conversão real
de volume ou de unidades internacionais para massa; o valor é apenas
repassado para que grandezas heterogêneas possam ser comparadas.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Union


class Unidade(str, Enum):
    """Unidades reconhecidas pela tabela de conversão."""
    G = "g"
    MG = "mg"
    MCG = "mcg"
    ML = "ml"
    UI = "ui"

    @classmethod
    def from_simbolo(cls, simbolo: Optional[str]) -> Optional["Unidade"]:
        """Busca a unidade pelo símbolo, ignorando maiúsculas e espaços.

        Retorna ``None`` quando o símbolo não é reconhecido.
        """
        if simbolo is None:
            return None
        chave = str(simbolo).strip().lower()
        for unidade in cls:
            if unidade.value == chave:
                return unidade
        return None


TABELA_CONVERSAO: Dict[Unidade, float] = {
    Unidade.G: 1000.0,
    Unidade.MG: 1.0,
    Unidade.MCG: 0.001,
    Unidade.ML: 1.0,
    Unidade.UI: 1.0,
}

FATOR_PADRAO = 1.0

# Unidade de concentração (como o usuário escolhe) -> unidade base do cálculo
CONCENTRACAO_PARA_UNIDADE: Dict[str, str] = {
    "mg/ml": "mg",
    "mcg/ml": "mcg",
    "g/ml": "g",
}


def fator_para_mg(simbolo: Optional[str]) -> float:
    """Multiplicador em mg da unidade; ``FATOR_PADRAO`` se desconhecida."""
    unidade = Unidade.from_simbolo(simbolo)
    if unidade is None:
        return FATOR_PADRAO
    return TABELA_CONVERSAO[unidade]


def converter_para_mg(valor: Union[int, float], unidade: Optional[str]) -> float:
    """Converte ``valor`` expresso em ``unidade`` para miligramas.

    Nunca falha por causa da unidade: símbolos desconhecidos usam o
    multiplicador 1.

    Exemplos:
        converter_para_mg(1, "g")   → 1000.0
        converter_para_mg(250, "MCG") → 0.25
        converter_para_mg(3, "gotas") → 3.0
    """
    return float(valor) * fator_para_mg(unidade)


def unidade_base_concentracao(simbolo: Optional[str]) -> str:
    """Mapeia a unidade de concentração (ex.: ``mg/ml``) para a unidade base.

    Símbolos não mapeados são devolvidos em minúsculas, sem alteração.
    """
    chave = (simbolo or "").strip().lower()
    return CONCENTRACAO_PARA_UNIDADE.get(chave, chave)
