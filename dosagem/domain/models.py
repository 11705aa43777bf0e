# dosagem/domain/models.py
"""
Modelos (dataclasses) do domínio.

Observação importante:
- O motor de cálculo nunca lança exceções para o chamador; falhas voltam
  como `ResultadoCalculo(sucesso=False, falha=TipoFalha...)`.
- `ItemHistorico` é imutável: o histórico só cresce pela frente ou
  perde itens inteiros.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class TipoFalha(str, Enum):
    """Tipos de falha do cálculo (conjunto fechado + inesperada)."""
    CONCENTRACAO_INVALIDA = "concentracao_invalida"
    FORMA_NAO_RECONHECIDA = "forma_nao_reconhecida"
    INESPERADA = "inesperada"


class TipoAlerta(str, Enum):
    WARNING = "warning"
    SUCCESS = "success"


class FamiliaForma(str, Enum):
    """Famílias de apresentação da forma farmacêutica."""
    UNIDADE_DISCRETA = "unidade_discreta"  # comprimido, cápsula
    LIQUIDA = "liquida"                    # líquido, injeção, solução


@dataclass(frozen=True)
class ResultadoCalculo:
    """Resultado do cálculo de dosagem."""
    resultado: str
    sucesso: bool
    quantidade: Optional[float] = None     # unidade depende da forma
    prescricao_mg: Optional[float] = None
    falha: Optional[TipoFalha] = None

    def __post_init__(self) -> None:
        if self.sucesso:
            if self.falha is not None:
                raise ValueError("resultado com sucesso não pode ter falha")
            if self.quantidade is None or self.prescricao_mg is None:
                raise ValueError("resultado com sucesso exige quantidade e prescricao_mg")
        else:
            if self.falha is None:
                raise ValueError("resultado sem sucesso exige o tipo de falha")
            if self.quantidade is not None or self.prescricao_mg is not None:
                raise ValueError("quantidade e prescricao_mg só existem em caso de sucesso")

    @classmethod
    def ok(cls, resultado: str, quantidade: float, prescricao_mg: float) -> "ResultadoCalculo":
        return cls(resultado=resultado, sucesso=True, quantidade=quantidade, prescricao_mg=prescricao_mg)

    @classmethod
    def erro(cls, falha: TipoFalha, resultado: str) -> "ResultadoCalculo":
        return cls(resultado=resultado, sucesso=False, falha=falha)


@dataclass(frozen=True)
class VeredictoSeguranca:
    """Veredito da verificação de limites de segurança."""
    mensagem: str
    tipo: TipoAlerta


@dataclass(frozen=True)
class LimiteSeguranca:
    """Limites de dose (em mg) de um medicamento específico."""
    dose_maxima: float
    dose_minima: Optional[float] = None
    unidade: str = "mg"


# Nome dos campos no registro persistido (JSON)
_CAMPOS_PERSISTIDOS = {
    "id": "id",
    "medicamento": "medicamento",
    "prescricao_valor": "prescricaoValor",
    "prescricao_unidade": "prescricaoUnidade",
    "disponivel_valor": "disponivelValor",
    "disponivel_unidade": "disponivelUnidade",
    "forma": "forma",
    "resultado": "resultado",
    "alerta": "alerta",
}


@dataclass(frozen=True)
class ItemHistorico:
    """Registro de um cálculo bem-sucedido no histórico."""
    id: int
    medicamento: str
    prescricao_valor: float
    prescricao_unidade: str
    disponivel_valor: float
    disponivel_unidade: str
    forma: str
    resultado: str
    alerta: str

    def para_dict(self) -> Dict[str, Any]:
        """Converte para o formato persistido (chaves camelCase)."""
        return {_CAMPOS_PERSISTIDOS[k]: v for k, v in asdict(self).items()}

    @classmethod
    def de_dict(cls, data: Dict[str, Any]) -> "ItemHistorico":
        """Constrói a partir do formato persistido.

        Lança ``ValueError`` se algum campo estiver ausente ou com tipo
        incompatível.
        """
        if not isinstance(data, dict):
            raise ValueError("item de histórico deve ser um objeto")
        try:
            valores = {k: data[persistido] for k, persistido in _CAMPOS_PERSISTIDOS.items()}
        except KeyError as e:
            raise ValueError(f"campo ausente no histórico: {e.args[0]}") from e

        item_id = valores["id"]
        if isinstance(item_id, bool) or not (
            isinstance(item_id, int) or (isinstance(item_id, float) and item_id.is_integer())
        ):
            raise ValueError(f"id inválido no histórico: {item_id!r}")
        for campo in ("prescricao_valor", "disponivel_valor"):
            v = valores[campo]
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                raise ValueError(f"{campo} inválido no histórico: {v!r}")
        for campo in ("medicamento", "prescricao_unidade", "disponivel_unidade", "forma", "resultado", "alerta"):
            if not isinstance(valores[campo], str):
                raise ValueError(f"{campo} inválido no histórico: {valores[campo]!r}")

        valores["id"] = int(item_id)
        return cls(**valores)
