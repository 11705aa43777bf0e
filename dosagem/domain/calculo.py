"""
Cálculo da quantidade a administrar.

Dada a dose prescrita (em qualquer unidade reconhecida) e a
concentração disponível do medicamento, calcula quanto administrar:

    quantidade = prescricao_mg / disponivel_valor

A quantidade é apresentada em unidades da forma farmacêutica
(comprimidos, cápsulas) ou em mililitros (líquidos, injeções,
soluções). O arredondamento para duas casas é apenas de apresentação;
o valor devolvido em ``ResultadoCalculo.quantidade`` tem precisão total.

As funções são puras: não fazem I/O nem alteram estado externo.
"""

from __future__ import annotations

import re
from typing import Dict, Optional, Union

from dosagem.config import DEFAULTS
from dosagem.domain.conversoes import converter_para_mg
from dosagem.domain.models import FamiliaForma, ResultadoCalculo, TipoFalha


MSG_CONCENTRACAO_INVALIDA = "Erro: Concentração disponível não pode ser zero."
MSG_FORMA_NAO_RECONHECIDA = "Erro: Forma farmacêutica não reconhecida."

FORMAS: Dict[str, FamiliaForma] = {
    "comprimido": FamiliaForma.UNIDADE_DISCRETA,
    "capsula": FamiliaForma.UNIDADE_DISCRETA,
    "liquido": FamiliaForma.LIQUIDA,
    "injecao": FamiliaForma.LIQUIDA,
    "solucao": FamiliaForma.LIQUIDA,
}


def _slug(s: str) -> str:
    """Normaliza o nome da forma: minúsculas, sem acentos, espaços simples."""
    s = str(s).strip().lower()
    acentos = dict(zip("áàâãäéèêëíìîïóòôõöúùûüç", "aaaaaeeeeiiiiooooouuuuc"))
    s = "".join(acentos.get(ch, ch) for ch in s)
    return re.sub(r"\s+", " ", s)


def classificar_forma(forma: str) -> Optional[FamiliaForma]:
    """Classifica a forma farmacêutica; ``None`` se não reconhecida."""
    return FORMAS.get(_slug(forma))


def _fmt(quantidade: float) -> str:
    return f"{quantidade:.{DEFAULTS.casas_decimais}f}"


def calcular_dosagem(
    prescricao_valor: Union[int, float],
    prescricao_unidade: str,
    disponivel_valor: Union[int, float],
    forma: str,
    medicamento: str,
) -> ResultadoCalculo:
    """Calcula a quantidade a administrar.

    Args:
        prescricao_valor: Dose prescrita, na unidade ``prescricao_unidade``.
        prescricao_unidade: Símbolo da unidade (g, mg, mcg, ml, ui).
        disponivel_valor: Concentração disponível (mg por unidade da forma).
        forma: Forma farmacêutica (comprimido, cápsula, líquido, ...).
        medicamento: Nome do medicamento, usado só na mensagem.

    Returns:
        ``ResultadoCalculo``. Falhas (concentração <= 0, forma desconhecida
        ou erro inesperado) voltam com ``sucesso=False``; nada é lançado.
    """
    try:
        prescricao_mg = converter_para_mg(prescricao_valor, prescricao_unidade)

        if disponivel_valor <= 0:
            return ResultadoCalculo.erro(TipoFalha.CONCENTRACAO_INVALIDA, MSG_CONCENTRACAO_INVALIDA)

        quantidade = prescricao_mg / disponivel_valor

        familia = classificar_forma(forma)
        if familia is FamiliaForma.UNIDADE_DISCRETA:
            texto = f"Administrar {_fmt(quantidade)} {forma}(s) de {medicamento}"
        elif familia is FamiliaForma.LIQUIDA:
            texto = f"Administrar {_fmt(quantidade)} ml de {medicamento}"
        else:
            return ResultadoCalculo.erro(TipoFalha.FORMA_NAO_RECONHECIDA, MSG_FORMA_NAO_RECONHECIDA)

        return ResultadoCalculo.ok(texto, quantidade, prescricao_mg)
    except Exception as e:
        return ResultadoCalculo.erro(TipoFalha.INESPERADA, f"Erro no cálculo: {e}")
