"""
Políticas de segurança de dose.

Este módulo contém a tabela fixa de limites de segurança por
medicamento e a regra que classifica uma dose prescrita (em mg) como
dentro ou fora desses limites. Os limites são ilustrativos e não
constituem referência clínica.
"""

from __future__ import annotations

from typing import Dict, Optional

from dosagem.domain.models import LimiteSeguranca, TipoAlerta, VeredictoSeguranca


LIMITES_SEGURANCA: Dict[str, LimiteSeguranca] = {
    "dipirona": LimiteSeguranca(dose_maxima=4000, dose_minima=500, unidade="mg"),
    "paracetamol": LimiteSeguranca(dose_maxima=4000, dose_minima=500, unidade="mg"),
    "morfina": LimiteSeguranca(dose_maxima=30, unidade="mg"),
}

MSG_DENTRO_LIMITES = "Dosagem dentro dos limites seguros."


def _fmt_limite(valor: float) -> str:
    # 4000 -> "4000", 2.5 -> "2.5"
    return f"{valor:g}"


def limite_para(medicamento: Optional[str]) -> Optional[LimiteSeguranca]:
    """Retorna o limite do medicamento (sem distinção de maiúsculas) ou ``None``."""
    if medicamento is None:
        return None
    return LIMITES_SEGURANCA.get(str(medicamento).strip().lower())


def verificar_seguranca(prescricao_mg: float, medicamento: str) -> VeredictoSeguranca:
    """Verifica se a dose prescrita respeita os limites do medicamento.

    Regras:
        - Medicamento sem limite cadastrado → ``success``.
        - ``prescricao_mg > dose_maxima`` → ``warning`` (avaliada primeiro).
        - ``dose_minima`` definida e ``prescricao_mg < dose_minima`` → ``warning``.
        - Caso contrário → ``success``.

    Os limites são inclusivos: uma dose exatamente igual ao máximo (ou ao
    mínimo) está dentro dos limites.

    Args:
        prescricao_mg: Dose prescrita já convertida para mg.
        medicamento: Nome do medicamento.

    Returns:
        Um ``VeredictoSeguranca`` com mensagem e tipo.
    """
    limite = limite_para(medicamento)
    if limite is not None:
        if prescricao_mg > limite.dose_maxima:
            return VeredictoSeguranca(
                mensagem=(
                    "ALERTA: A dosagem prescrita excede o limite seguro de "
                    f"{_fmt_limite(limite.dose_maxima)} {limite.unidade}."
                ),
                tipo=TipoAlerta.WARNING,
            )
        if limite.dose_minima is not None and prescricao_mg < limite.dose_minima:
            return VeredictoSeguranca(
                mensagem=(
                    "ATENÇÃO: A dosagem prescrita está abaixo do limite mínimo de "
                    f"{_fmt_limite(limite.dose_minima)} {limite.unidade}."
                ),
                tipo=TipoAlerta.WARNING,
            )
    return VeredictoSeguranca(mensagem=MSG_DENTRO_LIMITES, tipo=TipoAlerta.SUCCESS)
