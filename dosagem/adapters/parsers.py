"""
Utilidades de parsing para valores digitados pelo usuário.

Este módulo interpreta strings de dose como "500 mg", "1,5g" ou
"100 mg/ml", extraindo de forma robusta o valor numérico e o símbolo
da unidade. Vírgula e ponto são aceitos como separador decimal.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

_NUM_RE = re.compile(r"^\s*([-+]?(?:\d+(?:[.,]\d*)?|[.,]\d+)(?:[eE][-+]?\d+)?)\s*(.*?)\s*$")


def parse_dose(txt) -> Tuple[Optional[float], Optional[str]]:
    """Interpreta uma dose com unidade.

    Exemplos:
        "500 mg"     → (500.0, "mg")
        "1,5g"       → (1.5, "g")
        "100 MG/ML"  → (100.0, "mg/ml")
        "10"         → (10.0, None)
        "1e3 mcg"    → (1000.0, "mcg")
        ".5 g"       → (0.5, "g")

    Args:
        txt: Texto a ser interpretado.

    Returns:
        Uma tupla (valor, unidade). A unidade é devolvida em minúsculas.
        Qualquer parte que não possa ser determinada vem como None.
    """
    if txt is None:
        return None, None
    s = str(txt).strip()
    if not s:
        return None, None
    m = _NUM_RE.match(s)
    if not m:
        return None, None
    valor = float(m.group(1).replace(",", "."))
    unidade = m.group(2).replace(" ", "").lower() or None
    return valor, unidade
