# dosagem/config.py
"""
Configurações globais e valores padrão do sistema de dosagem.
"""

import os
from dataclasses import dataclass


# Diretório padrão onde o histórico é gravado
HISTORICO_DIR = os.getcwd()

# Nome do registro durável que guarda o histórico (<dir>/<chave>.json)
HISTORICO_CHAVE = "dosageHistory"


@dataclass
class DefaultConfig:
    """Valores padrão para parâmetros do sistema."""
    casas_decimais: int = 2  # arredondamento apenas na apresentação
    unidade_prescricao: str = "mg"
    unidade_concentracao: str = "mg/ml"


# Instância global dos valores padrão
DEFAULTS = DefaultConfig()
