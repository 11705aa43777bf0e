# dosagem/infra/armazenamento.py
"""
Registro durável nomeado, serializado em JSON.

Cada registro é um arquivo ``<diretorio>/<chave>.json`` lido por inteiro
e regravado por inteiro. Não há escrita parcial nem controle de
concorrência: existe um único escritor (a sessão ativa).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

from dosagem.infra.logger import log_file_operation, log_system_event


class ArquivoJson:
    def __init__(self, diretorio: Union[str, Path], chave: str):
        self.path = Path(diretorio) / f"{chave}.json"

    def ler(self) -> Optional[Any]:
        """Lê o registro. ``None`` se ausente ou ilegível (JSON inválido)."""
        if not self.path.exists():
            return None
        try:
            conteudo = self.path.read_text(encoding="utf-8")
            return json.loads(conteudo)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            log_system_event("registro_corrompido", {"path": str(self.path), "error": str(e)}, level="warning")
            return None

    def gravar(self, obj: Any) -> None:
        """Sobrescreve o registro inteiro com ``obj`` serializado."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(obj, ensure_ascii=False), encoding="utf-8")
        log_file_operation("write", str(self.path), rows_processed=len(obj) if isinstance(obj, list) else 0)
