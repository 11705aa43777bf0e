# app.py
"""
Entrypoint da aplicação.

Uso:
  python app.py calcular -m dipirona -p "1 g" -d "500 mg/ml" -f comprimido
  python app.py historico listar
  python app.py historico remover <id>
  python app.py historico exportar historico.xlsx
  python app.py limites
"""

from dosagem.adapters.cli import main

if __name__ == "__main__":
    main()
