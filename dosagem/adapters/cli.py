# dosagem/adapters/cli.py
"""
CLI do sistema de dosagem (Typer).

Comandos principais:
- calcular                 -> calcula a dose, verifica a segurança e grava no histórico
- historico listar         -> mostra o histórico (mais recente primeiro)
- historico remover <id>   -> exclui um cálculo após confirmação
- historico exportar <arq> -> exporta o histórico para CSV/XLSX
- limites                  -> tabela de limites de segurança
- unidades                 -> tabela de conversão para mg
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich import box

from dosagem.config import DEFAULTS, HISTORICO_DIR
from dosagem.adapters.parsers import parse_dose
from dosagem.domain.conversoes import CONCENTRACAO_PARA_UNIDADE, TABELA_CONVERSAO
from dosagem.domain.models import ItemHistorico
from dosagem.domain.seguranca import LIMITES_SEGURANCA
from dosagem.infra.repositories import HistoricoRepo
from dosagem.usecases.calcular_dose import run_calculo, validar_entrada
from dosagem.usecases.historico import (
    exportar_historico,
    listar_historico,
    remover_com_confirmacao,
)


app = typer.Typer(help="SafeDose — cálculo de dosagem de medicamentos")
console = Console()

HISTORICO_OPT_HELP = "Diretório onde o histórico (dosageHistory.json) é gravado"

ESTILO_ALERTA = {
    "warning": "yellow",
    "success": "green",
    "error": "red",
}


# -----------------------
# util
# -----------------------

def _print_json(obj) -> None:
    typer.echo(json.dumps(obj, ensure_ascii=False, indent=2))


def _fmt_num(val: float) -> str:
    return f"{val:g}"


def _display_historico(itens: List[Dict[str, Any]]) -> None:
    """Exibe o histórico em tabela formatada usando Rich."""
    if not itens:
        typer.echo("Nenhum cálculo no histórico.")
        return

    table = Table(title="Histórico de Cálculos", box=box.ROUNDED)
    table.add_column("ID", justify="right")
    table.add_column("Medicamento")
    table.add_column("Dosagem Prescrita", justify="right")
    table.add_column("Concentração Disponível", justify="right")
    table.add_column("Resultado")
    table.add_column("Alerta")
    for item in itens:
        table.add_row(
            str(item["id"]),
            item["medicamento"],
            f"{_fmt_num(item['prescricaoValor'])} {item['prescricaoUnidade']}",
            f"{_fmt_num(item['disponivelValor'])} {item['disponivelUnidade']} ({item['forma']})",
            item["resultado"],
            item["alerta"],
        )
    console.print(table)


def _display_alerta(mensagem: str, tipo: str) -> None:
    estilo = ESTILO_ALERTA.get(tipo, "white")
    console.print(Panel(Text(mensagem), title="Alerta de Segurança", border_style=estilo))


def _resolver_dose(texto: Optional[str], unidade_padrao: str) -> tuple[Optional[float], str]:
    valor, unidade = parse_dose(texto)
    return valor, (unidade or unidade_padrao)


# -----------------------
# cálculo
# -----------------------

@app.command("calcular")
def cmd_calcular(
    medicamento: str = typer.Option("", "--medicamento", "-m", help="Nome do medicamento (ex.: dipirona)"),
    prescricao: str = typer.Option("", "--prescricao", "-p", help="Dose prescrita, ex.: '1 g' ou '500 mg'"),
    prescricao_unidade: str = typer.Option(
        DEFAULTS.unidade_prescricao, "--prescricao-unidade", help="Unidade usada quando --prescricao não traz unidade"
    ),
    disponivel: str = typer.Option("", "--disponivel", "-d", help="Concentração disponível, ex.: '500 mg/ml'"),
    disponivel_unidade: str = typer.Option(
        DEFAULTS.unidade_concentracao, "--disponivel-unidade", help="Unidade usada quando --disponivel não traz unidade"
    ),
    forma: str = typer.Option("", "--forma", "-f", help="comprimido | capsula | líquido | injeção | solução"),
    historico_dir: str = typer.Option(HISTORICO_DIR, "--historico", help=HISTORICO_OPT_HELP),
):
    """Calcula a quantidade a administrar e registra no histórico."""
    prescricao_valor, prescricao_un = _resolver_dose(prescricao, prescricao_unidade)
    disponivel_valor, disponivel_un = _resolver_dose(disponivel, disponivel_unidade)

    erros = validar_entrada(medicamento, prescricao_valor, disponivel_valor, forma)
    if erros:
        for campo, msg in erros.items():
            typer.echo(f"{campo}: {msg}", err=True)
        raise typer.Exit(code=1)

    repo = HistoricoRepo(historico_dir)
    res = run_calculo(
        medicamento.strip(),
        prescricao_valor,
        prescricao_un,
        disponivel_valor,
        disponivel_un,
        forma.strip(),
        repo,
    )

    if not res["sucesso"]:
        console.print(res["resultado"], style="bold red", markup=False)
        raise typer.Exit(code=1)

    typer.echo(res["resultado"])
    _display_alerta(res["alerta"]["mensagem"], res["alerta"]["tipo"])
    console.print(f"[dim]Registrado no histórico com id {res['item'].id}[/dim]")


# -----------------------
# histórico
# -----------------------

hist_app = typer.Typer(help="Gerenciar o histórico de cálculos.")
app.add_typer(hist_app, name="historico")


@hist_app.command("listar")
def cmd_historico_listar(
    como_json: bool = typer.Option(False, "--json", help="Imprime no formato persistido (JSON)"),
    historico_dir: str = typer.Option(HISTORICO_DIR, "--historico", help=HISTORICO_OPT_HELP),
):
    """Mostra o histórico, do mais recente para o mais antigo."""
    itens = listar_historico(HistoricoRepo(historico_dir))
    if como_json:
        _print_json(itens)
    else:
        _display_historico(itens)


@hist_app.command("remover")
def cmd_historico_remover(
    item_id: int = typer.Argument(..., help="ID do cálculo"),
    sim: bool = typer.Option(False, "--sim", "-y", help="Não pede confirmação"),
    historico_dir: str = typer.Option(HISTORICO_DIR, "--historico", help=HISTORICO_OPT_HELP),
):
    """Exclui um cálculo do histórico (pede confirmação)."""
    repo = HistoricoRepo(historico_dir)
    if repo.obter(item_id) is None:
        typer.echo(f"Nenhum cálculo com id {item_id}.")
        return

    def _confirmar(item: ItemHistorico) -> bool:
        if sim:
            return True
        return typer.confirm(f"Excluir o cálculo {item.id} ({item.medicamento})?", default=False)

    if remover_com_confirmacao(repo, item_id, _confirmar):
        typer.echo(f">> Cálculo {item_id} excluído.")
    else:
        typer.echo("Exclusão cancelada.")


@hist_app.command("exportar")
def cmd_historico_exportar(
    path: str = typer.Argument(..., help="Arquivo de saída (.csv ou .xlsx)"),
    historico_dir: str = typer.Option(HISTORICO_DIR, "--historico", help=HISTORICO_OPT_HELP),
):
    """Exporta o histórico para CSV ou XLSX."""
    try:
        info = exportar_historico(HistoricoRepo(historico_dir), path)
    except (ValueError, OSError) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(f">> {info['linhas']} cálculo(s) exportado(s) para {info['arquivo']}")


# -----------------------
# tabelas de referência
# -----------------------

@app.command("limites")
def cmd_limites():
    """Exibe os limites de segurança cadastrados."""
    table = Table(title="Limites de Segurança", box=box.ROUNDED)
    table.add_column("Medicamento")
    table.add_column("Dose mínima", justify="right")
    table.add_column("Dose máxima", justify="right")
    for nome, limite in LIMITES_SEGURANCA.items():
        minima = "-" if limite.dose_minima is None else f"{_fmt_num(limite.dose_minima)} {limite.unidade}"
        table.add_row(nome, minima, f"{_fmt_num(limite.dose_maxima)} {limite.unidade}")
    console.print(table)
    console.print("[dim]Limites ilustrativos; não substituem referência clínica.[/dim]")


@app.command("unidades")
def cmd_unidades():
    """Exibe a tabela de conversão de unidades para mg."""
    table = Table(title="Conversão para mg", box=box.ROUNDED)
    table.add_column("Unidade")
    table.add_column("Fator (mg)", justify="right")
    for unidade, fator in TABELA_CONVERSAO.items():
        table.add_row(unidade.value, _fmt_num(fator))
    console.print(table)

    conc = Table(title="Unidades de Concentração", box=box.ROUNDED)
    conc.add_column("Concentração")
    conc.add_column("Unidade base")
    for simbolo, base in CONCENTRACAO_PARA_UNIDADE.items():
        conc.add_row(simbolo, base)
    console.print(conc)


# Entry point opcional:
def main():
    app()


if __name__ == "__main__":
    main()
