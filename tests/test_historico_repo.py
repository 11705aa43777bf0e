import json
from pathlib import Path

import pytest

from dosagem.domain.models import ItemHistorico
from dosagem.infra.armazenamento import ArquivoJson
from dosagem.infra.repositories import HistoricoRepo


def _adicionar(repo: HistoricoRepo, medicamento: str) -> ItemHistorico:
    return repo.adicionar(
        medicamento,
        500.0,
        "mg",
        250.0,
        "mg/ml",
        "comprimido",
        f"Administrar 2.00 comprimido(s) de {medicamento}",
        "Dosagem dentro dos limites seguros.",
    )


def _arquivo(tmp_path: Path) -> Path:
    return tmp_path / "dosageHistory.json"


def test_historico_vazio_na_primeira_execucao(tmp_path: Path):
    repo = HistoricoRepo(tmp_path)
    assert repo.listar() == []
    assert not _arquivo(tmp_path).exists()


def test_adicionar_mantem_mais_recente_primeiro(tmp_path: Path):
    repo = HistoricoRepo(tmp_path)
    for nome in ["a", "b", "c", "d"]:
        _adicionar(repo, nome)
    itens = repo.listar()
    assert [i.medicamento for i in itens] == ["d", "c", "b", "a"]
    ids = [i.id for i in itens]
    assert len(set(ids)) == 4
    assert ids == sorted(ids, reverse=True)


def test_adicionar_persiste_no_formato_esperado(tmp_path: Path):
    repo = HistoricoRepo(tmp_path)
    item = _adicionar(repo, "dipirona")
    data = json.loads(_arquivo(tmp_path).read_text(encoding="utf-8"))
    assert data == [{
        "id": item.id,
        "medicamento": "dipirona",
        "prescricaoValor": 500.0,
        "prescricaoUnidade": "mg",
        "disponivelValor": 250.0,
        "disponivelUnidade": "mg/ml",
        "forma": "comprimido",
        "resultado": "Administrar 2.00 comprimido(s) de dipirona",
        "alerta": "Dosagem dentro dos limites seguros.",
    }]


def test_recarregar_reproduz_a_sequencia(tmp_path: Path):
    repo = HistoricoRepo(tmp_path)
    for nome in ["dipirona", "morfina", "paracetamol"]:
        _adicionar(repo, nome)
    recarregado = HistoricoRepo(tmp_path)
    assert recarregado.listar() == repo.listar()


def test_remover_id_inexistente_nao_altera(tmp_path: Path):
    repo = HistoricoRepo(tmp_path)
    _adicionar(repo, "a")
    _adicionar(repo, "b")
    antes = repo.listar()
    conteudo = _arquivo(tmp_path).read_bytes()

    assert repo.remover(123) is False
    assert repo.listar() == antes
    assert _arquivo(tmp_path).read_bytes() == conteudo


def test_remover_duas_vezes_equivale_a_uma(tmp_path: Path):
    repo = HistoricoRepo(tmp_path)
    a = _adicionar(repo, "a")
    _adicionar(repo, "b")

    assert repo.remover(a.id) is True
    depois_uma = repo.listar()
    conteudo = _arquivo(tmp_path).read_bytes()

    assert repo.remover(a.id) is False
    assert repo.listar() == depois_uma
    assert _arquivo(tmp_path).read_bytes() == conteudo
    assert [i.medicamento for i in HistoricoRepo(tmp_path).listar()] == ["b"]


def test_listar_devolve_copia(tmp_path: Path):
    repo = HistoricoRepo(tmp_path)
    _adicionar(repo, "a")
    itens = repo.listar()
    itens.clear()
    assert len(repo.listar()) == 1


def test_obter(tmp_path: Path):
    repo = HistoricoRepo(tmp_path)
    item = _adicionar(repo, "a")
    assert repo.obter(item.id) == item
    assert repo.obter(item.id + 1000) is None


def test_id_unico_mesmo_com_relogio_parado(tmp_path: Path, monkeypatch):
    monkeypatch.setattr("dosagem.infra.repositories._agora_ms", lambda: 1_700_000_000_000)
    repo = HistoricoRepo(tmp_path)
    ids = [_adicionar(repo, str(n)).id for n in range(3)]
    assert ids == [1_700_000_000_000, 1_700_000_000_001, 1_700_000_000_002]


@pytest.mark.parametrize(
    "conteudo",
    [
        "{isso não é json",
        "null",
        '{"id": 1}',
        '[{"id": 1, "medicamento": "x"}]',
        '[{"id": "abc", "medicamento": "x", "prescricaoValor": 1, "prescricaoUnidade": "mg",'
        ' "disponivelValor": 1, "disponivelUnidade": "mg/ml", "forma": "comprimido",'
        ' "resultado": "r", "alerta": "a"}]',
        "",
    ],
)
def test_registro_corrompido_vira_historico_vazio(tmp_path: Path, conteudo: str):
    _arquivo(tmp_path).write_text(conteudo, encoding="utf-8")
    repo = HistoricoRepo(tmp_path)
    assert repo.listar() == []
    _adicionar(repo, "novo")
    assert len(HistoricoRepo(tmp_path).listar()) == 1


def test_chave_personalizada(tmp_path: Path):
    repo = HistoricoRepo(tmp_path, chave="outro")
    _adicionar(repo, "a")
    assert (tmp_path / "outro.json").exists()
    assert HistoricoRepo(tmp_path).listar() == []


def _falhar_gravacao(self, obj):
    raise OSError("disco cheio")


def test_falha_ao_gravar_na_adicao_preserva_memoria(tmp_path: Path, monkeypatch):
    repo = HistoricoRepo(tmp_path)
    _adicionar(repo, "a")
    monkeypatch.setattr(ArquivoJson, "gravar", _falhar_gravacao)

    with pytest.raises(OSError):
        _adicionar(repo, "b")

    assert [i.medicamento for i in repo.listar()] == ["a"]
    assert HistoricoRepo(tmp_path).listar() == repo.listar()


def test_falha_ao_gravar_na_remocao_preserva_memoria(tmp_path: Path, monkeypatch):
    repo = HistoricoRepo(tmp_path)
    item = _adicionar(repo, "a")
    monkeypatch.setattr(ArquivoJson, "gravar", _falhar_gravacao)

    with pytest.raises(OSError):
        repo.remover(item.id)

    assert repo.listar() == [item]
    assert HistoricoRepo(tmp_path).listar() == [item]
