import pytest

from dosagem.domain.calculo import (
    MSG_CONCENTRACAO_INVALIDA,
    MSG_FORMA_NAO_RECONHECIDA,
    calcular_dosagem,
    classificar_forma,
)
from dosagem.domain.models import FamiliaForma, ResultadoCalculo, TipoFalha


@pytest.mark.parametrize("disponivel", [0, 0.0, -1, -250.5])
@pytest.mark.parametrize("forma", ["comprimido", "solução", "pomada"])
def test_concentracao_invalida(disponivel, forma):
    res = calcular_dosagem(500, "mg", disponivel, forma, "dipirona")
    assert res.sucesso is False
    assert res.falha is TipoFalha.CONCENTRACAO_INVALIDA
    assert res.resultado == MSG_CONCENTRACAO_INVALIDA
    assert res.quantidade is None
    assert res.prescricao_mg is None


@pytest.mark.parametrize("forma", ["pomada", "adesivo", "", "spray"])
def test_forma_nao_reconhecida(forma):
    res = calcular_dosagem(500, "mg", 100, forma, "dipirona")
    assert res.sucesso is False
    assert res.falha is TipoFalha.FORMA_NAO_RECONHECIDA
    assert res.resultado == MSG_FORMA_NAO_RECONHECIDA


@pytest.mark.parametrize(
    "forma,familia",
    [
        ("comprimido", FamiliaForma.UNIDADE_DISCRETA),
        ("Comprimido", FamiliaForma.UNIDADE_DISCRETA),
        ("capsula", FamiliaForma.UNIDADE_DISCRETA),
        ("Cápsula", FamiliaForma.UNIDADE_DISCRETA),
        ("líquido", FamiliaForma.LIQUIDA),
        ("INJEÇÃO", FamiliaForma.LIQUIDA),
        ("solucao", FamiliaForma.LIQUIDA),
        ("xarope", None),
    ],
)
def test_classificar_forma(forma, familia):
    assert classificar_forma(forma) is familia


def test_forma_discreta_quantidade_exata_e_mensagem_arredondada():
    res = calcular_dosagem(1, "g", 3, "comprimido", "paracetamol")
    assert res.sucesso is True
    assert res.falha is None
    assert res.prescricao_mg == 1000.0
    assert res.quantidade == 1000.0 / 3
    assert res.resultado == "Administrar 333.33 comprimido(s) de paracetamol"


def test_forma_discreta_preserva_grafia_da_forma():
    res = calcular_dosagem(250, "mg", 500, "Capsula", "dipirona")
    assert res.resultado == "Administrar 0.50 Capsula(s) de dipirona"


@pytest.mark.parametrize("forma", ["líquido", "injeção", "solução", "Solução"])
def test_forma_liquida_em_ml(forma):
    res = calcular_dosagem(1000, "mcg", 0.5, forma, "morfina")
    assert res.sucesso is True
    assert res.prescricao_mg == pytest.approx(1.0)
    assert res.quantidade == pytest.approx(2.0)
    assert res.resultado == "Administrar 2.00 ml de morfina"


def test_unidade_desconhecida_nao_impede_calculo():
    res = calcular_dosagem(10, "gotas", 5, "solução", "dipirona")
    assert res.sucesso is True
    assert res.prescricao_mg == 10.0
    assert res.quantidade == 2.0


@pytest.mark.parametrize(
    "prescricao,disponivel",
    [
        ("abc", 100),
        (500, None),
    ],
)
def test_erro_inesperado_vira_resultado(prescricao, disponivel):
    res = calcular_dosagem(prescricao, "mg", disponivel, "comprimido", "dipirona")
    assert res.sucesso is False
    assert res.falha is TipoFalha.INESPERADA
    assert res.resultado.startswith("Erro no cálculo: ")


def test_resultado_calculo_invariantes():
    with pytest.raises(ValueError):
        ResultadoCalculo(resultado="x", sucesso=False, quantidade=1.0, falha=TipoFalha.INESPERADA)
    with pytest.raises(ValueError):
        ResultadoCalculo(resultado="x", sucesso=True)
    with pytest.raises(ValueError):
        ResultadoCalculo(resultado="x", sucesso=False)
