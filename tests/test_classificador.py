import pytest

from backend.classificador import (
    OPACIDADE_COM_DADOS, OPACIDADE_FORA_REGIAO, OPACIDADE_SEM_DADOS, OPACIDADE_ZOOM,
    ajustar_opacidade, cor_alerta, cor_saneamento, info_alerta, opacidade_alerta, opacidade_saneamento
)


@pytest.mark.parametrize('nivel, cor', [
    (1, '#22c55e'),
    (2, '#eab308'),
    (3, '#f97316'),
    (4, '#ef4444'),
])
def test_cor_por_nivel(nivel, cor):
    assert cor_alerta(nivel) == cor


@pytest.mark.parametrize('nivel', [0, 5, -1, None, 'x'])
def test_nivel_fora_da_faixa_usa_nivel_1(nivel):
    assert cor_alerta(nivel) == cor_alerta(1)
    assert info_alerta(nivel)['label'] == 'Verde'


def test_opacidade_alerta():
    assert opacidade_alerta(tem_dados=True) == OPACIDADE_COM_DADOS
    assert opacidade_alerta(tem_dados=False) == OPACIDADE_SEM_DADOS
    assert opacidade_alerta(tem_dados=True, esmaecido=True) == OPACIDADE_FORA_REGIAO
    # zoom prevalece sobre o filtro de região
    assert opacidade_alerta(tem_dados=True, esmaecido=True, zoom_aproximado=True) == OPACIDADE_ZOOM


def test_ajustar_opacidade_vale_para_qualquer_camada():
    assert ajustar_opacidade(0.7) == 0.7
    assert ajustar_opacidade(0.7, esmaecido=True) == OPACIDADE_FORA_REGIAO
    assert ajustar_opacidade(0.7, zoom_aproximado=True) == OPACIDADE_ZOOM
    assert ajustar_opacidade(0.7, esmaecido=True, zoom_aproximado=True) == OPACIDADE_ZOOM


@pytest.mark.parametrize('percentual, cor', [
    (100, '#06b6d4'),
    (80, '#06b6d4'),
    (79.9, '#22d3ee'),
    (60, '#22d3ee'),
    (45, '#67e8f9'),
    (20, '#f59e0b'),
    (19.9, '#ef4444'),
    (0, '#ef4444'),
    (-5, '#ef4444'),
    (150, '#06b6d4'),
])
def test_faixas_de_saneamento(percentual, cor):
    assert cor_saneamento(percentual) == cor


def test_opacidade_saneamento_limites_e_monotonia():
    assert opacidade_saneamento(0) == pytest.approx(0.35)
    assert opacidade_saneamento(100) == pytest.approx(0.75)
    assert opacidade_saneamento(-20) == pytest.approx(0.35)
    assert opacidade_saneamento(180) == pytest.approx(0.75)

    valores = [opacidade_saneamento(p) for p in range(0, 101, 5)]
    assert valores == sorted(valores)
    assert all(0.35 <= v <= 0.75 for v in valores)
