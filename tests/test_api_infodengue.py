import asyncio
from datetime import date

import pytest
import requests

from backend.api_infodengue import InfoDengueClient, processar_dados_infodengue, resumo_nacional
from backend.cache import CacheRequisicoes
from backend.config import CAPITAIS
from backend.erros import FalhaRede
from backend.models import DadosCapital, RegistroAlerta
from fakes import FakeResponse, FakeSession, item_alertcity

HOJE = date(2025, 3, 10)


def _cliente(responder):
    sessao = FakeSession(responder)
    return InfoDengueClient(CacheRequisicoes(), session=sessao, base_url='https://info.test/api/'), sessao


def test_processar_ordena_e_ignora_itens_sem_se():
    dados = [item_alertcity(202405), {'casos': 3}, item_alertcity(202403, nivel='4'), 'lixo']

    registros = processar_dados_infodengue(dados)

    assert [r.se for r in registros] == [202403, 202405]
    assert registros[0].nivel == 4
    assert processar_dados_infodengue(None) == []
    assert processar_dados_infodengue([]) == []


def test_processar_ignora_se_ilegivel():
    dados = [{'SE': 'abc', 'nivel': 2}, item_alertcity(202406), {'SE': [202407]}]

    assert [r.se for r in processar_dados_infodengue(dados)] == [202406]


def test_visao_nacional_com_se_ilegivel_conta_como_sem_dado():
    cliente, _ = _cliente(lambda url, params: FakeResponse([{'SE': 'abc', 'nivel': 2}]))

    dados = asyncio.run(cliente.visao_nacional('dengue', hoje=HOJE))

    assert len(dados) == len(CAPITAIS)
    assert all(d.ultimo is None for d in dados)
    assert resumo_nacional(dados)['capitais_com_dados'] == 0


def test_buscar_serie_monta_parametros_e_usa_cache():
    cliente, sessao = _cliente(lambda url, params: FakeResponse([item_alertcity(202410), item_alertcity(202409)]))

    async def cenario():
        a = await cliente.buscar_serie(3550308, 'zika', 1, 10, 2024, 2024)
        b = await cliente.buscar_serie(3550308, 'zika', 1, 10, 2024, 2024)
        return a, b

    a, b = asyncio.run(cenario())

    assert a is b
    assert [r.se for r in a] == [202409, 202410]
    assert len(sessao.chamadas) == 1
    url, params = sessao.chamadas[0]
    assert url == 'https://info.test/api/alertcity'
    assert params == {'geocode': 3550308, 'disease': 'zika', 'format': 'json',
                      'ew_start': 1, 'ew_end': 10, 'ey_start': 2024, 'ey_end': 2024}
    assert 'disease|3550308|zika|1|10|2024|2024' in cliente.cache


def test_buscar_serie_usa_ano_corrente_por_padrao():
    cliente, sessao = _cliente(lambda url, params: FakeResponse([]))

    asyncio.run(cliente.buscar_serie(3550308))

    ano = date.today().year
    _, params = sessao.chamadas[0]
    assert (params['ey_start'], params['ey_end']) == (ano, ano)
    assert f'disease|3550308|dengue|1|52|{ano}|{ano}' in cliente.cache


def test_status_de_erro_vira_falha_rede_e_nao_fica_em_cache():
    respostas = [FakeResponse(status_code=503), FakeResponse([item_alertcity(202401)])]
    cliente, sessao = _cliente(lambda url, params: respostas.pop(0))

    with pytest.raises(FalhaRede) as erro:
        asyncio.run(cliente.buscar_serie(3550308))
    assert erro.value.status == 503

    serie = asyncio.run(cliente.buscar_serie(3550308))
    assert len(serie) == 1
    assert len(sessao.chamadas) == 2


def test_erro_de_conexao_e_json_invalido_viram_falha_rede():
    def sem_conexao(url, params):
        raise requests.exceptions.ConnectionError('recusada')

    cliente, _ = _cliente(sem_conexao)
    with pytest.raises(FalhaRede):
        asyncio.run(cliente.buscar_serie(3550308))

    cliente, _ = _cliente(lambda url, params: FakeResponse(ValueError('não é JSON')))
    with pytest.raises(FalhaRede):
        asyncio.run(cliente.buscar_serie(3550308))


def test_alertas_municipios_pula_falhas_e_series_vazias():
    def responder(url, params):
        if params['geocode'] == 3509502:
            return FakeResponse(status_code=500)
        if params['geocode'] == 3518800:
            return FakeResponse([])
        return FakeResponse([item_alertcity(202408, nivel=2), item_alertcity(202409, casos=40, nivel=3)])

    cliente, sessao = _cliente(responder)
    cidades = [
        {'geocode': 3550308, 'nome': 'São Paulo'},
        {'geocode': 3509502, 'nome': 'Campinas'},
        {'geocode': 3518800, 'nome': 'Guarulhos'},
    ]

    alertas = asyncio.run(cliente.alertas_municipios(cidades, 'dengue', hoje=HOJE))

    assert list(alertas) == [3550308]
    assert alertas[3550308].se == 202409
    assert alertas[3550308].nivel == 3
    assert alertas[3550308].municipio_nome == 'São Paulo'
    # 10/03/2025: semana 10, janela 6..10
    assert {(p['ew_start'], p['ew_end'], p['ey_start']) for _, p in sessao.chamadas} == {(6, 10, 2025)}


def test_visao_nacional_tem_todas_as_capitais():
    def responder(url, params):
        if params['geocode'] == 3550308:
            return FakeResponse([item_alertcity(202410, nivel=4)])
        raise requests.exceptions.Timeout()

    cliente, sessao = _cliente(responder)

    async def cenario():
        a = await cliente.visao_nacional('dengue', hoje=HOJE)
        b = await cliente.visao_nacional('dengue', hoje=HOJE)
        return a, b

    dados, repetido = asyncio.run(cenario())

    assert repetido is dados
    assert len(dados) == len(CAPITAIS)
    assert len(sessao.chamadas) == len(CAPITAIS)
    com_dados = [d for d in dados if d.ultimo is not None]
    assert [d.uf for d in com_dados] == ['SP']
    assert com_dados[0].ultimo.nivel == 4


def test_resumo_nacional():
    dados = [
        DadosCapital('A', 1, 'SP', [RegistroAlerta(se=202410, casos=5, nivel=4, rt=1.5, notif_accum_year=100)]),
        DadosCapital('B', 2, 'RJ', [RegistroAlerta(se=202410, casos=5, nivel=3, rt=0.5, notif_accum_year=50)]),
        DadosCapital('C', 3, 'MG', [RegistroAlerta(se=202410, casos=5, nivel=1, notif_accum_year=10)]),
        DadosCapital('D', 4, 'BA', []),
    ]

    resumo = resumo_nacional(dados)

    assert resumo['total_casos'] == 160
    assert resumo['cidades_alerta'] == 2
    assert resumo['rt_medio'] == pytest.approx(1.0)
    assert resumo['nivel_maximo'] == 4
    assert resumo['capitais_com_dados'] == 3


def test_resumo_nacional_sem_dados():
    resumo = resumo_nacional([])
    assert resumo['total_casos'] == 0
    assert resumo['rt_medio'] is None
    assert resumo['nivel_maximo'] == 1
