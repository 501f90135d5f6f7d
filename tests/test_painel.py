import asyncio

import folium

from backend.cache import CacheRequisicoes
from backend.config import CAPITAIS
from backend.erros import FalhaRede
from backend.models import Limites, RegistroAlerta
import backend.painel
from backend.painel import LocaisAcompanhados, PainelMapa, capital_da_uf
from frontend.mapa import criar_mapa, legenda_html, ler_retorno_mapa, popup_alerta
from fakes import FEICOES_ESTADOS, VIEWPORT_SP


class IBGEFalso:

    def __init__(self):
        self.malhas_uf = []

    async def malha_brasil(self):
        return {'type': 'FeatureCollection', 'features': list(FEICOES_ESTADOS)}

    async def malha_municipios_uf(self, uf_id):
        self.malhas_uf.append(uf_id)
        return {'type': 'FeatureCollection', 'features': [{
            'type': 'Feature',
            'properties': {'codarea': '3550308'},
            'geometry': {'type': 'Polygon', 'coordinates': [[[-47, -24], [-46, -24], [-46, -23], [-47, -24]]]}
        }]}

    async def todos_municipios(self):
        return [{'id': 3550308, 'nome': 'São Paulo'}]


class InfoDengueFalso:

    def __init__(self):
        self.series = []

    async def visao_nacional(self, doenca):
        return []

    async def alertas_municipios(self, cidades, doenca):
        return {3550308: RegistroAlerta(se=202410, casos=9, nivel=2, municipio_nome='São Paulo')}

    async def buscar_serie(self, geocode, doenca, ew_inicio, ew_fim, ey_inicio, ey_fim):
        self.series.append((geocode, doenca, ew_inicio, ew_fim))
        if geocode == 0:
            raise FalhaRede('fora do ar')
        return [RegistroAlerta(se=202401, casos=1, nivel=1)]


def _painel():
    return PainelMapa(cache=CacheRequisicoes(), ibge=IBGEFalso(), infodengue=InfoDengueFalso())


def test_fluxo_do_mapa():
    painel = _painel()

    asyncio.run(painel.iniciar())
    assert painel.carregado

    asyncio.run(painel.mover_mapa(VIEWPORT_SP, 7))
    assert [c.codigo_uf for c in painel.municipios.camadas] == [35]

    asyncio.run(painel.selecionar_doenca('chikungunya'))
    assert painel.municipios.camadas[0].doenca == 'chikungunya'

    mapa = criar_mapa(painel, enquadrar=painel.selecionar_regiao('sudeste'))
    assert isinstance(mapa, folium.Map)

    asyncio.run(painel.mover_mapa(VIEWPORT_SP, 4))
    assert painel.municipios.camadas == []
    assert painel.ibge.malhas_uf == [35, 35]


def test_buscar_series_separa_falhas():
    painel = _painel()
    periodo = {'ew_inicio': 1, 'ew_fim': 10, 'ey_inicio': 2025, 'ey_fim': 2025}

    series, falhas = asyncio.run(painel.buscar_series({'São Paulo, SP': 3550308, 'Quebrado': 0}, periodo))

    assert list(series) == ['São Paulo, SP']
    assert falhas == ['Quebrado']


def test_pesquisa_curta_nao_carrega_indice():
    painel = _painel()
    assert asyncio.run(painel.pesquisar_municipios('s')) == []
    assert asyncio.run(painel.pesquisar_municipios('paulo'))[0]['geocode'] == 3550308


def test_capital_da_uf():
    assert capital_da_uf(35)['geocode'] == 3550308
    assert capital_da_uf(99) is None
    assert all(capital_da_uf(c) is not None for c in (11, 12, 53))
    assert len(CAPITAIS) == 27


def test_ler_retorno_mapa():
    assert ler_retorno_mapa(None) == (None, None, None, None)

    retorno = {
        'zoom': 7,
        'bounds': {'_southWest': {'lat': -24.0, 'lng': -52.0}, '_northEast': {'lat': -23.0, 'lng': -47.0}},
        'last_active_drawing': {'properties': {'codarea': '35'}},
        'last_object_clicked': {'lat': -23.5, 'lng': -49.0},
    }
    viewport, zoom, feicao, ponto = ler_retorno_mapa(retorno)

    assert viewport == Limites(sul=-24.0, oeste=-52.0, norte=-23.0, leste=-47.0)
    assert zoom == 7
    assert feicao['properties']['codarea'] == '35'
    assert ponto == (-23.5, -49.0)

    assert ler_retorno_mapa({'zoom': 4, 'bounds': {}})[0] is None
    assert ler_retorno_mapa({'zoom': 4, 'last_object_clicked': None})[3] is None


def test_legenda_e_popup():
    doenca = legenda_html('doenca')
    assert all(cor in doenca for cor in ('#22c55e', '#eab308', '#f97316', '#ef4444'))

    saneamento = legenda_html('coletaEsgoto')
    assert '#06b6d4' in saneamento and '#ef4444' in saneamento

    assert 'Sem dados recentes' in popup_alerta('Recife', None)
    assert 'Atenção' in popup_alerta('Recife', RegistroAlerta(se=202410, casos=5, nivel=2))


def test_cache_do_painel_usa_ttl_configurado(monkeypatch):
    monkeypatch.setattr(backend.painel, 'CACHE_TTL', 120)

    painel = PainelMapa(ibge=IBGEFalso(), infodengue=InfoDengueFalso())

    assert painel.cache.ttl_segundos == 120


def test_clique_repetido_entre_reexecucoes_conta_uma_vez():
    acompanhados = LocaisAcompanhados()

    assert acompanhados.novo_clique(35, (-23.5, -49.0))
    assert not acompanhados.novo_clique(35, (-23.5, -49.0))
    assert not acompanhados.novo_clique(None, None)


def test_capital_removida_volta_com_novo_clique_na_mesma_uf():
    acompanhados = LocaisAcompanhados()
    assert acompanhados.novo_clique(35, (-23.5, -49.0))
    acompanhados.adicionar('São Paulo, SP', 3550308)

    acompanhados.remover('São Paulo, SP')
    assert acompanhados.locais == {}

    # Mesmo retorno do mapa após a remoção não readiciona
    assert not acompanhados.novo_clique(35, (-23.5, -49.0))

    assert acompanhados.novo_clique(35, (-22.1, -48.3))
    acompanhados.adicionar('São Paulo, SP', 3550308)
    assert acompanhados.locais == {'São Paulo, SP': 3550308}
