import asyncio

import pytest

from backend.cache import CacheRequisicoes, chave_cache
from backend.config import _int_env
from backend.erros import FalhaRede


def _produtor(resultados, chamadas):
    async def produtor():
        chamadas.append(1)
        resultado = resultados.pop(0)
        if isinstance(resultado, Exception):
            raise resultado
        return resultado
    return produtor


def test_chave_junta_partes_com_barra():
    assert chave_cache('disease', 3550308, 'dengue', 1, 52, 2025, 2025) == \
        'disease|3550308|dengue|1|52|2025|2025'
    assert chave_cache('states') == 'states'


def test_segunda_chamada_devolve_mesmo_objeto_sem_buscar():
    cache = CacheRequisicoes()
    chamadas = []
    produtor = _produtor([{'features': []}, {'features': [1]}], chamadas)

    async def cenario():
        primeiro = await cache.obter_ou_buscar('brazil-geo', produtor)
        segundo = await cache.obter_ou_buscar('brazil-geo', produtor)
        return primeiro, segundo

    primeiro, segundo = asyncio.run(cenario())

    assert primeiro is segundo
    assert len(chamadas) == 1
    assert 'brazil-geo' in cache


def test_falha_nao_fica_guardada():
    cache = CacheRequisicoes()
    chamadas = []
    produtor = _produtor([FalhaRede('timeout'), ['ok']], chamadas)

    with pytest.raises(FalhaRede):
        asyncio.run(cache.obter_ou_buscar('states', produtor))

    assert 'states' not in cache
    assert len(cache) == 0

    assert asyncio.run(cache.obter_ou_buscar('states', produtor)) == ['ok']
    assert len(chamadas) == 2


def test_chaves_diferentes_buscam_separado():
    cache = CacheRequisicoes()
    chamadas = []
    produtor = _produtor(['dengue', 'zika'], chamadas)

    async def cenario():
        a = await cache.obter_ou_buscar(chave_cache('national', 'dengue'), produtor)
        b = await cache.obter_ou_buscar(chave_cache('national', 'zika'), produtor)
        return a, b

    assert asyncio.run(cenario()) == ('dengue', 'zika')
    assert len(cache) == 2


def test_ttl_expira_entrada():
    agora = [0.0]
    cache = CacheRequisicoes(ttl_segundos=60, relogio=lambda: agora[0])
    chamadas = []
    produtor = _produtor(['v1', 'v2'], chamadas)

    assert asyncio.run(cache.obter_ou_buscar('k', produtor)) == 'v1'
    agora[0] = 30.0
    assert asyncio.run(cache.obter_ou_buscar('k', produtor)) == 'v1'
    agora[0] = 61.0
    assert asyncio.run(cache.obter_ou_buscar('k', produtor)) == 'v2'
    assert len(chamadas) == 2


def test_ttl_lido_do_ambiente(monkeypatch):
    monkeypatch.setenv('VIGISAUDE_CACHE_TTL', '600')
    assert _int_env('VIGISAUDE_CACHE_TTL', None) == 600

    monkeypatch.setenv('VIGISAUDE_CACHE_TTL', 'nunca')
    assert _int_env('VIGISAUDE_CACHE_TTL', None) is None

    monkeypatch.delenv('VIGISAUDE_CACHE_TTL')
    assert _int_env('VIGISAUDE_CACHE_TTL', None) is None
