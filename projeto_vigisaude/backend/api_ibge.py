import unicodedata
from typing import List, Optional

import requests

from backend.cache import CacheRequisicoes, chave_cache
from backend.config import IBGE_BASE_URL
from backend.requisicoes import criar_sessao, obter_json

FORMATO_GEOJSON = 'application/vnd.geo+json'
MINIMO_CARACTERES_BUSCA = 2
LIMITE_RESULTADOS_BUSCA = 15


class IBGEClient:
    #Cliente para as APIs de Localidades e Malhas do IBGE

    def __init__(self, cache: CacheRequisicoes, session: Optional[requests.Session] = None,
                 base_url: str = IBGE_BASE_URL):
        self.cache = cache
        self.session = session or criar_sessao()
        self.base_url = base_url.rstrip('/')

    # ===== Localidades =====

    async def estados(self) -> list:
        #Lista de UFs ordenada por nome (id, sigla, nome, regiao)
        return await self.cache.obter_ou_buscar(
            'states',
            lambda: obter_json(self.session, f"{self.base_url}/v1/localidades/estados",
                               params={'orderBy': 'nome'})
        )

    async def municipios(self, uf_id) -> list:
        return await self.cache.obter_ou_buscar(
            chave_cache('municipios', uf_id),
            lambda: obter_json(self.session, f"{self.base_url}/v1/localidades/estados/{uf_id}/municipios",
                               params={'orderBy': 'nome'})
        )

    async def todos_municipios(self) -> list:
        #Índice de busca (carregado só na primeira pesquisa)
        return await self.cache.obter_ou_buscar(
            'municipios-todos',
            lambda: obter_json(self.session, f"{self.base_url}/v1/localidades/municipios",
                               params={'orderBy': 'nome'})
        )

    # ===== Malhas =====

    async def malha_brasil(self) -> dict:
        #Polígonos das UFs, codarea = código da UF
        return await self.cache.obter_ou_buscar(
            'brazil-geo',
            lambda: obter_json(self.session, f"{self.base_url}/v3/malhas/paises/BR", params={
                'formato': FORMATO_GEOJSON,
                'qualidade': 'minima',
                'intrarregiao': 'UF'
            })
        )

    async def malha_municipios_uf(self, uf_id) -> dict:
        #Polígonos dos municípios de uma UF, codarea = geocode do município
        return await self.cache.obter_ou_buscar(
            chave_cache('state-geo', uf_id),
            lambda: obter_json(self.session, f"{self.base_url}/v3/malhas/estados/{uf_id}", params={
                'formato': FORMATO_GEOJSON,
                'qualidade': 'minima',
                'intrarregiao': 'municipio'
            })
        )


def _normalizar(texto: str) -> str:
    sem_acento = unicodedata.normalize('NFKD', texto)
    return ''.join(c for c in sem_acento if not unicodedata.combining(c)).lower().strip()


def sigla_do_municipio(municipio: dict) -> str:
    #microrregiao -> mesorregiao -> UF -> sigla (pode faltar em municípios novos)
    try:
        return municipio['microrregiao']['mesorregiao']['UF']['sigla']
    except (KeyError, TypeError):
        return ''


def filtrar_municipios(municipios: list, termo: str, limite: int = LIMITE_RESULTADOS_BUSCA) -> List[dict]:
    """
    Busca municípios pelo nome (sem diferenciar maiúsculas e acentos)

    Args:
        municipios: Lista do endpoint de municípios do IBGE
        termo: Texto digitado
        limite: Máximo de resultados

    Returns:
        Lista de {'geocode', 'nome', 'uf'}; vazia se o termo tiver menos de 2 caracteres
    """
    termo_norm = _normalizar(termo or '')
    if len(termo_norm) < MINIMO_CARACTERES_BUSCA:
        return []

    resultados = []
    for m in municipios:
        if termo_norm in _normalizar(m.get('nome', '')):
            resultados.append({
                'geocode': int(m['id']),
                'nome': m['nome'],
                'uf': sigla_do_municipio(m)
            })
            if len(resultados) >= limite:
                break

    return resultados
