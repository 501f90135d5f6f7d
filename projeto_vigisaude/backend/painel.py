"""
Montagem do painel: um cache por sessão, clientes HTTP, contexto do mapa,
gerenciador de municípios e renderizador de UFs.
"""

import asyncio
import logging
from typing import Callable, Dict, List, Optional, Tuple

from backend.api_ibge import IBGEClient, filtrar_municipios
from backend.api_infodengue import InfoDengueClient
from backend.cache import CacheRequisicoes
from backend.camada_estados import RenderizadorEstados
from backend.camada_municipios import ContextoMapa, GerenciadorCamadasMunicipios
from backend.config import CACHE_TTL, CAPITAIS, SIGLAS_UF
from backend.erros import FalhaRede
from backend.models import DadosCapital, Limites, RegistroAlerta

logger = logging.getLogger(__name__)


class PainelMapa:

    def __init__(self, cache: Optional[CacheRequisicoes] = None,
                 ibge: Optional[IBGEClient] = None,
                 infodengue: Optional[InfoDengueClient] = None,
                 ao_clicar_unidade: Optional[Callable[[int, str, str], None]] = None):
        self.cache = cache or CacheRequisicoes(ttl_segundos=CACHE_TTL)
        self.ibge = ibge or IBGEClient(self.cache)
        self.infodengue = infodengue or InfoDengueClient(self.cache)
        self.contexto = ContextoMapa()
        self.dados_capitais: List[DadosCapital] = []

        self.municipios = GerenciadorCamadasMunicipios(
            buscar_malha=self.ibge.malha_municipios_uf,
            buscar_alertas=self.infodengue.alertas_municipios,
            contexto=self.contexto,
        )
        self.estados = RenderizadorEstados(
            self.contexto,
            buscar_malha_brasil=self.ibge.malha_brasil,
            ao_clicar_unidade=ao_clicar_unidade,
            ao_mudar_camada=lambda camada: logger.info("Camada do mapa: %s", camada),
        )

    @property
    def carregado(self) -> bool:
        return self.estados.geojson is not None

    async def iniciar(self) -> None:
        #Malha nacional + visão das capitais
        await self.estados.carregar()
        await self.atualizar_capitais()

    async def atualizar_capitais(self) -> List[DadosCapital]:
        self.dados_capitais = await self.infodengue.visao_nacional(self.contexto.doenca)
        self.estados.atualizar_dados_capitais(self.dados_capitais)
        return self.dados_capitais

    async def selecionar_doenca(self, doenca: str) -> None:
        self.municipios.trocar_doenca(doenca)
        await self.atualizar_capitais()
        await self.municipios.aguardar()

    async def mover_mapa(self, viewport: Limites, zoom: int) -> None:
        self.municipios.ao_mudar_viewport(viewport, zoom)
        await self.municipios.aguardar()

    def selecionar_regiao(self, regiao: str) -> Limites:
        return self.estados.definir_regiao(regiao)

    def selecionar_camada(self, camada: str) -> None:
        self.estados.definir_camada(camada)

    async def buscar_series(self, locais: Dict[str, int], periodo: dict) -> Tuple[Dict[str, List[RegistroAlerta]], List[str]]:
        """
        Séries da doença atual para as localidades acompanhadas

        Args:
            locais: Nome de exibição -> geocode
            periodo: ew_inicio, ew_fim, ey_inicio, ey_fim

        Returns:
            (séries por nome, nomes que falharam)
        """
        nomes = list(locais)
        resultados = await asyncio.gather(
            *(self.infodengue.buscar_serie(locais[n], self.contexto.doenca, periodo['ew_inicio'],
                                           periodo['ew_fim'], periodo['ey_inicio'], periodo['ey_fim'])
              for n in nomes),
            return_exceptions=True
        )

        series, falhas = {}, []
        for nome, resultado in zip(nomes, resultados):
            if isinstance(resultado, FalhaRede):
                logger.warning("Série de %s indisponível: %s", nome, resultado)
                falhas.append(nome)
            elif isinstance(resultado, BaseException):
                raise resultado
            else:
                series[nome] = resultado
        return series, falhas

    async def pesquisar_municipios(self, termo: str) -> List[dict]:
        if len((termo or '').strip()) < 2:
            return []
        return filtrar_municipios(await self.ibge.todos_municipios(), termo)


def capital_da_uf(codigo_uf: int) -> Optional[dict]:
    sigla = SIGLAS_UF.get(codigo_uf)
    for cap in CAPITAIS:
        if cap['uf'] == sigla:
            return cap
    return None


class LocaisAcompanhados:
    """
    Localidades da aba de séries (nome de exibição -> geocode)

    O st_folium devolve o último clique em toda reexecução da página, então
    um clique só conta se (código, ponto) for diferente do anterior.
    """

    def __init__(self):
        self.locais: Dict[str, int] = {}
        self.ultimo_clique: Optional[tuple] = None

    def adicionar(self, nome: str, geocode: int) -> None:
        self.locais[nome] = geocode

    def remover(self, nome: str) -> None:
        self.locais.pop(nome, None)

    def novo_clique(self, codigo: Optional[int], ponto: Optional[tuple]) -> bool:
        if codigo is None:
            return False
        clique = (codigo, ponto)
        if clique == self.ultimo_clique:
            return False
        self.ultimo_clique = clique
        return True
