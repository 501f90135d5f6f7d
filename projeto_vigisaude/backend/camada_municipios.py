"""
Camadas de municípios carregadas sob demanda conforme o viewport.

Cada UF passa por três estados: ausente, carregando e carregado.

- ausente -> carregando: UF visível, zoom >= limiar, UF fora de `carregando`
  e de `camadas`, e com municípios cadastrados em MUNICIPIOS_POR_UF.
- carregando -> carregado: malha municipal e alertas chegaram (buscados em
  paralelo) e o contexto ainda é o mesmo de quando a busca começou.
- carregando -> ausente: falha de rede ou dado inesperado (só log; a UF
  volta a ser elegível no próximo evento de viewport).
- carregado -> ausente: zoom abaixo do limiar ou troca de doença.

Toda busca leva a `geracao` do contexto no momento em que foi disparada.
Zoom out e troca de doença incrementam a geração; uma resposta que chega com
geração antiga é descartada sem tocar em `carregando` nem em `camadas`.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List, Optional, Set

from backend.config import LIMIAR_ZOOM_MUNICIPIOS, MUNICIPIOS_POR_UF, ZOOM_INICIAL
from backend.classificador import COR_NEUTRA_MUNICIPIO, cor_alerta
from backend.erros import FalhaRede
from backend.models import CamadaMunicipios, Limites, RegistroAlerta
from backend.viewport import unidades_visiveis

logger = logging.getLogger(__name__)

AUSENTE = 'ausente'
CARREGANDO = 'carregando'
CARREGADO = 'carregado'

BuscaMalha = Callable[[int], Awaitable[dict]]
BuscaAlertas = Callable[[List[dict], str], Awaitable[Dict[int, RegistroAlerta]]]


@dataclass
class ContextoMapa:
    #Estado do mapa compartilhado entre gerenciador e renderizador de UFs

    doenca: str = 'dengue'
    camada_ativa: str = 'doenca'
    regiao: str = 'all'
    zoom: int = ZOOM_INICIAL
    limiar_zoom: int = LIMIAR_ZOOM_MUNICIPIOS
    viewport: Optional[Limites] = None
    feicoes_estados: list = field(default_factory=list)
    dados_capitais: list = field(default_factory=list)
    camadas: Dict[int, CamadaMunicipios] = field(default_factory=dict)
    carregando: Set[int] = field(default_factory=set)
    cache_alertas: Dict[int, Dict[int, RegistroAlerta]] = field(default_factory=dict)
    geracao: int = 0

    @property
    def zoom_aproximado(self) -> bool:
        return self.zoom >= self.limiar_zoom


class GerenciadorCamadasMunicipios:

    def __init__(self, buscar_malha: BuscaMalha, buscar_alertas: BuscaAlertas,
                 contexto: Optional[ContextoMapa] = None,
                 municipios_por_uf: Optional[Dict[int, List[dict]]] = None):
        self.contexto = contexto or ContextoMapa()
        self._buscar_malha = buscar_malha
        self._buscar_alertas = buscar_alertas
        self.municipios_por_uf = MUNICIPIOS_POR_UF if municipios_por_uf is None else municipios_por_uf
        self._tarefas: Set[asyncio.Task] = set()

    def estado(self, codigo_uf: int) -> str:
        if codigo_uf in self.contexto.camadas:
            return CARREGADO
        if codigo_uf in self.contexto.carregando:
            return CARREGANDO
        return AUSENTE

    @property
    def camadas(self) -> List[CamadaMunicipios]:
        return [self.contexto.camadas[c] for c in sorted(self.contexto.camadas)]

    # ===== Eventos =====

    def ao_mudar_viewport(self, viewport: Limites, zoom: int) -> List[asyncio.Task]:
        """
        Fim de zoom ou de arraste do mapa

        Args:
            viewport: Área visível
            zoom: Nível de zoom atual

        Returns:
            Tarefas de carregamento disparadas por este evento
        """
        self.contexto.viewport = viewport
        self.contexto.zoom = zoom
        return self.avaliar()

    def trocar_doenca(self, doenca: str) -> List[asyncio.Task]:
        #Alertas em cache são da doença anterior: derruba tudo e recarrega se ainda houver zoom
        ctx = self.contexto
        if doenca == ctx.doenca:
            return []

        logger.info("Doença alterada: %s -> %s", ctx.doenca, doenca)
        ctx.doenca = doenca
        self._invalidar()
        return self.avaliar()

    def avaliar(self) -> List[asyncio.Task]:
        ctx = self.contexto

        if not ctx.zoom_aproximado:
            self.remover_camadas()
            return []

        if ctx.viewport is None:
            return []

        tarefas = []
        for codigo in sorted(unidades_visiveis(ctx.viewport, ctx.feicoes_estados)):
            tarefa = self._iniciar_carregamento(codigo)
            if tarefa is not None:
                tarefas.append(tarefa)
        return tarefas

    def remover_camadas(self) -> None:
        if self.contexto.camadas or self.contexto.carregando:
            logger.debug("Removendo camadas municipais: %s", sorted(self.contexto.camadas))
        self._invalidar()

    async def aguardar(self) -> list:
        #Espera todas as buscas pendentes (inclusive as obsoletas)
        resultados = []
        while self._tarefas:
            pendentes = list(self._tarefas)
            resultados.extend(await asyncio.gather(*pendentes, return_exceptions=True))
            self._tarefas.difference_update(pendentes)
        return resultados

    # ===== Transições =====

    def _invalidar(self) -> None:
        ctx = self.contexto
        ctx.camadas.clear()
        ctx.cache_alertas.clear()
        ctx.carregando.clear()
        ctx.geracao += 1

    def _iniciar_carregamento(self, codigo: int) -> Optional[asyncio.Task]:
        ctx = self.contexto

        if codigo in ctx.camadas or codigo in ctx.carregando:
            return None

        cidades = self.municipios_por_uf.get(codigo)
        if not cidades:
            return None

        ctx.carregando.add(codigo)
        tarefa = asyncio.get_running_loop().create_task(
            self._carregar(codigo, cidades, ctx.doenca, ctx.geracao)
        )
        self._tarefas.add(tarefa)
        tarefa.add_done_callback(self._tarefas.discard)
        return tarefa

    async def _carregar(self, codigo: int, cidades: List[dict], doenca: str,
                        geracao: int) -> Optional[CamadaMunicipios]:
        ctx = self.contexto

        try:
            geojson, alertas = await asyncio.gather(
                self._buscar_malha(codigo),
                self._buscar_alertas(cidades, doenca),
            )
        except FalhaRede as e:
            logger.error("Erro ao carregar municípios da UF %s: %s", codigo, e)
            return None
        except Exception:
            logger.exception("Erro inesperado ao carregar municípios da UF %s", codigo)
            return None
        finally:
            if ctx.geracao == geracao:
                ctx.carregando.discard(codigo)

        if ctx.geracao != geracao:
            logger.info("Resposta obsoleta descartada: UF %s, %s", codigo, doenca)
            return None

        ctx.cache_alertas[codigo] = alertas
        camada = CamadaMunicipios(codigo_uf=codigo, doenca=doenca, geojson=geojson, alertas=alertas)
        ctx.camadas[codigo] = camada
        logger.debug("UF %s carregada com %d alertas", codigo, len(alertas))
        return camada


# ===== Estilo =====

def estilo_municipio(alerta: Optional[RegistroAlerta]) -> dict:
    if alerta is not None:
        preenchimento, opacidade = cor_alerta(alerta.nivel), 0.6
    else:
        preenchimento, opacidade = COR_NEUTRA_MUNICIPIO, 0.25

    return {
        'fillColor': preenchimento,
        'fillOpacity': opacidade,
        'weight': 0.8,
        'color': 'rgba(148, 163, 184, 0.25)',
        'dashArray': '',
    }


def estilo_destaque_municipio(alerta: Optional[RegistroAlerta]) -> dict:
    #Mouse em cima: borda mais grossa; ao sair volta para estilo_municipio
    return {
        'weight': 2,
        'color': '#38bdf8',
        'fillOpacity': 0.8 if alerta is not None else 0.35,
    }
