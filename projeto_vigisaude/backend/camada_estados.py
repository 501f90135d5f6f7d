"""
Camada nacional de UFs.

A camada é refeita quando o mapa carrega, quando a métrica ativa muda
(doença, coleta ou tratamento de esgoto), quando chegam novos dados das
capitais e quando o filtro de região muda. O estilo de cada UF é uma função
pura das propriedades da feição e do contexto; a ligação com eventos do mapa
fica na tabela `acoes`.
"""

import copy
import logging
from typing import Awaitable, Callable, Dict, List, Optional

from backend.camada_municipios import ContextoMapa
from backend.classificador import (
    COR_NEUTRA, ajustar_opacidade, cor_alerta, cor_saneamento,
    opacidade_alerta, opacidade_saneamento
)
from backend.config import CAMADAS_MAPA, CODIGOS_UF, LIMITES_REGIOES
from backend.models import DadosCapital, Limites, UnidadeFederativa
from backend.viewport import codigo_da_feicao

logger = logging.getLogger(__name__)

AoClicarUnidade = Callable[[int, str, str], None]


def estilo_estado(propriedades: dict, camada_ativa: str, regiao: str, zoom_aproximado: bool) -> dict:
    """
    Estilo de preenchimento de uma UF

    Args:
        propriedades: Propriedades enriquecidas por RenderizadorEstados.reconstruir()
        camada_ativa: 'doenca', 'coletaEsgoto' ou 'tratamentoEsgoto'
        regiao: Região filtrada ('all' para nenhuma)
        zoom_aproximado: Se o zoom está no nível dos municípios

    Returns:
        Dicionário de estilo no formato do Leaflet
    """
    esmaecido = regiao != 'all' and propriedades.get('regiao') != regiao
    preenchimento = COR_NEUTRA
    opacidade = opacidade_alerta(False, esmaecido, zoom_aproximado)

    if camada_ativa == 'doenca':
        nivel = propriedades.get('nivel')
        if nivel is not None:
            preenchimento = cor_alerta(nivel)
            opacidade = opacidade_alerta(True, esmaecido, zoom_aproximado)
    else:
        percentual = propriedades.get(camada_ativa)
        if percentual is not None:
            preenchimento = cor_saneamento(percentual)
            opacidade = ajustar_opacidade(opacidade_saneamento(percentual), esmaecido, zoom_aproximado)

    estilo = {
        'fillColor': preenchimento,
        'fillOpacity': opacidade,
        'weight': 1.5,
        'color': 'rgba(148, 163, 184, 0.3)',
        'dashArray': '',
    }

    if zoom_aproximado:
        estilo['weight'] = 0.5

    return estilo


def estilo_destaque_estado(propriedades: dict) -> dict:
    return {'weight': 2.5, 'color': '#38bdf8', 'fillOpacity': 0.75}


class RenderizadorEstados:

    def __init__(self, contexto: ContextoMapa,
                 buscar_malha_brasil: Callable[[], Awaitable[dict]],
                 ao_clicar_unidade: Optional[AoClicarUnidade] = None,
                 ao_mudar_camada: Optional[Callable[[str], None]] = None):
        self.contexto = contexto
        self._buscar_malha_brasil = buscar_malha_brasil
        self.ao_clicar_unidade = ao_clicar_unidade
        self.ao_mudar_camada = ao_mudar_camada
        self.geojson: Optional[dict] = None
        self.versao = 0
        self._malha: Optional[dict] = None

    @property
    def acoes(self) -> Dict[str, Callable[[dict], None]]:
        #Evento do mapa -> ação
        return {'click': self.notificar_clique}

    def disparar(self, evento: str, feicao: dict) -> None:
        acao = self.acoes.get(evento)
        if acao is not None:
            acao(feicao)

    async def carregar(self) -> dict:
        #Carga inicial; FalhaRede sobe para a interface mostrar o erro
        self._malha = await self._buscar_malha_brasil()
        self.contexto.feicoes_estados = list(self._malha.get('features') or [])
        return self.reconstruir()

    def definir_camada(self, camada: str) -> dict:
        if camada not in CAMADAS_MAPA:
            raise ValueError(f"Camada desconhecida: {camada}")
        self.contexto.camada_ativa = camada
        if self.ao_mudar_camada:
            self.ao_mudar_camada(camada)
        return self.reconstruir()

    def atualizar_dados_capitais(self, dados_capitais: List[DadosCapital]) -> dict:
        self.contexto.dados_capitais = list(dados_capitais or [])
        return self.reconstruir()

    def definir_regiao(self, regiao: str) -> Limites:
        """
        Aplica o filtro de região

        Args:
            regiao: Chave de LIMITES_REGIOES (desconhecida vira 'all')

        Returns:
            Limites para enquadrar o mapa
        """
        if regiao not in LIMITES_REGIOES:
            regiao = 'all'
        self.contexto.regiao = regiao
        self.reconstruir()
        return Limites.de_pares(LIMITES_REGIOES[regiao])

    def reconstruir(self) -> Optional[dict]:
        if self._malha is None:
            return None

        capitais_por_uf = {
            cap.uf: cap for cap in self.contexto.dados_capitais if cap.ultimo is not None
        }

        feicoes = []
        for feicao in self._malha.get('features') or []:
            codigo = codigo_da_feicao(feicao)
            if codigo not in CODIGOS_UF:
                continue

            nova = copy.copy(feicao)
            nova['properties'] = self._propriedades(codigo, feicao.get('properties') or {}, capitais_por_uf)
            feicoes.append(nova)

        self.geojson = {'type': 'FeatureCollection', 'features': feicoes}
        self.versao += 1
        logger.debug("Camada de UFs refeita (v%d, %s)", self.versao, self.contexto.camada_ativa)
        return self.geojson

    def estilo(self, feicao: dict) -> dict:
        ctx = self.contexto
        return estilo_estado(feicao.get('properties') or {}, ctx.camada_ativa, ctx.regiao, ctx.zoom_aproximado)

    def notificar_clique(self, feicao: dict) -> None:
        codigo = codigo_da_feicao(feicao)
        if codigo not in CODIGOS_UF or self.ao_clicar_unidade is None:
            return

        uf = UnidadeFederativa.do_catalogo(codigo)
        self.ao_clicar_unidade(codigo, uf.sigla, uf.nome)

    @staticmethod
    def _propriedades(codigo: int, originais: dict, capitais_por_uf: Dict[str, DadosCapital]) -> dict:
        uf = UnidadeFederativa.do_catalogo(codigo)
        propriedades = dict(originais)
        propriedades.update({
            'codarea': str(codigo),
            'sigla': uf.sigla,
            'nome': uf.nome,
            'regiao': uf.regiao,
            'coletaEsgoto': uf.coleta_esgoto,
            'tratamentoEsgoto': uf.tratamento_esgoto,
        })

        capital = capitais_por_uf.get(uf.sigla)
        if capital is not None:
            ultimo = capital.ultimo
            propriedades.update({
                'capital': capital.nome,
                'se': ultimo.se,
                'casos': ultimo.casos,
                'rt': ultimo.rt,
                'p_inc100k': ultimo.p_inc100k,
                'notif_accum_year': ultimo.notif_accum_year,
                'nivel': ultimo.nivel,
            })

        return propriedades
