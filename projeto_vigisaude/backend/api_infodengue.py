import asyncio
import logging
from dataclasses import replace
from datetime import date
from typing import Dict, List, Optional

import requests

from backend.cache import CacheRequisicoes, chave_cache
from backend.config import CAPITAIS, INFODENGUE_BASE_URL
from backend.erros import FalhaRede
from backend.models import DadosCapital, RegistroAlerta
from backend.requisicoes import criar_sessao, obter_json
from utils.helpers import janela_semanas_recentes, periodo_padrao

logger = logging.getLogger(__name__)

DOENCA_PADRAO = 'dengue'


class InfoDengueClient:
    #Cliente para API do InfoDengue (alertcity)

    def __init__(self, cache: CacheRequisicoes, session: Optional[requests.Session] = None,
                 base_url: str = INFODENGUE_BASE_URL):
        self.cache = cache
        self.session = session or criar_sessao()
        self.base_url = base_url.rstrip('/')

    async def buscar_serie(self, geocode: int, doenca: str = DOENCA_PADRAO,
                           ew_inicio: int = 1, ew_fim: int = 52,
                           ey_inicio: Optional[int] = None, ey_fim: Optional[int] = None) -> List[RegistroAlerta]:
        """
        Busca a série de alertas de um município

        Args:
            geocode: Código IBGE do município
            doenca: dengue, chikungunya ou zika
            ew_inicio: Semana epidemiológica inicial
            ew_fim: Semana epidemiológica final
            ey_inicio: Ano inicial (padrão: ano corrente)
            ey_fim: Ano final (padrão: ano corrente)

        Returns:
            Registros ordenados por SE (semanas sem dado não aparecem)

        Raises:
            FalhaRede: se a API falhar
        """
        padrao = periodo_padrao()
        ey_inicio = padrao['ey_inicio'] if ey_inicio is None else ey_inicio
        ey_fim = padrao['ey_fim'] if ey_fim is None else ey_fim

        chave = chave_cache('disease', geocode, doenca, ew_inicio, ew_fim, ey_inicio, ey_fim)

        async def _buscar():
            params = {
                'geocode': geocode,
                'disease': doenca,
                'format': 'json',
                'ew_start': ew_inicio,
                'ew_end': ew_fim,
                'ey_start': ey_inicio,
                'ey_end': ey_fim
            }
            dados = await obter_json(self.session, f"{self.base_url}/alertcity", params=params)
            return processar_dados_infodengue(dados)

        return await self.cache.obter_ou_buscar(chave, _buscar)

    async def visao_nacional(self, doenca: str = DOENCA_PADRAO, hoje: Optional[date] = None) -> List[DadosCapital]:
        #Últimas semanas de cada capital; capital com erro fica sem série
        async def _buscar():
            ew_inicio, ew_fim, ano = janela_semanas_recentes(hoje)
            series = await asyncio.gather(
                *(self.buscar_serie(cap['geocode'], doenca, ew_inicio, ew_fim, ano, ano) for cap in CAPITAIS),
                return_exceptions=True
            )

            resultado = []
            for cap, serie in zip(CAPITAIS, series):
                if isinstance(serie, FalhaRede):
                    logger.warning("Sem dados de %s para %s: %s", doenca, cap['nome'], serie)
                    serie = []
                elif isinstance(serie, BaseException):
                    raise serie
                resultado.append(DadosCapital(nome=cap['nome'], geocode=cap['geocode'], uf=cap['uf'], serie=serie))
            return resultado

        return await self.cache.obter_ou_buscar(chave_cache('national', doenca), _buscar)

    async def alertas_municipios(self, cidades: List[dict], doenca: str = DOENCA_PADRAO,
                                 hoje: Optional[date] = None) -> Dict[int, RegistroAlerta]:
        """
        Último alerta de cada município de uma lista

        Args:
            cidades: Lista de {'geocode', 'nome'}
            doenca: Doença consultada
            hoje: Data de referência (padrão: hoje)

        Returns:
            Dicionário geocode -> RegistroAlerta; municípios sem dado ficam de fora
        """
        ew_inicio, ew_fim, ano = janela_semanas_recentes(hoje)
        series = await asyncio.gather(
            *(self.buscar_serie(c['geocode'], doenca, ew_inicio, ew_fim, ano, ano) for c in cidades),
            return_exceptions=True
        )

        alertas = {}
        for cidade, serie in zip(cidades, series):
            if isinstance(serie, FalhaRede):
                logger.warning("Alerta de %s indisponível: %s", cidade['nome'], serie)
                continue
            if isinstance(serie, BaseException):
                raise serie
            if not serie:
                continue

            ultimo = serie[-1]
            if ultimo.municipio_nome is None:
                ultimo = replace(ultimo, municipio_nome=cidade['nome'])
            alertas[int(cidade['geocode'])] = ultimo

        return alertas


def processar_dados_infodengue(dados) -> List[RegistroAlerta]:

    #Converte a resposta bruta e ordena por semana epidemiológica

    if not dados:
        return []

    registros = []
    for item in dados:
        if not isinstance(item, dict) or item.get('SE') is None:
            continue
        try:
            registros.append(RegistroAlerta.de_json(item))
        except (TypeError, ValueError):
            # SE ilegível: semana tratada como sem dado
            logger.warning("Registro com SE inválida ignorado: %r", item.get('SE'))

    return sorted(registros, key=lambda r: r.se)


def resumo_nacional(dados_capitais: List[DadosCapital]) -> dict:

    #Estatísticas dos cards a partir do último registro de cada capital

    total_casos = 0
    cidades_alerta = 0
    soma_rt = 0.0
    n_rt = 0
    nivel_maximo = 1
    capitais_com_dados = 0

    for cap in dados_capitais or []:
        ultimo = cap.ultimo
        if ultimo is None:
            continue

        capitais_com_dados += 1
        total_casos += ultimo.notif_accum_year or 0
        if ultimo.nivel >= 3:
            cidades_alerta += 1
        if ultimo.rt:
            soma_rt += ultimo.rt
            n_rt += 1
        if ultimo.nivel > nivel_maximo:
            nivel_maximo = ultimo.nivel

    return {
        'total_casos': total_casos,
        'cidades_alerta': cidades_alerta,
        'rt_medio': soma_rt / n_rt if n_rt else None,
        'nivel_maximo': nivel_maximo,
        'capitais_com_dados': capitais_com_dados
    }
