"""
Modelos de dados do painel: limites geográficos, registros de alerta,
unidades federativas e camadas de municípios.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from backend.config import REGIOES_UF, SANEAMENTO_UF, SIGLAS_UF


@dataclass(frozen=True)
class Limites:
    #Retângulo lat/lon (sul, oeste, norte, leste)

    sul: float
    oeste: float
    norte: float
    leste: float

    def intersecta(self, outro: 'Limites') -> bool:
        return not (
            outro.oeste > self.leste or outro.leste < self.oeste or
            outro.sul > self.norte or outro.norte < self.sul
        )

    @classmethod
    def de_pares(cls, pares) -> 'Limites':
        """
        Cria limites a partir de [[lat_min, lon_min], [lat_max, lon_max]]

        Args:
            pares: Dois pares (lat, lon), canto sudoeste e nordeste

        Returns:
            Limites correspondentes
        """
        (sul, oeste), (norte, leste) = pares
        return cls(sul=float(sul), oeste=float(oeste), norte=float(norte), leste=float(leste))

    def como_pares(self) -> list:
        return [[self.sul, self.oeste], [self.norte, self.leste]]


@dataclass(frozen=True)
class RegistroAlerta:
    #Uma semana epidemiológica do InfoDengue

    se: int
    casos: int
    nivel: int
    rt: Optional[float] = None
    p_inc100k: Optional[float] = None
    notif_accum_year: int = 0
    municipio_nome: Optional[str] = None
    tempmed: Optional[float] = None
    umidmed: Optional[float] = None

    @property
    def ano(self) -> int:
        return self.se // 100

    @property
    def semana(self) -> int:
        return self.se % 100

    @classmethod
    def de_json(cls, dados: dict) -> 'RegistroAlerta':
        """
        Converte um item da API alertcity

        Args:
            dados: Dicionário com as chaves SE, casos, nivel, Rt, p_inc100k...

        Returns:
            RegistroAlerta
        """
        return cls(
            se=int(dados['SE']),
            casos=_inteiro(dados.get('casos')),
            nivel=_inteiro(dados.get('nivel'), padrao=1),
            rt=_decimal(dados.get('Rt')),
            p_inc100k=_decimal(dados.get('p_inc100k')),
            notif_accum_year=_inteiro(dados.get('notif_accum_year')),
            municipio_nome=dados.get('municipio_nome'),
            tempmed=_decimal(dados.get('tempmed')),
            umidmed=_decimal(dados.get('umidmed')),
        )


def _inteiro(valor, padrao: int = 0) -> int:
    if valor is None:
        return padrao
    try:
        return int(valor)
    except (TypeError, ValueError):
        return padrao


def _decimal(valor) -> Optional[float]:
    if valor is None:
        return None
    try:
        return float(valor)
    except (TypeError, ValueError):
        return None


@dataclass
class UnidadeFederativa:
    codigo: int
    sigla: str
    regiao: str
    nome: str
    coleta_esgoto: Optional[float] = None
    tratamento_esgoto: Optional[float] = None

    @classmethod
    def do_catalogo(cls, codigo: int) -> 'UnidadeFederativa':
        sigla = sigla_uf(codigo)
        saneamento = SANEAMENTO_UF.get(sigla, {})
        return cls(
            codigo=codigo,
            sigla=sigla,
            regiao=regiao_da_uf(sigla),
            nome=saneamento.get('nome', sigla),
            coleta_esgoto=saneamento.get('coletaEsgoto'),
            tratamento_esgoto=saneamento.get('tratamentoEsgoto'),
        )


@dataclass
class DadosCapital:
    #Série recente de uma capital (visão nacional)

    nome: str
    geocode: int
    uf: str
    serie: List[RegistroAlerta] = field(default_factory=list)

    @property
    def ultimo(self) -> Optional[RegistroAlerta]:
        return self.serie[-1] if self.serie else None


@dataclass
class CamadaMunicipios:
    #Detalhe municipal de uma UF enquanto está no mapa

    codigo_uf: int
    doenca: str
    geojson: dict
    alertas: Dict[int, RegistroAlerta] = field(default_factory=dict)

    def alerta(self, geocode) -> Optional[RegistroAlerta]:
        return self.alertas.get(_inteiro(geocode, padrao=-1))


def sigla_uf(codigo) -> str:
    return SIGLAS_UF.get(_inteiro(codigo, padrao=-1), '')


def regiao_da_uf(sigla: str) -> str:
    for regiao, siglas in REGIOES_UF.items():
        if sigla in siglas:
            return regiao
    return 'all'


def serie_para_dataframe(serie: List[RegistroAlerta]) -> pd.DataFrame:
    """
    Converte uma série de alertas em DataFrame para os gráficos

    Args:
        serie: Registros ordenados por semana epidemiológica

    Returns:
        DataFrame com uma linha por semana (se, casos, rt, p_inc100k, nivel, clima...)
    """
    colunas = ['se', 'ano', 'semana', 'casos', 'rt', 'p_inc100k', 'nivel', 'notif_accum_year',
               'tempmed', 'umidmed']

    if not serie:
        return pd.DataFrame(columns=colunas)

    df = pd.DataFrame([
        {
            'se': r.se,
            'ano': r.ano,
            'semana': r.semana,
            'casos': r.casos,
            'rt': r.rt,
            'p_inc100k': r.p_inc100k,
            'nivel': r.nivel,
            'notif_accum_year': r.notif_accum_year,
            'tempmed': r.tempmed,
            'umidmed': r.umidmed,
        }
        for r in serie
    ], columns=colunas)

    return df.sort_values('se').reset_index(drop=True)
