"""
Funções auxiliares e utilitárias
"""

import math
from datetime import date
from typing import Optional

import pandas as pd

SEMANAS_POR_ANO = 52
SEMANAS_JANELA_RECENTE = 4


def semana_epidemiologica_atual(hoje: Optional[date] = None) -> int:
    """
    Semana epidemiológica aproximada (dias desde 1º de janeiro / 7)

    Args:
        hoje: Data de referência (padrão: hoje)

    Returns:
        Semana entre 1 e 52
    """
    hoje = hoje or date.today()
    dia_do_ano = (hoje - date(hoje.year, 1, 1)).days
    return max(1, min(math.ceil(dia_do_ano / 7), SEMANAS_POR_ANO))


def janela_semanas_recentes(hoje: Optional[date] = None) -> tuple:
    #(semana inicial, semana atual, ano) das últimas semanas do ano corrente
    hoje = hoje or date.today()
    semana_atual = semana_epidemiologica_atual(hoje)
    semana_inicial = max(1, semana_atual - SEMANAS_JANELA_RECENTE)
    return semana_inicial, semana_atual, hoje.year


def periodo_padrao(hoje: Optional[date] = None) -> dict:
    hoje = hoje or date.today()
    return {
        'ew_inicio': 1,
        'ew_fim': semana_epidemiologica_atual(hoje),
        'ey_inicio': hoje.year,
        'ey_fim': hoje.year
    }


def formatar_se(se: int) -> str:
    #202407 -> "SE 7/2024"
    return f"SE {se % 100}/{se // 100}"


def formatar_se_curta(se: int) -> str:
    return f"SE {se % 100}"


def exportar_csv(df: pd.DataFrame, nome: str = '') -> bytes:
    """
    Exporta DataFrame para CSV

    Args:
        df: DataFrame para exportar
        nome: Nome da localidade (não usado no conteúdo)

    Returns:
        Bytes do arquivo CSV
    """
    return df.to_csv(index=False).encode('utf-8')


def formatar_numero(numero: float, decimais: int = 1) -> str:
    """
    Formata número com separador de milhares

    Args:
        numero: Número para formatar
        decimais: Número de casas decimais

    Returns:
        String formatada
    """
    return f"{numero:,.{decimais}f}".replace(',', 'X').replace('.', ',').replace('X', '.')


def formatar_opcional(numero: Optional[float], decimais: int = 1) -> str:
    #Dado ausente vira "--", nunca zero
    if numero is None:
        return '--'
    return formatar_numero(numero, decimais)
