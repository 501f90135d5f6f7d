"""
Codificação visual de níveis de alerta e percentuais de saneamento.
"""

from backend.config import FAIXAS_SANEAMENTO, NIVEIS_ALERTA

COR_NEUTRA = '#1e293b'
COR_NEUTRA_MUNICIPIO = 'rgba(30, 41, 59, 0.4)'

OPACIDADE_COM_DADOS = 0.55
OPACIDADE_SEM_DADOS = 0.6
OPACIDADE_FORA_REGIAO = 0.15
OPACIDADE_ZOOM = 0.1

OPACIDADE_SANEAMENTO_MIN = 0.35
OPACIDADE_SANEAMENTO_MAX = 0.75


def info_alerta(nivel) -> dict:
    #Nível fora de 1-4 cai no nível 1
    return NIVEIS_ALERTA.get(nivel, NIVEIS_ALERTA[1])


def cor_alerta(nivel) -> str:
    return info_alerta(nivel)['cor']


def opacidade_alerta(tem_dados: bool, esmaecido: bool = False, zoom_aproximado: bool = False) -> float:
    """
    Opacidade do preenchimento de uma UF

    Args:
        tem_dados: Se a UF tem alerta (ou percentual) para colorir
        esmaecido: Se a UF está fora da região filtrada
        zoom_aproximado: Se o zoom está no nível dos municípios

    Returns:
        Opacidade entre 0 e 1; zoom aproximado prevalece sobre os demais
    """
    base = OPACIDADE_COM_DADOS if tem_dados else OPACIDADE_SEM_DADOS
    return ajustar_opacidade(base, esmaecido, zoom_aproximado)


def ajustar_opacidade(opacidade: float, esmaecido: bool = False, zoom_aproximado: bool = False) -> float:
    #Zoom aproximado > fora da região > opacidade da camada
    if zoom_aproximado:
        return OPACIDADE_ZOOM
    if esmaecido:
        return OPACIDADE_FORA_REGIAO
    return opacidade


def _limitar_percentual(percentual) -> float:
    return min(100.0, max(0.0, float(percentual)))


def cor_saneamento(percentual) -> str:
    # 0% -> vermelho, 100% -> ciano
    valor = _limitar_percentual(percentual)
    for limite, cor in FAIXAS_SANEAMENTO:
        if valor >= limite:
            return cor
    return FAIXAS_SANEAMENTO[-1][1]


def opacidade_saneamento(percentual) -> float:
    #0.35 em 0%, 0.75 em 100%
    valor = _limitar_percentual(percentual)
    return OPACIDADE_SANEAMENTO_MIN + (valor / 100) * (OPACIDADE_SANEAMENTO_MAX - OPACIDADE_SANEAMENTO_MIN)
