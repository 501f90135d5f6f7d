"""
Desenho do mapa com Folium (exibido via streamlit-folium)
"""

import copy
from typing import Optional, Tuple

import folium

from backend.camada_estados import estilo_destaque_estado
from backend.camada_municipios import estilo_destaque_municipio, estilo_municipio
from backend.classificador import info_alerta
from backend.config import CAMADAS_MAPA, CENTRO_INICIAL, FAIXAS_SANEAMENTO, NIVEIS_ALERTA
from backend.models import Limites, RegistroAlerta
from backend.painel import PainelMapa
from utils.helpers import formatar_numero, formatar_opcional

TILES_URL = 'https://{s}.basemaps.cartocdn.com/dark_nolabels/{z}/{x}/{y}{r}.png'
TILES_ATTR = '&copy; <a href="https://carto.com/">CARTO</a> | Dados: InfoDengue, IBGE, SNIS'


def _linha(rotulo: str, valor: str, destaque: bool = False) -> str:
    estilo = " style='color:#38bdf8;font-weight:600'" if destaque else ''
    return f"<tr><td{estilo}>{rotulo}</td><td{estilo}><b>{valor}</b></td></tr>"


def _badge(nivel: int) -> str:
    info = info_alerta(nivel)
    return (f"<span style='background:{info['fundo']};color:{info['cor']};"
            f"padding:2px 8px;border-radius:8px'>{info['label']}</span>")


def popup_alerta(titulo: str, alerta: Optional[RegistroAlerta]) -> str:
    html = f"<h4>{titulo}</h4>"
    if alerta is None:
        return html + "<p>Sem dados recentes</p>"

    html += "<table>"
    html += _linha(f"Casos (SE {alerta.semana})", formatar_numero(alerta.casos, 0))
    html += _linha("Rt", formatar_opcional(alerta.rt, 2))
    html += _linha("Inc/100k", formatar_opcional(alerta.p_inc100k, 1))
    html += _linha("Acum. Ano", formatar_numero(alerta.notif_accum_year or 0, 0))
    html += "</table>"
    return html + _badge(alerta.nivel)


def popup_estado(propriedades: dict, camada_ativa: str) -> str:
    alerta = None
    if propriedades.get('se') is not None:
        alerta = RegistroAlerta(
            se=propriedades['se'], casos=propriedades.get('casos') or 0, nivel=propriedades.get('nivel') or 1,
            rt=propriedades.get('rt'), p_inc100k=propriedades.get('p_inc100k'),
            notif_accum_year=propriedades.get('notif_accum_year') or 0
        )

    html = popup_alerta(propriedades.get('nome') or propriedades.get('sigla', ''), alerta)

    if propriedades.get('coletaEsgoto') is not None:
        html += "<hr><small>💧 Saneamento (SNIS)</small><table>"
        html += _linha("Coleta Esgoto", f"{propriedades['coletaEsgoto']}%", camada_ativa == 'coletaEsgoto')
        html += _linha("Trat. Esgoto", f"{propriedades['tratamentoEsgoto']}%", camada_ativa == 'tratamentoEsgoto')
        html += "</table>"

    return html


def legenda_html(camada_ativa: str) -> str:
    if camada_ativa == 'doenca':
        itens = [(info['cor'], f"Nível {nivel}: {info['label']}") for nivel, info in NIVEIS_ALERTA.items()]
    else:
        rotulo = CAMADAS_MAPA.get(camada_ativa, '')
        itens = [
            (FAIXAS_SANEAMENTO[0][1], f"≥ 80% {rotulo}"),
            (FAIXAS_SANEAMENTO[1][1], "60–79%"),
            (FAIXAS_SANEAMENTO[2][1], "40–59%"),
            (FAIXAS_SANEAMENTO[3][1], "20–39%"),
            (FAIXAS_SANEAMENTO[4][1], "< 20%"),
        ]

    linhas = ''.join(
        f"<div><span style='display:inline-block;width:12px;height:12px;background:{cor};"
        f"margin-right:6px;border-radius:2px'></span>{texto}</div>"
        for cor, texto in itens
    )
    return f"<div style='font-size:12px;line-height:1.6'>{linhas}</div>"


def criar_mapa(painel: PainelMapa, enquadrar: Optional[Limites] = None) -> folium.Map:
    """
    Monta o mapa com a camada de UFs e as camadas municipais carregadas

    Args:
        painel: Painel com contexto e camadas
        enquadrar: Limites para ajustar a visão (filtro de região)

    Returns:
        folium.Map pronto para st_folium
    """
    ctx = painel.contexto
    centro = _centro(ctx.viewport)

    mapa = folium.Map(
        location=centro,
        zoom_start=ctx.zoom,
        min_zoom=3,
        max_zoom=12,
        tiles=TILES_URL,
        attr=TILES_ATTR,
        prefer_canvas=True,
    )

    geojson = copy.deepcopy(painel.estados.geojson) if painel.estados.geojson else None
    if geojson:
        for feicao in geojson['features']:
            feicao['properties']['popup'] = popup_estado(feicao['properties'], ctx.camada_ativa)

        folium.GeoJson(
            geojson,
            name='UFs',
            style_function=painel.estados.estilo,
            highlight_function=lambda f: estilo_destaque_estado(f['properties']),
            popup=folium.GeoJsonPopup(fields=['popup'], labels=False),
        ).add_to(mapa)

    for camada in painel.municipios.camadas:
        _adicionar_camada_municipios(mapa, camada)

    if enquadrar is not None:
        mapa.fit_bounds(enquadrar.como_pares(), padding=(20, 20))

    return mapa


def _adicionar_camada_municipios(mapa: folium.Map, camada) -> None:
    geojson = copy.deepcopy(camada.geojson)
    for feicao in geojson.get('features') or []:
        propriedades = feicao.setdefault('properties', {})
        geocode = propriedades.get('codarea')
        alerta = camada.alerta(geocode)
        titulo = (alerta.municipio_nome if alerta and alerta.municipio_nome else None) or f"Município {geocode}"
        propriedades['popup'] = popup_alerta(titulo, alerta)

    folium.GeoJson(
        geojson,
        name=f"Municípios UF {camada.codigo_uf}",
        style_function=lambda f, c=camada: estilo_municipio(c.alerta(f['properties'].get('codarea'))),
        highlight_function=lambda f, c=camada: estilo_destaque_municipio(c.alerta(f['properties'].get('codarea'))),
        popup=folium.GeoJsonPopup(fields=['popup'], labels=False),
    ).add_to(mapa)


def _centro(viewport: Optional[Limites]) -> list:
    if viewport is None:
        return list(CENTRO_INICIAL)
    return [(viewport.sul + viewport.norte) / 2, (viewport.oeste + viewport.leste) / 2]


def ler_retorno_mapa(retorno: Optional[dict]) -> Tuple[Optional[Limites], Optional[int], Optional[dict], Optional[tuple]]:
    """
    Interpreta o retorno do st_folium

    Args:
        retorno: Dicionário com zoom, bounds, last_active_drawing e last_object_clicked

    Returns:
        (viewport, zoom, feição clicada, ponto do clique); None onde não houver informação
    """
    if not retorno:
        return None, None, None, None

    viewport = None
    limites = retorno.get('bounds') or {}
    try:
        so, ne = limites['_southWest'], limites['_northEast']
        viewport = Limites(sul=float(so['lat']), oeste=float(so['lng']),
                           norte=float(ne['lat']), leste=float(ne['lng']))
    except (KeyError, TypeError, ValueError):
        viewport = None

    zoom = retorno.get('zoom')
    zoom = int(zoom) if zoom is not None else None

    ponto = retorno.get('last_object_clicked') or {}
    ponto = (ponto.get('lat'), ponto.get('lng')) if 'lat' in ponto else None

    return viewport, zoom, retorno.get('last_active_drawing'), ponto
