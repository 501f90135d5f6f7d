from typing import Dict, List

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from backend.classificador import info_alerta
from backend.config import CORES_GRAFICOS, DOENCAS, NIVEIS_ALERTA, SANEAMENTO_UF
from backend.models import DadosCapital
from utils.helpers import formatar_se_curta


def _cor(indice: int) -> str:
    return CORES_GRAFICOS[indice % len(CORES_GRAFICOS)]


def _rotulos(df: pd.DataFrame) -> list:
    return [formatar_se_curta(se) for se in df['se']]


def criar_grafico_casos(series: Dict[str, pd.DataFrame], doenca: str = 'dengue') -> go.Figure:
    """Casos por semana epidemiológica, uma linha por localidade"""

    info = DOENCAS.get(doenca, DOENCAS['dengue'])
    fig = go.Figure()

    for i, (nome, df) in enumerate(series.items()):
        if len(df) == 0:
            continue
        fig.add_trace(go.Scatter(
            x=_rotulos(df),
            y=df['casos'],
            mode='lines+markers',
            name=nome,
            line=dict(width=2.5, color=_cor(i), shape='spline'),
            marker=dict(size=6),
            fill='tozeroy' if i == 0 else None,
            hovertemplate='%{y:,.0f} casos<extra>' + nome + '</extra>'
        ))

    fig.update_layout(
        title=f"{info['icone']} Casos de {info['nome']} por Semana Epidemiológica",
        xaxis_title='Semana Epidemiológica',
        yaxis_title='Número de Casos',
        hovermode='x unified',
        height=400,
        template='plotly_white',
        font=dict(size=12)
    )

    return fig


def criar_grafico_rt(series: Dict[str, pd.DataFrame], mostrar_referencia: bool = True) -> go.Figure:
    #Número reprodutivo efetivo com a linha Rt = 1

    fig = go.Figure()
    rotulos = []

    for i, (nome, df) in enumerate(series.items()):
        if len(df) == 0:
            continue
        if not rotulos:
            rotulos = _rotulos(df)
        fig.add_trace(go.Scatter(
            x=_rotulos(df),
            y=df['rt'],
            mode='lines',
            name=nome,
            connectgaps=True,
            line=dict(width=2, color=_cor(i)),
            hovertemplate='Rt = %{y:.3f}<extra>' + nome + '</extra>'
        ))

    if mostrar_referencia and rotulos:
        fig.add_hline(y=1, line=dict(color='rgba(239, 68, 68, 0.5)', dash='dash', width=1.5),
                      annotation_text='Rt = 1 (referência)')

    fig.update_layout(
        title='📈 Número Reprodutivo (Rt)',
        yaxis_title='Rt',
        height=320,
        template='plotly_white',
        showlegend=False
    )

    return fig


def criar_grafico_incidencia(series: Dict[str, pd.DataFrame]) -> go.Figure:
    #Incidência por 100 mil habitantes (barras)

    fig = go.Figure()

    for i, (nome, df) in enumerate(series.items()):
        if len(df) == 0:
            continue
        fig.add_trace(go.Bar(
            x=_rotulos(df),
            y=df['p_inc100k'].fillna(0),
            name=nome,
            marker_color=_cor(i),
            hovertemplate='%{y:.1f} por 100k<extra>' + nome + '</extra>'
        ))

    fig.update_layout(
        title='📊 Incidência por 100 mil habitantes',
        yaxis_title='Inc/100k hab',
        barmode='group',
        height=320,
        template='plotly_white',
        showlegend=False
    )

    return fig


def criar_grafico_clima(nome: str, df: pd.DataFrame) -> go.Figure:
    """Temperatura e umidade médias da primeira localidade acompanhada"""

    fig = go.Figure()

    if len(df) > 0:
        fig.add_trace(go.Scatter(
            x=_rotulos(df), y=df['tempmed'], name='Temp. Média (°C)',
            line=dict(color='#f59e0b', width=2), fill='tozeroy', connectgaps=True
        ))
        fig.add_trace(go.Scatter(
            x=_rotulos(df), y=df['umidmed'], name='Umidade Média (%)',
            line=dict(color='#38bdf8', width=2), yaxis='y2', connectgaps=True
        ))

    fig.update_layout(
        title=f'🌡️ Clima - {nome}',
        yaxis=dict(title='°C'),
        yaxis2=dict(title='%', overlaying='y', side='right', showgrid=False),
        height=320,
        template='plotly_white',
        legend=dict(orientation='h', y=1.1)
    )

    return fig


def criar_grafico_saneamento(dados_capitais: List[DadosCapital], camada: str = 'coletaEsgoto') -> go.Figure:
    #Coleta de esgoto da UF x incidência da capital

    pontos = [
        {
            'x': SANEAMENTO_UF[cap.uf][camada],
            'y': cap.ultimo.p_inc100k or 0,
            'capital': cap.nome,
            'uf': cap.uf
        }
        for cap in dados_capitais
        if cap.ultimo is not None and cap.uf in SANEAMENTO_UF
    ]
    df = pd.DataFrame(pontos, columns=['x', 'y', 'capital', 'uf'])

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df['x'],
        y=df['y'],
        mode='markers+text',
        text=df['uf'],
        textposition='top center',
        customdata=df[['capital']],
        marker=dict(size=11, color='rgba(56, 189, 248, 0.5)', line=dict(color='#38bdf8', width=1.5)),
        hovertemplate='%{customdata[0]} (%{text}): Esgoto %{x}%, Inc %{y:.1f}/100k<extra></extra>'
    ))

    # Linha de tendência (apenas com pelo menos 2 capitais)
    if len(df) > 1 and df['x'].nunique() > 1:
        z = np.polyfit(df['x'], df['y'], 1)
        p = np.poly1d(z)
        xs = np.linspace(df['x'].min(), df['x'].max(), 20)
        fig.add_trace(go.Scatter(
            x=xs, y=p(xs), mode='lines', name='Tendência',
            line=dict(color='red', width=2, dash='dash')
        ))

    rotulo = 'Coleta de Esgoto (%)' if camada == 'coletaEsgoto' else 'Tratamento de Esgoto (%)'
    fig.update_layout(
        title='💧 Saneamento x Incidência nas Capitais',
        xaxis_title=rotulo,
        yaxis_title='Incidência por 100k hab.',
        height=420,
        template='plotly_white',
        showlegend=False
    )

    return fig


def criar_grafico_niveis_capitais(dados_capitais: List[DadosCapital]) -> go.Figure:
    #Quantas capitais em cada nível de alerta

    contagem = {nivel: 0 for nivel in NIVEIS_ALERTA}
    for cap in dados_capitais:
        if cap.ultimo is not None:
            contagem[cap.ultimo.nivel if cap.ultimo.nivel in contagem else 1] += 1

    fig = go.Figure(data=[go.Pie(
        labels=[info_alerta(n)['label'] for n in contagem],
        values=list(contagem.values()),
        marker=dict(colors=[info_alerta(n)['cor'] for n in contagem]),
        hole=0.4,
        sort=False
    )])

    fig.update_layout(
        title='⚠️ Capitais por Nível de Alerta',
        height=360,
        template='plotly_white'
    )

    return fig
