"""
Componentes reutilizáveis da interface
"""

from datetime import date
from typing import Optional

import streamlit as st

from backend.classificador import info_alerta
from backend.config import ANO_INICIAL_DADOS, APP_INFO, CAMADAS_MAPA, DOENCAS, NOMES_REGIOES
from utils.helpers import formatar_numero, formatar_opcional, periodo_padrao


def renderizar_header():
    """Renderiza o cabeçalho da aplicação"""
    st.markdown(f"""
        <h1 style='text-align: center; color: #2c3e50;'>
            {APP_INFO['icon']} {APP_INFO['title']}
        </h1>
        <p style='text-align: center; color: #7f8c8d; font-size: 18px;'>
            {APP_INFO['subtitle']}
        </p>
        <hr style='margin-bottom: 30px;'>
    """, unsafe_allow_html=True)


def renderizar_sidebar(hoje: Optional[date] = None):
    """
    Renderiza a barra lateral com controles

    Returns:
        Dicionário com doenca, regiao, camada e periodo selecionados
    """
    hoje = hoje or date.today()
    padrao = periodo_padrao(hoje)

    with st.sidebar:
        st.markdown("## 🎛️ Painel de Controle")

        doenca = st.radio(
            "🦠 Doença:",
            options=list(DOENCAS),
            format_func=lambda d: f"{DOENCAS[d]['icone']} {DOENCAS[d]['nome']}",
            key='doenca'
        )

        regiao = st.selectbox(
            "📍 Região:",
            options=list(NOMES_REGIOES),
            format_func=lambda r: NOMES_REGIOES[r],
            key='regiao'
        )

        camada = st.selectbox(
            "🗺️ Camada do mapa:",
            options=list(CAMADAS_MAPA),
            format_func=lambda c: CAMADAS_MAPA[c],
            key='camada'
        )

        st.markdown("---")
        st.markdown("### 📅 Período")

        anos = list(range(hoje.year, ANO_INICIAL_DADOS - 1, -1))
        col1, col2 = st.columns(2)
        with col1:
            ew_inicio = st.selectbox("SE inicial", list(range(1, 53)), index=padrao['ew_inicio'] - 1)
            ey_inicio = st.selectbox("Ano inicial", anos, index=0)
        with col2:
            ew_fim = st.selectbox("SE final", list(range(1, 53)), index=padrao['ew_fim'] - 1)
            ey_fim = st.selectbox("Ano final", anos, index=0)

        st.markdown("---")
        st.markdown(f"""
        ### ℹ️ Sobre os Dados

        **Fontes:** {APP_INFO['fontes']}

        Aproxime o mapa (zoom ≥ 6) para ver os municípios
        monitorados de cada estado.
        """)

    return {
        'doenca': doenca,
        'regiao': regiao,
        'camada': camada,
        'periodo': {'ew_inicio': ew_inicio, 'ew_fim': ew_fim, 'ey_inicio': ey_inicio, 'ey_fim': ey_fim}
    }


def renderizar_kpis(resumo: dict, doenca: str):
    """
    Renderiza os KPIs nacionais (capitais)

    Args:
        resumo: Saída de resumo_nacional()
        doenca: Doença ativa
    """
    info = DOENCAS[doenca]
    alerta = info_alerta(resumo['nivel_maximo'])

    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric(
            label=f"{info['icone']} Casos no ano (capitais)",
            value=formatar_numero(resumo['total_casos'], 0) if resumo['total_casos'] else '--'
        )

    with col2:
        st.metric(
            label="🚨 Capitais em alerta",
            value=resumo['cidades_alerta'],
            delta=f"de {resumo['capitais_com_dados']} com dados",
            delta_color='off'
        )

    with col3:
        st.metric(label="📈 Rt médio", value=formatar_opcional(resumo['rt_medio'], 2))

    with col4:
        st.metric(label="⚠️ Maior nível", value=f"{alerta['emoji']} {alerta['label']}")


def renderizar_legenda(html: str):
    st.markdown(html, unsafe_allow_html=True)


def renderizar_rastreador(estados: list, municipios: list):
    """
    Seletores de estado e município para acompanhar uma localidade

    Args:
        estados: Lista do IBGE (id, sigla, nome)
        municipios: Municípios do estado escolhido (pode ser vazia)

    Returns:
        (uf_id selecionado, (geocode, nome de exibição) a adicionar ou None)
    """
    st.markdown("#### ➕ Acompanhar localidade")

    col1, col2, col3 = st.columns([2, 3, 1])

    with col1:
        uf_id = st.selectbox(
            "Estado",
            options=[None] + [e['id'] for e in estados],
            format_func=lambda i: 'Selecione' if i is None else next(
                f"{e['sigla']} - {e['nome']}" for e in estados if e['id'] == i),
            key='rastreador_uf'
        )

    with col2:
        geocode = st.selectbox(
            "Município",
            options=[None] + [m['id'] for m in municipios],
            format_func=lambda g: 'Selecione um município' if g is None else next(
                m['nome'] for m in municipios if m['id'] == g),
            disabled=not municipios,
            key='rastreador_municipio'
        )

    with col3:
        st.write("")
        adicionar = st.button("Adicionar", disabled=geocode is None, use_container_width=True)

    if adicionar and geocode is not None:
        sigla = next(e['sigla'] for e in estados if e['id'] == uf_id)
        nome = next(m['nome'] for m in municipios if m['id'] == geocode)
        return uf_id, (int(geocode), f"{nome}, {sigla}")

    return uf_id, None


def renderizar_locais(locais: dict):
    #Chips das localidades acompanhadas; devolve a que deve sair
    if not locais:
        st.info("👆 Adicione localidades ou clique em um estado no mapa para ver as séries.")
        return None

    colunas = st.columns(min(len(locais), 5))
    for i, nome in enumerate(list(locais)):
        with colunas[i % len(colunas)]:
            if st.button(f"✖ {nome}", key=f"remover_{nome}"):
                return nome
    return None


def renderizar_footer():
    """Renderiza o rodapé da aplicação"""
    st.markdown("---")
    st.markdown(f"""
        <p style='text-align: center; color: #7f8c8d;'>
            Desenvolvido por <b>{APP_INFO['author']}</b> ({APP_INFO['github']}) |
            Dados: {APP_INFO['fontes']} | Versão {APP_INFO['version']}
        </p>
    """, unsafe_allow_html=True)
