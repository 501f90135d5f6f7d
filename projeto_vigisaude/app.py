import asyncio
import logging

import streamlit as st
from streamlit_folium import st_folium

# Imports dos módulos backend
from backend.api_infodengue import resumo_nacional
from backend.config import APP_INFO, CODIGOS_UF, LIMITES_REGIOES
from backend.erros import FalhaRede
from backend.models import Limites, serie_para_dataframe
from backend.painel import LocaisAcompanhados, PainelMapa, capital_da_uf
from backend.viewport import codigo_da_feicao

# Imports dos módulos frontend
from frontend.charts import (
    criar_grafico_casos, criar_grafico_clima, criar_grafico_incidencia,
    criar_grafico_niveis_capitais, criar_grafico_rt, criar_grafico_saneamento
)
from frontend.components import (
    renderizar_footer, renderizar_header, renderizar_kpis, renderizar_legenda,
    renderizar_locais, renderizar_rastreador, renderizar_sidebar
)
from frontend.mapa import criar_mapa, legenda_html, ler_retorno_mapa
from frontend.styles import aplicar_estilos

# Imports dos utilitários
from utils.helpers import exportar_csv
from utils.logs import configurar_logs

configurar_logs()
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title=APP_INFO['title'],
    page_icon=APP_INFO['icon'],
    layout="wide",
    initial_sidebar_state="expanded"
)


def _ao_clicar_unidade(codigo: int, sigla: str, nome: str):
    #Clique numa UF acompanha a capital
    capital = capital_da_uf(codigo)
    if capital is not None:
        st.session_state['acompanhados'].adicionar(f"{capital['nome']}, {sigla}", capital['geocode'])
        st.toast(f"📍 {nome}: acompanhando {capital['nome']}")


def _obter_painel() -> PainelMapa:
    if 'painel' not in st.session_state:
        st.session_state['painel'] = PainelMapa(ao_clicar_unidade=_ao_clicar_unidade)
        st.session_state['acompanhados'] = LocaisAcompanhados()
    return st.session_state['painel']


def _processar_clique(painel: PainelMapa, feicao: dict, ponto):
    codigo = codigo_da_feicao(feicao or {})
    if not st.session_state['acompanhados'].novo_clique(codigo, ponto):
        return

    if codigo in CODIGOS_UF:
        painel.estados.disparar('click', feicao)
        return

    # Município de uma camada carregada
    for camada in painel.municipios.camadas:
        alerta = camada.alerta(codigo)
        if alerta is not None:
            st.session_state['acompanhados'].adicionar(alerta.municipio_nome or str(codigo), codigo)
            return


def renderizar_aba_mapa(painel: PainelMapa, enquadrar):
    ctx = painel.contexto

    renderizar_kpis(resumo_nacional(painel.dados_capitais), ctx.doenca)
    st.markdown("---")

    col_mapa, col_info = st.columns([3, 1])

    with col_mapa:
        mapa = criar_mapa(painel, enquadrar)
        retorno = st_folium(
            mapa,
            key='mapa',
            height=560,
            use_container_width=True,
            returned_objects=['zoom', 'bounds', 'last_active_drawing', 'last_object_clicked'],
        )

    with col_info:
        st.markdown("#### Legenda")
        renderizar_legenda(legenda_html(ctx.camada_ativa))
        carregadas = [c.codigo_uf for c in painel.municipios.camadas]
        if carregadas:
            st.caption(f"Municípios carregados: UFs {', '.join(str(c) for c in carregadas)}")
        elif not ctx.zoom_aproximado:
            st.caption("🔍 Aproxime o mapa para ver os municípios")

    viewport, zoom, clicada, ponto = ler_retorno_mapa(retorno)
    _processar_clique(painel, clicada, ponto)

    if viewport is None or zoom is None:
        return
    if viewport == ctx.viewport and zoom == ctx.zoom:
        return

    antes = (frozenset(ctx.camadas), ctx.zoom_aproximado)
    asyncio.run(painel.mover_mapa(viewport, zoom))
    if (frozenset(ctx.camadas), ctx.zoom_aproximado) != antes:
        st.rerun()


def renderizar_aba_series(painel: PainelMapa, periodo: dict):
    st.markdown("### 📈 Séries por Localidade")

    try:
        estados = asyncio.run(painel.ibge.estados())
    except FalhaRede as e:
        st.error(f"❌ Erro ao carregar estados: {e}")
        estados = []

    uf_id = st.session_state.get('rastreador_uf')
    municipios = []
    if uf_id:
        try:
            municipios = asyncio.run(painel.ibge.municipios(uf_id))
        except FalhaRede:
            st.warning("⚠️ Erro ao carregar municípios")

    _, novo = renderizar_rastreador(estados, municipios)
    if novo is not None:
        geocode, nome = novo
        st.session_state['acompanhados'].adicionar(nome, geocode)

    termo = st.text_input("🔎 Buscar município", key='busca')
    if termo:
        try:
            resultados = asyncio.run(painel.pesquisar_municipios(termo))
        except FalhaRede as e:
            st.error(f"❌ Erro na busca: {e}")
            resultados = []

        if not resultados and len(termo.strip()) >= 2:
            st.caption("Nenhum resultado")
        for r in resultados:
            if st.button(f"{r['nome']} ({r['uf']})", key=f"busca_{r['geocode']}"):
                st.session_state['acompanhados'].adicionar(f"{r['nome']}, {r['uf']}", r['geocode'])

    remover = renderizar_locais(st.session_state['acompanhados'].locais)
    if remover is not None:
        st.session_state['acompanhados'].remover(remover)
        st.rerun()

    locais = st.session_state['acompanhados'].locais
    if not locais:
        return

    with st.spinner('⏳ Carregando séries...'):
        series, falhas = asyncio.run(painel.buscar_series(locais, periodo))

    for nome in falhas:
        st.warning(f"⚠️ Não foi possível carregar {nome}")

    dfs = {nome: serie_para_dataframe(serie) for nome, serie in series.items()}
    if not any(len(df) for df in dfs.values()):
        st.info("Sem registros no período selecionado.")
        return

    try:
        st.plotly_chart(criar_grafico_casos(dfs, painel.contexto.doenca), use_container_width=True)
    except Exception as e:
        st.error(f"❌ Erro ao criar gráfico de casos: {str(e)}")

    col1, col2 = st.columns(2)
    with col1:
        try:
            st.plotly_chart(criar_grafico_rt(dfs), use_container_width=True)
        except Exception as e:
            st.error(f"❌ Erro ao criar gráfico de Rt: {str(e)}")
    with col2:
        try:
            st.plotly_chart(criar_grafico_incidencia(dfs), use_container_width=True)
        except Exception as e:
            st.error(f"❌ Erro ao criar gráfico de incidência: {str(e)}")

    primeiro = next(iter(dfs))
    try:
        st.plotly_chart(criar_grafico_clima(primeiro, dfs[primeiro]), use_container_width=True)
    except Exception as e:
        st.error(f"❌ Erro ao criar gráfico climático: {str(e)}")

    with st.expander("📋 Ver Dados Brutos"):
        for nome, df in dfs.items():
            st.markdown(f"**{nome}** ({len(df)} semanas)")
            st.dataframe(df, use_container_width=True)
            st.download_button(
                label=f"📥 Baixar {nome} em CSV",
                data=exportar_csv(df, nome),
                file_name=f"{painel.contexto.doenca}_{nome.lower().replace(' ', '_').replace(',', '')}.csv",
                mime='text/csv',
                key=f"csv_{nome}"
            )


def renderizar_aba_saneamento(painel: PainelMapa):
    st.markdown("### 💧 Saneamento e Arboviroses")

    camada = 'tratamentoEsgoto' if painel.contexto.camada_ativa == 'tratamentoEsgoto' else 'coletaEsgoto'
    col1, col2 = st.columns([2, 1])

    with col1:
        try:
            st.plotly_chart(criar_grafico_saneamento(painel.dados_capitais, camada), use_container_width=True)
        except Exception as e:
            st.error(f"❌ Erro ao criar gráfico de saneamento: {str(e)}")

    with col2:
        try:
            st.plotly_chart(criar_grafico_niveis_capitais(painel.dados_capitais), use_container_width=True)
        except Exception as e:
            st.error(f"❌ Erro ao criar gráfico de níveis: {str(e)}")


def main():
    """Função principal da aplicação"""

    aplicar_estilos()
    renderizar_header()

    selecao = renderizar_sidebar()
    painel = _obter_painel()
    ctx = painel.contexto

    if selecao['doenca'] != ctx.doenca:
        with st.spinner('⏳ Atualizando alertas...'):
            asyncio.run(painel.selecionar_doenca(selecao['doenca']))

    if not painel.carregado:
        with st.spinner('⏳ Carregando mapa do Brasil...'):
            try:
                asyncio.run(painel.iniciar())
            except FalhaRede as e:
                logger.error("Erro ao carregar GeoJSON: %s", e)
                st.error("❌ Erro ao carregar mapa. Verifique a conexão e recarregue a página.")
                return

    enquadrar = None
    if selecao['regiao'] != ctx.regiao:
        enquadrar = painel.selecionar_regiao(selecao['regiao'])
    elif 'mapa' not in st.session_state:
        enquadrar = Limites.de_pares(LIMITES_REGIOES[ctx.regiao])

    if selecao['camada'] != ctx.camada_ativa:
        painel.selecionar_camada(selecao['camada'])

    tab1, tab2, tab3 = st.tabs([
        "🗺️ Mapa",
        "📈 Séries Temporais",
        "💧 Saneamento"
    ])

    with tab1:
        renderizar_aba_mapa(painel, enquadrar)

    with tab2:
        renderizar_aba_series(painel, selecao['periodo'])

    with tab3:
        renderizar_aba_saneamento(painel)

    renderizar_footer()


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        st.error("❌ Erro crítico na aplicação!")
        st.exception(e)
