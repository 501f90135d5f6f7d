"""
Estilos CSS do painel (cards, chips de localidades e popups do mapa)
"""

import streamlit as st

CSS_CUSTOM = """
    <style>
    .main {
        background-color: #f0f2f6;
    }
    h1 {
        color: #2c3e50;
        font-family: 'Helvetica Neue', sans-serif;
    }
    [data-testid="stMetric"] {
        background-color: white;
        padding: 12px 16px;
        border-radius: 10px;
        border-left: 4px solid #38bdf8;
        box-shadow: 0 2px 4px rgba(0,0,0,0.1);
    }
    /* chips das localidades acompanhadas */
    [data-testid="stHorizontalBlock"] button[kind="secondary"] {
        border-radius: 16px;
        font-size: 13px;
    }
    iframe[title="streamlit_folium.st_folium"] {
        border-radius: 10px;
        border: 1px solid #1e293b;
    }
    .leaflet-popup-content {
        font-size: 12px;
        min-width: 180px;
    }
    .leaflet-popup-content h4 {
        margin: 0 0 6px 0;
        color: #0f172a;
    }
    .leaflet-popup-content table td {
        padding: 1px 8px 1px 0;
    }
    </style>
"""


def aplicar_estilos():
    st.markdown(CSS_CUSTOM, unsafe_allow_html=True)
