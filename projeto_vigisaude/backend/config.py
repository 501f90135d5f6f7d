import os
from typing import Optional


def _int_env(chave: str, padrao: Optional[int]) -> Optional[int]:
    valor = os.environ.get(chave)
    if valor is None or valor == "":
        return padrao
    try:
        return max(1, int(valor))
    except ValueError:
        return padrao


# Endpoints
IBGE_BASE_URL = os.environ.get("VIGISAUDE_IBGE_URL", "https://servicodados.ibge.gov.br/api")
INFODENGUE_BASE_URL = os.environ.get("VIGISAUDE_INFODENGUE_URL", "https://info.dengue.mat.br/api")
HTTP_TIMEOUT = _int_env("VIGISAUDE_HTTP_TIMEOUT", 30)
LOG_LEVEL = os.environ.get("VIGISAUDE_LOG_LEVEL", "INFO")
# Validade do cache de requisições em segundos; sem valor = snapshot da sessão
CACHE_TTL = _int_env("VIGISAUDE_CACHE_TTL", None)

# Mapa
LIMIAR_ZOOM_MUNICIPIOS = 6
ZOOM_INICIAL = 4
CENTRO_INICIAL = (-14.5, -51.0)

# Código IBGE da UF -> sigla
SIGLAS_UF = {
    11: 'RO', 12: 'AC', 13: 'AM', 14: 'RR', 15: 'PA', 16: 'AP', 17: 'TO',
    21: 'MA', 22: 'PI', 23: 'CE', 24: 'RN', 25: 'PB', 26: 'PE', 27: 'AL', 28: 'SE', 29: 'BA',
    31: 'MG', 32: 'ES', 33: 'RJ', 35: 'SP',
    41: 'PR', 42: 'SC', 43: 'RS',
    50: 'MS', 51: 'MT', 52: 'GO', 53: 'DF'
}

CODIGOS_UF = frozenset(SIGLAS_UF)

REGIOES_UF = {
    'norte': ['AC', 'AM', 'AP', 'PA', 'RO', 'RR', 'TO'],
    'nordeste': ['AL', 'BA', 'CE', 'MA', 'PB', 'PE', 'PI', 'RN', 'SE'],
    'sudeste': ['ES', 'MG', 'RJ', 'SP'],
    'sul': ['PR', 'RS', 'SC'],
    'centro-oeste': ['DF', 'GO', 'MS', 'MT']
}

NOMES_REGIOES = {
    'all': 'Brasil',
    'norte': 'Norte',
    'nordeste': 'Nordeste',
    'sudeste': 'Sudeste',
    'sul': 'Sul',
    'centro-oeste': 'Centro-Oeste'
}

# [[lat_min, lon_min], [lat_max, lon_max]]
LIMITES_REGIOES = {
    'all': [[-33.75, -73.99], [5.27, -34.79]],
    'norte': [[-3.0, -74.0], [5.3, -44.0]],
    'nordeste': [[-18.0, -49.0], [-1.0, -34.8]],
    'sudeste': [[-25.5, -53.5], [-14.0, -39.5]],
    'sul': [[-33.8, -57.7], [-22.5, -48.0]],
    'centro-oeste': [[-24.5, -61.5], [-5.5, -45.5]],
}

# Saneamento por UF (SNIS 2022/2023 - Diagnóstico Temático Água e Esgoto)
# coletaEsgoto: % da população com coleta, tratamentoEsgoto: % do esgoto tratado
SANEAMENTO_UF = {
    'AC': {'coletaEsgoto': 14.4, 'tratamentoEsgoto': 20.8, 'idh': 0.663, 'nome': 'Acre'},
    'AL': {'coletaEsgoto': 29.6, 'tratamentoEsgoto': 30.1, 'idh': 0.631, 'nome': 'Alagoas'},
    'AM': {'coletaEsgoto': 14.2, 'tratamentoEsgoto': 33.5, 'idh': 0.674, 'nome': 'Amazonas'},
    'AP': {'coletaEsgoto': 6.1, 'tratamentoEsgoto': 11.8, 'idh': 0.708, 'nome': 'Amapá'},
    'BA': {'coletaEsgoto': 35.8, 'tratamentoEsgoto': 52.4, 'idh': 0.660, 'nome': 'Bahia'},
    'CE': {'coletaEsgoto': 29.9, 'tratamentoEsgoto': 42.1, 'idh': 0.682, 'nome': 'Ceará'},
    'DF': {'coletaEsgoto': 90.5, 'tratamentoEsgoto': 82.3, 'idh': 0.824, 'nome': 'Distrito Federal'},
    'ES': {'coletaEsgoto': 57.4, 'tratamentoEsgoto': 51.7, 'idh': 0.740, 'nome': 'Espírito Santo'},
    'GO': {'coletaEsgoto': 58.0, 'tratamentoEsgoto': 67.3, 'idh': 0.735, 'nome': 'Goiás'},
    'MA': {'coletaEsgoto': 13.7, 'tratamentoEsgoto': 17.8, 'idh': 0.639, 'nome': 'Maranhão'},
    'MG': {'coletaEsgoto': 71.4, 'tratamentoEsgoto': 46.5, 'idh': 0.731, 'nome': 'Minas Gerais'},
    'MS': {'coletaEsgoto': 46.5, 'tratamentoEsgoto': 62.8, 'idh': 0.729, 'nome': 'Mato Grosso do Sul'},
    'MT': {'coletaEsgoto': 36.2, 'tratamentoEsgoto': 63.7, 'idh': 0.725, 'nome': 'Mato Grosso'},
    'PA': {'coletaEsgoto': 8.4, 'tratamentoEsgoto': 15.2, 'idh': 0.646, 'nome': 'Pará'},
    'PB': {'coletaEsgoto': 36.7, 'tratamentoEsgoto': 43.2, 'idh': 0.658, 'nome': 'Paraíba'},
    'PE': {'coletaEsgoto': 32.8, 'tratamentoEsgoto': 39.5, 'idh': 0.673, 'nome': 'Pernambuco'},
    'PI': {'coletaEsgoto': 12.8, 'tratamentoEsgoto': 22.1, 'idh': 0.646, 'nome': 'Piauí'},
    'PR': {'coletaEsgoto': 74.4, 'tratamentoEsgoto': 83.1, 'idh': 0.749, 'nome': 'Paraná'},
    'RJ': {'coletaEsgoto': 65.3, 'tratamentoEsgoto': 41.8, 'idh': 0.761, 'nome': 'Rio de Janeiro'},
    'RN': {'coletaEsgoto': 26.9, 'tratamentoEsgoto': 34.7, 'idh': 0.684, 'nome': 'Rio Grande do Norte'},
    'RO': {'coletaEsgoto': 7.5, 'tratamentoEsgoto': 13.9, 'idh': 0.690, 'nome': 'Rondônia'},
    'RR': {'coletaEsgoto': 22.6, 'tratamentoEsgoto': 41.2, 'idh': 0.707, 'nome': 'Roraima'},
    'RS': {'coletaEsgoto': 33.2, 'tratamentoEsgoto': 44.6, 'idh': 0.746, 'nome': 'Rio Grande do Sul'},
    'SC': {'coletaEsgoto': 30.8, 'tratamentoEsgoto': 46.2, 'idh': 0.774, 'nome': 'Santa Catarina'},
    'SE': {'coletaEsgoto': 23.0, 'tratamentoEsgoto': 36.8, 'idh': 0.665, 'nome': 'Sergipe'},
    'SP': {'coletaEsgoto': 89.6, 'tratamentoEsgoto': 73.4, 'idh': 0.783, 'nome': 'São Paulo'},
    'TO': {'coletaEsgoto': 27.4, 'tratamentoEsgoto': 55.3, 'idh': 0.699, 'nome': 'Tocantins'},
}

# Capitais com geocode IBGE (visão nacional)
CAPITAIS = [
    {'nome': 'São Paulo', 'geocode': 3550308, 'uf': 'SP'},
    {'nome': 'Rio de Janeiro', 'geocode': 3304557, 'uf': 'RJ'},
    {'nome': 'Belo Horizonte', 'geocode': 3106200, 'uf': 'MG'},
    {'nome': 'Salvador', 'geocode': 2927408, 'uf': 'BA'},
    {'nome': 'Brasília', 'geocode': 5300108, 'uf': 'DF'},
    {'nome': 'Fortaleza', 'geocode': 2304400, 'uf': 'CE'},
    {'nome': 'Manaus', 'geocode': 1302603, 'uf': 'AM'},
    {'nome': 'Curitiba', 'geocode': 4106902, 'uf': 'PR'},
    {'nome': 'Recife', 'geocode': 2611606, 'uf': 'PE'},
    {'nome': 'Goiânia', 'geocode': 5208707, 'uf': 'GO'},
    {'nome': 'Belém', 'geocode': 1501402, 'uf': 'PA'},
    {'nome': 'Porto Alegre', 'geocode': 4314902, 'uf': 'RS'},
    {'nome': 'São Luís', 'geocode': 2111300, 'uf': 'MA'},
    {'nome': 'Maceió', 'geocode': 2704302, 'uf': 'AL'},
    {'nome': 'Campo Grande', 'geocode': 5002704, 'uf': 'MS'},
    {'nome': 'Natal', 'geocode': 2408102, 'uf': 'RN'},
    {'nome': 'Teresina', 'geocode': 2211001, 'uf': 'PI'},
    {'nome': 'João Pessoa', 'geocode': 2507507, 'uf': 'PB'},
    {'nome': 'Aracaju', 'geocode': 2800308, 'uf': 'SE'},
    {'nome': 'Cuiabá', 'geocode': 5103403, 'uf': 'MT'},
    {'nome': 'Florianópolis', 'geocode': 4205407, 'uf': 'SC'},
    {'nome': 'Vitória', 'geocode': 3205309, 'uf': 'ES'},
    {'nome': 'Porto Velho', 'geocode': 1100205, 'uf': 'RO'},
    {'nome': 'Macapá', 'geocode': 1600303, 'uf': 'AP'},
    {'nome': 'Rio Branco', 'geocode': 1200401, 'uf': 'AC'},
    {'nome': 'Boa Vista', 'geocode': 1400100, 'uf': 'RR'},
    {'nome': 'Palmas', 'geocode': 1721000, 'uf': 'TO'},
]

# Municípios consultados no zoom, por código da UF.
# AC, RR e AP ficam de fora (cobertura baixa no InfoDengue).
MUNICIPIOS_POR_UF = {
    11: [
        {'geocode': 1100205, 'nome': 'Porto Velho'},
        {'geocode': 1100122, 'nome': 'Ji-Paraná'},
        {'geocode': 1100023, 'nome': 'Ariquemes'},
    ],
    13: [
        {'geocode': 1302603, 'nome': 'Manaus'},
        {'geocode': 1303403, 'nome': 'Parintins'},
        {'geocode': 1301902, 'nome': 'Itacoatiara'},
    ],
    15: [
        {'geocode': 1501402, 'nome': 'Belém'},
        {'geocode': 1500800, 'nome': 'Ananindeua'},
        {'geocode': 1506807, 'nome': 'Santarém'},
        {'geocode': 1504208, 'nome': 'Marabá'},
    ],
    17: [
        {'geocode': 1721000, 'nome': 'Palmas'},
        {'geocode': 1702109, 'nome': 'Araguaína'},
    ],
    21: [
        {'geocode': 2111300, 'nome': 'São Luís'},
        {'geocode': 2105302, 'nome': 'Imperatriz'},
    ],
    22: [
        {'geocode': 2211001, 'nome': 'Teresina'},
        {'geocode': 2207702, 'nome': 'Parnaíba'},
    ],
    23: [
        {'geocode': 2304400, 'nome': 'Fortaleza'},
        {'geocode': 2303709, 'nome': 'Caucaia'},
        {'geocode': 2307304, 'nome': 'Juazeiro do Norte'},
        {'geocode': 2312908, 'nome': 'Sobral'},
    ],
    24: [
        {'geocode': 2408102, 'nome': 'Natal'},
        {'geocode': 2408003, 'nome': 'Mossoró'},
    ],
    25: [
        {'geocode': 2507507, 'nome': 'João Pessoa'},
        {'geocode': 2504009, 'nome': 'Campina Grande'},
    ],
    26: [
        {'geocode': 2611606, 'nome': 'Recife'},
        {'geocode': 2607901, 'nome': 'Jaboatão dos Guararapes'},
        {'geocode': 2609600, 'nome': 'Olinda'},
        {'geocode': 2604106, 'nome': 'Caruaru'},
        {'geocode': 2611101, 'nome': 'Petrolina'},
    ],
    27: [
        {'geocode': 2704302, 'nome': 'Maceió'},
        {'geocode': 2700300, 'nome': 'Arapiraca'},
    ],
    28: [
        {'geocode': 2800308, 'nome': 'Aracaju'},
        {'geocode': 2804805, 'nome': 'Nossa Senhora do Socorro'},
    ],
    29: [
        {'geocode': 2927408, 'nome': 'Salvador'},
        {'geocode': 2910800, 'nome': 'Feira de Santana'},
        {'geocode': 2933307, 'nome': 'Vitória da Conquista'},
        {'geocode': 2905701, 'nome': 'Camaçari'},
    ],
    31: [
        {'geocode': 3106200, 'nome': 'Belo Horizonte'},
        {'geocode': 3170206, 'nome': 'Uberlândia'},
        {'geocode': 3118601, 'nome': 'Contagem'},
        {'geocode': 3136702, 'nome': 'Juiz de Fora'},
        {'geocode': 3143302, 'nome': 'Montes Claros'},
    ],
    32: [
        {'geocode': 3205309, 'nome': 'Vitória'},
        {'geocode': 3205200, 'nome': 'Vila Velha'},
        {'geocode': 3205002, 'nome': 'Serra'},
        {'geocode': 3201308, 'nome': 'Cariacica'},
    ],
    33: [
        {'geocode': 3304557, 'nome': 'Rio de Janeiro'},
        {'geocode': 3303302, 'nome': 'Niterói'},
        {'geocode': 3304904, 'nome': 'São Gonçalo'},
        {'geocode': 3303500, 'nome': 'Nova Iguaçu'},
        {'geocode': 3301702, 'nome': 'Duque de Caxias'},
    ],
    35: [
        {'geocode': 3550308, 'nome': 'São Paulo'},
        {'geocode': 3509502, 'nome': 'Campinas'},
        {'geocode': 3518800, 'nome': 'Guarulhos'},
        {'geocode': 3548708, 'nome': 'São Bernardo do Campo'},
        {'geocode': 3547809, 'nome': 'Santo André'},
        {'geocode': 3543402, 'nome': 'Ribeirão Preto'},
        {'geocode': 3552205, 'nome': 'Sorocaba'},
        {'geocode': 3549904, 'nome': 'São José dos Campos'},
    ],
    41: [
        {'geocode': 4106902, 'nome': 'Curitiba'},
        {'geocode': 4113700, 'nome': 'Londrina'},
        {'geocode': 4115200, 'nome': 'Maringá'},
        {'geocode': 4108304, 'nome': 'Foz do Iguaçu'},
    ],
    42: [
        {'geocode': 4205407, 'nome': 'Florianópolis'},
        {'geocode': 4209102, 'nome': 'Joinville'},
        {'geocode': 4202404, 'nome': 'Blumenau'},
    ],
    43: [
        {'geocode': 4314902, 'nome': 'Porto Alegre'},
        {'geocode': 4305108, 'nome': 'Caxias do Sul'},
        {'geocode': 4314407, 'nome': 'Pelotas'},
        {'geocode': 4304606, 'nome': 'Canoas'},
    ],
    50: [
        {'geocode': 5002704, 'nome': 'Campo Grande'},
        {'geocode': 5003702, 'nome': 'Dourados'},
    ],
    51: [
        {'geocode': 5103403, 'nome': 'Cuiabá'},
        {'geocode': 5108402, 'nome': 'Várzea Grande'},
        {'geocode': 5107602, 'nome': 'Rondonópolis'},
    ],
    52: [
        {'geocode': 5208707, 'nome': 'Goiânia'},
        {'geocode': 5201405, 'nome': 'Aparecida de Goiânia'},
        {'geocode': 5201108, 'nome': 'Anápolis'},
    ],
    53: [
        {'geocode': 5300108, 'nome': 'Brasília'},
    ],
}

# Níveis de alerta do InfoDengue
NIVEIS_ALERTA = {
    1: {'label': 'Verde', 'cor': '#22c55e', 'fundo': 'rgba(34, 197, 94, 0.15)', 'emoji': '🟢'},
    2: {'label': 'Atenção', 'cor': '#eab308', 'fundo': 'rgba(234, 179, 8, 0.15)', 'emoji': '🟡'},
    3: {'label': 'Alerta', 'cor': '#f97316', 'fundo': 'rgba(249, 115, 22, 0.15)', 'emoji': '🟠'},
    4: {'label': 'Emergência', 'cor': '#ef4444', 'fundo': 'rgba(239, 68, 68, 0.15)', 'emoji': '🔴'},
}

# Faixas de saneamento: (limite inferior, cor)
FAIXAS_SANEAMENTO = [
    (80, '#06b6d4'),
    (60, '#22d3ee'),
    (40, '#67e8f9'),
    (20, '#f59e0b'),
    (0, '#ef4444'),
]

DOENCAS = {
    'dengue': {'nome': 'Dengue', 'icone': '🦟', 'cor': '#f59e0b'},
    'chikungunya': {'nome': 'Chikungunya', 'icone': '🦠', 'cor': '#ec4899'},
    'zika': {'nome': 'Zika', 'icone': '🧬', 'cor': '#8b5cf6'},
}

CAMADAS_MAPA = {
    'doenca': 'Alertas da doença',
    'coletaEsgoto': 'Coleta de Esgoto',
    'tratamentoEsgoto': 'Tratamento de Esgoto',
}

# Cores das séries nos gráficos
CORES_GRAFICOS = [
    '#38bdf8', '#f59e0b', '#34d399', '#ec4899', '#a78bfa',
    '#fb923c', '#22d3ee', '#f472b6', '#4ade80', '#c084fc'
]

ANO_INICIAL_DADOS = 2020

# Informações da aplicação
APP_INFO = {
    'title': 'VigiSaúde Brasil',
    'subtitle': 'Arboviroses e saneamento por estado e município',
    'icon': '🦟',
    'author': 'Enzo Cabrera',
    'github': '@EnzoCabrera',
    'version': '3.0',
    'fontes': 'InfoDengue, IBGE (Localidades e Malhas), SNIS'
}
