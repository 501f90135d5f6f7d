from backend.models import Limites
from backend.viewport import codigo_da_feicao, limites_da_feicao, unidades_visiveis
from fakes import FEICOES_ESTADOS, FEICAO_SP, VIEWPORT_SP, feicao_retangulo


def test_bbox_de_poligono():
    limites = limites_da_feicao(FEICAO_SP)
    assert limites == Limites(sul=-25.3, oeste=-53.1, norte=-19.8, leste=-44.2)


def test_bbox_de_multipoligono():
    feicao = {
        'properties': {'codarea': '33'},
        'geometry': {
            'type': 'MultiPolygon',
            'coordinates': [
                [[[-44.0, -23.0], [-43.0, -23.0], [-43.0, -22.0], [-44.0, -23.0]]],
                [[[-41.0, -21.0], [-40.9, -21.0], [-40.9, -20.8], [-41.0, -21.0]]],
            ]
        }
    }
    assert limites_da_feicao(feicao) == Limites(sul=-23.0, oeste=-44.0, norte=-20.8, leste=-40.9)


def test_geometria_malformada_vira_none():
    assert limites_da_feicao({'properties': {'codarea': '35'}}) is None
    assert limites_da_feicao({'geometry': None}) is None
    assert limites_da_feicao({'geometry': {'type': 'Polygon', 'coordinates': []}}) is None
    assert limites_da_feicao({'geometry': {'type': 'Polygon', 'coordinates': [[['a', 'b']]]}}) is None


def test_codigo_da_feicao():
    assert codigo_da_feicao(FEICAO_SP) == 35
    assert codigo_da_feicao({'properties': {}}) is None
    assert codigo_da_feicao({'properties': {'codarea': 'xx'}}) is None


def test_so_sp_visivel_no_interior_paulista():
    assert unidades_visiveis(VIEWPORT_SP, FEICOES_ESTADOS) == {35}


def test_viewport_do_brasil_pega_todas():
    brasil = Limites(sul=-34.0, oeste=-74.5, norte=5.5, leste=-34.0)
    assert unidades_visiveis(brasil, FEICOES_ESTADOS) == {35, 33, 31, 12}


def test_feicoes_invalidas_ou_desconhecidas_sao_ignoradas():
    feicoes = [
        FEICAO_SP,
        feicao_retangulo(99, -53.0, -25.0, -44.0, -20.0),
        {'properties': {'codarea': '33'}, 'geometry': None},
        {'properties': {}, 'geometry': FEICAO_SP['geometry']},
    ]
    assert unidades_visiveis(VIEWPORT_SP, feicoes) == {35}
    assert unidades_visiveis(VIEWPORT_SP, []) == set()
