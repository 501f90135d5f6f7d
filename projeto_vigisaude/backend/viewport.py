"""
Quais UFs aparecem no viewport do mapa.

A comparação é entre retângulos envolventes (bounding boxes), não entre
polígonos: pode incluir UFs que só encostam no canto da tela.
"""

import logging
from typing import Iterable, Optional, Set

from backend.config import CODIGOS_UF
from backend.models import Limites

logger = logging.getLogger(__name__)


def _coordenadas(geometria: dict):
    tipo = geometria.get('type')

    if tipo == 'GeometryCollection':
        for g in geometria.get('geometries') or []:
            yield from _coordenadas(g)
        return

    def _percorrer(no):
        # Desce até os pares [lon, lat]
        if isinstance(no, (list, tuple)) and no and isinstance(no[0], (int, float)):
            yield no
        elif isinstance(no, (list, tuple)):
            for filho in no:
                yield from _percorrer(filho)

    yield from _percorrer(geometria.get('coordinates'))


def limites_da_feicao(feicao: dict) -> Optional[Limites]:
    """
    Bounding box de uma feição GeoJSON

    Args:
        feicao: Feature GeoJSON (coordenadas em lon, lat)

    Returns:
        Limites, ou None se a geometria estiver ausente ou malformada
    """
    geometria = (feicao or {}).get('geometry')
    if not isinstance(geometria, dict):
        return None

    lons, lats = [], []
    try:
        for ponto in _coordenadas(geometria):
            lons.append(float(ponto[0]))
            lats.append(float(ponto[1]))
    except (TypeError, ValueError, IndexError):
        return None

    if not lons:
        return None

    return Limites(sul=min(lats), oeste=min(lons), norte=max(lats), leste=max(lons))


def codigo_da_feicao(feicao: dict) -> Optional[int]:
    try:
        return int(feicao['properties']['codarea'])
    except (KeyError, TypeError, ValueError):
        return None


def unidades_visiveis(viewport: Limites, feicoes: Iterable[dict]) -> Set[int]:
    #Códigos de UF cujo retângulo cruza o viewport
    visiveis = set()

    for feicao in feicoes or []:
        codigo = codigo_da_feicao(feicao)
        if codigo not in CODIGOS_UF:
            continue

        limites = limites_da_feicao(feicao)
        if limites is None:
            logger.debug("Feição sem geometria válida ignorada: %s", codigo)
            continue

        if viewport.intersecta(limites):
            visiveis.add(codigo)

    return visiveis
