import asyncio

from backend.erros import FalhaRede
from backend.models import Limites, RegistroAlerta


def feicao_retangulo(codigo, oeste, sul, leste, norte, **propriedades):
    propriedades['codarea'] = str(codigo)
    return {
        'type': 'Feature',
        'properties': propriedades,
        'geometry': {
            'type': 'Polygon',
            'coordinates': [[[oeste, sul], [leste, sul], [leste, norte], [oeste, norte], [oeste, sul]]]
        }
    }


# Retângulos aproximados das UFs
FEICAO_SP = feicao_retangulo(35, -53.1, -25.3, -44.2, -19.8)
FEICAO_RJ = feicao_retangulo(33, -44.9, -23.4, -40.9, -20.8)
FEICAO_MG = feicao_retangulo(31, -51.0, -22.9, -39.9, -14.2)
FEICAO_AC = feicao_retangulo(12, -74.0, -11.1, -66.6, -7.1)

FEICOES_ESTADOS = [FEICAO_SP, FEICAO_RJ, FEICAO_MG, FEICAO_AC]

# Interior de SP, sem encostar em MG nem RJ
VIEWPORT_SP = Limites(sul=-24.0, oeste=-52.0, norte=-23.0, leste=-47.0)
VIEWPORT_AC = Limites(sul=-10.0, oeste=-72.0, norte=-8.0, leste=-68.0)


class FakeResponse:

    def __init__(self, dados=None, status_code=200):
        self._dados = dados
        self.status_code = status_code

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if isinstance(self._dados, Exception):
            raise self._dados
        return self._dados


class FakeSession:
    """Substitui requests.Session; `responder(url, params)` devolve FakeResponse ou levanta"""

    def __init__(self, responder):
        self.responder = responder
        self.chamadas = []

    def get(self, url, params=None, timeout=None):
        self.chamadas.append((url, dict(params or {})))
        return self.responder(url, params or {})


def item_alertcity(se, casos=10, nivel=1, **extra):
    item = {'SE': se, 'casos': casos, 'nivel': nivel, 'Rt': 1.1, 'p_inc100k': 5.0,
            'notif_accum_year': casos * 3, 'tempmed': 24.0, 'umidmed': 70.0}
    item.update(extra)
    return item


class FontesFalsas:
    """Busca de malha e de alertas para o gerenciador de camadas"""

    def __init__(self):
        self.malhas = []
        self.alertas = []
        self.falhar = False
        self.erro_alertas = None
        self.bloqueio = None

    async def buscar_malha(self, codigo_uf):
        self.malhas.append(codigo_uf)
        # Só a primeira busca espera o bloqueio
        if self.bloqueio is not None and len(self.malhas) == 1:
            await self.bloqueio.wait()
        if self.falhar:
            raise FalhaRede(f"malha {codigo_uf} indisponível")
        return {'type': 'FeatureCollection', 'features': [], 'uf': codigo_uf}

    async def buscar_alertas(self, cidades, doenca):
        self.alertas.append((tuple(c['geocode'] for c in cidades), doenca))
        await asyncio.sleep(0)
        if self.erro_alertas is not None:
            raise self.erro_alertas
        primeira = cidades[0]
        return {primeira['geocode']: RegistroAlerta(se=202440, casos=12, nivel=3,
                                                   municipio_nome=primeira['nome'])}
