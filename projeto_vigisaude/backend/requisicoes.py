import asyncio
import logging

import requests

from backend.config import HTTP_TIMEOUT
from backend.erros import FalhaRede

logger = logging.getLogger(__name__)


def criar_sessao() -> requests.Session:
    #Sessão HTTP compartilhada pelos clientes
    session = requests.Session()
    session.headers.update({
        'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36',
        'Accept': 'application/json'
    })
    return session


async def obter_json(session: requests.Session, url: str, params: dict = None, timeout: int = HTTP_TIMEOUT):
    """
    GET assíncrono que devolve o JSON decodificado

    A chamada bloqueante do requests roda em thread auxiliar; o estado do
    painel continua sendo alterado só no loop de eventos.

    Args:
        session: Sessão requests
        url: Endereço completo
        params: Parâmetros de query
        timeout: Timeout em segundos

    Returns:
        JSON decodificado

    Raises:
        FalhaRede: timeout, erro de conexão, status != 2xx ou JSON inválido
    """
    try:
        response = await asyncio.to_thread(session.get, url, params=params, timeout=timeout)
    except requests.exceptions.Timeout as e:
        raise FalhaRede(f"Timeout ao acessar {url}", url=url) from e
    except requests.exceptions.RequestException as e:
        raise FalhaRede(f"Erro ao acessar {url}: {e}", url=url) from e

    if not response.ok:
        raise FalhaRede(f"Status {response.status_code} em {url}", url=url, status=response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise FalhaRede(f"Resposta inválida de {url}", url=url, status=response.status_code) from e
