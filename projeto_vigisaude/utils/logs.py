import logging

from backend.config import LOG_LEVEL

FORMATO_LOG = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def configurar_logs(nivel: str = LOG_LEVEL) -> None:
    #Chamado uma vez pelo app.py
    logging.basicConfig(level=getattr(logging, nivel.upper(), logging.INFO), format=FORMATO_LOG)
    # urllib3 loga cada conexão em DEBUG
    logging.getLogger('urllib3').setLevel(logging.WARNING)
