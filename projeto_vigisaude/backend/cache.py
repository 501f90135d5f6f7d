"""
Cache de requisições da sessão.

Cada chave guarda o primeiro resultado obtido e nunca é sobrescrita.
Falhas não são guardadas: a próxima chamada com a mesma chave busca de novo.
Com `ttl_segundos` (VIGISAUDE_CACHE_TTL) a entrada vencida é buscada de novo.
Duas chamadas simultâneas com a mesma chave podem disparar o produtor duas
vezes; quem evita busca duplicada por UF é o conjunto de carregamento do
gerenciador de camadas.
"""

import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

SEPARADOR_CHAVE = '|'


def chave_cache(*partes) -> str:
    #Junta operação e parâmetros numa chave estável
    return SEPARADOR_CHAVE.join(str(p) for p in partes)


class CacheRequisicoes:

    def __init__(self, ttl_segundos: Optional[float] = None, relogio: Callable[[], float] = time.monotonic):
        # ttl_segundos=None: snapshot da sessão, entradas nunca expiram
        self.ttl_segundos = ttl_segundos
        self._relogio = relogio
        self._entradas: Dict[str, Tuple[float, Any]] = {}

    def __contains__(self, chave: str) -> bool:
        return self._obter(chave) is not _AUSENTE

    def __len__(self) -> int:
        return len(self._entradas)

    async def obter_ou_buscar(self, chave: str, produtor: Callable[[], Awaitable[Any]]) -> Any:
        """
        Devolve o resultado guardado ou executa o produtor e guarda o resultado

        Args:
            chave: Chave montada com chave_cache()
            produtor: Função assíncrona sem argumentos que faz a busca

        Returns:
            Resultado da busca (o mesmo objeto nas chamadas seguintes)
        """
        guardado = self._obter(chave)
        if guardado is not _AUSENTE:
            return guardado

        logger.debug("Cache miss: %s", chave)
        resultado = await produtor()

        # Primeiro resultado vence se houve corrida
        guardado = self._obter(chave)
        if guardado is not _AUSENTE:
            return guardado

        self._entradas[chave] = (self._relogio(), resultado)
        return resultado

    def _obter(self, chave: str):
        entrada = self._entradas.get(chave)
        if entrada is None:
            return _AUSENTE

        criado_em, resultado = entrada
        if self.ttl_segundos is not None and self._relogio() - criado_em > self.ttl_segundos:
            del self._entradas[chave]
            return _AUSENTE

        return resultado


_AUSENTE = object()
