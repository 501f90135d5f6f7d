"""
Exceções do painel
"""


class ErroVigiSaude(Exception):
    """Erro base do painel"""


class FalhaRede(ErroVigiSaude):
    """Requisição rejeitada, status HTTP de erro ou resposta ilegível"""

    def __init__(self, mensagem: str, url: str = '', status: int = None):
        super().__init__(mensagem)
        self.url = url
        self.status = status
