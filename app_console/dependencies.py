import logging

import httpx
from fastapi import HTTPException, Request, status

from app_console.gateway import GatewayError, HttpError, RestGateway

logger = logging.getLogger(__name__)

# Tudo que uma chamada ao backend pode levantar
FALHAS_BACKEND = (GatewayError, httpx.HTTPError)


def obter_gateway(request: Request) -> RestGateway:
    """Gateway criado no startup da aplicação (um por processo)."""
    return request.app.state.gateway


def erro_http(exc: Exception, mensagem: str) -> HTTPException:
    """Converte a falha do backend na resposta do painel.

    Deve ser chamada dentro do ``except`` para que o traceback vá para o log.
    """
    logger.exception("action: backend_call | result: fail | message: %s | reason: %s", mensagem, exc)

    if isinstance(exc, HttpError):
        # Mantém o status do backend para a interface decidir o que mostrar
        return HTTPException(status_code=exc.status, detail=mensagem)
    # Resposta fora do contrato ou backend inacessível
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=mensagem)
