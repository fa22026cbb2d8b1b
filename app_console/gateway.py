import logging
import os
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from shared.schemas import Consumer, Event, Sale, WireModel

logger = logging.getLogger(__name__)

# Configurações do backend (variáveis de ambiente, senão o servidor local de desenvolvimento)
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:4000")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))

DEFAULT_HEADERS = {"Content-Type": "application/json"}

T = TypeVar("T", bound=WireModel)


# --- ERROS ---

class GatewayError(Exception):
    """Base dos erros levantados ao falar com o backend."""


class HttpError(GatewayError):
    def __init__(self, status: int, path: str = ""):
        super().__init__(f"HTTP error! status: {status}")
        self.status = status
        self.path = path


class ContractError(GatewayError):
    """Resposta com status de sucesso, mas fora do contrato esperado."""

    def __init__(self, path: str, detail: str):
        super().__init__(f"Resposta inválida em {path}: {detail}")
        self.path = path
        self.detail = detail


# --- GATEWAY ---

class RestGateway:
    """Ponto único de contato com o backend.

    Cada chamada abre e fecha o próprio ``httpx.AsyncClient``: não há pool,
    cache nem sessão entre chamadas. Nenhuma chamada é repetida em caso de erro.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = API_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = {**DEFAULT_HEADERS, **(headers or {})}
        self.timeout = timeout
        self._transport = transport

        self.events = ResourceClient(self, "events", Event)
        self.consumers = ResourceClient(self, "consumers", Consumer)
        self.sales = ResourceClient(self, "sales", Sale)

    async def request(
        self,
        path: str,
        method: str = "GET",
        payload: Any = None,
        headers: Optional[Dict[str, str]] = None,
        read_body: bool = True,
    ) -> Any:
        # Cabeçalhos de quem chamou se somam aos padrões, nunca são descartados
        merged_headers = {**self.headers, **(headers or {})}

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                transport=self._transport,
                timeout=self.timeout,
            ) as client:
                response = await client.request(
                    method, path, json=payload, headers=merged_headers
                )
        except httpx.HTTPError:
            logger.exception("action: api_request | result: fail | method: %s | path: %s", method, path)
            raise

        if not response.is_success:
            logger.error(
                "action: api_request | result: fail | method: %s | path: %s | status: %s",
                method,
                path,
                response.status_code,
            )
            raise HttpError(response.status_code, path)

        logger.debug(
            "action: api_request | result: success | method: %s | path: %s | status: %s",
            method,
            path,
            response.status_code,
        )

        if response.status_code == 204 or not read_body:
            return None

        try:
            return response.json()
        except ValueError as exc:
            logger.error(
                "action: api_request | result: fail | method: %s | path: %s | reason: invalid_json",
                method,
                path,
            )
            raise ContractError(path, f"corpo não é JSON: {exc}") from exc


class ResourceClient(Generic[T]):
    """As cinco operações de uma coleção do backend (events, consumers, sales)."""

    def __init__(self, gateway: RestGateway, path: str, model: Type[T]):
        self.gateway = gateway
        self.path = path
        self.model = model
        self._item = TypeAdapter(model)
        self._items = TypeAdapter(List[model])

    def _decode(self, adapter: TypeAdapter, data: Any, path: str):
        try:
            return adapter.validate_python(data)
        except ValidationError as exc:
            logger.error(
                "action: decode_response | result: fail | path: %s | errors: %s",
                path,
                exc.error_count(),
            )
            raise ContractError(path, str(exc)) from exc

    async def list(self) -> List[T]:
        path = f"/{self.path}"
        data = await self.gateway.request(path)
        if data is None:
            return []
        return self._decode(self._items, data, path)

    async def get(self, resource_id: str) -> Optional[T]:
        path = f"/{self.path}/{resource_id}"
        data = await self.gateway.request(path)
        if data is None:
            return None
        return self._decode(self._item, data, path)

    async def create(self, payload: WireModel) -> Optional[T]:
        path = f"/{self.path}"
        data = await self.gateway.request(path, method="POST", payload=payload.to_wire())
        if data is None:
            return None
        return self._decode(self._item, data, path)

    async def update(self, resource_id: str, patch: WireModel) -> Optional[T]:
        # Só os campos preenchidos do patch vão no corpo
        path = f"/{self.path}/{resource_id}"
        data = await self.gateway.request(path, method="PUT", payload=patch.to_wire())
        if data is None:
            return None
        return self._decode(self._item, data, path)

    async def delete(self, resource_id: str) -> None:
        await self.gateway.request(f"/{self.path}/{resource_id}", method="DELETE", read_body=False)
