"""Tests for the REST gateway against a mocked transport."""

import asyncio
import json

import httpx
import pytest

from app_console.gateway import ContractError, HttpError, RestGateway
from shared.dates import InvalidDate, parse
from shared.schemas import (
    ConsumerCreate,
    EventUpdate,
    ResourceRef,
    SaleCreate,
    SaleStatus,
    SaleUpdate,
)


def body(request: httpx.Request):
    return json.loads(request.content)


class TestRequest:
    """Tests for the single request envelope."""

    async def test_sends_json_content_type(self, gateway, backend):
        backend.add("GET", "/events", json=[])
        await gateway.request("/events")
        assert backend.last().headers["content-type"] == "application/json"

    async def test_caller_headers_are_merged(self, gateway, backend):
        """Caller headers are added to the defaults, not replacing them."""
        backend.add("GET", "/events", json=[])
        await gateway.request("/events", headers={"X-Request-Id": "abc"})
        sent = backend.last().headers
        assert sent["x-request-id"] == "abc"
        assert sent["content-type"] == "application/json"

    async def test_gateway_default_headers(self, backend):
        gateway = RestGateway(
            "http://backend.test/",
            headers={"Accept-Language": "pt-BR"},
            transport=httpx.MockTransport(backend),
        )
        backend.add("GET", "/consumers", json=[])
        await gateway.request("/consumers")
        assert backend.last().headers["accept-language"] == "pt-BR"
        assert str(backend.last().url) == "http://backend.test/consumers"

    async def test_no_content_returns_none(self, gateway, backend):
        backend.add("PUT", "/events/e1", status_code=204)
        assert await gateway.request("/events/e1", method="PUT", payload={"price": 10}) is None

    async def test_error_status_raises_without_retry(self, gateway, backend):
        backend.add("GET", "/sales", status_code=500)
        with pytest.raises(HttpError) as excinfo:
            await gateway.request("/sales")
        assert excinfo.value.status == 500
        assert len(backend.requests) == 1

    async def test_error_status_is_logged_before_raising(self, gateway, backend, caplog):
        backend.add("DELETE", "/events/e1", status_code=409)
        with pytest.raises(HttpError):
            await gateway.events.delete("e1")
        assert "result: fail | method: DELETE | path: /events/e1 | status: 409" in caplog.text

    async def test_non_json_success_body_is_contract_error(self, gateway, backend, caplog):
        """A 2xx body that is not JSON is logged and raised as ContractError."""
        backend.add("POST", "/consumers", status_code=201, text="criado")
        with pytest.raises(ContractError):
            await gateway.request("/consumers", method="POST", payload={"name": "Maria Silva"})
        assert "reason: invalid_json" in caplog.text

    async def test_transport_error_propagates(self, caplog):
        def offline(request):
            raise httpx.ConnectError("connection refused", request=request)

        gateway = RestGateway("http://backend.test", transport=httpx.MockTransport(offline))
        with pytest.raises(httpx.ConnectError):
            await gateway.request("/events")
        assert "action: api_request | result: fail | method: GET | path: /events" in caplog.text


class TestResourceOperations:
    """Tests for list/get/create/update/delete on the resource families."""

    async def test_list_returns_decoded_array(self, gateway, backend, evento_payload):
        backend.add("GET", "/events", json=[evento_payload])
        eventos = await gateway.events.list()
        assert [e.model_dump(mode="json", by_alias=True) for e in eventos] == [evento_payload]

    async def test_list_no_content_is_empty(self, gateway, backend):
        backend.add("GET", "/events", status_code=204)
        assert await gateway.events.list() == []

    async def test_list_not_found_raises(self, gateway, backend):
        with pytest.raises(HttpError) as excinfo:
            await gateway.events.list()
        assert excinfo.value.status == 404

    async def test_get_uses_id_path(self, gateway, backend, venda_payload):
        backend.add("GET", "/sales/s1", json=venda_payload)
        venda = await gateway.sales.get("s1")
        assert venda.sale_status is SaleStatus.PENDENTE
        assert venda.consumer.name == "Maria Silva"
        assert venda.event.start_sales == "2025-01-01T12:00:00"

    async def test_get_no_content_returns_none(self, gateway, backend):
        backend.add("GET", "/events/e1", status_code=204)
        assert await gateway.events.get("e1") is None

    @pytest.mark.parametrize("bad_date", [None, 1714567890000, "amanhã", [2025]])
    async def test_malformed_dates_reach_the_normalizer(self, gateway, backend, venda_payload, bad_date):
        """Unreadable dates are kept as sent; only the date helpers interpret them."""
        backend.add("GET", "/sales", json=[{**venda_payload, "saleDate": bad_date}])
        vendas = await gateway.sales.list()
        assert vendas[0].sale_date == bad_date
        assert isinstance(parse(vendas[0].sale_date), InvalidDate)

    async def test_create_consumer(self, gateway, backend, consumidor_payload):
        backend.add("POST", "/consumers", status_code=201, json=consumidor_payload)
        criado = await gateway.consumers.create(
            ConsumerCreate(name="Maria Silva", cpf="12345678901", gender="F")
        )
        assert body(backend.last("POST")) == {"name": "Maria Silva", "cpf": "12345678901", "gender": "F"}
        assert criado.id == "c1"

    async def test_create_and_update_sale(self, gateway, backend, venda_payload):
        backend.add("POST", "/sales", json=venda_payload)
        backend.add("PUT", "/sales/s1", json={**venda_payload, "saleStatus": 2})

        criada = await gateway.sales.create(
            SaleCreate(consumer=ResourceRef(id="c1"), event=ResourceRef(id="e1"), sale_status=SaleStatus.PENDENTE)
        )
        assert body(backend.last("POST")) == {"consumer": {"id": "c1"}, "event": {"id": "e1"}, "saleStatus": 1}

        atualizada = await gateway.sales.update(criada.id, SaleUpdate(sale_status=SaleStatus.PAGO))
        assert backend.last("PUT").url.path == "/sales/s1"
        assert body(backend.last("PUT")) == {"saleStatus": 2}
        assert atualizada.sale_status is SaleStatus.PAGO

    async def test_update_sends_only_set_fields(self, gateway, backend):
        backend.add("PUT", "/events/e1", status_code=204)
        assert await gateway.events.update("e1", EventUpdate(price=99.9)) is None
        assert body(backend.last("PUT")) == {"price": 99.9}

    async def test_delete_discards_body(self, gateway, backend):
        backend.add("DELETE", "/consumers/c1", text="removido")
        assert await gateway.consumers.delete("c1") is None
        assert backend.last().method == "DELETE"

    async def test_unknown_enum_code_is_contract_error(self, gateway, backend, evento_payload):
        backend.add("GET", "/events", json=[{**evento_payload, "type": 9}])
        with pytest.raises(ContractError):
            await gateway.events.list()

    async def test_concurrent_calls_are_independent(self, gateway, backend, evento_payload, consumidor_payload):
        backend.add("GET", "/events", json=[evento_payload])
        backend.add("GET", "/consumers", json=[consumidor_payload])
        eventos, consumidores = await asyncio.gather(gateway.events.list(), gateway.consumers.list())
        assert eventos[0].id == "e1"
        assert consumidores[0].id == "c1"
