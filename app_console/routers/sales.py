import asyncio
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app_console.dependencies import FALHAS_BACKEND, erro_http, obter_gateway
from app_console.gateway import RestGateway
from app_console.schemas import VendaDetalhe, VendaForm, VendaLinha, VendaOpcoes, VendaStatusForm

router = APIRouter(prefix="/vendas")


async def _carregar_linhas(gateway: RestGateway) -> List[VendaLinha]:
    # Vendas e consumidores são buscados juntos; espera-se pelos dois
    try:
        vendas, consumidores = await asyncio.gather(
            gateway.sales.list(),
            gateway.consumers.list(),
        )
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao carregar vendas")

    por_id = {c.id: c for c in consumidores}
    return [VendaLinha.from_sale(venda, por_id) for venda in vendas]


@router.get("", response_model=List[VendaLinha])
async def listar_vendas(gateway: RestGateway = Depends(obter_gateway)):
    return await _carregar_linhas(gateway)


@router.get("/opcoes", response_model=VendaOpcoes)
async def opcoes_venda(gateway: RestGateway = Depends(obter_gateway)):
    """Consumidores e eventos disponíveis para os selects do formulário."""
    try:
        eventos, consumidores = await asyncio.gather(
            gateway.events.list(),
            gateway.consumers.list(),
        )
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao carregar dados do formulário")
    return VendaOpcoes.from_lists(consumidores, eventos)


@router.get("/{venda_id}/formulario", response_model=VendaDetalhe)
async def formulario_venda(venda_id: str, gateway: RestGateway = Depends(obter_gateway)):
    try:
        venda = await gateway.sales.get(venda_id)
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao carregar venda")
    if venda is None:
        raise HTTPException(status_code=404, detail="Venda não encontrada")
    return VendaDetalhe.from_sale(venda)


@router.post("")
async def criar_venda(dados: VendaForm, gateway: RestGateway = Depends(obter_gateway)):
    try:
        criada = await gateway.sales.create(dados.to_create())
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao criar venda")
    return {"id": criada.id if criada else None, "mensagem": "Venda criada com sucesso!"}


@router.put("/{venda_id}")
async def atualizar_venda(
    venda_id: str,
    dados: VendaStatusForm,
    gateway: RestGateway = Depends(obter_gateway),
):
    # Consumidor e evento não mudam depois da venda criada
    try:
        await gateway.sales.update(venda_id, dados.to_update())
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao atualizar venda")
    return {"id": venda_id, "mensagem": "Venda atualizada com sucesso!"}


@router.delete("/{venda_id}", response_model=List[VendaLinha])
async def deletar_venda(venda_id: str, gateway: RestGateway = Depends(obter_gateway)):
    try:
        await gateway.sales.delete(venda_id)
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao excluir venda")
    return await _carregar_linhas(gateway)
