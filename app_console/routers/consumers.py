from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app_console.dependencies import FALHAS_BACKEND, erro_http, obter_gateway
from app_console.gateway import RestGateway
from app_console.schemas import ConsumidorForm, ConsumidorFormValores, ConsumidorLinha

router = APIRouter(prefix="/consumidores")


async def _carregar_linhas(gateway: RestGateway) -> List[ConsumidorLinha]:
    try:
        consumidores = await gateway.consumers.list()
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao carregar consumidores")
    return [ConsumidorLinha.from_consumer(c) for c in consumidores]


@router.get("", response_model=List[ConsumidorLinha])
async def listar_consumidores(gateway: RestGateway = Depends(obter_gateway)):
    return await _carregar_linhas(gateway)


@router.get("/{consumidor_id}/formulario", response_model=ConsumidorFormValores)
async def formulario_consumidor(consumidor_id: str, gateway: RestGateway = Depends(obter_gateway)):
    try:
        consumidor = await gateway.consumers.get(consumidor_id)
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao carregar consumidor")
    if consumidor is None:
        raise HTTPException(status_code=404, detail="Consumidor não encontrado")
    return ConsumidorFormValores.from_consumer(consumidor)


@router.post("")
async def criar_consumidor(dados: ConsumidorForm, gateway: RestGateway = Depends(obter_gateway)):
    # O CPF já chega aqui só com dígitos (ver ConsumidorForm)
    try:
        criado = await gateway.consumers.create(dados.to_create())
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao criar consumidor")
    return {"id": criado.id if criado else None, "mensagem": "Consumidor criado com sucesso!"}


@router.put("/{consumidor_id}")
async def atualizar_consumidor(
    consumidor_id: str,
    dados: ConsumidorForm,
    gateway: RestGateway = Depends(obter_gateway),
):
    try:
        await gateway.consumers.update(consumidor_id, dados.to_update())
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao atualizar consumidor")
    return {"id": consumidor_id, "mensagem": "Consumidor atualizado com sucesso!"}


@router.delete("/{consumidor_id}", response_model=List[ConsumidorLinha])
async def deletar_consumidor(consumidor_id: str, gateway: RestGateway = Depends(obter_gateway)):
    try:
        await gateway.consumers.delete(consumidor_id)
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao excluir consumidor")
    return await _carregar_linhas(gateway)
