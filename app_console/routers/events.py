from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app_console.dependencies import FALHAS_BACKEND, erro_http, obter_gateway
from app_console.gateway import RestGateway
from app_console.schemas import EventoForm, EventoFormValores, EventoLinha

router = APIRouter(prefix="/eventos")


async def _carregar_linhas(gateway: RestGateway) -> List[EventoLinha]:
    try:
        eventos = await gateway.events.list()
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao carregar eventos")
    return [EventoLinha.from_event(evento) for evento in eventos]


@router.get("", response_model=List[EventoLinha])
async def listar_eventos(gateway: RestGateway = Depends(obter_gateway)):
    return await _carregar_linhas(gateway)


@router.get("/{evento_id}/formulario", response_model=EventoFormValores)
async def formulario_evento(evento_id: str, gateway: RestGateway = Depends(obter_gateway)):
    try:
        evento = await gateway.events.get(evento_id)
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao carregar evento")
    if evento is None:
        raise HTTPException(status_code=404, detail="Evento não encontrado")
    return EventoFormValores.from_event(evento)


@router.post("")
async def criar_evento(dados: EventoForm, gateway: RestGateway = Depends(obter_gateway)):
    try:
        criado = await gateway.events.create(dados.to_create())
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao criar evento")
    return {"id": criado.id if criado else None, "mensagem": "Evento criado com sucesso!"}


@router.put("/{evento_id}")
async def atualizar_evento(
    evento_id: str,
    dados: EventoForm,
    gateway: RestGateway = Depends(obter_gateway),
):
    try:
        await gateway.events.update(evento_id, dados.to_update())
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao atualizar evento")
    return {"id": evento_id, "mensagem": "Evento atualizado com sucesso!"}


@router.delete("/{evento_id}", response_model=List[EventoLinha])
async def deletar_evento(evento_id: str, gateway: RestGateway = Depends(obter_gateway)):
    try:
        await gateway.events.delete(evento_id)
    except FALHAS_BACKEND as exc:
        raise erro_http(exc, "Erro ao excluir evento")

    # A lista é sempre buscada de novo depois de uma alteração
    return await _carregar_linhas(gateway)
