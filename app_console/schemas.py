from typing import Dict, List

from pydantic import ConfigDict, field_validator

from shared.dates import expand_for_submit, format_display, format_for_edit
from shared.formatting import (
    CPF_DIGITS,
    format_cpf,
    format_currency,
    label,
    mask_cpf,
    strip_cpf,
)
from shared.schemas import (
    Consumer,
    ConsumerCreate,
    ConsumerUpdate,
    Event,
    EventCreate,
    EventType,
    EventUpdate,
    Gender,
    ResourceRef,
    Sale,
    SaleCreate,
    SaleStatus,
    SaleUpdate,
    WireModel,
)


class FormModel(WireModel):
    # Campos vazios também passam pelos validadores (mensagens em português)
    model_config = ConfigDict(validate_default=True, str_strip_whitespace=True)


# --- FORMULÁRIO DE EVENTO ---

MENSAGENS_DATA = {
    "date": "Data é obrigatória",
    "start_sales": "Data de início é obrigatória",
    "end_sales": "Data de fim é obrigatória",
}


class EventoForm(FormModel):
    """Formulário de evento.

    A edição reenvia todos os campos do formulário: o usuário sempre vê e
    submete o evento inteiro, então o PUT leva o conjunto completo.
    """

    description: str = ""
    type: EventType = EventType.SHOW
    date: str = ""
    start_sales: str = ""
    end_sales: str = ""
    price: float = 0.0

    @field_validator("description")
    @classmethod
    def descricao_obrigatoria(cls, value: str) -> str:
        if not value:
            raise ValueError("Descrição é obrigatória")
        return value

    @field_validator("date", "start_sales", "end_sales")
    @classmethod
    def data_valida(cls, value: str, info) -> str:
        # O valor chega no formato do campo datetime-local e sai como ISO completo
        try:
            return expand_for_submit(value)
        except ValueError:
            raise ValueError(MENSAGENS_DATA[info.field_name]) from None

    @field_validator("price")
    @classmethod
    def preco_valido(cls, value: float) -> float:
        if value < 0:
            raise ValueError("Preço deve ser maior que zero")
        return value

    def to_create(self) -> EventCreate:
        return EventCreate(**self.model_dump())

    def to_update(self) -> EventUpdate:
        return EventUpdate(**self.model_dump())


class EventoLinha(WireModel):
    id: str
    description: str
    type: EventType
    type_label: str
    date: str
    start_sales: str
    end_sales: str
    price: float
    price_label: str

    @classmethod
    def from_event(cls, event: Event) -> "EventoLinha":
        return cls(
            id=event.id,
            description=event.description,
            type=event.type,
            type_label=label(event.type),
            date=format_display(event.date),
            start_sales=format_display(event.start_sales),
            end_sales=format_display(event.end_sales),
            price=event.price,
            price_label=format_currency(event.price),
        )


class EventoFormValores(WireModel):
    description: str
    type: EventType
    date: str
    start_sales: str
    end_sales: str
    price: float

    @classmethod
    def from_event(cls, event: Event) -> "EventoFormValores":
        return cls(
            description=event.description,
            type=event.type,
            date=format_for_edit(event.date),
            start_sales=format_for_edit(event.start_sales),
            end_sales=format_for_edit(event.end_sales),
            price=event.price,
        )


# --- FORMULÁRIO DE CONSUMIDOR ---

class ConsumidorForm(FormModel):
    """Formulário de consumidor. Como no evento, a edição reenvia todos os campos."""

    name: str = ""
    cpf: str = ""
    gender: Gender = Gender.MASCULINO

    @field_validator("name")
    @classmethod
    def nome_valido(cls, value: str) -> str:
        if not value:
            raise ValueError("Nome é obrigatório")
        if len(value) < 2:
            raise ValueError("Nome deve ter pelo menos 2 caracteres")
        return value

    @field_validator("cpf")
    @classmethod
    def cpf_valido(cls, value: str) -> str:
        # Aceita o CPF mascarado, mas guarda só os dígitos
        digits = strip_cpf(value)
        if not digits:
            raise ValueError("CPF é obrigatório")
        if len(digits) != CPF_DIGITS:
            raise ValueError("CPF deve ter 11 dígitos")
        return digits

    def to_create(self) -> ConsumerCreate:
        return ConsumerCreate(**self.model_dump())

    def to_update(self) -> ConsumerUpdate:
        return ConsumerUpdate(**self.model_dump())


class ConsumidorLinha(WireModel):
    id: str
    name: str
    cpf: str
    gender: Gender
    gender_label: str

    @classmethod
    def from_consumer(cls, consumer: Consumer) -> "ConsumidorLinha":
        return cls(
            id=consumer.id,
            name=consumer.name,
            cpf=format_cpf(consumer.cpf),
            gender=consumer.gender,
            gender_label=label(consumer.gender),
        )


class ConsumidorFormValores(WireModel):
    name: str
    cpf: str
    gender: Gender

    @classmethod
    def from_consumer(cls, consumer: Consumer) -> "ConsumidorFormValores":
        return cls(name=consumer.name, cpf=mask_cpf(consumer.cpf), gender=consumer.gender)


# --- FORMULÁRIO DE VENDA ---

class VendaForm(FormModel):
    consumer_id: str = ""
    event_id: str = ""
    sale_status: SaleStatus = SaleStatus.PENDENTE

    @field_validator("consumer_id")
    @classmethod
    def consumidor_obrigatorio(cls, value: str) -> str:
        if not value:
            raise ValueError("Consumidor é obrigatório")
        return value

    @field_validator("event_id")
    @classmethod
    def evento_obrigatorio(cls, value: str) -> str:
        if not value:
            raise ValueError("Evento é obrigatório")
        return value

    def to_create(self) -> SaleCreate:
        return SaleCreate(
            consumer=ResourceRef(id=self.consumer_id),
            event=ResourceRef(id=self.event_id),
            sale_status=self.sale_status,
        )


class VendaStatusForm(FormModel):
    # Na edição só o status pode mudar
    sale_status: SaleStatus

    def to_update(self) -> SaleUpdate:
        return SaleUpdate(sale_status=self.sale_status)


class VendaLinha(WireModel):
    id: str
    consumer_id: str
    consumer_name: str
    consumer_cpf: str
    event_id: str
    event_description: str
    price_label: str
    sale_date: str
    sale_status: SaleStatus
    sale_status_label: str

    @classmethod
    def from_sale(cls, sale: Sale, consumers: Dict[str, Consumer]) -> "VendaLinha":
        # Nome e CPF vêm da lista atual de consumidores, não do retrato da venda
        consumer = consumers.get(sale.consumer.id)
        return cls(
            id=sale.id,
            consumer_id=sale.consumer.id,
            consumer_name=consumer.name if consumer else "Não encontrado",
            consumer_cpf=format_cpf(consumer.cpf) if consumer else "N/A",
            event_id=sale.event.id,
            event_description=sale.event.description,
            price_label=format_currency(sale.event.price),
            sale_date=format_display(sale.sale_date),
            sale_status=sale.sale_status,
            sale_status_label=label(sale.sale_status),
        )


class Opcao(WireModel):
    id: str
    label: str


class VendaOpcoes(WireModel):
    consumers: List[Opcao]
    events: List[Opcao]

    @classmethod
    def from_lists(cls, consumers: List[Consumer], events: List[Event]) -> "VendaOpcoes":
        return cls(
            consumers=[Opcao(id=c.id, label=f"{c.name} - {format_cpf(c.cpf)}") for c in consumers],
            events=[
                Opcao(id=e.id, label=f"{e.description} - {format_currency(e.price)}")
                for e in events
            ],
        )


class VendaDetalhe(WireModel):
    id: str
    consumer_name: str
    event_description: str
    sale_date: str
    sale_status: SaleStatus
    sale_status_label: str
    available_statuses: List[Opcao]

    @classmethod
    def from_sale(cls, sale: Sale) -> "VendaDetalhe":
        return cls(
            id=sale.id,
            consumer_name=sale.consumer.name,
            event_description=sale.event.description,
            sale_date=format_display(sale.sale_date),
            sale_status=sale.sale_status,
            sale_status_label=label(sale.sale_status),
            available_statuses=[Opcao(id=str(int(s)), label=label(s)) for s in SaleStatus],
        )
