from enum import Enum, IntEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat
from pydantic.alias_generators import to_camel

# Data no formato do backend: string ISO-8601 ou [ano, mes, dia, hora, minuto].
# Não é validada aqui: valores estranhos (null, epoch) chegam a shared.dates.parse
ApiDate = Any


# --- ENUMERAÇÕES (códigos fechados do backend) ---

class EventType(IntEnum):
    SHOW = 1
    TEATRO = 2
    PALESTRA = 3
    WORKSHOP = 4
    OUTRO = 5


class SaleStatus(IntEnum):
    PENDENTE = 1
    PAGO = 2
    CANCELADO = 3


class Gender(str, Enum):
    MASCULINO = "M"
    FEMININO = "F"
    OUTRO = "O"


class WireModel(BaseModel):
    """Base dos contratos: atributos snake_case, JSON camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        # Campos ausentes (None) nunca vão para o backend
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- EVENTOS ---

class Event(WireModel):
    id: str
    description: str
    type: EventType
    date: ApiDate
    start_sales: ApiDate
    end_sales: ApiDate
    price: NonNegativeFloat
    created_at: Optional[ApiDate] = None
    updated_at: Optional[ApiDate] = None


class EventCreate(WireModel):
    description: str
    type: EventType
    date: str
    start_sales: str
    end_sales: str
    price: NonNegativeFloat

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "description": "Show da Banda XYZ",
                    "type": 1,
                    "date": "2025-03-10T23:00:00.000Z",
                    "startSales": "2025-01-01T12:00:00.000Z",
                    "endSales": "2025-03-10T20:00:00.000Z",
                    "price": 150.0,
                }
            ]
        }
    )


class EventUpdate(WireModel):
    description: Optional[str] = None
    type: Optional[EventType] = None
    date: Optional[str] = None
    start_sales: Optional[str] = None
    end_sales: Optional[str] = None
    price: Optional[NonNegativeFloat] = None


# --- CONSUMIDORES ---

class Consumer(WireModel):
    id: str
    name: str
    cpf: str = Field(..., description="Somente dígitos")
    gender: Gender


class ConsumerCreate(WireModel):
    name: str
    cpf: str
    gender: Gender


class ConsumerUpdate(WireModel):
    name: Optional[str] = None
    cpf: Optional[str] = None
    gender: Optional[Gender] = None


# --- VENDAS ---

class ResourceRef(WireModel):
    id: str


class Sale(WireModel):
    id: str
    consumer: Consumer
    event: Event
    sale_date: ApiDate
    sale_status: SaleStatus
    created_at: Optional[ApiDate] = None
    updated_at: Optional[ApiDate] = None


class SaleCreate(WireModel):
    # Na criação só vão os identificadores, não os objetos completos
    consumer: ResourceRef
    event: ResourceRef
    sale_status: SaleStatus = SaleStatus.PENDENTE


class SaleUpdate(WireModel):
    sale_status: Optional[SaleStatus] = None
