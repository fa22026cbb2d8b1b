import re
from typing import Union

from babel import numbers

from shared.schemas import EventType, Gender, SaleStatus

CPF_DIGITS = 11
CURRENCY = "BRL"
LOCALE = "pt_BR"

# --- RÓTULOS (um por membro de cada enumeração) ---

EVENT_TYPE_LABELS = {
    EventType.SHOW: "Show",
    EventType.TEATRO: "Teatro",
    EventType.PALESTRA: "Palestra",
    EventType.WORKSHOP: "Workshop",
    EventType.OUTRO: "Outro",
}

SALE_STATUS_LABELS = {
    SaleStatus.PENDENTE: "Pendente",
    SaleStatus.PAGO: "Pago",
    SaleStatus.CANCELADO: "Cancelado",
}

GENDER_LABELS = {
    Gender.MASCULINO: "Masculino",
    Gender.FEMININO: "Feminino",
    Gender.OUTRO: "Outro",
}

_LABELS = {
    EventType: EVENT_TYPE_LABELS,
    SaleStatus: SALE_STATUS_LABELS,
    Gender: GENDER_LABELS,
}


def label(member: Union[EventType, SaleStatus, Gender]) -> str:
    return _LABELS[type(member)][member]


# --- CPF ---

def strip_cpf(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def format_cpf(value: str) -> str:
    """Pontua um CPF guardado só com dígitos. Valores já pontuados voltam iguais."""
    if "." in value or "-" in value:
        return value
    return re.sub(r"^(\d{3})(\d{3})(\d{3})(\d{2})$", r"\1.\2.\3-\4", value)


def mask_cpf(value: str) -> str:
    """Máscara progressiva para digitação: ``1234`` vira ``123.4``."""
    digits = strip_cpf(value)[:CPF_DIGITS]
    head = ".".join(bloco for bloco in (digits[:3], digits[3:6], digits[6:9]) if bloco)
    tail = digits[9:]
    return f"{head}-{tail}" if tail else head


# --- MOEDA ---

def format_currency(value: float) -> str:
    """Formata em reais no padrão brasileiro: ``R$ 1.234,56`` (espaço não separável)."""
    return numbers.format_currency(value, CURRENCY, locale=LOCALE)
