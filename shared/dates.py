"""Normalização das datas recebidas do backend.

O backend envia datas em dois formatos: string ISO-8601 ou a lista
``[ano, mes, dia, hora, minuto]`` (mês começando em 1). Tudo é convertido
para um único instante canônico: ``datetime`` com fuso local.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar, Sequence, Union

from babel.dates import format_date, format_datetime

logger = logging.getLogger(__name__)

EDIT_FORMAT = "%Y-%m-%dT%H:%M"
LOCALE = "pt_BR"
DISPLAY_FORMAT = "dd/MM/yyyy, HH:mm:ss"
DISPLAY_DATE_FORMAT = "dd/MM/yyyy"


@dataclass(frozen=True)
class ValidDate:
    instant: datetime
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class InvalidDate:
    raw: Any
    reason: str
    ok: ClassVar[bool] = False


ParseResult = Union[ValidDate, InvalidDate]


def _from_iso(value: str) -> datetime:
    texto = value.strip()
    if texto[-1:] in ("Z", "z"):
        texto = texto[:-1] + "+00:00"
    # Sem fuso = horário local; com fuso = convertido para o local
    return datetime.fromisoformat(texto).astimezone()


def _from_parts(parts: Sequence[int]) -> datetime:
    year, month, day, *rest = parts[:5]
    hour = rest[0] if len(rest) > 0 else 0
    minute = rest[1] if len(rest) > 1 else 0
    return datetime(year, month, day, hour, minute).astimezone()


def parse(wire: Any) -> ParseResult:
    """Converte uma data do backend no instante canônico.

    Nunca lança exceção: entradas irreconhecíveis viram ``InvalidDate`` e
    cabe a quem chamou decidir o que fazer com elas.
    """
    if isinstance(wire, str):
        try:
            return ValidDate(_from_iso(wire))
        except ValueError as exc:
            return InvalidDate(wire, f"string ISO inválida: {exc}")

    if isinstance(wire, (list, tuple)) and len(wire) >= 3:
        try:
            return ValidDate(_from_parts(wire))
        except (TypeError, ValueError, OverflowError) as exc:
            return InvalidDate(wire, f"lista de data inválida: {exc}")

    return InvalidDate(wire, "formato de data desconhecido")


def to_instant(wire: Any) -> datetime:
    """Como ``parse``, mas cai para o instante atual se a data for inválida."""
    result = parse(wire)
    if result.ok:
        return result.instant

    logger.warning(
        "action: parse_date | result: fallback_now | raw: %r | reason: %s",
        wire,
        result.reason,
    )
    return datetime.now().astimezone()


def format_display(wire: Any) -> str:
    return format_datetime(to_instant(wire), DISPLAY_FORMAT, locale=LOCALE)


def format_display_date(wire: Any) -> str:
    return format_date(to_instant(wire), DISPLAY_DATE_FORMAT, locale=LOCALE)


def format_for_edit(wire: Any) -> str:
    """Valor para um campo ``datetime-local``: ``AAAA-MM-DDTHH:MM`` no horário local."""
    return to_instant(wire).strftime(EDIT_FORMAT)


def expand_for_submit(value: str) -> str:
    """Expande o valor editado para um instante ISO-8601 completo em UTC.

    Segundos e milissegundos saem zerados: ``2024-05-01T13:00:00.000Z``.
    Lança ``ValueError`` se o valor não for uma data reconhecível.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Data é obrigatória")

    instant = _from_iso(value).replace(second=0, microsecond=0)
    return instant.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")
