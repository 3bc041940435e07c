"""
Histórico de compras (somente inclusão).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Tuple

from maquina.domain.models import Beverage


@dataclass(frozen=True)
class HistoryRecord:
    number: int          # sequencial, começa em 1
    description: str


class History:
    def __init__(self, records: Iterable[HistoryRecord] = ()):
        self._records = list(records)

    @property
    def records(self) -> Tuple[HistoryRecord, ...]:
        return tuple(self._records)

    def update(self, purchase: Beverage) -> HistoryRecord:
        record = HistoryRecord(len(self._records) + 1, purchase.description)
        self._records.append(record)
        return record

    def is_empty(self) -> bool:
        return not self._records

    def show_list(self, show: Callable[[int, str], None]) -> None:
        for record in self._records:
            show(record.number, record.description)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[HistoryRecord]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, History):
            return NotImplemented
        return self._records == other._records
