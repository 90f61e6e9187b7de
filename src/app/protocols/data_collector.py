"""Protocolo de coletores de dados do profiler."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class DataCollectorProtocol(ABC):
    """Contrato de um coletor executado ao fim de cada requisição.

    Request, response e exceção são repassados pelo profiler; cada coletor
    usa apenas o que precisa.
    """

    @abstractmethod
    def collect(self, request: Any, response: Any, exception: BaseException | None = None) -> None: ...

    @abstractmethod
    def reset(self) -> None: ...

    @abstractmethod
    def get_name(self) -> str: ...
