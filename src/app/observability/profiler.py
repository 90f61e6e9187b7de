"""Profiler por requisição: executa coletores e guarda profiles.

Cada requisição recebe instâncias novas dos coletores (via factories),
de modo que o snapshot de um coletor nunca é compartilhado entre
requisições concorrentes. O profile resultante é guardado em um store
em memória com limite de tamanho.

Uso:
    profiler = Profiler(
        collector_factories=[lambda: MailMessageCollector(registry, subsystem)],
        store=MemoryProfileStore(max_profiles=100),
        request_scopes=[message_capture],
    )
    with profiler.request_scope():
        ...  # executa a requisição
        profile = profiler.collect(request, response)
    profiler.store.read(profile.token)
"""

from __future__ import annotations

import time
import uuid
from collections import OrderedDict
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.observability.correlation import get_correlation_id
from app.observability.errors import CollectorNotFoundError
from app.observability.metrics import record_latency, record_profile_stored

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence
    from contextlib import AbstractContextManager

    from app.protocols.data_collector import DataCollectorProtocol

TOKEN_LENGTH = 6


def generate_token() -> str:
    """Gera token curto (hex) para identificar um profile."""
    return uuid.uuid4().hex[:TOKEN_LENGTH]


@dataclass(slots=True)
class Profile:
    """Dados de profiling de uma requisição.

    Attributes:
        token: Identificador curto do profile
        method: Método HTTP da requisição
        path: Caminho da requisição
        status_code: Status da resposta (500 se houve exceção sem resposta)
        created_at: Momento da coleta (UTC)
        collectors: Nome do coletor -> coletor já executado
    """

    token: str
    method: str = ""
    path: str = ""
    status_code: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    collectors: dict[str, DataCollectorProtocol] = field(default_factory=dict)

    def add_collector(self, collector: DataCollectorProtocol) -> None:
        self.collectors[collector.get_name()] = collector

    def has_collector(self, name: str) -> bool:
        return name in self.collectors

    def get_collector(self, name: str) -> DataCollectorProtocol:
        """Retorna coletor pelo nome.

        Raises:
            CollectorNotFoundError: Se o profile não tem o coletor.
        """
        try:
            return self.collectors[name]
        except KeyError:
            raise CollectorNotFoundError(f'Collector "{name}" does not exist.') from None

    def summary(self) -> dict[str, Any]:
        """Resumo serializável do profile."""
        return {
            "token": self.token,
            "method": self.method,
            "path": self.path,
            "status_code": self.status_code,
            "created_at": self.created_at.isoformat(),
            "collectors": list(self.collectors),
        }


class MemoryProfileStore:
    """Store de profiles em memória: descarta o mais antigo quando cheio."""

    def __init__(self, max_profiles: int = 100) -> None:
        if max_profiles < 1:
            raise ValueError("max_profiles deve ser >= 1")
        self._max_profiles = max_profiles
        self._profiles: OrderedDict[str, Profile] = OrderedDict()

    def __len__(self) -> int:
        return len(self._profiles)

    def write(self, profile: Profile) -> None:
        self._profiles[profile.token] = profile
        self._profiles.move_to_end(profile.token)
        while len(self._profiles) > self._max_profiles:
            self._profiles.popitem(last=False)

    def read(self, token: str) -> Profile | None:
        return self._profiles.get(token)

    def find(self, limit: int = 10) -> list[Profile]:
        """Profiles mais recentes primeiro."""
        recent = list(reversed(self._profiles.values()))
        return recent[:limit]

    def purge(self) -> None:
        self._profiles.clear()


class Profiler:
    """Executa coletores ao fim da requisição e guarda o profile.

    Args:
        collector_factories: Funções que criam um coletor novo por requisição.
        store: Store de profiles.
        enabled: Se False, collect() não faz nada.
        request_scopes: Funções que criam um context manager por requisição
            (ex: captura de mensagens de email), ativo enquanto a requisição
            executa e os coletores rodam.
    """

    def __init__(
        self,
        collector_factories: Sequence[Callable[[], DataCollectorProtocol]],
        store: MemoryProfileStore,
        enabled: bool = True,
        request_scopes: Sequence[Callable[[], AbstractContextManager[object]]] = (),
    ) -> None:
        self._collector_factories = list(collector_factories)
        self._request_scopes = list(request_scopes)
        self.store = store
        self.enabled = enabled

    @contextmanager
    def request_scope(self) -> Iterator[None]:
        """Ativa os escopos por requisição; saem na ordem inversa."""
        with ExitStack() as stack:
            for scope in self._request_scopes:
                stack.enter_context(scope())
            yield

    def collect(
        self,
        request: Any,
        response: Any,
        exception: BaseException | None = None,
    ) -> Profile | None:
        """Cria profile da requisição, executando todos os coletores.

        Exceções de coletores propagam; quem hospeda o profiler decide
        como isolá-las da requisição.

        Returns:
            Profile armazenado, ou None se o profiler está desabilitado.
        """
        if not self.enabled:
            return None

        start = time.perf_counter()
        profile = Profile(
            token=generate_token(),
            method=str(getattr(request, "method", "")),
            path=_request_path(request),
            status_code=_status_code(response, exception),
        )

        for factory in self._collector_factories:
            collector = factory()
            collector.collect(request, response, exception)
            profile.add_collector(collector)

        self.store.write(profile)

        correlation_id = get_correlation_id()
        record_profile_stored(profile.token, len(profile.collectors), correlation_id)
        record_latency("profiler", "collect", (time.perf_counter() - start) * 1000, correlation_id)
        return profile


def _request_path(request: Any) -> str:
    url = getattr(request, "url", None)
    return str(getattr(url, "path", "")) if url is not None else ""


def _status_code(response: Any, exception: BaseException | None) -> int:
    if response is not None:
        return int(getattr(response, "status_code", 0))
    return 500 if exception is not None else 0
