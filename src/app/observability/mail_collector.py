"""Coletor de atividade de email para o profiler.

Ao fim de cada requisição, lê dos loggers de mensagens de cada canal
configurado a contagem e as mensagens enviadas, e monta um MailSnapshot
imutável consultado depois pela UI do profiler.

Canais sem logger não aparecem no snapshot. Se o subsistema de email
nunca foi inicializado no processo, a coleta não consulta nenhum logger
e o snapshot fica vazio.

Uso:
    collector = MailMessageCollector(registry=subsystem.registry, status=subsystem)
    collector.collect(request, response)
    collector.get_message_count()           # total
    collector.get_message_count("primary")  # por canal
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.mail_snapshot import ChannelRecord, MailSnapshot
from app.observability.correlation import get_correlation_id
from app.observability.errors import ChannelDataNotFoundError
from app.observability.metrics import record_mail_collection
from app.protocols.data_collector import DataCollectorProtocol

if TYPE_CHECKING:
    from collections.abc import KeysView
    from email.message import EmailMessage

    from app.protocols.mail import MailSubsystemStatusProtocol, MessageLoggerRegistryProtocol

logger = logging.getLogger(__name__)

# Identificador do coletor entre os demais coletores de um profile
COLLECTOR_NAME = "swiftmailer"


class MailMessageCollector(DataCollectorProtocol):
    """Coletor de mensagens enviadas por canal de email.

    Não recebe loggers nem mailers diretamente: consulta o registro sob
    demanda para não instanciar nada quando nenhum email foi enviado.

    Args:
        registry: Registro canal -> logger opcional.
        status: Estado do ciclo de vida do subsistema de email.
    """

    def __init__(
        self,
        registry: MessageLoggerRegistryProtocol,
        status: MailSubsystemStatusProtocol,
    ) -> None:
        self._registry = registry
        self._status = status
        self._snapshot = MailSnapshot.empty()

    @property
    def snapshot(self) -> MailSnapshot:
        """Snapshot atual (somente leitura)."""
        return self._snapshot

    def collect(self, request: Any, response: Any, exception: BaseException | None = None) -> None:
        """Monta o snapshot da requisição atual.

        request, response e exception existem apenas por compatibilidade
        com o profiler; não são usados.
        """
        self.reset()

        # Só coleta se o subsistema de email já foi inicializado
        if not self._status.is_initialized():
            return

        default_channel = ""
        total = 0
        channels: dict[str, ChannelRecord] = {}

        for name in self._registry.channel_names():
            if name == self._registry.default_channel:
                default_channel = name

            message_logger = self._registry.try_get_logger(name)
            if message_logger is None:
                continue

            count = message_logger.count_messages()
            channels[name] = ChannelRecord(
                messages=tuple(message_logger.get_messages()),
                message_count=count,
                is_queued=self._registry.is_spool_enabled(name),
            )
            total += count

        self._snapshot = MailSnapshot(
            default_channel=default_channel,
            message_count=total,
            channels=channels,
        )

        logger.debug(
            "mail_collected",
            extra={"channel_count": len(channels), "message_count": total},
        )
        record_mail_collection(len(channels), total, get_correlation_id())

    def reset(self) -> None:
        """Substitui o snapshot atual por um vazio."""
        self._snapshot = MailSnapshot.empty()

    def get_channel_names(self) -> KeysView[str]:
        """Nomes dos canais coletados (conjunto, na ordem de coleta)."""
        return self._snapshot.channels.keys()

    def get_channel_data(self, name: str) -> ChannelRecord:
        """Dados coletados de um canal.

        Raises:
            ChannelDataNotFoundError: Se o canal não foi coletado.
        """
        record = self._snapshot.channels.get(name)
        if record is None:
            raise ChannelDataNotFoundError(f'Missing "{name}" data in "{type(self).__name__}".')
        return record

    def get_message_count(self, name: str | None = None) -> int:
        """Total de mensagens, ou de um canal quando `name` é informado.

        Raises:
            ChannelDataNotFoundError: Se `name` foi informado e não foi coletado.
        """
        if name is None:
            return self._snapshot.message_count
        return self.get_channel_data(name).message_count

    def get_messages(self, name: str = "default") -> list[EmailMessage]:
        """Mensagens do canal; lista vazia se o canal não foi coletado."""
        record = self._snapshot.channels.get(name)
        if record is None:
            return []
        return list(record.messages)

    def is_queued(self, name: str) -> bool:
        """True se o canal usa spool.

        Raises:
            ChannelDataNotFoundError: Se o canal não foi coletado.
        """
        return self.get_channel_data(name).is_queued

    def is_default_channel(self, name: str) -> bool:
        return self._snapshot.default_channel == name

    @staticmethod
    def extract_attachments(message: EmailMessage) -> list[EmailMessage]:
        """Partes filhas diretas da mensagem que são anexos, em ordem.

        Arquivos embutidos (inline com nome de arquivo, ex: imagens
        referenciadas por cid) também contam como anexo.
        """
        if not message.is_multipart():
            return []
        return [part for part in message.iter_parts() if _is_attached_file(part)]

    def get_name(self) -> str:
        return COLLECTOR_NAME


def _is_attached_file(part: EmailMessage) -> bool:
    if part.is_attachment():
        return True
    return part.get_content_disposition() == "inline" and part.get_filename() is not None
