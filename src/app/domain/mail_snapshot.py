"""Snapshot de atividade de email por requisição.

Um MailSnapshot é criado vazio no início da coleta, preenchido uma única
vez e depois tratado como somente leitura até o fim da requisição.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from email.message import EmailMessage  # noqa: TC003 - usado em runtime pelo dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class ChannelRecord:
    """Dados coletados de um canal com logger ativo.

    Attributes:
        messages: Mensagens registradas pelo logger, na ordem de registro
        message_count: Contagem reportada pelo logger (independente de len(messages))
        is_queued: Canal usa spool em vez de envio imediato
    """

    messages: tuple[EmailMessage, ...] = ()
    message_count: int = 0
    is_queued: bool = False


@dataclass(frozen=True, slots=True)
class MailSnapshot:
    """Resultado imutável de uma coleta.

    Attributes:
        default_channel: Nome do canal padrão ("" se não resolvido)
        message_count: Soma de message_count de todos os canais coletados
        channels: Canal -> ChannelRecord, na ordem do registro
    """

    default_channel: str = ""
    message_count: int = 0
    channels: Mapping[str, ChannelRecord] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.channels, MappingProxyType):
            object.__setattr__(self, "channels", MappingProxyType(dict(self.channels)))

    @classmethod
    def empty(cls) -> MailSnapshot:
        """Snapshot no estado inicial (sem canais, contagem zero)."""
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Resumo serializável (apenas contagens e flags, sem mensagens)."""
        return {
            "default_channel": self.default_channel,
            "message_count": self.message_count,
            "channels": {
                name: {
                    "message_count": record.message_count,
                    "is_queued": record.is_queued,
                    "logged_messages": len(record.messages),
                }
                for name, record in self.channels.items()
            },
        }


__all__ = ["ChannelRecord", "MailSnapshot"]
