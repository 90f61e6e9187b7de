"""Settings dos canais de email.

Cada canal (historicamente "mailer") tem transporte próprio, modo spool
(fila para envio posterior) e logger de mensagens opcional.

Variáveis de ambiente:
    MAIL_CHANNELS=primary,secondary   (ordem preservada)
    MAIL_DEFAULT_CHANNEL=primary
    MAIL_<NOME>_TRANSPORT=memory|logging|null
    MAIL_<NOME>_SPOOL_ENABLED=true|false
    MAIL_<NOME>_LOGGING_ENABLED=true|false
    MAIL_<NOME>_MAX_LOGGED_MESSAGES=0   (0 = sem limite)
    MAIL_<NOME>_FROM_EMAIL=noreply@example.com

<NOME> é o nome do canal em maiúsculas, com caracteres não alfanuméricos
substituídos por "_".
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from config.settings.base.core import env_int

MailTransportKind = Literal["memory", "logging", "null"]

VALID_TRANSPORTS: frozenset[str] = frozenset({"memory", "logging", "null"})
DEFAULT_CHANNEL_NAME = "default"

_ENV_NAME_PATTERN = re.compile(r"[^A-Z0-9]+")


@dataclass(frozen=True)
class MailChannelSettings:
    """Configurações de um canal de email.

    Attributes:
        name: Nome único do canal
        transport: Tipo de transporte (memory|logging|null)
        spool_enabled: Mensagens vão para fila em vez de envio imediato
        logging_enabled: Registra mensagens enviadas (usado pelo profiler)
        max_logged_messages: Máximo de mensagens mantidas no logger (0 = sem limite)
        from_email: Remetente padrão quando a mensagem não define From
    """

    name: str
    transport: MailTransportKind = "memory"
    spool_enabled: bool = False
    logging_enabled: bool = True
    max_logged_messages: int = 0
    from_email: str = ""


@dataclass(frozen=True)
class MailSettings:
    """Configurações do subsistema de email.

    Attributes:
        channels: Canais configurados, na ordem de configuração
        default_channel: Nome do canal padrão
    """

    channels: tuple[MailChannelSettings, ...] = (MailChannelSettings(name=DEFAULT_CHANNEL_NAME),)
    default_channel: str = DEFAULT_CHANNEL_NAME

    @property
    def channel_names(self) -> list[str]:
        """Nomes dos canais na ordem de configuração."""
        return [channel.name for channel in self.channels]

    def get_channel(self, name: str) -> MailChannelSettings | None:
        """Retorna settings do canal ou None se não configurado."""
        for channel in self.channels:
            if channel.name == name:
                return channel
        return None

    def validate(self) -> list[str]:
        """Valida configurações de email.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.channels:
            errors.append("MAIL_CHANNELS não configurado")

        seen: set[str] = set()
        for channel in self.channels:
            if not channel.name:
                errors.append("MAIL_CHANNELS contém nome vazio")
                continue
            if channel.name in seen:
                errors.append(f"Canal duplicado em MAIL_CHANNELS: {channel.name}")
            seen.add(channel.name)

            env_name = channel_env_name(channel.name)
            if channel.transport not in VALID_TRANSPORTS:
                errors.append(f"MAIL_{env_name}_TRANSPORT inválido: {channel.transport}")
            if channel.max_logged_messages < 0:
                errors.append(f"MAIL_{env_name}_MAX_LOGGED_MESSAGES deve ser >= 0")

        if self.channels and self.default_channel not in seen:
            errors.append(f"MAIL_DEFAULT_CHANNEL não configurado em MAIL_CHANNELS: {self.default_channel}")

        return errors


def channel_env_name(name: str) -> str:
    """Converte nome de canal para o segmento usado nas variáveis de ambiente.

    Exemplo: "news-letter" -> "NEWS_LETTER"
    """
    return _ENV_NAME_PATTERN.sub("_", name.upper()).strip("_")


def _env_bool(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() in ("true", "1", "yes")


def _parse_channel_names(raw: str) -> list[str]:
    """Separa MAIL_CHANNELS por vírgula, preservando a ordem."""
    return [name.strip() for name in raw.split(",") if name.strip()]


def _load_channel_from_env(name: str) -> MailChannelSettings:
    """Carrega MailChannelSettings de um canal a partir do ambiente."""
    prefix = f"MAIL_{channel_env_name(name)}_"
    return MailChannelSettings(
        name=name,
        transport=os.getenv(f"{prefix}TRANSPORT", "memory").lower(),  # type: ignore[arg-type]
        spool_enabled=_env_bool(f"{prefix}SPOOL_ENABLED", "false"),
        logging_enabled=_env_bool(f"{prefix}LOGGING_ENABLED", "true"),
        max_logged_messages=env_int(f"{prefix}MAX_LOGGED_MESSAGES", 0),
        from_email=os.getenv(f"{prefix}FROM_EMAIL", ""),
    )


def _load_from_env() -> MailSettings:
    """Carrega MailSettings de variáveis de ambiente."""
    names = _parse_channel_names(os.getenv("MAIL_CHANNELS", DEFAULT_CHANNEL_NAME))
    channels = tuple(_load_channel_from_env(name) for name in names)

    fallback_default = DEFAULT_CHANNEL_NAME
    if names and DEFAULT_CHANNEL_NAME not in names:
        fallback_default = names[0]

    return MailSettings(
        channels=channels,
        default_channel=os.getenv("MAIL_DEFAULT_CHANNEL", fallback_default).strip(),
    )


@lru_cache(maxsize=1)
def get_mail_settings() -> MailSettings:
    """Retorna instância cacheada de MailSettings."""
    return _load_from_env()
