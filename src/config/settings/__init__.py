"""Agregador de settings do Carteiro.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Mail settings
from config.settings.mail import (
    DEFAULT_CHANNEL_NAME,
    VALID_TRANSPORTS,
    MailChannelSettings,
    MailSettings,
    MailTransportKind,
    channel_env_name,
    get_mail_settings,
)

__all__ = [
    # Constants
    "DEFAULT_CHANNEL_NAME",
    "VALID_TRANSPORTS",
    # Base
    "BaseSettings",
    "Environment",
    # Mail
    "MailChannelSettings",
    "MailSettings",
    "MailTransportKind",
    "channel_env_name",
    "get_base_settings",
    "get_mail_settings",
]
