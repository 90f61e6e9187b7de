"""Protocolos e contratos do core da aplicação."""

from .data_collector import DataCollectorProtocol
from .mail import (
    MailSubsystemStatusProtocol,
    MailTransportProtocol,
    MessageLoggerProtocol,
    MessageLoggerRegistryProtocol,
)

__all__ = [
    "DataCollectorProtocol",
    "MailSubsystemStatusProtocol",
    "MailTransportProtocol",
    "MessageLoggerProtocol",
    "MessageLoggerRegistryProtocol",
]
