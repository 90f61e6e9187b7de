"""Erros do subsistema de email."""


class UnknownMailChannelError(LookupError):
    """Canal de email não configurado."""

    def __init__(self, channel: str) -> None:
        super().__init__(f'Canal de email não configurado: "{channel}"')
        self.channel = channel


class InvalidMailMessageError(ValueError):
    """Mensagem não pode ser enviada (ex: sem destinatários)."""
