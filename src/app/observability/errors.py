"""Erros de consulta ao profiler.

Indicam violação de contrato do chamador (consulta a dados nunca coletados),
não condições de runtime. Não são tratados internamente.
"""


class ChannelDataNotFoundError(LookupError):
    """Canal sem registro no snapshot de email."""


class CollectorNotFoundError(LookupError):
    """Profile não contém o coletor solicitado."""
