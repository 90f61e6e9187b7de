"""Settings base do Carteiro.

Configurações comuns ao serviço e ao profiler.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BaseSettings:
    """Configurações base do sistema.

    Attributes:
        environment: Ambiente de execução (development|staging|production)
        service_name: Nome do serviço para logs e tracing
        debug: Modo debug ativo
        profiler_enabled: Coleta de profiles por requisição ativa
        profiler_max_profiles: Máximo de profiles mantidos em memória
    """

    # Ambiente
    environment: Environment = "development"
    service_name: str = "carteiro"
    debug: bool = False

    # Profiler
    profiler_enabled: bool = True
    profiler_max_profiles: int = 100

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment == "production"

    @property
    def is_staging(self) -> bool:
        """Retorna True se ambiente é staging."""
        return self.environment == "staging"

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é desenvolvimento."""
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        valid_envs = {"development", "staging", "production"}
        if self.environment not in valid_envs:
            errors.append(f"ENVIRONMENT inválido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if self.profiler_max_profiles < 1:
            errors.append("PROFILER_MAX_PROFILES deve ser >= 1")

        if self.profiler_enabled and self.is_production:
            errors.append("PROFILER_ENABLED proibido em production")

        return errors


def env_int(key: str, default: int) -> int:
    """Lê inteiro do ambiente; valor não numérico usa o default.

    Valores fora de faixa são mantidos para que validate() os reporte.
    """
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("invalid_env_int", extra={"key": key, "default": default})
        return default


def _parse_environment(env_str: str) -> Environment:
    """Converte string de ambiente para tipo Environment."""
    env_lower = env_str.lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    return "development"


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings de variáveis de ambiente."""
    environment = _parse_environment(os.getenv("ENVIRONMENT", "development"))
    profiler_default = "false" if environment == "production" else "true"
    return BaseSettings(
        environment=environment,
        service_name=os.getenv("SERVICE_NAME", "carteiro"),
        debug=os.getenv("DEBUG", "").lower() in ("true", "1", "yes"),
        profiler_enabled=os.getenv("PROFILER_ENABLED", profiler_default).lower() in ("true", "1"),
        profiler_max_profiles=env_int("PROFILER_MAX_PROFILES", 100),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
