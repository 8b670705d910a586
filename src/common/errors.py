#rotasmart/src/common/errors.py


class RotaSmartError(Exception):
    """Erro base da aplicação."""


class InvalidInputError(RotaSmartError, ValueError):
    """Entrada estruturalmente inválida (ex.: coleção ausente)."""


class ExternalServiceError(RotaSmartError):
    """Falha do serviço externo de IA: rede, HTTP ou resposta fora do contrato."""


class TelemetrySourceError(RotaSmartError):
    """Falha ao ler a base de telemetria das maquininhas."""
