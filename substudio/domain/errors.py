# -*- coding: utf-8 -*-
"""
Exceções de domínio.

Cancelamento não é erro: é um estado terminal de job (ver JobStatus).
"""

from typing import Optional


class SubStudioError(Exception):
    """Exceção base da aplicação."""


class ValidationError(SubStudioError, ValueError):
    """Entrada inválida rejeitada antes da compilação."""


class ResourceError(SubStudioError):
    """Recurso obrigatório ausente (fonte, mídia de origem...)."""

    def __init__(self, resource: str, reason: str = "not found"):
        self.resource = resource
        self.reason = reason
        super().__init__(f"Missing resource '{resource}': {reason}")


class EngineError(SubStudioError):
    """Falha reportada pelo motor de transcodificação (FFmpeg)."""

    def __init__(self, message: str, diagnostics: str = "", returncode: Optional[int] = None):
        self.diagnostics = diagnostics
        self.returncode = returncode
        super().__init__(f"{message}: {diagnostics}" if diagnostics else message)
