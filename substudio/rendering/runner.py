# -*- coding: utf-8 -*-
"""
Execução de comandos FFmpeg
"""

import os
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from ..domain.errors import EngineError
from ..infra.logging import get_logger
from ..infra.settings import settings


@dataclass(frozen=True)
class Progress:
    """Progresso de um job com várias etapas (ex: quadros de prévia)"""

    ratio: float
    message: str = ""


class Runner:
    """
    Executa comandos FFmpeg, um job por vez por instância.

    Falhas viram EngineError com o stderr do FFmpeg anexado, sem nova
    tentativa: quem chama decide se repete.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.logger = get_logger("Runner")
        self.timeout = settings.engine_timeout if timeout is None else timeout
        self._lock = threading.Lock()

    def run(
        self,
        cmd: Sequence[str],
        timeout: Optional[float] = None,
        cwd: Optional[Union[str, Path]] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> subprocess.CompletedProcess:
        """Executa o comando e aguarda o término (com timeout)"""
        timeout = self.timeout if timeout is None else timeout
        full_env = {**os.environ, **env} if env else None

        # Configurações específicas para Windows
        kwargs = {}
        if os.name == "nt":
            kwargs["creationflags"] = subprocess.CREATE_NEW_PROCESS_GROUP

        with self._lock:
            self.logger.debug("Executando comando FFmpeg: %s", " ".join(map(str, cmd)))
            try:
                result = subprocess.run(
                    list(cmd),
                    capture_output=True,
                    text=True,
                    errors="replace",
                    timeout=timeout,
                    cwd=cwd,
                    env=full_env,
                    **kwargs,
                )
            except subprocess.TimeoutExpired as e:
                self.logger.error("Timeout após %ss: %s", timeout, " ".join(map(str, cmd)))
                raise EngineError(f"FFmpeg exceeded timeout of {timeout}s") from e
            except OSError as e:
                self.logger.error("Não foi possível iniciar o FFmpeg: %s", e)
                raise EngineError("Could not start FFmpeg", str(e)) from e

        if result.returncode != 0:
            self.logger.error(
                "Comando FFmpeg retornou código %d. Stderr: %s", result.returncode, result.stderr
            )
            raise EngineError("FFmpeg failed", result.stderr or "", result.returncode)

        self.logger.info("Comando FFmpeg finalizado com sucesso.")
        return result
