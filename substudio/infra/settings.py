# -*- coding: utf-8 -*-
"""
Gerenciamento de configurações usando pydantic-settings
"""

import json
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Configurações da aplicação"""

    model_config = SettingsConfigDict(
        env_prefix="SUBSTUDIO_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    ffmpeg_path: Optional[str] = None
    ffprobe_path: Optional[str] = None
    fonts_dir: Optional[str] = None  # Diretório com as fontes Noto CJK empacotadas
    engine_timeout: float = 600.0  # Segundos por job de transcodificação
    probe_timeout: float = 8.0  # Segundos para leitura de metadados
    history_limit: int = 1000
    erase_merge_tolerance: float = 0.1
    log_file: str = "substudio.log"


def load_settings(config_path: Path = Path("config.json")) -> AppSettings:
    """Carrega as configurações da aplicação"""
    # Primeiro tenta carregar do config.json (compatibilidade)
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = json.load(f)
        return AppSettings(**config_data)

    # Senão carrega das variáveis de ambiente ou padrões
    return AppSettings()


# Instância global das configurações
settings = load_settings()
