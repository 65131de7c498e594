# -*- coding: utf-8 -*-
"""
Utilitários de caminhos para binários do FFmpeg e estrutura do projeto
"""

import os
import shutil
from pathlib import Path
from typing import Optional

from .settings import settings


def get_project_root() -> Path:
    """Retorna o diretório raiz do projeto"""
    return Path(__file__).resolve().parents[2]


def _resolve_binary(name: str, configured: Optional[str]) -> str:
    if configured:
        return configured

    exe_name = f"{name}.exe" if os.name == "nt" else name
    bundled = get_project_root() / "_internal" / "ffmpeg" / "bin" / exe_name
    if bundled.exists():
        return str(bundled)

    return shutil.which(exe_name) or exe_name


def ffmpeg_bin() -> str:
    """Resolve o caminho para o binário do FFmpeg"""
    return _resolve_binary("ffmpeg", settings.ffmpeg_path)


def ffprobe_bin() -> str:
    """Resolve o caminho para o binário do FFprobe"""
    return _resolve_binary("ffprobe", settings.ffprobe_path)


def fonts_dir() -> Path:
    """Diretório das fontes empacotadas (Noto Sans/Serif CJK)"""
    if settings.fonts_dir:
        return Path(settings.fonts_dir)
    return get_project_root() / "assets" / "fonts"
