# -*- coding: utf-8 -*-
"""
Fontes empacotadas e provisionamento para o fontconfig do FFmpeg
"""

from pathlib import Path
from typing import Dict, Mapping, Optional

from ..domain.errors import ResourceError
from .logging import get_logger
from .paths import fonts_dir

SANS_FONT = "Noto Sans CJK SC"
SERIF_FONT = "Noto Serif CJK SC"

BUNDLED_FONTS: Dict[str, str] = {
    SANS_FONT: "NotoSansCJKsc-Regular.otf",
    SERIF_FONT: "NotoSerifCJKsc-Regular.otf",
}

_SERIF_MARKERS = ("serif", "KaiTi", "SongTi", "Times", "Georgia")

FONTS_DIR_NAME = "fonts"

FONTS_CONF = """<?xml version="1.0"?>
<fontconfig>
  <dir>{fonts_dir}</dir>
  <cachedir>{cache_dir}</cachedir>
  <config></config>
</fontconfig>
"""


def resolve_font(font_family: Optional[str]) -> str:
    """
    Mapeia uma família CSS para uma das duas fontes empacotadas.

    "sans-serif" é testado primeiro para não casar com o marcador "serif".
    Qualquer outra família cai na fonte sans.
    """
    family = font_family or ""
    if "sans-serif" in family:
        return SANS_FONT
    if any(marker in family for marker in _SERIF_MARKERS):
        return SERIF_FONT
    return SANS_FONT


class FontStore:
    """Acesso aos arquivos de fonte e montagem do diretório de fontes do job"""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir else fonts_dir()
        self.logger = get_logger("FontStore")

    def load(self, font_name: str) -> Dict[str, bytes]:
        """Retorna {nome_arquivo: bytes} da fonte pedida"""
        filename = BUNDLED_FONTS.get(font_name, BUNDLED_FONTS[SANS_FONT])
        font_path = self.base_dir / filename
        if not font_path.exists():
            raise ResourceError(font_name, f"font file {font_path} not found")

        self.logger.debug("Fonte carregada: %s (%s)", font_name, font_path)
        return {filename: font_path.read_bytes()}

    def provision(self, work_dir: Path, fonts: Mapping[str, bytes]) -> Path:
        """
        Grava as fontes em <work_dir>/fonts junto com um fonts.conf.

        Retorna o caminho do fonts.conf, a ser exportado em FONTCONFIG_FILE.
        """
        target = Path(work_dir) / FONTS_DIR_NAME
        target.mkdir(parents=True, exist_ok=True)
        for filename, data in fonts.items():
            (target / filename).write_bytes(data)

        conf_path = target / "fonts.conf"
        conf_path.write_text(
            FONTS_CONF.format(fonts_dir=target.as_posix(), cache_dir=(Path(work_dir) / "cache").as_posix()),
            encoding="utf-8",
        )
        return conf_path
