# -*- coding: utf-8 -*-
"""
Serviços de mídia/IO para FFprobe
"""

import json
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ..domain.errors import EngineError
from .logging import get_logger
from .paths import ffprobe_bin
from .settings import settings

FALLBACK_DIMENSIONS = (1920, 1080)


@dataclass(frozen=True)
class SubtitleStream:
    """Faixa de legenda embutida em um contêiner"""

    index: int
    codec: str
    language: str = ""
    title: str = ""


class MediaIO:
    """Serviços de entrada/saída de mídia"""

    def __init__(self):
        self.logger = get_logger("MediaIO")

    def _probe(self, args: List[str], path: Path, timeout: Optional[float]) -> dict:
        result = subprocess.run(
            [ffprobe_bin(), "-v", "error", *args, "-of", "json", str(path)],
            capture_output=True,
            text=True,
            check=True,
            timeout=settings.probe_timeout if timeout is None else timeout,
        )
        return json.loads(result.stdout)

    def get_video_dimensions(self, video_path: Path, timeout: Optional[float] = None) -> Tuple[int, int]:
        """
        Obtém (largura, altura) do primeiro stream de vídeo.

        Em caso de timeout ou erro retorna 1920x1080, nunca levanta.
        """
        try:
            data = self._probe(
                ["-select_streams", "v:0", "-show_entries", "stream=width,height"], video_path, timeout
            )
            stream = data["streams"][0]
            width, height = int(stream["width"]), int(stream["height"])
            if width <= 0 or height <= 0:
                raise ValueError(f"invalid dimensions {width}x{height}")

            self.logger.debug("Dimensões de %s: %dx%d", video_path, width, height)
            return width, height

        except subprocess.TimeoutExpired:
            self.logger.warning("Timeout ao ler dimensões de %s, usando padrão", video_path)
        except (subprocess.CalledProcessError, OSError, ValueError, KeyError, IndexError) as e:
            self.logger.warning("Erro ao obter dimensões de %s: %s", video_path, e)
        return FALLBACK_DIMENSIONS

    def list_subtitle_streams(self, video_path: Path, timeout: Optional[float] = None) -> List[SubtitleStream]:
        """
        Lista as faixas de legenda embutidas (índice global do stream).

        Raises:
            EngineError: FFprobe falhou, excedeu o timeout ou não pôde ser iniciado
        """
        try:
            data = self._probe(
                ["-select_streams", "s", "-show_entries", "stream=index,codec_name:stream_tags=language,title"],
                video_path,
                timeout,
            )
        except subprocess.CalledProcessError as e:
            self.logger.error("FFprobe falhou para %s: %s", video_path, e.stderr)
            raise EngineError("FFprobe failed", e.stderr or "", e.returncode) from e
        except subprocess.TimeoutExpired as e:
            raise EngineError(f"FFprobe exceeded timeout of {e.timeout}s") from e
        except OSError as e:
            raise EngineError("Could not start FFprobe", str(e)) from e
        except ValueError as e:
            raise EngineError("FFprobe returned invalid JSON", str(e)) from e

        streams = [
            SubtitleStream(
                index=int(stream["index"]),
                codec=stream.get("codec_name", ""),
                language=stream.get("tags", {}).get("language", ""),
                title=stream.get("tags", {}).get("title", ""),
            )
            for stream in data.get("streams", [])
        ]
        self.logger.info("%d faixas de legenda encontradas em %s", len(streams), video_path)
        return streams
