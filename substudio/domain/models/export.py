# -*- coding: utf-8 -*-
"""
Modelos de exportação: região de apagamento, configurações de renderização,
plano de filtergraph e resultado de jobs
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional

from ..errors import ValidationError
from .timecode import round_half_away

ResolutionMode = Literal["original", "1080p", "720p", "480p"]
QualityProfile = Literal["high", "medium", "low", "custom"]

RESOLUTION_MODES = ("original", "1080p", "720p", "480p")
QUALITY_PROFILES = ("high", "medium", "low", "custom")


@dataclass(frozen=True)
class EraserRegion:
    """Retângulo em pixels do vídeo de origem (nunca do widget de exibição)"""

    x: float
    y: float
    w: float
    h: float

    @property
    def is_empty(self) -> bool:
        """Vazia quando largura ou altura arredondam para zero pixels ou menos"""
        _, _, w, h = self.rounded()
        return w <= 0 or h <= 0

    def rounded(self) -> tuple[int, int, int, int]:
        """Coordenadas inteiras exigidas pelo FFmpeg"""
        return (
            round_half_away(self.x),
            round_half_away(self.y),
            round_half_away(self.w),
            round_half_away(self.h),
        )


@dataclass(frozen=True)
class EraserSettings:
    """Região + intensidade (0-100) + modo inteligente (só apaga com legenda)"""

    region: Optional[EraserRegion] = None
    strength: float = 50
    smart: bool = False

    def __post_init__(self):
        if not 0 <= self.strength <= 100:
            raise ValidationError(f"Eraser strength must be within [0, 100], got {self.strength}")


@dataclass(frozen=True)
class RenderSettings:
    """Configurações de exportação de vídeo"""

    resolution: ResolutionMode = "original"
    quality: QualityProfile = "medium"
    custom_bitrate: Optional[int] = None  # kbps, apenas para quality="custom"
    burn: bool = True
    soft_embed: bool = False
    vcodec: str = "libx264"
    acodec: str = "copy"


@dataclass
class FilterGraphPlan:
    """Descrição completa entregue ao FFmpeg (entradas, grafo, mapeamento, encoder)"""

    inputs: List[str] = field(default_factory=list)
    graph_expression: Optional[str] = None
    output_label: Optional[str] = None
    output_mapping: List[str] = field(default_factory=list)
    encoder_params: List[str] = field(default_factory=list)
    subtitle_params: List[str] = field(default_factory=list)

    @property
    def burns_subtitles(self) -> bool:
        return bool(self.graph_expression) and "subtitles=" in self.graph_expression


class JobStatus(Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class JobResult:
    """Resultado de um job; em cancelamento mantém as saídas já produzidas"""

    status: JobStatus
    outputs: List[bytes] = field(default_factory=list)

    @property
    def cancelled(self) -> bool:
        return self.status is JobStatus.CANCELLED


class CancellationToken:
    """Sinal cooperativo verificado a cada iteração de loops longos"""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
