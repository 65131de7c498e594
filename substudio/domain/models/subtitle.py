# -*- coding: utf-8 -*-
"""
substudio/domain/models/subtitle.py
Modelos de domínio para legendas e estilos
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Literal, Mapping, Optional

from .timecode import clamp_seconds, timecode_to_seconds

DisplayMode = Literal["main", "secondary", "dual"]
DISPLAY_MODES = ("main", "secondary", "dual")

# Chaves aceitas na importação (formato do editor web usa camelCase)
_STYLE_ALIASES = {
    "fontSize": "font_size",
    "fontFamily": "font_family",
    "backgroundColor": "background_color",
    "letterSpacing": "letter_spacing",
}


def _normalize_keys(data: Mapping[str, Any]) -> dict:
    return {_STYLE_ALIASES.get(key, key): value for key, value in data.items()}


@dataclass(frozen=True)
class CueStyle:
    """Sobrescrita de estilo esparsa de uma única legenda"""

    color: Optional[str] = None
    font_size: Optional[float] = None
    font_family: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in asdict(self).values())

    @property
    def has_position(self) -> bool:
        """\\pos só é emitido com as duas coordenadas presentes"""
        return self.x is not None and self.y is not None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "CueStyle":
        if not data:
            return cls()
        values = _normalize_keys(data)
        return cls(**{key: values.get(key) for key in ("color", "font_size", "font_family", "x", "y")})

    def to_dict(self) -> dict:
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True)
class Subtitle:
    """
    Uma legenda (cue) com tempo, texto principal, texto secundário e estilo.

    Objeto de valor imutável: toda edição gera uma nova instância. Tempos
    negativos ou não finitos são fixados em 0 e normalizados para
    milissegundos. Legendas com start >= end são ilegais (is_valid False),
    nunca corrigidas automaticamente.
    """

    start_time: float
    end_time: float
    text: str = ""
    text2: str = ""
    style: CueStyle = field(default_factory=CueStyle)

    def __post_init__(self):
        object.__setattr__(self, "start_time", round(clamp_seconds(self.start_time), 3))
        object.__setattr__(self, "end_time", round(clamp_seconds(self.end_time), 3))
        object.__setattr__(self, "text", self.text or "")
        object.__setattr__(self, "text2", self.text2 or "")
        if not isinstance(self.style, CueStyle):
            object.__setattr__(self, "style", CueStyle.from_dict(self.style))

    @property
    def is_valid(self) -> bool:
        return 0 <= self.start_time < self.end_time

    @property
    def duration(self) -> float:
        return round(self.end_time - self.start_time, 3)

    @property
    def midpoint(self) -> float:
        return (self.start_time + self.end_time) / 2

    def text_for(self, mode: DisplayMode = "main") -> str:
        """Texto exibido no modo pedido (dual: secundário acima do principal)"""
        if mode == "secondary":
            return self.text2
        if mode == "dual":
            return "\n".join(part for part in (self.text2, self.text) if part)
        return self.text

    def replace(self, **changes) -> "Subtitle":
        """Nova legenda com os campos alterados"""
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Subtitle":
        """
        Cria legenda a partir de um dicionário.

        Aceita start_time/end_time, startTime/endTime (segundos) ou
        start/end (time codes "00:00:01.000" ou "00:00:01,000").
        """
        start = data.get("start_time", data.get("startTime"))
        end = data.get("end_time", data.get("endTime"))
        if start is None and data.get("start") is not None:
            start = timecode_to_seconds(data["start"])
        if end is None and data.get("end") is not None:
            end = timecode_to_seconds(data["end"])

        return cls(
            start_time=start if start is not None else 0.0,
            end_time=end if end is not None else 0.0,
            text=data.get("text") or "",
            text2=data.get("text2") or "",
            style=CueStyle.from_dict(data.get("style")),
        )

    def to_dict(self) -> dict:
        return {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "text": self.text,
            "text2": self.text2,
            "style": self.style.to_dict(),
        }


@dataclass(frozen=True)
class SubtitleStyle:
    """Estilo global de renderização aplicado a todas as legendas"""

    color: str = "#ffffff"
    background_color: str = "rgba(0, 0, 0, 0.6)"
    font_size: float = 30
    font_family: str = "Arial, Helvetica, sans-serif"
    letter_spacing: float = 0
    bottom: int = 50  # Margem inferior em pixels

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "SubtitleStyle":
        if not data:
            return cls()
        values = _normalize_keys(data)
        known = {key: value for key, value in values.items() if key in cls.__dataclass_fields__}
        return cls(**known)
