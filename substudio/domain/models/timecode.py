# -*- coding: utf-8 -*-
"""
substudio/domain/models/timecode.py
Conversão entre duração em segundos e time codes de relógio.

Formatos suportados (todos com precisão de milissegundo, exceto ASS):
    default  HH:MM:SS.mmm
    srt      HH:MM:SS,mmm
    vtt      HH:MM:SS.mmm
    ass      H:MM:SS.cc   (centésimos de segundo)
"""

from __future__ import annotations

import math
import re
from typing import Literal

from ..errors import ValidationError

TimecodeVariant = Literal["default", "srt", "vtt", "ass"]

_CLOCK_RE = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{1,2})(?:[.,](\d+))?$")
_SECONDS_RE = re.compile(r"^\d+(?:[.,]\d+)?$")


def round_half_away(value: float) -> int:
    """Arredonda para inteiro, meio afastando do zero (2.5 -> 3, -2.5 -> -3)"""
    rounded = math.floor(abs(value) + 0.5)
    return int(rounded if value >= 0 else -rounded)


def clamp_seconds(value) -> float:
    """Normaliza uma duração: não finita ou negativa vira 0"""
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(seconds) or seconds < 0:
        return 0.0
    return seconds


def seconds_to_timecode(seconds: float, variant: TimecodeVariant = "default") -> str:
    """Converte segundos para time code no formato pedido"""
    total_ms = round_half_away(clamp_seconds(seconds) * 1000)

    if variant == "ass":
        total_cs = (total_ms + 5) // 10
        hours, rest = divmod(total_cs, 360000)
        minutes, rest = divmod(rest, 6000)
        secs, centis = divmod(rest, 100)
        return f"{hours}:{minutes:02d}:{secs:02d}.{centis:02d}"

    hours, rest = divmod(total_ms, 3600000)
    minutes, rest = divmod(rest, 60000)
    secs, millis = divmod(rest, 1000)
    separator = "," if variant == "srt" else "."
    return f"{hours:02d}:{minutes:02d}:{secs:02d}{separator}{millis:03d}"


def parse_timecode(value) -> float:
    """
    Converte time code para segundos, rejeitando entradas malformadas.

    Aceita "H:MM:SS.fff", "MM:SS.fff", vírgula ou ponto como separador
    da fração, e números simples de segundos.

    Raises:
        ValidationError: time code malformado ou negativo
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value) or value < 0:
            raise ValidationError(f"Invalid time value: {value!r}")
        return round(float(value), 3)

    if not isinstance(value, str):
        raise ValidationError(f"Invalid time code: {value!r}")

    text = value.strip()
    if _SECONDS_RE.match(text):
        return round(float(text.replace(",", ".")), 3)

    match = _CLOCK_RE.match(text)
    if not match:
        raise ValidationError(f"Invalid time code: {value!r}")

    hours, minutes, secs, fraction = match.groups()
    if int(secs) >= 60 or (hours is not None and int(minutes) >= 60):
        raise ValidationError(f"Invalid time code: {value!r}")

    total = int(hours or 0) * 3600 + int(minutes) * 60 + int(secs)
    if fraction:
        total += int(fraction) / (10 ** len(fraction))
    return round(total, 3)


def timecode_to_seconds(value) -> float:
    """Versão tolerante de parse_timecode: entrada inválida vira 0"""
    try:
        return parse_timecode(value)
    except ValidationError:
        return 0.0
