# -*- coding: utf-8 -*-
"""
substudio/rendering/ass_compiler.py
Compila a lista de legendas + estilo global em um documento ASS
(Advanced SubStation Alpha) para queima ou embutir no vídeo
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from ..domain.models.subtitle import DisplayMode, Subtitle, SubtitleStyle
from ..domain.models.timecode import round_half_away, seconds_to_timecode
from ..infra.fonts import resolve_font
from ..infra.logging import get_logger
from .expressions import format_number

DEFAULT_RESOLUTION = (1920, 1080)
DEFAULT_COLOR = "&H00FFFFFF"

SECONDARY_SCALE = 0.8
# Linha transparente que reproduz o espaçamento vertical da pré-visualização
DUAL_SPACER = r"\N{\fs25\1a&HFF&} \N"
OUTLINE_WIDTH = 2.5
SHADOW_DEPTH = 1.5

STYLE_FORMAT = (
    "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, "
    "BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, "
    "BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, MarginV, Encoding"
)
EVENT_FORMAT = "Format: Layer, Start, End, Style, Actor, MarginL, MarginR, MarginV, Effect, Text"

_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+)\s*)?\)$", re.IGNORECASE
)
_ASS_COLOR_RE = re.compile(r"^&H([0-9A-F]{6}|[0-9A-F]{8})&?$", re.IGNORECASE)

_NAMED_COLORS = {
    "white": (255, 255, 255),
    "black": (0, 0, 0),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
}

logger = get_logger("AssCompiler")


def parse_css_color(color: Optional[str]) -> Optional[Tuple[int, int, int, int]]:
    """
    Converte uma cor CSS em (r, g, b, alpha_css) com alpha 0-255 (255 = opaco).

    Aceita #RGB, #RRGGBB, #RRGGBBAA, rgb(), rgba() e alguns nomes.
    Retorna None para cores não reconhecidas.
    """
    if not color:
        return None
    value = color.strip()

    if value.lower() in _NAMED_COLORS:
        return (*_NAMED_COLORS[value.lower()], 255)

    if value.startswith("#"):
        digits = value[1:]
        if len(digits) == 3:
            digits = "".join(char * 2 for char in digits)
        if len(digits) not in (6, 8):
            return None
        try:
            channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError:
            return None
        alpha = channels[3] if len(channels) == 4 else 255
        return channels[0], channels[1], channels[2], alpha

    match = _RGB_RE.match(value)
    if match:
        r, g, b = (min(int(channel), 255) for channel in match.groups()[:3])
        opacity = float(match.group(4)) if match.group(4) is not None else 1.0
        opacity = min(max(opacity, 0.0), 1.0)
        return r, g, b, round_half_away(opacity * 255)

    return None


def css_to_ass_color(color: Optional[str]) -> str:
    """
    Cor CSS -> "&HAABBGGRR".

    No ASS os canais ficam em ordem BGR e o alpha é invertido
    (00 = opaco, FF = transparente).
    """
    parsed = parse_css_color(color)
    if parsed is None:
        return DEFAULT_COLOR
    r, g, b, alpha = parsed
    return f"&H{255 - alpha:02X}{b:02X}{g:02X}{r:02X}"


def ass_to_css_color(value: str) -> str:
    """Inverso de css_to_ass_color: "#rrggbb" quando opaco, senão "rgba(...)" """
    match = _ASS_COLOR_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid ASS color: {value!r}")

    digits = match.group(1).rjust(8, "0")
    ass_alpha, b, g, r = (int(digits[i:i + 2], 16) for i in range(0, 8, 2))
    if ass_alpha == 0:
        return f"#{r:02x}{g:02x}{b:02x}"
    opacity = round((255 - ass_alpha) / 255, 2)
    return f"rgba({r}, {g}, {b}, {format_number(opacity)})"


def _inline_color(color: str) -> str:
    """Diretivas \\c (e \\1a se houver transparência) para uma cor CSS"""
    ass_color = css_to_ass_color(color)
    alpha, bgr = ass_color[2:4], ass_color[4:]
    directive = f"\\c&H{bgr}&"
    if alpha != "00":
        directive += f"\\1a&H{alpha}&"
    return directive


def _escape_text(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\n", "\\N")


def _header(style: SubtitleStyle, resolution: Tuple[int, int], mode: DisplayMode) -> List[str]:
    width = resolution[0] or DEFAULT_RESOLUTION[0]
    height = resolution[1] or DEFAULT_RESOLUTION[1]

    font_size = style.font_size
    if mode == "secondary":
        font_size = round_half_away(font_size * SECONDARY_SCALE)

    # Largura útil da prévia é 80%: margem lateral de 10% de cada lado
    margin_lr = round_half_away(width * 0.1)
    # +10px compensa o padding interno da caixa da prévia
    margin_v = round_half_away(style.bottom + 10)

    fields = [
        "Default",
        resolve_font(style.font_family),
        format_number(font_size),
        css_to_ass_color(style.color),
        "&H000000FF",
        css_to_ass_color(style.background_color),
        "&H00000000",
        "0", "0", "0", "0",
        "100", "100",
        format_number(style.letter_spacing),
        "0",
        "1",
        format_number(OUTLINE_WIDTH),
        format_number(SHADOW_DEPTH),
        "2",
        str(margin_lr), str(margin_lr), str(margin_v),
        "1",
    ]

    return [
        "[Script Info]",
        "Synch Point:1",
        "ScriptType:v4.00+",
        "Collisions:Normal",
        f"PlayResX: {width}",
        f"PlayResY: {height}",
        "ScaledBorderAndShadow: yes",
        "WrapStyle: 0",
        "",
        "[V4+ Styles]",
        STYLE_FORMAT,
        "Style: " + ", ".join(fields),
        "",
        "[Events]",
        EVENT_FORMAT,
    ]


def _dual_text(item: Subtitle, base_size: float) -> str:
    main_text = _escape_text(item.text)
    secondary_text = _escape_text(item.text2)
    if not main_text and not secondary_text:
        return ""

    main_size = round_half_away(item.style.font_size) if item.style.font_size else base_size
    secondary_size = round_half_away(main_size * SECONDARY_SCALE)

    main_size = format_number(main_size)
    if secondary_text and main_text:
        return f"{{\\fs{secondary_size}}}{secondary_text}{DUAL_SPACER}{{\\fs{main_size}}}{main_text}"
    if secondary_text:
        return f"{{\\fs{secondary_size}}}{secondary_text}"
    return f"{{\\fs{main_size}}}{main_text}"


def _overrides(item: Subtitle, mode: DisplayMode) -> str:
    style = item.style
    overrides = ""

    if style.has_position:
        overrides += f"\\pos({round_half_away(style.x)},{round_half_away(style.y)})"

    if style.color:
        overrides += _inline_color(style.color)

    # No modo dual o tamanho já foi aplicado dentro do texto
    if style.font_size and mode != "dual":
        size = round_half_away(style.font_size)
        if mode == "secondary":
            size = round_half_away(size * SECONDARY_SCALE)
        overrides += f"\\fs{size}"

    if style.font_family:
        overrides += f"\\fn{resolve_font(style.font_family)}"

    return overrides


def compile_dialogue(item: Subtitle, style: SubtitleStyle, mode: DisplayMode = "main") -> Optional[str]:
    """Linha Dialogue de uma legenda, ou None se o texto resolvido for vazio"""
    if mode == "dual":
        text = _dual_text(item, style.font_size)
    else:
        text = _escape_text(item.text_for(mode))

    if not text:
        return None

    overrides = _overrides(item, mode)
    if overrides:
        text = f"{{{overrides}}}{text}"

    start = seconds_to_timecode(item.start_time, "ass")
    end = seconds_to_timecode(item.end_time, "ass")
    return f"Dialogue: 0,{start},{end},Default,,0000,0000,0000,,{text}"


def compile_markup(
    subtitles: Sequence[Subtitle],
    style: Optional[SubtitleStyle] = None,
    resolution: Optional[Tuple[int, int]] = None,
    mode: DisplayMode = "main",
) -> str:
    """
    Gera o documento ASS completo.

    Args:
        subtitles: lista de legendas (ordem preservada)
        style: estilo global; sobrescritas por legenda viram diretivas inline
        resolution: (largura, altura) do vídeo de destino, em pixels
        mode: "main", "secondary" ou "dual"
    """
    style = style or SubtitleStyle()
    resolution = resolution or DEFAULT_RESOLUTION

    dialogues = [line for line in (compile_dialogue(item, style, mode) for item in subtitles) if line]

    logger.debug("Documento ASS gerado: %d de %d legendas, modo=%s", len(dialogues), len(subtitles), mode)
    return "\n".join(_header(style, resolution, mode) + dialogues) + "\n"
