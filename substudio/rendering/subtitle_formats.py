# -*- coding: utf-8 -*-
"""
substudio/rendering/subtitle_formats.py
Leitura e escrita de arquivos de legenda (SRT, WebVTT e ASS).

Os três formatos compartilham o mesmo pipeline de tempo
(seconds_to_timecode / parse_timecode) e diferem apenas na variante.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..domain.errors import ValidationError
from ..domain.models.subtitle import CueStyle, DisplayMode, Subtitle, SubtitleStyle
from ..domain.models.timecode import parse_timecode, seconds_to_timecode
from ..infra.logging import get_logger
from .ass_compiler import DUAL_SPACER, compile_markup

logger = get_logger("SubtitleFormats")

_ARROW_RE = re.compile(r"^\s*(\S+)\s*-->\s*(\S+)")
_TAG_RE = re.compile(r"\{[^}]*\}")
_POS_RE = re.compile(r"\\pos\(\s*(-?[\d.]+)\s*,\s*(-?[\d.]+)\s*\)")
_VTT_SKIP_BLOCKS = ("NOTE", "STYLE", "REGION")


class SubtitleFormat(Enum):
    SRT = "srt"
    VTT = "vtt"
    ASS = "ass"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SubtitleFormat":
        suffix = Path(path).suffix.lower().lstrip(".")
        if suffix == "ssa":
            return cls.ASS
        try:
            return cls(suffix)
        except ValueError:
            raise ValidationError(f"Unsupported subtitle format: {Path(path).name}") from None


def _blocks(text: str) -> List[List[str]]:
    """Separa o conteúdo em blocos delimitados por linhas em branco"""
    normalized = text.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
    return [block.split("\n") for block in re.split(r"\n\s*\n", normalized.strip()) if block.strip()]


def _cue_text(text: str) -> str:
    """Remove linhas em branco internas: em SRT/VTT elas encerram o bloco"""
    return "\n".join(line for line in text.splitlines() if line.strip())


def _format_cues(subtitles: Sequence[Subtitle], variant: str, mode: DisplayMode) -> List[Tuple[str, str, str]]:
    cues = []
    for item in subtitles:
        text = _cue_text(item.text_for(mode))
        if not text:
            continue
        start = seconds_to_timecode(item.start_time, variant)
        end = seconds_to_timecode(item.end_time, variant)
        cues.append((start, end, text))
    return cues


def format_srt(subtitles: Sequence[Subtitle], mode: DisplayMode = "main") -> str:
    blocks = [
        f"{number}\n{start} --> {end}\n{text}"
        for number, (start, end, text) in enumerate(_format_cues(subtitles, "srt", mode), start=1)
    ]
    return "\n\n".join(blocks) + "\n" if blocks else ""


def format_vtt(subtitles: Sequence[Subtitle], mode: DisplayMode = "main") -> str:
    blocks = ["WEBVTT"]
    blocks.extend(f"{start} --> {end}\n{text}" for start, end, text in _format_cues(subtitles, "vtt", mode))
    return "\n\n".join(blocks) + "\n"


def _parse_timed_block(lines: List[str]) -> Optional[Subtitle]:
    """Bloco SRT/VTT: identificador opcional, linha de tempo e texto"""
    for position, line in enumerate(lines):
        match = _ARROW_RE.match(line)
        if match:
            # Configurações de cue do VTT (align:, line:...) são ignoradas
            start, end = (parse_timecode(value) for value in match.groups())
            text = "\n".join(lines[position + 1:]).strip()
            return Subtitle(start_time=start, end_time=end, text=text)
    return None


def parse_srt(content: str) -> List[Subtitle]:
    subtitles = []
    for lines in _blocks(content):
        item = _parse_timed_block(lines)
        if item is None:
            raise ValidationError(f"Invalid SRT block: {lines[0]!r}")
        subtitles.append(item)
    return subtitles


def parse_vtt(content: str) -> List[Subtitle]:
    blocks = _blocks(content)
    if not blocks or not blocks[0][0].startswith("WEBVTT"):
        raise ValidationError("Missing WEBVTT header")

    subtitles = []
    for lines in blocks[1:]:
        if lines[0].split(" ")[0] in _VTT_SKIP_BLOCKS:
            continue
        item = _parse_timed_block(lines)
        if item is not None:
            subtitles.append(item)
    return subtitles


def _split_dialogue(line: str, fields: List[str]) -> Dict[str, str]:
    values = line.split(":", 1)[1].lstrip().split(",", len(fields) - 1)
    if len(values) != len(fields):
        raise ValidationError(f"Invalid ASS dialogue: {line!r}")
    return {name: value.strip() for name, value in zip(fields, values)}


def _plain_text(markup: str) -> str:
    return _TAG_RE.sub("", markup).replace("\\N", "\n").replace("\\n", "\n").replace("\\h", " ")


def parse_ass(content: str) -> List[Subtitle]:
    """
    Lê os eventos Dialogue de um documento ASS/SSA.

    Diretivas {...} são removidas; \\pos vira posição da legenda e o
    espaçador do modo dual separa texto secundário (acima) e principal.
    """
    fields: Optional[List[str]] = None
    in_events = False
    subtitles = []

    for raw in content.lstrip("\ufeff").splitlines():
        line = raw.strip()
        if line.startswith("["):
            in_events = line.lower() == "[events]"
            continue
        if not in_events:
            continue
        if line.startswith("Format:"):
            fields = [name.strip().lower() for name in line[len("Format:"):].split(",")]
            continue
        if not line.startswith("Dialogue:"):
            continue
        if not fields or "start" not in fields or "end" not in fields or "text" not in fields:
            raise ValidationError("ASS events section without a valid Format line")

        values = _split_dialogue(line, fields)
        markup = values["text"]

        style = CueStyle()
        position = _POS_RE.search(markup)
        if position:
            style = CueStyle(x=float(position.group(1)), y=float(position.group(2)))

        text2 = ""
        if DUAL_SPACER in markup:
            secondary, markup = markup.split(DUAL_SPACER, 1)
            text2 = _plain_text(secondary).strip()

        subtitles.append(
            Subtitle(
                start_time=parse_timecode(values["start"]),
                end_time=parse_timecode(values["end"]),
                text=_plain_text(markup).strip(),
                text2=text2,
                style=style,
            )
        )

    return subtitles


def format_subtitles(
    subtitles: Sequence[Subtitle],
    fmt: SubtitleFormat,
    style: Optional[SubtitleStyle] = None,
    resolution: Optional[Tuple[int, int]] = None,
    mode: DisplayMode = "main",
) -> str:
    """Serializa a lista no formato pedido"""
    if fmt is SubtitleFormat.SRT:
        return format_srt(subtitles, mode)
    if fmt is SubtitleFormat.VTT:
        return format_vtt(subtitles, mode)
    return compile_markup(subtitles, style, resolution, mode)


def parse_subtitles(content: str, fmt: SubtitleFormat) -> List[Subtitle]:
    """
    Converte o conteúdo de um arquivo em lista de legendas.

    Raises:
        ValidationError: conteúdo malformado (time code, cabeçalho, bloco)
    """
    parsers = {
        SubtitleFormat.SRT: parse_srt,
        SubtitleFormat.VTT: parse_vtt,
        SubtitleFormat.ASS: parse_ass,
    }
    subtitles = parsers[fmt](content)
    logger.debug("%d legendas lidas (%s)", len(subtitles), fmt.value)
    return subtitles


def load_subtitles(path: Union[str, Path]) -> List[Subtitle]:
    path = Path(path)
    return parse_subtitles(path.read_text(encoding="utf-8-sig"), SubtitleFormat.from_path(path))


def save_subtitles(
    subtitles: Sequence[Subtitle],
    path: Union[str, Path],
    style: Optional[SubtitleStyle] = None,
    resolution: Optional[Tuple[int, int]] = None,
    mode: DisplayMode = "main",
) -> Path:
    path = Path(path)
    content = format_subtitles(subtitles, SubtitleFormat.from_path(path), style, resolution, mode)
    path.write_text(content, encoding="utf-8")
    logger.info("Legendas salvas em %s", path)
    return path
