# -*- coding: utf-8 -*-
"""
Testes unitários para leitura e escrita de SRT, WebVTT e ASS
"""

import pytest

from substudio.domain.errors import ValidationError
from substudio.domain.models.subtitle import CueStyle, Subtitle, SubtitleStyle
from substudio.rendering.subtitle_formats import (
    SubtitleFormat,
    format_subtitles,
    load_subtitles,
    parse_subtitles,
    save_subtitles,
)

SAMPLE = [
    Subtitle(1.0, 2.5, "Hello"),
    Subtitle(3.123, 4.987, "Two\nlines"),
    Subtitle(3601.001, 3602.0, "Late"),
]


def test_format_srt():
    """Testa escrita de SRT"""
    content = format_subtitles(SAMPLE[:2], SubtitleFormat.SRT)

    assert content == (
        "1\n00:00:01,000 --> 00:00:02,500\nHello\n\n"
        "2\n00:00:03,123 --> 00:00:04,987\nTwo\nlines\n"
    )


def test_format_vtt():
    """Testa escrita de WebVTT"""
    content = format_subtitles(SAMPLE[:1], SubtitleFormat.VTT)

    assert content == "WEBVTT\n\n00:00:01.000 --> 00:00:02.500\nHello\n"


def test_format_skips_empty_text_and_uses_mode():
    """Testa que legendas sem texto no modo pedido são omitidas"""
    subs = [Subtitle(0, 1, "a", "x"), Subtitle(1, 2, "", "y")]

    srt_main = format_subtitles(subs, SubtitleFormat.SRT, mode="main")
    srt_dual = format_subtitles(subs, SubtitleFormat.SRT, mode="dual")

    assert srt_main.count("-->") == 1
    assert "x\na" in srt_dual
    assert srt_dual.count("-->") == 2


@pytest.mark.parametrize("fmt", [SubtitleFormat.SRT, SubtitleFormat.VTT])
def test_round_trip_millisecond_precision(fmt):
    """Testa ida e volta sem perdas em milissegundos"""
    parsed = parse_subtitles(format_subtitles(SAMPLE, fmt), fmt)

    assert parsed == SAMPLE


@pytest.mark.parametrize("fmt", [SubtitleFormat.SRT, SubtitleFormat.VTT])
def test_blank_lines_inside_cue_are_not_block_breaks(fmt):
    """Testa que linhas em branco no texto não partem a legenda em dois blocos"""
    subs = [Subtitle(0, 1, "linha1\n\nlinha2"), Subtitle(1, 2, "b"), Subtitle(2, 3, "  \n\n")]

    parsed = parse_subtitles(format_subtitles(subs, fmt), fmt)

    assert [item.text for item in parsed] == ["linha1\nlinha2", "b"]
    assert [(item.start_time, item.end_time) for item in parsed] == [(0, 1), (1, 2)]


def test_ass_round_trip_centisecond_precision():
    """Testa ida e volta ASS em tempos múltiplos de centésimo"""
    subs = [Subtitle(1.0, 2.5, "Hello, world"), Subtitle(61.25, 62.01, "Two\nlines")]
    parsed = parse_subtitles(format_subtitles(subs, SubtitleFormat.ASS), SubtitleFormat.ASS)

    assert parsed == subs


def test_ass_dual_mode_recovers_both_texts():
    """Testa leitura do modo dual (secundário acima do principal)"""
    subs = [Subtitle(0, 1, "main", "sec")]
    content = format_subtitles(subs, SubtitleFormat.ASS, style=SubtitleStyle(), mode="dual")

    parsed = parse_subtitles(content, SubtitleFormat.ASS)
    assert parsed[0].text == "main"
    assert parsed[0].text2 == "sec"


def test_ass_position_is_read_back():
    """Testa leitura da posição absoluta"""
    subs = [Subtitle(0, 1, "t", style=CueStyle(x=100, y=200, color="#ff0000"))]
    parsed = parse_subtitles(format_subtitles(subs, SubtitleFormat.ASS), SubtitleFormat.ASS)

    assert parsed[0].style == CueStyle(x=100, y=200)
    assert parsed[0].text == "t"


def test_parse_ass_requires_format_line():
    """Testa rejeição de eventos ASS sem linha Format"""
    content = "[Events]\nDialogue: 0,0:00:00.00,0:00:01.00,Default,,0,0,0,,x\n"
    with pytest.raises(ValidationError):
        parse_subtitles(content, SubtitleFormat.ASS)


def test_parse_srt_tolerates_bom_crlf_and_missing_index():
    """Testa SRT com BOM, CRLF e sem numeração"""
    content = "\ufeff1\r\n00:00:01,000 --> 00:00:02,000\r\nOi\r\n\r\n00:00:03,000 --> 00:00:04,000\r\nTchau\r\n"
    parsed = parse_subtitles(content, SubtitleFormat.SRT)

    assert parsed == [Subtitle(1, 2, "Oi"), Subtitle(3, 4, "Tchau")]


def test_parse_srt_rejects_malformed_time():
    """Testa rejeição de time code inválido"""
    with pytest.raises(ValidationError):
        parse_subtitles("1\n00:00:99,000 --> 00:01:00,000\nx\n", SubtitleFormat.SRT)
    with pytest.raises(ValidationError):
        parse_subtitles("1\nsem tempo\n", SubtitleFormat.SRT)


def test_parse_vtt_skips_metadata_blocks_and_settings():
    """Testa WebVTT com blocos NOTE/STYLE e configurações de cue"""
    content = (
        "WEBVTT - legenda\n\n"
        "NOTE comentário\n\n"
        "STYLE\n::cue { color: red }\n\n"
        "intro\n00:01.000 --> 00:02.500 align:start line:90%\nOlá\n"
    )
    assert parse_subtitles(content, SubtitleFormat.VTT) == [Subtitle(1, 2.5, "Olá")]


def test_parse_vtt_requires_header():
    """Testa rejeição de WebVTT sem cabeçalho"""
    with pytest.raises(ValidationError):
        parse_subtitles("00:01.000 --> 00:02.000\nx\n", SubtitleFormat.VTT)


def test_format_from_path():
    """Testa seleção de formato pela extensão"""
    assert SubtitleFormat.from_path("a.SRT") is SubtitleFormat.SRT
    assert SubtitleFormat.from_path("a.vtt") is SubtitleFormat.VTT
    assert SubtitleFormat.from_path("a.ssa") is SubtitleFormat.ASS
    with pytest.raises(ValidationError):
        SubtitleFormat.from_path("a.txt")


def test_save_and_load(tmp_path):
    """Testa gravação e leitura de arquivo"""
    path = save_subtitles(SAMPLE, tmp_path / "out.vtt")

    assert path.exists()
    assert load_subtitles(path) == SAMPLE
