# -*- coding: utf-8 -*-
"""
Testes unitários para os modelos de domínio
"""

import dataclasses

import pytest

from substudio.domain.errors import ValidationError
from substudio.domain.models.export import (
    CancellationToken,
    EraserRegion,
    EraserSettings,
    FilterGraphPlan,
    JobResult,
    JobStatus,
)
from substudio.domain.models.history import DEFAULT_HISTORY_LIMIT, EditHistory
from substudio.domain.models.subtitle import CueStyle, Subtitle, SubtitleStyle


def test_subtitle_creation():
    """Testa criação de legenda"""
    sub = Subtitle(start_time=1.0, end_time=2.5, text="Olá", text2="Hello")

    assert sub.start_time == 1.0
    assert sub.end_time == 2.5
    assert sub.text == "Olá"
    assert sub.text2 == "Hello"
    assert sub.style.is_empty
    assert sub.is_valid
    assert sub.duration == 1.5
    assert sub.midpoint == 1.75


def test_subtitle_is_immutable():
    """Testa que a legenda é um objeto de valor imutável"""
    sub = Subtitle(0, 1, "a")

    with pytest.raises(dataclasses.FrozenInstanceError):
        sub.text = "b"

    changed = sub.replace(text="b")
    assert changed is not sub
    assert sub.text == "a"
    assert changed.text == "b"


def test_subtitle_clamps_invalid_times():
    """Testa que tempos negativos ou não finitos viram 0"""
    assert Subtitle(-1, 2).start_time == 0
    assert Subtitle(float("inf"), 1).start_time == 0
    assert Subtitle(1, float("nan")).end_time == 0


def test_subtitle_normalizes_to_milliseconds():
    """Testa normalização para precisão de milissegundo"""
    sub = Subtitle(1.2344, 2.0001)

    assert sub.start_time == 1.234
    assert sub.end_time == 2.0


@pytest.mark.parametrize("start,end", [(2, 1), (1, 1), (0, 0)])
def test_illegal_subtitle_is_flagged_not_repaired(start, end):
    """Testa que legendas com início >= fim são sinalizadas e mantidas"""
    sub = Subtitle(start, end, "x")

    assert not sub.is_valid
    assert sub.start_time == start
    assert sub.end_time == end


def test_subtitle_from_dict_variants():
    """Testa criação a partir dos formatos de dicionário aceitos"""
    camel = Subtitle.from_dict({"startTime": 1, "endTime": 2, "text": "a", "style": {"fontSize": 20}})
    clock = Subtitle.from_dict({"start": "00:00:01,500", "end": "00:00:02.000", "text": "b"})
    snake = Subtitle.from_dict({"start_time": 3, "end_time": 4, "text2": None})

    assert camel.start_time == 1 and camel.end_time == 2
    assert camel.style.font_size == 20
    assert clock.start_time == 1.5 and clock.end_time == 2.0
    assert snake.text2 == ""


def test_subtitle_dict_round_trip():
    """Testa ida e volta to_dict/from_dict"""
    sub = Subtitle(0.5, 1.25, "a", "b", CueStyle(color="#ff0000", x=10, y=20))

    assert Subtitle.from_dict(sub.to_dict()) == sub
    assert sub.to_dict()["style"] == {"color": "#ff0000", "x": 10, "y": 20}


def test_text_for_display_modes():
    """Testa o texto resolvido por modo de exibição"""
    sub = Subtitle(0, 1, "main", "secondary")

    assert sub.text_for("main") == "main"
    assert sub.text_for("secondary") == "secondary"
    assert sub.text_for("dual") == "secondary\nmain"
    assert Subtitle(0, 1, "only").text_for("dual") == "only"


def test_cue_style_position_requires_both_coordinates():
    """Testa que a posição só vale com x e y presentes"""
    assert not CueStyle(x=5).has_position
    assert CueStyle(x=5, y=0).has_position


def test_subtitle_style_defaults():
    """Testa os valores padrão do estilo global"""
    style = SubtitleStyle()

    assert style.color == "#ffffff"
    assert style.background_color == "rgba(0, 0, 0, 0.6)"
    assert style.font_size == 30
    assert style.bottom == 50
    assert SubtitleStyle.from_dict({"fontSize": 40, "unknown": 1}).font_size == 40


def test_eraser_region():
    """Testa região de apagamento"""
    assert EraserRegion(0, 0, 0, 10).is_empty
    assert EraserRegion(0, 0, 10, -1).is_empty
    assert not EraserRegion(0, 0, 1, 1).is_empty
    assert EraserRegion(0, 0, 0.4, 10).is_empty
    assert not EraserRegion(0, 0, 0.5, 10).is_empty
    assert EraserRegion(10.5, 2.5, 99.4, -0.5).rounded() == (11, 3, 99, -1)


def test_eraser_strength_range():
    """Testa validação da intensidade de apagamento"""
    assert EraserSettings(strength=0).strength == 0
    assert EraserSettings(strength=100).strength == 100
    with pytest.raises(ValidationError):
        EraserSettings(strength=101)
    with pytest.raises(ValidationError):
        EraserSettings(strength=-1)


def test_filter_graph_plan_burns_subtitles():
    """Testa detecção de legendas queimadas no plano"""
    assert not FilterGraphPlan().burns_subtitles
    assert FilterGraphPlan(graph_expression="[0:v]subtitles=a.ass[outv]").burns_subtitles


def test_job_result_and_cancellation():
    """Testa token de cancelamento e resultado de job"""
    token = CancellationToken()
    assert not token.cancelled
    token.cancel()
    assert token.cancelled

    result = JobResult(JobStatus.CANCELLED, [b"frame"])
    assert result.cancelled
    assert result.outputs == [b"frame"]
    assert not JobResult(JobStatus.COMPLETED).cancelled


class TestEditHistory:
    """Testes para a pilha de desfazer"""

    def test_push_and_pop(self):
        history = EditHistory()
        history.push([Subtitle(0, 1, "a")])
        history.push([Subtitle(0, 1, "b")])

        assert len(history) == 2
        assert history.pop()[0].text == "b"
        assert history.pop()[0].text == "a"
        assert history.pop() is None

    def test_snapshot_is_copied(self):
        history = EditHistory()
        snapshot = [Subtitle(0, 1, "a")]
        history.push(snapshot)
        snapshot.append(Subtitle(1, 2, "b"))

        assert len(history.pop()) == 1

    def test_never_exceeds_limit_and_evicts_oldest(self):
        history = EditHistory()
        assert history.limit == DEFAULT_HISTORY_LIMIT == 1000

        for i in range(1005):
            history.push([Subtitle(i, i + 1, str(i))])

        assert len(history) == 1000
        popped = []
        while True:
            snapshot = history.pop()
            if snapshot is None:
                break
            popped.append(snapshot[0].text)

        assert popped[0] == "1004"
        assert popped[-1] == "5"
        assert "4" not in popped

    def test_clear(self):
        history = EditHistory(limit=3)
        history.push([])
        history.clear()

        assert len(history) == 0
        assert history.pop() is None

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            EditHistory(limit=0)
