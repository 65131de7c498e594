# -*- coding: utf-8 -*-
"""
substudio/plugins/builtin/effects/subtitle.py
Efeito para queimar legendas no vídeo usando o filtro subtitles (libass)
"""

from typing import Mapping

from ....domain.models.effects import FilterContext, FilterSnippet
from ....infra.plugins import effect
from ....rendering.expressions import escape_filter_path


@effect(
    "subtitles",
    params={"filename": "str", "fontsdir": "str"},
    description="Renderiza o documento ASS sobre o vídeo",
)
class SubtitleBurnEffect:
    """Legendas queimadas no vídeo"""

    def __init__(self, params: Mapping[str, str]):
        self.filename = params["filename"]
        self.fontsdir = params.get("fontsdir", "fonts")

    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        # fontsdir aponta para o diretório provisionado junto com o fonts.conf
        expr = (
            f"[{ctx.input_label}]subtitles={escape_filter_path(self.filename)}"
            f":fontsdir={escape_filter_path(self.fontsdir)}[{ctx.output_label}]"
        )
        return FilterSnippet(expr, ctx.output_label)
