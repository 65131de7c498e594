# -*- coding: utf-8 -*-
"""
Redimensionamento final mantendo a proporção (largura par)
"""

from typing import Mapping

from ....domain.models.effects import FilterContext, FilterSnippet
from ....infra.plugins import effect


@effect("scale", params={"height": "int"}, description="Escala para a altura pedida")
class ScaleEffect:
    def __init__(self, params: Mapping[str, int]):
        self.height = int(params["height"])

    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        return FilterSnippet(f"[{ctx.input_label}]scale=-2:{self.height}[{ctx.output_label}]", ctx.output_label)
