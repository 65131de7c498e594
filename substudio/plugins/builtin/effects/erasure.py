# -*- coding: utf-8 -*-
"""
substudio/plugins/builtin/effects/erasure.py
Efeitos de apagamento de uma região do vídeo (legenda/logo queimados na origem)
"""

from typing import Mapping, Union

from ....domain.models.effects import FilterContext, FilterSnippet
from ....domain.models.timecode import round_half_away
from ....infra.plugins import effect

BLUR_PASSES = 2  # Mais passadas = borrão mais suave e mais forte


def blur_radius(strength: float) -> int:
    """Intensidade 0-100 -> raio do boxblur (mínimo 1)"""
    return max(1, round_half_away(strength / 2.5))


class _RegionEffect:
    """Região já arredondada para pixels inteiros (EraserRegion.rounded)"""

    def __init__(self, params: Mapping[str, Union[int, float]]):
        self.x = int(params["x"])
        self.y = int(params["y"])
        self.w = int(params["w"])
        self.h = int(params["h"])
        self.strength = params.get("strength", 50)


@effect(
    "delogo",
    params={"x": "int", "y": "int", "w": "int", "h": "int"},
    description="Remove a região por interpolação dos pixels vizinhos",
)
class DelogoEffect(_RegionEffect):
    """Remoção (intensidade > 90)"""

    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        expr = (
            f"[{ctx.input_label}]delogo=x={self.x}:y={self.y}:w={self.w}:h={self.h}:show=0"
            f"{ctx.enable_option()}[{ctx.output_label}]"
        )
        return FilterSnippet(expr, ctx.output_label)


@effect(
    "boxblur",
    params={"x": "int", "y": "int", "w": "int", "h": "int", "strength": "float"},
    description="Borra apenas a região recortada e sobrepõe de volta no quadro",
)
class BoxBlurEffect(_RegionEffect):
    """Borrão (intensidade <= 90)"""

    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        radius = blur_radius(self.strength)
        # O enable fica no overlay: fora dos intervalos o quadro original passa intacto
        expr = ";".join([
            f"[{ctx.input_label}]split[main][to_blur]",
            f"[to_blur]crop={self.w}:{self.h}:{self.x}:{self.y},boxblur={radius}:{BLUR_PASSES}[blurred]",
            f"[main][blurred]overlay={self.x}:{self.y}{ctx.enable_option()}[{ctx.output_label}]",
        ])
        return FilterSnippet(expr, ctx.output_label)
