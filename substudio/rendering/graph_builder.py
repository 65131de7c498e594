# -*- coding: utf-8 -*-
"""
Construção do filtergraph FFmpeg de exportação (apagamento, legendas e escala)
"""

from typing import Iterable, List, Mapping, Optional, Sequence

from ..domain.errors import ValidationError
from ..domain.models.effects import FilterContext
from ..domain.models.export import RESOLUTION_MODES, EraserRegion, FilterGraphPlan
from ..infra.logging import get_logger
from ..infra.plugins import plugin_registry
from ..infra.settings import settings
from ..plugins.builtin.effects import erasure, scale, subtitle  # noqa: F401  (registra os efeitos)
from .cli_builder import AUDIO_CODEC, VIDEO_CODEC, encoder_params
from .expressions import between_predicate
from .intervals import Interval, merge_intervals

VIDEO_INPUT = "input.mp4"
DEFAULT_SUBTITLE_NAME = "subtitle.ass"
DELOGO_THRESHOLD = 90  # Acima disso a região é removida em vez de borrada

RESOLUTION_HEIGHTS = {"1080p": 1080, "720p": 720, "480p": 480}

SOFT_SUBTITLE_CODEC = "mov_text"  # Único codec de texto portável em MP4
SOFT_SUBTITLE_LANGUAGE = "chi"


class FilterGraph:
    """Representa um filtergraph FFmpeg"""

    def __init__(self):
        self.filters: List[str] = []
        self.inputs: List[str] = []
        self.output_label: Optional[str] = None

    def add_input(self, input_name: str):
        """Adiciona um input ao comando"""
        self.inputs.append(input_name)

    def add_filter(self, filter_expr: str):
        """Adiciona um filtro ao graph"""
        self.filters.append(filter_expr)

    def to_string(self) -> Optional[str]:
        """Converte o filtergraph para string FFmpeg (None quando vazio)"""
        return ";".join(self.filters) if self.filters else None


class GraphBuilder:
    """Constrói o filtergraph a partir das opções de exportação"""

    def __init__(self, tolerance: Optional[float] = None):
        self.logger = get_logger("GraphBuilder")
        self.tolerance = settings.erase_merge_tolerance if tolerance is None else tolerance

    def build(
        self,
        region: Optional[EraserRegion] = None,
        strength: float = 50,
        smart_cue_times: Optional[Iterable[Interval]] = None,
        burn_subtitles: bool = False,
        resolution_mode: str = "original",
        subtitle_name: str = DEFAULT_SUBTITLE_NAME,
        fonts_dir: str = "fonts",
    ) -> FilterGraph:
        """
        Encadeia apagamento -> queima de legendas -> escala, nesta ordem.

        A escala fica por último para que as coordenadas absolutas (região
        apagada, \\pos das legendas) sejam da resolução original.
        """
        graph = FilterGraph()
        graph.add_input(VIDEO_INPUT)
        label = "0:v"

        if region is not None and not region.is_empty:
            label = self._apply_erasure(graph, label, region, strength, smart_cue_times)
        elif region is not None:
            self.logger.warning("Região de apagamento vazia ignorada: %s", region)

        if burn_subtitles:
            label = self._apply(
                graph, "subtitles", {"filename": subtitle_name, "fontsdir": fonts_dir}, label, "outv"
            )

        height = RESOLUTION_HEIGHTS.get(resolution_mode)
        if height:
            label = self._apply(graph, "scale", {"height": height}, label, "scaled")

        if graph.filters:
            graph.output_label = label

        self.logger.debug("Filtergraph construído: %s", graph.to_string())
        return graph

    def _apply_erasure(
        self,
        graph: FilterGraph,
        label: str,
        region: EraserRegion,
        strength: float,
        smart_cue_times: Optional[Iterable[Interval]],
    ) -> str:
        enable = ""
        if smart_cue_times:
            merged = merge_intervals(smart_cue_times, self.tolerance)
            enable = between_predicate(merged)
            self.logger.info("Apagamento inteligente em %d intervalos", len(merged))

        name = "delogo" if strength > DELOGO_THRESHOLD else "boxblur"
        x, y, w, h = region.rounded()
        params = {"x": x, "y": y, "w": w, "h": h, "strength": strength}
        return self._apply(graph, name, params, label, "v_erased", enable=enable)

    def _apply(self, graph: FilterGraph, name: str, params: Mapping, input_label: str, output_label: str, **ctx_params) -> str:
        effect = plugin_registry.create(name, params)
        snippet = effect.build_filter(FilterContext(input_label, output_label, **ctx_params))
        graph.add_filter(snippet.filter_expr)
        return snippet.output_label


def soft_subtitle_params(titled: bool) -> List[str]:
    """Codec, metadados e disposição da faixa de legenda embutida"""
    params = ["-c:s", SOFT_SUBTITLE_CODEC, "-metadata:s:s:0", f"language={SOFT_SUBTITLE_LANGUAGE}"]
    if titled:
        params += ["-metadata:s:s:0", "title=Subtitle"]
    params += ["-metadata:s:s:0", "handler_name=Subtitle", "-disposition:s:0", "default"]
    return params


def compile_filter_graph(
    region: Optional[EraserRegion],
    strength: float,
    smart_cue_times: Optional[Sequence[Interval]],
    markup: Optional[str],
    resolution_mode: str,
    quality: str,
    soft_embed: bool,
    custom_bitrate: Optional[int] = None,
    subtitle_name: str = DEFAULT_SUBTITLE_NAME,
    fonts_dir: str = "fonts",
    vcodec: str = VIDEO_CODEC,
    acodec: str = AUDIO_CODEC,
) -> FilterGraphPlan:
    """
    Monta o plano completo entregue ao FFmpeg.

    Args:
        region: região de apagamento em pixels do vídeo de origem (ou None)
        strength: intensidade 0-100 (> 90 remove, senão borra)
        smart_cue_times: intervalos (início, fim) das legendas; restringe o
            apagamento a esses trechos
        markup: documento de legenda; None = sem legendas
        resolution_mode: "original", "1080p", "720p" ou "480p"
        quality: "high", "medium", "low" ou "custom" (exige custom_bitrate)
        soft_embed: embute a legenda como faixa separada em vez de queimar
        subtitle_name: nome do arquivo de legenda no diretório do job
        vcodec, acodec: encoders de vídeo e áudio ("copy" preserva o áudio)

    Raises:
        ValidationError: resolução, qualidade ou intensidade inválidas
    """
    if resolution_mode not in RESOLUTION_MODES:
        raise ValidationError(f"Unknown resolution mode: {resolution_mode!r}")
    if not 0 <= strength <= 100:
        raise ValidationError(f"Eraser strength must be within [0, 100], got {strength}")
    encoder = encoder_params(quality, custom_bitrate, vcodec, acodec)

    has_subtitles = markup is not None
    graph = GraphBuilder().build(
        region=region,
        strength=strength,
        smart_cue_times=smart_cue_times,
        burn_subtitles=has_subtitles and not soft_embed,
        resolution_mode=resolution_mode,
        subtitle_name=subtitle_name,
        fonts_dir=fonts_dir,
    )

    video_map = f"[{graph.output_label}]" if graph.output_label else "0:v"
    plan = FilterGraphPlan(
        inputs=list(graph.inputs),
        graph_expression=graph.to_string(),
        output_label=graph.output_label,
        output_mapping=[video_map, "0:a?"],
        encoder_params=encoder,
    )

    if has_subtitles and soft_embed:
        plan.inputs.append(subtitle_name)
        plan.output_mapping.append("1:0")
        # Sem filtergraph a faixa também recebe título
        plan.subtitle_params = soft_subtitle_params(titled=graph.output_label is None)

    return plan
