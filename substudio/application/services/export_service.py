# -*- coding: utf-8 -*-
"""
substudio/application/services/export_service.py
Serviço de exportação: arquivos de legenda, vídeo (queimado ou embutido),
prévia de quadros e extração de faixas de legenda embutidas
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from ...domain.errors import EngineError, ResourceError, ValidationError
from ...domain.models.export import CancellationToken, EraserSettings, FilterGraphPlan, JobResult, RenderSettings
from ...domain.models.subtitle import DisplayMode, Subtitle, SubtitleStyle
from ...infra.fonts import FontStore, resolve_font
from ...infra.logging import get_logger
from ...infra.media_io import MediaIO, SubtitleStream
from ...rendering.ass_compiler import compile_markup
from ...rendering.engine import TranscodeEngine
from ...rendering.graph_builder import compile_filter_graph
from ...rendering.intervals import Interval
from ...rendering.runner import Progress
from ...rendering.subtitle_formats import format_srt, parse_srt, save_subtitles

BURN_SUBTITLE_NAME = "subtitle.ass"
SOFT_SUBTITLE_NAME = "subtitle.srt"  # mov_text aceita SRT sem perdas de texto


@dataclass
class VideoExportRequest:
    """Requisição de exportação de vídeo com legendas e apagamento"""

    video_path: Path
    output_path: Optional[Path] = None
    subtitles: List[Subtitle] = field(default_factory=list)
    style: Optional[SubtitleStyle] = None
    mode: DisplayMode = "main"
    eraser: EraserSettings = field(default_factory=EraserSettings)
    render: RenderSettings = field(default_factory=RenderSettings)


@dataclass
class ExtractedTrack:
    """Faixa de legenda extraída do contêiner"""

    stream: SubtitleStream
    subtitles: List[Subtitle]


@dataclass
class _PreparedJob:
    plan: FilterGraphPlan
    subtitle: Optional[bytes] = None
    subtitle_name: str = BURN_SUBTITLE_NAME
    fonts: Dict[str, bytes] = field(default_factory=dict)


class ExportService:
    """Orquestra compiladores e motor de transcodificação"""

    def __init__(
        self,
        engine: Optional[TranscodeEngine] = None,
        media_io: Optional[MediaIO] = None,
        font_store: Optional[FontStore] = None,
    ):
        self.logger = get_logger("ExportService")
        self.font_store = font_store or FontStore()
        self.engine = engine or TranscodeEngine(font_store=self.font_store)
        self.media_io = media_io or MediaIO()

    def export_subtitles(
        self,
        subtitles: Sequence[Subtitle],
        path: Path,
        style: Optional[SubtitleStyle] = None,
        mode: DisplayMode = "main",
        video_path: Optional[Path] = None,
    ) -> Path:
        """Salva as legendas no formato indicado pela extensão do arquivo"""
        resolution = self.media_io.get_video_dimensions(video_path) if video_path else None
        return save_subtitles(subtitles, path, style, resolution, mode)

    def _fonts_for(self, subtitles: Sequence[Subtitle], style: SubtitleStyle) -> Dict[str, bytes]:
        """Carrega cada fonte empacotada referenciada pelo estilo global ou por legenda"""
        names = {resolve_font(style.font_family)}
        names.update(resolve_font(item.style.font_family) for item in subtitles if item.style.font_family)

        fonts: Dict[str, bytes] = {}
        for name in sorted(names):
            fonts.update(self.font_store.load(name))
        return fonts

    @staticmethod
    def _smart_ranges(request: VideoExportRequest) -> Optional[List[Interval]]:
        if not request.eraser.smart:
            return None
        # Legendas ilegais não delimitam trecho algum
        return [(item.start_time, item.end_time) for item in request.subtitles if item.is_valid]

    def _prepare(self, request: VideoExportRequest, soft_embed: bool) -> _PreparedJob:
        if not Path(request.video_path).exists():
            raise ResourceError(str(request.video_path), "source video not found")

        style = request.style or SubtitleStyle()
        render = request.render
        with_subtitles = bool(request.subtitles) and (render.burn or render.soft_embed)

        subtitle = None
        fonts: Dict[str, bytes] = {}
        subtitle_name = SOFT_SUBTITLE_NAME if soft_embed else BURN_SUBTITLE_NAME
        if with_subtitles and soft_embed:
            subtitle = format_srt(request.subtitles, request.mode)
        elif with_subtitles:
            resolution = self.media_io.get_video_dimensions(Path(request.video_path))
            subtitle = compile_markup(request.subtitles, style, resolution, request.mode)
            fonts = self._fonts_for(request.subtitles, style)

        plan = compile_filter_graph(
            region=request.eraser.region,
            strength=request.eraser.strength,
            smart_cue_times=self._smart_ranges(request),
            markup=subtitle,
            resolution_mode=render.resolution,
            quality=render.quality,
            soft_embed=soft_embed,
            custom_bitrate=render.custom_bitrate,
            subtitle_name=subtitle_name,
            vcodec=render.vcodec,
            acodec=render.acodec,
        )

        return _PreparedJob(
            plan=plan,
            subtitle=subtitle.encode("utf-8") if subtitle is not None else None,
            subtitle_name=subtitle_name,
            fonts=fonts,
        )

    def export_video(self, request: VideoExportRequest) -> Path:
        """
        Exporta o vídeo com legendas queimadas ou embutidas.

        Raises:
            ResourceError: vídeo de origem ou fonte ausente
            ValidationError: configuração de exportação inválida
            EngineError: falha do FFmpeg
        """
        if request.output_path is None:
            raise ValidationError("Video export requires an output path")

        self.logger.info(
            "Iniciando exportação: origem=%s, saída=%s, legendas=%d, modo=%s",
            request.video_path,
            request.output_path,
            len(request.subtitles),
            request.mode,
        )
        job = self._prepare(request, soft_embed=request.render.soft_embed)
        data = self.engine.transcode(
            job.plan,
            Path(request.video_path).read_bytes(),
            subtitle=job.subtitle,
            fonts=job.fonts,
            subtitle_name=job.subtitle_name,
        )

        output_path = Path(request.output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
        self.logger.info("Vídeo exportado: %s", output_path)
        return output_path

    def preview(
        self,
        request: VideoExportRequest,
        times: Sequence[float],
        cancel_token: Optional[CancellationToken] = None,
        on_progress: Optional[Callable[[Progress], None]] = None,
    ) -> JobResult:
        """Quadros JPEG nos instantes pedidos, sempre com legendas queimadas"""
        job = self._prepare(request, soft_embed=False)
        return self.engine.capture_frames(
            job.plan,
            Path(request.video_path).read_bytes(),
            times,
            subtitle=job.subtitle,
            fonts=job.fonts,
            subtitle_name=job.subtitle_name,
            cancel_token=cancel_token,
            on_progress=on_progress,
        )

    def preview_cue(self, request: VideoExportRequest, index: int) -> JobResult:
        """Prévia de um quadro no ponto médio da legenda `index`"""
        if not 0 <= index < len(request.subtitles):
            raise ValidationError(f"No subtitle at index {index}")
        return self.preview(request, [request.subtitles[index].midpoint])

    def extract_embedded_subtitles(self, video_path: Path) -> List[ExtractedTrack]:
        """
        Extrai cada faixa de legenda do contêiner como lista de legendas.

        Faixas que falham ou saem vazias são ignoradas com aviso.
        """
        video_path = Path(video_path)
        if not video_path.exists():
            raise ResourceError(str(video_path), "source video not found")

        streams = self.media_io.list_subtitle_streams(video_path)
        if not streams:
            return []

        source = video_path.read_bytes()
        tracks = []
        for stream in streams:
            try:
                content = self.engine.extract_subtitle_stream(source, stream.index)
                subtitles = parse_srt(content)
            except (EngineError, ValidationError) as e:
                self.logger.warning("Falha ao extrair faixa %d (%s): %s", stream.index, stream.codec, e)
                continue

            if not subtitles:
                self.logger.warning("Faixa %d está vazia", stream.index)
                continue
            tracks.append(ExtractedTrack(stream, subtitles))

        return tracks
