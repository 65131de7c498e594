# -*- coding: utf-8 -*-
"""
substudio/rendering/engine.py
Adaptador do motor de transcodificação: monta o diretório de trabalho do job
(vídeo, legenda, fontes + fonts.conf), executa o FFmpeg e devolve os bytes.
"""

import tempfile
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

from ..domain.errors import EngineError
from ..domain.models.export import CancellationToken, FilterGraphPlan, JobResult, JobStatus
from ..infra.fonts import FontStore
from ..infra.logging import get_logger
from .cli_builder import CliBuilder
from .graph_builder import DEFAULT_SUBTITLE_NAME
from .runner import Progress, Runner

OUTPUT_NAME = "output.mp4"


class TranscodeEngine:
    """Executa planos de filtergraph sobre bytes de mídia"""

    def __init__(self, runner: Optional[Runner] = None, font_store: Optional[FontStore] = None):
        self.logger = get_logger("TranscodeEngine")
        self.runner = runner or Runner()
        self.cli = CliBuilder()
        self.font_store = font_store or FontStore()

    def _prepare(
        self,
        work_dir: Path,
        plan: FilterGraphPlan,
        source: bytes,
        subtitle: Optional[bytes],
        subtitle_name: str,
        fonts: Optional[Mapping[str, bytes]],
    ) -> dict:
        """Grava as entradas do plano e retorna o ambiente do processo"""
        (work_dir / plan.inputs[0]).write_bytes(source)

        if subtitle is not None:
            (work_dir / subtitle_name).write_bytes(subtitle)

        env = {}
        # Fontes só interessam ao filtro subtitles (legenda queimada)
        if fonts and plan.burns_subtitles:
            conf_path = self.font_store.provision(work_dir, fonts)
            env["FONTCONFIG_FILE"] = str(conf_path)
        return env

    def transcode(
        self,
        plan: FilterGraphPlan,
        source: bytes,
        subtitle: Optional[bytes] = None,
        fonts: Optional[Mapping[str, bytes]] = None,
        subtitle_name: str = DEFAULT_SUBTITLE_NAME,
    ) -> bytes:
        """
        Exporta o vídeo segundo o plano.

        Raises:
            EngineError: falha do FFmpeg (stderr anexado) ou saída ausente
        """
        with tempfile.TemporaryDirectory(prefix="substudio_") as tmp:
            work_dir = Path(tmp)
            env = self._prepare(work_dir, plan, source, subtitle, subtitle_name, fonts)

            cmd = self.cli.make_command(plan, OUTPUT_NAME)
            self.runner.run(cmd, cwd=work_dir, env=env)

            output = work_dir / OUTPUT_NAME
            if not output.exists():
                raise EngineError("FFmpeg produced no output file")

            data = output.read_bytes()
            self.logger.info("Vídeo exportado: %d bytes", len(data))
            return data

    def capture_frames(
        self,
        plan: FilterGraphPlan,
        source: bytes,
        times: Sequence[float],
        subtitle: Optional[bytes] = None,
        fonts: Optional[Mapping[str, bytes]] = None,
        subtitle_name: str = DEFAULT_SUBTITLE_NAME,
        cancel_token: Optional[CancellationToken] = None,
        on_progress: Optional[Callable[[Progress], None]] = None,
    ) -> JobResult:
        """
        Captura um JPEG por instante pedido, com os filtros aplicados.

        O cancelamento é verificado após cada quadro; os quadros já
        capturados são mantidos no resultado.
        """
        frames = []
        with tempfile.TemporaryDirectory(prefix="substudio_") as tmp:
            work_dir = Path(tmp)
            env = self._prepare(work_dir, plan, source, subtitle, subtitle_name, fonts)

            for i, time in enumerate(times):
                image_name = f"output_{i}.jpg"
                self.runner.run(self.cli.make_preview_command(plan, time, image_name), cwd=work_dir, env=env)

                image = work_dir / image_name
                if not image.exists():
                    raise EngineError(f"FFmpeg produced no preview frame at {time}s")
                frames.append(image.read_bytes())
                image.unlink()

                if on_progress:
                    on_progress(Progress(ratio=(i + 1) / len(times), message=f"Prévia {i + 1}/{len(times)}"))

                if cancel_token is not None and cancel_token.cancelled:
                    self.logger.info("Prévia cancelada após %d de %d quadros", len(frames), len(times))
                    return JobResult(JobStatus.CANCELLED, frames)

        return JobResult(JobStatus.COMPLETED, frames)

    def extract_subtitle_stream(self, source: bytes, stream_index: int, input_name: str = "input.mp4") -> str:
        """Converte a faixa de legenda `stream_index` do contêiner em texto SRT"""
        with tempfile.TemporaryDirectory(prefix="substudio_") as tmp:
            work_dir = Path(tmp)
            (work_dir / input_name).write_bytes(source)

            output_name = f"track_{stream_index}.srt"
            self.runner.run(self.cli.make_extract_command(input_name, stream_index, output_name), cwd=work_dir)

            output = work_dir / output_name
            if not output.exists():
                raise EngineError(f"FFmpeg produced no subtitle file for stream {stream_index}")
            return output.read_text(encoding="utf-8-sig", errors="replace")

