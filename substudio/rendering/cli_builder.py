# -*- coding: utf-8 -*-
"""
Construção de comandos FFmpeg a partir do plano de filtergraph
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..domain.errors import ValidationError
from ..domain.models.export import FilterGraphPlan
from ..infra.logging import get_logger
from ..infra.paths import ffmpeg_bin
from .expressions import format_number

VIDEO_CODEC = "libx264"
AUDIO_CODEC = "copy"  # Sem reencode de áudio

# Perfil -> (preset, crf). Contrato de saída: não alterar sem rever os testes
QUALITY_PRESETS: Dict[str, tuple] = {
    "high": ("superfast", 23),
    "medium": ("superfast", 28),
    "low": ("ultrafast", 32),
}
CUSTOM_PRESET = "superfast"


def encoder_params(
    quality: str,
    custom_bitrate: Optional[int] = None,
    vcodec: str = VIDEO_CODEC,
    acodec: str = AUDIO_CODEC,
) -> List[str]:
    """
    Parâmetros de encoder para o perfil de qualidade.

    "custom" usa bitrate fixo (kbps) com pico de 1.5x e buffer de 2x.

    Raises:
        ValidationError: perfil desconhecido ou "custom" sem bitrate
    """
    params = ["-c:v", vcodec]

    if quality == "custom":
        if not custom_bitrate or custom_bitrate <= 0:
            raise ValidationError("Quality 'custom' requires a positive bitrate")
        bitrate = int(custom_bitrate)
        params += [
            "-preset", CUSTOM_PRESET,
            "-b:v", f"{bitrate}k",
            "-maxrate", f"{format_number(bitrate * 1.5)}k",
            "-bufsize", f"{bitrate * 2}k",
        ]
    elif quality in QUALITY_PRESETS:
        preset, crf = QUALITY_PRESETS[quality]
        params += ["-preset", preset, "-crf", str(crf)]
    else:
        raise ValidationError(f"Unknown quality profile: {quality!r}")

    params += ["-c:a", acodec]
    return params


class CliBuilder:
    """Constrói comandos FFmpeg a partir do plano"""

    def __init__(self):
        self.logger = get_logger("CliBuilder")

    def make_command(self, plan: FilterGraphPlan, out_path: Union[str, Path]) -> List[str]:
        """Gera o comando FFmpeg completo de exportação"""
        self.logger.info("Construindo comando FFmpeg para %d inputs", len(plan.inputs))

        cmd = [ffmpeg_bin(), "-y"]
        for input_name in plan.inputs:
            cmd.extend(["-i", str(input_name)])

        if plan.graph_expression:
            cmd.extend(["-filter_complex", plan.graph_expression])

        for mapping in plan.output_mapping:
            cmd.extend(["-map", mapping])

        cmd.extend(plan.subtitle_params)
        cmd.extend(plan.encoder_params)
        cmd.append(str(out_path))

        self.logger.debug("Comando FFmpeg: %s", " ".join(map(str, cmd)))
        return cmd

    def make_preview_command(self, plan: FilterGraphPlan, time: float, image_name: str) -> List[str]:
        """Comando que captura um único quadro em `time` com os filtros aplicados"""
        # -copyts mantém o relógio original para o filtro de legendas e o enable
        cmd = [ffmpeg_bin(), "-y", "-ss", format_number(time), "-copyts", "-i", plan.inputs[0], "-frames:v", "1"]

        if plan.graph_expression:
            cmd.extend(["-filter_complex", plan.graph_expression, "-map", f"[{plan.output_label}]"])

        cmd.append(image_name)
        self.logger.debug("Comando de prévia: %s", " ".join(map(str, cmd)))
        return cmd

    def make_extract_command(self, input_name: str, stream_index: int, output_name: str) -> List[str]:
        """Converte uma faixa de legenda embutida em SRT"""
        cmd = [ffmpeg_bin(), "-y", "-i", input_name, "-map", f"0:{stream_index}", output_name]
        self.logger.debug("Comando de extração: %s", " ".join(map(str, cmd)))
        return cmd
