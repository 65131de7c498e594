"""
main.py — Interface CLI do substudio
"""

import argparse
import logging
from pathlib import Path

from substudio.application.services.export_service import ExportService, VideoExportRequest
from substudio.domain.errors import SubStudioError
from substudio.domain.models.export import (
    QUALITY_PROFILES,
    RESOLUTION_MODES,
    EraserRegion,
    EraserSettings,
    RenderSettings,
)
from substudio.domain.models.subtitle import DISPLAY_MODES, SubtitleStyle
from substudio.infra.logging import setup_logging
from substudio.infra.settings import settings
from substudio.rendering.subtitle_formats import load_subtitles, save_subtitles


def parse_region(value: str) -> EraserRegion:
    """"x,y,w,h" -> EraserRegion"""
    try:
        x, y, w, h = (float(part) for part in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Região inválida: {value} (use x,y,w,h)")
    return EraserRegion(x, y, w, h)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Edição e exportação de legendas usando FFmpeg."
    )
    subparsers = parser.add_subparsers(dest="comando", required=True)

    # Conversão de formato
    converter = subparsers.add_parser("converter", help="Converte arquivo de legenda (srt, vtt, ass)")
    converter.add_argument("entrada", help="Arquivo de legenda de origem")
    converter.add_argument("saida", help="Arquivo de destino (formato pela extensão)")
    converter.add_argument("--modo", choices=DISPLAY_MODES, default="main", help="Texto exportado")
    converter.add_argument("--largura", type=int, default=1920, help="Largura do vídeo (ASS)")
    converter.add_argument("--altura", type=int, default=1080, help="Altura do vídeo (ASS)")

    # Exportação de vídeo
    exportar = subparsers.add_parser("exportar", help="Exporta vídeo com legendas")
    exportar.add_argument("--video", required=True, help="Vídeo de origem")
    exportar.add_argument("--saida", required=True, help="Arquivo de saída do vídeo")
    exportar.add_argument("--legendas", help="Arquivo de legenda (srt, vtt, ass)")
    exportar.add_argument("--modo", choices=DISPLAY_MODES, default="main", help="Texto exibido")
    exportar.add_argument("--embutir", action="store_true", help="Embute como faixa em vez de queimar")
    exportar.add_argument("--resolucao", choices=RESOLUTION_MODES, default="original")
    exportar.add_argument("--qualidade", choices=QUALITY_PROFILES, default="medium")
    exportar.add_argument("--bitrate", type=int, help="Bitrate em kbps (qualidade custom)")
    exportar.add_argument("--tamanho_fonte", type=float, default=30, help="Tamanho da fonte")
    exportar.add_argument("--fonte", default="Arial, Helvetica, sans-serif", help="Família da fonte (CSS)")
    exportar.add_argument("--cor", default="#ffffff", help="Cor do texto (CSS)")
    exportar.add_argument("--margem", type=int, default=50, help="Margem inferior em pixels")
    exportar.add_argument("--apagar", type=parse_region, help="Região a apagar: x,y,w,h")
    exportar.add_argument("--intensidade", type=float, default=50, help="Intensidade do apagamento (0-100)")
    exportar.add_argument(
        "--apagar_inteligente",
        action="store_true",
        help="Apaga somente enquanto houver legenda",
    )

    # Extração de faixas embutidas
    extrair = subparsers.add_parser("extrair", help="Extrai legendas embutidas para SRT")
    extrair.add_argument("--video", required=True, help="Vídeo de origem")
    extrair.add_argument("--pasta", default=".", help="Pasta de destino")

    return parser


def run_convert(args) -> Path:
    subtitles = load_subtitles(args.entrada)
    return save_subtitles(subtitles, args.saida, resolution=(args.largura, args.altura), mode=args.modo)


def run_export(args) -> Path:
    request = VideoExportRequest(
        video_path=Path(args.video).resolve(),
        output_path=Path(args.saida).resolve(),
        subtitles=load_subtitles(args.legendas) if args.legendas else [],
        style=SubtitleStyle(
            color=args.cor,
            font_size=args.tamanho_fonte,
            font_family=args.fonte,
            bottom=args.margem,
        ),
        mode=args.modo,
        eraser=EraserSettings(
            region=args.apagar,
            strength=args.intensidade,
            smart=args.apagar_inteligente,
        ),
        render=RenderSettings(
            resolution=args.resolucao,
            quality=args.qualidade,
            custom_bitrate=args.bitrate,
            soft_embed=args.embutir,
        ),
    )
    return ExportService().export_video(request)


def run_extract(args) -> Path:
    folder = Path(args.pasta)
    folder.mkdir(parents=True, exist_ok=True)
    tracks = ExportService().extract_embedded_subtitles(Path(args.video))
    for track in tracks:
        language = track.stream.language or "und"
        save_subtitles(track.subtitles, folder / f"track_{track.stream.index}_{language}.srt")
    print(f"{len(tracks)} faixa(s) extraída(s)")
    return folder


def main():
    parser = build_parser()
    args = parser.parse_args()

    # Setup logging
    setup_logging(settings.log_file, logging.DEBUG)

    commands = {"converter": run_convert, "exportar": run_export, "extrair": run_extract}
    try:
        result_path = commands[args.comando](args)
        print(f"✅ Concluído: {result_path}")
        return 0

    except SubStudioError as e:
        print(f"❌ Erro: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
