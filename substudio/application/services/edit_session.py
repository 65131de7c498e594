# -*- coding: utf-8 -*-
"""
substudio/application/services/edit_session.py
Sessão de edição: lista principal, trilha secundária, histórico e estilo
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ...domain.models.export import EraserSettings, RenderSettings
from ...domain.models.history import EditHistory
from ...domain.models.subtitle import DisplayMode, Subtitle, SubtitleStyle
from ...infra.logging import get_logger
from ...infra.settings import settings
from . import subtitle_editor as editor
from .export_service import VideoExportRequest


class EditSession:
    """
    Dono único da lista de legendas de uma sessão.

    Toda mutação visível passa por set_subtitles, que ignora escritas
    redundantes e empilha o estado anterior no histórico. undo() aplica o
    snapshot sem empilhar o inverso.
    """

    def __init__(
        self,
        subtitles: Optional[Sequence[Subtitle]] = None,
        style: Optional[SubtitleStyle] = None,
        history_limit: Optional[int] = None,
    ):
        self.logger = get_logger("EditSession")
        self.history = EditHistory(history_limit or settings.history_limit)
        self._subtitles: List[Subtitle] = list(subtitles or [])
        self._secondary: List[Subtitle] = []
        self.style = style or SubtitleStyle()
        self.display_mode: DisplayMode = "dual"
        self.eraser = EraserSettings()

    @property
    def subtitles(self) -> List[Subtitle]:
        return list(self._subtitles)

    @property
    def secondary(self) -> List[Subtitle]:
        return list(self._secondary)

    def set_subtitles(self, subtitles: Sequence[Subtitle], save_to_history: bool = True) -> bool:
        """Substitui a lista; retorna False se nada mudou"""
        new_list = list(subtitles)
        if new_list == self._subtitles:
            return False

        if save_to_history:
            self.history.push(self._subtitles)
        self._subtitles = new_list
        return True

    def undo(self) -> bool:
        snapshot = self.history.pop()
        if snapshot is None:
            return False
        self._subtitles = snapshot
        self.logger.debug("Desfeito: %d legendas, %d no histórico", len(snapshot), len(self.history))
        return True

    def clear(self) -> None:
        self.set_subtitles([])
        self.history.clear()

    # Operações da álgebra de edição

    def insert_after(self, index: int) -> bool:
        return self.set_subtitles(editor.insert_after(self._subtitles, index))

    def remove(self, index: int) -> bool:
        return self.set_subtitles(editor.remove(self._subtitles, index))

    def update(self, index: int, subtitle: Subtitle) -> bool:
        return self.set_subtitles(editor.update(self._subtitles, index, subtitle))

    def split_at(self, index: int, field: editor.TextField, offset: int) -> bool:
        return self.set_subtitles(editor.split_at(self._subtitles, index, field, offset))

    def merge_adjacent(self, index: int, direction: editor.MergeDirection) -> bool:
        return self.set_subtitles(editor.merge_adjacent(self._subtitles, index, direction))

    def swap_tracks(self) -> bool:
        return self.set_subtitles(editor.swap_tracks(self._subtitles))

    def reset_styles(self) -> bool:
        return self.set_subtitles(editor.reset_styles(self._subtitles))

    def load_secondary(self, track: Sequence[Subtitle]) -> bool:
        """
        Carrega uma trilha secundária.

        Com lista principal presente, os textos são alinhados em text2; a
        trilha fica guardada de forma independente para realinhamento.
        """
        self._secondary = list(track)
        if not self._subtitles:
            self.logger.info("Trilha secundária carregada sem lista principal")
            return False
        return self.set_subtitles(editor.align_secondary(self._subtitles, self._secondary))

    def realign_secondary(self) -> bool:
        return self.set_subtitles(editor.align_secondary(self._subtitles, self._secondary))

    def illegal_indices(self) -> List[int]:
        return editor.illegal_indices(self._subtitles)

    def export_request(
        self,
        video_path: Path,
        output_path: Optional[Path] = None,
        render: Optional[RenderSettings] = None,
    ) -> VideoExportRequest:
        """Requisição de exportação com o estado atual (lista, estilo, modo e apagamento)"""
        return VideoExportRequest(
            video_path=Path(video_path),
            output_path=Path(output_path) if output_path is not None else None,
            subtitles=self.subtitles,
            style=self.style,
            mode=self.display_mode,
            eraser=self.eraser,
            render=render or RenderSettings(),
        )
