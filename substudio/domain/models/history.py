# -*- coding: utf-8 -*-
"""
Histórico de edição (pilha de desfazer limitada)
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Sequence

from .subtitle import Subtitle

DEFAULT_HISTORY_LIMIT = 1000


class EditHistory:
    """
    Pilha limitada de snapshots completos da lista de legendas.

    Ao atingir a capacidade o snapshot mais antigo é descartado, preservando
    a profundidade de desfazer mais recente.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("history limit must be positive")
        self._stack: Deque[List[Subtitle]] = deque(maxlen=limit)

    @property
    def limit(self) -> int:
        return self._stack.maxlen

    def push(self, snapshot: Sequence[Subtitle]) -> None:
        self._stack.append(list(snapshot))

    def pop(self) -> Optional[List[Subtitle]]:
        """Remove e retorna o snapshot mais recente, ou None se vazio"""
        if not self._stack:
            return None
        return self._stack.pop()

    def clear(self) -> None:
        self._stack.clear()

    def __len__(self) -> int:
        return len(self._stack)
