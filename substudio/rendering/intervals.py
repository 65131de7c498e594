# -*- coding: utf-8 -*-
"""
Fusão de intervalos de tempo usada pelo apagamento inteligente
"""

from typing import Iterable, List, Tuple

Interval = Tuple[float, float]

DEFAULT_TOLERANCE = 0.1  # Fecha lacunas curtas entre legendas (evita a máscara piscar)


def merge_intervals(ranges: Iterable[Interval], tolerance: float = DEFAULT_TOLERANCE) -> List[Interval]:
    """
    Une intervalos [start, end) sobrepostos ou adjacentes.

    Ordena por início e funde o próximo intervalo no acumulador quando
    next.start <= acumulador.end + tolerance. A entrada não é alterada.
    """
    ordered = sorted((float(start), float(end)) for start, end in ranges)
    if not ordered:
        return []

    merged: List[Interval] = []
    current_start, current_end = ordered[0]
    for start, end in ordered[1:]:
        if start <= current_end + tolerance:
            current_end = max(current_end, end)
        else:
            merged.append((current_start, current_end))
            current_start, current_end = start, end
    merged.append((current_start, current_end))
    return merged
