# -*- coding: utf-8 -*-
"""
substudio/application/services/subtitle_editor.py
Álgebra de edição da lista de legendas.

Todas as operações são puras: recebem uma lista e devolvem uma nova lista,
criando novas instâncias de Subtitle para toda legenda alterada. Índices
inválidos e bordas da lista são no-ops que devolvem a própria lista de
entrada (quem chama detecta o no-op por identidade).
"""

from __future__ import annotations

from typing import List, Literal, Optional, Sequence

from ...domain.models.subtitle import CueStyle, Subtitle

TextField = Literal["text", "text2"]
MergeDirection = Literal["prev", "next"]


def _in_range(subtitles: Sequence[Subtitle], index: int) -> bool:
    return 0 <= index < len(subtitles)


def insert_after(subtitles: Sequence[Subtitle], index: int) -> List[Subtitle]:
    """
    Insere uma legenda vazia após subtitles[index].

    Início = fim da legenda atual (ou 0); fim = início da próxima (ou
    início + 1). Se a próxima começar antes, a nova legenda fica ilegal e
    é sinalizada por is_valid, não corrigida.
    """
    current = subtitles[index] if _in_range(subtitles, index) else None
    following = subtitles[index + 1] if _in_range(subtitles, index + 1) else None

    start_time = current.end_time if current else 0.0
    end_time = following.start_time if following else start_time + 1

    result = list(subtitles)
    result.insert(max(index + 1, 0), Subtitle(start_time=start_time, end_time=end_time))
    return result


def remove(subtitles: Sequence[Subtitle], index: int) -> Sequence[Subtitle]:
    if not _in_range(subtitles, index):
        return subtitles
    result = list(subtitles)
    del result[index]
    return result


def update(subtitles: Sequence[Subtitle], index: int, subtitle: Subtitle) -> Sequence[Subtitle]:
    if not _in_range(subtitles, index):
        return subtitles
    result = list(subtitles)
    result[index] = subtitle
    return result


def split_at(
    subtitles: Sequence[Subtitle], index: int, field: TextField, offset: int
) -> Sequence[Subtitle]:
    """
    Divide a legenda no cursor de texto.

    O texto do campo é cortado em offset, mas o tempo é sempre cortado no
    ponto médio do intervalo original, independente do offset. A segunda
    parte tem o outro campo de texto limpo.
    """
    # NOTE: corte temporal no ponto médio mantido por compatibilidade com
    # o editor web; a posição do cursor não influencia o tempo.
    if field not in ("text", "text2") or not _in_range(subtitles, index):
        return subtitles

    item = subtitles[index]
    target = getattr(item, field)
    offset = min(max(offset, 0), len(target))
    split_time = item.start_time + (item.end_time - item.start_time) / 2
    other_field = "text2" if field == "text" else "text"

    first = item.replace(end_time=split_time, **{field: target[:offset]})
    second = item.replace(start_time=split_time, **{field: target[offset:], other_field: ""})

    result = list(subtitles)
    result[index:index + 1] = [first, second]
    return result


def _merge_pair(first: Subtitle, second: Subtitle) -> Subtitle:
    return first.replace(
        end_time=second.end_time,
        text=f"{first.text} {second.text}".strip(),
        text2=f"{first.text2} {second.text2}".strip(),
    )


def merge_adjacent(
    subtitles: Sequence[Subtitle], index: int, direction: MergeDirection
) -> Sequence[Subtitle]:
    """Funde subtitles[index] com a vizinha anterior ('prev') ou seguinte ('next')"""
    if direction == "prev" and 0 < index < len(subtitles):
        position = index - 1
    elif direction == "next" and 0 <= index < len(subtitles) - 1:
        position = index
    else:
        return subtitles

    merged = _merge_pair(subtitles[position], subtitles[position + 1])
    result = list(subtitles)
    result[position:position + 2] = [merged]
    return result


def swap_tracks(subtitles: Sequence[Subtitle]) -> List[Subtitle]:
    """Troca texto principal e secundário de todas as legendas"""
    return [item.replace(text=item.text2, text2=item.text) for item in subtitles]


def reset_styles(subtitles: Sequence[Subtitle]) -> List[Subtitle]:
    """Remove as sobrescritas de estilo de todas as legendas"""
    return [item if item.style.is_empty else item.replace(style=CueStyle()) for item in subtitles]


def overlap(a: Subtitle, b: Subtitle) -> float:
    return max(0.0, min(a.end_time, b.end_time) - max(a.start_time, b.start_time))


def _best_match(item: Subtitle, candidates: Sequence[Subtitle]) -> Optional[Subtitle]:
    best = None
    best_distance = 0.0
    for candidate in candidates:
        if overlap(item, candidate) <= 0:
            continue
        distance = abs(candidate.midpoint - item.midpoint)
        if best is None or distance < best_distance:
            best, best_distance = candidate, distance
    return best


def align_secondary(primary: Sequence[Subtitle], secondary: Sequence[Subtitle]) -> List[Subtitle]:
    """
    Alinha uma trilha secundária à principal por sobreposição temporal.

    Para cada legenda principal, entre as secundárias que se sobrepõem a
    ela, a de ponto médio mais próximo fornece o text2. Sem candidata,
    o text2 anterior é mantido.
    """
    result = []
    for item in primary:
        match = _best_match(item, secondary)
        result.append(item.replace(text2=match.text) if match else item)
    return result


def illegal_indices(subtitles: Sequence[Subtitle]) -> List[int]:
    """Índices das legendas ilegais (start >= end)"""
    return [index for index, item in enumerate(subtitles) if not item.is_valid]
