# -*- coding: utf-8 -*-
"""
Formatação de números e predicados na sintaxe de expressões do FFmpeg
"""

from typing import Iterable

from .intervals import Interval


def format_number(value: float) -> str:
    """1.0 -> "1", 2.05 -> "2.05" (até milissegundos)"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def between_predicate(intervals: Iterable[Interval]) -> str:
    """Disjunção "between(t,a,b)+between(t,c,d)" para a opção enable"""
    return "+".join(
        f"between(t,{format_number(start)},{format_number(end)})" for start, end in intervals
    )


def escape_filter_path(path: str) -> str:
    """Escapa um caminho para uso como argumento de filtro (ex: subtitles=)"""
    escaped = path.replace("\\", "/")
    for char in (":", "'", "[", "]", ",", ";"):
        escaped = escaped.replace(char, f"\\{char}")
    return escaped
