# -*- coding: utf-8 -*-
"""
Testes unitários para a fusão de intervalos
"""

import random

from substudio.rendering.expressions import between_predicate, format_number
from substudio.rendering.intervals import merge_intervals


def test_empty_input():
    """Testa entrada vazia"""
    assert merge_intervals([]) == []


def test_near_adjacent_ranges_are_bridged():
    """Testa que lacunas menores que a tolerância são fechadas"""
    assert merge_intervals([(2.05, 3), (1, 2)]) == [(1, 3)]


def test_gap_larger_than_tolerance_is_kept():
    """Testa que lacunas maiores que a tolerância são mantidas"""
    assert merge_intervals([(0, 1), (1.2, 2)]) == [(0, 1), (1.2, 2)]


def test_contained_range():
    """Testa intervalo contido em outro"""
    assert merge_intervals([(0, 10), (2, 3)]) == [(0, 10)]


def test_custom_tolerance():
    """Testa tolerância configurável"""
    assert merge_intervals([(0, 1), (1.05, 2)], tolerance=0) == [(0, 1), (1.05, 2)]


def test_input_is_not_mutated():
    """Testa que a entrada não é alterada"""
    ranges = [(3, 4), (0, 1)]
    merge_intervals(ranges)
    assert ranges == [(3, 4), (0, 1)]


def test_output_is_sorted_disjoint_and_covers_input():
    """Testa propriedades de ordenação, disjunção e cobertura"""
    rng = random.Random(42)
    for _ in range(50):
        ranges = []
        for _ in range(rng.randint(1, 20)):
            start = round(rng.uniform(0, 100), 3)
            ranges.append((start, round(start + rng.uniform(0.01, 5), 3)))

        merged = merge_intervals(ranges)

        for (_, end), (next_start, _) in zip(merged, merged[1:]):
            assert next_start > end + 0.1
        for start, end in ranges:
            assert any(m_start <= start and end <= m_end for m_start, m_end in merged)
        # Extremidades sempre vêm da entrada: nenhum ponto é inventado
        starts = {start for start, _ in ranges}
        ends = {end for _, end in ranges}
        assert all(m_start in starts and m_end in ends for m_start, m_end in merged)


def test_format_number():
    """Testa formatação de números para expressões do FFmpeg"""
    assert format_number(1.0) == "1"
    assert format_number(2.05) == "2.05"
    assert format_number(6.5) == "6.5"
    assert format_number(0.1234) == "0.123"


def test_between_predicate():
    """Testa serialização da disjunção de intervalos"""
    assert between_predicate([(1, 3)]) == "between(t,1,3)"
    assert between_predicate([(0, 1), (5, 6.5)]) == "between(t,0,1)+between(t,5,6.5)"
