# -*- coding: utf-8 -*-
"""
Modelos de efeitos de vídeo para o domínio
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Protocol


@dataclass(frozen=True)
class EffectDescriptor:
    """Descritor de um efeito disponível no sistema"""

    name: str
    params: Mapping[str, str]  # nome_param: tipo_validacao
    target: Literal["video", "audio", "both"]
    description: str = ""


class FilterContext:
    """Contexto para construção de filtros FFmpeg"""

    def __init__(self, input_label: str, output_label: str, **kwargs: Any):
        self.input_label = input_label
        self.output_label = output_label
        self.params = kwargs

    def enable_option(self) -> str:
        """Sufixo ":enable='...'" quando o efeito só vale em certos intervalos"""
        predicate = self.params.get("enable")
        return f":enable='{predicate}'" if predicate else ""


class FilterSnippet:
    """Representa um fragmento de filtro FFmpeg"""

    def __init__(self, filter_expr: str, output_label: str):
        self.filter_expr = filter_expr
        self.output_label = output_label

    def __str__(self) -> str:
        return self.filter_expr


class Effect(Protocol):
    """Interface para implementação de efeitos"""

    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        """Constrói o filtro FFmpeg para este efeito"""
        ...
