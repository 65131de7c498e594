# -*- coding: utf-8 -*-
"""
Registro dos efeitos de filtergraph (apagamento, legendas, escala)

Cada efeito declara os parâmetros que exige; o registro os valida antes de
instanciar, de modo que um parâmetro ausente ou não numérico vira
ValidationError e nunca chega ao FFmpeg.
"""

from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, Type

from ..domain.errors import ValidationError
from ..domain.models.effects import Effect, EffectDescriptor
from .logging import get_logger

logger = get_logger("PluginRegistry")

_PARAM_CHECKS = {
    "int": lambda value: isinstance(value, Real) and not isinstance(value, bool),
    "float": lambda value: isinstance(value, Real) and not isinstance(value, bool),
    "str": lambda value: isinstance(value, str) and value != "",
}


class PluginRegistry:
    """Registry para plugins de efeitos"""

    def __init__(self):
        self._effects: Dict[str, Type[Effect]] = {}
        self._descriptors: Dict[str, EffectDescriptor] = {}

    def register_effect(self, descriptor: EffectDescriptor, effect_class: Type[Effect]):
        if descriptor.name in self._effects:
            logger.warning("Efeito '%s' registrado novamente por %s", descriptor.name, effect_class.__name__)
        self._effects[descriptor.name] = effect_class
        self._descriptors[descriptor.name] = descriptor

    def get_effect(self, name: str) -> Optional[Type[Effect]]:
        return self._effects.get(name)

    def get_descriptor(self, name: str) -> Optional[EffectDescriptor]:
        return self._descriptors.get(name)

    def list_effects(self) -> List[EffectDescriptor]:
        return list(self._descriptors.values())

    def create(self, name: str, params: Mapping[str, Any]) -> Effect:
        """
        Instancia o efeito `name` após validar os parâmetros declarados.

        Parâmetros extras são repassados sem validação.

        Raises:
            ValidationError: efeito desconhecido, parâmetro ausente ou de tipo inválido
        """
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            raise ValidationError(f"Unknown effect: {name}")

        for param, kind in descriptor.params.items():
            if param not in params:
                raise ValidationError(f"Effect '{name}' requires parameter '{param}'")
            check = _PARAM_CHECKS.get(kind)
            if check is not None and not check(params[param]):
                raise ValidationError(f"Effect '{name}': '{param}' must be {kind}, got {params[param]!r}")

        return self._effects[name](params)


# Instância global do registry
plugin_registry = PluginRegistry()


def effect(name: str, params: Dict[str, str], target: str = "video", description: str = ""):
    """Decorator que registra a classe como efeito `name`"""

    def decorator(effect_class: Type[Effect]):
        plugin_registry.register_effect(
            EffectDescriptor(name=name, params=params, target=target, description=description),
            effect_class,
        )
        return effect_class

    return decorator
