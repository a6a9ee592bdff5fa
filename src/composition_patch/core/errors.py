# src/composition_patch/core/errors.py
"""
Composition Patch — Estruturas canônicas de erro (v1)

Este módulo define a hierarquia de exceções do motor de patches e o
payload serializável usado para reportar falhas a quem invoca o motor.

Categorias:
    - CompositionConfigurationError: erro de configuração (fatal para o
      recurso; ex.: patch set inexistente, campo obrigatório ausente)
    - CompositionDataError: erro de dados (fatal para o patch; ex.: chave
      ausente em um map transform, entrada não numérica)
    - PatchApplicationError: falha de um patch dentro de uma lista,
      com o índice do patch e a causa encadeada

Nenhum erro é registrado ou re-tentado aqui. Quem decide política de
retry e log é o chamador.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload serializável de erro.

    Campos:
    - type: código estável do erro (nome da classe da exceção)
    - message: mensagem curta e objetiva
    - details: dados estruturados para diagnóstico
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class CompositionError(Exception):
    """Exceção base do motor de patches."""

    hint: Optional[str] = None

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> ErrorPayload:
        return ErrorPayload(
            type=self.__class__.__name__,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Configuração
# ---------------------------------------------------------------------------

class CompositionConfigurationError(CompositionError):
    """Configuração inválida: invalida o processamento do recurso inteiro."""

    hint = "Revise a definição da composition antes de reprocessar o recurso."


class CompositionValidationError(CompositionConfigurationError):
    """Forma serializada (YAML/JSON) estruturalmente inválida."""


class UndefinedPatchSetError(CompositionConfigurationError):
    """Patch do tipo PatchSet referencia um nome não declarado."""

    def __init__(self, name: str) -> None:
        super().__init__(f"cannot find patch set by name {name}", patch_set_name=name)
        self.name = name


class RequiredFieldError(CompositionConfigurationError):
    """Campo obrigatório ausente para o tipo de patch."""

    def __init__(self, field_name: str, patch_type: str) -> None:
        super().__init__(
            f"{field_name} is required by type {patch_type}",
            field=field_name,
            patch_type=str(patch_type),
        )
        self.field_name = field_name
        self.patch_type = str(patch_type)


class InvalidPatchTypeError(CompositionConfigurationError):
    """Tipo de patch desconhecido ou não resolvível neste estágio."""

    def __init__(self, patch_type: Any) -> None:
        super().__init__(f"patch type {patch_type} is unsupported", patch_type=str(patch_type))
        self.patch_type = str(patch_type)


class ConstantValueRequiredError(CompositionConfigurationError):
    """Patch FromConstantValue sem `constantValue`."""

    def __init__(self, patch_type: str) -> None:
        super().__init__(f"constant value is required by type {patch_type}", patch_type=str(patch_type))


class ConstantValueTypeNotDefinedError(CompositionConfigurationError):
    def __init__(self) -> None:
        super().__init__("constant value type is not defined")


class ConstantValueTypeNotSupportedError(CompositionConfigurationError):
    def __init__(self, constant_type: Any) -> None:
        super().__init__(
            f"constant value type {constant_type} is not supported",
            constant_type=str(constant_type),
        )
        self.constant_type = str(constant_type)


class RequiredValueError(CompositionConfigurationError):
    """O tag do ConstantValue não tem o payload correspondente preenchido."""

    def __init__(self, constant_type: str) -> None:
        super().__init__(
            f"a value is required for constant value type {constant_type}",
            constant_type=str(constant_type),
        )
        self.constant_type = str(constant_type)


class TransformTypeNotSupportedError(CompositionConfigurationError):
    def __init__(self, transform_type: Any) -> None:
        super().__init__(
            f"transform type {transform_type} is not supported",
            transform_type=str(transform_type),
        )


class TransformConfigRequiredError(CompositionConfigurationError):
    def __init__(self, transform_type: str) -> None:
        super().__init__(
            f"{transform_type} config is required by transform type {transform_type}",
            transform_type=str(transform_type),
        )


class MathNoMultiplierError(CompositionConfigurationError):
    def __init__(self) -> None:
        super().__init__("no input is given for math transform multiplier")


class ConversionPairNotSupportedError(CompositionConfigurationError):
    def __init__(self, from_type: str, to_type: str) -> None:
        super().__init__(
            f"conversion from {from_type} to {to_type} is not supported",
            from_type=from_type,
            to_type=to_type,
        )
        self.from_type = from_type
        self.to_type = to_type


# ---------------------------------------------------------------------------
# Dados
# ---------------------------------------------------------------------------

class CompositionDataError(CompositionError):
    """Valor lido não é aceito pelo patch ou por um transform."""

    hint = "Verifique o valor presente no objeto de origem do patch."


class MapTypeNotSupportedError(CompositionDataError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"type {kind} is not supported for map transform", kind=kind)
        self.kind = kind


class MapKeyNotFoundError(CompositionDataError):
    def __init__(self, key: str) -> None:
        super().__init__(f"key {key} is not found in map", key=key)
        self.key = key


class MathInputNonNumberError(CompositionDataError):
    def __init__(self, kind: str) -> None:
        super().__init__("input is required to be a number for math transformer", kind=kind)


class ConvertInputTypeNotSupportedError(CompositionDataError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"input type {kind} is not supported", kind=kind)
        self.kind = kind


class ConversionFailedError(CompositionDataError):
    def __init__(self, value: Any, to_type: str) -> None:
        super().__init__(
            f"cannot convert {value!r} to {to_type}",
            value=repr(value),
            to_type=to_type,
        )


# ---------------------------------------------------------------------------
# Renderização
# ---------------------------------------------------------------------------

class PatchApplicationError(CompositionError):
    """Falha ao aplicar o patch de índice `index` de um template."""

    def __init__(self, index: int, patch_type: str, cause: Exception) -> None:
        super().__init__(
            f"cannot apply the patch at index {index}: {cause}",
            index=index,
            patch_type=str(patch_type),
            cause=cause.__class__.__name__,
        )
        self.index = index
        self.patch_type = str(patch_type)
