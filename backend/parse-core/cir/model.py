from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

DeclarationKind = Literal["CLASS", "INTERFACE", "ENUM", "RECORD", "ANNOTATION"]

DECLARATION_KINDS: Tuple[str, ...] = ("CLASS", "INTERFACE", "ENUM", "RECORD", "ANNOTATION")


def _freeze(record, *names: str) -> None:
    """Replace mapping attributes of a frozen record with read-only copies."""
    for name in names:
        object.__setattr__(record, name, MappingProxyType(dict(getattr(record, name))))


def _plain(value: Any) -> Any:
    if is_dataclass(value):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return tuple(_plain(v) for v in value)
    return value


@dataclass(frozen=True)
class ParameterModel:
    name: str
    type_name: str
    description: Optional[str] = None   # None: no matching @param tag
    is_required: bool = True            # False only for varargs


@dataclass(frozen=True)
class FieldModel:
    name: str
    type_name: str            # declared type text, unresolved
    description: Optional[str] = None
    is_public: bool = False
    is_static: bool = False
    is_final: bool = False
    initial_value: Optional[str] = None
    annotations: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze(self, "annotations")

    def to_dict(self) -> Dict[str, Any]:
        return _plain(self)


@dataclass(frozen=True)
class MethodModel:
    name: str
    return_type: str
    signature: str
    description: Optional[str] = None
    return_description: Optional[str] = None
    parameters: Tuple[ParameterModel, ...] = ()
    exceptions: Tuple[str, ...] = ()
    exception_descriptions: Mapping[str, str] = field(default_factory=dict)
    annotations: Mapping[str, str] = field(default_factory=dict)
    is_public: bool = False
    is_static: bool = False
    is_abstract: bool = False
    type_parameters: Tuple[str, ...] = ()
    source_code: str = ""

    def __post_init__(self) -> None:
        if not self.signature:
            raise ValueError(f"method {self.name!r} has no signature")

        seen = set()
        for p in self.parameters:
            if p.name in seen:
                raise ValueError(f"duplicate parameter {p.name!r} in method {self.name!r}")
            seen.add(p.name)

        stray = set(self.exception_descriptions) - set(self.exceptions)
        if stray:
            raise ValueError(
                f"exception descriptions for undeclared names {sorted(stray)} in method {self.name!r}"
            )
        _freeze(self, "exception_descriptions", "annotations")

    def to_dict(self) -> Dict[str, Any]:
        return _plain(self)


@dataclass(frozen=True)
class UnitModel:
    """
    Documentation model of one source unit's primary type declaration.
    Optional text attributes use None for "no documentation available";
    an empty string means the source documents it as blank.
    """
    name: str
    package: str
    fully_qualified_name: str
    kind: DeclarationKind
    description: Optional[str] = None
    interfaces: Tuple[str, ...] = ()
    superclass: Optional[str] = None
    type_parameters: Tuple[str, ...] = ()
    is_public: bool = False
    is_abstract: bool = False
    fields: Tuple[FieldModel, ...] = ()
    methods: Tuple[MethodModel, ...] = ()
    annotations: Mapping[str, str] = field(default_factory=dict)
    source_code: str = ""
    source_path: str = ""

    def __post_init__(self) -> None:
        if not self.fully_qualified_name:
            raise ValueError("fully_qualified_name must not be empty")
        if self.kind not in DECLARATION_KINDS:
            raise ValueError(f"unsupported declaration kind {self.kind!r}")
        _freeze(self, "annotations")

    def to_dict(self) -> Dict[str, Any]:
        return _plain(self)
