from __future__ import annotations

import re
from typing import Dict, Optional, Tuple

from cir.model import FieldModel, MethodModel, UnitModel
from cir.nodes import SourceNode, SourceUnit
from extractors.annotations import extract_annotations
from extractors.fields import extract_fields
from extractors.javadoc import StructuredComment, parse_comment
from extractors.methods import extract_methods
from extractors.selector import select_primary_declaration

_INNER_TYPE_ARGS = re.compile(r"<[^<>]*>")


def simple_type_name(type_text: str) -> str:
    """`java.util.List<String>` -> `List`, `Outer.Inner` -> `Inner`."""
    base = type_text
    while "<" in base:
        stripped = _INNER_TYPE_ARGS.sub("", base)
        if stripped == base:
            break
        base = stripped
    base = base.replace("[]", "").strip()
    return base.split(".")[-1]


def _inheritance(declaration: SourceNode) -> Tuple[Tuple[str, ...], Optional[str]]:
    """
    Returns (interfaces, superclass).
    An interface's `extends` list names interfaces, so it has no superclass.
    """
    implements = tuple(simple_type_name(t) for t in declaration.implements)
    extends = tuple(simple_type_name(t) for t in declaration.extends)

    if declaration.kind == "interface":
        return implements + extends, None
    return implements, (extends[0] if extends else None)


def assemble_unit_model(
    unit: SourceUnit,
    declaration: SourceNode,
    comment: Optional[StructuredComment],
    fields: Tuple[FieldModel, ...],
    methods: Tuple[MethodModel, ...],
    annotations: Dict[str, str],
) -> UnitModel:
    package = unit.namespace or ""
    fqn = f"{package}.{declaration.name}" if package else declaration.name
    interfaces, superclass = _inheritance(declaration)

    return UnitModel(
        name=declaration.name,
        package=package,
        fully_qualified_name=fqn,
        kind=declaration.kind.upper(),
        description=comment.description if comment else None,
        interfaces=interfaces,
        superclass=superclass,
        type_parameters=tuple(declaration.type_parameters),
        is_public="public" in declaration.modifiers,
        is_abstract="abstract" in declaration.modifiers,
        fields=fields,
        methods=methods,
        annotations=annotations,
        source_code=declaration.text,
        source_path=unit.path,
    )


def build_unit_model(unit: SourceUnit) -> UnitModel:
    """
    Full extraction for one unit: select, extract members, assemble.
    Raises UnitSkipped when the unit has nothing to document.
    """
    declaration = select_primary_declaration(unit)
    return assemble_unit_model(
        unit,
        declaration,
        comment=parse_comment(declaration.comment),
        fields=extract_fields(declaration),
        methods=extract_methods(declaration),
        annotations=extract_annotations(declaration.annotations),
    )
