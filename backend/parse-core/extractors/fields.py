from __future__ import annotations

from typing import List, Tuple

from cir.model import FieldModel
from cir.nodes import SourceNode
from extractors.annotations import extract_annotations
from extractors.javadoc import parse_comment


def extract_fields(declaration: SourceNode) -> Tuple[FieldModel, ...]:
    """
    One FieldModel per variable binding, in declaration order.
    `int a, b;` gives two models sharing modifiers, annotations and javadoc.
    """
    fields: List[FieldModel] = []

    for decl in declaration.children_of("field"):
        mods = decl.modifiers
        is_public, is_static, is_final = ("public" in mods, "static" in mods, "final" in mods)

        comment = parse_comment(decl.comment)
        description = comment.description if comment else None
        annotations = extract_annotations(decl.annotations)

        for var in decl.children_of("variable"):
            fields.append(
                FieldModel(
                    name=var.name,
                    type_name=var.type_text or decl.type_text or "",
                    description=description,
                    is_public=is_public,
                    is_static=is_static,
                    is_final=is_final,
                    initial_value=var.initializer,
                    annotations=dict(annotations),
                )
            )

    return tuple(fields)
