"""
backend/parse-core/extractors/methods.py

Method and parameter extraction for the primary type declaration.

Only `method` nodes directly under the declaration are visited: constructors,
nested types and inherited members are left out, and overloads stay separate
MethodModels in source order.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from cir.model import MethodModel, ParameterModel
from cir.nodes import SourceNode
from extractors.annotations import extract_annotations
from extractors.javadoc import StructuredComment, parse_comment

# Order in which modifiers are written into a signature
MODIFIER_ORDER = (
    "public", "protected", "private",
    "abstract", "default", "static", "final",
    "synchronized", "native", "strictfp",
)


# ---------------- Signature ----------------

def _ordered_modifiers(mods) -> List[str]:
    known = [m for m in MODIFIER_ORDER if m in mods]
    extra = sorted(m for m in mods if m not in MODIFIER_ORDER)
    return known + extra


def _parameter_text(p: SourceNode) -> str:
    prefix = "final " if "final" in p.modifiers else ""
    type_text = p.type_text or ""
    if p.varargs:
        type_text += "..."
    return f"{prefix}{type_text} {p.name}"


def render_signature(method: SourceNode) -> str:
    """
    Declaration header without annotations or body, e.g.
      public static <T> List<T> wrap(T item, String... tags) throws IOException
    """
    parts = _ordered_modifiers(method.modifiers)
    if method.type_parameters:
        parts.append("<" + ", ".join(method.type_parameters) + ">")
    parts.append(method.type_text or "void")

    params = ", ".join(_parameter_text(p) for p in method.children_of("parameter"))
    parts.append(f"{method.name}({params})")

    signature = " ".join(parts)
    if method.throws:
        signature += " throws " + ", ".join(method.throws)
    return signature


# ---------------- Parameters ----------------

def extract_parameters(
    method: SourceNode,
    comment: Optional[StructuredComment],
) -> Tuple[ParameterModel, ...]:
    params: List[ParameterModel] = []
    for p in method.children_of("parameter"):
        description = comment.param_description(p.name) if comment else None
        params.append(
            ParameterModel(
                name=p.name,
                type_name=p.type_text or "",
                description=description,
                is_required=not p.varargs,
            )
        )
    return tuple(params)


# ---------------- Thrown conditions ----------------

def _thrown_conditions(
    method: SourceNode,
    comment: Optional[StructuredComment],
) -> Tuple[Tuple[str, ...], Dict[str, str]]:
    """
    Documented conditions come from @throws/@exception tags: the sequence keeps
    every occurrence, the description map keeps the last one per name.
    A method without such tags reports its declared throws clause instead.
    """
    if comment is not None:
        names, descriptions = comment.thrown_conditions()
        if names:
            return names, descriptions
    return tuple(method.throws), {}


# ---------------- Methods ----------------

def extract_method(method: SourceNode) -> MethodModel:
    comment = parse_comment(method.comment)
    mods = method.modifiers

    description = comment.description if comment else None
    return_description = comment.return_description() if comment else None
    exceptions, exception_descriptions = _thrown_conditions(method, comment)

    return MethodModel(
        name=method.name,
        return_type=method.type_text or "void",
        signature=render_signature(method),
        description=description,
        return_description=return_description,
        parameters=extract_parameters(method, comment),
        exceptions=exceptions,
        exception_descriptions=exception_descriptions,
        annotations=extract_annotations(method.annotations),
        is_public="public" in mods,
        is_static="static" in mods,
        is_abstract="abstract" in mods,
        type_parameters=tuple(method.type_parameters),
        source_code=method.text,
    )


def extract_methods(declaration: SourceNode) -> Tuple[MethodModel, ...]:
    return tuple(extract_method(m) for m in declaration.children_of("method"))
