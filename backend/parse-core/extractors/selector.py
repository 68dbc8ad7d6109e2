from __future__ import annotations

from cir.nodes import TYPE_KINDS, SourceNode, SourceUnit
from errors import SKIP_NO_DECLARATION, SKIP_UNSUPPORTED_KIND, UnitSkipped


def select_primary_declaration(unit: SourceUnit) -> SourceNode:
    """
    Pick the one top-level declaration the unit documents.

    With a known primary name (file stem) the first top-level node of that
    name wins. Without one, the first public node, else the first node.
    Nested and secondary declarations are never considered.
    """
    top = list(unit.declarations)
    if not top:
        raise UnitSkipped(SKIP_NO_DECLARATION, "unit has no top-level declarations")

    if unit.primary_name:
        matches = [n for n in top if n.name == unit.primary_name]
        if not matches:
            raise UnitSkipped(
                SKIP_NO_DECLARATION,
                f"no top-level declaration named {unit.primary_name!r}",
            )
        chosen = matches[0]
    else:
        public = [n for n in top if "public" in n.modifiers]
        chosen = (public or top)[0]

    if chosen.kind not in TYPE_KINDS:
        raise UnitSkipped(
            SKIP_UNSUPPORTED_KIND,
            f"{chosen.name or '<anonymous>'} is a {chosen.kind}, not a type declaration",
        )
    return chosen
