# backend/parse-core/summarize.py
"""
Condense extracted UnitModels into the facts a documentation writer needs.

Each *_context function returns a plain dict, ready to be rendered into a
prompt or a template by the generation step (which lives outside this
package).
"""
from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List

from cir.model import MethodModel, UnitModel


def _one_line(x: Any) -> str:
    if x is None:
        return ""
    return re.sub(r"\s+", " ", str(x)).strip()


def class_list_summary(units: Iterable[UnitModel]) -> str:
    """
    One line per unit:
      com.example.Foo (CLASS): Does foo things.
      com.example.Bar (INTERFACE)
    """
    lines = []
    for u in units:
        line = f"{u.fully_qualified_name} ({u.kind})"
        if u.description is not None:
            line += f": {_one_line(u.description)}"
        lines.append(line)
    return "\n".join(lines)


def kind_counts(units: Iterable[UnitModel]) -> Dict[str, int]:
    counts = {"CLASS": 0, "INTERFACE": 0, "ENUM": 0, "RECORD": 0, "ANNOTATION": 0}
    for u in units:
        counts[u.kind] = counts.get(u.kind, 0) + 1
    return counts


def public_types(units: Iterable[UnitModel]) -> List[str]:
    return [u.fully_qualified_name for u in units if u.is_public]


def exception_types(units: Iterable[UnitModel]) -> List[str]:
    """Distinct thrown-condition names across all methods, first-seen order."""
    seen: Dict[str, None] = {}
    for u in units:
        for m in u.methods:
            for name in m.exceptions:
                seen.setdefault(name, None)
    return list(seen)


def _method_line(m: MethodModel) -> str:
    params = ", ".join(f"{p.type_name} {p.name}" for p in m.parameters)
    return f"{m.name}({params}): {m.return_type}"


def methods_summary(unit: UnitModel) -> str:
    return "\n".join(_method_line(m) for m in unit.methods)


# ---------------- Contexts ----------------

def project_overview_context(units: List[UnitModel], repository_name: str) -> Dict[str, Any]:
    counts = kind_counts(units)
    return {
        "repository_name": repository_name,
        "total_classes": len(units),
        "class_count": counts["CLASS"],
        "interface_count": counts["INTERFACE"],
        "enum_count": counts["ENUM"],
        "class_summary": class_list_summary(units),
    }


def class_context(unit: UnitModel) -> Dict[str, Any]:
    return {
        "class_name": unit.name,
        "package_name": unit.package,
        "class_type": unit.kind,
        "class_description": unit.description or "",
        "source_code": unit.source_code,
        "methods_summary": methods_summary(unit),
    }


def getting_started_context(units: List[UnitModel], repository_name: str) -> Dict[str, Any]:
    return {
        "repository_name": repository_name,
        "main_classes": "\n".join(public_types(units)),
    }


def faq_context(units: List[UnitModel], repository_name: str) -> Dict[str, Any]:
    return {
        "repository_name": repository_name,
        "exception_types": "\n".join(exception_types(units)),
    }
