from __future__ import annotations

from typing import Dict, Iterable

from cir.nodes import AnnotationNode


def annotation_value(annotation: AnnotationNode) -> str:
    if annotation.pairs:
        return ", ".join(f"{name}={value}" for name, value in annotation.pairs)
    if annotation.value is not None:
        return annotation.value
    return ""


def extract_annotations(annotations: Iterable[AnnotationNode]) -> Dict[str, str]:
    """
    Map annotation name -> value expression text.
    A repeated name keeps its last occurrence.
    """
    result: Dict[str, str] = {}
    for a in annotations:
        result[a.name] = annotation_value(a)
    return result
