from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Literal, Optional, Tuple

NodeKind = Literal[
    # type declarations
    "class", "interface", "enum", "record", "annotation",
    # top-level forms that are not types
    "function", "statement",
    # members
    "field", "variable", "method", "constructor", "parameter",
]

TYPE_KINDS: FrozenSet[str] = frozenset({"class", "interface", "enum", "record", "annotation"})


@dataclass(frozen=True)
class AnnotationNode:
    """
    An annotation as written on a declaration.
      - value: rendered text of a single unnamed element, e.g. "\"unchecked\""
      - pairs: rendered (name, value) element pairs, e.g. (("min", "1"),)
    Both empty means a marker annotation.
    """
    name: str
    value: Optional[str] = None
    pairs: Tuple[Tuple[str, str], ...] = ()


@dataclass(frozen=True)
class SourceNode:
    """
    Parser-independent syntax node.
    Loaders fill in only the attributes that make sense for the node kind;
    texts (types, initializers, annotation values) are kept as written.
    """
    kind: NodeKind
    name: str = ""
    type_text: Optional[str] = None        # field/parameter type, method return type
    modifiers: FrozenSet[str] = frozenset()
    annotations: Tuple[AnnotationNode, ...] = ()
    comment: Optional[str] = None          # raw structured comment attached before the node
    children: Tuple["SourceNode", ...] = ()
    initializer: Optional[str] = None      # variables only
    varargs: bool = False                  # parameters only
    extends: Tuple[str, ...] = ()
    implements: Tuple[str, ...] = ()
    type_parameters: Tuple[str, ...] = ()
    throws: Tuple[str, ...] = ()
    text: str = ""

    def children_of(self, kind: str) -> List["SourceNode"]:
        return [c for c in self.children if c.kind == kind]


@dataclass(frozen=True)
class SourceUnit:
    path: str
    namespace: str = ""
    declarations: Tuple[SourceNode, ...] = ()
    primary_name: Optional[str] = None     # e.g. "Foo" for Foo.java; None if unknown
    language: str = "java"
    text: str = ""


@dataclass(frozen=True)
class ParseFailure:
    path: str
    message: str
