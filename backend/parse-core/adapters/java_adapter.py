"""
backend/parse-core/adapters/java_adapter.py

Java → SourceUnit loader.

Parses one Java compilation unit with javalang and converts it into the
parser-independent node model (cir.nodes):

  - top-level types (class / interface / enum / @interface) with their
    fields, methods, constructors and nested types
  - modifiers, annotations and the attached Javadoc of every declaration
  - type texts rendered from the AST (e.g. "Map<String, List<Item>>")
  - verbatim source texts cut from the token stream for field initializers,
    annotation values and whole declarations (unicode escapes kept as written)

javalang keeps start positions but no end positions, so spans are recovered
by walking the token list from a node's start token.
"""

from __future__ import annotations

import os
import re
from typing import Any, Dict, List, Optional, Tuple

import javalang  # type: ignore
from javalang.tokenizer import Identifier, Modifier  # type: ignore

from cir.nodes import AnnotationNode, SourceNode, SourceUnit
from errors import UnitParseError

_PAIRS = {"(": ")", "{": "}", "[": "]"}
_CLOSERS = {")", "}", "]"}


# \uXXXX escapes, decoded by javalang before tokenizing.
# A backslash preceded by an odd run of backslashes does not start one.
_UNICODE_ESCAPE = re.compile(r"(?<!\\)(?:\\\\)*(\\u+[0-9a-fA-F]{4})")


def _source_offsets(code: str) -> Optional[List[int]]:
    """
    Offset in `code` of every character of the escape-decoded text, plus one
    entry for its end. None when the code has no unicode escapes.
    """
    if "\\u" not in code:
        return None
    offsets: List[int] = []
    last = 0
    for m in _UNICODE_ESCAPE.finditer(code):
        offsets.extend(range(last, m.start(1)))
        offsets.append(m.start(1))
        last = m.end(1)
    offsets.extend(range(last, len(code) + 1))
    return offsets


class _TokenText:
    """
    Token list of one unit plus the text it was read from.
    javalang positions are 1-based (line, column) pairs into the decoded
    text (`data`); texts are cut from the original source.
    """

    def __init__(self, data: str, tokens: List[Any], source: Optional[str] = None) -> None:
        self.data = data
        self.source = data if source is None else source
        self.tokens = tokens
        self._index: Dict[Tuple[int, int], int] = {
            tok.position: i for i, tok in enumerate(tokens)
        }
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", data)]
        self._source_offsets = _source_offsets(self.source) if source is not None else None

    def index_of(self, node) -> int:
        pos = getattr(node, "position", None)
        idx = self._index.get(pos) if pos is not None else None
        if idx is None:
            raise LookupError(f"no start token for {type(node).__name__}")
        return idx

    def value(self, i: int) -> Optional[str]:
        if 0 <= i < len(self.tokens):
            return self.tokens[i].value
        return None

    def offset(self, i: int) -> int:
        line, column = self.tokens[i].position
        return self._line_starts[line - 1] + column - 1

    def text(self, start: int, end: int) -> str:
        if end < start:
            return ""
        lo = self.offset(start)
        hi = self.offset(end) + len(self.tokens[end].value)
        if self._source_offsets is not None:
            lo, hi = self._source_offsets[lo], self._source_offsets[hi]
        return self.source[lo:hi]

    def find(self, start: int, value: str) -> int:
        for j in range(start, len(self.tokens)):
            if self.tokens[j].value == value:
                return j
        raise LookupError(f"{value!r} not found after token {start}")

    def closing(self, i: int) -> int:
        opener = self.tokens[i].value
        closer = _PAIRS[opener]
        depth = 0
        for j in range(i, len(self.tokens)):
            v = self.tokens[j].value
            if v == opener:
                depth += 1
            elif v == closer:
                depth -= 1
                if depth == 0:
                    return j
        raise LookupError(f"unbalanced {opener!r} at {self.tokens[i].position}")

    def declaration_start(self, anchor: int, annotations) -> int:
        """
        javalang anchors declarations after their modifiers and annotations;
        step back over both so the text starts where the source does.
        """
        start = anchor
        for a in annotations or []:
            start = min(start, self.index_of(a))
        while start > 0 and isinstance(self.tokens[start - 1], Modifier):
            start -= 1
        return start

    def declaration_end(self, anchor: int) -> int:
        """Closing brace of the body, or the ';' of a bodiless declaration."""
        depth = 0
        for j in range(anchor, len(self.tokens)):
            v = self.tokens[j].value
            if v in ("(", "["):
                depth += 1
            elif v in (")", "]"):
                depth -= 1
            elif depth == 0 and v == "{":
                return self.closing(j)
            elif depth == 0 and v == ";":
                return j
        return len(self.tokens) - 1

    def statement_end(self, anchor: int) -> int:
        depth = 0
        for j in range(anchor, len(self.tokens)):
            v = self.tokens[j].value
            if v in _PAIRS:
                depth += 1
            elif v in _CLOSERS:
                depth -= 1
            elif depth == 0 and v == ";":
                return j
        return len(self.tokens) - 1


class JavaAdapter:
    """
    Java → SourceUnit builder.
    Invalid sources raise UnitParseError (a ValueError), so project-level
    callers can collect the failure and go on with the next file.
    """

    language = "java"
    extensions = (".java",)

    # ---------------- Types ----------------

    def _type_text(self, t) -> str:
        """
        Render a javalang Type as written:
          int[] / java.util.Map<String, List<Item>> / Outer.Inner<T>
        A missing type is a void return.
        """
        if t is None:
            return "void"

        if isinstance(t, javalang.tree.ReferenceType):
            parts = []
            node = t
            while node is not None:
                part = node.name
                if node.arguments:
                    args = ", ".join(self._type_argument_text(a) for a in node.arguments)
                    part = f"{part}<{args}>"
                parts.append(part)
                node = node.sub_type
            text = ".".join(parts)
        else:
            text = t.name or ""

        return text + "[]" * len(t.dimensions or [])

    def _type_argument_text(self, arg) -> str:
        if arg.type is None:
            return "?"
        inner = self._type_text(arg.type)
        if arg.pattern_type in ("extends", "super"):
            return f"? {arg.pattern_type} {inner}"
        return inner

    # ---------------- Annotations ----------------

    def _annotation_node(self, annotation, src: _TokenText) -> AnnotationNode:
        element = annotation.element
        if element is None:
            return AnnotationNode(name=annotation.name)

        at = src.index_of(annotation)
        open_idx = src.find(at, "(")
        close_idx = src.closing(open_idx)

        is_pairs = (
            isinstance(element, list)
            and element
            and isinstance(element[0], javalang.tree.ElementValuePair)
        )
        if not is_pairs:
            return AnnotationNode(name=annotation.name, value=src.text(open_idx + 1, close_idx - 1))

        # name '=' value [',' name '=' value]*
        starts = [src.index_of(p) for p in element]
        pairs = []
        for k, pair in enumerate(element):
            value_end = starts[k + 1] - 2 if k + 1 < len(starts) else close_idx - 1
            pairs.append((pair.name, src.text(starts[k] + 2, value_end)))
        return AnnotationNode(name=annotation.name, pairs=tuple(pairs))

    def _annotation_nodes(self, annotations, src: _TokenText) -> Tuple[AnnotationNode, ...]:
        return tuple(self._annotation_node(a, src) for a in annotations or [])

    # ---------------- Fields ----------------

    @staticmethod
    def _declarator_at(src: _TokenText, i: int, name: str) -> bool:
        if not 0 <= i < len(src.tokens):
            return False
        tok = src.tokens[i]
        return (
            isinstance(tok, Identifier)
            and tok.value == name
            and src.value(i + 1) in ("=", ",", ";", "[")
        )

    def _first_declarator(self, src: _TokenText, anchor: int, end: int, name: str) -> Optional[int]:
        # '<' and '>' in front of the first name can only be type arguments
        angle = 0
        for i in range(anchor, end):
            v = src.value(i)
            if v == "<":
                angle += 1
            elif v == ">":
                angle -= 1
            elif angle == 0 and self._declarator_at(src, i, name):
                return i
        return None

    def _declarator_boundary(self, src: _TokenText, start: int, end: int, next_name: Optional[str]) -> int:
        depth = 0
        for j in range(start, end):
            v = src.value(j)
            if v in _PAIRS:
                depth += 1
            elif v in _CLOSERS:
                depth -= 1
            elif depth == 0 and v == "," and next_name and self._declarator_at(src, j + 1, next_name):
                return j
        return end

    def _initializer_texts(self, field, src: _TokenText) -> List[Optional[str]]:
        """
        Verbatim initializer text per declarator of `T a = x, b, c = y;`.
        """
        declarators = field.declarators
        texts: List[Optional[str]] = [None] * len(declarators)
        if all(d.initializer is None for d in declarators):
            return texts

        anchor = src.index_of(field)
        end = src.statement_end(anchor)
        names = [d.name for d in declarators]

        i = self._first_declarator(src, anchor, end, names[0])
        if i is None:
            return texts

        for k in range(len(declarators)):
            next_name = names[k + 1] if k + 1 < len(names) else None
            j = i + 1
            while src.value(j) == "[":
                j = src.closing(j) + 1

            if src.value(j) == "=":
                stop = self._declarator_boundary(src, j + 1, end, next_name)
                texts[k] = src.text(j + 1, stop - 1)
            else:
                stop = self._declarator_boundary(src, j, end, next_name)

            if stop >= end:
                break
            i = stop + 1

        return texts

    def _field_node(self, field, src: _TokenText) -> SourceNode:
        base_type = self._type_text(field.type)
        initializers = self._initializer_texts(field, src)

        variables = []
        for decl, init_text in zip(field.declarators, initializers):
            variables.append(
                SourceNode(
                    kind="variable",
                    name=decl.name,
                    type_text=base_type + "[]" * len(decl.dimensions or []),
                    initializer=init_text if decl.initializer is not None else None,
                )
            )

        anchor = src.index_of(field)
        start = src.declaration_start(anchor, field.annotations)
        return SourceNode(
            kind="field",
            type_text=base_type,
            modifiers=frozenset(field.modifiers or ()),
            annotations=self._annotation_nodes(field.annotations, src),
            comment=field.documentation,
            children=tuple(variables),
            text=src.text(start, src.statement_end(anchor)),
        )

    # ---------------- Methods / constructors ----------------

    def _parameter_node(self, p, src: _TokenText) -> SourceNode:
        return SourceNode(
            kind="parameter",
            name=p.name,
            type_text=self._type_text(p.type),
            modifiers=frozenset(p.modifiers or ()),
            annotations=self._annotation_nodes(p.annotations, src),
            varargs=bool(p.varargs),
        )

    def _callable_node(self, kind: str, member, src: _TokenText) -> SourceNode:
        anchor = src.index_of(member)
        start = src.declaration_start(anchor, member.annotations)
        end = src.declaration_end(anchor)

        return_type = None
        if kind == "method":
            return_type = self._type_text(member.return_type)

        return SourceNode(
            kind=kind,
            name=member.name,
            type_text=return_type,
            modifiers=frozenset(member.modifiers or ()),
            annotations=self._annotation_nodes(member.annotations, src),
            comment=member.documentation,
            children=tuple(self._parameter_node(p, src) for p in member.parameters or []),
            type_parameters=tuple(tp.name for tp in member.type_parameters or []),
            throws=tuple(member.throws or ()),
            text=src.text(start, end),
        )

    # ---------------- Type declarations ----------------

    def _member_nodes(self, t, src: _TokenText) -> List[SourceNode]:
        if isinstance(t, javalang.tree.EnumDeclaration):
            body = t.body.declarations if t.body else []
        else:
            body = t.body or []

        # initializer blocks and @interface elements are not modelled
        members: List[SourceNode] = []
        for member in body:
            if isinstance(member, javalang.tree.FieldDeclaration):
                members.append(self._field_node(member, src))
            elif isinstance(member, javalang.tree.MethodDeclaration):
                members.append(self._callable_node("method", member, src))
            elif isinstance(member, javalang.tree.ConstructorDeclaration):
                members.append(self._callable_node("constructor", member, src))
            elif isinstance(member, javalang.tree.TypeDeclaration):
                members.append(self._type_node(member, src))
        return members

    def _type_node(self, t, src: _TokenText) -> SourceNode:
        kind = type(t).__name__.replace("Declaration", "").lower()

        # ClassDeclaration.extends is a single type, InterfaceDeclaration.extends a list
        raw_extends = getattr(t, "extends", None)
        if raw_extends is None:
            extends: Tuple[str, ...] = ()
        elif isinstance(raw_extends, list):
            extends = tuple(self._type_text(e) for e in raw_extends)
        else:
            extends = (self._type_text(raw_extends),)

        implements = tuple(self._type_text(i) for i in getattr(t, "implements", None) or [])
        type_params = tuple(tp.name for tp in getattr(t, "type_parameters", None) or [])

        anchor = src.index_of(t)
        start = src.declaration_start(anchor, t.annotations)

        return SourceNode(
            kind=kind,
            name=t.name,
            modifiers=frozenset(t.modifiers or ()),
            annotations=self._annotation_nodes(t.annotations, src),
            comment=t.documentation,
            children=tuple(self._member_nodes(t, src)),
            extends=extends,
            implements=implements,
            type_parameters=type_params,
            text=src.text(start, src.declaration_end(anchor)),
        )

    # ---------------- Parsing entry points ----------------

    def parse_to_ast(self, code: str):
        """
        Returns (javalang CompilationUnit, token text) or raises UnitParseError.
        """
        tokenizer = javalang.tokenizer.JavaTokenizer(code)
        try:
            tokens = list(tokenizer.tokenize())
            tree = javalang.parser.Parser(tokens).parse()
        except javalang.tokenizer.LexerError as e:
            raise UnitParseError(f"Java lexer error: {e}") from e
        except javalang.parser.JavaSyntaxError as e:
            at = getattr(e.at, "position", None)
            where = f" at line {at[0]}, column {at[1]}" if at else " at end of input"
            raise UnitParseError(f"Java syntax error: {e.description}{where}") from e
        except Exception as e:
            raise UnitParseError(f"Failed to parse Java code: {type(e).__name__}: {e}") from e

        return tree, _TokenText(tokenizer.data, tokens, source=code)

    def build_source_unit(self, code: str, filename: str | None = None) -> SourceUnit:
        """
        Single-compilation-unit helper. The file stem of `filename`, when given,
        names the unit's primary type.
        """
        tree, src = self.parse_to_ast(code)
        package_name = getattr(getattr(tree, "package", None), "name", None) or ""

        primary_name = None
        if filename:
            primary_name = os.path.splitext(os.path.basename(filename))[0]

        return SourceUnit(
            path=filename or "<string>",
            namespace=package_name,
            declarations=tuple(self._type_node(t, src) for t in tree.types),
            primary_name=primary_name,
            language=self.language,
            text=code,
        )

    def load(self, path: str, encoding: str = "utf-8") -> SourceUnit:
        with open(path, "r", encoding=encoding) as f:
            code = f.read()
        return self.build_source_unit(code, filename=path)
