import os
from typing import Dict, Union

from adapters.java_adapter import JavaAdapter
from cir.nodes import ParseFailure, SourceUnit

java_adapter = JavaAdapter()

ADAPTERS: Dict[str, JavaAdapter] = {ext: java_adapter for ext in java_adapter.extensions}

LoadResult = Union[SourceUnit, ParseFailure]


def adapter_for(filename: str | None):
    if not filename:
        return None
    return ADAPTERS.get(os.path.splitext(filename)[1].lower())


def parse_source(code: str, filename: str | None = None) -> LoadResult:
    """
    Source text -> SourceUnit. Without a filename the text is taken as Java.
    Parse errors come back as ParseFailure instead of being raised.
    """
    adapter = adapter_for(filename) if filename else java_adapter
    if adapter is None:
        return ParseFailure(path=filename, message=f"Unsupported file type: {filename}")

    try:
        return adapter.build_source_unit(code, filename=filename)
    except ValueError as e:
        return ParseFailure(path=filename or "<string>", message=str(e))


def load_source(path: str, encoding: str = "utf-8") -> LoadResult:
    adapter = adapter_for(path)
    if adapter is None:
        return ParseFailure(path=path, message=f"Unsupported file type: {path}")

    try:
        return adapter.load(path, encoding=encoding)
    except OSError as e:
        return ParseFailure(path=path, message=f"Cannot read file: {e}")
    except ValueError as e:
        # UnitParseError and UnicodeDecodeError
        return ParseFailure(path=path, message=str(e))
