"""Readers that turn one ``apis`` entry into Swagger fragments."""
from __future__ import annotations

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, ClassVar, Dict, Iterator, Optional, Type

import yaml

from ..registry import DescriptorRegistry
from ..utils.errors import FragmentError, SourceReadError, UnsupportedSourceError
from .comments import Dialect, extract_comments, parse_comment
from .fragments import Fragment, FragmentLoader, load_fragments, validate_fragment

log = logging.getLogger(__name__)

Compiler = Callable[[str], str]

COFFEE_COMMAND = ("coffee", "--compile", "--print", "--bare", "--stdio")


def compile_coffee(source: str) -> str:
    """Compile CoffeeScript to JavaScript with the ``coffee`` executable."""

    if shutil.which(COFFEE_COMMAND[0]) is None:
        raise SourceReadError("The 'coffee' executable is not on PATH.")
    result = subprocess.run(
        list(COFFEE_COMMAND),
        input=source,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise SourceReadError(f"coffee exited with {result.returncode}: {result.stderr.strip()}")
    return result.stdout


class ApiSource(ABC):
    """One documented file; yields its fragments in source order."""

    extension: ClassVar[str]

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read_text(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SourceReadError(f"Cannot read {self.path}: {exc}") from exc

    @abstractmethod
    def fragments(self) -> Iterator[Fragment]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"


class _CommentSource(ApiSource):
    dialect: ClassVar[Dialect]

    def javascript(self) -> str:
        return self.read_text()

    def fragments(self) -> Iterator[Fragment]:
        source = str(self.path)
        docs = [parse_comment(block) for block in extract_comments(self.javascript(), self.dialect)]
        for doc in docs:
            found = load_fragments(doc.tags, source=source)
            if not found:
                continue
            yield from found


class NativeSource(_CommentSource):
    extension = ".js"
    dialect = Dialect.NATIVE


class TranspiledSource(_CommentSource):
    extension = ".coffee"
    dialect = Dialect.TRANSPILED

    def __init__(self, path: str | Path, compiler: Optional[Compiler] = None):
        super().__init__(path)
        self.compiler = compiler or compile_coffee

    def javascript(self) -> str:
        return self.compiler(self.read_text())


class StructuredSource(ApiSource):
    extension = ".yml"

    def fragments(self) -> Iterator[Fragment]:
        source = str(self.path)
        try:
            document = yaml.load(self.read_text(), Loader=FragmentLoader)
        except yaml.YAMLError as exc:
            raise FragmentError(f"{source}: {exc}") from exc
        if document is None:
            return
        yield validate_fragment(document, source=source)


SOURCE_TYPES: Dict[str, Type[ApiSource]] = {
    NativeSource.extension: NativeSource,
    TranspiledSource.extension: TranspiledSource,
    StructuredSource.extension: StructuredSource,
}


def source_for(path: str | Path, *, coffee_compiler: Optional[Compiler] = None) -> ApiSource:
    """Pick the reader for *path* by extension, failing before any I/O when unsupported."""

    extension = Path(path).suffix
    source_type = SOURCE_TYPES.get(extension)
    if source_type is None:
        raise UnsupportedSourceError(extension)
    if source_type is TranspiledSource:
        return TranspiledSource(path, compiler=coffee_compiler)
    return source_type(path)


def read_api(
    path: str | Path,
    registry: DescriptorRegistry,
    *,
    coffee_compiler: Optional[Compiler] = None,
) -> int:
    """Merge every fragment found in *path* into *registry*; return how many merged."""

    source = source_for(path, coffee_compiler=coffee_compiler)
    log.info("source.read", extra={"path": str(source.path), "reader": type(source).__name__})
    merged = 0
    for fragment in source.fragments():
        registry.merge(fragment)
        merged += 1
    log.debug("source.merged", extra={"path": str(source.path), "fragments": merged})
    return merged


__all__ = [
    "ApiSource",
    "COFFEE_COMMAND",
    "Compiler",
    "NativeSource",
    "SOURCE_TYPES",
    "StructuredSource",
    "TranspiledSource",
    "compile_coffee",
    "read_api",
    "source_for",
]
