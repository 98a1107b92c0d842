"""Default dependency extractor for TypeScript source text.

Parses the file with tree-sitter and reads the four categories of raw
specifiers off the syntax tree:

- ``/// <reference path="..."/>``  -> referenced files
- ``/// <reference types="..."/>`` -> type reference directives
- import / export-from / ``import x = require(...)`` / ``import(...)`` -> imported files
- ``declare module "..."``          -> ambient external modules

``/// <reference no-default-lib="true"/>`` marks the standard library entry.
Text inside string literals, templates and comments is never a specifier.
"""

import logging
import re
from typing import Protocol

import tree_sitter_typescript
from tree_sitter import Language
from tree_sitter import Node
from tree_sitter import Parser

from .models import PreprocessedFile

logger = logging.getLogger(__name__)

TYPESCRIPT = Language(tree_sitter_typescript.language_typescript())

_REFERENCE = re.compile(r"^///\s*<reference\s+(?P<attrs>.*?)/?>")
_ATTRIBUTE = re.compile(r"""(?P<name>[\w-]+)\s*=\s*(?P<q>["'])(?P<value>.*?)(?P=q)""")


class Preprocessor(Protocol):
    """Extractor adapter boundary: text in, categorized specifiers out."""

    def preprocess(self, text: str) -> PreprocessedFile: ...


class TreeSitterPreprocessor:
    """Syntax tree based extractor.

    Triple-slash directives are honoured only in the leading comment block,
    before the first statement. Plain ``require(...)`` calls are not imports;
    only the ``import x = require(...)`` declaration form is.
    """

    def __init__(self) -> None:
        self._parser = Parser(TYPESCRIPT)

    def preprocess(self, text: str) -> PreprocessedFile:
        source = text.encode("utf-8")
        tree = self._parser.parse(source)

        info = PreprocessedFile()
        self._read_directives(tree.root_node, source, info)
        self._read_dependencies(tree.root_node, source, info)
        logger.debug(
            f"[preprocess] refs={len(info.referenced_files)} types={len(info.type_reference_directives)} "
            f"imports={len(info.imported_files)} ambient={len(info.ambient_external_modules)} "
            f"lib={info.is_lib_file}"
        )
        return info

    def _read_directives(self, root: Node, source: bytes, info: PreprocessedFile) -> None:
        for child in root.children:
            if child.type == "hash_bang_line":
                continue
            if child.type != "comment":
                break
            comment = _node_text(child, source)
            if comment.startswith("///"):
                self._read_directive(comment, info)

    def _read_directive(self, comment: str, info: PreprocessedFile) -> None:
        match = _REFERENCE.match(comment)
        if not match:
            return

        attrs = {m.group("name"): m.group("value") for m in _ATTRIBUTE.finditer(match.group("attrs"))}
        if "path" in attrs:
            info.referenced_files.append(attrs["path"])
        elif "types" in attrs:
            info.type_reference_directives.append(attrs["types"])
        elif attrs.get("no-default-lib", "").lower() == "true":
            info.is_lib_file = True

    def _read_dependencies(self, root: Node, source: bytes, info: PreprocessedFile) -> None:
        # pre-order walk keeps source order
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ambient_declaration":
                if (name := _ambient_module_name(node, source)) is not None:
                    info.ambient_external_modules.append(name)
            elif (specifier := _import_specifier(node, source)) is not None:
                info.imported_files.append(specifier)
            stack.extend(reversed(node.children))


def _import_specifier(node: Node, source: bytes) -> str | None:
    if node.type in ("import_statement", "export_statement"):
        string = node.child_by_field_name("source")
    elif node.type == "import_require_clause":
        string = _first_child(node, "string")
    elif node.type == "call_expression":
        function = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        if function is None or function.type != "import" or arguments is None:
            return None
        if len(arguments.named_children) != 1:
            return None
        string = _first_child(arguments, "string")
    else:
        return None

    if string is None or string.type != "string":
        return None
    return _string_value(string, source)


def _ambient_module_name(node: Node, source: bytes) -> str | None:
    module = _first_child(node, "module")
    if module is None:
        return None
    name = module.child_by_field_name("name")
    if name is None or name.type != "string":
        return None
    return _string_value(name, source)


def _first_child(node: Node, node_type: str) -> Node | None:
    for child in node.named_children:
        if child.type == node_type:
            return child
    return None


def _node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8")


def _string_value(node: Node, source: bytes) -> str:
    # strip the quotes
    return _node_text(node, source)[1:-1]
