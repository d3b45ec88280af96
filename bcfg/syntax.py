"""
Tree-sitter parsing of generated sources.
Used to verify that generated files are syntactically valid Kotlin/Java.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

from tree_sitter import Language as TSLanguage, Node, Parser, Tree

from .types import Language


class SourceDocument(ABC):
    """
    Wrapper for a Tree-sitter parsed source file.
    """

    def __init__(self, text: str):
        self.text = text
        self._text_bytes = text.encode("utf-8")
        self.tree: Optional[Tree] = Parser(self.get_language()).parse(self._text_bytes)

    @abstractmethod
    def get_language(self) -> TSLanguage:
        pass

    @property
    def root_node(self) -> Node:
        if not self.tree:
            raise RuntimeError("Document not parsed")
        return self.tree.root_node

    def find_nodes_by_type(self, node_type: str, start_node: Optional[Node] = None) -> List[Node]:
        """Find all nodes of a specific type, depth-first."""
        results: List[Node] = []

        def visit(node: Node) -> None:
            if node.type == node_type:
                results.append(node)
            for child in node.children:
                visit(child)

        visit(start_node or self.root_node)
        return results

    def get_node_text(self, node: Node) -> str:
        return self._text_bytes[node.start_byte:node.end_byte].decode("utf-8")

    def has_error(self) -> bool:
        if not self.tree:
            return True
        return self.root_node.has_error

    def error_locations(self) -> List[str]:
        """Human readable `line:column` descriptions of ERROR and MISSING nodes."""
        out: List[str] = []

        def visit(node: Node) -> None:
            row, col = node.start_point[0] + 1, node.start_point[1] + 1
            if node.is_missing:
                out.append(f"{row}:{col}: missing {node.type}")
            elif node.type == "ERROR":
                out.append(f"{row}:{col}: unexpected {self.get_node_text(node)[:40]!r}")
                return
            for child in node.children:
                visit(child)

        if self.has_error():
            visit(self.root_node)
        return out


class KotlinDocument(SourceDocument):

    def get_language(self) -> TSLanguage:
        import tree_sitter_kotlin as tskotlin
        return TSLanguage(tskotlin.language())


class JavaDocument(SourceDocument):

    def get_language(self) -> TSLanguage:
        import tree_sitter_java as tsjava
        return TSLanguage(tsjava.language())


_DOCUMENTS: Dict[Language, Type[SourceDocument]] = {
    Language.KOTLIN: KotlinDocument,
    Language.JAVA: JavaDocument,
}


def parse_source(text: str, language: Language) -> SourceDocument:
    return _DOCUMENTS[Language(language)](text)


def check_source(text: str, language: Language) -> List[str]:
    """Syntax problems of `text`; empty when it parses cleanly."""
    doc = parse_source(text, language)
    errors = doc.error_locations()
    if doc.has_error() and not errors:
        errors.append("unparseable source")
    return errors


__all__ = [
    "SourceDocument",
    "KotlinDocument",
    "JavaDocument",
    "parse_source",
    "check_source",
]
