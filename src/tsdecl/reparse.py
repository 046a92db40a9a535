from typing import List, Optional

import tree_sitter as ts
import tree_sitter_typescript as tsts
from pydantic import BaseModel

from tsdecl.errors import ReparseError
from tsdecl.logger import logger

TS_LANGUAGE = ts.Language(tsts.language_typescript())
_parser: Optional[ts.Parser] = None


def _get_parser() -> ts.Parser:
    global _parser
    if _parser is None:
        _parser = ts.Parser(TS_LANGUAGE)
    return _parser


class SyntaxIssue(BaseModel):
    line: int
    column: int
    node_type: str
    missing: bool = False
    text: str = ""


def _collect_issues(node: ts.Node, issues: List[SyntaxIssue]) -> None:
    if node.type == "ERROR" or node.is_missing:
        issues.append(
            SyntaxIssue(
                line=node.start_point[0] + 1,
                column=node.start_point[1] + 1,
                node_type=node.type,
                missing=node.is_missing,
                text=(node.text or b"").decode("utf-8", errors="replace")[:200],
            )
        )
        return
    if not node.has_error:
        return
    for child in node.children:
        _collect_issues(child, issues)


def find_syntax_errors(text: str) -> List[SyntaxIssue]:
    """
    Parse *text* as TypeScript and return every error or missing node.
    """
    tree = _get_parser().parse(text.encode("utf-8"))
    issues: List[SyntaxIssue] = []
    _collect_issues(tree.root_node, issues)
    return issues


def check_syntax(text: str) -> None:
    issues = find_syntax_errors(text)
    if issues:
        logger.warning(
            "Generated TypeScript failed to re-parse",
            issues=[i.model_dump() for i in issues],
        )
        raise ReparseError(issues)
