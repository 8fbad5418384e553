"""
Data models for the Restify Documentation MCP Server
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class CodeExample:
    """A fenced code block extracted from a document"""
    language: str
    code: str
    line_count: int


@dataclass(frozen=True)
class Heading:
    """A Markdown heading with its generated anchor"""
    level: int
    text: str
    anchor: str


@dataclass(frozen=True)
class ParsedDocument:
    """Represents one parsed documentation file"""
    file_path: str
    category: str
    frontmatter: Dict[str, Any]
    title: str
    content: str
    raw_content: str
    code_examples: Tuple[CodeExample, ...]
    headings: Tuple[Heading, ...]
    summary: str
    word_count: int
    estimated_tokens: int


@dataclass(frozen=True)
class HeadingMatch:
    """A heading that contains at least one query term"""
    heading: Heading
    matches: int


@dataclass(frozen=True)
class CodeExampleMatch:
    """A code example that contains at least one query term"""
    example: CodeExample
    matches: int


@dataclass
class ScoredResult:
    """One ranked search hit"""
    document: ParsedDocument
    relevance_score: float
    snippet: str
    matched_headings: List[HeadingMatch] = field(default_factory=list)
    matched_code_examples: List[CodeExampleMatch] = field(default_factory=list)


@dataclass
class CategoryInfo:
    """Documents grouped under one category"""
    name: str
    count: int = 0
    documents: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class ToolResult:
    """Outcome of a tool invocation"""
    text: str
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=True)
