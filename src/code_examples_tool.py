"""
get-code-examples: code blocks from matching documents, re-ranked by topic
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from models import CodeExample, ParsedDocument, ScoredResult, ToolResult
from tool_base import DocumentationTool
from tool_params import CodeExamplesParams

SEARCH_LIMIT = 50
MAX_EXAMPLES = 25
DOC_WEIGHT = 0.7
CODE_WEIGHT = 0.3
MAX_CONTEXT_LINES = 3
LONG_EXAMPLE_LINES = 20


@dataclass
class RankedExample:
    """A code example with its blended relevance"""
    example: CodeExample
    document: ParsedDocument
    relevance_score: float
    context: str


def code_relevance(code: str, topic: str) -> float:
    """One point per topic term in the code, half more on a whole-word hit, damped by length"""
    code = code.lower()
    relevance = 0.0
    for term in topic.lower().split(" "):
        if term not in code:
            continue
        relevance += 1
        if re.search(r"\b" + re.escape(term) + r"\b", code):
            relevance += 0.5

    return relevance / (len(code) / 100 + 1)


def code_context(doc: ParsedDocument, code: str) -> str:
    """Up to three non-empty lines written right above the code block"""
    position = doc.raw_content.find(code)
    if position == -1:
        return ""

    context_lines: List[str] = []
    for line in reversed(doc.raw_content[:position].split("\n")):
        line = line.strip()
        if not line or line.startswith("```"):
            continue

        context_lines.append(line)
        if len(context_lines) >= MAX_CONTEXT_LINES or line.startswith("#"):
            break

    return " ".join(reversed(context_lines))


class GetCodeExamples(DocumentationTool):
    name = "get-code-examples"
    description = (
        "Extract specific code examples from Laravel Restify documentation. Perfect for finding "
        "implementation patterns, configuration examples, and usage demonstrations. Supports filtering "
        "by programming language and category, and includes the documentation text around each example."
    )
    params_model = CodeExamplesParams
    failure_prefix = "Failed to get code examples"

    def run(self, params: CodeExamplesParams) -> ToolResult:
        topic = params.topic.strip()
        if not topic:
            return ToolResult.error("Topic is required")

        limit = min(params.limit or 10, MAX_EXAMPLES)

        self.initialize_indexer()

        results = self.indexer.search(topic, params.category, SEARCH_LIMIT)
        if not results:
            return self.no_documentation(topic, params.category)

        examples = self.rank_examples(results, params.language, topic)
        if not examples:
            return self.no_code_examples(topic, params.language)

        return ToolResult.success(self.format_examples(examples[:limit], topic, params.include_context))

    def rank_examples(
        self, results: List[ScoredResult], language: Optional[str], topic: str
    ) -> List[RankedExample]:
        ranked = []
        for result in results:
            doc = result.document
            for example in doc.code_examples:
                if language is not None and example.language.lower() != language.lower():
                    continue

                blended = result.relevance_score * DOC_WEIGHT + code_relevance(example.code, topic) * CODE_WEIGHT
                ranked.append(
                    RankedExample(
                        example=example,
                        document=doc,
                        relevance_score=round(blended, 2),
                        context=code_context(doc, example.code),
                    )
                )

        ranked.sort(key=lambda item: item.relevance_score, reverse=True)
        return ranked

    def format_examples(self, examples: List[RankedExample], topic: str, include_context: bool) -> str:
        output = f"# Laravel Restify Code Examples: {topic}\n\n"
        output += f"Found {len(examples)} relevant code example(s)\n\n"

        for position, item in enumerate(examples, start=1):
            output += f"## {position}. {item.document.title}\n"
            output += f"**Category:** {item.document.category} | **Relevance:** {item.relevance_score}\n\n"

            if include_context and item.context:
                output += f"**Context:** {item.context}\n\n"

            output += f"```{item.example.language}\n{item.example.code}\n```\n\n"

            if item.example.line_count > LONG_EXAMPLE_LINES:
                output += f"*This is a {item.example.line_count}-line example*\n\n"

            output += "---\n\n"

        output += "**Tips:**\n"
        output += "- Adapt these examples to your specific use case\n"
        output += "- Check the full documentation for additional context\n"
        output += "- Use `search-restify-docs` for more detailed explanations\n"
        return output

    @staticmethod
    def no_documentation(topic: str, category: Optional[str]) -> ToolResult:
        message = f"No documentation found for topic: **{topic}**"
        if category:
            message += f" in category: **{category}**"

        message += "\n\n**Suggestions:**\n"
        message += "- Try broader search terms (e.g., 'repository' instead of 'custom repository pattern')\n"
        message += "- Check available categories with the search tool\n"
        message += "- Use `search-restify-docs` to explore available documentation\n"
        return ToolResult.success(message)

    @staticmethod
    def no_code_examples(topic: str, language: Optional[str]) -> ToolResult:
        message = f"No code examples found for topic: **{topic}**"
        if language:
            message += f" in language: **{language}**"

        message += "\n\n**Suggestions:**\n"
        message += "- Try without language filter to see all available examples\n"
        message += "- Check if documentation uses different terminology\n"
        message += "- Use `search-restify-docs` to find conceptual information\n"
        return ToolResult.success(message)
