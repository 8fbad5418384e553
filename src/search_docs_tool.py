"""
search-restify-docs: ranked full-text search over the documentation
"""

import re
from typing import Dict, List, Optional

from doc_parser import estimate_tokens
from models import ScoredResult, ToolResult
from tool_base import DocumentationTool
from tool_params import SearchDocsParams

COMMON_TERMS = {
    "Filter types": ["filter", "match", "search", "sorting"],
    "Field types": ["field", "validation", "input", "form"],
    "Repository methods": ["repository", "crud", "store", "update"],
    "Relationships": ["relationship", "belongs", "has", "morph"],
    "Authentication": ["auth", "policy", "authorization", "permission"],
    "Actions": ["action", "custom", "bulk", "operation"],
}

QUESTION_INTROS = {
    "count": (
        "## Answering: Types and Counts\n"
        "Based on your question about **how many types** or **what types are available**, here's what I found:\n\n"
    ),
    "list": (
        "## Available Options\n"
        "Here are the **available options** and **types** found in Laravel Restify:\n\n"
    ),
    "howto": "## Implementation Guide\nHere's **how to implement** what you're looking for:\n\n",
    "concept": "## Concept Explanation\nHere's an **explanation of the concept** you asked about:\n\n",
    "example": "## Code Examples\nHere are **practical examples** for your use case:\n\n",
}

RELATIONSHIP_TYPES = [
    "BelongsTo", "HasOne", "HasMany", "BelongsToMany", "MorphOne", "MorphMany", "MorphToMany",
]

LINKED_LIST_ITEM = re.compile(r"^- \[([^\]]+)\]", re.MULTILINE)
AVAILABLE_TYPES = re.compile(r"Available types:\s*\n((?:- [^\n]+\n?)+)", re.IGNORECASE)
TYPE_LIST_ITEM = re.compile(r"^- ([^(\n]+)", re.MULTILINE)
FIELD_TYPE = re.compile(r"([A-Z][a-zA-Z]+)::\s*make|'([A-Z][a-zA-Z]+)'|([A-Z][a-zA-Z]+)\s*field")
MAX_SUMMARY_TYPES = 10


class SearchRestifyDocs(DocumentationTool):
    name = "search-restify-docs"
    description = (
        "Search Laravel Restify documentation for specific topics, methods, concepts, or questions. "
        "This tool automatically handles questions like \"how many types of filters\", \"what are the "
        "available field types\", \"how to create repositories\", etc. It searches through installation, "
        "repositories, fields, filters, authentication, actions, and performance guides.\n"
        "IMPORTANT: Always use this tool first when users ask any questions about Laravel Restify concepts, "
        "features, usage, or implementation. Use multiple queries if unsure about terminology "
        "(e.g., [\"validation\", \"validate\"], [\"filter types\", \"filtering options\"])."
    )
    params_model = SearchDocsParams
    failure_prefix = "Search failed"

    def run(self, params: SearchDocsParams) -> ToolResult:
        min_length = int(self.config_manager.get("search.min_query_length", 2))
        queries = [q.strip() for q in params.queries if len(q.strip()) >= min_length]
        if not queries:
            return ToolResult.error(f"At least one valid query is required (minimum {min_length} characters)")

        limit = self.capped_limit(
            params.limit, "search.default_limit", 10, int(self.config_manager.get("search.max_limit", 50))
        )
        token_limit = self.capped_limit(
            params.token_limit,
            "optimization.default_token_limit",
            10000,
            int(self.config_manager.get("optimization.max_token_limit", 100000)),
        )

        self.initialize_indexer()

        all_results: Dict[str, List[ScoredResult]] = {}
        for query in queries:
            all_results[query] = self.indexer.search(query, params.category, limit)

        if not any(all_results.values()):
            return self.no_results(queries, params.category)

        return ToolResult.success(
            self.format_results(all_results, token_limit, params.question_type)
        )

    def no_results(self, queries: List[str], category: Optional[str]) -> ToolResult:
        suggestions = []
        categories = self.indexer.get_categories()
        if categories:
            suggestions.append("**Available categories:** " + ", ".join(categories))

        suggestions.append("**Try these topic-based searches:**")
        for topic, terms in COMMON_TERMS.items():
            suggestions.append(f"- {topic}: " + ", ".join(terms))

        message = "No results found for queries: **" + "**, **".join(queries) + "**"
        if category:
            message += f" in category: **{category}**"

        return ToolResult.success(message + "\n\n" + "\n".join(suggestions))

    def format_results(
        self, all_results: Dict[str, List[ScoredResult]], token_limit: int, question_type: Optional[str] = None
    ) -> str:
        output = "# Laravel Restify Documentation Search Results\n\n"
        output += QUESTION_INTROS.get(question_type or "", "")

        include_code = bool(self.config_manager.get("optimization.prioritize_code_examples", True))
        current_tokens = 0
        truncated = False

        for query, results in all_results.items():
            if not results:
                continue

            query_section = f"## Query: \"{query}\"\n\nFound {len(results)} result(s)\n\n"
            if question_type in ("count", "list"):
                summary = self.summarize_types(results)
                if summary:
                    query_section += summary + "\n\n"

            for position, result in enumerate(results, start=1):
                section = self._format_result(position, result, include_code)
                tokens = estimate_tokens(section)
                if current_tokens + tokens > token_limit:
                    truncated = True
                    break
                query_section += section
                current_tokens += tokens

            output += query_section
            if truncated:
                output += f"*Results truncated due to token limit ({token_limit} tokens)*\n"
                break

        output += "\n---\n\n"
        output += "**Tips for better results:**\n"
        output += "- Use specific terms related to your Laravel Restify need\n"
        output += "- Combine multiple queries for broader coverage\n"
        output += "- Specify a category to narrow results\n"
        output += "- Use tools like `get-code-examples` for more detailed code samples\n"
        return output

    @staticmethod
    def _format_result(position: int, result: ScoredResult, include_code: bool) -> str:
        doc = result.document
        section = f"### {position}. {doc.title}\n"
        section += f"**Category:** {doc.category} | **Relevance:** {result.relevance_score}\n\n"

        if result.snippet:
            section += f"**Summary:** {result.snippet}\n\n"

        if result.matched_headings:
            section += "**Relevant sections:**\n"
            for match in result.matched_headings[:3]:
                section += f"- {match.heading.text}\n"
            section += "\n"

        if include_code and result.matched_code_examples:
            section += "**Code examples:**\n"
            for match in result.matched_code_examples[:2]:
                section += f"```{match.example.language}\n{match.example.code}\n```\n\n"

        return section + "---\n\n"

    @staticmethod
    def summarize_types(results: List[ScoredResult]) -> str:
        """Enumerate filter, field and relationship types mentioned in the hits"""
        types: List[str] = []
        for result in results:
            doc = result.document
            haystack = (doc.title + " " + doc.content).lower()
            # list markers live in the raw Markdown, cleaned content drops links
            source = doc.raw_content

            if "filter" in haystack:
                types.extend(m.strip() for m in LINKED_LIST_ITEM.findall(source))
                block = AVAILABLE_TYPES.search(source)
                if block:
                    types.extend(m.strip() for m in TYPE_LIST_ITEM.findall(block.group(1)))

            if "field" in haystack:
                for groups in FIELD_TYPE.findall(source):
                    types.extend(g for g in groups if g)

            if "relation" in haystack:
                lowered = source.lower()
                types.extend(r for r in RELATIONSHIP_TYPES if r.lower() in lowered)

        unique = list(dict.fromkeys(t for t in types if t))
        if not unique:
            return ""

        summary = f"**Quick Summary:**\nFound **{len(unique)}** types: " + ", ".join(unique[:MAX_SUMMARY_TYPES])
        if len(unique) > MAX_SUMMARY_TYPES:
            summary += f" (and {len(unique) - MAX_SUMMARY_TYPES} more)"
        return summary
