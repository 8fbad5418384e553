"""
navigate-docs: browse the documentation by category
"""

from typing import Dict, Optional

from models import ToolResult
from tool_base import DocumentationTool
from tool_params import NavigateDocsParams

MAX_LIMIT = 50
PREVIEW_DOCUMENTS = 3
PREVIEW_SUMMARY_LENGTH = 100
MAX_MAIN_SECTIONS = 5


class NavigateDocs(DocumentationTool):
    name = "navigate-docs"
    description = (
        "Navigate and browse Laravel Restify documentation by category. Get an overview of the "
        "documentation structure, list the available categories, or browse every document in one "
        "category with its summary, main sections and code example counts."
    )
    params_model = NavigateDocsParams
    failure_prefix = "Navigation failed"

    def run(self, params: NavigateDocsParams) -> ToolResult:
        action = params.action.strip().lower()
        limit = min(params.limit or 20, MAX_LIMIT)

        self.initialize_indexer()

        if action == "overview":
            return self.overview(params.include_content)
        elif action in ("list-categories", "categories"):
            return self.list_categories()
        elif action == "category":
            return self.browse_category(params.category, params.include_content, limit)

        return ToolResult.error('Invalid action. Use "overview", "list-categories", or "category"')

    def overview(self, include_content: bool) -> ToolResult:
        categories = self.indexer.get_categories()
        if not categories:
            return ToolResult.success(
                "No Laravel Restify documentation found.\n\n"
                "Please ensure the Laravel Restify package is installed and documentation is available."
            )

        total = sum(info.count for info in categories.values())
        output = "# Laravel Restify Documentation Overview\n\n"
        output += f"**Total documentation files:** {total}\n"
        output += f"**Categories available:** {len(categories)}\n\n"

        for info in categories.values():
            output += f"## {info.name} ({info.count} document(s))\n\n"

            if include_content and info.documents:
                for doc in info.documents[:PREVIEW_DOCUMENTS]:
                    output += f"- **{doc['title']}**"
                    if doc.get("summary"):
                        output += ": " + doc["summary"][:PREVIEW_SUMMARY_LENGTH] + "..."
                    output += "\n"

                remaining = len(info.documents) - PREVIEW_DOCUMENTS
                if remaining > 0:
                    output += f"- *... and {remaining} more document(s)*\n"

            output += "\n"

        output += "---\n\n"
        output += "**Next steps:**\n"
        output += "- Use `navigate-docs` with action \"category\" to explore a specific category\n"
        output += "- Use `search-restify-docs` to find specific topics\n"
        output += "- Use `get-code-examples` for implementation examples\n"
        return ToolResult.success(output)

    def list_categories(self) -> ToolResult:
        categories = self.indexer.get_categories()
        if not categories:
            return ToolResult.success("No documentation categories found.")

        output = "# Laravel Restify Documentation Categories\n\n"
        for key, info in categories.items():
            output += f"## {key}\n"
            output += f"**Name:** {info.name}\n"
            output += f"**Documents:** {info.count}\n"

            if info.documents:
                titles = [doc["title"] for doc in info.documents[:3]]
                output += "**Sample topics:** " + ", ".join(titles)
                if len(info.documents) > 3:
                    output += " and more..."
            output += "\n\n"

        output += "**Usage:** Use `navigate-docs` with action \"category\" and specify one of the category keys above.\n"
        return ToolResult.success(output)

    def browse_category(self, category: Optional[str], include_content: bool, limit: int) -> ToolResult:
        if not category:
            return ToolResult.error(
                'Category is required when action is "category". Use "list-categories" to see available categories.'
            )

        documents = self.indexer.get_documents_by_category(category)
        if not documents:
            available = ", ".join(self.indexer.get_categories())
            return ToolResult.success(
                f"No documents found in category: **{category}**\n\n**Available categories:** {available}"
            )

        output = f"# {self.indexer.category_name(category)} Documentation\n\n"
        output += f"**Category:** {category}\n"
        output += f"**Total documents:** {len(documents)}\n\n"

        for position, doc in enumerate(documents[:limit], start=1):
            output += f"## {position}. {doc.title}\n"

            if include_content:
                if doc.summary:
                    output += f"**Summary:** {doc.summary}\n\n"

                main_headings = [h for h in doc.headings if h.level <= 3]
                if main_headings:
                    output += "**Main sections:**\n"
                    for heading in main_headings[:MAX_MAIN_SECTIONS]:
                        output += "  " * (heading.level - 1) + f"- {heading.text}\n"
                    output += "\n"

                if doc.code_examples:
                    by_language: Dict[str, int] = {}
                    for example in doc.code_examples:
                        by_language[example.language] = by_language.get(example.language, 0) + 1
                    summary = ", ".join(f"{lang} ({count})" for lang, count in by_language.items())
                    output += f"**Code examples:** {summary}\n\n"

            output += "---\n\n"

        if len(documents) > limit:
            output += (
                f"*Showing first {limit} of {len(documents)} documents. "
                f"{len(documents) - limit} more available.*\n\n"
            )

        output += "**Tools to explore further:**\n"
        output += f"- `search-restify-docs` with category=\"{category}\" for specific topics\n"
        output += f"- `get-code-examples` with category=\"{category}\" for implementation examples\n"
        return ToolResult.success(output)
