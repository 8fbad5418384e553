"""Request models (Pydantic *Params classes) for the MCP tools."""

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

# ============ DOCUMENTATION TOOLS ============


class SearchDocsParams(BaseModel):
    """Parameters for search-restify-docs."""

    queries: List[str] = Field(
        ...,
        description=(
            "List of search queries to perform. For questions like \"how many types of filters\", "
            "use [\"filter types\", \"filtering\", \"match filters\"]. Pass multiple queries if you "
            "aren't sure about exact terminology."
        ),
    )
    question_type: Optional[Literal["count", "list", "howto", "concept", "example"]] = Field(
        default=None,
        description=(
            "Type of question being asked: \"count\" (how many types), \"list\" (what are available), "
            "\"howto\" (how to do something), \"concept\" (explain concept), \"example\" (show examples)"
        ),
    )
    category: Optional[str] = Field(
        default=None,
        description="Limit search to specific category: installation, repositories, fields, filters, auth, actions, performance, testing",
    )
    limit: Optional[int] = Field(
        default=None, ge=1, description="Maximum number of results to return per query (default: 10, max: 50)"
    )
    token_limit: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum number of tokens to return in the response. Defaults to 10,000 tokens, maximum 100,000 tokens.",
    )


class CodeExamplesParams(BaseModel):
    """Parameters for get-code-examples."""

    topic: str = Field(
        ...,
        description="The topic or feature you need code examples for (e.g., \"repository\", \"field validation\", \"custom filter\")",
    )
    language: Optional[str] = Field(
        default=None, description="Filter by programming language (php, javascript, json, yaml, etc.)"
    )
    category: Optional[str] = Field(default=None, description="Limit to specific documentation category")
    limit: Optional[int] = Field(
        default=None, ge=1, description="Maximum number of examples to return (default: 10, max: 25)"
    )
    include_context: bool = Field(
        default=True, description="Include surrounding documentation context for each example"
    )


class NavigateDocsParams(BaseModel):
    """Parameters for navigate-docs."""

    action: str = Field(
        ...,
        description=(
            "Navigation action: \"overview\" for documentation structure, \"category\" to browse a "
            "specific category, \"list-categories\" to see all available categories"
        ),
    )
    category: Optional[str] = Field(
        default=None, description="Specific category to browse (required when action is \"category\")"
    )
    include_content: bool = Field(default=True, description="Include document summaries and content previews")
    limit: Optional[int] = Field(
        default=None, ge=1, description="Maximum number of documents to show per category (default: 20)"
    )


# ============ CODE GENERATION TOOLS ============


class GenerateRepositoryParams(BaseModel):
    """Parameters for generate-repository."""

    model_name: str = Field(
        ..., description="Name of the Eloquent model to generate repository for (e.g., \"User\", \"BlogPost\")"
    )
    include_fields: bool = Field(default=True, description="Generate fields from the model's migration schema")
    include_relationships: bool = Field(
        default=True, description="Generate relationships (BelongsTo/HasMany) from schema analysis"
    )
    repository_name: Optional[str] = Field(
        default=None, description="Override default repository name (default: {Model}Repository)"
    )
    namespace: Optional[str] = Field(
        default=None, description="Override default namespace (auto-detected from existing repositories)"
    )
    force: bool = Field(default=False, description="Overwrite existing repository file if it exists")


class GenerateActionParams(BaseModel):
    """Parameters for generate-action."""

    action_name: str = Field(
        ..., description="Name of the action class (e.g., \"PublishPost\", \"DisableProfile\")"
    )
    action_type: str = Field(
        default="index",
        description="Type of action: \"index\", \"show\", \"standalone\", \"invokable\" or \"destructive\"",
    )
    model_name: Optional[str] = Field(default=None, description="Model this action works with")
    validation_rules: Optional[Dict[str, Union[str, List[str]]]] = Field(
        default=None, description="Validation rules for the action payload as key-value pairs"
    )
    uri_key: Optional[str] = Field(default=None, description="Custom URI key for the action")
    namespace: Optional[str] = Field(
        default=None, description="Override default namespace (auto-detected from existing actions)"
    )
    force: bool = Field(default=False, description="Overwrite existing action file if it exists")


class GenerateGetterParams(BaseModel):
    """Parameters for generate-getter."""

    getter_name: str = Field(..., description="Name of the getter class (e.g., \"StripeInformation\")")
    getter_type: str = Field(
        default="extended",
        description="Type of getter: \"invokable\" (__invoke method) or \"extended\" (extends Getter)",
    )
    scope: str = Field(default="both", description="Getter scope: \"index\", \"show\" or \"both\"")
    model_name: Optional[str] = Field(default=None, description="Model this getter works with")
    uri_key: Optional[str] = Field(default=None, description="Custom URI key for the getter")
    namespace: Optional[str] = Field(
        default=None, description="Override default namespace (auto-detected from existing getters)"
    )
    force: bool = Field(default=False, description="Overwrite existing getter file if it exists")


class GenerateMatchFilterParams(BaseModel):
    """Parameters for generate-match-filter."""

    name: str = Field(..., description="The name of the match filter class (e.g., ActivePostMatchFilter)")
    attribute: str = Field(..., description="The database attribute/column to filter on")
    type: str = Field(
        default="string",
        description="The match filter type: string, int, integer, bool, boolean, datetime, between, array, custom",
    )
    partial: bool = Field(default=False, description="Use partial matching (LIKE queries) for text fields")
    custom_logic: Optional[str] = Field(
        default=None, description="Custom filtering logic description (only when type is custom)"
    )
    repository: Optional[str] = Field(default=None, description="The repository class to add the filter to")
    namespace: Optional[str] = Field(
        default=None, description="Override default namespace (auto-detected from existing filters)"
    )
    force: bool = Field(default=False, description="Overwrite existing filter file if it exists")
