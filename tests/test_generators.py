import pytest

from code_templates import ArtifactKind, filter_logic, render_artifact
from config import ConfigurationManager
from conftest import write
from generate_action_tool import GenerateAction
from generate_getter_tool import GenerateGetter
from generate_match_filter_tool import GenerateMatchFilter
from generate_repository_tool import GenerateRepository, field_for_column
from naming import camel, ensure_suffix, kebab, plural, singular, snake, studly
from project_scanner import default_table_name, find_artifact_location, find_model
from schema_inspector import Column, SchemaInspector

USER_MODEL = """
    <?php

    namespace App\\Models;

    use Illuminate\\Foundation\\Auth\\User as Authenticatable;

    class User extends Authenticatable
    {
    }
"""

POST_MODEL = """
    <?php

    namespace App\\Models;

    use Illuminate\\Database\\Eloquent\\Model;

    class Post extends Model
    {
    }
"""

USERS_MIGRATION = """
    <?php

    return new class extends Migration
    {
        public function up(): void
        {
            Schema::create('users', function (Blueprint $table) {
                $table->id();
                $table->string('name');
                $table->string('email')->unique();
                $table->timestamp('email_verified_at')->nullable();
                $table->string('password');
                $table->rememberToken();
                $table->timestamps();
            });
        }

        public function down(): void
        {
            Schema::dropIfExists('users');
        }
    };
"""

POSTS_MIGRATION = """
    <?php

    return new class extends Migration
    {
        public function up(): void
        {
            Schema::create('posts', function (Blueprint $table) {
                $table->id();
                $table->foreignId('user_id')->constrained();
                $table->string('title');
                $table->text('body')->nullable();
                $table->boolean('published');
                $table->timestamps();
            });
        }

        public function down(): void
        {
            Schema::table('posts', function (Blueprint $table) {
                $table->string('ghost');
            });
        }
    };
"""


@pytest.fixture
def laravel(tmp_path):
    write(tmp_path / "app" / "Models" / "User.php", USER_MODEL)
    write(tmp_path / "app" / "Models" / "Post.php", POST_MODEL)
    write(tmp_path / "database" / "migrations" / "2014_10_12_000000_create_users_table.php", USERS_MIGRATION)
    write(tmp_path / "database" / "migrations" / "2024_01_01_000000_create_posts_table.php", POSTS_MIGRATION)
    return tmp_path


@pytest.fixture
def manager(laravel):
    return ConfigurationManager(project_root=laravel)


def test_naming_helpers():
    assert studly("post_comment") == "PostComment"
    assert camel("blog-post") == "blogPost"
    assert snake("PostComment") == "post_comment"
    assert kebab("StripeInformation") == "stripe-information"
    assert plural("category") == "categories"
    assert plural("box") == "boxes"
    assert plural("Person") == "People"
    assert singular("categories") == "category"
    assert singular("posts") == "post"
    assert singular("address") == "address"
    assert singular("status") == "status"
    assert singular("statuses") == "status"
    assert ensure_suffix("Publish", "Action") == "PublishAction"
    assert ensure_suffix("PublishAction", "Action") == "PublishAction"


def test_default_table_name():
    assert default_table_name("User") == "users"
    assert default_table_name("BlogCategory") == "blog_categories"


def test_artifact_location_defaults(tmp_path):
    location = find_artifact_location(tmp_path, "app", "Repository", "Restify")

    assert location.namespace == "App\\Restify"
    assert location.base_path == tmp_path / "app" / "Restify"


def test_artifact_location_prefers_most_common_directory(tmp_path):
    write(tmp_path / "app" / "Restify" / "UserRepository.php", "<?php")
    write(tmp_path / "app" / "Http" / "Restify" / "PostRepository.php", "<?php")
    write(tmp_path / "app" / "Http" / "Restify" / "TagRepository.php", "<?php")
    write(tmp_path / "app" / "tests" / "A" / "ARepository.php", "<?php")
    write(tmp_path / "app" / "tests" / "A" / "BRepository.php", "<?php")
    write(tmp_path / "app" / "tests" / "A" / "CRepository.php", "<?php")

    location = find_artifact_location(tmp_path, "app", "Repository", "Restify")

    assert location.namespace == "App\\Http\\Restify"
    assert location.base_path == tmp_path / "app" / "Http" / "Restify"


def test_artifact_location_deepest_directory_wins_ties(tmp_path):
    write(tmp_path / "app" / "Restify" / "UserRepository.php", "<?php")
    write(tmp_path / "app" / "Restify" / "Blog" / "PostRepository.php", "<?php")

    location = find_artifact_location(tmp_path, "app", "Repository", "Restify")

    assert location.namespace == "App\\Restify\\Blog"


def test_find_model_accepts_plural_names(laravel):
    model = find_model(laravel, "app", "Posts")

    assert model.class_name == "App\\Models\\Post"
    assert model.base_name == "Post"
    assert model.table == "posts"


def test_find_model_prefers_models_namespace_and_reads_table(tmp_path):
    write(tmp_path / "app" / "Domain" / "Post.php", "<?php\nnamespace App\\Domain;\nclass Post extends Model {}")
    write(
        tmp_path / "app" / "Models" / "Post.php",
        "<?php\nnamespace App\\Models;\nclass Post extends Model\n{\n    protected $table = 'blog_posts';\n}",
    )
    write(tmp_path / "app" / "Http" / "Post.php", "<?php\nclass Post extends Model {}")

    model = find_model(tmp_path, "app", "Post")

    assert model.class_name == "App\\Models\\Post"
    assert model.table == "blog_posts"


def test_find_model_ignores_non_models(tmp_path):
    write(tmp_path / "app" / "Services" / "Post.php", "<?php\nclass Post extends Service {}")

    assert find_model(tmp_path, "app", "Post") is None
    assert find_model(tmp_path, "app", "") is None


def test_schema_inspector_reads_up_migrations(laravel):
    schema = SchemaInspector(laravel / "database" / "migrations")

    assert schema.table("users").column_names() == [
        "id", "name", "email", "email_verified_at", "password", "remember_token", "created_at", "updated_at",
    ]
    posts = schema.table("posts")
    assert "ghost" not in posts.column_names()
    assert posts.column("body").nullable is True
    assert posts.column("user_id").type == "bigint"
    assert posts.column("published").type == "boolean"
    assert schema.tables_with_column("user_id") == ["posts"]


def test_schema_inspector_special_columns(tmp_path):
    tables = SchemaInspector(tmp_path).parse_migration(
        "Schema::create('comments', function (Blueprint $table) {\n"
        "    $table->foreignIdFor(BlogPost::class);\n"
        "    $table->nullableMorphs('commentable');\n"
        "    $table->softDeletes();\n"
        "});",
        {},
    )

    columns = tables["comments"]
    assert columns.column_names() == ["blog_post_id", "commentable_id", "commentable_type", "deleted_at"]
    assert columns.column("commentable_type").nullable is True


def test_field_for_column():
    assert field_for_column(Column("email", "string")).strip() == "field('email')->email()->required(),"
    assert field_for_column(Column("bio", "text", True)).strip() == "field('bio')->textarea()->nullable(),"
    assert field_for_column(Column("created_at", "timestamp", True)).strip() == (
        "field('created_at')->datetime()->nullable()->readonly(),"
    )
    assert field_for_column(Column("password", "string")).strip() == (
        "field('password')->password()->storable()->required(),"
    )


def test_artifact_kind_variants():
    assert ArtifactKind.for_action("show") is ArtifactKind.SHOW_ACTION
    assert ArtifactKind.for_getter("invokable") is ArtifactKind.INVOKABLE_GETTER
    assert ArtifactKind.for_filter("custom") is ArtifactKind.CUSTOM_MATCH_FILTER
    assert ArtifactKind.for_filter("int") is ArtifactKind.MATCH_FILTER
    assert ArtifactKind.DESTRUCTIVE_ACTION.is_action
    assert not ArtifactKind.REPOSITORY.is_getter


def test_render_invokable_action_has_no_base_class():
    source = render_artifact(ArtifactKind.INVOKABLE_ACTION, {"namespace": "App\\Actions", "class_name": "PingAction"})

    assert source.startswith("<?php\n\ndeclare(strict_types=1);\n\nnamespace App\\Actions;")
    assert "use Illuminate\\Http\\Request;" in source
    assert "class PingAction\n{" in source
    assert "public function __invoke(Request $request)" in source


def test_filter_logic_by_type():
    assert filter_logic("views", "int", False) == "        return $query->where('views', (int) $value);"
    assert "whereIn('tags', $values)" in filter_logic("tags", "array", False)
    assert "whereDate('published_at', $value)" in filter_logic("published_at", "datetime", False)


def test_generate_repository(manager, laravel):
    result = GenerateRepository(manager).handle({"model_name": "User"})

    assert not result.is_error, result.text
    assert result.text.startswith("# Repository Generated Successfully!")
    assert "**Namespace:** `App\\Restify`" in result.text

    source = (laravel / "app" / "Restify" / "UserRepository.php").read_text()
    assert "use App\\Models\\User;" in source
    assert "class UserRepository extends Repository" in source
    assert "public static $model = User::class;" in source
    assert "            field('email')->email()->required()," in source
    assert "            field('email_verified_at')->datetime()->nullable()->readonly()," in source
    assert "            HasMany::make('posts')," in source


def test_generate_repository_relationships_from_foreign_keys(manager, laravel):
    result = GenerateRepository(manager).handle({"model_name": "Post", "include_fields": False})

    assert not result.is_error
    source = (laravel / "app" / "Restify" / "PostRepository.php").read_text()
    assert "BelongsTo::make('user')," in source
    assert "field('title')" not in source
    assert "            id()," in source


def test_generate_repository_errors(manager, laravel):
    assert GenerateRepository(manager).handle({"model_name": "Ghost"}).text == "Could not find model: Ghost"
    assert GenerateRepository(manager).handle({"model_name": "  "}).text == "Model name is required"

    GenerateRepository(manager).handle({"model_name": "User"})
    again = GenerateRepository(manager).handle({"model_name": "User"})
    assert again.is_error
    assert again.text.startswith("Repository already exists at: ")
    assert again.text.endswith("Use 'force: true' to overwrite.")

    assert not GenerateRepository(manager).handle({"model_name": "User", "force": True}).is_error


def test_generate_index_action_with_rules(manager, laravel):
    result = GenerateAction(manager).handle({
        "action_name": "PublishPost",
        "model_name": "Post",
        "validation_rules": {"status": "required", "tags": ["array", "min:1"]},
    })

    assert not result.is_error, result.text
    assert result.text.startswith("# Action Generated Successfully!")

    source = (laravel / "app" / "Restify" / "Actions" / "PublishPostAction.php").read_text()
    assert "namespace App\\Restify\\Actions;" in source
    assert "class PublishPostAction extends Action" in source
    assert "public function handle(ActionRequest $request, Collection $posts): JsonResponse" in source
    assert "$request->validate($this->rules());" in source
    assert "'status' => 'required'," in source
    assert "'tags' => ['array', 'min:1']," in source
    assert "use Binaryk\\LaravelRestify\\Http\\Requests\\RestifyRequest;" in source
    assert "public static function indexQuery(RestifyRequest $request, $query)" in source


def test_generate_standalone_action_with_uri_key(manager, laravel):
    result = GenerateAction(manager).handle(
        {"action_name": "ClearCache", "action_type": "standalone", "uri_key": "clear-cache"}
    )

    assert not result.is_error
    source = (laravel / "app" / "Restify" / "Actions" / "ClearCacheAction.php").read_text()
    assert "public static string $uriKey = 'clear-cache';" in source
    assert "public bool $standalone = true;" in source


def test_generate_action_rejects_unknown_type(manager):
    result = GenerateAction(manager).handle({"action_name": "Publish", "action_type": "bulk"})

    assert result.is_error
    assert result.text == "Invalid action type. Must be one of: index, show, standalone, invokable, destructive"


def test_generate_show_getter(manager, laravel):
    result = GenerateGetter(manager).handle({
        "getter_name": "StripeInformation",
        "getter_type": "invokable",
        "scope": "show",
        "model_name": "User",
    })

    assert not result.is_error, result.text
    assert "GET: api/restify/models/1/getters/stripe-information" in result.text

    source = (laravel / "app" / "Restify" / "Getters" / "StripeInformationGetter.php").read_text()
    assert "class StripeInformationGetter\n{" in source
    assert "public function __invoke(Request $request, User $user): JsonResponse" in source
    assert "use App\\Models\\User;" in source


def test_generate_getter_validation(manager):
    assert GenerateGetter(manager).handle({"getter_name": "Stats", "getter_type": "magic"}).text == (
        "Invalid getter type. Must be one of: invokable, extended"
    )
    assert GenerateGetter(manager).handle({"getter_name": "Stats", "scope": "everywhere"}).text == (
        "Invalid scope. Must be one of: index, show, both"
    )


def test_generate_match_filter(manager, laravel):
    result = GenerateMatchFilter(manager).handle(
        {"name": "Status", "attribute": "status", "partial": True, "repository": "PostRepository"}
    )

    assert not result.is_error, result.text
    assert "// Add to your PostRepository class:" in result.text
    assert "`GET /api/restify/posts?status=null` -> `WHERE status IS NULL`" in result.text

    source = (laravel / "app" / "Restify" / "Filters" / "StatusFilter.php").read_text()
    assert "class StatusFilter extends MatchFilter" in source
    assert "return $query->where('status', 'LIKE', \"%{$value}%\");" in source
    assert "return 'status';" in source


def test_generate_custom_match_filter(manager, laravel):
    result = GenerateMatchFilter(manager).handle(
        {"name": "ActiveFilter", "attribute": "active", "type": "custom", "custom_logic": "Only active records"}
    )

    assert not result.is_error
    source = (laravel / "app" / "Restify" / "Filters" / "ActiveFilter.php").read_text()
    assert "// Only active records" in source


def test_generate_match_filter_validation(manager):
    assert GenerateMatchFilter(manager).handle({"name": "X", "attribute": "x", "type": "fuzzy"}).text.startswith(
        "Invalid filter type. Must be one of: string, int"
    )
    assert GenerateMatchFilter(manager).handle({"name": "X", "attribute": " "}).text == "Attribute is required"


def test_custom_namespace_overrides_location(manager, laravel):
    result = GenerateMatchFilter(manager).handle(
        {"name": "Views", "attribute": "views", "type": "int", "namespace": "App\\Custom\\Filters"}
    )

    assert "**Namespace:** `App\\Custom\\Filters`" in result.text
    source = (laravel / "app" / "Restify" / "Filters" / "ViewsFilter.php").read_text()
    assert "namespace App\\Custom\\Filters;" in source
