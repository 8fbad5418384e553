import os

from doc_parser import DocParser, create_anchor, estimate_tokens
from conftest import write


def test_frontmatter_title_wins_over_first_heading(parser, tmp_path):
    path = write(tmp_path / "docs" / "page.md", """
        ---
        title: "Custom Title"
        ---
        # Heading One

        Body text.
    """)

    doc = parser.parse(path)

    assert doc.title == "Custom Title"
    assert doc.frontmatter == {"title": "Custom Title"}
    assert doc.headings[0].text == "Heading One"


def test_title_falls_back_to_heading_then_filename(parser, tmp_path):
    with_heading = write(tmp_path / "a.md", "# From Heading\n\nText.")
    without_heading = write(tmp_path / "getting-started_guide.md", "Just text.")

    assert parser.parse(with_heading).title == "From Heading"
    assert parser.parse(without_heading).title == "Getting started guide"


def test_headings_in_document_order(parser):
    doc = parser.parse_content("# A\n\n## B\n\n### C\n")

    assert [(h.level, h.text) for h in doc.headings] == [(1, "A"), (2, "B"), (3, "C")]
    assert doc.headings[1].anchor == "b"


def test_comment_lines_inside_code_are_not_headings(parser):
    doc = parser.parse_content("# Setup\n\n```bash\n# install it\ncomposer install\n```\n")

    assert [h.text for h in doc.headings] == ["Setup"]


def test_code_block_extracted_and_removed_from_content(parser):
    doc = parser.parse_content("Intro text.\n\n```php\n$unique = 'marker';\n```\n\nOutro.")

    assert len(doc.code_examples) == 1
    example = doc.code_examples[0]
    assert example.language == "php"
    assert example.code == "$unique = 'marker';"
    assert example.line_count == 1
    assert "marker" not in doc.content
    assert "```" not in doc.content


def test_code_block_without_language_is_text(parser):
    doc = parser.parse_content("```\nplain\n```")

    assert doc.code_examples[0].language == "text"


def test_cleaning_strips_markdown_syntax(parser):
    doc = parser.parse_content(
        "## Title\n\nSee the [docs](https://example.com) for **bold** and `inline` code.\n\n\n\nNext   line."
    )

    assert "docs" in doc.content
    assert "https://example.com" not in doc.content
    assert "**" not in doc.content
    assert "inline" not in doc.content
    assert "##" not in doc.content
    assert "\n\n\n" not in doc.content
    assert "Next line." in doc.content


def test_malformed_frontmatter_is_ignored(parser):
    doc = parser.parse_content("---\ntitle: [unclosed\n---\n# Real Title\n")

    assert doc.frontmatter == {}
    assert doc.title == "Real Title"


def test_summary_respects_length_limit(config, cache):
    config["docs"]["processing"]["summary_length"] = 30
    parser = DocParser(cache, config)
    doc = parser.parse_content("First sentence here. Second sentence is here. Third one.")

    assert doc.summary == "First sentence here."


def test_category_from_configured_patterns(parser):
    assert parser.determine_category("/docs/en/filters.md") == "filters"
    assert parser.determine_category("/docs/en/repositories/basics.md") == "repositories"
    assert parser.determine_category("C:\\docs\\en\\auth\\login.md") == "auth"


def test_category_falls_back_to_parent_directory_then_general(parser):
    assert parser.determine_category("/docs/en/widgets/usage.md") == "widgets"
    assert parser.determine_category("usage.md") == "general"


def test_category_depends_only_on_path(parser):
    first = parser.parse_content("# One\n\nalpha", "/docs/en/actions.md")
    second = parser.parse_content("# Two\n\nbeta gamma", "/docs/en/actions.md")

    assert first.category == second.category == "actions"


def test_parse_is_idempotent(parser, tmp_path):
    path = write(tmp_path / "doc.md", "# Title\n\nSome content. More content.\n")

    assert parser.parse(path) == parser.parse(path)


def test_parse_is_keyed_on_mtime(parser, tmp_path):
    path = write(tmp_path / "doc.md", "# Before\n")
    assert parser.parse(path).title == "Before"

    path.write_text("# After\n", encoding="utf-8")
    stat = path.stat()
    os.utime(path, (stat.st_atime, stat.st_mtime + 10))

    assert parser.parse(path).title == "After"


def test_missing_file_returns_none(parser, tmp_path):
    assert parser.parse(tmp_path / "missing.md") is None


def test_unreadable_file_returns_none(parser, tmp_path):
    path = tmp_path / "binary.md"
    path.write_bytes(b"\xff\xfe\xfa invalid utf-8")

    assert parser.parse(path) is None


def test_helpers():
    assert create_anchor("Match Filter: Types") == "match-filter-types"
    assert estimate_tokens("abcdefgh") == 2
    assert estimate_tokens("abcdefghi") == 3
