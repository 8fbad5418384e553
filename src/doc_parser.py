"""
Markdown document parsing for the Restify Documentation MCP Server
"""

import fnmatch
import hashlib
import logging
import math
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from config import config_value
from doc_cache import DocCache
from models import CodeExample, Heading, ParsedDocument

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = re.compile(r"^---$", re.MULTILINE)
CODE_BLOCK = re.compile(r"```(\w+)?\n(.*?)```", re.DOTALL)
ANY_CODE_BLOCK = re.compile(r"```[\s\S]*?```")
HEADING = re.compile(r"^(#{1,6})\s+(.+)$", re.MULTILINE)
INLINE_CODE = re.compile(r"`[^`]*`")
LINK = re.compile(r"\[([^\]]*)\]\([^)]*\)")
EMPHASIS = re.compile(r"[*_]{1,2}([^*_]*)[*_]{1,2}")
HEADING_MARKER = re.compile(r"^#{1,6}\s+", re.MULTILINE)
SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
CATEGORY_FROM_PATH = re.compile(r"/([^/]+)/[^/]*\.md$")
WORD = re.compile(r"[A-Za-z]+(?:['-][A-Za-z]+)*")


def split_sentences(text: str) -> List[str]:
    """Split on runs of sentence punctuation, dropping empty pieces"""
    return [s.strip() for s in SENTENCE_BOUNDARY.split(text) if s.strip()]


def create_anchor(text: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]+", "-", text).lower()


def estimate_tokens(text: str) -> int:
    """Rough estimate: one token per four characters"""
    return int(math.ceil(len(text) / 4))


class DocParser:
    """Turns one Markdown file into a ParsedDocument"""

    def __init__(self, cache: DocCache, config: Dict[str, Any]):
        self.cache = cache
        self.config = config
        self.summary_length = int(config_value(config, "docs.processing.summary_length", 300))

    def parse(self, file_path) -> Optional[ParsedDocument]:
        """Parse a file, memoized on (path, mtime). Returns None when unreadable."""
        path = Path(file_path)
        try:
            mtime = path.stat().st_mtime
        except OSError:
            logger.debug(f"Skipping {path}: not found")
            return None

        if not path.is_file():
            return None

        digest = hashlib.md5(f"{path}_{mtime}".encode()).hexdigest()
        return self.cache.remember(f"parsed_doc_{digest}", lambda: self._read_and_parse(path))

    def _read_and_parse(self, path: Path) -> Optional[ParsedDocument]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping {path}: unreadable - {e}")
            return None

        return self.parse_content(content, str(path))

    def parse_content(self, content: str, file_path: str = "") -> ParsedDocument:
        """Parse Markdown text; file_path only drives category and title fallback"""
        frontmatter, markdown = self._split_frontmatter(content)

        code_examples = self._extract_code_blocks(markdown)
        headings = self._extract_headings(markdown)
        clean_content = self._clean_markdown(markdown)

        return ParsedDocument(
            file_path=file_path,
            category=self.determine_category(file_path),
            frontmatter=frontmatter,
            title=self._resolve_title(frontmatter, headings, file_path),
            content=clean_content,
            raw_content=markdown,
            code_examples=code_examples,
            headings=headings,
            summary=self._extract_summary(clean_content),
            word_count=len(WORD.findall(clean_content)),
            estimated_tokens=estimate_tokens(clean_content),
        )

    def _split_frontmatter(self, content: str) -> Tuple[Dict[str, Any], str]:
        parts = FRONTMATTER_DELIMITER.split(content, maxsplit=2)
        if len(parts) < 3:
            return {}, content

        try:
            frontmatter = yaml.safe_load(parts[1]) or {}
        except yaml.YAMLError as e:
            logger.debug(f"Ignoring malformed frontmatter: {e}")
            frontmatter = {}

        if not isinstance(frontmatter, dict):
            frontmatter = {}

        return frontmatter, parts[2].strip()

    def _extract_code_blocks(self, markdown: str) -> Tuple[CodeExample, ...]:
        code_blocks = []
        for match in CODE_BLOCK.finditer(markdown):
            code = match.group(2).strip()
            if not code:
                continue
            code_blocks.append(
                CodeExample(
                    language=match.group(1) or "text",
                    code=code,
                    line_count=code.count("\n") + 1,
                )
            )
        return tuple(code_blocks)

    def _extract_headings(self, markdown: str) -> Tuple[Heading, ...]:
        headings = []
        for match in HEADING.finditer(ANY_CODE_BLOCK.sub("", markdown)):
            text = match.group(2).strip()
            headings.append(
                Heading(level=len(match.group(1)), text=text, anchor=create_anchor(text))
            )
        return tuple(headings)

    def _clean_markdown(self, markdown: str) -> str:
        clean = ANY_CODE_BLOCK.sub("", markdown)
        clean = INLINE_CODE.sub("", clean)
        clean = LINK.sub(r"\1", clean)
        clean = EMPHASIS.sub(r"\1", clean)
        clean = HEADING_MARKER.sub("", clean)
        clean = re.sub(r"\n{3,}", "\n\n", clean)
        clean = re.sub(r"[ \t]+", " ", clean)
        return clean.strip()

    def _extract_summary(self, content: str) -> str:
        summary = ""
        length = 0
        for sentence in split_sentences(content):
            if length + len(sentence) > self.summary_length:
                break
            summary += sentence + ". "
            length += len(sentence)
        return summary.strip()

    def determine_category(self, file_path: str) -> str:
        """First configured pattern that matches the path suffix wins"""
        normalized = file_path.replace("\\", "/")
        categories = config_value(self.config, "categories", {}) or {}

        for category_key, category_config in categories.items():
            for pattern in category_config.get("paths", []):
                if fnmatch.fnmatchcase(normalized, "*" + pattern):
                    return category_key

        match = CATEGORY_FROM_PATH.search(normalized)
        if match:
            return match.group(1)

        return "general"

    def _resolve_title(
        self, frontmatter: Dict[str, Any], headings: Tuple[Heading, ...], file_path: str
    ) -> str:
        title = frontmatter.get("title")
        if title:
            return str(title)

        for heading in headings:
            if heading.level == 1:
                return heading.text

        stem = Path(file_path).stem if file_path else "untitled"
        fallback = stem.replace("-", " ").replace("_", " ")
        return fallback[:1].upper() + fallback[1:]
