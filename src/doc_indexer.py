"""
Inverted-index search over parsed documentation
"""

import hashlib
import logging
import math
import re
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from config import config_value
from doc_cache import DocCache
from doc_parser import DocParser, split_sentences
from models import (
    CategoryInfo,
    CodeExampleMatch,
    HeadingMatch,
    ParsedDocument,
    ScoredResult,
)

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 200
MAX_MATCHED_CODE_EXAMPLES = 3
DEFAULT_BOOSTS = {"title": 3.0, "heading": 2.0, "content": 1.0, "code": 1.5}


def limit_text(text: str, length: int = SNIPPET_LENGTH, end: str = "...") -> str:
    if len(text) <= length:
        return text
    return text[:length].rstrip() + end


class DocIndexer:
    """Owns the document table and the term -> doc -> field -> count index"""

    def __init__(self, parser: DocParser, cache: DocCache, config: Dict[str, Any]):
        self.parser = parser
        self.cache = cache
        self.config = config
        self.documents: Dict[str, ParsedDocument] = {}
        self.index: Dict[str, Dict[str, Dict[str, int]]] = {}
        self.min_term_length = int(config_value(config, "search.min_query_length", 2))
        self.boosts = dict(DEFAULT_BOOSTS)
        self.boosts.update(config_value(config, "search.boost_scores", {}) or {})

    def index_documents(self, file_paths: Sequence) -> None:
        """Replace the document table and index, reusing a cached build when mtimes match"""
        paths = [str(p) for p in file_paths]
        cache_key = self._cache_key(paths)

        cached = self.cache.get(cache_key)
        if cached is not None and self._is_index_valid(cached, paths):
            self.documents = cached["documents"]
            self.index = cached["index"]
            logger.debug(f"Reusing cached index of {len(self.documents)} documents")
            return

        documents: Dict[str, ParsedDocument] = {}
        index: Dict[str, Dict[str, Dict[str, int]]] = {}

        for file_path in paths:
            if not Path(file_path).exists():
                continue
            doc = self.parser.parse(file_path)
            if doc is None:
                continue
            doc_id = self.generate_document_id(file_path)
            documents[doc_id] = doc
            self._build_index(index, doc_id, doc)

        self.documents = documents
        self.index = index
        logger.info(f"Indexed {len(documents)} documents, {len(index)} terms")

        self.cache.put(cache_key, {
            "documents": documents,
            "index": index,
            "timestamps": self._file_timestamps(paths),
            "created_at": time.time(),
        })

    def search(self, query: str, category: Optional[str] = None, limit: int = 10) -> List[ScoredResult]:
        if not self.index:
            return []

        terms = self.tokenize(query)
        if not terms:
            return []

        scores = []
        for doc_id, doc in self.documents.items():
            if category is not None and doc.category != category:
                continue
            score = self.relevance_score(doc_id, doc, terms)
            if score > 0:
                scores.append((doc_id, score))

        # sorted() is stable, ties keep document-table order
        ranked = sorted(scores, key=lambda item: item[1], reverse=True)[:max(limit, 0)]

        results = []
        for doc_id, score in ranked:
            doc = self.documents[doc_id]
            results.append(
                ScoredResult(
                    document=doc,
                    relevance_score=round(score, 2),
                    snippet=self.generate_snippet(doc, terms),
                    matched_headings=self.find_matching_headings(doc, terms),
                    matched_code_examples=self.find_matching_code_examples(doc, terms),
                )
            )
        return results

    def get_categories(self) -> Dict[str, CategoryInfo]:
        categories: Dict[str, CategoryInfo] = {}
        for doc in self.documents.values():
            info = categories.get(doc.category)
            if info is None:
                info = categories[doc.category] = CategoryInfo(name=self.category_name(doc.category))
            info.count += 1
            info.documents.append({
                "title": doc.title,
                "file_path": doc.file_path,
                "summary": doc.summary,
            })
        return categories

    def get_documents_by_category(self, category: str) -> List[ParsedDocument]:
        return [doc for doc in self.documents.values() if doc.category == category]

    def category_name(self, category: str) -> str:
        categories = config_value(self.config, "categories", {}) or {}
        if category in categories and categories[category].get("name"):
            return categories[category]["name"]
        fallback = category.replace("-", " ").replace("_", " ")
        return fallback[:1].upper() + fallback[1:]

    def terms(self, text: str) -> List[str]:
        """Lowercase, keep word chars and hyphens, drop short terms"""
        text = re.sub(r"[^\w\s\-]", " ", text.lower())
        return [term for term in text.split() if len(term) >= self.min_term_length]

    def tokenize(self, text: str) -> List[str]:
        """Query terms, deduplicated in order of appearance"""
        return list(dict.fromkeys(self.terms(text)))

    def relevance_score(self, doc_id: str, doc: ParsedDocument, terms: Sequence[str]) -> float:
        score = 0.0
        for term in terms:
            occurrences = self.index.get(term, {}).get(doc_id)
            if not occurrences:
                continue
            for field_name, count in occurrences.items():
                score += count * float(self.boosts.get(field_name, self.boosts["content"]))

        return score / math.sqrt(doc.word_count + 1)

    def generate_snippet(self, doc: ParsedDocument, terms: Sequence[str]) -> str:
        relevant = []
        for sentence in split_sentences(doc.content):
            lowered = sentence.lower()
            matches = sum(1 for term in terms if term in lowered)
            if matches > 0:
                relevant.append((sentence, matches))

        if not relevant:
            return limit_text(doc.content)

        relevant.sort(key=lambda item: item[1], reverse=True)

        snippet = ""
        for sentence, _ in relevant:
            if len(snippet + sentence) > SNIPPET_LENGTH:
                break
            snippet += sentence + ". "

        return snippet.strip() or limit_text(doc.content)

    def find_matching_headings(self, doc: ParsedDocument, terms: Sequence[str]) -> List[HeadingMatch]:
        matching = []
        for heading in doc.headings:
            lowered = heading.text.lower()
            matches = sum(1 for term in terms if term in lowered)
            if matches > 0:
                matching.append(HeadingMatch(heading=heading, matches=matches))
        return matching

    def find_matching_code_examples(
        self, doc: ParsedDocument, terms: Sequence[str]
    ) -> List[CodeExampleMatch]:
        matching = []
        for example in doc.code_examples:
            lowered = example.code.lower()
            matches = sum(1 for term in terms if term in lowered)
            if matches > 0:
                matching.append(CodeExampleMatch(example=example, matches=matches))
        return matching[:MAX_MATCHED_CODE_EXAMPLES]

    @staticmethod
    def generate_document_id(file_path: str) -> str:
        return hashlib.md5(file_path.encode()).hexdigest()

    def _cache_key(self, paths: List[str]) -> str:
        digest = hashlib.md5("\n".join(sorted(paths)).encode()).hexdigest()
        return f"indexed_docs_{digest}"

    def _is_index_valid(self, cached: Dict[str, Any], paths: List[str]) -> bool:
        return cached.get("timestamps", {}) == self._file_timestamps(paths)

    def _file_timestamps(self, paths: List[str]) -> Dict[str, float]:
        timestamps = {}
        for file_path in paths:
            try:
                timestamps[file_path] = Path(file_path).stat().st_mtime
            except OSError:
                continue
        return timestamps

    def _build_index(self, index: Dict[str, Dict[str, Dict[str, int]]], doc_id: str, doc: ParsedDocument):
        def add(text: str, field_name: str):
            for term in self.terms(text):
                fields = index.setdefault(term, {}).setdefault(doc_id, {})
                fields[field_name] = fields.get(field_name, 0) + 1

        add(doc.title, "title")
        for heading in doc.headings:
            add(heading.text, "heading")
        add(doc.content, "content")
        for example in doc.code_examples:
            add(example.code, "code")
