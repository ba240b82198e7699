"""
Turns a provider's free-form reply into structured idea records.

Replies are tried as embedded JSON first. When no JSON decodes, the text is
cut into list-item or paragraph segments and each segment is mined for a
title, a description and the market size / difficulty labels.
"""

import json
import re
from enum import Enum
from typing import Any, Dict, List, Type

from ideagen.models.idea import Difficulty, IdeaRecord, MarketSize
from ideagen.utils.constants import (
    MAX_FIRST_SENTENCE_LENGTH,
    MAX_TEXT_SEGMENTS,
    MAX_TITLE_LENGTH,
    MIN_DESCRIPTION_LENGTH,
    MIN_SEGMENT_LENGTH,
    TITLE_EXCLUDED_WORDS,
)
from ideagen.utils.logger import logger

JSON_ARRAY_PATTERN = re.compile(r"\[\s*\{.*\}\s*\]", re.DOTALL)
JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

SEGMENT_SPLIT_PATTERN = re.compile(r"(?:\n\s*\d+\.\s*|\n\s*-\s*|\n\n+)")
BOLD_PATTERN = re.compile(r"\*\*([^*]+)\*\*")

# Order matters: earlier patterns win on ambiguous segments
TITLE_PATTERNS = [
    re.compile(r"Title:\s*([^\n.]+)", re.IGNORECASE),
    re.compile(r"Name:\s*([^\n.]+)", re.IGNORECASE),
    re.compile(r"^(?:\d+\.)?\s*([^\n.]+?)(?=\s*\n|\s*\.\s*\n)", re.IGNORECASE),
    re.compile(r"^([^\n.]{3,80})(?=\s*\n|\s*\.)", re.IGNORECASE),
]
TITLE_EXCLUDED_PATTERN = re.compile("|".join(TITLE_EXCLUDED_WORDS), re.IGNORECASE)
SENTENCE_SPLIT_PATTERN = re.compile(r"\.\s+")

TITLE_CLEANUP_PATTERNS = [
    re.compile(r"^\d+\.?\s*"),
    re.compile(r"^\.\s*"),
    re.compile(r"^title:\s*", re.IGNORECASE),
    re.compile(r"^name:\s*", re.IGNORECASE),
    re.compile(r"^idea\s*\d+\s*:?\s*|^idea\s*:\s*", re.IGNORECASE),
]

DESCRIPTION_PATTERN = re.compile(
    r"Description:\s*([\s\S]*?)(?=\s*(?:Market\s*Size:|Difficulty:|\Z))", re.IGNORECASE
)
METADATA_PATTERNS = [
    re.compile(r"Market\s*Size:\s*(?:Small|Medium|Large)[.\s]*", re.IGNORECASE),
    re.compile(r"Difficulty:\s*(?:Easy|Medium|Hard)[.\s]*", re.IGNORECASE),
    re.compile(r"Description:\s*", re.IGNORECASE),
]
MARKET_SIZE_PATTERN = re.compile(r"Market\s*Size:\s*(Small|Medium|Large)", re.IGNORECASE)
DIFFICULTY_PATTERN = re.compile(r"Difficulty:\s*(Easy|Medium|Hard)", re.IGNORECASE)


def _coerce(value: Any, enum_cls: Type[Enum], default: Enum) -> Enum:
    """Map a provider value onto an enum member, case-insensitively."""
    if isinstance(value, str):
        for member in enum_cls:
            if member.value.lower() == value.strip().lower():
                return member
    return default


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value)


def _placeholder_description(title: str) -> str:
    return f"A SaaS idea for the {title} concept."


class ResponseParser:
    """Parses raw provider replies into idea records."""

    def parse(self, raw_text: str, source: str) -> List[IdeaRecord]:
        """
        Extract ideas from a provider reply.

        Args:
            raw_text: The assistant text returned by the provider
            source: Display name of the provider, stamped on every record

        Returns:
            Ideas in reply order, empty if nothing could be extracted
        """
        try:
            ideas = self._parse_structured(raw_text, source)
            if ideas:
                logger.debug(f"Parsed {len(ideas)} structured ideas from {source}")
                return ideas

            ideas = self._parse_text(raw_text, source)
            logger.debug(f"Parsed {len(ideas)} text ideas from {source}")
            return ideas
        except Exception as e:
            logger.error(f"Error parsing ideas from {source}: {e}")
            return []

    def _parse_structured(self, raw_text: str, source: str) -> List[IdeaRecord]:
        match = JSON_ARRAY_PATTERN.search(raw_text) or JSON_OBJECT_PATTERN.search(raw_text)
        if not match:
            return []

        try:
            parsed = json.loads(match.group(0))
        except (ValueError, RecursionError):
            # Fall through to text parsing on the untouched reply
            return []

        if isinstance(parsed, dict):
            parsed = [parsed]
        if not isinstance(parsed, list):
            return []

        return [self._record_from_mapping(item, source) for item in parsed if isinstance(item, dict)]

    def _record_from_mapping(self, item: Dict[str, Any], source: str) -> IdeaRecord:
        title = _text(item.get("title") or item.get("name")) or f"{source} SaaS Idea"
        description = _text(item.get("description") or item.get("summary")) or _placeholder_description(title)
        return IdeaRecord(
            title=title,
            description=description,
            marketSize=_coerce(item.get("marketSize") or item.get("market_size"), MarketSize, MarketSize.MEDIUM),
            difficulty=_coerce(item.get("difficulty"), Difficulty, Difficulty.MEDIUM),
            source=source,
        )

    def _parse_text(self, raw_text: str, source: str) -> List[IdeaRecord]:
        segments = [segment.strip() for segment in SEGMENT_SPLIT_PATTERN.split(raw_text) if segment]
        segments = [segment for segment in segments if len(segment) >= MIN_SEGMENT_LENGTH]

        return [
            self._record_from_segment(segment, source, position)
            for position, segment in enumerate(segments[:MAX_TEXT_SEGMENTS], start=1)
        ]

    def _record_from_segment(self, segment: str, source: str, position: int) -> IdeaRecord:
        cleaned = BOLD_PATTERN.sub(r"\1", segment)

        title = self.extract_title(cleaned, source, position)
        description = self.extract_description(cleaned, title)

        market_match = MARKET_SIZE_PATTERN.search(cleaned)
        difficulty_match = DIFFICULTY_PATTERN.search(cleaned)

        return IdeaRecord(
            title=title,
            description=description,
            marketSize=_coerce(market_match.group(1) if market_match else None, MarketSize, MarketSize.MEDIUM),
            difficulty=_coerce(difficulty_match.group(1) if difficulty_match else None, Difficulty, Difficulty.MEDIUM),
            source=source,
        )

    def extract_title(self, segment: str, source: str, position: int) -> str:
        """
        Find the title of one segment.

        The first pattern whose capture does not look like metadata wins. The
        first sentence is the fallback, then a numbered placeholder.
        """
        placeholder = f"{source} SaaS Idea {position}"
        title = ""

        for pattern in TITLE_PATTERNS:
            match = pattern.search(segment)
            if match and match.group(1) and not TITLE_EXCLUDED_PATTERN.search(match.group(1)):
                title = match.group(1).strip()
                break

        if not title:
            first_sentence = SENTENCE_SPLIT_PATTERN.split(segment)[0]
            if (
                first_sentence
                and len(first_sentence) < MAX_FIRST_SENTENCE_LENGTH
                and not TITLE_EXCLUDED_PATTERN.search(first_sentence)
            ):
                title = first_sentence.strip()
            else:
                title = placeholder

        for pattern in TITLE_CLEANUP_PATTERNS:
            title = pattern.sub("", title, count=1)
        title = title.strip()

        if len(title) > MAX_TITLE_LENGTH:
            title = title[:MAX_TITLE_LENGTH - 3] + "..."

        return title or placeholder

    def extract_description(self, segment: str, title: str) -> str:
        """
        Find the description of one segment.

        Tries the Description: label, then the text after the title with the
        metadata labels removed, then every line after the first.
        """
        match = DESCRIPTION_PATTERN.search(segment)
        if match and len(match.group(1).strip()) > MIN_DESCRIPTION_LENGTH:
            return match.group(1).strip()

        title_index = segment.find(title)
        if title_index >= 0:
            remainder = segment[title_index + len(title):].strip()
            for pattern in METADATA_PATTERNS:
                remainder = pattern.sub("", remainder)
            remainder = remainder.strip()
            if len(remainder) > MIN_DESCRIPTION_LENGTH:
                return remainder

        lines = [line for line in segment.split("\n") if line]
        if len(lines) > 1:
            description = "\n".join(lines[1:]).strip()
            if description:
                return description

        return _placeholder_description(title)


def parse_ideas(raw_text: str, source: str) -> List[IdeaRecord]:
    """Parse a provider reply with a default parser."""
    return ResponseParser().parse(raw_text, source)
