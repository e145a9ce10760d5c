"""Turns raw model output into the final changelog text."""

import json
import logging
import re
from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Any

from git_changelog.changelog.domain.entities import Changelog, ChangelogSection
from git_changelog.changelog.domain.value_objects import ChangelogCategory, ChangelogFormat
from git_changelog.git.domain.entities import ChangeSet

logger = logging.getLogger(__name__)

_CATEGORY_NAMES = "|".join(category.value for category in ChangelogCategory)

# "## Added", "### Fixed bugs"
_HEADING_HEADER_PATTERN = re.compile(rf"^#{{1,6}}\s*({_CATEGORY_NAMES})\b", re.IGNORECASE)
# "Added", "Added:", "**Fixed**"
_BARE_HEADER_PATTERN = re.compile(
    rf"^(?:\*\*)?({_CATEGORY_NAMES})(?:\*\*)?\s*:?\s*(?:\*\*)?$", re.IGNORECASE
)
_BULLET_PATTERN = re.compile(r"^[-*]\s+")
_MARKDOWN_HEADING_PATTERN = re.compile(r"^\s*#{1,6}\s*\S", re.MULTILINE)


class ChangelogParseError(ValueError):
    """Raised when model output contains no recognizable changelog sections."""


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class ResponseSynthesizer:
    """Formats a generation response as markdown or as a structured document."""

    def __init__(self, today: Callable[[], date] = _utc_today) -> None:
        """
        Initialize ResponseSynthesizer.

        Args:
            today: Callable returning the date stamped on generated changelogs
        """
        self._today = today

    def synthesize(self, raw_text: str, change_set: ChangeSet, fmt: ChangelogFormat) -> str:
        """
        Format the model's response.

        Structured output never fails: text that cannot be parsed is returned
        verbatim inside a fallback document together with the change set's
        numeric metadata.

        Args:
            raw_text: Text returned by the generation backend
            change_set: Change set the text was generated from
            fmt: Output format

        Returns:
            Markdown text, or a JSON document for the structured format
        """
        if fmt is ChangelogFormat.STRUCTURED:
            return self._format_as_json(raw_text, change_set)
        return self._format_as_markdown(raw_text)

    def parse_sections(self, text: str) -> tuple[ChangelogSection, ...]:
        """
        Parse category headers and their bullets out of markdown-ish text.

        A header opens a new section and closes the previous one. Bullets are
        added to the open section; bullets before the first header and any
        other lines are ignored.

        Args:
            text: Model output

        Returns:
            Sections in the order they appear
        """
        sections: list[ChangelogSection] = []
        current_category: ChangelogCategory | None = None
        current_items: list[str] = []

        for line in text.splitlines():
            trimmed = line.strip()

            category = self._match_header(trimmed)
            if category is not None:
                if current_category is not None:
                    sections.append(ChangelogSection(current_category, tuple(current_items)))
                current_category = category
                current_items = []
                continue

            if current_category is not None and _BULLET_PATTERN.match(trimmed):
                current_items.append(_BULLET_PATTERN.sub("", trimmed, count=1))

        if current_category is not None:
            sections.append(ChangelogSection(current_category, tuple(current_items)))

        return tuple(sections)

    def _format_as_markdown(self, content: str) -> str:
        formatted = content.strip()

        # The model may answer with flat prose; give it a header
        if not _MARKDOWN_HEADING_PATTERN.search(formatted):
            formatted = f"## [Unreleased] - {self._today().isoformat()}\n\n{formatted}"

        return formatted

    def _format_as_json(self, content: str, change_set: ChangeSet) -> str:
        today = self._today().isoformat()
        try:
            sections = self.parse_sections(content)
            if not sections:
                raise ChangelogParseError("No changelog sections found in response")

            changelog = Changelog(
                date=today,
                sections=sections,
                summary=f"{len(change_set.commits)} commits, {len(change_set.files)} files changed",
            )
            return json.dumps(changelog.to_dict(), indent=2)
        except Exception as e:
            logger.warning("Falling back to raw changelog content: %s", e)
            return json.dumps(self._fallback_document(today, content, change_set), indent=2)

    @staticmethod
    def _fallback_document(today: str, content: str, change_set: ChangeSet) -> dict[str, Any]:
        return {
            "date": today,
            "content": content,
            "metadata": {
                "commits": len(change_set.commits),
                "files": len(change_set.files),
                "insertions": change_set.total_insertions,
                "deletions": change_set.total_deletions,
                "from_ref": change_set.from_ref,
                "to_ref": change_set.to_ref,
            },
        }

    @staticmethod
    def _match_header(line: str) -> ChangelogCategory | None:
        match = _HEADING_HEADER_PATTERN.match(line) or _BARE_HEADER_PATTERN.match(line)
        if not match:
            return None
        return ChangelogCategory(match.group(1).lower())


def parse_changelog(document: str) -> Changelog:
    """
    Read a structured changelog document back into a Changelog.

    Args:
        document: JSON produced by the structured format

    Returns:
        The changelog

    Raises:
        ValueError: If the document is a raw-content fallback or is not valid JSON
    """
    data = json.loads(document)
    if "sections" not in data:
        raise ValueError("Document has no sections (raw-content fallback)")
    return Changelog.from_dict(data)
