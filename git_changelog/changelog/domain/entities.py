"""Changelog domain entities."""

from dataclasses import dataclass
from typing import Any

from git_changelog.changelog.domain.value_objects import ChangelogCategory


@dataclass(frozen=True)
class ChangelogSection:
    """A category header and its bullet items."""

    category: ChangelogCategory
    items: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Serializable representation of the section."""
        return {"category": self.category.value, "items": list(self.items)}


@dataclass(frozen=True)
class Changelog:
    """A structured changelog entry."""

    date: str
    sections: tuple[ChangelogSection, ...]
    summary: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serializable representation of the changelog."""
        data: dict[str, Any] = {
            "date": self.date,
            "sections": [section.to_dict() for section in self.sections],
        }
        if self.summary is not None:
            data["summary"] = self.summary
        return data

    def to_markdown(self) -> str:
        """Render the sections as markdown headers with bullet items."""
        blocks = []
        for section in self.sections:
            lines = [f"## {section.category.title}"]
            lines.extend(f"- {item}" for item in section.items)
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Changelog":
        """
        Build a Changelog from its serialized representation.

        Args:
            data: Mapping as produced by ``to_dict``

        Returns:
            The changelog

        Raises:
            ValueError: If a section has an unknown category
            KeyError: If required fields are missing
        """
        sections = tuple(
            ChangelogSection(
                category=ChangelogCategory(section["category"]),
                items=tuple(section["items"]),
            )
            for section in data["sections"]
        )
        return cls(date=data["date"], sections=sections, summary=data.get("summary"))
