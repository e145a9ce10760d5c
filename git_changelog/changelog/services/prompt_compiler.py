"""Builds the changelog prompt from a change set."""

from git_changelog.git.domain.entities import ChangeSet
from git_changelog.git.domain.value_objects import FileChange

# Raw diffs dominate the token count, so only a few of them are sampled
SIGNIFICANT_CHANGE_THRESHOLD = 5
MAX_DIFF_SAMPLES = 5
MAX_DIFF_CHARS = 1000

_PREAMBLE = """You are a technical writer creating a changelog for a software project. \
Analyze the following git changes and generate a well-structured changelog entry.

Use these standard categories:
- **Added**: New features
- **Changed**: Changes in existing functionality
- **Deprecated**: Soon-to-be removed features
- **Removed**: Removed features
- **Fixed**: Bug fixes
- **Security**: Security improvements"""

_INSTRUCTIONS = """## Instructions
Generate a changelog entry following these guidelines:

1. **Categorize changes** using only these section headers: \
## Added, ## Changed, ## Deprecated, ## Removed, ## Fixed, ## Security. \
Omit categories that have no changes.

2. **Write clear, user-focused descriptions** that explain:
   - What changed from a user's perspective
   - Why it matters
   - Any breaking changes or migration notes

3. **Use consistent formatting**:
   - One concise bullet point ("- ") per change
   - Start with an action verb when possible
   - Reference issue/PR numbers if visible in commit messages

4. **Focus on semantic meaning** rather than technical implementation details

5. **Group related changes** together logically

Do not include version numbers or dates - they are added separately.

Return only the changelog content without any explanatory text or metadata."""


class PromptCompiler:
    """Compiles a ChangeSet into a single bounded prompt.

    The output is a pure function of the change set: the same input always
    yields the same prompt.
    """

    def __init__(
        self,
        significant_change_threshold: int = SIGNIFICANT_CHANGE_THRESHOLD,
        max_diff_samples: int = MAX_DIFF_SAMPLES,
        max_diff_chars: int = MAX_DIFF_CHARS,
    ) -> None:
        """
        Initialize PromptCompiler.

        Args:
            significant_change_threshold: A file is sampled only if its
                insertions plus deletions exceed this value
            max_diff_samples: Maximum number of diff samples in the prompt
            max_diff_chars: Maximum characters of diff text per sample
        """
        self._significant_change_threshold = significant_change_threshold
        self._max_diff_samples = max_diff_samples
        self._max_diff_chars = max_diff_chars

    def compile(self, change_set: ChangeSet) -> str:
        """
        Build the prompt for a change set.

        Args:
            change_set: Commits and file changes to describe

        Returns:
            The prompt text
        """
        sections = [
            _PREAMBLE,
            self._format_summary(change_set),
            self._format_commits(change_set),
            self._format_file_changes(change_set),
        ]

        samples = self.select_diff_samples(change_set)
        if samples:
            sections.append(self._format_diff_samples(samples))

        sections.append(_INSTRUCTIONS)
        return "\n\n".join(sections)

    def select_diff_samples(self, change_set: ChangeSet) -> tuple[FileChange, ...]:
        """
        Pick the files whose diffs are shown in the prompt.

        Args:
            change_set: Change set to sample from

        Returns:
            The first significant files, in their original order
        """
        significant = [
            file_change
            for file_change in change_set.files
            if file_change.total_changes > self._significant_change_threshold
        ]
        return tuple(significant[: self._max_diff_samples])

    @staticmethod
    def _format_summary(change_set: ChangeSet) -> str:
        return f"""## Change Summary
- **From:** {change_set.from_ref}
- **To:** {change_set.to_ref}
- **Commits:** {len(change_set.commits)}
- **Files changed:** {len(change_set.files)}
- **Total changes:** +{change_set.total_insertions} -{change_set.total_deletions}"""

    @staticmethod
    def _format_commits(change_set: ChangeSet) -> str:
        lines = ["## Commits"]
        for commit in change_set.commits:
            lines.append(f"- {commit.short_hash}: {commit.message} ({commit.author_name})")
        return "\n".join(lines)

    @staticmethod
    def _format_file_changes(change_set: ChangeSet) -> str:
        lines = ["## File Changes"]
        for file_change in change_set.files:
            lines.append(
                f"- {file_change.path}: +{file_change.insertions} -{file_change.deletions}"
            )
        return "\n".join(lines)

    def _format_diff_samples(self, samples: tuple[FileChange, ...]) -> str:
        blocks = ["## Sample Code Changes"]
        for file_change in samples:
            diff_text = file_change.diff_text[: self._max_diff_chars]
            blocks.append(f"### {file_change.path}\n```diff\n{diff_text}\n```")
        return "\n\n".join(blocks)
