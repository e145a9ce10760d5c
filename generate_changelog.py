#!/usr/bin/env python3
"""
Script to generate a changelog for a git revision range using Claude:
- Start tag (optional, defaults to the most recent version tag)
- End ref (optional, defaults to HEAD)
- Output file (optional, defaults to CHANGELOG.md; "stdout" prints only)
- Format: markdown or json
- Backend: Anthropic API (default), --use-bedrock or --use-vertex

Every option can also be given as a GitHub Actions input (INPUT_<NAME>).
When $GITHUB_OUTPUT is set, the changelog, changelog_file and changes_count
outputs are written there.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from git_changelog.config import load_config
from git_changelog.changelog.services.changelog_service import ChangelogPipeline
from git_changelog.git.repositories.implementations import GitRepositoryImpl
from git_changelog.git.services.git_service import GitService
from git_changelog.outputs.repositories.implementations import (
    GitHubActionsOutputRepositoryImpl,
)
from git_changelog.outputs.services.output_service import STDOUT_SENTINEL, OutputService


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Generate a changelog from git history using AI-powered analysis"
    )
    parser.add_argument(
        "--repo-path",
        type=Path,
        default=None,
        help="Path to the git repository (default: current directory)",
    )
    parser.add_argument(
        "--github-token",
        type=str,
        default=None,
        help="GitHub token (default: INPUT_GITHUB_TOKEN or GITHUB_TOKEN)",
    )
    parser.add_argument(
        "--from-tag",
        type=str,
        default=None,
        help="Tag to start from, exclusive (default: most recent version tag)",
    )
    parser.add_argument(
        "--to-ref",
        type=str,
        default=None,
        help="Ref to end at, inclusive (default: HEAD)",
    )
    parser.add_argument(
        "--output-file",
        "-o",
        type=str,
        default=None,
        help=f"Changelog file path, or '{STDOUT_SENTINEL}' to skip writing (default: CHANGELOG.md)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["markdown", "json"],
        default=None,
        help="Output format (default: markdown)",
    )
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model identifier (default: claude-3-5-sonnet-20241022)",
    )
    parser.add_argument(
        "--use-bedrock",
        action="store_true",
        default=None,
        help="Call Claude through Amazon Bedrock",
    )
    parser.add_argument(
        "--use-vertex",
        action="store_true",
        default=None,
        help="Call Claude through Google Vertex AI",
    )
    parser.add_argument(
        "--bedrock-region",
        type=str,
        default=None,
        help="AWS region for Bedrock (default: us-east-1)",
    )
    parser.add_argument(
        "--vertex-project-id",
        type=str,
        default=None,
        help="Google Cloud project for Vertex AI (required with --use-vertex)",
    )
    parser.add_argument(
        "--vertex-region",
        type=str,
        default=None,
        help="Google Cloud region for Vertex AI (default: us-central1)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: INFO)",
    )
    return parser


def _report_failure(message: str) -> None:
    """Report the run's failure on stderr and as a workflow annotation."""
    print(f"✗ {message}", file=sys.stderr)
    if os.getenv("GITHUB_ACTIONS") == "true":
        print(f"::error::{message}")


def main(argv: list[str] | None = None) -> int:
    """Main function to parse arguments, generate the changelog and publish outputs."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(
            github_token=args.github_token,
            repo_path=args.repo_path,
            from_tag=args.from_tag,
            to_ref=args.to_ref,
            output_file=args.output_file,
            format=args.format,
            model=args.model,
            use_bedrock=args.use_bedrock,
            use_vertex=args.use_vertex,
            bedrock_region=args.bedrock_region,
            vertex_project_id=args.vertex_project_id,
            vertex_region=args.vertex_region,
            log_level=args.log_level,
        )

        logging.basicConfig(
            level=getattr(logging, config.log_level, logging.INFO),
            format="%(levelname)s %(name)s: %(message)s",
        )

        print("📝 Starting changelog generation...")

        github_output = os.getenv("GITHUB_OUTPUT")
        output_service = OutputService(
            GitHubActionsOutputRepositoryImpl(Path(github_output) if github_output else None)
        )
        git_service = GitService(GitRepositoryImpl(), repo_path=config.repo_path)
        repo_info = git_service.get_repository_info()
        repo_name = repo_info.full_name if repo_info else str(config.repo_path)
        print(f"   Repository: {repo_name} (branch: {git_service.get_current_branch()})")

        pipeline = ChangelogPipeline(git_service, output_service)

        outputs = pipeline.run(config)
        output_service.publish(outputs)

        if outputs.changes_count == "0":
            print("✓ No changes found between the specified references")
            return 0

        if output_service.should_write_file(outputs.changelog_file):
            print(f"✓ Changelog written to {outputs.changelog_file}")
        else:
            print("=" * 80)
            print(outputs.changelog)
            print("=" * 80)
        print(f"✓ Changelog generated from {outputs.changes_count} commits")
        return 0

    except Exception as e:
        _report_failure(f"Action failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
