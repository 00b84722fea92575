"""
Portfolio Content Pipeline

This is the main entry point for the portfolio content tooling.
It loads the blog posts from the content directory, validates them,
and exposes listings, single-post lookup, a link check of the static
tables and a JSON manifest for the rendering layer.
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, Iterable, List, Optional

from config import settings
from data.models import Post, PostMetadata, Presentation, Project
from data.presentation import PRESENTATION
from data.projects import PROJECTS
from data.protocols import ContentStore
from services.content_store import DirectoryContentStore
from services.link_checker import LinkChecker, collect_links, require_healthy
from services.post_collection import LoadResult, load_collection
from utils.exceptions import (
    PortfolioError, ConfigurationError, ContentError, LinkCheckError
)
from utils.helpers import truncate_text
from utils.logger import get_logger, setup_file_logging

# Set up logging
logger = get_logger(__name__)

EXIT_OK = 0
EXIT_PROBLEMS = 1
EXIT_FAILURE = 2


class ContentSite:
    """
    Main application class for the content pipeline.

    This class wires the static tables, the content store and the
    link checker together and implements each CLI command.
    """

    def __init__(self, content_store: Optional[ContentStore] = None,
                 link_checker: Optional[LinkChecker] = None,
                 presentation: Optional[Presentation] = None,
                 projects: Optional[Iterable[Project]] = None,
                 validate: bool = True):
        """
        Initialize the application.

        Args:
            content_store: Source of post files, a DirectoryContentStore over settings.CONTENT_DIR by default.
            link_checker: Link checker service, created on first use if omitted.
            presentation: Presentation table, data.presentation.PRESENTATION by default.
            projects: Projects table, data.projects.PROJECTS by default.
            validate: Run settings validation on start-up.
        """
        if validate:
            settings.validate_settings()

        self.content_store = content_store or DirectoryContentStore()
        self._link_checker = link_checker
        self.presentation = presentation or PRESENTATION
        self.projects = tuple(projects) if projects is not None else PROJECTS

    @property
    def link_checker(self) -> LinkChecker:
        if self._link_checker is None:
            self._link_checker = LinkChecker()
        return self._link_checker

    def load(self, show_drafts: Optional[bool] = None) -> LoadResult:
        """Load the post collection from the content store."""
        return load_collection(self.content_store, show_drafts=show_drafts)

    # =========================================================================
    # Commands
    # =========================================================================

    def check(self) -> int:
        """
        Validate every content file and report diagnostics.

        Returns:
            int: EXIT_OK when no error-level diagnostic was found, EXIT_PROBLEMS otherwise.
        """
        result = self.load()
        for diagnostic in result.diagnostics:
            print(diagnostic)
        print(f"{result.files_scanned} file(s) scanned, {len(result.collection)} post(s) loaded, "
              f"{len(result.errors)} error(s), {len(result.warnings)} warning(s)")
        return EXIT_OK if result.ok else EXIT_PROBLEMS

    def list_posts(self, include_drafts: bool = False) -> int:
        """Print the post listing, newest first."""
        result = self.load()
        collection = result.collection
        entries = collection.list_all() if include_drafts else collection.list_published()
        for meta in entries:
            print(format_listing_line(meta))
        if not entries:
            logger.info("No posts to list")
        return EXIT_OK

    def show(self, slug: str, include_drafts: bool = False) -> int:
        """Print one post's metadata and body."""
        result = self.load(show_drafts=include_drafts or None)
        post = result.collection.get_by_slug(slug)
        if post is None:
            logger.warning(f"Post not found: {slug}")
            return EXIT_PROBLEMS
        print(format_post(post))
        return EXIT_OK

    def check_links(self) -> int:
        """Check every link in the presentation and projects tables."""
        results = self.link_checker.check_all(collect_links(self.presentation, self.projects))
        for status in results:
            state = "OK " if status.ok else "ERR"
            detail = status.status_code if status.error is None else status.error
            print(f"[{state}] {detail} | {status.label} | {status.url}")
        require_healthy(results)
        return EXIT_OK

    def build_manifest(self, include_drafts: bool = False) -> Dict[str, Any]:
        """
        Build the JSON-ready manifest consumed by the rendering layer.

        Args:
            include_drafts: Include unpublished posts in the post list.

        Returns:
            Dict[str, Any]: presentation, projects and posts metadata.
        """
        result = self.load()
        collection = result.collection
        entries = collection.list_all() if include_drafts else collection.list_published()
        return {
            "presentation": self.presentation.to_dict(),
            "projects": [p.to_dict() for p in self.projects],
            "posts": [m.to_dict() for m in entries],
        }

    def write_manifest(self, output: Optional[str] = None, include_drafts: bool = False) -> int:
        """Write the manifest to disk as JSON."""
        output = output or settings.MANIFEST_PATH
        manifest = self.build_manifest(include_drafts=include_drafts)
        directory = os.path.dirname(output)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2, ensure_ascii=False)
        logger.info(f"Wrote manifest with {len(manifest['posts'])} post(s) to {output}")
        return EXIT_OK


def format_listing_line(meta: PostMetadata) -> str:
    draft = "" if meta.is_publish else " [draft]"
    description = truncate_text(meta.description, settings.LIST_DESCRIPTION_LENGTH)
    line = f"{meta.published_at.isoformat()}  {meta.slug}  {meta.title}{draft}"
    if description:
        line += f" - {description}"
    return line


def format_post(post: Post) -> str:
    meta = post.metadata
    header = [
        f"title: {meta.title}",
        f"publishedAt: {meta.published_at.isoformat()}",
        f"description: {meta.description}",
        f"slug: {meta.slug}",
        f"isPublish: {'true' if meta.is_publish else 'false'}",
        f"source: {meta.source}",
    ]
    return "\n".join(header) + "\n\n" + post.body


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Portfolio content pipeline')
    parser.add_argument('--content-dir', type=str, default=None,
                        help='Directory holding the post files (defaults to CONTENT_DIR)')
    parser.add_argument('--log-file', type=str, default=None, help='Log file path')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='INFO', help='Logging level')

    commands = parser.add_subparsers(dest='command')
    commands.add_parser('check', help='Validate content files and report diagnostics')

    list_cmd = commands.add_parser('list', help='List posts, newest first')
    list_cmd.add_argument('--drafts', action='store_true', help='Include unpublished posts')

    show_cmd = commands.add_parser('show', help='Print one post')
    show_cmd.add_argument('slug', help='Slug of the post')
    show_cmd.add_argument('--drafts', action='store_true', help='Allow unpublished posts')

    commands.add_parser('links', help='Check social and project links')

    manifest_cmd = commands.add_parser('manifest', help='Write a JSON manifest')
    manifest_cmd.add_argument('--output', type=str, default=None,
                              help='Output path (defaults to MANIFEST_PATH)')
    manifest_cmd.add_argument('--drafts', action='store_true', help='Include unpublished posts')

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = 'check'
    return args


def run_command(site: ContentSite, args) -> int:
    """Dispatch a parsed command to the application."""
    if args.command == 'check':
        return site.check()
    if args.command == 'list':
        return site.list_posts(include_drafts=args.drafts)
    if args.command == 'show':
        return site.show(args.slug, include_drafts=args.drafts)
    if args.command == 'links':
        return site.check_links()
    if args.command == 'manifest':
        return site.write_manifest(args.output, include_drafts=args.drafts)
    raise ConfigurationError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = parse_arguments(argv)

    log_level = getattr(logging, args.log_level)
    setup_file_logging(args.log_file, log_level)

    logger.debug(f"Configuration: {settings.get_config_summary()}")

    try:
        store = DirectoryContentStore(args.content_dir) if args.content_dir else None
        site = ContentSite(content_store=store)
        exit_code = run_command(site, args)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        exit_code = EXIT_FAILURE
    except LinkCheckError as e:
        logger.error(f"Link check failed: {e}")
        exit_code = EXIT_PROBLEMS
    except ContentError as e:
        logger.error(f"Content error: {e}", exc_info=True)
        exit_code = EXIT_FAILURE
    except PortfolioError as e:
        logger.error(f"Portfolio error: {e}", exc_info=True)
        exit_code = EXIT_FAILURE
    except Exception as e:
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        exit_code = EXIT_FAILURE

    logger.debug(f"Finished '{args.command}' with exit code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
