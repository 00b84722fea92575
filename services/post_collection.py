"""
Post Collection Module

This module loads every post from a content store in one explicit step and
exposes the query surface the rendering layer depends on:

- list_published(): public listing, newest first, drafts excluded
- list_all(): listing including drafts, under a separate name
- get_by_slug(): single post lookup; None means "not found"

Problems with individual files never abort the load. They become
Diagnostic entries returned next to the collection.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

from config import settings
from data.models import (
    Diagnostic, Post, PostMetadata,
    DUPLICATE_SLUG, EMPTY_COLLECTION, MALFORMED_FRONT_MATTER, SLUG_MISMATCH, UNREADABLE_FILE,
    SEVERITY_WARNING,
)
from data.protocols import ContentStore
from services.frontmatter import FrontMatterParser
from utils.exceptions import DuplicateSlugError, MalformedFrontMatterError
from utils.helpers import slug_from_filename
from utils.logger import get_logger

logger = get_logger(__name__)


class PostCollection:
    """Immutable, sorted and slug-indexed set of posts."""

    def __init__(self, posts: Iterable[Post], show_drafts: bool = False,
                 diagnostics: Iterable[Diagnostic] = ()):
        """
        Build the collection.

        Args:
            posts: Parsed posts with unique slugs, in store order.
            show_drafts: Draft preview; lets get_by_slug() return unpublished posts.
            diagnostics: Problems found while loading, exposed unchanged.
        """
        # sorted() is stable, so equal dates keep store order
        self._posts: Tuple[Post, ...] = tuple(
            sorted(posts, key=lambda p: p.metadata.published_at, reverse=True)
        )
        self._by_slug: Dict[str, Post] = {}
        for post in self._posts:
            if post.slug in self._by_slug:
                raise DuplicateSlugError(post.slug, self._by_slug[post.slug].metadata.source,
                                         post.metadata.source)
            self._by_slug[post.slug] = post
        self.show_drafts = show_drafts
        self.diagnostics: Tuple[Diagnostic, ...] = tuple(diagnostics)

    def __len__(self) -> int:
        return len(self._posts)

    def list_published(self) -> List[PostMetadata]:
        """
        Public listing of posts.

        Returns:
            List[PostMetadata]: Published posts only, newest publishedAt first.
        """
        return [p.metadata for p in self._posts if p.is_publish]

    def list_all(self) -> List[PostMetadata]:
        """
        Listing of every post, drafts included.

        Returns:
            List[PostMetadata]: All posts, newest publishedAt first.
        """
        return [p.metadata for p in self._posts]

    def get_by_slug(self, slug: str) -> Optional[Post]:
        """
        Look up a single post including its body.

        Args:
            slug: The post's slug, matched verbatim.

        Returns:
            Optional[Post]: The post, or None when no post has this slug or the
                post is a draft and draft preview is off.
        """
        post = self._by_slug.get(slug)
        if post is None:
            return None
        if not post.is_publish and not self.show_drafts:
            return None
        return post


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading a content store."""
    collection: PostCollection
    diagnostics: Tuple[Diagnostic, ...]
    files_scanned: int

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_error]

    @property
    def ok(self) -> bool:
        return not self.errors


def _load_one(store: ContentStore, parser: FrontMatterParser, source: str) -> Union[Post, Diagnostic]:
    try:
        text = store.read(source)
    except (OSError, UnicodeDecodeError) as e:
        return Diagnostic(UNREADABLE_FILE, f"cannot read file: {e}", source=source)
    try:
        return parser.parse(text, source)
    except MalformedFrontMatterError as e:
        return Diagnostic(MALFORMED_FRONT_MATTER, e.reason, source=source)


def load_collection(store: ContentStore, show_drafts: Optional[bool] = None,
                    workers: Optional[int] = None,
                    parser: Optional[FrontMatterParser] = None,
                    warn_on_slug_mismatch: Optional[bool] = None) -> LoadResult:
    """
    Scan a content store once and build the post collection.

    Args:
        store: Where the content files come from.
        show_drafts: Draft preview for get_by_slug(), defaults to settings.SHOW_DRAFTS.
        workers: Threads used to read and parse files, defaults to settings.SCAN_WORKERS.
        parser: Front-matter parser, a default FrontMatterParser if omitted.
        warn_on_slug_mismatch: Report files whose name differs from their slug,
            defaults to settings.WARN_ON_SLUG_MISMATCH.

    Returns:
        LoadResult: The collection plus every diagnostic raised on the way.

    Raises:
        ContentStoreError: If the store itself cannot be listed.
    """
    if show_drafts is None:
        show_drafts = settings.SHOW_DRAFTS
    if workers is None:
        workers = settings.SCAN_WORKERS
    if warn_on_slug_mismatch is None:
        warn_on_slug_mismatch = settings.WARN_ON_SLUG_MISMATCH
    parser = parser or FrontMatterParser()

    sources = store.list_sources()
    logger.info(f"Loading {len(sources)} content file(s)")

    if workers > 1 and len(sources) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order once every parse has finished
            results = list(executor.map(lambda s: _load_one(store, parser, s), sources))
    else:
        results = [_load_one(store, parser, s) for s in sources]

    diagnostics: List[Diagnostic] = []
    posts: List[Post] = []
    seen: Dict[str, Post] = {}

    for result in results:
        if isinstance(result, Diagnostic):
            diagnostics.append(result)
            continue

        post = result
        first = seen.get(post.slug)
        if first is not None:
            error = DuplicateSlugError(post.slug, first.metadata.source, post.metadata.source)
            diagnostics.append(Diagnostic(
                DUPLICATE_SLUG,
                f"{error}; keeping {first.metadata.source}",
                source=post.metadata.source,
                related=(first.metadata.source,),
            ))
            continue
        seen[post.slug] = post
        posts.append(post)

        if warn_on_slug_mismatch:
            expected = slug_from_filename(post.metadata.source)
            if expected != post.slug:
                diagnostics.append(Diagnostic(
                    SLUG_MISMATCH,
                    f"file name implies slug '{expected}' but front-matter declares '{post.slug}'",
                    source=post.metadata.source,
                    severity=SEVERITY_WARNING,
                ))

    if sources and not posts:
        diagnostics.append(Diagnostic(
            EMPTY_COLLECTION,
            f"no valid posts among {len(sources)} content file(s)",
            severity=SEVERITY_WARNING,
        ))

    for diagnostic in diagnostics:
        if diagnostic.is_error:
            logger.error(str(diagnostic))
        else:
            logger.warning(str(diagnostic))

    collection = PostCollection(posts, show_drafts=show_drafts, diagnostics=diagnostics)
    published = len(collection.list_published())
    logger.info(f"Loaded {len(collection)} post(s), {published} published, "
                f"{len(collection) - published} draft(s), {len(diagnostics)} diagnostic(s)")

    return LoadResult(collection=collection, diagnostics=tuple(diagnostics), files_scanned=len(sources))
