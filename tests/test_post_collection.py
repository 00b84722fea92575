"""
Tests for the Post Collection

Tests cover loading, diagnostics, publish filtering, ordering,
slug lookup with and without draft preview, and parallel loading.
"""

from datetime import date
import sys
import os

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data.models import (
    Post, PostMetadata,
    DUPLICATE_SLUG, EMPTY_COLLECTION, MALFORMED_FRONT_MATTER, SLUG_MISMATCH, UNREADABLE_FILE,
)
from services.content_store import DirectoryContentStore
from services.post_collection import PostCollection, load_collection
from utils.exceptions import ContentStoreError, DuplicateSlugError


def _post(slug, published_at, is_publish=True, source=None):
    meta = PostMetadata(title=slug.title(), published_at=published_at, description="",
                        slug=slug, is_publish=is_publish, source=source or f"{slug}.md")
    return Post(metadata=meta, body=f"Body of {slug}")


@pytest.fixture
def sample_store(memory_store, make_post_text):
    return memory_store({
        "old.md": make_post_text(slug='"old"', publishedAt="2024-01-01"),
        "new.md": make_post_text(slug='"new"', publishedAt="2025-01-01"),
        "draft-post.md": make_post_text(slug='"draft-post"', publishedAt="2025-06-01",
                                        isPublish="false"),
    })


# =============================================================================
# Listing
# =============================================================================

class TestListing:
    """Tests for list_published() and list_all()."""

    def test_newest_first(self, memory_store, make_post_text, test_settings):
        store = memory_store({
            "a.md": make_post_text(slug='"a"', publishedAt="2024-01-01"),
            "b.md": make_post_text(slug='"b"', publishedAt="2025-01-01"),
        })

        result = load_collection(store)

        assert [m.slug for m in result.collection.list_published()] == ["b", "a"]

    def test_drafts_excluded_from_public_listing(self, sample_store, test_settings):
        collection = load_collection(sample_store).collection

        published = collection.list_published()

        assert "draft-post" not in [m.slug for m in published]
        assert all(m.is_publish for m in published)

    def test_list_all_includes_drafts(self, sample_store, test_settings):
        collection = load_collection(sample_store).collection

        assert [m.slug for m in collection.list_all()] == ["draft-post", "new", "old"]
        assert len(collection.list_all()) > len(collection.list_published())

    def test_equal_lengths_without_drafts(self, test_settings):
        collection = PostCollection([_post("a", date(2024, 1, 1)), _post("b", date(2024, 2, 1))])

        assert len(collection.list_all()) == len(collection.list_published())

    def test_listing_sorted_descending(self, test_settings):
        posts = [_post(f"p{i}", date(2024, (i * 5) % 12 + 1, 1)) for i in range(10)]
        listing = PostCollection(posts).list_published()

        for a, b in zip(listing, listing[1:]):
            assert a.published_at >= b.published_at

    def test_ties_keep_input_order(self, test_settings):
        same_day = date(2024, 1, 1)
        posts = [_post("first", same_day), _post("second", same_day), _post("third", same_day)]

        listing = PostCollection(posts).list_published()

        assert [m.slug for m in listing] == ["first", "second", "third"]

    def test_duplicate_slug_rejected_by_constructor(self, test_settings):
        with pytest.raises(DuplicateSlugError):
            PostCollection([_post("a", date(2024, 1, 1)), _post("a", date(2024, 2, 1), source="b.md")])


# =============================================================================
# Lookup
# =============================================================================

class TestGetBySlug:
    """Tests for get_by_slug()."""

    def test_returns_post_with_body(self, sample_store, test_settings):
        post = load_collection(sample_store).collection.get_by_slug("new")

        assert post is not None
        assert post.body == "Body text.\n"

    def test_unknown_slug_returns_none(self, sample_store, test_settings):
        assert load_collection(sample_store).collection.get_by_slug("missing") is None

    def test_draft_hidden_without_preview(self, sample_store, test_settings):
        collection = load_collection(sample_store).collection

        assert collection.get_by_slug("draft-post") is None
        assert "draft-post" in [m.slug for m in collection.list_all()]

    def test_draft_visible_with_preview(self, sample_store, test_settings):
        collection = load_collection(sample_store, show_drafts=True).collection

        post = collection.get_by_slug("draft-post")

        assert post is not None
        assert post.is_publish is False

    def test_preview_defaults_from_settings(self, sample_store, test_settings):
        test_settings.SHOW_DRAFTS = True

        collection = load_collection(sample_store).collection

        assert collection.get_by_slug("draft-post") is not None

    def test_lookup_matches_listing(self, sample_store, test_settings):
        collection = load_collection(sample_store, show_drafts=True).collection

        for meta in collection.list_all():
            assert collection.get_by_slug(meta.slug).metadata == meta

    def test_slug_lookup_is_verbatim(self, sample_store, test_settings):
        assert load_collection(sample_store).collection.get_by_slug("NEW") is None


# =============================================================================
# Diagnostics
# =============================================================================

class TestDiagnostics:
    """Tests for per-file failures and aggregate warnings."""

    def test_unterminated_file_skipped(self, memory_store, make_post_text, test_settings):
        store = memory_store({
            "broken.md": '---\ntitle: "Broken"\npublishedAt: 2024-01-01\nslug: "broken"\nisPublish: true\n',
            "good.md": make_post_text(slug='"good"'),
        })

        result = load_collection(store)

        assert [m.slug for m in result.collection.list_all()] == ["good"]
        assert [(d.kind, d.source) for d in result.diagnostics] == [(MALFORMED_FRONT_MATTER, "broken.md")]
        assert result.ok is False

    def test_unreadable_file_skipped(self, memory_store, make_post_text, test_settings):
        store = memory_store({
            "bad.md": UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"),
            "good.md": make_post_text(slug='"good"'),
        })

        result = load_collection(store)

        assert len(result.collection) == 1
        assert result.diagnostics[0].kind == UNREADABLE_FILE
        assert result.diagnostics[0].source == "bad.md"

    def test_duplicate_slug_first_wins(self, memory_store, make_post_text, test_settings):
        store = memory_store({
            "a.md": make_post_text(title='"First"', slug='"same-slug"'),
            "b.md": make_post_text(title='"Second"', slug='"same-slug"'),
        })

        result = load_collection(store, warn_on_slug_mismatch=False)

        assert result.collection.get_by_slug("same-slug").metadata.title == "First"
        assert len(result.collection) == 1
        duplicate = [d for d in result.diagnostics if d.kind == DUPLICATE_SLUG]
        assert len(duplicate) == 1
        assert duplicate[0].source == "b.md"
        assert duplicate[0].related == ("a.md",)
        assert "a.md" in duplicate[0].message and "b.md" in duplicate[0].message

    def test_slug_mismatch_warning(self, memory_store, make_post_text, test_settings):
        store = memory_store({"file-name.md": make_post_text(slug='"other-slug"')})

        result = load_collection(store)

        assert [d.kind for d in result.diagnostics] == [SLUG_MISMATCH]
        assert result.ok is True
        assert result.collection.get_by_slug("other-slug") is not None

    def test_slug_mismatch_can_be_disabled(self, memory_store, make_post_text, test_settings):
        test_settings.WARN_ON_SLUG_MISMATCH = False
        store = memory_store({"file-name.md": make_post_text(slug='"other-slug"')})

        assert load_collection(store).diagnostics == ()

    def test_index_file_uses_directory_name(self, memory_store, make_post_text, test_settings):
        store = memory_store({"my-post/index.md": make_post_text(slug='"my-post"')})

        assert load_collection(store).diagnostics == ()

    def test_empty_collection_warning(self, memory_store, test_settings):
        store = memory_store({"only.md": "no front matter here"})

        result = load_collection(store)

        kinds = [d.kind for d in result.diagnostics]
        assert kinds == [MALFORMED_FRONT_MATTER, EMPTY_COLLECTION]
        assert result.warnings[0].kind == EMPTY_COLLECTION
        assert len(result.collection) == 0

    def test_empty_store_is_not_a_problem(self, memory_store, test_settings):
        result = load_collection(memory_store({}))

        assert result.diagnostics == ()
        assert result.ok is True
        assert result.collection.list_published() == []

    def test_diagnostics_logged(self, memory_store, test_settings, capture_logs):
        load_collection(memory_store({"only.md": "nothing"}))

        messages = [r.getMessage() for r in capture_logs]
        assert any("malformed_front_matter" in m for m in messages)

    def test_collection_exposes_diagnostics(self, memory_store, test_settings):
        result = load_collection(memory_store({"only.md": "nothing"}))

        assert result.collection.diagnostics == result.diagnostics


# =============================================================================
# Loading from disk and in parallel
# =============================================================================

class TestLoading:
    """Tests for directory-backed and parallel loading."""

    def test_each_file_read_once(self, sample_store, test_settings):
        load_collection(sample_store)

        assert sorted(sample_store.reads) == sorted(sample_store.files)

    def test_parallel_matches_sequential(self, memory_store, make_post_text, test_settings):
        files = {
            f"post-{i:02d}.md": make_post_text(slug=f'"post-{i:02d}"', publishedAt=f"2024-01-{i % 28 + 1:02d}",
                                              isPublish="true" if i % 3 else "false")
            for i in range(30)
        }
        files["broken.md"] = "oops"

        sequential = load_collection(memory_store(files), workers=1)
        parallel = load_collection(memory_store(files), workers=4)

        assert parallel.collection.list_all() == sequential.collection.list_all()
        assert parallel.diagnostics == sequential.diagnostics

    def test_loads_from_directory(self, content_dir, make_post_text, test_settings):
        content_dir.write("2024-post.md", make_post_text(slug='"2024-post"', publishedAt="2024-01-01"))
        content_dir.write("2025-post.md", make_post_text(slug='"2025-post"', publishedAt="2025-01-01"))

        result = load_collection(DirectoryContentStore())

        assert [m.slug for m in result.collection.list_published()] == ["2025-post", "2024-post"]
        assert result.files_scanned == 2

    def test_missing_directory_raises(self, tmp_path, test_settings):
        with pytest.raises(ContentStoreError):
            load_collection(DirectoryContentStore(tmp_path / "missing"))
