"""
Data Models for the Portfolio Content Pipeline

This module contains the record types used throughout the application:
the hand-authored presentation and project records, the post records
rebuilt from content files, and the diagnostics produced while loading them.

Every record is a frozen dataclass that validates itself on construction,
so malformed static data fails at import time instead of at render time.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Tuple

from utils.exceptions import SchemaError
from utils.helpers import is_valid_url


def _require_text(record: str, name: str, value: Any, allow_empty: bool = False) -> None:
    if not isinstance(value, str):
        raise SchemaError(f"{record}.{name} must be a string, got {type(value).__name__}")
    if not allow_empty and not value.strip():
        raise SchemaError(f"{record}.{name} is required")


def _require_url(record: str, name: str, value: Any) -> None:
    _require_text(record, name, value)
    if not is_valid_url(value):
        raise SchemaError(f"{record}.{name} must be an absolute URL, got {value!r}")


# =============================================================================
# Hand-authored records
# =============================================================================

@dataclass(frozen=True)
class Social:
    """A link to one of the site owner's social profiles."""
    label: str
    link: str

    def __post_init__(self):
        _require_text("Social", "label", self.label)
        _require_url("Social", "link", self.link)

    def to_dict(self) -> Dict[str, str]:
        return {"label": self.label, "link": self.link}


@dataclass(frozen=True)
class Presentation:
    """The site owner's introduction block.

    Attributes:
        mail (str): Contact address.
        title (str): Headline shown at the top of the home page.
        description (str): Short introduction text.
        socials (tuple): Social links in display order; may be empty.
        profile (str, optional): Path of the profile picture, None when omitted.
    """
    mail: str
    title: str
    description: str
    socials: Tuple[Social, ...] = ()
    profile: Optional[str] = None

    def __post_init__(self):
        _require_text("Presentation", "mail", self.mail)
        _require_text("Presentation", "title", self.title)
        _require_text("Presentation", "description", self.description, allow_empty=True)
        if self.socials is None or isinstance(self.socials, (str, bytes)):
            raise SchemaError("Presentation.socials must be a sequence of Social")
        socials = tuple(self.socials)
        for social in socials:
            if not isinstance(social, Social):
                raise SchemaError(f"Presentation.socials entries must be Social, got {type(social).__name__}")
        # frozen: normalise lists to tuples through object.__setattr__
        object.__setattr__(self, "socials", socials)
        if self.profile is not None:
            _require_text("Presentation", "profile", self.profile)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "mail": self.mail,
            "title": self.title,
            "description": self.description,
            "socials": [s.to_dict() for s in self.socials],
        }
        if self.profile is not None:
            data["profile"] = self.profile
        return data


@dataclass(frozen=True)
class Project:
    """A project shown in the portfolio list.

    Attributes:
        title (str): Project name.
        techs (tuple): Technologies used, in display order, without duplicates.
        link (str): Absolute URL of the project.
        is_coming_soon (bool): Marks a teaser entry that is not shipped yet.
    """
    title: str
    techs: Tuple[str, ...]
    link: str
    is_coming_soon: bool = False

    def __post_init__(self):
        _require_text("Project", "title", self.title)
        _require_url("Project", "link", self.link)
        if not isinstance(self.is_coming_soon, bool):
            raise SchemaError("Project.is_coming_soon must be a boolean")
        if self.techs is None or isinstance(self.techs, (str, bytes)):
            raise SchemaError(f"Project.techs must be a sequence of strings ({self.title})")
        techs = tuple(self.techs)
        for tech in techs:
            _require_text("Project", "techs[]", tech)
        if len(set(techs)) != len(techs):
            raise SchemaError(f"Project.techs contains duplicates ({self.title}): {list(techs)}")
        if not techs and not self.is_coming_soon:
            raise SchemaError(f"Project.techs must not be empty for a shipped project ({self.title})")
        object.__setattr__(self, "techs", techs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "techs": list(self.techs),
            "link": self.link,
            "isComingSoon": self.is_coming_soon,
        }


# =============================================================================
# Post records
# =============================================================================

@dataclass(frozen=True)
class PostMetadata:
    """Front-matter of one post plus the content file it came from."""
    title: str
    published_at: date
    description: str
    slug: str
    is_publish: bool
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "publishedAt": self.published_at.isoformat(),
            "description": self.description,
            "slug": self.slug,
            "isPublish": self.is_publish,
        }


@dataclass(frozen=True)
class Post:
    """A parsed post: its metadata and the untouched body text."""
    metadata: PostMetadata
    body: str

    @property
    def slug(self) -> str:
        return self.metadata.slug

    @property
    def is_publish(self) -> bool:
        return self.metadata.is_publish


# =============================================================================
# Load diagnostics
# =============================================================================

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

MALFORMED_FRONT_MATTER = "malformed_front_matter"
UNREADABLE_FILE = "unreadable_file"
DUPLICATE_SLUG = "duplicate_slug"
SLUG_MISMATCH = "slug_mismatch"
EMPTY_COLLECTION = "empty_collection"


@dataclass(frozen=True)
class Diagnostic:
    """A problem found while loading content. Never raised, only reported."""
    kind: str
    message: str
    source: Optional[str] = None
    severity: str = SEVERITY_ERROR
    related: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR

    def __str__(self) -> str:
        where = f"{self.source}: " if self.source else ""
        return f"[{self.severity}] {self.kind}: {where}{self.message}"
