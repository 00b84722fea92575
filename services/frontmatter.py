"""
Front-Matter Parser Module

This module splits a post content file into its metadata block and body.

Format:
    ---
    title: "My post"
    publishedAt: 2024-01-01
    description: ""
    slug: "my-post"
    isPublish: true
    ---
    Body text, returned untouched.

The block is a flat list of `key: value` lines. Quoted values are decoded as
YAML quoted scalars; unquoted values are taken as plain text. Each known key
is then coerced to its type (string, calendar date or boolean); any failure
raises MalformedFrontMatterError for that file only.
"""

import re
from datetime import date, datetime
from typing import Callable, Dict, List, Tuple

import yaml

from data.models import Post, PostMetadata
from utils.exceptions import MalformedFrontMatterError
from utils.logger import get_logger

logger = get_logger(__name__)

DELIMITER = "---"

_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]")

# characters YAML folds as line breaks or refuses outright; escaped before decoding
_YAML_UNSAFE_RE = re.compile("[^\t\x20-\x7e\xa0-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]|[\u2028\u2029]")


class _Value:
    """A raw scalar from the block, remembering whether it was quoted."""
    __slots__ = ("text", "quoted")

    def __init__(self, text: str, quoted: bool):
        self.text = text
        self.quoted = quoted


def _escape_unsafe(match) -> str:
    return "\\u%04x" % ord(match.group(0))


def _quoted_scalar(raw: str, source: str, key: str) -> Tuple[str, str]:
    """
    Find the quoted scalar at the start of raw.

    Returns the scalar rewritten as a YAML double-quoted string, and the text
    after its closing quote. Single-quoted content is carried over literally
    (a doubled quote stands for one quote).
    """
    quote = raw[0]
    parts = []
    i = 1
    while i < len(raw):
        ch = raw[i]
        if quote == '"' and ch == "\\":
            parts.append(raw[i:i + 2])
            i += 2
            continue
        if ch == quote:
            if quote == "'" and raw[i + 1:i + 2] == "'":
                parts.append("'")
                i += 2
                continue
            return '"' + "".join(parts) + '"', raw[i + 1:]
        if quote == "'" and ch in '\\"':
            parts.append("\\" + ch)
        else:
            parts.append(ch)
        i += 1
    raise MalformedFrontMatterError(source, f"unterminated quoted value for '{key}'")


def _unquote(raw: str, source: str, key: str) -> _Value:
    raw = raw.strip()
    if raw[:1] in ('"', "'"):
        scalar, rest = _quoted_scalar(raw, source, key)
        rest = rest.strip()
        if rest and not rest.startswith("#"):
            raise MalformedFrontMatterError(source, f"unexpected text after quoted value for '{key}'")
        try:
            text = yaml.safe_load(_YAML_UNSAFE_RE.sub(_escape_unsafe, scalar))
        except yaml.YAMLError as e:
            raise MalformedFrontMatterError(source, f"invalid quoted value for '{key}': {e}")
        return _Value(text, True)

    # unquoted: drop a trailing " # comment"
    comment = raw.find(" #")
    if comment >= 0:
        raw = raw[:comment].rstrip()
    return _Value(raw, False)


# =============================================================================
# Typed coercion
# =============================================================================

def _as_string(value: _Value, source: str, key: str):
    return value.text


def _as_date(value: _Value, source: str, key: str) -> date:
    text = value.text.strip()
    try:
        if _DATE_RE.match(text):
            return date.fromisoformat(text)
        if _DATETIME_RE.match(text):
            # an ISO timestamp keeps only its calendar date
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    raise MalformedFrontMatterError(source, f"'{key}' is not a valid date: {value.text!r}")


def _as_bool(value: _Value, source: str, key: str) -> bool:
    lowered = value.text.lower()
    if not value.quoted and lowered in ("true", "false"):
        return lowered == "true"
    raise MalformedFrontMatterError(source, f"'{key}' must be true or false, got {value.text!r}")


# front-matter key -> (PostMetadata field, coercion, required, default)
FIELDS: Dict[str, Tuple[str, Callable, bool, object]] = {
    "title": ("title", _as_string, True, None),
    "publishedAt": ("published_at", _as_date, True, None),
    "description": ("description", _as_string, False, ""),
    "slug": ("slug", _as_string, True, None),
    "isPublish": ("is_publish", _as_bool, True, None),
}

# string fields that may not be blank
NON_EMPTY = ("title", "slug")


class FrontMatterParser:
    """Parser for the front-matter block at the top of a post file."""

    def split(self, text: str, source: str = "<string>") -> Tuple[List[str], str]:
        """
        Split raw file text into front-matter lines and the body.

        Args:
            text: The whole content file.
            source: Name used in error messages.

        Returns:
            Tuple[List[str], str]: The lines between the delimiters and the body text.

        Raises:
            MalformedFrontMatterError: If either delimiter is missing.
        """
        if text.startswith("\ufeff"):
            text = text[1:]

        # only "\n" ends a line; other Unicode separators belong to the values
        lines = text.split("\n")
        if lines[0].rstrip() != DELIMITER:
            raise MalformedFrontMatterError(source, "missing opening '---' delimiter")

        for index in range(1, len(lines)):
            if lines[index].rstrip() == DELIMITER:
                block = [line[:-1] if line.endswith("\r") else line for line in lines[1:index]]
                body = "\n".join(lines[index + 1:])
                return block, body

        raise MalformedFrontMatterError(source, "unterminated front-matter block (no closing '---')")

    def parse_block(self, block: List[str], source: str = "<string>") -> Dict[str, _Value]:
        """
        Parse `key: value` lines into raw values.

        Args:
            block: Lines between the delimiters.
            source: Name used in error messages.

        Returns:
            Dict[str, _Value]: Raw values keyed by front-matter key.
        """
        values: Dict[str, _Value] = {}
        for lineno, line in enumerate(block, start=2):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            key, sep, raw = line.partition(":")
            key = key.strip()
            if not sep or not _KEY_RE.match(key):
                raise MalformedFrontMatterError(source, f"line {lineno} is not a 'key: value' pair: {line!r}")
            if key in values:
                raise MalformedFrontMatterError(source, f"duplicate key '{key}' on line {lineno}")
            values[key] = _unquote(raw, source, key)
        return values

    def parse(self, text: str, source: str = "<string>") -> Post:
        """
        Parse one content file into a Post.

        Args:
            text: The whole content file.
            source: Store-relative path of the file, kept on the metadata.

        Returns:
            Post: Typed metadata and the untouched body.

        Raises:
            MalformedFrontMatterError: If the block is missing, unterminated,
                or a required field is absent or has an invalid value.
        """
        block, body = self.split(text, source)
        values = self.parse_block(block, source)

        fields = {}
        for key, (attr, coerce, required, default) in FIELDS.items():
            if key not in values:
                if required:
                    raise MalformedFrontMatterError(source, f"missing required field '{key}'")
                fields[attr] = default
                continue
            fields[attr] = coerce(values[key], source, key)

        for key in NON_EMPTY:
            attr = FIELDS[key][0]
            if not fields[attr].strip():
                raise MalformedFrontMatterError(source, f"'{key}' must not be empty")

        unknown = sorted(set(values) - set(FIELDS))
        if unknown:
            logger.debug(f"{source}: ignoring unknown front-matter keys {unknown}")

        return Post(metadata=PostMetadata(source=source, **fields), body=body)


_default_parser = FrontMatterParser()


def parse_post(text: str, source: str = "<string>") -> Post:
    """Parse a content file with a shared FrontMatterParser."""
    return _default_parser.parse(text, source)
