"""
Link Checker Service Module

This module verifies that the external links in the static tables
(presentation socials and project links) still respond.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import requests

from config import settings
from data.models import Presentation, Project
from utils.exceptions import LinkCheckError
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LinkStatus:
    """Result of checking one link.

    Attributes:
        label (str): Where the link appears, e.g. "social:Github".
        url (str): The URL that was requested.
        status_code (int, optional): Final HTTP status, None on transport errors.
        error (str, optional): Transport error message.
    """
    label: str
    url: str
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status_code is not None and self.status_code < 400


def collect_links(presentation: Presentation, projects: Iterable[Project]) -> List[Tuple[str, str]]:
    """
    Gather (label, url) pairs from the static tables.

    Coming-soon projects are skipped since their link may not be live yet.
    """
    links = [(f"social:{s.label}", s.link) for s in presentation.socials]
    for project in projects:
        if project.is_coming_soon:
            continue
        links.append((f"project:{project.title}", project.link))
    return links


class LinkChecker:
    """Service for checking the reachability of external links."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[int] = None,
                 workers: Optional[int] = None, headers: Optional[Dict[str, str]] = None):
        """Initialize the link checker."""
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.LINK_CHECK_TIMEOUT
        self.workers = workers if workers is not None else settings.LINK_CHECK_WORKERS
        self.headers = headers if headers is not None else settings.REQUEST_HEADERS

    def check(self, label: str, url: str) -> LinkStatus:
        """
        Check a single link.

        Tries HEAD first and falls back to GET for sites that refuse HEAD.

        Args:
            label: Where the link appears.
            url: The URL to request.

        Returns:
            LinkStatus: The final status code or the transport error.
        """
        try:
            response = self.session.head(url, headers=self.headers, timeout=self.timeout,
                                         allow_redirects=True)
            if response.status_code >= 400:
                response = self.session.get(url, headers=self.headers, timeout=self.timeout,
                                            allow_redirects=True)
            return LinkStatus(label, url, status_code=response.status_code)
        except requests.exceptions.Timeout:
            logger.warning(f"Timeout checking {url}")
            return LinkStatus(label, url, error="timeout")
        except requests.exceptions.RequestException as e:
            logger.warning(f"HTTP error checking {url}: {e}")
            return LinkStatus(label, url, error=str(e))

    def check_all(self, links: List[Tuple[str, str]]) -> List[LinkStatus]:
        """
        Check every link, in parallel when configured.

        Args:
            links: (label, url) pairs.

        Returns:
            List[LinkStatus]: One result per input pair, in input order.
        """
        if not links:
            return []
        logger.info(f"Checking {len(links)} link(s) with {self.workers} worker(s)")
        with ThreadPoolExecutor(max_workers=max(1, self.workers)) as executor:
            results = list(executor.map(lambda pair: self.check(*pair), links))

        broken = [r for r in results if not r.ok]
        if broken:
            logger.warning(f"{len(broken)} of {len(results)} link(s) are broken")
        else:
            logger.info("All links are healthy")
        return results


def require_healthy(results: List[LinkStatus]) -> None:
    """
    Raise if any link check failed.

    Raises:
        LinkCheckError: Listing every broken link.
    """
    broken = [r for r in results if not r.ok]
    if broken:
        lines = [f"{r.label} {r.url} -> {r.status_code if r.error is None else r.error}" for r in broken]
        raise LinkCheckError("Broken links:\n" + "\n".join(f"  - {line}" for line in lines))
