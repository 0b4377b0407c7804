"""
GitHub API client infrastructure for orgpages.

Provides a clean abstraction over the three GitHub REST calls the
pipeline needs:
- List an organization's repositories (paginated, failures are fatal)
- Get a repository's topics (best-effort, failures give an empty set)
- Get a repository's README text (best-effort, failures give "")

Rate limiting is handled with exponential backoff and the remaining
quota is tracked from response headers.
"""

import base64
import binascii
import time
import logging
from dataclasses import dataclass
from typing import Optional, List, Dict, Any, FrozenSet
from datetime import datetime

import requests

from ..config import GitHubSettings
from ..domain import RawRepository
from ..exit_codes import TransportError

logger = logging.getLogger(__name__)


@dataclass
class RateLimitStatus:
    """GitHub API rate limit status."""
    remaining: int
    limit: int
    reset_time: int  # Unix timestamp
    used: int

    @property
    def reset_datetime(self) -> datetime:
        """Get reset time as datetime."""
        return datetime.fromtimestamp(self.reset_time)

    @property
    def minutes_until_reset(self) -> int:
        """Minutes until rate limit resets."""
        now = int(time.time())
        return max(0, (self.reset_time - now) // 60)

    @property
    def is_low(self) -> bool:
        """Check if rate limit is getting low (< 100 remaining)."""
        return self.remaining < 100


class GitHubClient:
    """
    GitHub API client with rate limiting.

    Authenticates with a token when one is configured and works
    anonymously otherwise.

    Example:
        client = GitHubClient(GitHubSettings(token="..."))
        for repo in client.list_org_repos("my-org"):
            print(repo.name, client.get_topics("my-org", repo.name))
    """

    def __init__(self, settings: Optional[GitHubSettings] = None, session: Optional[requests.Session] = None):
        """
        Initialize GitHubClient.

        Args:
            settings: API location, credentials and retry policy
            session: requests session to use (creates one if None)
        """
        self.settings = settings or GitHubSettings()
        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/vnd.github+json',
            'User-Agent': self.settings.user_agent,
        })
        if self.settings.token:
            self.session.headers['Authorization'] = f'token {self.settings.token}'
        self._rate_limit_status: Optional[RateLimitStatus] = None

    @property
    def rate_limit_status(self) -> Optional[RateLimitStatus]:
        """Rate limit status from the last API response, if any."""
        return self._rate_limit_status

    def _update_rate_limit_from_headers(self, headers) -> None:
        """Update rate limit status from response headers."""
        try:
            remaining = int(headers.get('X-RateLimit-Remaining', -1))
            limit = int(headers.get('X-RateLimit-Limit', -1))
            reset_time = int(headers.get('X-RateLimit-Reset', 0))
            used = int(headers.get('X-RateLimit-Used', 0))

            if remaining >= 0 and limit >= 0:
                self._rate_limit_status = RateLimitStatus(
                    remaining=remaining,
                    limit=limit,
                    reset_time=reset_time,
                    used=used
                )

                if self._rate_limit_status.is_low:
                    logger.warning(
                        f"GitHub API rate limit low: {remaining}/{limit} remaining, "
                        f"resets in {self._rate_limit_status.minutes_until_reset} minutes"
                    )
        except (ValueError, TypeError, AttributeError):
            pass  # Ignore parsing errors

    def _is_rate_limited(self, response) -> bool:
        if response.status_code == 429:
            return True
        return response.status_code == 403 and response.headers.get('X-RateLimit-Remaining') == '0'

    def _backoff_delay(self, response, attempt: int) -> float:
        """Seconds to wait before retrying a rate-limited request."""
        reset_time = response.headers.get('X-RateLimit-Reset')
        if reset_time:
            try:
                wait_time = int(reset_time) - int(time.time())
            except ValueError:
                wait_time = 0
            if 0 < wait_time < self.settings.max_delay:
                return float(wait_time)

        return min(self.settings.base_delay * (2 ** attempt), self.settings.max_delay)

    def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        GET an API endpoint, retrying while rate limited.

        Returns the last response; status checking is left to the caller.

        Raises:
            requests.RequestException: If every attempt failed at the network level
        """
        url = f"{self.settings.api_url}/{endpoint}"
        last_error: Optional[requests.RequestException] = None
        response = None

        for attempt in range(self.settings.max_retries):
            try:
                response = self.session.get(url, params=params, timeout=self.settings.timeout)
            except requests.RequestException as e:
                logger.warning(f"GitHub API request failed: {e}")
                last_error = e
                if attempt < self.settings.max_retries - 1:
                    time.sleep(min(self.settings.base_delay * (2 ** attempt), self.settings.max_delay))
                continue

            self._update_rate_limit_from_headers(response.headers)

            if self._is_rate_limited(response) and attempt < self.settings.max_retries - 1:
                delay = self._backoff_delay(response, attempt)
                logger.info(f"Rate limited, waiting {delay}s (attempt {attempt + 1})")
                time.sleep(delay)
                continue

            return response

        if response is not None:
            return response
        raise last_error or requests.RequestException(f"No response for {endpoint}")

    def list_org_repos(self, org: str) -> List[RawRepository]:
        """
        List every repository of an organization.

        Pages are requested until one comes back with fewer than
        `per_page` entries, and concatenated in order.

        Args:
            org: Organization login

        Returns:
            List of RawRepository

        Raises:
            TransportError: If any page cannot be fetched or parsed
        """
        per_page = self.settings.per_page
        repos: List[RawRepository] = []
        page = 1

        while True:
            try:
                response = self._get(f"orgs/{org}/repos", params={'per_page': per_page, 'page': page})
            except requests.RequestException as e:
                raise TransportError(f"Request failed: repos page {page}: {e}") from e

            if response.status_code != 200:
                raise TransportError(
                    f"HTTP {response.status_code}: repos page {page}",
                    status_code=response.status_code,
                )

            try:
                data = response.json()
            except ValueError as e:
                raise TransportError(f"Invalid JSON: repos page {page}: {e}") from e

            if not isinstance(data, list):
                raise TransportError(f"Unexpected response: repos page {page} is not a list")

            for item in data:
                try:
                    repos.append(RawRepository.from_api_response(item))
                except (ValueError, AttributeError) as e:
                    raise TransportError(f"Malformed repository on page {page}: {e}") from e

            logger.debug(f"Fetched {len(data)} repositories from page {page}")
            if len(data) < per_page:
                break
            page += 1

        logger.info(f"Found {len(repos)} repositories in {org}")
        return repos

    def _get_optional_json(self, endpoint: str) -> Optional[Any]:
        """GET an endpoint, returning None instead of raising on any failure."""
        try:
            response = self._get(endpoint)
        except requests.RequestException as e:
            logger.debug(f"GitHub API call failed for {endpoint}: {e}")
            return None

        if response.status_code != 200:
            if response.status_code != 404:
                logger.warning(f"GitHub API error {response.status_code} for {endpoint}")
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.debug(f"Invalid JSON from {endpoint}: {e}")
            return None

    def get_topics(self, org: str, name: str) -> FrozenSet[str]:
        """
        Get repository topics.

        Args:
            org: Organization login
            name: Repository name

        Returns:
            Set of topic strings, empty if the lookup failed
        """
        data = self._get_optional_json(f"repos/{org}/{name}/topics")
        if not isinstance(data, dict):
            return frozenset()
        names = data.get('names') or []
        return frozenset(str(n) for n in names)

    def get_readme(self, org: str, name: str) -> str:
        """
        Get the decoded README text of a repository.

        Args:
            org: Organization login
            name: Repository name

        Returns:
            README text, or "" if there is none or it can't be decoded
        """
        data = self._get_optional_json(f"repos/{org}/{name}/readme")
        if not isinstance(data, dict) or not data.get('content'):
            return ""
        return decode_content(data['content'])


def decode_content(content: str) -> str:
    """Decode the base64 `content` field of a GitHub contents response."""
    try:
        raw = base64.b64decode(content)
    except (binascii.Error, ValueError, TypeError) as e:
        logger.debug(f"Could not decode README content: {e}")
        return ""
    return raw.decode('utf-8', errors='replace')
