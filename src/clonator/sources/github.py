"""GitHub REST listing fetcher via curl or wget.

Streams the JSON of "list repositories" / "list gists" responses from the
process stdout so the core can parse it while it downloads.
[ https://docs.github.com/en/rest/repos/repos ]
[ https://docs.github.com/en/rest/gists/gists ]
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Iterator

from clonator.core.errors import UpstreamReadError
from clonator.core.schema import ListingKind
from clonator.sources.base import ListingRequest

logger = logging.getLogger(__name__)

API_ROOT = "https://api.github.com"
ACCEPT_HEADER = "Accept: application/vnd.github.v3+json"

# Personal access tokens start with "gh" (ghp_, gho_, ...) and are >= 36 chars
_TOKEN_PREFIX = "gh"
_TOKEN_MIN_LENGTH = 36

_CHUNK_SIZE = 8192


def looks_like_token(value: str) -> bool:
    return value.startswith(_TOKEN_PREFIX) and len(value) >= _TOKEN_MIN_LENGTH


def listing_url(kind: ListingKind, username: str = "", token: str = "") -> str:
    """Return the API endpoint for the requested listing."""
    kind = ListingKind(kind)
    if token:
        return f"{API_ROOT}/user/repos" if kind is ListingKind.repos else f"{API_ROOT}/gists"
    if not username:
        raise ValueError("A username or a token is required to list items")
    return f"{API_ROOT}/users/{username}/{kind.value}"


class GitHubListing:
    """Fetch one listing page from the GitHub REST API."""

    def __init__(self, request: ListingRequest, chunk_size: int = _CHUNK_SIZE) -> None:
        self.request = request
        self.chunk_size = chunk_size

    @property
    def url(self) -> str:
        return listing_url(self.request.kind, self.request.username, self.request.token)

    def headers(self) -> list[str]:
        headers = [ACCEPT_HEADER]
        if self.request.token:
            headers.append(f"Authorization: token {self.request.token}")
        return headers

    def command(self) -> list[str]:
        """Build the fetch command for whichever tool is installed."""
        if shutil.which("curl"):
            cmd = ["curl", "--silent", "--show-error", "--fail", "--location"]
            for header in self.headers():
                cmd.extend(["--header", header])
        elif shutil.which("wget"):
            cmd = ["wget", "--quiet", "-O-"]
            cmd.extend(f"--header={header}" for header in self.headers())
        else:
            raise UpstreamReadError("curl or wget must be installed in the system")
        cmd.append(self.url)
        return cmd

    def stream(self) -> Iterator[bytes]:
        """Yield the response body in chunks as it arrives.

        A non-zero exit status is reported after the chunks already read
        have been yielded.
        """
        cmd = self.command()
        logger.debug("Fetching %s with %s", self.url, cmd[0])
        try:
            proc = subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        except OSError as e:
            raise UpstreamReadError(f"Could not run {cmd[0]}: {e}") from e

        try:
            while True:
                try:
                    chunk = proc.stdout.read1(self.chunk_size)
                except OSError as e:
                    raise UpstreamReadError(f"Could not read {cmd[0]} output: {e}") from e
                if not chunk:
                    break
                yield chunk

            returncode = proc.wait()
            if returncode != 0:
                stderr = proc.stderr.read().decode("utf-8", errors="replace").strip()
                msg = f"{cmd[0]} failed with exit status {returncode} fetching {self.url}"
                if stderr:
                    msg += f": {stderr}"
                raise UpstreamReadError(msg)
        finally:
            if proc.poll() is None:
                proc.kill()
                proc.wait()
            proc.stdout.close()
            proc.stderr.close()
