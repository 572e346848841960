"""Downloading of repodata files from xbps mirrors."""

import logging
from enum import Enum
from os import utime
from pathlib import Path
from urllib.parse import urljoin, urlparse

import httpx

from xbpspkgdb.constants import ARCH, MIRROR, REPODATA_DIR
from xbpspkgdb.errors import PkgdbIOError
from xbpspkgdb.models import PackageDB
from xbpspkgdb.repodata import decode_archive_file
from xbpspkgdb.utils import try_parse_date

logger = logging.getLogger(__name__)


def url_to_local_path(url: str) -> Path:
    """Convert a repodata URL to a local file path that mirrors the source structure.

    Examples:
        >>> url_to_local_path("https://repo-default.voidlinux.org/current/x86_64-repodata")
        PosixPath('.../repodata/repo-default.voidlinux.org/current/x86_64-repodata')
    """
    parsed = urlparse(url)
    return REPODATA_DIR / parsed.netloc / parsed.path.lstrip("/")


def build_repodata_url(repo_url: str, arch: str) -> str:
    """Construct the repodata URL of `arch` inside a repository."""
    repo_prefix = repo_url if repo_url.endswith("/") else f"{repo_url}/"
    return urljoin(repo_prefix, f"{arch}-repodata")


class SkipMode(str, Enum):
    """File download skip modes.
    FAST: Skip download if local file exists.
    CHECK: Check Last-Modified and Content-Length headers to decide.
    NONE: Always download.
    """

    FAST = "fast"
    CHECK = "check"
    NONE = "none"


async def _is_up_to_date(client: httpx.AsyncClient, url: str, local_path: Path) -> bool:
    """Ask the mirror whether the cached `local_path` still matches `url`.

    Last-Modified is compared when the mirror sends it, Content-Length otherwise.
    """
    try:
        response = await client.head(url)
        response.raise_for_status()
        local = local_path.stat()
        if last_modified := try_parse_date(response.headers.get("last-modified")):
            # allow a second for fs granularity
            return last_modified.timestamp() <= local.st_mtime + 1
        if remote_size := response.headers.get("content-length"):
            return int(remote_size) == local.st_size
    except (httpx.HTTPError, OSError, ValueError) as e:
        logger.warning(f"Unable to check remote mtime or size for {url}: {e}")
    return False


async def download_file(
    url: str,
    output_path: Path,
    skip_mode: SkipMode = SkipMode.CHECK,
    client: httpx.AsyncClient | None = None,
) -> bool:
    """Download a file from a URL to a local path.

    Args:
        url: The URL to download from
        output_path: Where to save the downloaded file
        skip_mode: The mode for skipping downloads if the file exists
        client: HTTP client to use; a short-lived one is created if omitted

    Returns:
        True if the file is present and current, False if download failed
    """
    if client is None:
        async with httpx.AsyncClient(follow_redirects=True, timeout=30.0) as new_client:
            return await download_file(url, output_path, skip_mode, new_client)

    if output_path.is_file():
        if skip_mode == SkipMode.FAST:
            logger.debug(f"Skipping download, file already exists: {output_path}")
            return True
        if skip_mode == SkipMode.CHECK and await _is_up_to_date(client, url, output_path):
            logger.debug(f"Skipping download, local file is current: {output_path}")
            return True

    try:
        response = await client.get(url)
        response.raise_for_status()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(response.content)
        if last_modified := try_parse_date(response.headers.get("last-modified")):
            remote_ts = last_modified.timestamp()
            utime(output_path, (remote_ts, remote_ts))
    except httpx.HTTPStatusError as e:
        msg = f"Failed to download {url}: {e}"
        if e.response.status_code == 404:
            logger.debug(msg)
        else:
            logger.warning(msg)
        return False
    except (httpx.HTTPError, OSError) as e:
        logger.warning(f"Error downloading {url}: {e}")
        return False

    logger.debug(f"Downloaded {url} to {output_path}")
    return True


async def fetch_repodata(
    repo_url: str = MIRROR,
    arch: str = ARCH,
    skip_mode: SkipMode = SkipMode.CHECK,
    client: httpx.AsyncClient | None = None,
) -> PackageDB:
    """Download (or reuse the cached copy of) a repository's repodata and decode it.

    Args:
        repo_url: Base URL of the repository (e.g. https://repo-default.voidlinux.org/current/)
        arch: Architecture whose repodata to fetch (e.g. "x86_64", "aarch64-musl")

    Raises:
        PkgdbIOError: The repodata could not be downloaded
        MalformedDocumentError: The downloaded file is not valid repodata
    """
    url = build_repodata_url(repo_url, arch)
    local_path = url_to_local_path(url)
    if not await download_file(url, local_path, skip_mode=skip_mode, client=client):
        raise PkgdbIOError(f"Failed to fetch repodata from {url}")

    packages = decode_archive_file(local_path)
    logger.info(f"Loaded {len(packages)} packages from {url}")
    return packages
