# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Download the ktlint release asset from GitHub on demand.

Each fetch attempt writes a diagnostic transcript next to the destination.
The transcript is removed once the asset is in place and kept (and reported)
when anything goes wrong, so failed downloads can be inspected afterwards.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Iterable, Mapping
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Final
from urllib.parse import urlparse

import requests
from pydantic import BaseModel, Field, ValidationError
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TransferSpeedColumn,
)

from .config import LauncherSettings
from .console import detect_tty, get_console_manager
from .constants import (
    DEFAULT_DOWNLOAD_TIMEOUT,
    DOWNLOAD_CHUNK_SIZE,
    GITHUB_API_URL,
    LATEST_TAG,
    SIGNATURE_SUFFIXES,
)
from .errors import DownloadError

LOGGER = logging.getLogger(__name__)

_METADATA_ACCEPT: Final[str] = "application/vnd.github+json"
_ASSET_ACCEPT: Final[str] = "application/octet-stream"
_TRANSCRIPT_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(message)s"
_FETCH_ERRORS: Final[tuple[type[BaseException], ...]] = (
    requests.RequestException,
    ValidationError,
    ValueError,
    OSError,
    DownloadError,
)


class ReleaseAsset(BaseModel):
    """Downloadable file attached to a release."""

    name: str
    browser_download_url: str


class ReleaseMetadata(BaseModel):
    """Subset of the GitHub release payload used to pick the asset."""

    tag_name: str
    assets: list[ReleaseAsset] = Field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ReleaseDescriptor:
    """Release resolved for a single fetch; ``tag`` is ``None`` for latest."""

    repository: str
    tag: str | None
    download_url: str


def normalize_tag(tag: str | None) -> str | None:
    """Return ``None`` for the latest release, otherwise the exact tag."""

    if not tag or tag == LATEST_TAG:
        return None
    return tag


def release_api_url(repository: str, tag: str | None, *, api_url: str = GITHUB_API_URL) -> str:
    """Return the GitHub API endpoint describing the requested release."""

    tag = normalize_tag(tag)
    base = f"{api_url.rstrip('/')}/repos/{repository}/releases"
    return f"{base}/latest" if tag is None else f"{base}/tags/{tag}"


def select_asset_url(urls: Iterable[str]) -> str | None:
    """Return the first URL that is not a signature or checksum file.

    Metadata order is kept as-is; releases publishing several artifacts are
    expected to list the tool binary first.
    """

    for url in urls:
        filename = urlparse(url).path.rsplit("/", 1)[-1]
        if filename.endswith(SIGNATURE_SUFFIXES):
            continue
        return url
    return None


class ReleaseFetcher:
    """Resolve and download a single release asset over HTTPS."""

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        token: str | None = None,
        timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
        api_url: str = GITHUB_API_URL,
    ) -> None:
        self._session = session if session is not None else requests.Session()
        self._token = token
        self._timeout = timeout
        self._api_url = api_url

    def _headers(self, accept: str) -> dict[str, str]:
        headers = {"Accept": accept}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def describe(self, repository: str, tag: str | None = None) -> ReleaseDescriptor:
        """Fetch release metadata and pick the asset to download.

        Raises:
            requests.RequestException: If the metadata request fails.
            pydantic.ValidationError: If the payload is not a release.
            DownloadError: If the release has no usable asset.
        """

        url = release_api_url(repository, tag, api_url=self._api_url)
        LOGGER.info("GET %s", url)
        response = self._session.get(url, headers=self._headers(_METADATA_ACCEPT), timeout=self._timeout)
        LOGGER.info("HTTP %s %s", response.status_code, url)
        response.raise_for_status()
        metadata = ReleaseMetadata.model_validate(response.json())
        urls = [asset.browser_download_url for asset in metadata.assets]
        LOGGER.debug("release %s assets: %s", metadata.tag_name, ", ".join(urls) or "<none>")
        download_url = select_asset_url(urls)
        if download_url is None:
            raise DownloadError(f"Release {metadata.tag_name} of {repository} has no downloadable asset")
        return ReleaseDescriptor(repository=repository, tag=normalize_tag(tag), download_url=download_url)

    def fetch(
        self,
        repository: str,
        tag: str | None,
        destination: Path,
        *,
        show_progress: bool = False,
    ) -> Path:
        """Download the release asset to ``destination`` and make it executable.

        Args:
            repository: ``owner/name`` of the GitHub repository.
            tag: Release tag; ``None`` or ``"latest"`` selects the newest release.
            destination: Final path of the downloaded binary.
            show_progress: Render a progress bar when stdout is a terminal.

        Returns:
            Path: ``destination``.

        Raises:
            DownloadError: On any failure; the transcript path is attached once the
                transcript exists.
        """

        label = tag or LATEST_TAG
        transcript: Path | None = None
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            transcript = _create_transcript(destination.parent)
            handler = logging.FileHandler(transcript, encoding="utf-8")
        except OSError as exc:
            if transcript is not None:
                transcript.unlink(missing_ok=True)
            raise DownloadError(f"Unable to download {repository} release {label}: {exc}") from exc
        handler.setFormatter(logging.Formatter(_TRANSCRIPT_FORMAT))
        previous_level = LOGGER.level
        LOGGER.addHandler(handler)
        LOGGER.setLevel(logging.DEBUG)
        try:
            try:
                descriptor = self.describe(repository, tag)
                self._download(descriptor.download_url, destination, show_progress=show_progress)
            except _FETCH_ERRORS as exc:
                LOGGER.error("download failed: %s", exc)
                raise DownloadError(
                    f"Unable to download {repository} release {label}: {exc}",
                    transcript=transcript,
                ) from exc
        finally:
            LOGGER.removeHandler(handler)
            handler.close()
            LOGGER.setLevel(previous_level)

        transcript.unlink(missing_ok=True)
        return destination

    def _download(self, url: str, destination: Path, *, show_progress: bool) -> None:
        LOGGER.info("GET %s", url)
        with self._session.get(
            url,
            headers=self._headers(_ASSET_ACCEPT),
            stream=True,
            timeout=self._timeout,
        ) as response:
            LOGGER.info("HTTP %s %s", response.status_code, url)
            response.raise_for_status()
            total = _content_length(response.headers)
            handle = tempfile.NamedTemporaryFile(
                dir=destination.parent,
                prefix=f".{destination.name}-",
                suffix=".part",
                delete=False,
            )
            partial = Path(handle.name)
            try:
                with handle, _progress(show_progress) as progress:
                    task = progress.add_task(f"Downloading {destination.name}", total=total) if progress is not None else None
                    written = 0
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        if not chunk:
                            continue
                        handle.write(chunk)
                        written += len(chunk)
                        if progress is not None and task is not None:
                            progress.update(task, completed=written)
                LOGGER.info("wrote %d bytes to %s", written, partial)
                if written == 0:
                    raise DownloadError(f"Empty response body from {url}")
                if total is not None and written != total:
                    raise DownloadError(f"Truncated download from {url}: got {written} of {total} bytes")
                partial.chmod(partial.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
                os.replace(partial, destination)
            except BaseException:
                partial.unlink(missing_ok=True)
                raise
        LOGGER.info("installed %s", destination)


def _create_transcript(directory: Path) -> Path:
    descriptor, name = tempfile.mkstemp(prefix="download-", suffix=".log", dir=directory)
    os.close(descriptor)
    return Path(name)


def _content_length(headers: Mapping[str, str]) -> int | None:
    raw = headers.get("content-length")
    if raw is None or not str(raw).isdigit():
        return None
    return int(raw) or None


def _progress(enabled: bool) -> Progress | nullcontext[None]:
    """Return a transient rich progress bar, or a null context when disabled."""

    if not (enabled and detect_tty()):
        return nullcontext()
    console = get_console_manager().get(color=True, emoji=False)
    return Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(bar_width=None),
        DownloadColumn(),
        TransferSpeedColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def ensure_tool(
    settings: LauncherSettings,
    fetcher: ReleaseFetcher | None = None,
    *,
    show_progress: bool = True,
) -> Path:
    """Return the ktlint binary, downloading it when it is not cached yet."""

    target = settings.tool_path
    if target.is_file():
        return target
    if fetcher is None:
        fetcher = ReleaseFetcher(token=settings.github_token, timeout=settings.download_timeout)
    return fetcher.fetch(settings.repository, settings.release_tag, target, show_progress=show_progress)


__all__ = [
    "ReleaseAsset",
    "ReleaseDescriptor",
    "ReleaseFetcher",
    "ReleaseMetadata",
    "ensure_tool",
    "normalize_tag",
    "release_api_url",
    "select_asset_url",
]
