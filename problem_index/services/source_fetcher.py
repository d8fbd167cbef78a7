"""Source fetchers returning raw CSV text per company and recency window.

Updates:
    v0.1.0 - 2026-09-06 - GitHub archive download with window file mapping.
    v0.1.1 - 2026-09-12 - Added tenacity retries and a local directory source.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Mapping, Protocol

import requests
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..core.errors import SourceFetchError
from .config_service import DEFAULT_WINDOW_FILES, SourceConfig

logger = logging.getLogger(__name__)

RepoData = dict[str, dict[str, str]]

USER_AGENT = "company-problem-index/0.1"


class SourceFetcher(Protocol):
    """Anything that can produce ``company -> window -> csv text``."""

    def fetch(self) -> RepoData:
        ...


class GitHubArchiveFetcher:
    """Downloads the company-wise problem repository as a ZIP archive."""

    def __init__(
        self,
        config: SourceConfig | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        """Configure the archive location, limits and retry policy.

        Args:
            config (SourceConfig | None): Source settings; defaults apply when omitted.
            session (requests.Session | None): HTTP session, injectable for tests.
        """

        self._config = config or SourceConfig()
        self._session = session or requests.Session()
        self._retry = Retrying(
            stop=stop_after_attempt(self._config.retry_attempts),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type(requests.RequestException),
            reraise=True,
        )

    @property
    def archive_url(self) -> str:
        return self._config.archive_url

    def fetch(self) -> RepoData:
        """Download the archive and extract every recognized CSV file.

        Returns:
            RepoData: CSV text grouped by company name and window label.

        Raises:
            SourceFetchError: If the download fails or no company data is found.
        """

        try:
            payload = self._download()
        except RetryError as retry_error:  # pragma: no cover - reraise=True path
            last_exc = retry_error.last_attempt.exception()
            raise SourceFetchError(f"GitHub fetch failed: {last_exc}") from last_exc
        except requests.Timeout as exc:
            logger.error("GitHub download timed out.")
            raise SourceFetchError(f"GitHub fetch failed: {exc}") from exc
        except requests.HTTPError as exc:
            response = exc.response
            status = response.status_code if response is not None else "unknown"
            logger.error("GitHub responded with HTTP %s", status)
            raise SourceFetchError(f"GitHub fetch failed: {exc}") from exc
        except requests.RequestException as exc:
            logger.error("Failed to fetch repository: %s", exc)
            raise SourceFetchError(f"GitHub fetch failed: {exc}") from exc

        logger.info(
            "archive_downloaded",
            extra={"tool": "source_fetcher", "size_mb": round(len(payload) / 1024 / 1024, 2)},
        )
        try:
            archive = zipfile.ZipFile(io.BytesIO(payload))
        except zipfile.BadZipFile as exc:
            raise SourceFetchError(f"Downloaded archive is not a ZIP file: {exc}") from exc

        with archive:
            return self._extract(archive)

    def _download(self) -> bytes:
        for attempt in self._retry:
            with attempt:
                logger.debug(
                    "Downloading %s attempt=%s",
                    self.archive_url,
                    attempt.retry_state.attempt_number,
                )
                response = self._session.get(
                    self.archive_url,
                    timeout=self._config.timeout_seconds,
                    headers={"User-Agent": USER_AGENT, "Accept": "application/zip"},
                )
                response.raise_for_status()
                payload = response.content
                if len(payload) > self._config.max_bytes:
                    raise SourceFetchError(
                        f"Archive exceeds {self._config.max_bytes} bytes ({len(payload)})."
                    )
                return payload
        raise SourceFetchError("GitHub fetch finished without a response.")

    def _extract(self, archive: zipfile.ZipFile) -> RepoData:
        repo_data: RepoData = {}
        loaded = 0
        skipped = 0

        for entry in archive.infolist():
            if entry.is_dir() or not entry.filename.endswith(".csv"):
                continue

            # Expected layout: <repo>-<branch>/<Company>/<File>.csv
            parts = entry.filename.split("/")
            if len(parts) < 3:
                logger.debug("Skipping %s: not enough path segments", entry.filename)
                skipped += 1
                continue

            company_name, file_name = parts[-2], parts[-1]
            window = self._config.window_files.get(file_name)
            if not window:
                logger.debug("Skipping unrecognized file %s in %s", file_name, company_name)
                skipped += 1
                continue

            content = archive.read(entry).decode("utf-8", errors="replace")
            repo_data.setdefault(company_name, {})[window] = content
            loaded += 1

        return _finish(repo_data, loaded, skipped, source=self.archive_url)


class DirectorySourceFetcher:
    """Reads ``<root>/<Company>/<File>.csv`` trees from local disk."""

    def __init__(
        self, root: Path | str, window_files: Mapping[str, str] | None = None
    ) -> None:
        self._root = Path(root)
        self._window_files = dict(window_files or DEFAULT_WINDOW_FILES)

    def fetch(self) -> RepoData:
        """Collect CSV text from the directory tree.

        Raises:
            SourceFetchError: If the directory is missing or holds no company data.
        """

        if not self._root.is_dir():
            raise SourceFetchError(f"Source directory not found: {self._root}")

        repo_data: RepoData = {}
        loaded = 0
        skipped = 0
        for path in sorted(self._root.rglob("*.csv")):
            parts = path.relative_to(self._root).parts
            window = self._window_files.get(path.name)
            if len(parts) < 2 or not window:
                skipped += 1
                continue
            repo_data.setdefault(parts[-2], {})[window] = path.read_text(
                encoding="utf-8", errors="replace"
            )
            loaded += 1

        return _finish(repo_data, loaded, skipped, source=str(self._root))


def _finish(repo_data: RepoData, loaded: int, skipped: int, *, source: str) -> RepoData:
    if not repo_data:
        logger.error("No company data found in %s", source)
        raise SourceFetchError(
            f"No company data found in {source}. Check file structure."
        )
    logger.info(
        "source_loaded",
        extra={
            "tool": "source_fetcher",
            "csv_files": loaded,
            "skipped_files": skipped,
            "companies": len(repo_data),
        },
    )
    return repo_data
