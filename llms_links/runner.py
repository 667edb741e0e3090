"""Orchestrator: discover → extract → validate, with two bounded pools.

Files are processed concurrently under one semaphore sized by
``settings.file_concurrency``; each file then validates its own URLs under a
separate semaphore sized by ``settings.url_concurrency``.  A file's outcomes
are fully gathered before they are merged into the :class:`RunReport`.
"""

from __future__ import annotations

import asyncio
import os
from typing import List, Optional, Union

import httpx

from llms_links.config import Settings, settings as default_settings
from llms_links.discovery import discover
from llms_links.extractor import extract_file_links
from llms_links.models import (
    DocumentPath,
    ExtractedLink,
    Failure,
    FileError,
    RunReport,
    Skipped,
    ValidationOutcome,
)
from llms_links.validator import build_client, validate

FileResult = Union[List[ValidationOutcome], FileError]


async def _check_link(
    link: ExtractedLink,
    client: httpx.AsyncClient,
    limit: asyncio.Semaphore,
    timeout: float,
) -> ValidationOutcome:
    async with limit:
        try:
            return await validate(link.url, link.source, client, timeout=timeout)
        except Exception as exc:
            print(f"[CHECK] ✗ Unexpected error for {link.url!r}: {exc}")
            return Failure(url=link.url, reason=f"Unexpected error: {exc!r}", source=link.source)


async def check_file(
    path: DocumentPath,
    client: httpx.AsyncClient,
    url_concurrency: int,
    timeout: float,
) -> List[ValidationOutcome]:
    """Extract and validate every link of one documentation file."""
    print(f"[FILE] 📄 Processing {path} …")
    links = extract_file_links(path)
    limit = asyncio.Semaphore(url_concurrency)
    return list(
        await asyncio.gather(*(_check_link(link, client, limit, timeout) for link in links))
    )


async def _check_file_bounded(
    path: DocumentPath,
    client: httpx.AsyncClient,
    limit: asyncio.Semaphore,
    cfg: Settings,
) -> FileResult:
    async with limit:
        try:
            return await check_file(path, client, cfg.url_concurrency, cfg.request_timeout)
        except Exception as exc:
            print(f"[FILE] ✗ Failed to process {path}: {exc}")
            return FileError(source=path, reason=f"{type(exc).__name__}: {exc}")


def build_report(results: List[FileResult]) -> RunReport:
    """Fold per-file results into a single :class:`RunReport`."""
    report = RunReport(files_checked=len(results))
    for result in results:
        if isinstance(result, FileError):
            report.file_errors.append(result)
            continue
        for outcome in result:
            report.urls_checked += 1
            if isinstance(outcome, Failure):
                report.add_failure(outcome)
            elif isinstance(outcome, Skipped):
                report.skipped += 1
    return report


async def check_tree(
    root_dir: Union[str, os.PathLike],
    cfg: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> RunReport:
    """Validate every link in every documentation file below *root_dir*.

    Raises:
        FilesystemError: If *root_dir* cannot be scanned.  This is the only
            error that aborts a run; everything else ends up in the report.
    """
    cfg = cfg or default_settings
    print(f"[DISCOVER] 🔍 Searching for {cfg.doc_suffix} files in {os.path.abspath(root_dir)} …")
    paths = discover(root_dir, cfg.doc_suffix)
    print(f"[DISCOVER] Found {len(paths)} file(s).")

    owns_client = client is None
    if client is None:
        client = build_client(cfg)
    try:
        limit = asyncio.Semaphore(cfg.file_concurrency)
        results = await asyncio.gather(
            *(_check_file_bounded(path, client, limit, cfg) for path in paths)
        )
    finally:
        if owns_client:
            await client.aclose()

    return build_report(list(results))


def run_check(root_dir: Union[str, os.PathLike], cfg: Optional[Settings] = None) -> RunReport:
    """Synchronous wrapper around :func:`check_tree`."""
    return asyncio.run(check_tree(root_dir, cfg))


def exit_code(report: RunReport) -> int:
    """Return 0 when every link passed or was skipped, 1 otherwise."""
    return 0 if report.ok else 1
