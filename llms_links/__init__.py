"""llms.txt link validator: discover, extract and check documentation links."""

from llms_links.discovery import discover
from llms_links.extractor import extract_links
from llms_links.models import (
    ExtractedLink,
    Failure,
    FileError,
    FilesystemError,
    LinkCheckError,
    RunReport,
    Skipped,
    Success,
    ValidationOutcome,
)
from llms_links.report import render_report
from llms_links.runner import check_tree, exit_code, run_check
from llms_links.validator import validate

__all__ = [
    "discover",
    "extract_links",
    "validate",
    "check_tree",
    "run_check",
    "exit_code",
    "render_report",
    "ExtractedLink",
    "Success",
    "Failure",
    "Skipped",
    "ValidationOutcome",
    "FileError",
    "RunReport",
    "LinkCheckError",
    "FilesystemError",
]
