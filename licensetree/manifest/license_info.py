"""Extract normalized license, repository and vendor info from a manifest."""

from __future__ import annotations

from typing import Any, Mapping

from licensetree.graph.models import UNKNOWN_LICENSE, LicenseInfo
from licensetree.manifest.author import parse_author
from licensetree.manifest.hosted_git import shortcut_to_https


def _is_set(value: Any) -> bool:
    return value is not None and value is not False and value != ""


def normalize_license_value(value: Any) -> str:
    """``"MIT"`` and ``{"type": "MIT"}`` both give ``"MIT"``; anything else is UNKNOWN."""
    if isinstance(value, Mapping):
        value = value.get("type")
    if isinstance(value, str) and value:
        return value
    return UNKNOWN_LICENSE


def normalize_license(manifest: Mapping[str, Any]) -> str:
    license_ = manifest.get("license")
    if _is_set(license_):
        return normalize_license_value(license_)

    licenses = manifest.get("licenses")
    if _is_set(licenses):
        if not isinstance(licenses, list):
            return normalize_license_value(licenses)
        if len(licenses) == 1:
            return normalize_license_value(licenses[0])
        if len(licenses) > 1:
            return "(" + " OR ".join(normalize_license_value(v) for v in licenses) + ")"

    return UNKNOWN_LICENSE


def normalize_repository_url(repository: Any) -> str | None:
    """Repository URL from a string or ``{"url": ...}``; shortcuts become https."""
    if isinstance(repository, Mapping):
        repository = repository.get("url")
    if not isinstance(repository, str) or not repository:
        return None
    return shortcut_to_https(repository)


def _string_or_none(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def get_license_info(manifest: Mapping[str, Any]) -> LicenseInfo:
    """Normalize *manifest* into a :class:`LicenseInfo`. Never raises."""
    if not isinstance(manifest, Mapping):
        return LicenseInfo()

    homepage = _string_or_none(manifest.get("homepage"))

    author = manifest.get("author")
    if isinstance(author, str):
        vendor: Mapping[str, Any] = parse_author(author)
    elif isinstance(author, Mapping):
        vendor = author
    else:
        vendor = {}

    return LicenseInfo(
        license=normalize_license(manifest),
        url=normalize_repository_url(manifest.get("repository")) or homepage,
        vendor_name=_string_or_none(vendor.get("name")),
        vendor_url=homepage or _string_or_none(vendor.get("url")),
    )
