"""Tests for manifest normalization: author, license, repository, vendor."""

from __future__ import annotations

import pytest

from licensetree.graph.models import UNKNOWN_LICENSE, LicenseInfo
from licensetree.manifest.author import parse_author
from licensetree.manifest.hosted_git import parse_shortcut, shortcut_to_https
from licensetree.manifest.license_info import (
    get_license_info,
    normalize_license,
    normalize_repository_url,
)

# ── parse_author ─────────────────────────────────────────────────────────


class TestParseAuthor:
    def test_full(self):
        assert parse_author("Jane Doe <jane@x.com> (https://x.com)") == {
            "name": "Jane Doe",
            "email": "jane@x.com",
            "url": "https://x.com",
        }

    def test_name_only(self):
        result = parse_author("Jane Doe")
        assert result == {"name": "Jane Doe"}
        assert "email" not in result
        assert "url" not in result

    def test_url_before_email(self):
        assert parse_author("Jane (https://x.com) <jane@x.com>") == {
            "name": "Jane",
            "email": "jane@x.com",
            "url": "https://x.com",
        }

    def test_no_name(self):
        assert parse_author("<jane@x.com>") == {"email": "jane@x.com"}

    def test_whitespace_name_dropped(self):
        assert parse_author("   (https://x.com)") == {"url": "https://x.com"}

    def test_unbalanced_delimiters(self):
        assert parse_author("Jane <jane@x.com (https://x.com") == {"name": "Jane"}

    def test_empty(self):
        assert parse_author("") == {}


# ── license ──────────────────────────────────────────────────────────────


class TestLicense:
    @pytest.mark.parametrize(
        "manifest, expected",
        [
            ({"license": "MIT"}, "MIT"),
            ({"license": {"type": "ISC"}}, "ISC"),
            ({"licenses": ["MIT", "Apache-2.0"]}, "(MIT OR Apache-2.0)"),
            ({"licenses": [{"type": "MIT"}, "GPL-2.0", {}]}, "(MIT OR GPL-2.0 OR UNKNOWN)"),
            ({"licenses": ["BSD-2-Clause"]}, "BSD-2-Clause"),
            ({"licenses": {"type": "MPL-2.0"}}, "MPL-2.0"),
            ({"licenses": []}, UNKNOWN_LICENSE),
            ({}, UNKNOWN_LICENSE),
            ({"license": {}}, UNKNOWN_LICENSE),
            ({"license": {"type": ""}}, UNKNOWN_LICENSE),
            ({"license": 42}, UNKNOWN_LICENSE),
        ],
    )
    def test_normalize(self, manifest, expected):
        assert normalize_license(manifest) == expected

    def test_empty_license_falls_back_to_licenses(self):
        assert normalize_license({"license": "", "licenses": ["MIT"]}) == "MIT"

    def test_license_wins_over_licenses(self):
        assert normalize_license({"license": "MIT", "licenses": ["GPL-3.0"]}) == "MIT"


# ── repository ───────────────────────────────────────────────────────────


class TestRepository:
    def test_github_shortcut(self):
        assert normalize_repository_url("github:lodash/lodash") == (
            "git+https://github.com/lodash/lodash.git"
        )

    def test_bare_shortcut_is_github(self):
        assert normalize_repository_url("lodash/lodash") == (
            "git+https://github.com/lodash/lodash.git"
        )

    def test_object_form(self):
        assert normalize_repository_url({"type": "git", "url": "gitlab:group/sub/proj"}) == (
            "git+https://gitlab.com/group/sub/proj.git"
        )

    def test_https_url_unchanged(self):
        url = "https://github.com/lodash/lodash"
        assert normalize_repository_url(url) == url

    @pytest.mark.parametrize(
        "url",
        [
            "git+https://github.com/facebook/react.git",
            "git://github.com/isaacs/rimraf.git",
            "git@github.com:npm/cli.git",
            "ssh://git@gitlab.com/group/proj.git",
        ],
    )
    def test_non_shortcut_urls_unchanged(self, url):
        assert normalize_repository_url(url) == url

    @pytest.mark.parametrize("value", [None, "", {}, {"url": ""}, 7])
    def test_absent(self, value):
        assert normalize_repository_url(value) is None


class TestHostedGit:
    def test_committish(self):
        assert shortcut_to_https("github:npm/cli#v10.0.0") == (
            "git+https://github.com/npm/cli.git#v10.0.0"
        )

    def test_strips_git_suffix(self):
        hosted = parse_shortcut("bitbucket:team/repo.git")
        assert hosted is not None
        assert hosted.project == "repo"
        assert hosted.https() == "git+https://bitbucket.org/team/repo.git"

    def test_gist(self):
        assert shortcut_to_https("gist:11081aaa281") == "git+https://gist.github.com/11081aaa281.git"

    def test_sourcehut(self):
        assert shortcut_to_https("sourcehut:~sircmpwn/scdoc") == "https://git.sr.ht/~sircmpwn/scdoc.git"

    @pytest.mark.parametrize(
        "reference",
        [
            "lodash",
            "./local/path",
            "a/b/c",
            "unknown:owner/repo",
            "github:owner",
            "sourcehut:owner/repo",
            "owner/repo with space",
        ],
    )
    def test_not_a_shortcut(self, reference):
        assert parse_shortcut(reference) is None
        assert shortcut_to_https(reference) == reference


# ── get_license_info ─────────────────────────────────────────────────────


class TestGetLicenseInfo:
    def test_full_manifest(self):
        info = get_license_info(
            {
                "license": "MIT",
                "repository": {"type": "git", "url": "github:acme/widget"},
                "homepage": "https://widget.dev",
                "author": "ACME Inc <dev@acme.io> (https://acme.io)",
            }
        )
        assert info == LicenseInfo(
            license="MIT",
            url="git+https://github.com/acme/widget.git",
            vendor_name="ACME Inc",
            vendor_url="https://widget.dev",
        )

    def test_homepage_is_url_fallback(self):
        info = get_license_info({"homepage": "https://widget.dev"})
        assert info.url == "https://widget.dev"
        assert info.vendor_url == "https://widget.dev"

    def test_author_object(self):
        info = get_license_info({"author": {"name": "Jane", "url": "https://jane.dev"}})
        assert info.vendor_name == "Jane"
        assert info.vendor_url == "https://jane.dev"

    def test_author_url_used_without_homepage(self):
        info = get_license_info({"author": "Jane (https://jane.dev)"})
        assert info.vendor_url == "https://jane.dev"

    def test_malformed_author(self):
        info = get_license_info({"author": ["Jane"]})
        assert info.vendor_name is None
        assert info.vendor_url is None

    def test_empty_manifest(self):
        assert get_license_info({}) == LicenseInfo(license=UNKNOWN_LICENSE)

    def test_non_object_manifest(self):
        assert get_license_info(["not", "a", "manifest"]) == LicenseInfo()
