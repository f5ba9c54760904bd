"""Recognition of hosted-git shortcut references (``github:owner/repo``, ``owner/repo``)."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Bare ``owner/repo`` is a GitHub shortcut.
_BARE_SHORTCUT_RE = re.compile(r"^[^\s/:@.\-\\][^\s/:@\\]*/[^\s/:@\\]+$")
_SEGMENT_RE = re.compile(r"^[^\s/:@\\]+$")


@dataclass(frozen=True)
class _Host:
    domain: str
    https_prefix: str
    # Minimum and maximum number of path segments in the shortcut.
    min_segments: int = 2
    max_segments: int | None = 2


_HOSTS: dict[str, _Host] = {
    "github": _Host("github.com", "git+https://"),
    "gitlab": _Host("gitlab.com", "git+https://", max_segments=None),
    "bitbucket": _Host("bitbucket.org", "git+https://"),
    "gist": _Host("gist.github.com", "git+https://", min_segments=1),
    "sourcehut": _Host("git.sr.ht", "https://"),
}


@dataclass(frozen=True)
class HostedGit:
    host: str
    user: str | None
    project: str
    committish: str | None = None

    def https(self) -> str:
        host = _HOSTS[self.host]
        if self.host == "gist":
            path = self.project
        else:
            path = f"{self.user}/{self.project}"
        url = f"{host.https_prefix}{host.domain}/{path}.git"
        if self.committish:
            url += f"#{self.committish}"
        return url


def parse_shortcut(reference: str) -> HostedGit | None:
    """Return the hosted repository named by a shortcut *reference*.

    Returns ``None`` for anything that is not a shortcut, including full
    ``https://``, ``git://`` and ``git@host:`` URLs.
    """
    body, _, committish = reference.partition("#")
    prefix, colon, rest = body.partition(":")

    if colon:
        if prefix not in _HOSTS:
            return None
        host_name, path = prefix, rest
    else:
        if not _BARE_SHORTCUT_RE.match(body):
            return None
        host_name, path = "github", body

    host = _HOSTS[host_name]
    segments = path.split("/")
    if len(segments) < host.min_segments:
        return None
    if host.max_segments is not None and len(segments) > host.max_segments:
        return None
    if not all(_SEGMENT_RE.match(segment) for segment in segments):
        return None
    if host_name == "sourcehut" and not segments[0].startswith("~"):
        return None

    project = segments[-1]
    if project.endswith(".git"):
        project = project[: -len(".git")]
    if not project:
        return None
    user = "/".join(segments[:-1]) or None

    return HostedGit(
        host=host_name,
        user=user,
        project=project,
        committish=committish or None,
    )


def shortcut_to_https(reference: str) -> str:
    """Rewrite a shortcut to its https form; return other references unchanged."""
    hosted = parse_shortcut(reference)
    if hosted is None:
        return reference
    return hosted.https()
