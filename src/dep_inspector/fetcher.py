"""GitHub repository context fetching via REST API."""

import asyncio
import base64
import json
from typing import Optional

import httpx

from dep_inspector.models import PackageJson, RepoContext, RepoInfo

MAX_TREE_ENTRIES = 200
MAX_README_CHARS = 3000


def _raise_if_rate_limited(resp: httpx.Response) -> None:
    """GitHub signals exhaustion with 403/429 and a zeroed remaining counter."""
    if resp.status_code not in (403, 429):
        return
    exhausted = resp.headers.get("x-ratelimit-remaining") == "0"
    if not exhausted and "rate limit" not in resp.text.lower():
        return
    reset = resp.headers.get("x-ratelimit-reset")
    when = f" Resets at epoch {reset}." if reset else ""
    raise httpx.HTTPStatusError(
        f"GitHub API rate limit exceeded.{when}",
        request=resp.request,
        response=resp,
    )


class GitHubFetcher:
    """Fetches repo info, ``package.json``, file tree and README from GitHub."""

    def __init__(self, token: Optional[str] = None) -> None:
        self.token = token
        self.base_url = "https://api.github.com"
        self._client: Optional[httpx.AsyncClient] = None
        self._anonymous = False

    # ── HTTP plumbing ─────────────────────────────────────────────────────

    @property
    def headers(self) -> dict[str, str]:
        """Headers sent with every request, auth included while it is usable."""
        h = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token and not self._anonymous:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=30.0)
        return self._client

    async def _get(
        self, path: str, headers: Optional[dict[str, str]] = None, **kwargs
    ) -> httpx.Response:  # type: ignore[no-untyped-def]
        client = await self._client_instance()
        resp = await client.get(path, headers={**self.headers, **(headers or {})}, **kwargs)
        if resp.status_code == 403 and "saml" in resp.text.lower() and not self._anonymous:
            # The token is not SSO-authorized for this org; public data is
            # still readable without it.
            self._anonymous = True
            resp = await client.get(path, headers={**self.headers, **(headers or {})}, **kwargs)
        _raise_if_rate_limited(resp)
        return resp

    @property
    def is_unauthenticated(self) -> bool:
        return self._anonymous

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Repository pieces ─────────────────────────────────────────────────

    async def fetch_repo_info(self, owner: str, repo: str) -> RepoInfo:
        """Fetch basic repo information."""
        resp = await self._get(f"/repos/{owner}/{repo}")
        resp.raise_for_status()
        data = resp.json()
        return RepoInfo(
            full_name=data.get("full_name") or f"{owner}/{repo}",
            description=data.get("description"),
            stargazers_count=data.get("stargazers_count") or 0,
            forks_count=data.get("forks_count") or 0,
            language=data.get("language"),
            topics=data.get("topics") or [],
            html_url=data.get("html_url") or "",
        )

    async def fetch_package_json(self, owner: str, repo: str) -> Optional[PackageJson]:
        """Fetch and decode the root ``package.json``; None if unavailable."""
        try:
            resp = await self._get(f"/repos/{owner}/{repo}/contents/package.json")
            if resp.status_code == 404:
                return None
            resp.raise_for_status()
            data = resp.json()
            if not isinstance(data, dict) or "content" not in data:
                return None  # a directory listing, not a file
            raw = base64.b64decode(data["content"]).decode("utf-8")
            return PackageJson.model_validate(json.loads(raw))
        except (httpx.HTTPError, ValueError):
            return None

    async def fetch_tree(self, owner: str, repo: str) -> list[str]:
        """List file paths at HEAD (recursive, truncated)."""
        resp = await self._get(
            f"/repos/{owner}/{repo}/git/trees/HEAD",
            params={"recursive": "1"},
        )
        resp.raise_for_status()
        paths = [item.get("path", "") for item in resp.json().get("tree", [])]
        return [p for p in paths if p][:MAX_TREE_ENTRIES]

    async def fetch_readme(self, owner: str, repo: str) -> str:
        """Fetch the README as raw text.

        Empty when the repo has none or GitHub fails to serve it. Rate-limit
        errors still propagate.
        """
        try:
            resp = await self._get(
                f"/repos/{owner}/{repo}/readme",
                headers={"Accept": "application/vnd.github.raw+json"},
            )
        except httpx.TransportError:
            return ""
        if resp.is_error:
            return ""
        return resp.text[:MAX_README_CHARS]

    async def fetch_repo_context(self, owner: str, repo: str) -> RepoContext:
        """Fetch all repository pieces concurrently."""
        # Resolve the client first so concurrent requests share one instance.
        await self._client_instance()
        info, package_json, tree, readme = await asyncio.gather(
            self.fetch_repo_info(owner, repo),
            self.fetch_package_json(owner, repo),
            self.fetch_tree(owner, repo),
            self.fetch_readme(owner, repo),
        )
        return RepoContext(
            info=info, package_json=package_json, tree=tree, readme=readme
        )
