"""Analysis pipeline.

Fetches repository context from GitHub, runs the dependency risk analysis
when a ``package.json`` is present, and asks an LLM (Copilot SDK) for a
short prose summary of the whole picture.
"""

import asyncio
import os
import tempfile
from typing import Callable, Optional

import structlog

from dep_inspector.analysis.dependencies import DependencyAnalyzer
from dep_inspector.analysis.summary import build_summary_prompt, parse_summary_text
from dep_inspector.fetcher import GitHubFetcher
from dep_inspector.models import (
    AnalysisResponse,
    DependencyAnalysisResult,
    RepoContext,
    Summary,
)
from dep_inspector.registry import NpmRegistry

log = structlog.get_logger("dep_inspector.analyzer")


class Analyzer:
    """End-to-end dependency inspection of one GitHub repository."""

    def __init__(
        self,
        token: Optional[str] = None,
        model: str = "gpt-4.1",
        on_status: Optional[Callable[[str], None]] = None,
        summarize: bool = True,
        fetcher: Optional[GitHubFetcher] = None,
        registry: Optional[NpmRegistry] = None,
    ) -> None:
        self.token = token or os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN") or None
        self.model = model
        self.summarize = summarize
        self._on_status = on_status or (lambda _: None)
        self._fetcher = fetcher or GitHubFetcher(token=self.token)
        self._registry = registry or NpmRegistry()
        self._copilot_client: object | None = None
        self._copilot_session: object | None = None

    def _status(self, msg: str) -> None:
        self._on_status(msg)

    # ── Copilot SDK lifecycle ─────────────────────────────────────────────

    async def _ensure_copilot(self) -> None:
        """Lazily start the CopilotClient and create a session."""
        if self._copilot_session is not None:
            return
        from copilot import CopilotClient  # type: ignore[import-untyped]

        # The CLI writes state files into its cwd; keep them out of the workspace.
        self._copilot_client = CopilotClient({
            "cwd": tempfile.mkdtemp(prefix="depinspect-copilot-"),
        })
        await self._copilot_client.start()  # type: ignore[union-attr]

        async def deny_all_tools(input: dict, invocation: object) -> dict:
            return {"permissionDecision": "deny"}

        self._copilot_session = await self._copilot_client.create_session(  # type: ignore[union-attr]
            {
                "model": self.model,
                "infinite_sessions": {"enabled": False},
                "system_message": {
                    "content": (
                        "You are a software dependency analyst. You ONLY analyze "
                        "data provided to you in the prompt and NEVER use tools. "
                        "Answer in the exact section format requested."
                    ),
                },
                "hooks": {
                    "on_pre_tool_use": deny_all_tools,
                },
            }
        )

    async def _ask_llm(self, prompt: str) -> str:
        """Send a prompt to Copilot and collect the full response."""
        await self._ensure_copilot()
        session = self._copilot_session
        done = asyncio.Event()
        result_parts: list[str] = []

        def _on_event(event: object) -> None:
            etype = getattr(getattr(event, "type", None), "value", "")
            data = getattr(event, "data", None)
            if etype == "assistant.message" and data:
                content = getattr(data, "content", "") or ""
                if content:
                    result_parts.append(content)
                done.set()
            elif etype == "session.idle":
                done.set()

        unsubscribe = session.on(_on_event)  # type: ignore[union-attr]
        try:
            await session.send({"prompt": prompt})  # type: ignore[union-attr]
            await done.wait()
        finally:
            if callable(unsubscribe):
                unsubscribe()

        return "".join(result_parts).strip()

    async def close(self) -> None:
        """Tear down resources."""
        await self._fetcher.close()
        await self._registry.close()
        if self._copilot_session:
            try:
                await self._copilot_session.destroy()  # type: ignore[union-attr]
            except Exception as e:
                log.debug("analyzer.copilot_destroy_failed", error=str(e))
        if self._copilot_client:
            try:
                await self._copilot_client.stop()  # type: ignore[union-attr]
            except Exception as e:
                log.debug("analyzer.copilot_stop_failed", error=str(e))

    # ── Full analysis ─────────────────────────────────────────────────────

    async def analyze(self, owner: str, repo: str) -> AnalysisResponse:
        """Run the entire pipeline for ``owner/repo``."""
        self._status("Fetching repository context …")
        context = await self._fetcher.fetch_repo_context(owner, repo)

        deps: Optional[DependencyAnalysisResult] = None
        if context.package_json is not None:
            self._status("Checking dependencies against the npm registry …")
            deps = await DependencyAnalyzer(self._registry, self._registry).analyze(
                context.package_json
            )
        else:
            self._status("No package.json found, skipping dependency analysis …")

        summary: Optional[Summary] = None
        if self.summarize:
            self._status("Writing summary …")
            summary = await self._summarize(context, deps)

        self._status("Done!")
        return AnalysisResponse(repository=context, dependencies=deps, summary=summary)

    async def _summarize(
        self, context: RepoContext, deps: Optional[DependencyAnalysisResult]
    ) -> Optional[Summary]:
        """Best-effort LLM summary; None when the model is unavailable."""
        try:
            raw = await self._ask_llm(build_summary_prompt(context, deps))
        except Exception as e:
            log.warning("analyzer.summary_failed", error=str(e))
            return None
        return parse_summary_text(raw)
