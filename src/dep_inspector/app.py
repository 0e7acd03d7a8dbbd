"""Main Textual TUI application for dep-inspector."""

import os

import httpx
from textual.app import App

from dep_inspector.analyzer import Analyzer
from dep_inspector.models import AnalysisResponse
from dep_inspector.screens.home import HomeScreen
from dep_inspector.screens.loading import LoadingScreen
from dep_inspector.screens.results import ResultsScreen


def describe_http_error(owner: str, repo: str, error: httpx.HTTPStatusError) -> str:
    """Turn a GitHub API error into a message the user can act on."""
    status = error.response.status_code
    if status == 404:
        return f"❌ Repository '{owner}/{repo}' not found. Check the owner/repo name and try again."
    if status == 401:
        return "❌ Authentication failed. Please check your GitHub token."
    if status == 403:
        text = getattr(error.response, "text", "")
        has_token = bool(os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN"))
        if "rate limit" in text.lower():
            if has_token:
                return "❌ GitHub API rate limit exceeded. Wait a few minutes and retry."
            return (
                "❌ GitHub API rate limit exceeded (unauthenticated: 60 req/hour). "
                "Set GITHUB_TOKEN to get 5 000 req/hour."
            )
        if has_token:
            return "❌ Access denied. The repository may be private or your token lacks permissions."
        return "❌ Access denied — no GitHub token found. Set the GITHUB_TOKEN env var."
    return f"❌ GitHub API error ({status}): {error.response.reason_phrase}"


class DepInspectorApp(App):
    """TUI application for dependency risk inspection."""

    TITLE = "Dep Inspector"
    SUB_TITLE = "Outdated packages · Advisories · Risk score"

    CSS = """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def on_mount(self) -> None:
        self.push_screen(HomeScreen())

    def run_analysis(self, owner: str, repo: str) -> None:
        """Kick off the analysis; called from HomeScreen."""
        loading = LoadingScreen(f"{owner}/{repo}")
        self.push_screen(loading)

        async def _do_work() -> None:
            def on_status(msg: str) -> None:
                self.call_from_thread(loading.advance, msg)

            analyzer = Analyzer(on_status=on_status)
            try:
                result = await analyzer.analyze(owner, repo)
                self.call_from_thread(self._show_results, result)
            except httpx.HTTPStatusError as e:
                self.call_from_thread(loading.fail, describe_http_error(owner, repo, e))
            except httpx.ConnectError:
                self.call_from_thread(
                    loading.fail,
                    "❌ Could not connect to GitHub. Check your internet connection.",
                )
            except Exception as e:
                self.call_from_thread(loading.fail, f"❌ Unexpected error: {e}")
            finally:
                await analyzer.close()

        self.run_worker(_do_work(), thread=True)

    def _show_results(self, result: AnalysisResponse) -> None:
        """Replace loading screen with results."""
        self.pop_screen()
        self.push_screen(ResultsScreen(result))
