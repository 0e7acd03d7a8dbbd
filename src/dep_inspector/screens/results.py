"""Results screen — tabbed view with Summary / Dependencies / Vulnerabilities."""

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import (
    DataTable,
    Footer,
    Header,
    Label,
    Markdown,
    Static,
    TabbedContent,
    TabPane,
)

from dep_inspector.models import AnalysisResponse, Severity


class ResultsScreen(Screen):
    """Main results display."""

    CSS = """
    ResultsScreen {
        layout: vertical;
    }
    #results-header {
        height: 3;
        background: $primary;
        color: $text;
        text-align: center;
        padding: 1 2;
        text-style: bold;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    .vuln-card {
        border: round $warning;
        padding: 1 2;
        margin: 1 0;
        background: $surface;
        height: auto;
    }
    .vuln-card.critical, .vuln-card.high {
        border: round $error;
    }
    #packages-table {
        height: auto;
        margin: 1 0;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("b", "go_back", "Back"),
    ]

    def __init__(self, result: AnalysisResponse, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.result = result

    def compose(self) -> ComposeResult:
        info = self.result.repository.info
        deps = self.result.dependencies
        score = f"Risk score {deps.risk_score}/100" if deps else "No package.json"
        yield Header(show_clock=True)
        yield Static(f"  📊  {info.full_name}  ·  {score}  ", id="results-header")

        with TabbedContent("📝 Summary", "📦 Dependencies", "🔒 Vulnerabilities"):
            with TabPane("📝 Summary"):
                yield from self._compose_summary()
            with TabPane("📦 Dependencies"):
                yield from self._compose_dependencies()
            with TabPane("🔒 Vulnerabilities"):
                yield from self._compose_vulnerabilities()

        yield Footer()

    # ── Summary tab ───────────────────────────────────────────────────────

    def _compose_summary(self) -> ComposeResult:
        info = self.result.repository.info
        summary = self.result.summary
        with VerticalScroll():
            yield Static("REPOSITORY", classes="section-title")
            yield Label(
                f"⭐ {info.stargazers_count}  ·  🍴 {info.forks_count}  ·  "
                f"{info.language or 'Unknown language'}"
            )
            if info.description:
                yield Markdown(f"> {info.description}")
            if not summary:
                yield Markdown("> _No summary available._")
                return
            yield Static("OVERVIEW", classes="section-title")
            yield Markdown(summary.overview or "_n/a_")
            yield Static("DEPENDENCY SUMMARY", classes="section-title")
            yield Markdown(summary.dependency_summary or "_n/a_")
            yield Static("RISK ASSESSMENT", classes="section-title")
            yield Markdown(summary.risk_summary or "_n/a_")

    # ── Dependencies tab ──────────────────────────────────────────────────

    def _compose_dependencies(self) -> ComposeResult:
        deps = self.result.dependencies
        with VerticalScroll():
            yield Static("DEPENDENCIES", classes="section-title")
            if deps is None:
                yield Markdown("> _This repository has no package.json._")
                return

            yield Label(
                f"Risk Score: {deps.risk_score}/100  ·  "
                f"Packages: {len(deps.packages)}  ·  "
                f"Outdated: {len(deps.outdated)}"
            )
            table = DataTable(id="packages-table")
            table.add_columns("Package", "Current", "Latest", "Lag", "License")
            for p in deps.packages:
                table.add_row(
                    p.name,
                    p.current_version,
                    p.latest_version if p.is_outdated else "—",
                    p.display_diff,
                    p.license or "",
                )
            yield table

    # ── Vulnerabilities tab ───────────────────────────────────────────────

    def _compose_vulnerabilities(self) -> ComposeResult:
        deps = self.result.dependencies
        with VerticalScroll():
            yield Static("KNOWN ADVISORIES", classes="section-title")
            if not deps or not deps.vulnerabilities:
                yield Markdown("> _No vulnerabilities detected._")
                return
            tiers = {s.value for s in Severity}
            for v in deps.vulnerabilities:
                tier = v.severity if v.severity in tiers else Severity.low.value
                yield Markdown(
                    f"**[{v.severity.upper()}] {v.package_name}**: {v.title}\n\n{v.url}",
                    classes=f"vuln-card {tier}",
                )

    def action_go_back(self) -> None:
        self.app.pop_screen()
