"""Home screen — repository input."""

from textual import on
from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label, Static


def parse_repo_slug(value: str) -> tuple[str, str]:
    """Split ``owner/repo``; also accepts a github.com URL."""
    slug = value.strip().removesuffix(".git").rstrip("/")
    if "github.com/" in slug:
        slug = slug.split("github.com/", 1)[1]
    parts = slug.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Enter a valid owner/repo (e.g. expressjs/express)")
    return parts[0], parts[1]


class HomeScreen(Screen):
    """Initial screen to collect the repository to analyze."""

    CSS = """
    HomeScreen {
        align: center middle;
    }
    #home-container {
        width: 72;
        height: auto;
        padding: 1 4;
        border: round $primary;
        background: $surface;
    }
    #title {
        text-align: center;
        text-style: bold;
        color: $accent;
    }
    #subtitle {
        text-align: center;
        color: $text-muted;
        margin-bottom: 2;
    }
    .field-label {
        margin-top: 1;
        color: $text;
    }
    #start-btn {
        margin-top: 2;
        width: 100%;
    }
    #error-label {
        color: $error;
        text-align: center;
        margin-top: 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="home-container"):
                yield Static("📦  Dep Inspector", id="title")
                yield Static(
                    "Outdated packages · Advisories · Risk score",
                    id="subtitle",
                )
                yield Label("Repository (owner/repo):", classes="field-label")
                yield Input(placeholder="e.g. expressjs/express", id="repo-input")
                yield Button("▶  Analyze", id="start-btn", variant="primary")
                yield Label("", id="error-label")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#repo-input", Input).focus()

    @on(Button.Pressed, "#start-btn")
    def start_analysis(self) -> None:
        value = self.query_one("#repo-input", Input).value
        try:
            owner, repo = parse_repo_slug(value)
        except ValueError as e:
            self.query_one("#error-label", Label).update(f"⚠  {e}")
            return
        self.app.run_analysis(owner, repo)  # type: ignore[attr-defined]

    @on(Input.Submitted, "#repo-input")
    def submit_on_enter(self) -> None:
        self.start_analysis()
