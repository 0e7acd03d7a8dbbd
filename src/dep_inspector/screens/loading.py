"""Progress screen listing pipeline stages as the analyzer reports them."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, ProgressBar, Static

# Status messages the analyzer emits before "Done!".
EXPECTED_STAGES = 3


class LoadingScreen(Screen):
    """Checklist of finished stages, the current one, and any failure."""

    BINDINGS = [
        ("b", "go_back", "Back"),
    ]

    CSS = """
    LoadingScreen {
        align: center middle;
    }
    #stages {
        width: 72;
        height: auto;
        padding: 1 3;
        border: round $primary;
        background: $surface;
    }
    .stage-done {
        color: $success;
    }
    #current-stage {
        text-style: bold;
        margin-top: 1;
    }
    #failure {
        color: $error;
        margin-top: 1;
    }
    """

    def __init__(self, slug: str, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.slug = slug
        self.stages: list[str] = []
        self.failed = False

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="stages"):
            yield Static(f"📦  {self.slug}")
            yield Label("Starting …", id="current-stage")
            yield ProgressBar(total=EXPECTED_STAGES + 1, show_eta=False, id="stage-bar")
            yield Label("", id="failure")
        yield Footer()

    def advance(self, stage: str) -> None:
        """Tick off the running stage and show ``stage`` as the current one."""
        if self.stages:
            self.query_one("#stages", Vertical).mount(
                Label(f"✔ {self.stages[-1]}", classes="stage-done"),
                before="#current-stage",
            )
        self.stages.append(stage)
        self.query_one("#current-stage", Label).update(f"▶ {stage}")
        self.query_one("#stage-bar", ProgressBar).update(
            progress=min(len(self.stages), EXPECTED_STAGES + 1)
        )

    def fail(self, message: str) -> None:
        self.failed = True
        self.query_one("#failure", Label).update(
            f"{message}\nPress [b]b[/b] to go back and try another repository."
        )

    def action_go_back(self) -> None:
        self.app.pop_screen()
