"""CLI entry point for dep-inspector."""


def main() -> None:
    """Launch the Dep Inspector TUI."""
    from dotenv import load_dotenv

    load_dotenv()  # Load .env file (e.g. GITHUB_TOKEN)

    from dep_inspector.log import setup_logging

    setup_logging()

    from dep_inspector.app import DepInspectorApp

    app = DepInspectorApp()
    app.run()


if __name__ == "__main__":
    main()
