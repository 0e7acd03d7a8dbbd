"""Tests for the CLI entry point."""

from unittest.mock import MagicMock, patch


class TestCli:
    def test_main_loads_env_and_runs(self):
        """main() loads .env, configures logging and launches the app."""
        mock_app_instance = MagicMock()
        with patch("dotenv.load_dotenv") as mock_ld, \
                patch("dep_inspector.log.setup_logging") as mock_log, \
                patch("dep_inspector.app.DepInspectorApp", return_value=mock_app_instance):
            from dep_inspector.cli import main
            main()
            mock_ld.assert_called_once()
            mock_log.assert_called_once()
            mock_app_instance.run.assert_called_once()

    def test_main_callable(self):
        from dep_inspector.cli import main
        assert callable(main)
