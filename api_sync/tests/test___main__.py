from unittest.mock import patch

from api_sync import __main__


class TestCmdFunctions:
    @patch("api_sync.api_codegen.main.sync_main")
    def test_cmd_sync_success(self, mock_main):
        result = __main__.cmd_sync(["--url", "http://localhost:3000"])
        assert result == 0
        mock_main.assert_called_once_with(["--url", "http://localhost:3000"])

    @patch("api_sync.api_codegen.main.sync_main")
    def test_cmd_sync_failure(self, mock_main, capsys):
        mock_main.side_effect = SystemExit("Failed to sync contract: boom")
        result = __main__.cmd_sync([])
        assert result == 1
        assert "Failed to sync contract: boom" in capsys.readouterr().err

    @patch("api_sync.api_codegen.main.sync_main")
    def test_cmd_sync_usage_error(self, mock_main):
        mock_main.side_effect = SystemExit(2)
        assert __main__.cmd_sync([]) == 2

    @patch("api_sync.api_codegen.main.generate_main")
    def test_cmd_generate_success(self, mock_main):
        result = __main__.cmd_generate(["--contract", "contract.json"])
        assert result == 0
        mock_main.assert_called_once_with(["--contract", "contract.json"])

    @patch("api_sync.api_codegen.main.generate_main")
    def test_cmd_generate_failure(self, mock_main):
        mock_main.side_effect = SystemExit("Failed to generate types: boom")
        assert __main__.cmd_generate([]) == 1


class TestMain:
    def test_main_no_args_prints_help(self, capsys):
        with patch("sys.argv", ["api_sync"]):
            result = __main__.main()
        assert result == 0
        output = capsys.readouterr().out
        assert "Available commands:" in output
        assert "sync" in output
        assert "generate" in output

    def test_main_help_flag(self, capsys):
        with patch("sys.argv", ["api_sync", "--help"]):
            assert __main__.main() == 0
        assert "Usage:" in capsys.readouterr().out

    def test_main_unknown_command(self, capsys):
        with patch("sys.argv", ["api_sync", "deploy"]):
            result = __main__.main()
        assert result == 1
        assert "Unknown command: deploy" in capsys.readouterr().out

    def test_main_dispatches_with_remaining_args(self):
        with (
            patch("sys.argv", ["api_sync", "sync", "--url", "http://x"]),
            patch("api_sync.api_codegen.main.sync_main") as mock_sync,
        ):
            assert __main__.main() == 0
        mock_sync.assert_called_once_with(["--url", "http://x"])
