"""
Unit tests for the command-line interface
"""

import pytest
import pyperclip
from unittest.mock import MagicMock, patch

import main
from client import FavoritesStore, MemoryPersistence, QuotePresenter, ShareService
from storage import Quote


@pytest.fixture
def quote():
    return Quote(id=3, text="The future belongs to those who believe in the beauty of their dreams.",
                 author="Eleanor Roosevelt", category="dreams")


@pytest.fixture
def api_client(quote):
    client = MagicMock()
    client.__enter__.return_value = client
    client.get_quote.side_effect = lambda quote_id: quote if quote_id == 3 else None
    client.random_quote.return_value = quote
    client.list_quotes.return_value = [quote]
    return client


@pytest.fixture
def session_presenter(quote):
    presenter = QuotePresenter(FavoritesStore(MemoryPersistence()),
                               sharer=ShareService(clipboard=None, opener=None, page_url="x"))
    presenter.load_catalog([quote])
    return presenter


@pytest.mark.unit
class TestCLI:
    """Test cases for main.py commands"""

    def test_parser_commands(self):
        parser = main.create_parser()
        args = parser.parse_args(["--base-url", "http://q", "share", "3", "--target", "twitter"])
        assert args.base_url == "http://q"
        assert args.command == "share"
        assert args.quote_id == 3
        assert args.target == "twitter"

    def test_parser_rejects_unknown_target(self):
        with pytest.raises(SystemExit):
            main.create_parser().parse_args(["share", "3", "--target", "myspace"])

    def test_format_quote(self, quote):
        assert main.format_quote(quote, favorite=True).startswith("♥ [3] \"The future")
        assert main.format_quote(quote).endswith("(dreams)")

    @pytest.mark.asyncio
    async def test_no_command_prints_help(self, capsys):
        assert await main.main([]) == 0
        assert "usage" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_show_quote(self, api_client, capsys):
        with patch.object(main.QuoteApp, "create_api_client", return_value=api_client):
            assert await main.main(["show", "3"]) == 0
        assert "Eleanor Roosevelt" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_show_missing_quote(self, api_client, capsys):
        with patch.object(main.QuoteApp, "create_api_client", return_value=api_client):
            assert await main.main(["show", "99"]) == 1
        assert "Quote 99 not found" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_favorite_toggle(self, session_presenter, capsys):
        with patch.object(main.QuoteApp, "create_presenter", return_value=session_presenter):
            assert await main.main(["favorite", "3"]) == 0
        assert 3 in session_presenter.favorites
        assert "Added quote 3" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_share_prints_twitter_url(self, session_presenter, capsys):
        with patch.object(main.QuoteApp, "create_presenter", return_value=session_presenter):
            assert await main.main(["share", "3", "--target", "twitter"]) == 0
        assert "https://twitter.com/intent/tweet?text=" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_export_unknown_quote(self, session_presenter, temp_dir):
        with patch.object(main.QuoteApp, "create_presenter", return_value=session_presenter):
            assert await main.main(["export", "8", "--output-dir", str(temp_dir)]) == 1
        assert list(temp_dir.iterdir()) == []

    def test_presenter_shares_through_system_clipboard(self, api_client, temp_dir, monkeypatch):
        monkeypatch.setattr(main.config_manager.get_client_config(), "favorites_file",
                            str(temp_dir / "local_storage.json"))
        with patch.object(main.QuoteApp, "create_api_client", return_value=api_client), \
                patch("pyperclip.copy") as copy:
            presenter = main.QuoteApp().create_presenter()
            result = presenter.share("clipboard")

        assert presenter.sharer.clipboard is copy
        copy.assert_called_once_with(result.text)
        assert result.delivered is True

    def test_clipboard_unavailable_is_silent(self, api_client, temp_dir, monkeypatch):
        monkeypatch.setattr(main.config_manager.get_client_config(), "favorites_file",
                            str(temp_dir / "local_storage.json"))
        with patch.object(main.QuoteApp, "create_api_client", return_value=api_client):
            presenter = main.QuoteApp().create_presenter()

        presenter.sharer.clipboard = MagicMock(side_effect=pyperclip.PyperclipException("no clipboard"))
        result = presenter.share("clipboard")
        assert result.delivered is False
        assert "Eleanor Roosevelt" in result.text

    @pytest.mark.asyncio
    async def test_export_to_unwritable_directory(self, session_presenter, temp_dir, capsys):
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory")
        with patch.object(main.QuoteApp, "create_presenter", return_value=session_presenter):
            assert await main.main(["export", "3", "--output-dir", str(blocker)]) == 1
        assert "Failed to export quote 3" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_export_quote(self, session_presenter, temp_dir):
        with patch.object(main.QuoteApp, "create_presenter", return_value=session_presenter):
            assert await main.main(["export", "3", "--output-dir", str(temp_dir)]) == 0
        assert (temp_dir / "quote-3.png").exists()

    def test_interactive_session(self, session_presenter, temp_dir, monkeypatch, capsys):
        commands = iter(["f", "v", "r 3", "h", "s clipboard", "e", "q"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(commands))
        app = main.QuoteApp()
        app._presenter = session_presenter

        app.interactive(str(temp_dir))

        output = capsys.readouterr().out
        assert "Your Favorites - 1 saved quotes" in output
        assert len(session_presenter.favorites) == 0
        assert (temp_dir / "quote-3.png").exists()

    def test_interactive_export_failure_keeps_session(self, session_presenter, temp_dir, monkeypatch, capsys):
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory")
        commands = iter(["e", "f", "q"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(commands))
        app = main.QuoteApp()
        app._presenter = session_presenter

        app.interactive(str(blocker))

        assert "Export failed" in capsys.readouterr().out
        assert 3 in session_presenter.favorites
