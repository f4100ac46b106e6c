"""
Main entry point for the Quote App.
Provides command-line interface for the API server and the quote client.
"""

import asyncio
import argparse
import sys
from typing import Optional

import pyperclip

from utils import (
    api_logger, main_logger, config_manager, resolve_path,
    QuoteAppError, NotFoundError, ExportError, ErrorCodes
)
from client import (
    QuoteApiClient, FavoritesStore, KeyValueStore, LocalStoragePersistence,
    QuoteImageRenderer, QuotePresenter, ShareService, ShareTarget, ViewMode, format_share_text
)
from storage.models import Quote


def format_quote(quote: Quote, favorite: bool = False) -> str:
    """格式化名言用于终端输出"""
    marker = "♥" if favorite else " "
    category = f" ({quote.category})" if quote.category else ""
    return f"{marker} [{quote.id}] {format_share_text(quote)}{category}"


class QuoteApp:
    """名言应用主类"""

    def __init__(self, base_url: Optional[str] = None):
        self.config = config_manager
        self.base_url = base_url
        self._presenter: Optional[QuotePresenter] = None

    def create_api_client(self) -> QuoteApiClient:
        return QuoteApiClient(base_url=self.base_url)

    def create_presenter(self) -> QuotePresenter:
        """创建客户端会话：本地收藏 + 远程目录"""
        client_config = self.config.get_client_config()
        store = KeyValueStore(resolve_path(client_config.favorites_file))
        favorites = FavoritesStore(LocalStoragePersistence(store, client_config.favorites_key))
        presenter = QuotePresenter(favorites, sharer=ShareService(clipboard=pyperclip.copy))

        with self.create_api_client() as api_client:
            presenter.load_catalog(api_client.list_quotes())
        return presenter

    @property
    def presenter(self) -> QuotePresenter:
        if self._presenter is None:
            self._presenter = self.create_presenter()
        return self._presenter

    async def start_api_server(self, host: str = None, port: int = None):
        """启动API服务器"""
        api_config = self.config.get_api_config()
        final_host = host if host is not None else api_config.host
        final_port = port if port is not None else api_config.port

        api_logger.info(f"[Main] Starting API server on {final_host}:{final_port}...")

        import uvicorn
        from api.app import app as api_app

        config = uvicorn.Config(
            api_app,
            host=final_host,
            port=final_port,
            log_level="info"
        )
        server = uvicorn.Server(config)
        await server.serve()

    # === Client commands ===

    def list_quotes(self):
        presenter = self.presenter
        for quote in presenter.quotes:
            print(format_quote(quote, quote.id in presenter.favorites))

    def show_random(self):
        with self.create_api_client() as api_client:
            quote = api_client.random_quote()
        if quote is None:
            print("No quotes available")
            return
        print(format_quote(quote))

    def show_quote(self, quote_id: int):
        with self.create_api_client() as api_client:
            quote = api_client.get_quote(quote_id)
        if quote is None:
            raise NotFoundError(f"Quote {quote_id} not found", ErrorCodes.QUOTE_NOT_FOUND)
        print(format_quote(quote))

    def toggle_favorite(self, quote_id: int):
        favorites = self.presenter.favorites
        if favorites.toggle(quote_id):
            print(f"Added quote {quote_id} to favorites")
        else:
            print(f"Removed quote {quote_id} from favorites")
        self._warn_if_session_only()

    def remove_favorite(self, quote_id: int):
        if self.presenter.remove_favorite(quote_id):
            print(f"Removed quote {quote_id} from favorites")
        else:
            print(f"Quote {quote_id} is not a favorite")
        self._warn_if_session_only()

    def list_favorites(self):
        favorite_quotes = self.presenter.favorite_quotes
        print(f"Your Favorites - {len(favorite_quotes)} saved quotes")
        if not favorite_quotes:
            print("No favorites yet")
        for quote in favorite_quotes:
            print(format_quote(quote, True))

    def share_quote(self, quote_id: int, target: str):
        quote = self._find_quote(quote_id)
        result = self.presenter.share(target, quote=quote)
        print(result.url or result.text)
        if not result.delivered:
            main_logger.debug(f"[Main] Share target {result.target.value} not delivered, printed instead")

    def export_quote(self, quote_id: int, output_dir: Optional[str]):
        quote = self._find_quote(quote_id)
        target_dir = resolve_path(output_dir or self.config.get_client_config().export_dir)
        path = QuoteImageRenderer().export(quote, target_dir)
        if path is None:
            raise ExportError(f"Failed to export quote {quote_id}", ErrorCodes.EXPORT_RENDER_FAILED)
        print(f"Saved {path}")

    def interactive(self, output_dir: Optional[str] = None):
        """交互式会话"""
        presenter = self.presenter
        export_dir = resolve_path(output_dir or self.config.get_client_config().export_dir)
        commands = {
            "n": "new quote", "f": "toggle favorite", "v": "favorites view",
            "h": "home view", "r <id>": "remove favorite",
            "s <target>": "share (native/clipboard/twitter/facebook)",
            "e": "export image", "q": "quit",
        }
        print("  ".join(f"{k}={v}" for k, v in commands.items()))

        while True:
            if presenter.view is ViewMode.FAVORITES:
                self.list_favorites()
            elif presenter.current_quote is not None:
                print(format_quote(presenter.current_quote, presenter.is_current_favorite))
            else:
                print("No quote loaded")

            try:
                line = input("> ").strip()
            except EOFError:
                break
            if not line:
                continue

            command, _, arg = line.partition(" ")
            if command == "q":
                break
            elif command == "n":
                presenter.generate_new_quote()
            elif command == "f":
                presenter.toggle_favorite()
                self._warn_if_session_only()
            elif command == "v":
                presenter.show_favorites()
            elif command == "h":
                presenter.show_home()
            elif command == "r" and arg.isdigit():
                presenter.remove_favorite(int(arg))
            elif command == "s":
                try:
                    result = presenter.share(arg or ShareTarget.NATIVE)
                except ValueError:
                    print(f"Unknown share target: {arg}")
                    continue
                if result is not None:
                    print(result.url or result.text)
            elif command == "e":
                if presenter.current_quote is None:
                    print("Nothing to export")
                    continue
                path = presenter.export_image(export_dir)
                print(f"Saved {path}" if path else f"Export failed, could not write to {export_dir}")
            else:
                print(f"Unknown command: {line}")

    def _find_quote(self, quote_id: int) -> Quote:
        quote = next((q for q in self.presenter.quotes if q.id == quote_id), None)
        if quote is None:
            raise NotFoundError(f"Quote {quote_id} not found", ErrorCodes.QUOTE_NOT_FOUND)
        return quote

    def _warn_if_session_only(self):
        if self.presenter.favorites.session_only:
            print("Warning: favorites could not be saved and will only last for this session")


def create_parser():
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        description="Quote App - 励志名言服务与客户端",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  python main.py api --host 0.0.0.0 --port 8000   # 启动API服务器
  python main.py list                            # 列出全部名言
  python main.py random                          # 随机一条名言
  python main.py favorite 3                      # 收藏/取消收藏名言3
  python main.py favorites                       # 查看收藏
  python main.py share 3 --target twitter        # 分享到 Twitter
  python main.py export 3 --output-dir exports   # 导出名言图片
  python main.py interactive                     # 交互式会话
        """
    )
    parser.add_argument('--base-url', default=None, help='API地址 (默认读取配置)')

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    api_parser = subparsers.add_parser('api', help='启动API服务器')
    api_parser.add_argument('--host', default=None, help='监听地址 (默认读取配置)')
    api_parser.add_argument('--port', type=int, default=None, help='监听端口 (默认读取配置)')

    subparsers.add_parser('list', help='列出全部名言')
    subparsers.add_parser('random', help='随机获取一条名言')

    show_parser = subparsers.add_parser('show', help='显示指定名言')
    show_parser.add_argument('quote_id', type=int, help='名言ID')

    favorite_parser = subparsers.add_parser('favorite', help='收藏/取消收藏名言')
    favorite_parser.add_argument('quote_id', type=int, help='名言ID')

    unfavorite_parser = subparsers.add_parser('unfavorite', help='从收藏中移除名言')
    unfavorite_parser.add_argument('quote_id', type=int, help='名言ID')

    subparsers.add_parser('favorites', help='查看收藏')

    share_parser = subparsers.add_parser('share', help='分享名言')
    share_parser.add_argument('quote_id', type=int, help='名言ID')
    share_parser.add_argument('--target', choices=[t.value for t in ShareTarget],
                              default=ShareTarget.CLIPBOARD.value, help='分享目标')

    export_parser = subparsers.add_parser('export', help='导出名言图片')
    export_parser.add_argument('quote_id', type=int, help='名言ID')
    export_parser.add_argument('--output-dir', default=None, help='输出目录 (默认读取配置)')

    interactive_parser = subparsers.add_parser('interactive', help='交互式会话')
    interactive_parser.add_argument('--output-dir', default=None, help='图片导出目录')

    return parser


async def main(argv=None) -> int:
    """主函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    app = QuoteApp(base_url=args.base_url)

    try:
        if args.command == 'api':
            await app.start_api_server(host=args.host, port=args.port)
        elif args.command == 'list':
            app.list_quotes()
        elif args.command == 'random':
            app.show_random()
        elif args.command == 'show':
            app.show_quote(args.quote_id)
        elif args.command == 'favorite':
            app.toggle_favorite(args.quote_id)
        elif args.command == 'unfavorite':
            app.remove_favorite(args.quote_id)
        elif args.command == 'favorites':
            app.list_favorites()
        elif args.command == 'share':
            app.share_quote(args.quote_id, args.target)
        elif args.command == 'export':
            app.export_quote(args.quote_id, args.output_dir)
        elif args.command == 'interactive':
            app.interactive(args.output_dir)
    except QuoteAppError as e:
        main_logger.error(f"[Main] {e}")
        print(f"错误: {e.message}", file=sys.stderr)
        return 1

    return 0


def cli():
    """命令行入口"""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    cli()
