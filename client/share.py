"""
Quote sharing: share text, social compose URLs and platform capabilities.
"""

import webbrowser
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
from urllib.parse import quote as url_quote

from storage.models import Quote
from utils import client_logger, config_manager

TWITTER_INTENT_URL = "https://twitter.com/intent/tweet"
FACEBOOK_SHARER_URL = "https://www.facebook.com/sharer/sharer.php"
TWITTER_HASHTAGS = "quotes,inspiration"
SHARE_TITLE = "Inspiring Quote"


class ShareTarget(str, Enum):
    """分享目标"""
    NATIVE = "native"
    CLIPBOARD = "clipboard"
    TWITTER = "twitter"
    FACEBOOK = "facebook"


@dataclass
class ShareResult:
    """分享结果"""
    target: ShareTarget
    text: str
    url: Optional[str] = None
    delivered: bool = False


def format_share_text(quote: Quote) -> str:
    return f'"{quote.text}" - {quote.author}'


def _encode_component(value: str) -> str:
    # 与 encodeURIComponent 一致的保留字符
    return url_quote(value, safe="!'()*")


def twitter_share_url(quote: Quote) -> str:
    text = _encode_component(format_share_text(quote))
    return f"{TWITTER_INTENT_URL}?text={text}&hashtags={TWITTER_HASHTAGS}"


def facebook_share_url(quote: Quote, page_url: str) -> str:
    text = _encode_component(format_share_text(quote))
    return f"{FACEBOOK_SHARER_URL}?u={_encode_component(page_url)}&quote={text}"


class ShareService:
    """
    分享服务

    平台能力（原生分享、剪贴板、打开链接）通过构造参数注入，缺失的能力会静默降级：
    原生分享不可用时写入剪贴板，剪贴板不可用时仅返回分享文本。
    """

    def __init__(self,
                 clipboard: Optional[Callable[[str], None]] = None,
                 native_share: Optional[Callable[[str, str], None]] = None,
                 opener: Optional[Callable[[str], object]] = webbrowser.open,
                 page_url: Optional[str] = None):
        self.clipboard = clipboard
        self.native_share = native_share
        self.opener = opener
        self.page_url = page_url or config_manager.get_client_config().share_page_url

    def share(self, quote: Quote, target: ShareTarget = ShareTarget.NATIVE) -> ShareResult:
        """按目标分享名言"""
        target = ShareTarget(target)
        text = format_share_text(quote)

        if target is ShareTarget.NATIVE:
            if self.native_share is not None:
                delivered = self._call("native share", self.native_share, SHARE_TITLE, text)
                if delivered:
                    return ShareResult(target, text, delivered=True)
            return ShareResult(ShareTarget.CLIPBOARD, text, delivered=self._copy(text))

        if target is ShareTarget.CLIPBOARD:
            return ShareResult(target, text, delivered=self._copy(text))

        if target is ShareTarget.TWITTER:
            url = twitter_share_url(quote)
        else:
            url = facebook_share_url(quote, self.page_url)
        return ShareResult(target, text, url=url, delivered=self._open(url))

    def _copy(self, text: str) -> bool:
        if self.clipboard is None:
            client_logger.debug("[Share] Clipboard unavailable, share text returned only")
            return False
        return self._call("clipboard", self.clipboard, text)

    def _open(self, url: str) -> bool:
        if self.opener is None:
            client_logger.debug("[Share] No URL opener configured")
            return False
        # webbrowser.open 在没有可用浏览器时返回 False
        return self._call("url opener", self.opener, url, require_result=True)

    @staticmethod
    def _call(name: str, capability: Callable, *args, require_result: bool = False) -> bool:
        try:
            result = capability(*args)
        except Exception as e:
            client_logger.warning(f"[Share] {name} failed: {e}")
            return False
        if require_result and not result:
            client_logger.warning(f"[Share] {name} reported nothing was delivered")
            return False
        return True
