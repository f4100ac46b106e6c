"""
Quote image export.
Renders a quote onto a fixed 800x600 gradient card with Pillow and saves it as PNG.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from storage.models import Quote
from utils import LogContext, export_logger

CANVAS_SIZE = (800, 600)
GRADIENT_START = "#667eea"
GRADIENT_END = "#764ba2"
TEXT_COLOR = "white"

QUOTE_FONT_SIZE = 32
AUTHOR_FONT_SIZE = 24
MAX_LINE_WIDTH = 700
FIRST_LINE_Y = 250
LINE_HEIGHT = 45
AUTHOR_OFFSET = 80

FONT_CANDIDATES = ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf", "Helvetica.ttc")


@dataclass
class TextLine:
    text: str
    y: int


@dataclass
class QuoteLayout:
    """排版结果，y 为基线坐标"""
    lines: List[TextLine]
    author: TextLine


def load_font(size: int) -> ImageFont.ImageFont:
    """加载字体，找不到系统字体时使用 Pillow 内置字体"""
    for name in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def wrap_words(text: str, measure: Callable[[str], float],
               max_width: float = MAX_LINE_WIDTH) -> List[str]:
    """
    按词折行。

    逐词累积，加入某个词（非首词）后宽度超过 max_width 时输出当前行并以该词开始新行，
    最后输出剩余的行。宽度按带尾随空格的行测量。
    """
    words = text.split(" ")
    lines = []
    line = ""

    for index, word in enumerate(words):
        test_line = f"{line}{word} "
        if measure(test_line) > max_width and index > 0:
            lines.append(line.rstrip())
            line = f"{word} "
        else:
            line = test_line

    lines.append(line.rstrip())
    return lines


def linear_gradient(size: Tuple[int, int], start: str, end: str) -> Image.Image:
    """左上角到右下角的线性渐变"""
    width, height = size
    base = Image.linear_gradient("L")
    horizontal = base.transpose(Image.Transpose.ROTATE_90).resize(size)
    vertical = base.resize(size)
    # 沿对角线方向投影：t = (x*w + y*h) / (w^2 + h^2)
    mask = Image.blend(horizontal, vertical, height * height / (width * width + height * height))
    return Image.composite(Image.new("RGB", size, end), Image.new("RGB", size, start), mask)


class QuoteImageRenderer:
    """名言图片渲染器"""

    def __init__(self, quote_font: Optional[ImageFont.ImageFont] = None,
                 author_font: Optional[ImageFont.ImageFont] = None):
        self.quote_font = quote_font or load_font(QUOTE_FONT_SIZE)
        self.author_font = author_font or load_font(AUTHOR_FONT_SIZE)

    def layout(self, quote: Quote) -> QuoteLayout:
        """计算名言各行文本及位置"""
        wrapped = wrap_words(quote.text, self.quote_font.getlength)
        lines = [TextLine(f'"{text}"', FIRST_LINE_Y + i * LINE_HEIGHT) for i, text in enumerate(wrapped)]
        author = TextLine(f"- {quote.author}", lines[-1].y + AUTHOR_OFFSET)
        return QuoteLayout(lines=lines, author=author)

    def render(self, quote: Quote) -> Image.Image:
        """渲染名言图片"""
        image = linear_gradient(CANVAS_SIZE, GRADIENT_START, GRADIENT_END)
        draw = ImageDraw.Draw(image)
        center_x = CANVAS_SIZE[0] // 2
        layout = self.layout(quote)

        for line in layout.lines:
            draw.text((center_x, line.y), line.text, font=self.quote_font, fill=TEXT_COLOR, anchor="ms")
        draw.text((center_x, layout.author.y), layout.author.text,
                  font=self.author_font, fill=TEXT_COLOR, anchor="ms")
        return image

    def export(self, quote: Optional[Quote], output_dir: Union[str, Path]) -> Optional[Path]:
        """导出为 quote-<id>.png，没有名言、无法渲染或无法写入时返回 None"""
        if quote is None:
            export_logger.debug("[Export] No current quote, nothing to export")
            return None

        output_path = Path(output_dir) / f"quote-{quote.id}.png"
        with LogContext("Export", "export_image", quote_id=quote.id):
            try:
                image = self.render(quote)
            except (OSError, ValueError) as e:
                export_logger.error(f"[Export] Rendering unavailable for quote {quote.id}: {e}")
                return None

            try:
                output_path.parent.mkdir(parents=True, exist_ok=True)
                image.save(output_path, format="PNG")
            except OSError as e:
                export_logger.error(f"[Export] Cannot write {output_path}: {e}")
                return None

        return output_path
