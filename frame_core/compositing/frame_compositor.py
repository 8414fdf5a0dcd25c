import io
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont, ImageStat

# Frame geometry the generation prompt asks for, as fractions of the canvas.
TOP_BORDER_RATIO = 0.12
BOTTOM_BORDER_RATIO = 0.14
LOGO_TAB_WIDTH_RATIO = 0.16
TITLE_FONT_RATIO = 0.55
TITLE_MARGIN_RATIO = 0.06

SYSTEM_FONTS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:/Windows/Fonts/arialbd.ttf",
]


def composite_frame(
    frame_bytes: bytes,
    logo_bytes: Optional[bytes] = None,
    event_title: str = "",
    font_path: Optional[str] = None,
) -> bytes:
    """
    Overlay a caller-supplied logo into the top-center tab and the event title
    into the bottom border of a generated frame. Returns PNG bytes.
    """
    canvas = Image.open(io.BytesIO(frame_bytes)).convert("RGBA")

    if logo_bytes:
        canvas = _paste_logo(canvas, logo_bytes)
    if event_title.strip():
        canvas = _draw_title(canvas, event_title.strip(), font_path)

    out = io.BytesIO()
    canvas.convert("RGB").save(out, format="PNG")
    return out.getvalue()


def logo_box(size: Tuple[int, int]) -> Tuple[int, int, int, int]:
    w, h = size
    box_w = int(w * LOGO_TAB_WIDTH_RATIO)
    box_h = int(h * TOP_BORDER_RATIO)
    x0 = (w - box_w) // 2
    y0 = int(box_h * 0.1)
    return x0, y0, x0 + box_w, y0 + box_h


def title_band(size: Tuple[int, int]) -> Tuple[int, int, int, int]:
    w, h = size
    band_h = int(h * BOTTOM_BORDER_RATIO)
    return 0, h - band_h, w, h


def _paste_logo(canvas: Image.Image, logo_bytes: bytes) -> Image.Image:
    logo = Image.open(io.BytesIO(logo_bytes)).convert("RGBA")
    x0, y0, x1, y1 = logo_box(canvas.size)
    logo.thumbnail((x1 - x0, y1 - y0), Image.LANCZOS)

    x = x0 + ((x1 - x0) - logo.width) // 2
    y = y0 + ((y1 - y0) - logo.height) // 2
    canvas = canvas.copy()
    canvas.alpha_composite(logo, (x, y))
    return canvas


def _draw_title(canvas: Image.Image, title: str, font_path: Optional[str]) -> Image.Image:
    canvas = canvas.copy()
    x0, y0, x1, y1 = title_band(canvas.size)
    band_h = y1 - y0
    max_w = int((x1 - x0) * (1 - 2 * TITLE_MARGIN_RATIO))

    draw = ImageDraw.Draw(canvas)
    size = max(int(band_h * TITLE_FONT_RATIO), 8)
    font = _load_font(font_path, size)
    # shrink until the title fits on one line
    while size > 8 and draw.textlength(title, font=font) > max_w:
        size -= 2
        font = _load_font(font_path, size)

    fill = _contrasting_color(canvas.crop((x0, y0, x1, y1)))
    draw.text(((x0 + x1) // 2, (y0 + y1) // 2), title, font=font, fill=fill, anchor="mm")
    return canvas


def _contrasting_color(region: Image.Image) -> Tuple[int, int, int]:
    r, g, b = ImageStat.Stat(region.convert("RGB")).mean
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    return (17, 17, 17) if luminance > 150 else (255, 255, 255)


def _load_font(font_path: Optional[str], size: int) -> ImageFont.FreeTypeFont:
    candidates = ([font_path] if font_path else []) + SYSTEM_FONTS
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size=size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)
