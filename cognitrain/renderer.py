"""PIL-based renderer for dashboard tiles."""

import textwrap

from PIL import Image, ImageDraw, ImageFont

from cognitrain.config import GameConfig
from cognitrain.dashboard import DashboardSummary, format_score

TILE = (96, 96)
GAP = 8
COLUMNS = 5
BACKGROUND = "#111111"

STREAK_COLORS = [
    (30, "#a855f7"),
    (7, "#f97316"),
    (3, "#eab308"),
    (1, "#22c55e"),
    (0, "#6b7280"),
]

FONT_PATH = "/System/Library/Fonts/Helvetica.ttc"


def _font(size: int) -> ImageFont.FreeTypeFont:
    try:
        return ImageFont.truetype(FONT_PATH, size)
    except OSError:
        return ImageFont.load_default(size=size)


def streak_to_color(count: int) -> str:
    """Map a streak length to a tile color; longer streaks run hotter."""
    for threshold, color in STREAK_COLORS:
        if count >= threshold:
            return color
    return STREAK_COLORS[-1][1]


def render_stat_tile(
    size: tuple[int, int] = TILE,
    lines: list[str] | None = None,
    bg_color: str = "#1e3a5f",
    font_sizes: list[int] | None = None,
    colors: list[str] | None = None,
) -> Image.Image:
    """Render a text-only tile — big value on top, dimmer caption lines below.

    lines: up to 4 lines of text, centered vertically
    font_sizes: per-line font sizes (default depends on line count)
    colors: per-line colors (default: white, then progressively dimmer)
    """
    img = Image.new("RGB", size, bg_color)
    if not lines:
        return img

    draw = ImageDraw.Draw(img)
    n = len(lines)

    if not font_sizes:
        font_sizes = {1: [26], 2: [26, 12], 3: [22, 12, 10]}.get(n, [14, 12, 10, 9])
    font_sizes = list(font_sizes)
    colors = list(colors or ["#ffffff", "#dddddd", "#aaaaaa", "#888888"][:n])

    while len(font_sizes) < n:
        font_sizes.append(font_sizes[-1])
    while len(colors) < n:
        colors.append(colors[-1])

    fonts = [_font(s) for s in font_sizes]
    line_heights = [f.getbbox("Ag")[3] - f.getbbox("Ag")[1] for f in fonts]
    spacing = 4
    total_h = sum(line_heights) + spacing * (n - 1)
    y = (size[1] - total_h) // 2

    for i, text in enumerate(lines):
        draw.text((size[0] // 2, y), text, font=fonts[i], fill=colors[i], anchor="mt")
        y += line_heights[i] + spacing

    return img


def _tile_origin(index: int, top: int) -> tuple[int, int]:
    row, col = divmod(index, COLUMNS)
    return GAP + col * (TILE[0] + GAP), top + row * (TILE[1] + GAP)


def render_dashboard(summary: DashboardSummary, games: list[GameConfig]) -> Image.Image:
    """Compose the home screen: stat tiles, one tile per game, then the suggestion."""
    game_rows = max(1, -(-len(games) // COLUMNS))
    text_lines = textwrap.wrap(summary.suggestion, width=60) or [""]
    width = GAP + COLUMNS * (TILE[0] + GAP)
    games_top = GAP + TILE[1] + GAP
    text_top = games_top + game_rows * (TILE[1] + GAP)
    height = text_top + len(text_lines) * 16 + GAP

    img = Image.new("RGB", (width, height), BACKGROUND)

    stats = [
        ([str(summary.streak), "day streak"], streak_to_color(summary.streak)),
        ([str(summary.today_count), "today"], "#3b82f6"),
        ([format_score(summary.total_count), "total"], "#1e3a5f"),
    ]
    for i, (lines, bg) in enumerate(stats):
        img.paste(render_stat_tile(lines=lines, bg_color=bg), _tile_origin(i, GAP))

    for i, game in enumerate(games):
        best = summary.best_by_game.get(game.id, 0)
        title = (game.title or game.id).upper()
        if len(title) > 10:
            title = title[:9] + "…"
        tile = render_stat_tile(
            lines=[format_score(best), title, "best"],
            bg_color=game.bg,
        )
        img.paste(tile, _tile_origin(i, games_top))

    draw = ImageDraw.Draw(img)
    font = _font(12)
    for i, line in enumerate(text_lines):
        draw.text((GAP, text_top + i * 16), line, font=font, fill="#dddddd")

    return img
