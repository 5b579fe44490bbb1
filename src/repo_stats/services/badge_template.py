"""SVG badge templates in the shields.io visual styles.

Text is laid out with Verdana 11px advance widths, which is what the shields
templates assume; renderers fall back to a similar sans-serif face.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from jinja2 import DictLoader, Environment, select_autoescape

from repo_stats.domain.entities import Style

LOGO_SIZE = 14
LOGO_GAP = 3

# Verdana 11px advance widths for printable ASCII; other characters use the
# average of the digits.
_VERDANA_11: dict[str, float] = {
    " ": 3.87, "!": 4.33, '"': 5.05, "#": 9.0, "$": 7.0, "%": 11.84, "&": 7.99,
    "'": 2.95, "(": 4.99, ")": 4.99, "*": 7.0, "+": 9.0, ",": 4.0, "-": 4.99,
    ".": 4.0, "/": 4.99, ":": 4.99, ";": 4.99, "<": 9.0, "=": 9.0, ">": 9.0,
    "?": 6.0, "@": 11.0, "[": 4.99, "\\": 4.99, "]": 4.99, "^": 9.0, "_": 7.0,
    "`": 7.0, "{": 6.98, "|": 4.99, "}": 6.98, "~": 9.0,
    "A": 7.52, "B": 7.54, "C": 7.68, "D": 8.48, "E": 6.96, "F": 6.32, "G": 8.53,
    "H": 8.27, "I": 4.63, "J": 5.0, "K": 7.62, "L": 6.12, "M": 9.27, "N": 8.23,
    "O": 8.66, "P": 6.63, "Q": 8.66, "R": 7.65, "S": 7.52, "T": 6.78, "U": 8.05,
    "V": 7.52, "W": 10.88, "X": 7.54, "Y": 6.77, "Z": 7.54,
    "a": 6.61, "b": 6.85, "c": 5.73, "d": 6.85, "e": 6.55, "f": 3.87, "g": 6.85,
    "h": 6.96, "i": 3.02, "j": 3.79, "k": 6.51, "l": 3.02, "m": 10.7, "n": 6.96,
    "o": 6.68, "p": 6.85, "q": 6.85, "r": 4.69, "s": 5.73, "t": 4.33, "u": 6.96,
    "v": 6.51, "w": 8.98, "x": 6.51, "y": 6.51, "z": 5.78,
}
_VERDANA_11.update({str(d): 7.0 for d in range(10)})
_FALLBACK_WIDTH = 7.0


def text_width(text: str, font_size: float = 11.0, letter_spacing: float = 0.0) -> float:
    """Approximate rendered width of *text* in pixels."""
    base = sum(_VERDANA_11.get(ch, _FALLBACK_WIDTH) for ch in text)
    return base * font_size / 11.0 + letter_spacing * len(text)


@dataclass(frozen=True, slots=True)
class Badge:
    """Everything a template needs to draw one badge."""

    label: str
    message: str
    label_color: str = "#555"
    message_color: str = "#007ec6"
    logo: str | None = None
    logo_as_label: bool = False
    label_title: str | None = None
    message_title: str | None = None


@dataclass(frozen=True, slots=True)
class _Metrics:
    padding: float
    font_size: float = 11.0
    letter_spacing: float = 0.0
    uppercase: bool = False


_STYLE_METRICS: dict[Style, _Metrics] = {
    Style.FLAT: _Metrics(padding=5),
    Style.FLAT_SQUARE: _Metrics(padding=5),
    Style.PLASTIC: _Metrics(padding=5),
    Style.FOR_THE_BADGE: _Metrics(padding=9, font_size=10, letter_spacing=1.25, uppercase=True),
    Style.SOCIAL: _Metrics(padding=6),
}

_FONT = "Verdana,Geneva,DejaVu Sans,sans-serif"

_HEAD = """\
<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" \
width="{{ width }}" height="{{ height }}" role="img" aria-label="{{ title }}">\
<title>{{ title }}</title>"""

_LOGO = """\
{% if logo %}<image x="{{ logo_x }}" y="{{ (height - logo_size) / 2 }}" width="{{ logo_size }}" \
height="{{ logo_size }}" xlink:href="{{ logo }}"/>{% endif %}"""

_TEMPLATES: dict[str, str] = {
    Style.FLAT.value: _HEAD + """\
<linearGradient id="s" x2="0" y2="100%"><stop offset="0" stop-color="#bbb" stop-opacity=".1"/>\
<stop offset="1" stop-opacity=".1"/></linearGradient>\
<clipPath id="r"><rect width="{{ width }}" height="{{ height }}" rx="3" fill="#fff"/></clipPath>\
<g clip-path="url(#r)"><rect width="{{ label_width }}" height="{{ height }}" fill="{{ label_color }}"/>\
<rect x="{{ label_width }}" width="{{ message_width }}" height="{{ height }}" fill="{{ message_color }}"/>\
<rect width="{{ width }}" height="{{ height }}" fill="url(#s)"/></g>\
<g fill="#fff" text-anchor="middle" font-family="{{ font }}" text-rendering="geometricPrecision" font-size="11">\
""" + _LOGO + """\
{% if show_label %}<text x="{{ label_x }}" y="15" fill="#010101" fill-opacity=".3">{{ label }}</text>\
<text x="{{ label_x }}" y="14">{{ label }}</text>{% endif %}\
<text x="{{ message_x }}" y="15" fill="#010101" fill-opacity=".3">{{ message }}</text>\
<text x="{{ message_x }}" y="14">{{ message }}</text></g></svg>""",
    Style.FLAT_SQUARE.value: _HEAD + """\
<g shape-rendering="crispEdges"><rect width="{{ label_width }}" height="{{ height }}" fill="{{ label_color }}"/>\
<rect x="{{ label_width }}" width="{{ message_width }}" height="{{ height }}" fill="{{ message_color }}"/></g>\
<g fill="#fff" text-anchor="middle" font-family="{{ font }}" text-rendering="geometricPrecision" font-size="11">\
""" + _LOGO + """\
{% if show_label %}<text x="{{ label_x }}" y="14">{{ label }}</text>{% endif %}\
<text x="{{ message_x }}" y="14">{{ message }}</text></g></svg>""",
    Style.PLASTIC.value: _HEAD + """\
<linearGradient id="s" x2="0" y2="100%"><stop offset="0" stop-color="#fff" stop-opacity=".7"/>\
<stop offset=".1" stop-color="#aaa" stop-opacity=".1"/><stop offset=".9" stop-color="#000" stop-opacity=".3"/>\
<stop offset="1" stop-color="#000" stop-opacity=".5"/></linearGradient>\
<clipPath id="r"><rect width="{{ width }}" height="{{ height }}" rx="4" fill="#fff"/></clipPath>\
<g clip-path="url(#r)"><rect width="{{ label_width }}" height="{{ height }}" fill="{{ label_color }}"/>\
<rect x="{{ label_width }}" width="{{ message_width }}" height="{{ height }}" fill="{{ message_color }}"/>\
<rect width="{{ width }}" height="{{ height }}" fill="url(#s)"/></g>\
<g fill="#fff" text-anchor="middle" font-family="{{ font }}" text-rendering="geometricPrecision" font-size="11">\
""" + _LOGO + """\
{% if show_label %}<text x="{{ label_x }}" y="14" fill="#010101" fill-opacity=".3">{{ label }}</text>\
<text x="{{ label_x }}" y="13">{{ label }}</text>{% endif %}\
<text x="{{ message_x }}" y="14" fill="#010101" fill-opacity=".3">{{ message }}</text>\
<text x="{{ message_x }}" y="13">{{ message }}</text></g></svg>""",
    Style.FOR_THE_BADGE.value: _HEAD + """\
<g shape-rendering="crispEdges"><rect width="{{ label_width }}" height="{{ height }}" fill="{{ label_color }}"/>\
<rect x="{{ label_width }}" width="{{ message_width }}" height="{{ height }}" fill="{{ message_color }}"/></g>\
<g fill="#fff" text-anchor="middle" font-family="{{ font }}" text-rendering="geometricPrecision" \
font-size="10" letter-spacing="1.25">\
""" + _LOGO + """\
{% if show_label %}<text x="{{ label_x }}" y="18">{{ label }}</text>{% endif %}\
<text x="{{ message_x }}" y="18" font-weight="bold">{{ message }}</text></g></svg>""",
    Style.SOCIAL.value: _HEAD + """\
<linearGradient id="a" x2="0" y2="100%"><stop offset="0" stop-color="#fcfcfc" stop-opacity="0"/>\
<stop offset="1" stop-opacity=".1"/></linearGradient>\
<g stroke="#d5d5d5"><rect stroke="none" fill="#fcfcfc" x=".5" y=".5" width="{{ label_width - 1 }}" height="19" rx="2"/>\
<rect x="{{ label_width + 5.5 }}" y=".5" width="{{ message_width - 6 }}" height="19" rx="2" fill="#fafafa"/>\
<path stroke="#fafafa" d="M{{ label_width + 6 }} 7.5h.5v5h-.5z"/>\
<path d="M{{ label_width + 5.5 }} 6.5l-3 3v1l3 3" fill="#fafafa"/></g>\
<rect width="{{ label_width }}" height="20" rx="2" fill="url(#a)"/>\
<g fill="#333" text-anchor="middle" font-family="Helvetica Neue,Helvetica,Arial,sans-serif" \
font-weight="700" font-size="11">\
""" + _LOGO + """\
{% if show_label %}<text x="{{ label_x }}" y="15" fill="#fff">{{ label }}</text>\
<text x="{{ label_x }}" y="14">{{ label }}</text>{% endif %}\
<text x="{{ message_x + 3 }}" y="15" fill="#fff">{{ message }}</text>\
<text x="{{ message_x + 3 }}" y="14">{{ message }}</text></g></svg>""",
}

_HEIGHTS: dict[Style, int] = {
    Style.FLAT: 20,
    Style.FLAT_SQUARE: 20,
    Style.PLASTIC: 18,
    Style.FOR_THE_BADGE: 28,
    Style.SOCIAL: 20,
}

_env = Environment(
    loader=DictLoader(_TEMPLATES),
    autoescape=select_autoescape(default=True, default_for_string=True),
    trim_blocks=True,
)


def render_svg(style: Style, badge: Badge) -> str:
    """Render *badge* in *style* and return the SVG document."""
    metrics = _STYLE_METRICS[style]
    transform: Callable[[str], str] = str.upper if metrics.uppercase else str
    label = transform(badge.label)
    message = transform(badge.message)

    def measure(text: str) -> float:
        return text_width(text, metrics.font_size, metrics.letter_spacing)

    show_label = bool(label) and not (badge.logo and badge.logo_as_label)
    label_text_width = measure(label) if show_label else 0.0
    logo_width = (LOGO_SIZE + (LOGO_GAP if show_label else 0)) if badge.logo else 0

    if show_label or badge.logo:
        label_width = round(label_text_width + logo_width + 2 * metrics.padding)
    else:
        label_width = 0
    message_width = round(measure(message) + 2 * metrics.padding)
    if style is Style.SOCIAL:
        message_width += 6

    label_title = badge.label_title if badge.label_title is not None else badge.label
    message_title = badge.message_title if badge.message_title is not None else badge.message

    return _env.get_template(style.value).render(
        width=label_width + message_width,
        height=_HEIGHTS[style],
        title=f"{label_title}: {message_title}" if label_title else message_title,
        font=_FONT,
        label=label,
        message=message,
        label_color=badge.label_color,
        message_color=badge.message_color,
        label_width=label_width,
        message_width=message_width,
        label_x=round(metrics.padding + logo_width + label_text_width / 2, 1),
        message_x=round(label_width + message_width / 2, 1),
        show_label=show_label,
        logo=badge.logo,
        logo_x=metrics.padding,
        logo_size=LOGO_SIZE,
    )
