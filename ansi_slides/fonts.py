"""Font effects expressed as ANSI SGR escape sequences."""
from typing import Iterable, Optional, Tuple, Union

from .errors import UnknownStyle
from .layout import Doc, concat, to_doc

# Two digit codes keep start and stop sequences the same length.
FONT_EFFECTS = {
    "bold": ("01", "22"),
    "faint": ("02", "22"),
    "italic": ("03", "23"),
    "underline": ("04", "24"),
    "underlined": ("04", "24"),
    "blink": ("05", "25"),
    "inverse": ("07", "27"),
    "strikeout": ("09", "29"),
    "black": ("30", "39"),
    "red": ("31", "39"),
    "green": ("32", "39"),
    "yellow": ("33", "39"),
    "blue": ("34", "39"),
    "magenta": ("35", "39"),
    "cyan": ("36", "39"),
    "white": ("37", "39"),
    "on_black": ("40", "49"),
    "on_red": ("41", "49"),
    "on_green": ("42", "49"),
    "on_yellow": ("43", "49"),
    "on_blue": ("44", "49"),
    "on_magenta": ("45", "49"),
    "on_cyan": ("46", "49"),
    "on_white": ("47", "49"),
}

StyleNames = Union[str, Iterable[Optional[str]]]


def style_codes(names: StyleNames) -> Tuple[str, str]:
    """Return the combined (start, stop) escape sequences for *names*.

    ``None`` entries are skipped, which lets callers write
    ``['bold', color]`` with ``color`` disabled.
    """
    if isinstance(names, str):
        names = [names]
    start_codes, stop_codes = [], []
    for name in names:
        if name is None:
            continue
        try:
            start, stop = FONT_EFFECTS[name]
        except KeyError:
            raise UnknownStyle(name) from None
        start_codes.append(start)
        stop_codes.append(stop)
    if not start_codes:
        return "", ""
    return (
        "\x1b[%sm" % ";".join(start_codes),
        "\x1b[%sm" % ";".join(stop_codes),
    )


def font(names: StyleNames, body) -> Doc:
    """Wrap *body* in the escape sequences for the font effects *names*."""
    start, stop = style_codes(names)
    if not start:
        return to_doc(body)
    return concat([start, body, stop])
