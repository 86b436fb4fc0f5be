"""Character-level text wrapping against a measured pixel width."""

from typing import Callable, List

from lingqian.errors import MeasurementError

Measure = Callable[[str], float]


def _width(measure: Measure, text: str) -> float:
    try:
        return measure(text)
    except MeasurementError:
        raise
    except Exception as exc:
        raise MeasurementError(f"Cannot measure {text!r}: {exc}") from exc


def wrap_paragraph(paragraph: str, max_width: float, measure: Measure) -> List[str]:
    """Wrap a single paragraph (no newlines) greedily, one character at a time.

    Breaks between any two characters, so CJK text without spaces wraps the
    same way as Latin text. A character wider than ``max_width`` on its own
    still gets a line of its own.
    """
    if not paragraph:
        return [""]

    lines: List[str] = []
    current = ""
    for char in paragraph:
        candidate = current + char
        if current and _width(measure, candidate) > max_width:
            lines.append(current)
            current = char
        else:
            current = candidate

    if current:
        lines.append(current)
    return lines


def wrap_text(text: str, max_width: float, measure: Measure) -> List[str]:
    """Wrap text to fit within the given pixel width.

    Args:
        text: Text to wrap; each newline starts a new paragraph
        max_width: Maximum line width in pixels
        measure: Returns the pixel width of a string in the target font

    Returns:
        Wrapped lines in order. Empty text gives no lines; an empty
        paragraph gives one empty line.
    """
    if not text:
        return []

    lines: List[str] = []
    for paragraph in text.split("\n"):
        lines.extend(wrap_paragraph(paragraph, max_width, measure))
    return lines
