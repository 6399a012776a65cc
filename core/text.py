"""Small text helpers shared by the handlers."""


def format_number(value) -> str:
    """Render a number the way it travels over JSON: 3.0 -> "3", 2.5 -> "2.5", 1e30 -> "1e+30"."""
    text = repr(value) if isinstance(value, float) else str(value)
    return text[:-2] if text.endswith(".0") else text


def describe_error(error: BaseException) -> str:
    """A one-line reason for an "Error: ..." message; some exceptions have no text."""
    return str(error) or type(error).__name__
