# -*- encoding: utf-8 -*-
# @File   : strutil.py
# @Time   : 2026/10/12 21:03:11
# @Author : Chloride

"""Small string helpers shared by the option cell and the parsers."""

QUOTE_CHARS = ('"', "'")


def are_quotes(c1: str, c2: str) -> bool:
    return c1 == c2 and c1 in QUOTE_CHARS


def trim_quotes(text: str) -> tuple[str, bool]:
    """Strip one layer of matching quotes.

    Returns the (maybe) stripped text, and whether quotes were removed.
    """
    if len(text) >= 2 and are_quotes(text[0], text[-1]):
        return text[1:-1], True
    return text, False


def is_bool(text: str) -> bool:
    return text.lower() in ('true', 'false')


def str_to_bool(text: str) -> bool:
    # only "true" counts, "yes" / "on" etc. are plain strings here.
    return text.lower() == 'true'


def get_lines(text: str) -> list[str]:
    """Split on CR, LF or CRLF, dropping empty lines."""
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    return [i for i in text.split('\n') if i]
