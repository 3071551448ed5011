"""LZW-style dictionary compressor used for share codes.

Codes 0-255 stand for literal characters; every new phrase seen while scanning
is assigned the next code starting at 256. Each emitted code becomes a single
character whose code point equals the code, so the output is a ``str`` and can
be fed to further text encodings.

The decompressor never receives the dictionary. It rebuilds it from the
phrases it has already produced, which is why both sides must assign codes in
exactly the same order.

Known limitation: the dictionary is unbounded. Large, varied inputs produce
code points past U+FFFF (and eventually past ``chr``'s range), which the token
codec reports as an encode failure.
"""

from __future__ import annotations

_FIRST_DICTIONARY_CODE = 256


def compress(text: str) -> str:
    """Compress ``text`` into a usually shorter string of code characters."""

    if not text:
        return ""

    for char in text:
        if ord(char) >= _FIRST_DICTIONARY_CODE:
            raise ValueError(
                f"Cannot compress character {char!r}: literals must be in U+0000-U+00FF."
            )

    dictionary: dict[str, int] = {}
    next_code = _FIRST_DICTIONARY_CODE
    codes: list[int] = []
    phrase = text[0]

    for char in text[1:]:
        candidate = phrase + char
        if candidate in dictionary:
            phrase = candidate
            continue
        codes.append(dictionary[phrase] if len(phrase) > 1 else ord(phrase))
        dictionary[candidate] = next_code
        next_code += 1
        phrase = char

    codes.append(dictionary[phrase] if len(phrase) > 1 else ord(phrase))
    return "".join(chr(code) for code in codes)


def decompress(data: str) -> str:
    """Reverse :func:`compress`.

    Input that was not produced by :func:`compress` decodes to arbitrary text;
    no error is raised for it here.
    """

    if not data:
        return ""

    dictionary: dict[int, str] = {}
    next_code = _FIRST_DICTIONARY_CODE
    first_char = data[0]
    previous = first_char
    output = [first_char]

    for symbol in data[1:]:
        code = ord(symbol)
        if code < _FIRST_DICTIONARY_CODE:
            phrase = symbol
        else:
            # A code not yet in the dictionary is the one about to be added.
            phrase = dictionary.get(code, previous + first_char)
        output.append(phrase)
        first_char = phrase[0]
        dictionary[next_code] = previous + first_char
        next_code += 1
        previous = phrase

    return "".join(output)
