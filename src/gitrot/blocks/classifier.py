"""Per-line predicates for C-family comment syntax.

Every function here looks at a single line of text and keeps no state
between calls. Comment delimiters inside a double-quoted string are not
delimiters: each ``"`` flips the in-string state. Escape sequences are not
interpreted, so ``"a \\" /* b"`` is read as a string, then ``/* b``, then
an open string.

Positions follow the ``str.find`` convention: the index of the first
delimiter character, or ``-1`` when there is none.
"""

LINE_COMMENT = "//"
BLOCK_OPEN = "/*"
BLOCK_CLOSE = "*/"


def is_blank(line: str) -> bool:
    """True if the line is empty or whitespace only."""
    return not line or line.isspace()


def find_comment_open(line: str, from_pos: int = 0) -> int:
    """Index of the first ``//`` or ``/*`` outside a string literal."""
    in_string = False
    prev = ""
    for i in range(from_pos, len(line)):
        c = line[i]
        if c == '"':
            in_string = not in_string
        elif not in_string and prev == "/" and c in "/*":
            return i - 1
        prev = c
    return -1


def find_comment_close(line: str, from_pos: int = 0) -> int:
    """Index of the first ``*/`` outside a string literal."""
    in_string = False
    prev = ""
    for i in range(from_pos, len(line)):
        c = line[i]
        if c == '"':
            in_string = not in_string
        elif not in_string and prev == "*" and c == "/":
            return i - 1
        prev = c
    return -1


def has_unterminated_comment(line: str) -> bool:
    """True if the line ends inside a ``/*`` comment it opened.

    A ``//`` comment runs to the end of the line, so anything after it,
    including ``/*``, is ignored.
    """
    pos = 0
    while True:
        start = find_comment_open(line, pos)
        if start == -1:
            return False
        if line.startswith(LINE_COMMENT, start):
            return False
        end = find_comment_close(line, start + len(BLOCK_OPEN))
        if end == -1:
            return True
        pos = end + len(BLOCK_CLOSE)


def ends_inside_comment(line: str, inside: bool = False) -> bool:
    """Carry the block-comment state across ``line``.

    ``inside`` is whether a block comment was open when the line started.
    """
    pos = 0
    if inside:
        end = find_comment_close(line)
        if end == -1:
            return True
        pos = end + len(BLOCK_CLOSE)
    return has_unterminated_comment(line[pos:])


def is_comment_only(line: str) -> bool:
    """True if the line holds comments and no code.

    Accepts a ``//`` comment, or one or more complete ``/* ... */``
    comments, optionally ending in a ``//`` comment. A block comment left
    open at end of line does not count; the segmenter handles that case.
    """
    pos = len(line) - len(line.lstrip())
    seen = False
    while pos < len(line):
        if line.startswith(LINE_COMMENT, pos):
            return True
        if not line.startswith(BLOCK_OPEN, pos):
            return False
        end = find_comment_close(line, pos + len(BLOCK_OPEN))
        if end == -1:
            return False
        seen = True
        pos = end + len(BLOCK_CLOSE)
        while pos < len(line) and line[pos].isspace():
            pos += 1
    return seen
