"""
Split free text into display lines.

Wide characters (code point >= 256, e.g. CJK) take two width units, everything
else takes one. Text containing an explicit newline is treated as
pre-formatted and only split on the newlines and the width limit.
"""

DEFAULT_MAX_UNITS = 16

# trailing-line rebalancing thresholds
ORPHAN_MAX_CHARS = 3
DONOR_MIN_CHARS = 5
MOVED_CHARS = 2


def char_units(ch):
    return 1 if ord(ch) < 256 else 2


def split_lines(text="", max_units=DEFAULT_MAX_UNITS):
    lines = []
    buf = []
    units = 0

    def flush():
        nonlocal units
        lines.append("".join(buf).strip())
        buf.clear()
        units = 0

    for ch in text:
        if ch == "\n":
            flush()
            continue
        buf.append(ch)
        units += char_units(ch)
        if units >= max_units:
            flush()
    # NOTE: this may add an empty line, which is filtered below
    flush()

    result = [line for line in lines if line]
    if "\n" in text:
        return result
    return rebalance(result)


def rebalance(lines):
    """Move the tail of the second-to-last line onto a very short last line."""
    if len(lines) < 2:
        return lines
    last, prev = lines[-1], lines[-2]
    if len(last) < ORPHAN_MAX_CHARS and len(prev) > DONOR_MIN_CHARS:
        lines = list(lines)
        lines[-1] = prev[-MOVED_CHARS:] + last
        lines[-2] = prev[:-MOVED_CHARS]
    return lines
