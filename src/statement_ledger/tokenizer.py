"""Field splitting for comma-delimited statement lines."""


def split_delimited_line(line: str, delimiter: str = ",") -> list[str]:
    """Split one line of delimited text into trimmed fields.

    A delimiter inside a double-quoted span does not split, and a doubled
    quote inside a quoted span is a literal quote. An unterminated quote runs
    to the end of the line instead of raising.

    Args:
        line: A single line, without its line terminator
        delimiter: Field separator character

    Returns:
        List of field strings with surrounding whitespace removed
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def split_lines(content: str) -> list[str]:
    """Return the non-blank, stripped lines of ``content``."""
    return [line.strip() for line in content.splitlines() if line.strip()]
