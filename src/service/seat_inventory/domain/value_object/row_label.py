"""Spreadsheet-style row labels: A..Z, AA..AZ, BA.."""

_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'


def row_label_for_index(index: int) -> str:
    if index < 0:
        raise ValueError('row index must be non-negative')
    label = ''
    n = index + 1
    while n:
        n, remainder = divmod(n - 1, 26)
        label = _ALPHABET[remainder] + label
    return label


def row_sort_key(label: str) -> int:
    """Order rows front to back; labels that are not pure letters sort last."""
    value = 0
    for char in label.upper():
        if char not in _ALPHABET:
            return 1 << 30
        value = value * 26 + (ord(char) - ord('A') + 1)
    return value
