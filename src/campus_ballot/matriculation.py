"""Eligibility check over (department, matriculation number) pairs.

The department string starts with a two byte department code followed by a
separator byte and a two byte academic-year token, e.g. ``XS209AB`` is
department code ``XS`` with year token ``09``. The matriculation number is
exactly eight bytes, of which the first four carry digit-range rules.

Everything is done on the UTF-8 bytes of the inputs and every index is bounds
checked before it is read, so ``is_valid`` is total: it returns ``False`` for
malformed input instead of raising.
"""

from typing import Optional, Tuple

# department A..F, in order
DEPARTMENT_CODES: Tuple[bytes, ...] = (b"XS", b"XC", b"XE", b"XM", b"XP", b"XF")
DEPARTMENT_LETTERS = "ABCDEF"

MIN_YEAR_TOKEN = b"09"
# department F only admits this cohort
DEPARTMENT_F_YEAR_TOKEN = b"AA"

MATRICULATION_LENGTH = 8

# inclusive (low, high) byte range for each checked matric position
MATRICULATION_DIGIT_RANGES: Tuple[Tuple[bytes, bytes], ...] = (
    (b"0", b"9"),
    (b"0", b"9"),
    (b"0", b"3"),
    (b"0", b"9"),
)


def _as_uint(token: bytes) -> int:
    return int.from_bytes(token, "big", signed=False)


def department_code(department: str) -> Optional[bytes]:
    raw = department.encode("utf-8")
    if len(raw) < 2:
        return None
    return raw[0:2]


def department_for(code: bytes) -> Optional[str]:
    """Return the department letter (A-F) for a two byte code, or None."""
    try:
        return DEPARTMENT_LETTERS[DEPARTMENT_CODES.index(code)]
    except ValueError:
        return None


def year_token(department: str) -> Optional[bytes]:
    """Bytes 4-5 (1-indexed) of the department string, if present."""
    raw = department.encode("utf-8")
    if len(raw) < 5:
        return None
    return raw[3:5]


def is_valid(department: str, matriculation_number: str) -> bool:
    dept = department.encode("utf-8")
    matric = matriculation_number.encode("utf-8")

    if len(dept) < 2 or len(matric) != MATRICULATION_LENGTH:
        return False

    code = dept[0:2]
    if code not in DEPARTMENT_CODES:
        return False

    token = year_token(department)
    if token is None:
        return False
    if _as_uint(token) < _as_uint(MIN_YEAR_TOKEN):
        return False
    if code == DEPARTMENT_CODES[5] and token != DEPARTMENT_F_YEAR_TOKEN:
        return False

    for pos, (low, high) in enumerate(MATRICULATION_DIGIT_RANGES):
        if not ord(low) <= matric[pos] <= ord(high):
            return False

    # positions 5-8 are not checked
    return True
