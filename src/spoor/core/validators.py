"""Field validators for the XML description and resource file names.

All validators are pure predicates. Callers turn a ``False`` into an error
naming the offending value and field.
"""

import re

# MARC relator codes accepted by OPF 2.0 for opf:role
ROLE_CODES = frozenset(
    {
        "adp", "ann", "arr", "art", "asn", "aut", "aqt", "aft", "aui", "ant",
        "bkp", "clb", "cmm", "dsr", "edt", "ill", "lyr", "mdc", "mus", "nrt",
        "oth", "pht", "prt", "red", "rev", "spn", "ths", "trc", "trl",
    }
)

RESOURCE_EXTENSIONS = frozenset({"css", "png", "jpg", "jpeg", "svg"})
IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "svg"})

MAX_FILENAME_LENGTH = 254

_LANGUAGE_RE = re.compile(r"[A-Za-z0-9-]+")
_ROLE_RE = re.compile(r"[A-Za-z]{3}")
_DATE_RE = re.compile(r"([0-9]{4})(?:-([0-9]{2})(?:-([0-9]{2}))?)?")
_TARGET_RE = re.compile(r"#[A-Za-z][A-Za-z0-9_]*")
_FILENAME_RE = re.compile(r"([A-Za-z0-9_]+)\.([A-Za-z0-9_]+)")
_DEVICE_RE = re.compile(r"AUX|COM[1-9]|CON|LPT[1-9]|NUL|PRN", re.IGNORECASE)

# Gregorian calendar adoption
_MIN_YEAR, _MIN_MONTH, _MIN_DAY = 1582, 10, 15
_MAX_YEAR = 9999

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def valid_language_code(code: str) -> bool:
    """Check the syntax of a language tag.

    Only the character set and hyphen placement are checked; subtags are
    not looked up in any registry.
    """
    if not _LANGUAGE_RE.fullmatch(code):
        return False
    if code.startswith("-") or code.endswith("-"):
        return False
    return "--" not in code


def valid_role(role: str) -> bool:
    """Check that ``role`` is a supported three-letter relator code."""
    return bool(_ROLE_RE.fullmatch(role)) and role.lower() in ROLE_CODES


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def valid_date(value: str) -> bool:
    """Check a ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD`` date.

    The date must exist in the Gregorian calendar and fall between
    1582-10-15 and 9999-12-31 inclusive.
    """
    match = _DATE_RE.fullmatch(value)
    if not match:
        return False

    year = int(match.group(1))
    if year < _MIN_YEAR or year > _MAX_YEAR:
        return False

    if match.group(2) is None:
        return True
    month = int(match.group(2))
    if month < 1 or month > 12:
        return False
    if year == _MIN_YEAR and month < _MIN_MONTH:
        return False

    if match.group(3) is None:
        return True
    day = int(match.group(3))
    if day < 1 or day > days_in_month(year, month):
        return False
    if year == _MIN_YEAR and month == _MIN_MONTH and day < _MIN_DAY:
        return False
    return True


def valid_target(target: str) -> bool:
    """Check a navigation target: ``#`` alone or ``#`` plus an anchor name."""
    return target == "#" or bool(_TARGET_RE.fullmatch(target))


def split_filename(filename: str) -> tuple[str, str] | None:
    """Split ``name.ext`` into its parts, or None if it has the wrong shape."""
    match = _FILENAME_RE.fullmatch(filename)
    if not match:
        return None
    return match.group(1), match.group(2)


def valid_resource_filename(filename: str) -> bool:
    """Check a resource file name (without directories).

    The name must be 1 to 254 characters of the form ``name.ext`` using
    ASCII letters, digits and underscores, carry a supported extension,
    and not be a reserved DOS device name.
    """
    if not 0 < len(filename) <= MAX_FILENAME_LENGTH:
        return False
    parts = split_filename(filename)
    if parts is None:
        return False
    stem, extension = parts
    if extension.lower() not in RESOURCE_EXTENSIONS:
        return False
    return not _DEVICE_RE.fullmatch(stem)
