"""Compiling anchor patterns.

Patterns are ordinary Python regular expressions. The delimited form used by
PHP's preg functions is also accepted, so ``/require.+autoload\\.php;/i`` is
read as ``require.+autoload\\.php;`` with re.IGNORECASE. A pattern is only
treated as delimited when it starts and ends (before any modifiers) with the
same delimiter character, so a plain regex like ``/usr/bin/`` is read as
``usr/bin``. Escape the leading delimiter (``\\/usr/bin/``) to match it literally.
"""

import logging
import re

from ..errors import InvalidPatternError

logger = logging.getLogger(__name__)

# preg modifiers that have a Python counterpart
_PREG_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}

_DELIMITED = re.compile(r"^([/#~!@%|])(.+)\1([imsxu]*)$", re.DOTALL)


def split_delimited(pattern: str) -> tuple[str, int] | None:
    """Split a ``/body/flags`` pattern into its body and re flags.

    Returns:
        (body, flags), or None if the pattern is not in delimited form.
    """
    match = _DELIMITED.match(pattern)
    if not match:
        return None

    flags = 0
    for modifier in match.group(3):
        flags |= _PREG_FLAGS[modifier]
    return match.group(2), flags


def compile_pattern(pattern: str) -> re.Pattern:
    """Compile an anchor pattern.

    Args:
        pattern: Plain regular expression or ``/body/flags`` delimited form.

    Returns:
        Compiled pattern.

    Raises:
        InvalidPatternError: If the expression does not compile.
    """
    delimited = split_delimited(pattern)
    if delimited is not None:
        body, flags = delimited
        try:
            return re.compile(body, flags)
        except re.error:
            logger.debug(f"Delimited body of {pattern!r} did not compile, trying it as-is")

    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e
