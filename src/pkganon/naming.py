# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Generate deterministic opaque names for packages, tests and directories."""

_BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def package_name(original_name: str) -> str:
    """Build the anonymized package directory name.

    Args:
        original_name: Original package directory name.

    Returns:
        Name in ``package-<hash>`` form.
    """
    return f"package-{_base36(abs(string_hash(original_name)))}"


def anonymized_test_file(original_name: str, index: int) -> str:
    """Build the anonymized file name for the test file at ``index``.

    Args:
        original_name: Original test file name.
        index: Position of the file in the discovery order.

    Returns:
        Name in ``test-<hash>.test.ts`` form.
    """
    return f"test-{_base36(abs(string_hash(f'{original_name}{index}')))}.test.ts"


def anonymized_test_label(index: int) -> str:
    """Build an anonymized ``describe``/``it`` label."""
    return f"test_{_base36(index)}"


def directory_name(original_name: str, index: int) -> str:
    """Build the anonymized directory name for counter value ``index``.

    Args:
        original_name: Original directory name.
        index: Counter value threaded through the directory walk.

    Returns:
        Name in ``dir-<hash>`` form.
    """
    return f"dir-{_base36(abs(string_hash(f'{original_name}{index}')))}"


def string_hash(text: str) -> int:
    """Hash text with the ``(h << 5) - h + unit`` rolling scheme.

    The shift wraps to a signed 32-bit integer on every step while the
    subtraction and addition do not, so the result may leave the 32-bit
    range. Units are UTF-16 code units.

    Args:
        text: Text to hash.

    Returns:
        Signed hash value.
    """
    acc = 0
    for unit in _utf16_units(text):
        acc = _to_int32(_to_int32(acc) << 5) - acc + unit
    return acc


def _utf16_units(text: str) -> list[int]:
    encoded = text.encode("utf-16-le")
    return [
        int.from_bytes(encoded[offset : offset + 2], "little")
        for offset in range(0, len(encoded), 2)
    ]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        return value - 0x100000000
    return value


def _base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36.

    Args:
        value: Non-negative integer.

    Returns:
        Base-36 digits.
    """
    if value == 0:
        return "0"
    chars: list[str] = []
    while value > 0:
        value, remainder = divmod(value, 36)
        chars.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(chars))
