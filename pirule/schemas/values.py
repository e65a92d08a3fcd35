"""Fixed-width encoding of match and parameter values.

Values reach the builders as Python literals and leave as the exact byte
sequence the pipeline expects:

* ``bytes`` for a fixed-width field must already be exactly
  ``ceil(bitwidth / 8)`` bytes long.
* ``int`` values, and ``"0x..."`` hex strings, are big-endian encoded and
  zero-padded to the declared width.
* colon-separated octet strings (``"90:fb:76:00:00:98"``) are taken as
  literal bytes and must match the width exactly.
* string-translated fields (null bitwidth) take ``str`` as UTF-8 or raw
  ``bytes`` of any non-zero length.
"""

from typing import TypeAlias

from pirule.errors import FieldWidthError

Value: TypeAlias = bytes | bytearray | int | str


def byte_width(bitwidth: int) -> int:
    """Number of bytes needed to carry *bitwidth* bits."""
    return (bitwidth + 7) // 8


def _encode_int(name: str, value: int, bitwidth: int) -> bytes:
    if value < 0:
        raise FieldWidthError(name, f"negative value {value} is not allowed")
    if value.bit_length() > bitwidth:
        raise FieldWidthError(name, f"value {value:#x} does not fit in {bitwidth} bits")
    return value.to_bytes(byte_width(bitwidth), "big")


def _encode_bytes(name: str, value: bytes, bitwidth: int) -> bytes:
    width = byte_width(bitwidth)
    if len(value) != width:
        raise FieldWidthError(name, f"expected {width} bytes, got {len(value)}")
    if int.from_bytes(value, "big").bit_length() > bitwidth:
        raise FieldWidthError(name, f"value 0x{value.hex()} does not fit in {bitwidth} bits")
    return value


def _encode_text(name: str, value: str, bitwidth: int) -> bytes:
    text = value.strip()
    if text.lower().startswith("0x"):
        try:
            number = int(text, 16)
        except ValueError as e:
            raise FieldWidthError(name, f"cannot parse '{value}': {e}") from e
        return _encode_int(name, number, bitwidth)
    if ":" in text:
        try:
            octets = bytes.fromhex(text.replace(":", ""))
        except ValueError as e:
            raise FieldWidthError(name, f"cannot parse '{value}': {e}") from e
        return _encode_bytes(name, octets, bitwidth)
    raise FieldWidthError(
        name, f"'{value}' is not a hex (0x...) or colon-separated value for a {bitwidth}-bit field"
    )


def encode_value(name: str, value: Value, bitwidth: int | None) -> bytes:
    """Encode *value* to the byte sequence declared for *name*.

    Args:
        name: Field or parameter identifier (used in error messages).
        value: Literal supplied by the caller.
        bitwidth: Declared width in bits, or None for string-translated values.

    Returns:
        bytes: Canonical encoding of the value.

    Raises:
        FieldWidthError: If the value cannot be represented in the declared width.

    Examples:
        >>> encode_value("src_mac", 0x90FB760098, 48).hex()
        '0090fb760098'
        >>> encode_value("port", "Ethernet32", None)
        b'Ethernet32'
    """
    if isinstance(value, bool):
        raise FieldWidthError(name, "boolean values are not supported")

    if bitwidth is None:
        if isinstance(value, str):
            data = value.encode("utf-8")
        elif isinstance(value, (bytes, bytearray)):
            data = bytes(value)
        else:
            raise FieldWidthError(
                name, f"string-translated value must be str or bytes, got {type(value).__name__}"
            )
        if not data:
            raise FieldWidthError(name, "value cannot be empty")
        return data

    if isinstance(value, (bytes, bytearray)):
        return _encode_bytes(name, bytes(value), bitwidth)
    if isinstance(value, int):
        return _encode_int(name, value, bitwidth)
    if isinstance(value, str):
        return _encode_text(name, value, bitwidth)
    raise FieldWidthError(name, f"unsupported value type {type(value).__name__}")


__all__ = ["Value", "byte_width", "encode_value"]
