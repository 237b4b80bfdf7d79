import pytest

from sigtalk.protocol import (
    LENGTH_SIZE,
    ProtocolError,
    bits_to_byte,
    byte_to_bits,
    decode_length,
    encode_message,
)


def test_byte_to_bits_most_significant_first():
    assert byte_to_bits(ord("A")) == (0, 1, 0, 0, 0, 0, 0, 1)


@pytest.mark.parametrize("value", range(256))
def test_bits_round_trip(value):
    bits = byte_to_bits(value)
    assert len(bits) == 8
    assert bits_to_byte(bits) == value


def test_signed_byte_matches_unsigned():
    assert byte_to_bits(-1) == byte_to_bits(255)
    assert byte_to_bits(-128) == byte_to_bits(128)


@pytest.mark.parametrize("value", [256, -129])
def test_byte_out_of_range(value):
    with pytest.raises(ProtocolError):
        byte_to_bits(value)


def test_bits_wrong_count():
    with pytest.raises(ProtocolError):
        bits_to_byte([1, 0, 1])


def test_bits_invalid_value():
    with pytest.raises(ProtocolError):
        bits_to_byte([0, 0, 0, 0, 0, 0, 0, 2])


def test_protocol_error_is_value_error():
    with pytest.raises(ValueError):
        bits_to_byte([])


def test_encode_message_layout():
    text = "hello"
    wire = encode_message(text)
    assert wire[LENGTH_SIZE:] == b"hello\0"
    assert decode_length(wire[:LENGTH_SIZE]) == len(text) + 1
    assert len(wire) == LENGTH_SIZE + len(text) + 1


def test_empty_message_length_field():
    assert encode_message("") == b"\x01\x00\x00\x00\0"


def test_encode_bytes_and_utf8():
    text = "héllo"
    wire = encode_message(text)
    payload = text.encode("utf-8")
    assert wire[LENGTH_SIZE:-1] == payload
    assert encode_message(payload) == wire


def test_encode_stops_at_nul():
    assert encode_message("ab\0cd") == encode_message("ab")


def test_decode_negative_length():
    assert decode_length(b"\xff\xff\xff\xff") == -1


@pytest.mark.parametrize("data", [b"", b"\x01\x00\x00", b"\x01\x00\x00\x00\x00"])
def test_decode_length_wrong_size(data):
    with pytest.raises(ProtocolError):
        decode_length(data)