import pytest

from letrule.errors import StreamExhausted
from letrule.stream import TokenStream, token_kind


def test_shift_pops_front_in_order() -> None:
    stream = TokenStream(["a", "b", "c"])
    assert stream.shift() == "a"
    assert stream.shift() == "b"
    assert stream.position == 2
    assert len(stream) == 1
    assert stream.last == "b"


def test_shift_on_exhausted_stream_raises() -> None:
    stream = TokenStream(["a"])
    stream.shift()
    with pytest.raises(StreamExhausted) as err:
        stream.shift("some_rule")
    assert err.value.rule == "some_rule"
    assert not stream


def test_peek_does_not_consume() -> None:
    stream = TokenStream(["a", "b"])
    assert stream.peek() == "a"
    assert stream.peek() == "a"
    assert stream.position == 0
    assert TokenStream([]).peek() is None


def test_buffer_is_a_copy_of_the_input() -> None:
    toks = ["a", "b"]
    stream = TokenStream(toks)
    stream.shift()
    toks.append("c")
    assert toks == ["a", "b", "c"]
    assert stream.remaining() == ("b",)
    assert stream.consumed() == ("a",)


def test_from_text_keeps_source_and_ends_with_eof() -> None:
    stream = TokenStream.from_text("let x")
    assert stream.source == "let x"
    assert [token_kind(t) for t in stream] == ["let", "IDENT", "EOF"]


def test_token_kind_of_strings_and_tokens() -> None:
    stream = TokenStream.from_text("=")
    assert token_kind(stream.peek()) == "="
    assert token_kind("\n") == "\n"


def test_repr_shows_front() -> None:
    stream = TokenStream(["let", "x", "=", "5", "+", "1", "EOF"])
    stream.shift()
    assert repr(stream) == "TokenStream(pos=1, left=6, front=['x', '=', '5', '+', '1', ...])"


def test_shift_failure_does_not_claim_a_count() -> None:
    stream = TokenStream(["a", "b"])
    stream.shift()
    stream.shift()
    with pytest.raises(StreamExhausted) as err:
        stream.shift("host_rule")
    assert err.value.consumed is None
    assert str(err.value) == "Token stream exhausted in 'host_rule'"
