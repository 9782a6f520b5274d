import pytest
from hypothesis import given
from hypothesis import strategies as st

from emitter.utils import DEFAULT_ID_LENGTH, ID_ALPHABET, delete_all, generate_id


def test_alphabet_has_64_symbols():
    assert len(set(ID_ALPHABET)) == 64


def test_generate_id_default_length():
    assert len(generate_id()) == DEFAULT_ID_LENGTH == 21


@given(st.integers(min_value=0, max_value=64))
def test_generate_id_uses_alphabet(length):
    result = generate_id(length)
    assert len(result) == length
    assert set(result) <= set(ID_ALPHABET)


def test_generate_id_rejects_negative_length():
    with pytest.raises(ValueError):
        generate_id(-1)


def test_generate_id_is_unlikely_to_collide():
    assert len({generate_id() for _ in range(1000)}) == 1000


def test_delete_all_empties_in_place():
    mapping = {"a": 1, "b": 2, 3: "c"}
    alias = mapping

    delete_all(mapping)

    assert alias == {}
    assert mapping is alias
