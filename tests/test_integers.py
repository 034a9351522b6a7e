import pytest

from corelang import integers


def test_range_boundaries():
    assert integers.is_valid_in_range(integers.MAX_INT)
    assert integers.is_valid_in_range(integers.MIN_INT)
    assert not integers.is_valid_in_range(integers.MAX_INT + 1)
    assert not integers.is_valid_in_range(integers.MIN_INT - 1)


@pytest.mark.parametrize('text', ['0', '42', '-7', '+7', '2147483647', '-2147483648'])
def test_well_formed(text):
    assert integers.is_well_formed_and_in_range(text)
    assert integers.parse(text) == int(text)


@pytest.mark.parametrize('text', ['', '-', '1.5', '12a', ' 3', '2147483648', '-2147483649', 'x'])
def test_malformed_or_out_of_range(text):
    assert not integers.is_well_formed_and_in_range(text)
    with pytest.raises(ValueError):
        integers.parse(text)
