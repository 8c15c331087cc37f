import pytest

from universal_minter.core.constants.base import MAX_UINT256
from universal_minter.core.engine.errors import PriceOverflowError
from universal_minter.core.utils.uint import checked_add, checked_mul, ensure_uint256


def test_ensure_uint256_bounds():
    assert ensure_uint256(0) == 0
    assert ensure_uint256(MAX_UINT256) == MAX_UINT256
    with pytest.raises(PriceOverflowError):
        ensure_uint256(MAX_UINT256 + 1)
    with pytest.raises(ValueError):
        ensure_uint256(-1)


def test_checked_mul_does_not_wrap():
    assert checked_mul(MAX_UINT256, 1) == MAX_UINT256
    with pytest.raises(PriceOverflowError, match="mint value"):
        checked_mul(MAX_UINT256, 2, label="mint value")


def test_checked_add_does_not_wrap():
    assert checked_add(MAX_UINT256 - 1, 1) == MAX_UINT256
    with pytest.raises(PriceOverflowError):
        checked_add(MAX_UINT256, 1)
