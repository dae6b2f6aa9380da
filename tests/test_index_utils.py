"""Tests for index and path normalization helpers."""

import pytest
import numpy as np
from infinite_matrix.errors import InvalidIndexError, ValidationError
from infinite_matrix.utils import normalize_index, normalize_path


class TestNormalizeIndex:

    @pytest.mark.parametrize("index,expected", [
        (0, 0),
        (7, 7),
        (np.int64(12), 12),
        (np.uint8(3), 3),
        (10 ** 30, 10 ** 30),
    ])
    def test_valid(self, index, expected):
        result = normalize_index(index)
        assert result == expected
        assert type(result) is int

    def test_negative(self):
        with pytest.raises(InvalidIndexError) as excinfo:
            normalize_index(-5)
        assert excinfo.value.index == -5
        assert isinstance(excinfo.value, IndexError)

    @pytest.mark.parametrize("index", [False, 2.0, "1", None, [1]])
    def test_not_an_integer(self, index):
        with pytest.raises(ValidationError):
            normalize_index(index)


class TestNormalizePath:

    @pytest.mark.parametrize("path,expected", [
        (3, (3,)),
        ((1, 2), (1, 2)),
        ([4, 5, 6], (4, 5, 6)),
        (np.array([7, 8]), (7, 8)),
        (np.int32(9), (9,)),
        (range(3), (0, 1, 2)),
    ])
    def test_valid(self, path, expected):
        assert normalize_path(path) == expected

    def test_empty(self):
        with pytest.raises(ValidationError):
            normalize_path(())

    def test_string_rejected(self):
        with pytest.raises(ValidationError):
            normalize_path("12")

    def test_negative_component(self):
        with pytest.raises(InvalidIndexError):
            normalize_path((1, -2))
