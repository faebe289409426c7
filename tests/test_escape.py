import numpy as np
import pytest

from mandelbrot.escape import NOT_ESCAPED, escape_time, escape_times


@pytest.mark.parametrize("c, expected", [
    (complex(0.0, 0.0), None),
    (complex(0.25, 0.0), None),
    (complex(0.5, 0.0), 5),
    (complex(1.0, 0.0), 3),
    (complex(0.0, 0.25), None),
    (complex(0.0, 0.5), None),
    (complex(0.0, 1.0), None),
])
def test_escape_time(c, expected):
    assert escape_time(c, 10) == expected


def test_far_point_escapes_after_first_update():
    # z starts at 0, so the earliest possible escape is reported at iteration 1
    assert escape_time(complex(3.0, 0.0), 10) == 1
    assert escape_time(complex(0.0, -2.5), 10) == 1


def test_boundary_of_radius_two_does_not_escape_immediately():
    # |z|^2 == 4 is not an escape; c = -2 stays on the real segment forever
    assert escape_time(complex(-2.0, 0.0), 50) is None


def test_limit_bounds_the_iterations():
    assert escape_time(complex(0.5, 0.0), 5) is None
    assert escape_time(complex(0.5, 0.0), 6) == 5
    assert escape_time(complex(3.0, 0.0), 1) is None


def test_escape_times_matches_scalar():
    re_values = np.array([[0.0, 0.25, 0.5, 1.0], [0.0, 0.0, 3.0, -0.5]], dtype=np.float64)
    im_values = np.array([[0.0, 0.0, 0.0, 0.0], [0.25, 1.0, 0.0, 0.1]], dtype=np.float64)

    result = escape_times(re_values, im_values, 10)

    expected = np.array(
        [[NOT_ESCAPED, NOT_ESCAPED, 5, 3], [NOT_ESCAPED, NOT_ESCAPED, 1, NOT_ESCAPED]],
        dtype=np.int32,
    )
    for index in np.ndindex(re_values.shape):
        scalar = escape_time(complex(re_values[index], im_values[index]), 10)
        assert result[index] == (NOT_ESCAPED if scalar is None else scalar)
    np.testing.assert_array_equal(result, expected)


def test_escape_times_on_a_grid():
    rng = np.random.default_rng(7)
    re_values = rng.uniform(-2.0, 0.6, size=(9, 13))
    im_values = rng.uniform(-1.2, 1.2, size=(9, 13))

    result = escape_times(re_values, im_values, 255)

    assert result.dtype == np.int32
    for index in np.ndindex(re_values.shape):
        scalar = escape_time(complex(re_values[index], im_values[index]), 255)
        assert result[index] == (NOT_ESCAPED if scalar is None else scalar)


def test_escape_times_rejects_mismatched_grids():
    with pytest.raises(ValueError):
        escape_times(np.zeros((2, 3)), np.zeros((3, 2)), 10)


def test_escape_times_empty_grid():
    result = escape_times(np.zeros((0, 5)), np.zeros((0, 5)), 10)
    assert result.shape == (0, 5)
