import logging

import jax.numpy as jnp
import numpy as np
import pytest
from pydantic import ValidationError

import sirinfer.config as config
from sirinfer.typing import ObservedData

CONTACT_MATRIX = [[4.0, 2.0], [6.0, 5.0]]


def test_default_report_times():
    data = config.SingleGroupData(time_simulation=5, population=1000.0)
    assert jnp.array_equal(data.report_times, jnp.array([1, 2, 3, 4, 5]))
    shifted = config.SingleGroupData(
        time_simulation=3, population=1000.0, initial_time=10.0
    )
    assert jnp.allclose(shifted.report_times, jnp.array([11.0, 12.0, 13.0]))


def test_explicit_time_sequence():
    data = config.SingleGroupData(
        time_simulation=3,
        population=1000.0,
        time_sequence=[0.5, 2.0, 7.0],
    )
    assert jnp.allclose(data.report_times, jnp.array([0.5, 2.0, 7.0]))


@pytest.mark.parametrize(
    "time_sequence",
    [
        [1.0, 2.0],  # wrong length
        [1.0, 1.0, 2.0],  # not strictly increasing
        [3.0, 2.0, 4.0],
        [-1.0, 2.0, 3.0],  # before initial_time
    ],
)
def test_invalid_time_sequence(time_sequence):
    with pytest.raises(ValidationError):
        config.SingleGroupData(
            time_simulation=3,
            population=1000.0,
            time_sequence=time_sequence,
        )


def test_observation_window():
    with pytest.raises(ValidationError):
        config.SingleGroupData(
            time_simulation=2,
            number_data=3,
            population=1000.0,
            observed_cases=[1, 2, 3],
        )
    # observations must cover exactly number_data days
    with pytest.raises(ValidationError):
        config.SingleGroupData(
            time_simulation=5,
            number_data=3,
            population=1000.0,
            observed_cases=[1, 2],
        )


@pytest.mark.parametrize(
    "kwargs",
    [
        {"population": 0.0},
        {"population": 1000.0, "observed_cases": [-1]},
        {"population": 1000.0, "time_simulation": 0},
    ],
)
def test_invalid_single_group_data(kwargs):
    fields = {"time_simulation": 10, "number_data": 1, **kwargs}
    with pytest.raises(ValidationError):
        config.SingleGroupData(**fields)


def test_single_group_with_observed_cases():
    data = config.SingleGroupData(time_simulation=10, population=1000.0)
    observed = data.with_observed_cases(np.array([[1], [3], [4]]))
    assert observed.number_data == 3
    assert observed.observed_cases == [1, 3, 4]
    assert observed.observed.shape == (3, 1)
    assert data.number_data == 0, "original data should be unchanged"
    with pytest.raises(ValidationError):
        data.with_observed_cases(np.arange(11))


def test_two_group_data():
    data = config.TwoGroupData(
        time_simulation=10,
        number_data=2,
        population=(750.0, 250.0),
        contact_matrix=CONTACT_MATRIX,
        observed_cases=([1, 2], [3, 4]),
    )
    assert isinstance(data.observed, ObservedData)
    assert jnp.array_equal(data.observed, jnp.array([[1, 3], [2, 4]]))
    assert data.contact.shape == (2, 2)
    assert jnp.allclose(data.populations, jnp.array([750.0, 250.0]))


def test_two_group_with_observed_cases():
    data = config.TwoGroupData(
        time_simulation=10,
        population=(750.0, 250.0),
        contact_matrix=CONTACT_MATRIX,
    )
    observed = data.with_observed_cases(np.array([[1, 3], [2, 4], [5, 6]]))
    assert observed.number_data == 3
    assert observed.observed_cases == ([1, 2, 5], [3, 4, 6])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"contact_matrix": [[1.0, 2.0, 3.0], [1.0, 2.0, 3.0]]},
        {"contact_matrix": [[1.0, 2.0]]},
        {"contact_matrix": [[-1.0, 2.0], [6.0, 5.0]]},
        {"population": (750.0, -250.0)},
        {"number_data": 2, "observed_cases": ([1, 2], [3])},
    ],
)
def test_invalid_two_group_data(kwargs):
    fields = {
        "time_simulation": 10,
        "population": (750.0, 250.0),
        "contact_matrix": CONTACT_MATRIX,
        **kwargs,
    }
    with pytest.raises(ValidationError):
        config.TwoGroupData(**fields)


def test_contact_matrix_reciprocity(caplog):
    # 750 * 2 == 250 * 6 == 1500
    with caplog.at_level(logging.WARNING, logger="sirinfer"):
        config.TwoGroupData(
            time_simulation=10,
            population=(750.0, 250.0),
            contact_matrix=CONTACT_MATRIX,
        )
    assert "not reciprocal" not in caplog.text
    with caplog.at_level(logging.WARNING, logger="sirinfer"):
        config.TwoGroupData(
            time_simulation=10,
            population=(500.0, 500.0),
            contact_matrix=CONTACT_MATRIX,
        )
    assert "not reciprocal" in caplog.text


def test_simulation_configs():
    data = config.SingleGroupData(time_simulation=10, population=1000.0)
    single_group = config.SingleGroupConfig(data=data)
    assert single_group.solver_params.max_steps == 2000
    assert single_group.priors == config.SingleGroupPriors()
    assert single_group.observation_params.epsilon == 1e-5
    with pytest.raises(ValidationError):
        config.TwoGroupConfig(data=data)
