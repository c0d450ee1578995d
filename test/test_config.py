import pytest
from core.config import DEFAULT_CUTOFF_FREQUENCY, FilterParameters


def test_default_cutoff():
    assert FilterParameters().cutoff_frequency == DEFAULT_CUTOFF_FREQUENCY


def test_from_mapping_parses_form_values():
    assert FilterParameters.from_mapping({"cutoffFreq": "42"}).cutoff_frequency == 42.0
    assert FilterParameters.from_mapping({"cutoffFreq": "12.9"}).cutoff_frequency == 12.0
    assert FilterParameters.from_mapping({"cutoff_frequency": 7.5}).cutoff_frequency == 7.5
    assert FilterParameters.from_mapping({}).cutoff_frequency == DEFAULT_CUTOFF_FREQUENCY
    assert FilterParameters.from_mapping({"cutoffFreq": ""}).cutoff_frequency == DEFAULT_CUTOFF_FREQUENCY


@pytest.mark.parametrize("bad", [-1, "abc", float("nan"), None])
def test_invalid_cutoff_rejected(bad):
    with pytest.raises(ValueError):
        FilterParameters(bad)


def test_from_mapping_rejects_garbage():
    with pytest.raises(ValueError):
        FilterParameters.from_mapping({"cutoffFreq": "fast"})
