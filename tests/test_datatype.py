from pickle import load, dump
from tempfile import NamedTemporaryFile

from numpy import arange, ones
from numpy.testing import assert_array_equal
from pytest import raises

from spinlab import TimeSeries
from spinlab.datatype import STAGES, stages_to_ordinal
from spinlab.utils import create_eeg


def test_pickle_01():
    data = create_eeg(duration=5)

    tmpfile = NamedTemporaryFile(delete=False)
    with tmpfile as f:
        dump(data, f)

    with open(tmpfile.name, 'rb') as f:
        loaded = load(f)

    assert_array_equal(data.data, loaded.data)
    assert loaded.s_freq == data.s_freq


def test_timeseries():
    values = arange(200)
    data = TimeSeries(values, 100)

    assert len(data) == 200
    assert data.duration == 2
    assert data.time[100] == 1
    assert repr(data) == 'TimeSeries(200 samples at 100 Hz)'
    assert data.data.dtype == 'float'


def test_timeseries_read_only():
    """The recording is copied, so that the original values can change but
    the recording stays the same.
    """
    values = ones(10)
    data = TimeSeries(values, 100)

    values[0] = 5
    assert data.data[0] == 1

    with raises(ValueError):
        data.data[0] = 5


def test_timeseries_errors():
    with raises(ValueError):
        TimeSeries(ones((2, 10)), 100)

    with raises(ValueError):
        TimeSeries(ones(10), 0)


def test_stages_to_ordinal():
    stages = stages_to_ordinal(['Wake', 'N2', 'N2', 'REM', 'N3'])
    assert_array_equal(stages, [0, 2, 2, 5, 3])
    assert not stages.flags.writeable

    assert STAGES['N4'] == 4


def test_stages_to_ordinal_unknown():
    with raises(ValueError):
        stages_to_ordinal(['Wake', 'S2'])
