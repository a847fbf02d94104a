from numpy import arange, array, nan, ones, std
from numpy.random import permutation, seed
from numpy.testing import assert_array_equal
from pytest import approx, raises

from spinlab.trans import (MeanEnergyMultiplier, PercentileOfRMS,
                           StdMultiplier, WindowedFIR, estimate_threshold,
                           filter_baseline, find_baseline)
from spinlab.utils import EmptyBaseline, create_eeg


seed(0)
S_FREQ = 100


def test_percentile_of_rms():
    values = permutation(arange(1, 101))
    threshold = estimate_threshold(values, None, PercentileOfRMS(95))
    assert threshold == 96


def test_percentile_of_rms_beyond_last():
    values = arange(1, 11)
    threshold = estimate_threshold(values, None, PercentileOfRMS(95))
    assert threshold == 10


def test_std_multiplier():
    amplitude = array([1., 2, 3, 4])
    threshold = estimate_threshold(ones(4) * 100, amplitude, StdMultiplier(2))
    assert threshold == approx(2 * std(amplitude, ddof=1))


def test_mean_energy_multiplier():
    feature = array([1., 2, 3, 6])
    threshold = estimate_threshold(feature, None, MeanEnergyMultiplier(4.5))
    assert threshold == approx(13.5)


def test_threshold_ignores_nan():
    feature = array([nan, 1., 3, nan])
    threshold = estimate_threshold(feature, None, MeanEnergyMultiplier(1))
    assert threshold == approx(2)


def test_empty_baseline():
    with raises(EmptyBaseline):
        estimate_threshold(array([]), None, PercentileOfRMS(95))

    with raises(EmptyBaseline):
        estimate_threshold(array([nan, nan]), None, MeanEnergyMultiplier(1))

    with raises(EmptyBaseline):
        estimate_threshold(ones(10), array([]), StdMultiplier(1.5))


def test_find_baseline_stages():
    stages = array([0, 2, 2, 5, 3, 3, 3, 0, 4])
    segments = find_baseline(len(stages), stages=stages)
    assert_array_equal(segments, [[1, 2], [4, 6], [8, 8]])


def test_find_baseline_no_nrem():
    stages = array([0, 1, 5, 5])
    segments = find_baseline(len(stages), stages=stages)
    assert segments.shape == (0, 2)


def test_find_baseline_segments():
    segments = find_baseline(100, baseline=[(0, 9), (20, 49)])
    assert_array_equal(segments, [[0, 9], [20, 49]])

    segments = find_baseline(100, baseline=[])
    assert segments.shape == (0, 2)


def test_find_baseline_errors():
    with raises(ValueError):
        find_baseline(10)

    with raises(ValueError):
        find_baseline(10, stages=ones(10), baseline=[(0, 5)])

    with raises(ValueError):
        find_baseline(10, stages=ones(9))

    with raises(ValueError):
        find_baseline(100, baseline=[(20, 49), (0, 9)])

    with raises(ValueError):
        find_baseline(100, baseline=[(0, 20), (20, 49)])

    with raises(ValueError):
        find_baseline(100, baseline=[(9, 0)])

    with raises(ValueError):
        find_baseline(100, baseline=[(90, 100)])


def test_filter_baseline():
    data = create_eeg(duration=40, s_freq=S_FREQ)
    fir = WindowedFIR(order=100, low=11, high=15)
    segments = array([[0, 999], [1100, 1200], [2000, 3999]])

    filtered, n_excluded = filter_baseline(data.data, S_FREQ, segments, fir)

    assert len(filtered) == 2
    assert len(filtered[0]) == 1000
    assert len(filtered[1]) == 2000
    assert n_excluded == 101


def test_filter_baseline_all_short():
    data = create_eeg(duration=10, s_freq=S_FREQ)
    fir = WindowedFIR(order=100, low=11, high=15)
    segments = array([[0, 99], [200, 299]])

    filtered, n_excluded = filter_baseline(data.data, S_FREQ, segments, fir)
    assert filtered == []
    assert n_excluded == 200
