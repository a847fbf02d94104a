from numpy import arange, concatenate, isnan, ones, pi, sin
from numpy.testing import assert_array_almost_equal, assert_array_equal
from pytest import approx, raises

from spinlab.trans import fixed_rms, moving_avg, sliding_rms, wavelet_energy


S_FREQ = 100


def _steps(*values_lengths):
    return concatenate([ones(n) * v for v, n in values_lengths])


def test_fixed_rms():
    dat = sin(2 * pi * 10 * arange(0, 1, 1 / S_FREQ))  # 100 samples
    rms = fixed_rms(dat, S_FREQ, .25)

    assert rms.shape == dat.shape
    assert_array_almost_equal(rms, ones(100) * 0.5 ** .5)


def test_fixed_rms_windows():
    dat = _steps((1, 25), (-2, 25), (3, 25))
    rms = fixed_rms(dat, S_FREQ, .25)
    assert_array_equal(rms, _steps((1, 25), (2, 25), (3, 25)))


def test_fixed_rms_short_last_window():
    # window is 25 samples, the last window reuses the previous value if it
    # is not longer than 13 samples (12.5 rounded half up)
    dat = _steps((1, 25), (2, 25), (5, 13))
    rms = fixed_rms(dat, S_FREQ, .25)
    assert_array_equal(rms[-13:], 2)


def test_fixed_rms_long_last_window():
    dat = _steps((1, 25), (2, 25), (5, 14))
    rms = fixed_rms(dat, S_FREQ, .25)
    assert_array_equal(rms[-14:], 5)


def test_fixed_rms_shorter_than_window():
    dat = _steps((-4, 10))
    assert_array_equal(fixed_rms(dat, S_FREQ, .25), 4)


def test_sliding_rms():
    dat = ones(100) * -3
    rms = sliding_rms(dat, S_FREQ, .2, .05)

    # window is 20 samples, the first center is at sample 10, the last at 90
    assert isnan(rms[:10]).all()
    assert_array_equal(rms[10:91], 3)
    assert isnan(rms[91:]).all()


def test_sliding_rms_hold():
    dat = _steps((1, 40), (2, 60))
    rms = sliding_rms(dat, S_FREQ, .2, .05)

    # center 30 uses samples 20-39, center 35 uses samples 25-44
    assert rms[30] == 1
    assert rms[34] == 1
    assert rms[35] == approx(((15 + 5 * 4) / 20) ** .5)
    assert rms[55] == 2


def test_sliding_rms_too_short():
    rms = sliding_rms(ones(15), S_FREQ, .2, .05)
    assert isnan(rms).all()


def test_sliding_rms_hop():
    with raises(ValueError):
        sliding_rms(ones(100), S_FREQ, .2, .1)


def test_moving_avg():
    dat = ones(200) * 2
    smooth = moving_avg(dat, S_FREQ, .1)

    assert smooth.shape == dat.shape
    assert_array_almost_equal(smooth[10:-10], 2)


def test_wavelet_energy():
    t = arange(0, 20, 1 / S_FREQ)
    energy_in = wavelet_energy(sin(2 * pi * 13.5 * t), S_FREQ, 13.5,
                               'cmor1.5-1.0', .1)
    energy_out = wavelet_energy(sin(2 * pi * 4 * t), S_FREQ, 13.5,
                                'cmor1.5-1.0', .1)

    assert energy_in.shape == t.shape
    assert (energy_in >= -1e-9).all()
    assert energy_in[500:-500].mean() > 100 * energy_out[500:-500].mean()
