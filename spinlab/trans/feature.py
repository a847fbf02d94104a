"""Module to compute the detection features (RMS and wavelet energy).
"""
from logging import getLogger
from math import floor

from numpy import arange, empty, full, mean, nan, ones, real, sqrt, square
from pywt import central_frequency, cwt
from scipy.signal import fftconvolve

lg = getLogger(__name__)


def fixed_rms(dat, s_freq, dur):
    """Root-mean-square in consecutive, non-overlapping windows.

    Parameters
    ----------
    dat : ndarray (dtype='float')
        vector with the filtered data
    s_freq : float
        sampling frequency
    dur : float
        duration of each window (s)

    Returns
    -------
    ndarray (dtype='float')
        RMS of each window, repeated for every sample of the window

    Notes
    -----
    If the last window is not longer than half a window, it takes the RMS of
    the window before it, instead of its own.
    """
    win = _round(dur * s_freq)
    lendat = len(dat)
    n_win = lendat // win
    rest = lendat - n_win * win
    lg.debug('RMS in {} windows of {} samples, last one {}'.format(n_win, win,
                                                                  rest))

    rms = empty(lendat)
    for i in range(n_win):
        one_win = slice(i * win, (i + 1) * win)
        rms[one_win] = sqrt(mean(square(dat[one_win])))

    if rest:
        last = slice(n_win * win, lendat)
        if rest > _round(win / 2) or n_win == 0:
            rms[last] = sqrt(mean(square(dat[last])))
        else:
            rms[last] = rms[n_win * win - 1]

    return rms


def sliding_rms(dat, s_freq, dur, step):
    """Root-mean-square in a window which slides with a fixed hop.

    Parameters
    ----------
    dat : ndarray (dtype='float')
        vector with the filtered data
    s_freq : float
        sampling frequency
    dur : float
        duration of the window (s)
    step : float
        hop between two consecutive centers (s)

    Returns
    -------
    ndarray (dtype='float')
        RMS at each center, held until the next center. Samples closer than
        half a window to the edges are NaN.
    """
    win = _round(dur * s_freq)
    halfwin = win // 2
    hop = _round(step * s_freq)
    if hop < 1 or hop >= halfwin:
        raise ValueError('The hop ({} samples) should be positive and shorter '
                         'than half of the window ({} samples)'
                         ''.format(hop, halfwin))

    lendat = len(dat)
    stop = lendat - win + halfwin + 1
    centers = arange(halfwin, stop, hop)

    rms = full(lendat, nan)
    for c in centers:
        one_win = dat[c - halfwin:c - halfwin + win]
        rms[c:min(c + hop, stop)] = sqrt(mean(square(one_win)))

    return rms


def wavelet_energy(dat, s_freq, freq, wavelet, smooth):
    """Energy of the complex wavelet coefficients at one scale, smoothed.

    Parameters
    ----------
    dat : ndarray (dtype='float')
        vector with the data
    s_freq : float
        sampling frequency
    freq : float
        frequency of interest, it defines the scale of the wavelet
    wavelet : str
        name of the complex wavelet in pywt (f.e. 'cmor1.5-1.0')
    smooth : float
        duration of the moving average (s)

    Returns
    -------
    ndarray (dtype='float')
        smoothed energy

    Notes
    -----
    The energy is the square of the real part of the squared coefficients.
    It is not the squared magnitude, so it oscillates at twice the frequency
    before smoothing.
    """
    scale = central_frequency(wavelet) * s_freq / freq
    lg.debug('Wavelet {} at {} Hz, scale {:.3f}'.format(wavelet, freq, scale))

    coef, _ = cwt(dat, [scale, ], wavelet, method='fft')
    energy = real(coef[0] ** 2) ** 2

    return moving_avg(energy, s_freq, smooth)


def moving_avg(dat, s_freq, dur):
    """Centered moving average.

    Parameters
    ----------
    dat : ndarray (dtype='float')
        vector with the data
    s_freq : float
        sampling frequency
    dur : float
        duration of the window (s)

    Returns
    -------
    ndarray (dtype='float')
        smoothed data, same length as input
    """
    flat = ones(_round(dur * s_freq))
    return fftconvolve(dat, flat / sum(flat), mode='same')


def _round(x):
    """Round half away from zero, for positive values (not banker's)."""
    return int(floor(x + 0.5))
