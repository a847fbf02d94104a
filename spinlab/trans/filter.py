"""Module to filter the data.
"""
from logging import getLogger
from math import ceil

from numpy import asarray, log10
from scipy.signal import filtfilt, firwin, remez

from ..utils.exceptions import InsufficientDataForFilter

lg = getLogger(__name__)

# Herrmann et al. (1973) coefficients for the length of equiripple filters
HERRMANN_A = (5.309e-3, 7.114e-2, -4.761e-1, -2.66e-3, -5.941e-1, -4.278e-1)
HERRMANN_B = (11.01217, 0.51244)


class WindowedFIR:
    """Bandpass FIR filter with a rectangular window.

    Parameters
    ----------
    order : int
        filter order (number of taps - 1), independent of sampling frequency
    low : float
        low cutoff, in Hz
    high : float
        high cutoff, in Hz
    """
    def __init__(self, order, low, high):
        self.order = order
        self.low = low
        self.high = high

    def __repr__(self):
        return 'WindowedFIR(order={0}, low={1}, high={2})'.format(
            self.order, self.low, self.high)

    def design(self, s_freq):
        """Return the filter coefficients.

        Parameters
        ----------
        s_freq : float
            sampling frequency

        Returns
        -------
        ndarray
            vector with the taps of the filter

        Raises
        ------
        ValueError
            if the cutoff frequency is larger than the Nyquist frequency.
        """
        nyquist = s_freq / 2
        if self.high >= nyquist:
            raise ValueError('cutoff has to be less than Nyquist frequency')

        Wn = asarray((self.low, self.high)) / nyquist
        lg.debug('windowed FIR, order {0: 4}, Wn {1}'.format(self.order,
                                                          str(Wn)))
        return firwin(self.order + 1, Wn, window='boxcar', pass_zero=False)


class EquirippleFIR:
    """Bandpass FIR filter with minimax (Parks-McClellan) design.

    Parameters
    ----------
    stop_low : float
        upper edge of the lower stopband, in Hz
    pass_low : float
        lower edge of the passband, in Hz
    pass_high : float
        upper edge of the passband, in Hz
    stop_high : float
        lower edge of the upper stopband, in Hz
    stop_atten : float
        attenuation in the stopbands, in dB
    pass_ripple : float
        ripple in the passband, in dB

    Notes
    -----
    The order depends on the sampling frequency, because the transition bands
    are fixed in Hz.
    """
    def __init__(self, stop_low, pass_low, pass_high, stop_high,
                 stop_atten, pass_ripple):
        self.stop_low = stop_low
        self.pass_low = pass_low
        self.pass_high = pass_high
        self.stop_high = stop_high
        self.stop_atten = stop_atten
        self.pass_ripple = pass_ripple

    def __repr__(self):
        return ('EquirippleFIR({0}-{1}-{2}-{3} Hz, {4} dB, {5} dB)'
                ''.format(self.stop_low, self.pass_low, self.pass_high,
                          self.stop_high, self.stop_atten, self.pass_ripple))

    @property
    def freqs(self):
        return (self.stop_low, self.pass_low, self.pass_high, self.stop_high)

    @property
    def deviations(self):
        """Deviations for stopband, passband, stopband (linear units)."""
        dev_stop = 10 ** (-self.stop_atten / 20)
        ripple = 10 ** (self.pass_ripple / 20)
        dev_pass = (ripple - 1) / (ripple + 1)
        return (dev_stop, dev_pass, dev_stop)

    def design(self, s_freq):
        """Return the filter coefficients.

        Parameters
        ----------
        s_freq : float
            sampling frequency

        Returns
        -------
        ndarray
            vector with the taps of the filter
        """
        nyquist = s_freq / 2
        if self.stop_high >= nyquist:
            raise ValueError('cutoff has to be less than Nyquist frequency')

        order, bands, amps, weights = remezord(self.freqs, (0, 1, 0),
                                               self.deviations, s_freq)
        lg.debug('equiripple FIR, order {0: 4}, weights {1}'.format(
            order, str(weights)))
        return remez(order + 1, bands, amps, weight=weights, fs=s_freq)


def remezord(freqs, amps, deviations, s_freq):
    """Estimate the order of an equiripple filter.

    Parameters
    ----------
    freqs : tuple of float
        band edges, in Hz, without 0 and Nyquist
    amps : tuple of float
        desired amplitude in each band
    deviations : tuple of float
        maximum deviation in each band
    s_freq : float
        sampling frequency

    Returns
    -------
    int
        filter order
    ndarray
        band edges, in Hz, including 0 and Nyquist (for remez)
    ndarray
        desired amplitude in each band
    ndarray
        weights for each band

    Notes
    -----
    Each transition band uses the Herrmann formula, with the deviation of the
    band with amplitude as delta1 and the neighboring band as delta2. The
    longest estimate wins.
    """
    freqs = asarray(freqs, dtype=float)
    amps = asarray(amps, dtype=float)
    deviations = asarray(deviations, dtype=float)

    if len(freqs) != 2 * len(amps) - 2:
        raise ValueError('There should be two band edges for each '
                         'transition band')
    if any(freqs[1:] <= freqs[:-1]):
        raise ValueError('Band edges must be strictly increasing')

    deviations = deviations / (amps + (amps == 0))
    norm_freqs = freqs / s_freq
    f1 = norm_freqs[0::2]
    f2 = norm_freqs[1::2]

    L = 0
    for i in range(1, len(amps) - 1):
        L1 = _herrmann(f1[i - 1], f2[i - 1], deviations[i], deviations[i - 1])
        L2 = _herrmann(f1[i], f2[i], deviations[i], deviations[i + 1])
        L = max(L, L1, L2)
    order = int(ceil(L)) - 1

    bands = [0, ] + list(freqs) + [s_freq / 2, ]
    weights = max(deviations) / deviations

    return order, asarray(bands), amps, weights


def _herrmann(freq1, freq2, delta1, delta2):
    a = HERRMANN_A
    b = HERRMANN_B
    d1 = log10(delta1)
    d2 = log10(delta2)

    dinf = (d2 * (a[0] * d1 ** 2 + a[1] * d1 + a[2]) +
            (a[3] * d1 ** 2 + a[4] * d1 + a[5]))
    ff = b[0] + b[1] * (d1 - d2)
    df = abs(freq2 - freq1)

    return dinf / df - ff * df + 1


def filter_zero_phase(dat, s_freq, fir):
    """Design the FIR filter and apply it forward and backward.

    Parameters
    ----------
    dat : ndarray (dtype='float')
        vector with the data
    s_freq : float
        sampling frequency
    fir : instance of WindowedFIR or EquirippleFIR
        filter design

    Returns
    -------
    ndarray (dtype='float')
        filtered data, same length as input

    Raises
    ------
    InsufficientDataForFilter
        if the data is not longer than 3 times the filter order
    """
    b = fir.design(s_freq)
    order = len(b) - 1
    padlen = 3 * order

    if len(dat) <= padlen:
        raise InsufficientDataForFilter(len(dat), padlen)

    return filtfilt(b, 1, dat, padlen=padlen)
