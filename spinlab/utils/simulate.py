from logging import getLogger

from numpy import (abs, angle, arange, exp, full, hanning, linspace, pi, real,
                   sin, std, zeros)
# numpy.random.random has an empty __module__ and sphinx autodoc adds it to api
from numpy import random
from numpy.fft import fft, ifft

from ..datatype import STAGES, TimeSeries


lg = getLogger(__name__)


def create_eeg(duration=60, s_freq=100, spindles=None, amplitude=10,
               sp_amplitude=50, sp_freq=13, sp_dur=1, color=1):
    """Create one channel of EEG, with spindles at known times.

    Parameters
    ----------
    duration : float
        duration of the recording (s)
    s_freq : int
        sampling frequency
    spindles : list of float
        time (s) of the middle of each spindle
    amplitude : float
        standard deviation of the background noise
    sp_amplitude : float
        peak amplitude of the spindles
    sp_freq : float
        frequency of the spindles (Hz)
    sp_dur : float
        duration of each spindle (s)
    color : float
        noise color to generate (white noise is 0, pink is 1, brown is 2).

    Returns
    -------
    instance of TimeSeries
        simulated recording

    Notes
    -----
    Spindles are sine waves with a Hann envelope, added to the noise.
    """
    n_samples = int(duration * s_freq)

    values = random.randn(n_samples)
    values = _color_noise(values, s_freq, color)
    values = values / std(values) * amplitude

    if spindles is not None:
        sp_samples = int(sp_dur * s_freq)
        t = arange(sp_samples) / s_freq
        one_spindle = sp_amplitude * hanning(sp_samples) * sin(
            2 * pi * sp_freq * t)

        for one_time in spindles:
            start = int(one_time * s_freq) - sp_samples // 2
            if start < 0 or start + sp_samples > n_samples:
                raise ValueError('Spindle at {}s does not fit in the '
                                 'recording'.format(one_time))
            values[start:start + sp_samples] += one_spindle

    return TimeSeries(values, s_freq)


def create_stages(n_samples, s_freq=100, epochs=None, epoch_dur=30):
    """Create sleep stages, one value per sample.

    Parameters
    ----------
    n_samples : int
        number of samples in the recording
    s_freq : int
        sampling frequency
    epochs : list of str
        one stage name per epoch (see spinlab.datatype.STAGES). If None, all
        the recording is N2. If there are fewer epochs than needed, the last
        samples are 'Wake'
    epoch_dur : float
        duration of each epoch (s)

    Returns
    -------
    ndarray (dtype='int')
        one stage (ordinal value) per sample
    """
    if epochs is None:
        return full(n_samples, STAGES['N2'], dtype='int')

    stages = full(n_samples, STAGES['Wake'], dtype='int')
    epoch_samples = int(epoch_dur * s_freq)
    for i, one_stage in enumerate(epochs):
        stages[i * epoch_samples:(i + 1) * epoch_samples] = STAGES[one_stage]

    return stages


def _color_noise(x, s_freq, coef=0):
    """Add some color to the noise by changing the power spectrum.

    Parameters
    ----------
    x : ndarray
        one vector of the original signal
    s_freq : int
        sampling frequency
    coef : float
        coefficient to apply (0 -> white noise, 1 -> pink, 2 -> brown,
                              -1 -> blue)

    Returns
    -------
    ndarray
        one vector of the colored noise.
    """
    # convert to freq domain
    y = fft(x)
    ph = angle(y)
    m = abs(y)

    # frequencies for each fft value
    freq = linspace(0, s_freq / 2, len(m) // 2 + 1)
    freq = freq[1:-1]

    # create new power spectrum
    m1 = zeros(len(m))
    # leave zero alone, and multiply the rest by the function
    m1[1:len(m) // 2] = m[1:len(m) // 2] * f(freq[:len(m) // 2 - 1], coef)
    # simmetric around nyquist freq
    m1[len(m1) // 2 + 1:] = m1[1:(len(m1) + 1) // 2][::-1]

    # reconstruct the signal
    y1 = m1 * exp(1j * ph)
    return real(ifft(y1))


def f(x, coef):
    """Create an almost-linear function to apply to the power spectrum.

    Parameters
    ----------
    x : ndarray
        vector with the frequency values
    coef : float
        coefficient to apply (0 -> white noise, 1 -> pink, 2 -> brown,
                              -1 -> blue)

    Returns
    -------
    ndarray
        vector to multiply with the other frequencies

    Notes
    -----
    No activity in the frequencies below .1, to avoid huge distorsions.
    """
    y = 1 / (x ** coef)
    y[x < .1] = 0
    return y
