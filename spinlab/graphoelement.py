"""Module to keep the results of the detection.
"""
from numpy import mean, nanargmax, sqrt, square


class Spindles:
    """Spindles detected on one channel.

    Attributes
    ----------
    method : str
        name of the method used for detection
    s_freq : float
        sampling frequency
    detection : ndarray (dtype='bool')
        one value per sample, True if the sample belongs to a spindle
    events : ndarray (dtype='int')
        N x 2 matrix with start, end samples (inclusive) of each distinct
        spindle
    det_value : float
        detection threshold, in the units of the feature
    n_excluded : int
        number of baseline samples which were too short to be filtered
    density : float
        number of spindles per 30-s epoch
    dat_det : ndarray (dtype='float')
        feature used for detection
    dat_orig : ndarray (dtype='float')
        raw data
    """
    def __init__(self, method=None, s_freq=None):
        self.method = method
        self.s_freq = s_freq
        self.detection = None
        self.events = None
        self.det_value = None
        self.n_excluded = 0
        self.density = None
        self.dat_det = None
        self.dat_orig = None

    def __len__(self):
        return self.events.shape[0]

    def __repr__(self):
        return 'Spindles({0}, {1} events)'.format(self.method,
                                                  self.events.shape[0])

    def to_list(self):
        """Describe each spindle.

        Returns
        -------
        list of dict
            list of all the spindles, with information about start, end,
            peak_time (s), dur (s), peak_val_det (feature units), rms_orig
            (signal units)
        """
        spindles = []
        for start, end in self.events:
            one_det = self.dat_det[start:end + 1]
            i_peak = start + nanargmax(one_det)
            one_spindle = {'start': start / self.s_freq,
                           'end': end / self.s_freq,
                           'dur': (end - start + 1) / self.s_freq,
                           'peak_time': i_peak / self.s_freq,
                           'peak_val_det': self.dat_det[i_peak],
                           'rms_orig': sqrt(mean(square(
                               self.dat_orig[start:end + 1]))),
                           }
            spindles.append(one_spindle)

        return spindles

    def to_events(self):
        """Start and end times (s) of each spindle, for agreement analysis."""
        return [{'start': start / self.s_freq,
                 'end': (end + 1) / self.s_freq} for start, end in self.events]
