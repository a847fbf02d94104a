"""Module contains the data types: the recording and the sleep stages.
"""
from logging import getLogger

from numpy import arange, array

lg = getLogger(__name__)

STAGES = {'Wake': 0,
          'N1': 1,
          'N2': 2,
          'N3': 3,
          'N4': 4,
          'REM': 5,
          }
NREM = (STAGES['N2'], STAGES['N3'], STAGES['N4'])


class TimeSeries:
    """Recording of one channel, for the whole night.

    Parameters
    ----------
    data : ndarray
        vector with the samples
    s_freq : float
        sampling frequency

    Attributes
    ----------
    data : ndarray (dtype='float')
        read-only copy of the samples
    s_freq : float
        sampling frequency

    Notes
    -----
    The data is copied and the copy cannot be written to, so that the same
    recording can be passed to several detectors.
    """
    def __init__(self, data, s_freq):
        data = array(data, dtype='float', copy=True)
        if data.ndim != 1:
            raise ValueError('TimeSeries should have one dimension, not ' +
                             str(data.ndim))
        if s_freq <= 0:
            raise ValueError('Sampling frequency should be positive')

        data.flags.writeable = False
        self.data = data
        self.s_freq = s_freq

    def __len__(self):
        return len(self.data)

    def __repr__(self):
        return 'TimeSeries({0} samples at {1} Hz)'.format(len(self.data),
                                                           self.s_freq)

    @property
    def duration(self):
        return len(self.data) / self.s_freq

    @property
    def time(self):
        """Time of each sample, in s from the beginning."""
        return arange(len(self.data)) / self.s_freq


def stages_to_ordinal(stages):
    """Convert stage names into the ordinal values.

    Parameters
    ----------
    stages : list of str
        one stage name per sample, one of the keys of STAGES

    Returns
    -------
    ndarray (dtype='int')
        read-only vector with one ordinal value per sample

    Raises
    ------
    ValueError
        if one of the names is not a known stage
    """
    try:
        ordinal = array([STAGES[x] for x in stages], dtype='int')
    except KeyError as err:
        raise ValueError('Unknown stage ' + str(err) + ', it should be one of '
                         + ', '.join(STAGES)) from err

    ordinal.flags.writeable = False
    return ordinal
