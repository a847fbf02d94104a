"""Module contains all the exceptions

"""


class InsufficientDataForFilter(Exception):
    """The segment is too short for zero-phase filtering.

    filtfilt pads both edges with 3 times the filter order, so the signal has
    to be longer than that. The segment is not approximated, it should be
    excluded from any statistics.

    Parameters
    ----------
    n_samples : int
        length of the segment
    min_samples : int
        the segment must be longer than this
    """
    def __init__(self, n_samples, min_samples):
        self.n_samples = n_samples
        self.min_samples = min_samples

    def __str__(self):
        return ('Segment of {} samples is too short for the filter (it needs '
                'more than {} samples)'.format(self.n_samples,
                                              self.min_samples))


class MalformedMask(Exception):
    """The binary mask is not one-dimensional or it is empty.

    """
    def __init__(self, value):
        self.value = value

    def __str__(self):
        return repr(self.value)


class EmptyBaseline(Exception):
    """No baseline samples are left to compute the threshold.

    """
    def __init__(self, value):
        self.value = value

    def __str__(self):
        return repr(self.value)
