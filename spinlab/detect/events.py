"""Module to go from a binary mask to events and back.

Events are N x 2 matrices (dtype='int') with start and end samples. Both
start and end are inclusive (not python convention, but it's how the
duration conventions of the published methods are defined).
"""
from logging import getLogger

from numpy import asarray, concatenate, diff, empty, ones, where, zeros

from ..utils.exceptions import MalformedMask

lg = getLogger(__name__)

CONVENTIONS = ('A', 'B')
DURATIONS = ('inclusive', 'interval')


def detect_start_end(mask, convention='A'):
    """From a binary mask, return the intervals of True values.

    Parameters
    ----------
    mask : ndarray (dtype='bool')
        vector with bool (or 0 / 1) values
    convention : str
        'A' or 'B', see Notes

    Returns
    -------
    ndarray (dtype='int')
        N x 2 matrix with start and end samples (inclusive). If there are no
        events, the matrix has shape (0, 2).

    Raises
    ------
    MalformedMask
        if the mask is not a non-empty vector

    Notes
    -----
    When the mask starts with True, the first event starts at sample 0. With
    convention 'A', the other starts are the first True sample after a False
    sample. With convention 'B', the start of the first event after the one
    at sample 0 is moved one sample earlier. The two conventions differ only
    when the mask starts with True.
    """
    if convention not in CONVENTIONS:
        raise ValueError('convention should be one of ' +
                         ', '.join(CONVENTIONS))

    mask = asarray(mask)
    if mask.ndim != 1 or mask.shape[0] == 0:
        raise MalformedMask('mask should be a non-empty vector, not an array '
                            'of shape ' + str(mask.shape))

    true_values = asarray(mask != 0, dtype='int')
    cross_threshold = diff(true_values)

    event_starts = where(cross_threshold == 1)[0] + 1
    event_ends = where(cross_threshold == -1)[0]

    if true_values[0]:
        if convention == 'B' and len(event_starts):
            event_starts[0] -= 1
        event_starts = concatenate(([0], event_starts))

    if true_values[-1]:
        event_ends = concatenate((event_ends, [len(true_values) - 1]))

    events = empty((len(event_starts), 2), dtype='int')
    events[:, 0] = event_starts
    events[:, 1] = event_ends

    return events


def within_duration(events, s_freq, limits, convention='inclusive',
                    strict_min=False):
    """Check whether event is within duration limits.

    Parameters
    ----------
    events : ndarray (dtype='int')
        N x 2 matrix with start, end samples
    s_freq : float
        sampling frequency
    limits : tuple of float
        low and high limit for spindle duration (s). None is not checked.
    convention : str
        'inclusive' (end - start + 1, number of samples) or 'interval'
        (end - start, number of intervals between samples)
    strict_min : bool
        if True, the duration should be longer than the low limit, otherwise
        longer than or equal to

    Returns
    -------
    ndarray (dtype='int')
        N x 2 matrix with start, end samples
    """
    if convention not in DURATIONS:
        raise ValueError('convention should be one of ' +
                         ', '.join(DURATIONS))

    dur = events[:, 1] - events[:, 0]
    if convention == 'inclusive':
        dur = dur + 1

    keep = ones(events.shape[0], dtype='bool')

    if limits[0] is not None:
        min_dur = limits[0] * s_freq
        if strict_min:
            keep &= dur > min_dur
        else:
            keep &= dur >= min_dur

    if limits[1] is not None:
        keep &= dur <= limits[1] * s_freq

    lg.debug('{} of {} events within duration'.format(keep.sum(),
                                                       events.shape[0]))
    return events[keep, :]


def merge_close(events, min_gap):
    """Fuse events whose end is close to the end of the previous event.

    Parameters
    ----------
    events : ndarray (dtype='int')
        N x 2 matrix with start, end samples, sorted
    min_gap : int
        if the distance between the end of one event and the end of the
        previous event is this or less, the two events are fused (samples)

    Returns
    -------
    ndarray (dtype='int')
        N x 2 matrix with start, end samples. The number of events does not
        change: all the events which were fused are identical.

    Notes
    -----
    The distance is computed between the two ends, not between the end of
    the previous event and the start of the next one.
    """
    merged = events.copy()

    i_group = 0
    for i in range(1, merged.shape[0]):
        if merged[i, 1] - merged[i - 1, 1] <= min_gap:
            merged[i_group:i + 1, :] = merged[i_group, 0], merged[i, 1]
        else:
            i_group = i

    return merged


def remove_duplicate(events):
    """Remove identical adjacent events.

    Parameters
    ----------
    events : ndarray (dtype='int')
        N x 2 matrix with start, end samples

    Returns
    -------
    ndarray (dtype='int')
        N x 2 matrix with start, end samples, without duplicates
    """
    if events.shape[0] == 0:
        return events

    diff_events = diff(events, axis=0)
    dupl = (diff_events[:, 0] == 0) & (diff_events[:, 1] == 0)
    if dupl.any():
        lg.debug('Removing ' + str(dupl.sum()) + ' duplicate events')

    keep = concatenate(([True], ~dupl))
    return events[keep, :]


def make_detection(events, n_samples):
    """Convert events into a binary vector.

    Parameters
    ----------
    events : ndarray (dtype='int')
        N x 2 matrix with start, end samples (inclusive)
    n_samples : int
        length of the recording

    Returns
    -------
    ndarray (dtype='bool')
        read-only vector, True for the samples which belong to an event
    """
    detection = zeros(n_samples, dtype='bool')
    for start, end in events:
        detection[start:end + 1] = True

    detection.flags.writeable = False
    return detection
