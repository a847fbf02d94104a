"""Module to compute the detection threshold on the baseline (NREM) epochs.
"""
from logging import getLogger
from math import ceil

from numpy import asarray, concatenate, empty, isfinite, isin, mean, sort, std

from .filter import filter_zero_phase
from ..datatype import NREM
from ..detect.events import detect_start_end
from ..utils.exceptions import EmptyBaseline, InsufficientDataForFilter

lg = getLogger(__name__)


class PercentileOfRMS:
    """Threshold at one rank of the sorted baseline feature.

    Parameters
    ----------
    percentile : float
        between 0 and 100

    Notes
    -----
    The rank is one more than the exact percentile rank (1-indexed,
    ceil(p * N / 100) + 1), so the threshold is slightly above the exact
    percentile.
    """
    source = 'feature'

    def __init__(self, percentile):
        self.percentile = percentile

    def __repr__(self):
        return 'PercentileOfRMS({})'.format(self.percentile)

    def threshold(self, values):
        values = sort(values)
        n_values = len(values)
        rank = int(ceil(self.percentile * n_values / 100)) + 1
        if rank > n_values:
            lg.warning('Rank {} is beyond the {} baseline values, using the '
                       'largest value'.format(rank, n_values))
            rank = n_values
        return values[rank - 1]


class StdMultiplier:
    """Threshold as a multiple of the standard deviation of the filtered
    baseline signal (amplitude, not the feature).

    Parameters
    ----------
    k : float
        multiplier
    """
    source = 'amplitude'

    def __init__(self, k):
        self.k = k

    def __repr__(self):
        return 'StdMultiplier({})'.format(self.k)

    def threshold(self, values):
        return self.k * std(values, ddof=1)


class MeanEnergyMultiplier:
    """Threshold as a multiple of the mean of the baseline feature.

    Parameters
    ----------
    k : float
        multiplier
    """
    source = 'feature'

    def __init__(self, k):
        self.k = k

    def __repr__(self):
        return 'MeanEnergyMultiplier({})'.format(self.k)

    def threshold(self, values):
        return self.k * mean(values)


def find_baseline(n_samples, stages=None, baseline=None):
    """Define the baseline segments, from sleep stages or given explicitly.

    Parameters
    ----------
    n_samples : int
        length of the recording
    stages : ndarray (dtype='int'), optional
        one sleep stage (ordinal value in STAGES) per sample. The baseline
        is every run of NREM (N2, N3, N4) samples.
    baseline : list of tuple of int, optional
        start and end sample (inclusive) of each baseline segment. They
        should not overlap and they should be in chronological order.

    Returns
    -------
    ndarray (dtype='int')
        N x 2 matrix with start and end samples (inclusive)

    Raises
    ------
    ValueError
        if both or none of stages and baseline are given, if stages does not
        have the same length as the recording, or if the segments are not
        valid
    """
    if (stages is None) == (baseline is None):
        raise ValueError('Specify either the sleep stages or the baseline '
                         'segments')

    if stages is not None:
        stages = asarray(stages)
        if stages.shape != (n_samples, ):
            raise ValueError('There should be one sleep stage per sample ({} '
                             'stages, {} samples)'.format(stages.size,
                                                          n_samples))
        return detect_start_end(isin(stages, NREM))

    segments = asarray(baseline, dtype='int').reshape(-1, 2)
    if (segments[:, 0] > segments[:, 1]).any():
        raise ValueError('Baseline segments should start before they end')
    if (segments[1:, 0] <= segments[:-1, 1]).any():
        raise ValueError('Baseline segments should be disjoint and in '
                         'chronological order')
    if segments.size and (segments[0, 0] < 0 or
                          segments[-1, 1] >= n_samples):
        raise ValueError('Baseline segments should be within the recording')

    return segments


def filter_baseline(dat, s_freq, segments, fir):
    """Filter each baseline segment on its own.

    Parameters
    ----------
    dat : ndarray (dtype='float')
        vector with the raw data for the whole night
    s_freq : float
        sampling frequency
    segments : ndarray (dtype='int')
        N x 2 matrix with start and end samples (inclusive)
    fir : instance of WindowedFIR or EquirippleFIR
        filter design

    Returns
    -------
    list of ndarray
        filtered segments, in chronological order. The segments which are too
        short for the filter are not included.
    int
        number of samples in the segments which were not included
    """
    filtered = []
    n_excluded = 0

    for start, end in segments:
        try:
            filtered.append(filter_zero_phase(dat[start:end + 1], s_freq,
                                              fir))
        except InsufficientDataForFilter as err:
            lg.warning('Excluding baseline segment {}-{}: {}'.format(
                start, end, err))
            n_excluded += err.n_samples

    lg.info('{} baseline segments, {} samples excluded'.format(
        len(segments), n_excluded))
    return filtered, n_excluded


def estimate_threshold(feature, amplitude, policy):
    """Compute the detection threshold on the baseline.

    Parameters
    ----------
    feature : ndarray (dtype='float')
        feature (RMS or energy) on the baseline samples only
    amplitude : ndarray (dtype='float')
        filtered signal on the baseline samples only
    policy : instance of PercentileOfRMS, StdMultiplier, MeanEnergyMultiplier
        how to compute the threshold

    Returns
    -------
    float
        threshold, in the units of the feature

    Raises
    ------
    EmptyBaseline
        if there are no baseline values to compute the threshold on
    """
    if policy.source == 'feature':
        values = feature
    else:
        values = amplitude

    values = asarray(values, dtype='float')
    values = values[isfinite(values)]
    if values.size == 0:
        raise EmptyBaseline('No baseline samples left for ' + repr(policy))

    return policy.threshold(values)


def concatenate_segments(segments):
    """Concatenate the segments in chronological order."""
    if not segments:
        return empty(0)
    return concatenate(segments)
