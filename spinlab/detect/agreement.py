"""Module for agreement and consensus analysis between raters (human scorers
or detection methods)"""

from numpy import (arange, argmax, asarray, invert, logical_and, maximum,
                   mean, minimum, newaxis, repeat, sum, vstack, where, zeros)

from .events import detect_start_end


class MatchedEvents:
    """Class for storing matched events and producing statistics.

    Parameters
    ----------
    tp : ndarray
        true positives as boolean array of shape len(detection) x len(standard)
    fp : ndarray
        indices of false positives in detection
    fn : ndarray
        indices of false negatives in standard
    detection : list of dict
        list of detected events tested against the standard, with 'start'
        and 'end'
    standard : list of dict
        list of ground-truth events, with 'start' and 'end'
    threshold : float
        minimum intersection-union score for events to be considered
        overlapping
    """
    def __init__(self, tp, fp, fn, detection, standard, threshold):
        self.tp = tp
        self.fp = fp
        self.fn = fn
        self.detection = detection
        self.standard = standard
        self.threshold = threshold
        self.n_tp = sum(tp)
        self.n_fp = len(fp)
        self.n_fn = len(fn)

    @property
    def recall(self):
        tp = self.n_tp
        fn = self.n_fn
        if tp + fn == 0:
            return 0
        return tp / (tp + fn)

    @property
    def precision(self):
        tp = self.n_tp
        fp = self.n_fp
        if tp + fp == 0:
            return 0
        return tp / (tp + fp)

    @property
    def f1score(self):
        recall = self.recall
        precision = self.precision
        if precision + recall == 0:
            return 0
        return 2 * precision * recall / (precision + recall)


def consensus(detections, threshold):
    """Take two or more detection vectors and output the events based on
    consensus.

    Parameters
    ----------
    detections : tuple of ndarray (dtype='bool')
        two or more detection vectors (one value per sample) from different
        raters, all of the same length
    threshold : float
        value between 0 and 1 to threshold consensus. Consensus is computed on
        a per-sample basis: the arithmetic mean is taken per sample across all
        raters, and if this mean reaches 'threshold', the sample is counted as
        belonging to a merged event.

    Returns
    -------
    ndarray (dtype='int')
        N x 2 matrix with start, end samples (inclusive) of the merged events
    """
    positives = vstack([asarray(x, dtype='float') for x in detections])
    agreement = mean(positives, axis=0) >= threshold

    return detect_start_end(agreement)


def match_events(detection, standard, threshold):
    """Find best matches between detected and standard events, by a thresholded
    intersection-union rule.

    Parameters
    ----------
    detection : list of dict
        list of detected events to be tested against the standard, with
        'start' and 'end'
    standard : list of dict
        list of ground-truth events, with 'start' and 'end'
    threshold : float
        minimum intersection-union score to match a pair, between 0 and 1

    Returns
    -------
    instance of MatchedEvents
        indices of true positives, false positives and false negatives, with
        statistics (recall, precision, F1)
    """
    # Vectorize start and end times and set up for broadcasting
    det_beg = asarray([x['start'] for x in detection])[:, newaxis]
    det_end = asarray([x['end'] for x in detection])[:, newaxis]
    std_beg = asarray([x['start'] for x in standard])[newaxis, :]
    std_end = asarray([x['end'] for x in standard])[newaxis, :]

    # Get durations and broadcast them
    det_dur = repeat(det_end - det_beg, len(standard), axis=1)
    std_dur = repeat(std_end - std_beg, len(detection), axis=0)

    # Subtract every end by every start and find overlaps
    det_minus_std = det_end - std_beg  # array of shape (len(det), len(std))
    std_minus_det = std_end - det_beg
    overlapping = logical_and(det_minus_std > 0, std_minus_det > 0)

    # Find intersection and union
    shorter_diff = minimum(det_minus_std, std_minus_det)
    longer_diff = maximum(det_minus_std, std_minus_det)

    shorter_dur = minimum(det_dur, std_dur)
    longer_dur = maximum(det_dur, std_dur)

    interx = minimum(shorter_diff, shorter_dur)
    union = maximum(longer_diff, longer_dur)

    # Compute intersection-union score and set non-overlapping pairs to 0
    iu = interx / union
    iu[invert(overlapping)] = 0

    # Threshold IU score to yield  True Positive candidates
    iu[iu <= threshold] = 0

    # If no events, tp and fp are empty, fn is all events
    if iu.size == 0:
        tp = zeros(iu.shape, dtype=bool)
        fp = arange(len(detection))
        fn = arange(len(standard))
    else:

        # Find full matches, round 1, then remove them from IU
        det_match1 = argmax(iu, axis=1)
        std_match1 = argmax(iu, axis=0)

        tp = zeros(iu.shape, dtype=bool)
        for i, j in enumerate(std_match1):
            if det_match1[j] == i and iu[j, i] > 0:
                tp[j, i] = True
                iu[j, :].fill(0)
                iu[:, i].fill(0)

        # Round 2
        det_match2 = argmax(iu, axis=1)
        std_match2 = argmax(iu, axis=0)

        for i, j in enumerate(std_match2):
            if det_match2[j] == i and iu[j, i] > 0:
                tp[j, i] = True

        # Find false positives and false negatives
        fp = where(invert(tp.any(axis=1)))[0]
        fn = where(invert(tp.any(axis=0)))[0]

    # Store in MatchedEvents class, which computes statistics
    match = MatchedEvents(tp, fp, fn, detection, standard, threshold)

    return match
