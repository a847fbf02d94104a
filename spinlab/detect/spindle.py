"""Module to detect spindles.
"""
from logging import getLogger

from numpy import asarray

from .events import (detect_start_end, make_detection, merge_close,
                     remove_duplicate, within_duration)
from ..datatype import TimeSeries
from ..graphoelement import Spindles
from ..trans.baseline import (MeanEnergyMultiplier, PercentileOfRMS,
                              StdMultiplier, concatenate_segments,
                              estimate_threshold, filter_baseline,
                              find_baseline)
from ..trans.feature import _round, fixed_rms, sliding_rms, wavelet_energy
from ..trans.filter import EquirippleFIR, WindowedFIR, filter_zero_phase

lg = getLogger(__name__)
EPOCH_DURATION = 30


class DetectSpindle:
    """Design spindle detection on a single channel.

    Parameters
    ----------
    method : str
        one of the predefined methods ('Martin2013', 'Moelle2011',
        'Wamsley2012')
    duration : tuple of float
        min and max duration of spindles (s)
    det_thresh : float
        percentile (for 'Martin2013') or multiplier of the baseline statistic
        (for the other methods)
    rms_dur : float
        duration of the RMS window (s), not used by 'Wamsley2012'
    min_gap : float
        events whose ends are closer than this are fused (s), only used by
        'Wamsley2012'
    det_filter : instance of WindowedFIR or EquirippleFIR
        bandpass filter applied before computing the feature

    Attributes
    ----------
    det_filter : instance of WindowedFIR or EquirippleFIR or None
        None if the feature does not need a bandpass filter
    feature : dict
        'method' (one of 'fixed_rms', 'sliding_rms', 'wavelet_energy') and the
        parameters of the feature
    det_thresh : instance of PercentileOfRMS, StdMultiplier or
        MeanEnergyMultiplier
        how to compute the threshold on the baseline
    convention : str
        'A' or 'B', how to attribute the first sample of an event, see
        spinlab.detect.events.detect_start_end
    dur_convention : str
        'inclusive' (end - start + 1) or 'interval' (end - start)
    strict_min : bool
        whether the duration should be strictly longer than the minimum
    merge : dict or None
        'min_gap' (s) if close events should be fused
    """
    def __init__(self, method='Martin2013', duration=None, det_thresh=None,
                 rms_dur=None, min_gap=None, det_filter=None):

        self.method = method
        self.merge = None

        if method == 'Martin2013':
            self.det_filter = WindowedFIR(order=500, low=11, high=15)
            self.feature = {'method': 'fixed_rms',
                            'dur': .25,
                            }
            self.det_thresh = PercentileOfRMS(95)
            self.duration = (0.5, 3)
            self.convention = 'A'
            self.dur_convention = 'inclusive'
            self.strict_min = False

        elif method == 'Moelle2011':
            self.det_filter = EquirippleFIR(stop_low=11, pass_low=12,
                                            pass_high=15, stop_high=16,
                                            stop_atten=40, pass_ripple=1)
            self.feature = {'method': 'sliding_rms',
                            'dur': .2,
                            'step': .05,
                            }
            self.det_thresh = StdMultiplier(1.5)
            self.duration = (0.5, 3)
            self.convention = 'A'
            self.dur_convention = 'inclusive'
            self.strict_min = False

        elif method == 'Wamsley2012':
            self.det_filter = None
            self.feature = {'method': 'wavelet_energy',
                            'freq': 13.5,
                            'wavelet': 'cmor1.5-1.0',
                            'smooth': .1,
                            }
            self.det_thresh = MeanEnergyMultiplier(4.5)
            self.duration = (0.3, 3)
            self.convention = 'B'
            self.dur_convention = 'interval'
            self.strict_min = True
            self.merge = {'min_gap': .1}

        else:
            raise ValueError('Unknown method')

        if duration is not None:
            self.duration = duration

        if det_thresh is not None:
            if isinstance(self.det_thresh, PercentileOfRMS):
                self.det_thresh.percentile = det_thresh
            else:
                self.det_thresh.k = det_thresh

        if rms_dur is not None:
            if 'dur' not in self.feature:
                raise ValueError(method + ' does not use RMS')
            self.feature['dur'] = rms_dur

        if min_gap is not None:
            if self.merge is None:
                raise ValueError(method + ' does not merge close events')
            self.merge['min_gap'] = min_gap

        if det_filter is not None:
            self.det_filter = det_filter

    def __repr__(self):
        return ('detsp_{0}_{1:04.1f}-{2:04.1f}s'
                ''.format(self.method, self.duration[0], self.duration[1]))

    def __call__(self, data, stages=None, baseline=None):
        """Detect spindles on the data.

        Parameters
        ----------
        data : instance of TimeSeries
            data used for detection (the whole night)
        stages : ndarray (dtype='int'), optional
            one sleep stage per sample (see spinlab.datatype.STAGES); the
            baseline is every NREM sample
        baseline : list of tuple of int, optional
            start and end sample (inclusive) of each baseline segment

        Returns
        -------
        instance of graphoelement.Spindles
            description of the detected spindles

        Raises
        ------
        EmptyBaseline
            if no baseline sample is left to compute the threshold
        InsufficientDataForFilter
            if the recording is too short for the filter
        """
        if not isinstance(data, TimeSeries):
            raise TypeError('data should be an instance of TimeSeries')
        if len(data) == 0:
            raise ValueError('The recording is empty')

        s_freq = data.s_freq
        dat_orig = data.data
        segments = find_baseline(len(data), stages=stages, baseline=baseline)

        lg.info('Detecting spindles with ' + repr(self))
        if self.det_filter is None:
            dat_det = self.transform(dat_orig, s_freq)
            bl_feat = concatenate_segments(
                [dat_det[start:end + 1] for start, end in segments])
            bl_amp = concatenate_segments(
                [dat_orig[start:end + 1] for start, end in segments])
            n_excluded = 0

        else:
            bl_filt, n_excluded = filter_baseline(dat_orig, s_freq, segments,
                                                  self.det_filter)
            bl_feat = concatenate_segments(
                [self.transform(x, s_freq) for x in bl_filt])
            bl_amp = concatenate_segments(bl_filt)

            dat_filt = filter_zero_phase(dat_orig, s_freq, self.det_filter)
            dat_det = self.transform(dat_filt, s_freq)

        det_value = estimate_threshold(bl_feat, bl_amp, self.det_thresh)
        lg.info('Detection threshold {:.6g} ({})'.format(det_value,
                                                         self.det_thresh))

        events = detect_start_end(dat_det > det_value, self.convention)
        events = within_duration(events, s_freq, self.duration,
                                 self.dur_convention, self.strict_min)

        if self.merge is not None:
            min_gap = _round(self.merge['min_gap'] * s_freq)
            events = merge_close(events, min_gap)

        spindle = Spindles(self.method, s_freq)
        spindle.detection = make_detection(events, len(data))
        spindle.events = remove_duplicate(events)
        spindle.det_value = det_value
        spindle.n_excluded = n_excluded
        spindle.density = (len(spindle) * s_freq * EPOCH_DURATION /
                           len(dat_orig))
        spindle.dat_det = dat_det
        spindle.dat_orig = dat_orig

        lg.info(str(len(spindle)) + ' spindles detected.')
        return spindle

    def transform(self, dat, s_freq):
        """Compute the feature used for detection.

        Parameters
        ----------
        dat : ndarray (dtype='float')
            vector with the (filtered) data
        s_freq : float
            sampling frequency

        Returns
        -------
        ndarray (dtype='float')
            feature, same length as the data
        """
        dat = asarray(dat)
        method = self.feature['method']

        if method == 'fixed_rms':
            return fixed_rms(dat, s_freq, self.feature['dur'])

        if method == 'sliding_rms':
            return sliding_rms(dat, s_freq, self.feature['dur'],
                               self.feature['step'])

        if method == 'wavelet_energy':
            return wavelet_energy(dat, s_freq, self.feature['freq'],
                                  self.feature['wavelet'],
                                  self.feature['smooth'])

        raise ValueError('Unknown feature ' + method)
