from numpy import array
from numpy.testing import assert_array_equal
from pytest import approx

from spinlab.detect import consensus, match_events

rater1 = [
        {'start': 3, 'end': 9},
        {'start': 20, 'end': 25},
        {'start': 30, 'end': 40},
        {'start': 42, 'end': 42.5},
        {'start': 98.1, 'end': 100},
        {'start': 101, 'end': 106},
        {'start': 110.5, 'end': 111},
          ]
rater2 = [
        {'start': 2, 'end': 10},
        {'start': 21, 'end': 26},
        {'start': 39, 'end': 41},
        {'start': 41, 'end': 42},
        {'start': 42, 'end': 42.3},
        {'start': 102, 'end': 105.7},
          ]


def test_agreement_consensus():
    det1 = array([0, 1, 1, 1, 0, 0], dtype='bool')
    det2 = array([0, 0, 1, 1, 1, 0], dtype='bool')

    assert_array_equal(consensus((det1, det2), 1), [[2, 3]])
    assert_array_equal(consensus((det1, det2), .5), [[1, 4]])


def test_agreement_consensus_none():
    det1 = array([1, 0, 0, 0], dtype='bool')
    det2 = array([0, 0, 0, 1], dtype='bool')

    assert consensus((det1, det2), 1).shape == (0, 2)


def test_agreement_match_events():
    match = match_events(rater1, rater2, 0.5)

    assert match.n_tp == 4
    assert_array_equal(match.fp, [2, 4, 6])
    assert_array_equal(match.fn, [2, 3])
    assert match.precision == approx(4 / 7)
    assert match.recall == approx(4 / 6)
    assert match.f1score == approx(16 / 26)


def test_agreement_match_events_one_to_one():
    # each event is matched at most once
    match = match_events(rater1, rater1, 0.5)
    assert match.n_tp == len(rater1)
    assert (match.tp.sum(axis=0) == 1).all()
    assert (match.tp.sum(axis=1) == 1).all()
    assert match.f1score == approx(1)


def test_agreement_match_events_empty():
    match = match_events([], rater2, 0.5)
    assert match.n_tp == 0
    assert len(match.fn) == len(rater2)
    assert match.recall == 0
    assert match.precision == 0
    assert match.f1score == 0

    match = match_events(rater1, [], 0.5)
    assert len(match.fp) == len(rater1)
    assert match.precision == 0
