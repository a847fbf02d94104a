from numpy import abs, std
from numpy.random import seed
from pytest import approx, raises

from spinlab.utils import create_eeg, create_stages


seed(0)


def test_import():
    import spinlab
    assert isinstance(spinlab.__version__, str)


def test_simulate_eeg():
    data = create_eeg(duration=30, s_freq=200, amplitude=5)
    assert len(data) == 6000
    assert data.s_freq == 200
    assert std(data.data) == approx(5)


def test_simulate_eeg_spindles():
    seed(0)
    data = create_eeg(duration=30, spindles=(10, ), sp_amplitude=100,
                      sp_dur=1, color=0)
    seed(0)
    noise = create_eeg(duration=30, color=0)

    diff = data.data - noise.data
    assert abs(diff[950:1050]).max() > 50
    assert abs(diff[:950]).max() == 0
    assert abs(diff[1050:]).max() == 0


def test_simulate_eeg_spindle_outside():
    with raises(ValueError):
        create_eeg(duration=10, spindles=(9.9, ))


def test_simulate_stages():
    stages = create_stages(9000)
    assert (stages == 2).all()

    stages = create_stages(9000, s_freq=100, epochs=('N2', 'REM'))
    assert (stages[:3000] == 2).all()
    assert (stages[3000:6000] == 5).all()
    assert (stages[6000:] == 0).all()
