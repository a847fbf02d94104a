"""
spinlab main module
"""
from os import path

here = path.abspath(path.dirname(__file__))
with open(path.join(here, 'VERSION')) as f:
    __version__ = f.read().strip()

from .datatype import TimeSeries, STAGES, NREM
from .graphoelement import Spindles
from .detect import DetectSpindle
