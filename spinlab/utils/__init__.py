"""Package containing additional functions and classes, such as:
    - exceptions
    - simulate (functions to create fake data and sleep stages for testing
      purposes)

"""
from .exceptions import InsufficientDataForFilter, MalformedMask, EmptyBaseline
from .simulate import create_eeg, create_stages
